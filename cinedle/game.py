"""
Game manager module.
Owns today's daily session and the practice session: picks targets, applies guesses,
handles day rollover and persists every change.
"""

# Lock serializes guess application when callers submit concurrently
import threading  # mutual exclusion around state changes
# Typing helpers for clarity of public API
from typing import Callable, Optional  # type hints

# Console logging
from loguru import logger  # console logger

from .errors import CorruptSnapshot, InvalidRecord, PracticeLocked, ProviderUnavailable  # error taxonomy
from .models import GameMode, GuessResult, MovieRecord  # records and modes
from .pool import PoolSelector  # target selection
from .provider import MovieProvider, resolve_title  # record retrieval
from .seed import today_key  # UTC date key
from .session import SessionState  # per-mode state
from .storage import KeyValueStore, decode_session, encode_session, session_key  # persistence


class GameManager:
	"""
	High-level game API used by the HTTP layer.
	One daily session per calendar day; practice rounds unlock once the daily one is finished.
	"""

	def __init__(
		self,
		provider: MovieProvider,  # search + detail fetch
		store: KeyValueStore,  # snapshot persistence
		pool: PoolSelector,  # curated catalog + used titles
		today: Callable[[], str] = today_key,  # returns the current YYYY-MM-DD key
	):
		self.provider = provider
		self.store = store
		self.pool = pool
		self.today = today
		self.daily: Optional[SessionState] = None  # today's shared challenge
		self.practice: Optional[SessionState] = None  # current practice round, if unlocked
		self.previous_daily: Optional[SessionState] = None  # archived session from an earlier day
		self._lock = threading.Lock()

	def _load_snapshot(self, mode: GameMode) -> Optional[SessionState]:
		"""Stored session for a mode, or None when absent or unreadable (unreadable ones are dropped)."""
		key = session_key(mode)
		try:
			raw = self.store.read(key)
			if raw is None:
				return None
			return decode_session(raw)
		except CorruptSnapshot as e:
			logger.warning(f"[Game] Discarding corrupt {mode.value} snapshot: {e}")
			self.store.remove(key)
			return None

	def _persist(self, session: SessionState):
		self.store.write(session_key(session.mode), encode_session(session))

	def load(self):
		"""
		Restore today's sessions from storage, or start a fresh daily one.
		A snapshot from an earlier day is archived and never becomes today's session.
		"""
		key = self.today()
		logger.info(f"[Game] Loading sessions for {key}")

		daily = self._load_snapshot(GameMode.DAILY)
		if daily is not None and daily.date_key != key:
			logger.info(f"[Game] Daily snapshot is from {daily.date_key}; starting a new day")
			self.previous_daily = daily
			daily = None
			self.store.remove(session_key(GameMode.PRACTICE))  # practice is day-scoped
			self.pool.reset()  # so is the set of practice titles already served

		if daily is None:
			self.daily = self._new_daily(key)
			self.practice = None
			return

		self.daily = daily
		logger.info(f"[Game] Restored daily session ({daily.guess_count} guesses, {daily.status.value})")

		practice = self._load_snapshot(GameMode.PRACTICE)
		if practice is not None and (practice.date_key != key or not daily.is_terminal):
			logger.info("[Game] Ignoring stale practice snapshot")
			self.store.remove(session_key(GameMode.PRACTICE))
			practice = None
		self.practice = practice

	def ensure_current_day(self):
		"""Reload if the calendar day changed since the daily session was created."""
		if self.daily is None or self.daily.date_key != self.today():
			self.load()

	def _new_daily(self, key: str) -> SessionState:
		title = self.pool.daily_title(key)
		target = resolve_title(self.provider, title)
		session = SessionState(mode=GameMode.DAILY, date_key=key, target=target)
		self._persist(session)
		logger.info(f"[Game] New daily session for {key} (target id {target.id})")
		return session

	def session(self, mode: GameMode) -> Optional[SessionState]:
		"""Current session for a mode (None for practice until it is unlocked)."""
		self.ensure_current_day()
		return self.daily if GameMode(mode) == GameMode.DAILY else self.practice

	@property
	def practice_unlocked(self) -> bool:
		return self.daily is not None and self.daily.is_terminal

	def require_session(self, mode: GameMode) -> SessionState:
		session = self.session(mode)
		if session is None:
			if self.practice_unlocked:
				raise PracticeLocked("No practice round in progress; start a new one")
			raise PracticeLocked("Finish today's daily movie to unlock practice rounds")
		return session

	def submit_guess(self, mode: GameMode, record: MovieRecord) -> GuessResult:
		"""Apply an already-fetched guess to a session and persist it."""
		with self._lock:
			session = self.require_session(mode)
			result = session.submit_guess(record)
			self._persist(session)
			if session.is_terminal:
				self._on_completed(session)
		return result

	def guess_by_id(self, mode: GameMode, movie_id: int) -> GuessResult:
		"""
		Fetch the guessed movie and apply it.
		If the fetch fails (or never returns) nothing has been recorded.
		"""
		self.require_session(mode)  # reject early for locked practice
		record = self.provider.get_details(movie_id)
		return self.submit_guess(mode, record)

	def give_up(self, mode: GameMode) -> SessionState:
		with self._lock:
			session = self.require_session(mode)
			session.give_up()
			self._persist(session)
			self._on_completed(session)
		return session

	def use_hint(self, mode: GameMode) -> str:
		with self._lock:
			session = self.require_session(mode)
			already_used = session.hint_used
			hint = session.use_hint()
			if not already_used:
				self._persist(session)
		return hint

	def new_practice_round(self) -> SessionState:
		"""Start a fresh practice round with a random target, replacing any current one."""
		self.ensure_current_day()
		if not self.practice_unlocked:
			raise PracticeLocked("Finish today's daily movie to unlock practice rounds")

		title = self.pool.random_title(avoid=[self.pool.daily_title(self.daily.date_key)])
		target = resolve_title(self.provider, title)
		session = SessionState(mode=GameMode.PRACTICE, date_key=self.daily.date_key, target=target)
		self.practice = session
		self._persist(session)
		logger.info(f"[Game] New practice round (target id {target.id})")
		return session

	def _on_completed(self, session: SessionState):
		"""Finishing the daily session opens the first practice round for the day."""
		if session.mode != GameMode.DAILY or self.practice is not None:
			return
		try:
			self.new_practice_round()
		except (ProviderUnavailable, InvalidRecord) as e:
			# Practice stays unlocked; the player can start a round explicitly later
			logger.warning(f"[Game] Could not prepare practice round: {e}")
