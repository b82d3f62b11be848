"""
Session state module.
One SessionState per mode tracks the target, the guess history and the won / gave-up / hint flags.
"""

# Session is a plain mutable dataclass
from dataclasses import dataclass, field  # mutable session container
from typing import List  # type hints

# Console logging
from loguru import logger  # console logging

from .comparator import compare  # guess evaluation
from .errors import TerminalSessionViolation  # rejected operations
from .models import GameMode, GuessResult, MovieRecord, SessionStatus  # records and labels

# Shown instead of the tagline when the target has none
NO_TAGLINE_HINT = 'No tagline available'


@dataclass
class SessionState:
	"""
	Progress of a single game.
	Won and gave_up are mutually exclusive and terminal; hint_used only ever goes False -> True.
	"""
	mode: GameMode  # daily or practice
	date_key: str  # YYYY-MM-DD this session belongs to
	target: MovieRecord  # the hidden movie
	guesses: List[GuessResult] = field(default_factory=list)  # append-only history
	won: bool = False  # set by a correct guess
	gave_up: bool = False  # set by give_up()
	hint_used: bool = False  # never reset

	@property
	def status(self) -> SessionStatus:
		if self.won:
			return SessionStatus.WON
		if self.gave_up:
			return SessionStatus.GAVE_UP
		return SessionStatus.IN_PROGRESS

	@property
	def is_terminal(self) -> bool:
		return self.won or self.gave_up

	@property
	def guess_count(self) -> int:
		return len(self.guesses)

	def _ensure_in_progress(self, action: str):
		if self.is_terminal:
			logger.warning(f"[Session] {self.mode.value} {action} rejected: session already {self.status.value}")
			raise TerminalSessionViolation(f"Cannot {action}: {self.mode.value} session is already {self.status.value}")

	def submit_guess(self, record: MovieRecord) -> GuessResult:
		"""Compare the guess to the target and record it; a correct guess wins the session."""
		self._ensure_in_progress('submit a guess')
		result = compare(self.target, record)
		self.guesses.append(result)
		if result.is_correct:  # id equality only
			self.won = True
		logger.info(
			f"[Session] {self.mode.value} guess #{self.guess_count}: '{record.title}' correct={result.is_correct}"
		)
		return result

	def give_up(self):
		self._ensure_in_progress('give up')
		self.gave_up = True
		logger.info(f"[Session] {self.mode.value} gave up after {self.guess_count} guesses")

	def use_hint(self) -> str:
		"""Reveal the tagline hint. Repeated calls are no-ops returning the same text."""
		if not self.hint_used:
			self._ensure_in_progress('use the hint')
			self.hint_used = True
			logger.info(f"[Session] {self.mode.value} hint used")
		return self.hint_text

	@property
	def hint_text(self) -> str:
		return self.target.tagline or NO_TAGLINE_HINT
