"""
FastAPI server exposing the Cinedle game.
Endpoints:
- GET  /health: basic health check
- GET  /search?q=...: autocomplete candidates for a guess
- GET  /game/{mode}: current session (target revealed only once the session is over)
- POST /game/{mode}/guess: submit a guess by movie id
- POST /game/{mode}/give-up, /game/{mode}/hint
- POST /game/practice/new: start another practice round
- GET  /game/{mode}/share: spoiler-free share message

Startup loads the catalog, restores today's sessions from the snapshot directory
and picks today's movie when there is nothing to restore.
"""

# Import standard libraries for timing
import time  # measure startup and request latencies
from datetime import date  # release dates in responses
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, HTTPException, Query  # FastAPI primitives
from pydantic import BaseModel  # request/response schema definitions

# Import our internal modules
from cinedle.config import AppSettings  # environment-backed settings
from cinedle.errors import (  # error taxonomy mapped to HTTP codes
	CinedleError,
	InvalidRecord,
	MovieNotFound,
	PracticeLocked,
	ProviderUnavailable,
	TerminalSessionViolation,
)
from cinedle.game import GameManager  # session orchestration
from cinedle.models import GameMode, GuessResult, MovieRecord, NumericComparison  # domain records
from cinedle.pool import PoolSelector, load_catalog  # curated catalog
from cinedle.provider import TmdbProvider  # TMDB adapter
from cinedle.session import SessionState  # per-mode state
from cinedle.storage import JsonFileStore  # snapshot persistence
from cinedle.summary import discovered_crew, discovered_info, share_text  # aggregation helpers

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Cinedle API", version="1.0.0")  # web app

# Globals that hold the game instance, its settings and measured startup time
SETTINGS: AppSettings = AppSettings()  # configuration
GAME: Optional[GameManager] = None  # will point to the initialized game
STARTUP_TIME_S: float = 0.0  # measures how long startup took


class PersonOut(BaseModel):
	id: int
	name: str
	detail: str = ''  # character for cast, job for crew


class NamedOut(BaseModel):
	id: int
	name: str


class NumericOut(BaseModel):
	match: bool
	difference: float
	hint: str


class MovieOut(BaseModel):
	id: int
	title: str
	release_date: Optional[date] = None
	poster_url: Optional[str] = None


class TargetOut(MovieOut):
	tagline: str = ''
	overview: str = ''
	genres: List[str] = []
	directors: List[str] = []
	cast: List[str] = []  # top-billed, "Name (Character)"


class GuessOut(BaseModel):
	is_correct: bool
	movie: MovieOut
	common_cast: List[PersonOut]
	common_crew: List[PersonOut]
	common_genres: List[NamedOut]
	common_production_companies: List[NamedOut]
	same_collection: bool
	release_year: NumericOut
	budget: NumericOut
	revenue: NumericOut
	runtime: NumericOut


class DiscoveredOut(BaseModel):
	cast_ids: List[int]
	crew_important: List[PersonOut]  # uncovered (person, job) credits in key roles
	crew_other: List[PersonOut]
	genre_ids: List[int]
	company_ids: List[int]
	year: bool
	runtime: bool
	collection: bool


class SessionOut(BaseModel):
	mode: GameMode
	date_key: str
	status: str
	won: bool
	gave_up: bool
	hint_used: bool
	hint: Optional[str] = None  # only once the hint has been used
	guesses: List[GuessOut]
	discovered: DiscoveredOut
	target: Optional[TargetOut] = None  # only when the session is over
	practice_unlocked: bool


class GuessIn(BaseModel):
	movie_id: int


class HintOut(BaseModel):
	hint: str


class ShareOut(BaseModel):
	text: str


def _movie_out(m: MovieRecord) -> MovieOut:
	return MovieOut(id=m.id, title=m.title, release_date=m.release_date, poster_url=SETTINGS.poster_url(m.poster_path))


def _numeric_out(n: NumericComparison) -> NumericOut:
	return NumericOut(match=n.match, difference=n.difference, hint=n.hint)


def _guess_out(g: GuessResult) -> GuessOut:
	return GuessOut(
		is_correct=g.is_correct,
		movie=_movie_out(g.guessed_movie),
		common_cast=[PersonOut(id=c.id, name=c.name, detail=c.character) for c in g.common_cast],
		common_crew=[PersonOut(id=c.id, name=c.name, detail=c.job) for c in g.common_crew],
		common_genres=[NamedOut(id=x.id, name=x.name) for x in g.common_genres],
		common_production_companies=[NamedOut(id=x.id, name=x.name) for x in g.common_production_companies],
		same_collection=g.same_collection,
		release_year=_numeric_out(g.release_year),
		budget=_numeric_out(g.budget),
		revenue=_numeric_out(g.revenue),
		runtime=_numeric_out(g.runtime),
	)


def _session_out(s: SessionState, game: GameManager) -> SessionOut:
	info = discovered_info(s.guesses)
	crew = discovered_crew(s.target, info)  # split by role, keyed on (person, job)
	target = None
	if s.is_terminal:  # never leak the answer mid-game
		t = s.target
		target = TargetOut(
			**_movie_out(t).model_dump(),
			tagline=t.tagline,
			overview=t.overview,
			genres=[g.name for g in t.genres],
			directors=t.directors,
			cast=[f"{c.name} ({c.character})" for c in t.cast[:5]],
		)
	return SessionOut(
		mode=s.mode,
		date_key=s.date_key,
		status=s.status.value,
		won=s.won,
		gave_up=s.gave_up,
		hint_used=s.hint_used,
		hint=s.hint_text if s.hint_used else None,
		guesses=[_guess_out(g) for g in s.guesses],
		discovered=DiscoveredOut(
			cast_ids=sorted(info.cast_ids),
			crew_important=[PersonOut(id=c.id, name=c.name, detail=c.job) for c in crew['important']],
			crew_other=[PersonOut(id=c.id, name=c.name, detail=c.job) for c in crew['other']],
			genre_ids=sorted(info.genre_ids),
			company_ids=sorted(info.company_ids),
			year=info.year,
			runtime=info.runtime,
			collection=info.collection,
		),
		target=target,
		practice_unlocked=game.practice_unlocked,
	)


def _require_game() -> GameManager:
	if GAME is None:  # game must be ready to serve
		logger.warning("[API] Request received but game not initialized")
		raise HTTPException(status_code=503, detail="Game not initialized")
	return GAME


def _http_error(e: CinedleError) -> HTTPException:
	"""Map the game's error taxonomy onto HTTP status codes."""
	if isinstance(e, MovieNotFound):
		return HTTPException(status_code=404, detail=str(e))
	if isinstance(e, ProviderUnavailable):
		return HTTPException(status_code=502, detail=str(e))
	if isinstance(e, InvalidRecord):
		return HTTPException(status_code=422, detail=str(e))
	if isinstance(e, (TerminalSessionViolation, PracticeLocked)):
		return HTTPException(status_code=409, detail=str(e))
	return HTTPException(status_code=500, detail=str(e))


# FastAPI startup hook to initialize the game once
@app.on_event("startup")
async def startup_event():
	"""Load the catalog, restore or start today's sessions and log how long it took."""
	global GAME, STARTUP_TIME_S  # refer to module-level globals
	start = time.time()  # start timer for startup latency

	logger.info("[API] Startup: loading catalog and restoring sessions...")  # log intent
	catalog = load_catalog(str(SETTINGS.catalog_path) if SETTINGS.catalog_path else None)  # curated titles
	game = GameManager(
		provider=TmdbProvider(SETTINGS),
		store=JsonFileStore(SETTINGS.state_dir),
		pool=PoolSelector(catalog),
	)
	try:
		game.load()  # restore or pick today's movie
	except CinedleError as e:
		# The game can still start: the next request retries the daily selection
		logger.error(f"[API] Could not prepare today's movie: {e}")
	GAME = game

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s with {len(catalog)} catalog titles.")  # summary


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"game_ready": GAME is not None and GAME.daily is not None,  # True once today's movie is chosen
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


@app.get("/search", response_model=List[MovieOut])
def search(q: str = Query(..., description="Partial movie title")):
	"""Autocomplete candidates for the guess box."""
	game = _require_game()
	start = time.time()  # start timer
	try:
		results = game.provider.search(q)
	except CinedleError as e:
		raise _http_error(e) from e
	logger.info(f"[API] /search '{q}' served {len(results)} results in {(time.time() - start) * 1000:.2f} ms")
	return [
		MovieOut(id=r.id, title=r.title, release_date=r.release_date, poster_url=SETTINGS.poster_url(r.poster_path))
		for r in results
	]


@app.get("/game/{mode}", response_model=SessionOut)
def get_session(mode: GameMode):
	game = _require_game()
	try:
		session = game.require_session(mode)
	except CinedleError as e:
		raise _http_error(e) from e
	return _session_out(session, game)


@app.post("/game/{mode}/guess", response_model=GuessOut)
def submit_guess(mode: GameMode, body: GuessIn):
	"""Fetch the guessed movie and compare it with the target."""
	game = _require_game()
	start = time.time()  # start timer
	try:
		result = game.guess_by_id(mode, body.movie_id)
	except CinedleError as e:
		logger.warning(f"[API] Guess {body.movie_id} for {mode.value} not processed: {e}")
		raise _http_error(e) from e
	logger.info(f"[API] /game/{mode.value}/guess processed in {(time.time() - start) * 1000:.2f} ms")
	return _guess_out(result)


@app.post("/game/{mode}/give-up", response_model=SessionOut)
def give_up(mode: GameMode):
	game = _require_game()
	try:
		session = game.give_up(mode)
	except CinedleError as e:
		raise _http_error(e) from e
	return _session_out(session, game)


@app.post("/game/{mode}/hint", response_model=HintOut)
def use_hint(mode: GameMode):
	game = _require_game()
	try:
		return HintOut(hint=game.use_hint(mode))
	except CinedleError as e:
		raise _http_error(e) from e


@app.post("/game/practice/new", response_model=SessionOut)
def new_practice_round():
	game = _require_game()
	try:
		session = game.new_practice_round()
	except CinedleError as e:
		raise _http_error(e) from e
	return _session_out(session, game)


@app.get("/game/{mode}/share", response_model=ShareOut)
def share(mode: GameMode):
	game = _require_game()
	try:
		session = game.require_session(mode)
	except CinedleError as e:
		raise _http_error(e) from e
	if not session.is_terminal:
		raise HTTPException(status_code=409, detail="Finish the game before sharing")
	return ShareOut(text=share_text(session, SETTINGS.share_url))
