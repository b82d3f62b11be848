"""
Data models for Cinedle.
Defines the movie records, guess results and session state shared across the game.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Dates are compared at year resolution only
from datetime import date  # release dates
# Enum gives us string-valued modes that serialize cleanly
from enum import Enum  # game mode / status labels
# Import typing helpers for precise and self-documenting types
from typing import List, Optional, Tuple  # lists, optional values, and immutable sequences


class GameMode(str, Enum):
	"""The two kinds of session a player can have on a given day."""
	DAILY = 'daily'  # shared, deterministic challenge
	PRACTICE = 'practice'  # unlimited random rounds unlocked after the daily


class SessionStatus(str, Enum):
	IN_PROGRESS = 'in_progress'
	WON = 'won'
	GAVE_UP = 'gave_up'


@dataclass(frozen=True)
class CastMember:
	id: int  # person id
	name: str  # display name
	character: str = ''  # role played in this movie
	profile_path: Optional[str] = None  # optional headshot path


@dataclass(frozen=True)
class CrewMember:
	id: int  # person id (one person may hold several jobs)
	name: str  # display name
	job: str  # e.g. "Director", "Original Music Composer"
	department: str = ''  # e.g. "Directing", "Sound"


@dataclass(frozen=True)
class Genre:
	id: int
	name: str


@dataclass(frozen=True)
class ProductionCompany:
	id: int
	name: str
	origin_country: str = ''


@dataclass(frozen=True)
class Collection:
	id: int
	name: str


@dataclass(frozen=True)
class MovieRecord:
	"""
	Immutable snapshot of one movie at fetch time.
	Zero budget/revenue means "unknown"; runtime and release date use None for unknown.
	"""
	id: int  # stable identifier, the only key used for "is this the target"
	title: str  # display title
	release_date: Optional[date] = None  # only the year is used for comparison
	cast: Tuple[CastMember, ...] = ()  # billing order
	crew: Tuple[CrewMember, ...] = ()  # unique on (id, job)
	genres: Tuple[Genre, ...] = ()
	production_companies: Tuple[ProductionCompany, ...] = ()
	belongs_to_collection: Optional[Collection] = None  # parent franchise, if any
	budget: int = 0  # 0 when unknown
	revenue: int = 0  # 0 when unknown
	runtime: Optional[int] = None  # minutes
	tagline: str = ''  # used as the one-time hint
	overview: str = ''  # short synopsis for display
	poster_path: Optional[str] = None  # relative poster path for display

	@property
	def release_year(self) -> Optional[int]:
		return self.release_date.year if self.release_date else None

	@property
	def directors(self) -> List[str]:
		"""Names of the crew credited with the "Director" job."""
		return [c.name for c in self.crew if c.job == 'Director']


@dataclass(frozen=True)
class MovieSummary:
	"""A search/autocomplete candidate; resolve it with the provider to get a MovieRecord."""
	id: int
	title: str
	release_date: Optional[date] = None
	poster_path: Optional[str] = None
	vote_count: int = 0
	popularity: float = 0.0


@dataclass(frozen=True)
class NumericComparison:
	"""
	One numeric attribute compared between target and guess.
	An empty hint means there is nothing worth showing.
	"""
	match: bool = False  # close enough to count as a hit
	difference: float = 0  # target minus guess
	hint: str = ''  # short qualitative label ("longer", "similar budget", ...)


@dataclass(frozen=True)
class GuessResult:
	"""
	Everything a single guess reveals about the target.
	Overlap tuples keep the target's original order.
	"""
	is_correct: bool
	guessed_movie: MovieRecord
	common_cast: Tuple[CastMember, ...] = ()
	common_crew: Tuple[CrewMember, ...] = ()
	common_genres: Tuple[Genre, ...] = ()
	common_production_companies: Tuple[ProductionCompany, ...] = ()
	same_collection: bool = False
	release_year: NumericComparison = NumericComparison()
	budget: NumericComparison = NumericComparison()
	revenue: NumericComparison = NumericComparison()
	runtime: NumericComparison = NumericComparison()


@dataclass
class DiscoveredInfo:
	"""Union of everything the player has uncovered so far across all guesses."""
	cast_ids: set = field(default_factory=set)
	crew_keys: set = field(default_factory=set)  # (person id, job) pairs
	genre_ids: set = field(default_factory=set)
	company_ids: set = field(default_factory=set)
	year: bool = False  # an exact release year hit
	runtime: bool = False  # a runtime within tolerance
	collection: bool = False  # a guess from the same franchise
