"""
Validation schemas for raw TMDB payloads.
Raw JSON is checked here and converted into the frozen records the game uses,
so nothing loosely-typed ever reaches the comparator.
"""

# Release dates arrive as ISO strings
from datetime import date  # parsed release dates
from typing import Any, Dict, List, Optional  # type hints

# Pydantic does the field-by-field validation of raw JSON
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator  # schema primitives

from .errors import InvalidRecord  # raised for unusable payloads
from .models import (  # frozen records produced from the payloads
	CastMember,
	Collection,
	CrewMember,
	Genre,
	MovieRecord,
	MovieSummary,
	ProductionCompany,
)


class _TmdbModel(BaseModel):
	model_config = ConfigDict(extra='ignore')  # TMDB sends many fields we never use


class TmdbCast(_TmdbModel):
	id: int
	name: str
	character: Optional[str] = ''
	profile_path: Optional[str] = None


class TmdbCrew(_TmdbModel):
	id: int
	name: str
	job: str
	department: Optional[str] = ''


class TmdbGenre(_TmdbModel):
	id: int
	name: str


class TmdbCompany(_TmdbModel):
	id: int
	name: str
	origin_country: Optional[str] = ''


class TmdbCollection(_TmdbModel):
	id: int
	name: str


class TmdbCredits(_TmdbModel):
	cast: List[TmdbCast] = Field(default_factory=list)
	crew: List[TmdbCrew] = Field(default_factory=list)


class TmdbMovieDetails(_TmdbModel):
	"""Response of /movie/{id}?append_to_response=credits."""
	id: int
	title: str = Field(min_length=1)
	release_date: Optional[date] = None
	poster_path: Optional[str] = None
	budget: Optional[int] = 0  # 0 or null when unknown
	revenue: Optional[int] = 0
	runtime: Optional[int] = None  # 0 or null when unknown
	overview: Optional[str] = ''
	tagline: Optional[str] = ''
	credits: TmdbCredits  # required: without credits there is nothing to compare
	genres: List[TmdbGenre] = Field(default_factory=list)
	production_companies: List[TmdbCompany] = Field(default_factory=list)
	belongs_to_collection: Optional[TmdbCollection] = None

	@field_validator('release_date', mode='before')
	@classmethod
	def blank_release_date(cls, value: Any) -> Any:
		# TMDB sends "" for unreleased or undated movies
		return value or None

	def to_record(self) -> MovieRecord:
		"""Freeze into a MovieRecord, collapsing unknowns and duplicate credits."""
		cast = []
		seen_cast = set()
		for c in self.credits.cast:
			if c.id in seen_cast:  # same actor credited for two characters
				continue
			seen_cast.add(c.id)
			cast.append(CastMember(id=c.id, name=c.name, character=c.character or '', profile_path=c.profile_path))

		crew = []
		seen_crew = set()  # (person id, job) pairs already kept
		for c in self.credits.crew:
			key = (c.id, c.job)
			if key in seen_crew:
				continue
			seen_crew.add(key)
			crew.append(CrewMember(id=c.id, name=c.name, job=c.job, department=c.department or ''))

		collection = None
		if self.belongs_to_collection is not None:
			collection = Collection(id=self.belongs_to_collection.id, name=self.belongs_to_collection.name)

		return MovieRecord(
			id=self.id,
			title=self.title,
			release_date=self.release_date,
			cast=tuple(cast),
			crew=tuple(crew),
			genres=tuple(Genre(id=g.id, name=g.name) for g in self.genres),
			production_companies=tuple(
				ProductionCompany(id=p.id, name=p.name, origin_country=p.origin_country or '')
				for p in self.production_companies
			),
			belongs_to_collection=collection,
			budget=max(self.budget or 0, 0),
			revenue=max(self.revenue or 0, 0),
			runtime=self.runtime or None,  # 0 minutes means unknown
			tagline=self.tagline or '',
			overview=self.overview or '',
			poster_path=self.poster_path,
		)


class TmdbSearchResult(_TmdbModel):
	id: int
	title: str
	original_title: Optional[str] = ''
	release_date: Optional[date] = None
	poster_path: Optional[str] = None
	vote_count: Optional[int] = 0  # used to drop obscure candidates
	popularity: Optional[float] = 0.0  # used for ordering

	@field_validator('release_date', mode='before')
	@classmethod
	def blank_release_date(cls, value: Any) -> Any:
		# TMDB sends "" for unreleased or undated movies
		return value or None

	def to_summary(self) -> MovieSummary:
		return MovieSummary(
			id=self.id,
			title=self.title,
			release_date=self.release_date,
			poster_path=self.poster_path,
			vote_count=self.vote_count or 0,
			popularity=self.popularity or 0.0,
		)


class TmdbSearchPage(_TmdbModel):
	results: List[TmdbSearchResult] = Field(default_factory=list)


def parse_movie_details(payload: Dict[str, Any]) -> MovieRecord:
	"""Validate a details payload; raises InvalidRecord when it cannot be used."""
	try:
		return TmdbMovieDetails.model_validate(payload).to_record()
	except ValidationError as e:
		raise InvalidRecord(f"Movie payload failed validation: {e.error_count()} error(s)") from e


def parse_search_page(payload: Dict[str, Any]) -> List[TmdbSearchResult]:
	"""Validate a search page; raises InvalidRecord when the page itself is malformed."""
	try:
		return TmdbSearchPage.model_validate(payload).results
	except ValidationError as e:
		raise InvalidRecord(f"Search payload failed validation: {e.error_count()} error(s)") from e
