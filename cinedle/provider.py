"""
Movie provider module.
Defines the search/detail interface the game depends on and a TMDB implementation of it.
"""

# Typing helpers; Protocol describes the collaborator without tying the core to TMDB
from typing import Any, Dict, List, Optional, Protocol  # type hints

# HTTP client for the TMDB REST API
import requests  # blocking HTTP calls

# Console logging
from loguru import logger  # console logger

from .config import AppSettings  # base URL, token, timeout
from .errors import InvalidRecord, MovieNotFound, ProviderUnavailable  # error taxonomy
from .models import MovieRecord, MovieSummary  # frozen records
from .schemas import parse_movie_details, parse_search_page  # boundary validation
from .search import pick_title_match, rank_search_results  # fuzzy helpers


class MovieProvider(Protocol):
	"""Anything that can search movies and return fully detailed records."""

	def search(self, query: str) -> List[MovieSummary]:
		...

	def find_by_title(self, title: str) -> Optional[MovieSummary]:
		...

	def get_details(self, movie_id: int) -> MovieRecord:
		...


class TmdbProvider:
	"""
	TMDB-backed provider. Every failure is translated into the game's error types;
	there are no retries here, callers decide what to do.
	"""

	def __init__(self, settings: Optional[AppSettings] = None, session: Optional[requests.Session] = None):
		self.settings = settings or AppSettings()  # configuration
		self.session = session or requests.Session()  # reuse connections across calls
		self.session.headers.update({'Content-Type': 'application/json'})
		if self.settings.tmdb_access_token:
			self.session.headers.update({'Authorization': f"Bearer {self.settings.tmdb_access_token}"})
		else:
			logger.warning("[Provider] No TMDB access token configured; requests will be rejected")

	def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
		"""GET a TMDB endpoint and return the decoded JSON body."""
		url = f"{self.settings.tmdb_base_url}{path}"
		logger.debug(f"[Provider] GET {path} params={params}")
		try:
			resp = self.session.get(url, params=params, timeout=self.settings.http_timeout_seconds)
		except requests.RequestException as e:  # connection errors, timeouts
			raise ProviderUnavailable(f"Request to {path} failed: {e}") from e

		if resp.status_code == 404:
			raise MovieNotFound(f"Not found: {path}")
		if not resp.ok:
			raise ProviderUnavailable(f"TMDB responded {resp.status_code} for {path}")
		try:
			return resp.json()
		except ValueError as e:  # body was not JSON
			raise ProviderUnavailable(f"Invalid JSON from {path}") from e

	def _search_raw(self, query: str, **extra):
		payload = self._get('/search/movie', params={'query': query, 'include_adult': False, 'page': 1, **extra})
		return parse_search_page(payload)

	def search(self, query: str) -> List[MovieSummary]:
		"""Autocomplete candidates for a free-text query, best first."""
		if len((query or '').strip()) < 2:
			return []
		hits = self._search_raw(query)
		results = rank_search_results(query, hits)
		logger.info(f"[Provider] Search '{query}' returned {len(results)} candidates")
		return results

	def find_by_title(self, title: str) -> Optional[MovieSummary]:
		"""Best TMDB match for an exact catalog title (exact title preferred, else first hit)."""
		hit = pick_title_match(title, self._search_raw(title))
		if hit is None:
			logger.warning(f"[Provider] No TMDB result for catalog title '{title}'")
			return None
		return hit.to_summary()

	def get_details(self, movie_id: int) -> MovieRecord:
		"""Full record including credits; raises MovieNotFound, ProviderUnavailable or InvalidRecord."""
		payload = self._get(f"/movie/{movie_id}", params={'append_to_response': 'credits'})
		record = parse_movie_details(payload)
		logger.debug(
			f"[Provider] Details for {movie_id}: '{record.title}' | cast={len(record.cast)} crew={len(record.crew)} genres={len(record.genres)}"
		)
		return record


def resolve_title(provider: MovieProvider, title: str) -> MovieRecord:
	"""Turn a catalog title into a full record; raises MovieNotFound when nothing matches."""
	summary = provider.find_by_title(title)
	if summary is None:
		raise MovieNotFound(f"No movie found for title '{title}'")
	record = provider.get_details(summary.id)
	if not record.title:
		raise InvalidRecord(f"Movie {summary.id} has no title")
	return record
