"""
Search helpers.
Fuzzy matching for autocomplete candidates and for the curated catalog, built on rapidfuzz.
"""

import math  # log-scaled vote counts in the ordering score
from typing import Iterable, List, Sequence  # type annotations

from rapidfuzz import fuzz, process  # fuzzy matching utilities

from loguru import logger  # console logging

from .models import MovieSummary  # search candidate
from .schemas import TmdbSearchResult  # validated raw search hit

# Queries shorter than this return nothing
MIN_QUERY_LENGTH = 2

# Candidates below these are too obscure to be useful guesses
MIN_VOTE_COUNT = 50
MIN_POPULARITY = 1.0

# Fuzzy score (0..100) a title must reach to count as a match
FUZZY_SCORE_CUTOFF = 60
CATALOG_SCORE_CUTOFF = 60

MAX_SEARCH_RESULTS = 15
MAX_CATALOG_RESULTS = 10


def _word_match(query: str, hit: TmdbSearchResult) -> bool:
	"""True when any query word appears in the title or original title."""
	title = hit.title.lower()
	original = (hit.original_title or '').lower()
	return any(word in title or word in original for word in query.lower().split())


def _fuzzy_score(query: str, hit: TmdbSearchResult) -> float:
	# Title counts twice as much as the original title
	title_score = fuzz.WRatio(query, hit.title, processor=str.lower)
	original_score = fuzz.WRatio(query, hit.original_title or '', processor=str.lower) if hit.original_title else 0.0
	return (2 * title_score + original_score) / (3 if hit.original_title else 2)


def _ordering_score(hit: TmdbSearchResult) -> float:
	"""Blend of popularity and (log) vote count; higher sorts first."""
	votes = hit.vote_count or 0
	return (hit.popularity or 0.0) * 0.6 + (math.log(votes) if votes > 0 else 0.0) * 0.4


def rank_search_results(query: str, hits: Iterable[TmdbSearchResult]) -> List[MovieSummary]:
	"""
	Filter out obscure candidates, keep word matches and fuzzy matches,
	deduplicate by id and order by popularity.
	"""
	query = (query or '').strip()
	if len(query) < MIN_QUERY_LENGTH:
		return []

	hits = list(hits)
	valid = [h for h in hits if (h.vote_count or 0) >= MIN_VOTE_COUNT and (h.popularity or 0.0) > MIN_POPULARITY]

	kept = {}  # id -> hit, insertion order preserved
	for hit in valid:
		if _word_match(query, hit) or _fuzzy_score(query, hit) >= FUZZY_SCORE_CUTOFF:
			kept.setdefault(hit.id, hit)

	ranked = sorted(kept.values(), key=_ordering_score, reverse=True)[:MAX_SEARCH_RESULTS]
	logger.debug(f"[Search] '{query}': {len(hits)} hits -> {len(valid)} valid -> {len(ranked)} kept")
	return [h.to_summary() for h in ranked]


def search_catalog(query: str, catalog: Sequence[str], limit: int = MAX_CATALOG_RESULTS) -> List[str]:
	"""Best fuzzy matches for `query` among the curated titles, best first."""
	query = (query or '').strip()
	if len(query) < MIN_QUERY_LENGTH or not catalog:
		return []
	matches = process.extract(
		query,
		catalog,
		scorer=fuzz.WRatio,
		processor=str.lower,
		limit=limit,
		score_cutoff=CATALOG_SCORE_CUTOFF,
	)
	return [title for title, _score, _index in matches]


def pick_title_match(title: str, candidates: Sequence[TmdbSearchResult]):
	"""Exact case-insensitive title match if any, otherwise the first candidate (or None)."""
	if not candidates:
		return None
	wanted = title.strip().lower()
	for hit in candidates:
		if hit.title.strip().lower() == wanted:
			return hit
	return candidates[0]
