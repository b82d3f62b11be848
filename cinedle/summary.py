"""
Summary helpers.
Aggregate what the player has uncovered across guesses and build the share message.
"""

# Typing helpers
from typing import Dict, List, Sequence  # type hints

from .models import CrewMember, DiscoveredInfo, GuessResult, MovieRecord  # records and the aggregate
from .session import SessionState  # flags for the share message

# Crew jobs worth showing before the rest
IMPORTANT_ROLES = ('Director', 'Producer', 'Director of Photography', 'Original Music Composer')


def discovered_info(guesses: Sequence[GuessResult]) -> DiscoveredInfo:
	"""Union of every overlap and exact hit across the guess history."""
	info = DiscoveredInfo()
	for guess in guesses:
		info.cast_ids.update(c.id for c in guess.common_cast)
		info.crew_keys.update((c.id, c.job) for c in guess.common_crew)
		info.genre_ids.update(g.id for g in guess.common_genres)
		info.company_ids.update(p.id for p in guess.common_production_companies)
		info.year = info.year or guess.release_year.match
		info.runtime = info.runtime or guess.runtime.match
		info.collection = info.collection or guess.same_collection
	return info


def discovered_crew(target: MovieRecord, info: DiscoveredInfo) -> Dict[str, List[CrewMember]]:
	"""Uncovered target crew split into important roles and everyone else, in target order."""
	found = [c for c in target.crew if (c.id, c.job) in info.crew_keys]  # a person counts once per job
	return {
		'important': [c for c in found if c.job in IMPORTANT_ROLES],
		'other': [c for c in found if c.job not in IMPORTANT_ROLES],
	}


def share_text(session: SessionState, share_url: str = 'https://cinedle.com') -> str:
	"""Spoiler-free message summarising how the session went."""
	outcome = 'got' if session.won else 'failed'  # giving up reads as failed
	hint = ' (with hint 💡)' if session.hint_used else ''
	return f"I {outcome} the Cinedle in {session.guess_count} guesses{hint}!\n\nPlay at: {share_url}"
