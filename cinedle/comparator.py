"""
Comparator module.
Compares a guessed movie against the target and reports shared people, shared categories
and how close the numeric attributes are.
"""

# Typing helpers for the generic overlap function
from typing import Callable, Hashable, Optional, Sequence, Tuple, TypeVar  # type hints

from .models import GuessResult, MovieRecord, NumericComparison  # records in, result out

T = TypeVar('T')  # cast, crew, genre or company entry

# A runtime within this many minutes of the target counts as a match
RUNTIME_TOLERANCE_MINUTES = 5

# Budget/revenue within this percentage of the larger value count as a match and read "similar"
SIMILAR_PERCENT_THRESHOLD = 20

# Labels for the money comparisons: (target unknown, guess unknown, similar, guess lower, guess higher).
# Directional labels describe the guess relative to the target.
BUDGET_HINTS = (
	'no budget information available',
	'budget information (your guess has none)',
	'similar budget',
	'lower budget',
	'higher budget',
)
REVENUE_HINTS = (
	'no box office information available',
	'box office data (your guess has none)',
	'similar box office performance',
	'less successful at the box office',
	'more successful at the box office',
)

YEAR_UNKNOWN_HINTS = ('no release date information available', 'release date information (your guess has none)')
RUNTIME_UNKNOWN_HINTS = ('no runtime information available', 'runtime information (your guess has none)')


def compare(target: MovieRecord, guess: MovieRecord) -> GuessResult:
	"""
	Build the GuessResult for one guess. Pure: no I/O, never raises for valid records.
	"""
	return GuessResult(
		is_correct=target.id == guess.id,
		guessed_movie=guess,
		common_cast=_overlap(target.cast, guess.cast, key=lambda c: c.id),
		# One person can hold several jobs, so crew matches on (person, job)
		common_crew=_overlap(target.crew, guess.crew, key=lambda c: (c.id, c.job)),
		common_genres=_overlap(target.genres, guess.genres, key=lambda g: g.id),
		common_production_companies=_overlap(
			target.production_companies, guess.production_companies, key=lambda p: p.id
		),
		same_collection=_same_collection(target, guess),
		release_year=compare_release_year(target.release_year, guess.release_year),
		budget=compare_money(target.budget, guess.budget, BUDGET_HINTS),
		revenue=compare_money(target.revenue, guess.revenue, REVENUE_HINTS),
		runtime=compare_runtime(target.runtime, guess.runtime),
	)


def _overlap(target_items: Sequence[T], guess_items: Sequence[T], key: Callable[[T], Hashable]) -> Tuple[T, ...]:
	"""Target entries whose identity key also appears in the guess, in target order."""
	guess_keys = {key(item) for item in guess_items}
	return tuple(item for item in target_items if key(item) in guess_keys)


def _same_collection(target: MovieRecord, guess: MovieRecord) -> bool:
	# Neither belonging to a collection is not a match
	if target.belongs_to_collection is None or guess.belongs_to_collection is None:
		return False
	return target.belongs_to_collection.id == guess.belongs_to_collection.id


def _unknown_side(target_known: bool, guess_known: bool, hints: Tuple[str, str]) -> Optional[NumericComparison]:
	"""Block for when at least one side is unknown, or None when both are known."""
	if target_known and guess_known:
		return None
	if not target_known and not guess_known:
		return NumericComparison()
	hint = hints[0] if not target_known else hints[1]
	return NumericComparison(match=False, difference=0, hint=hint)


def compare_release_year(target_year: Optional[int], guess_year: Optional[int]) -> NumericComparison:
	"""'newer' means the target came out later than the guess."""
	unknown = _unknown_side(target_year is not None, guess_year is not None, YEAR_UNKNOWN_HINTS)
	if unknown is not None:
		return unknown

	diff = target_year - guess_year  # positive when the target is more recent
	if diff == 0:
		return NumericComparison(match=True, difference=0, hint='')
	return NumericComparison(match=False, difference=diff, hint='newer' if diff > 0 else 'older')


def compare_runtime(target_runtime: Optional[int], guess_runtime: Optional[int]) -> NumericComparison:
	unknown = _unknown_side(target_runtime is not None, guess_runtime is not None, RUNTIME_UNKNOWN_HINTS)
	if unknown is not None:
		return unknown

	diff = target_runtime - guess_runtime  # minutes; positive when the target runs longer
	hint = ''  # nothing to say when they are equal
	if diff:
		hint = 'longer' if diff > 0 else 'shorter'
	return NumericComparison(match=abs(diff) <= RUNTIME_TOLERANCE_MINUTES, difference=diff, hint=hint)


def compare_money(target_value: int, guess_value: int, hints: Tuple[str, str, str, str, str]) -> NumericComparison:
	"""
	Compare budgets or revenues. Zero means unknown; when both are unknown the block stays empty.
	Otherwise the difference is judged relative to the larger of the two values.
	"""
	target_value = target_value or 0  # None and 0 both mean unknown
	guess_value = guess_value or 0

	unknown = _unknown_side(target_value > 0, guess_value > 0, hints[:2])
	if unknown is not None:
		return unknown

	diff = target_value - guess_value  # raw amount, shown to the player
	percent_diff = diff / max(target_value, guess_value) * 100
	if abs(percent_diff) < SIMILAR_PERCENT_THRESHOLD:
		return NumericComparison(match=True, difference=diff, hint=hints[2])
	return NumericComparison(match=False, difference=diff, hint=hints[3] if percent_diff > 0 else hints[4])
