"""
Movie pool selection.
Loads the curated catalog and picks the daily (deterministic) or practice (random) title from it.
"""

# Random source for practice rounds; injected so tests can seed it
import random  # uniform index choice
# Path handling for the bundled catalog file
from pathlib import Path  # filesystem-safe paths
# Typing helpers for the public API
from typing import Iterable, List, Optional, Sequence, Set  # type hints

# Console logging
from loguru import logger  # console logger

# Seed generator maps the date key to an integer
from .seed import daily_seed  # deterministic per-day integer

# Curated list shipped with the package
DEFAULT_CATALOG_PATH = Path(__file__).parent / 'data' / 'movie_list.txt'


def load_catalog(path: Optional[str] = None) -> List[str]:
	"""
	Read the curated catalog: one title per line, blank lines and '#' comments ignored.
	Duplicates (case-insensitive) are dropped, keeping the first occurrence so order is stable.
	"""
	path = Path(path) if path else DEFAULT_CATALOG_PATH  # normalize path

	# Validate the file presence early to give clear error messages
	if not path.exists():
		raise FileNotFoundError(f"Catalog file not found: {path}")

	with open(path, 'r', encoding='utf-8') as f:
		titles = dedupe_titles(line.strip() for line in f)

	logger.info(f"[Pool] Loaded {len(titles)} titles from {path}")  # summary
	return titles


def dedupe_titles(lines: Iterable[str]) -> List[str]:
	"""Drop blanks, comments and case-insensitive duplicates while preserving order."""
	seen = set()  # lowercased titles already kept
	titles = []  # ordered output
	for line in lines:
		if not line or line.startswith('#'):  # blank or comment
			continue
		key = line.lower()
		if key in seen:  # duplicate spelling
			logger.debug(f"[Pool] Skipping duplicate title '{line}'")
			continue
		seen.add(key)
		titles.append(line)
	return titles


def select_daily(seed: int, catalog_size: int) -> int:
	"""Index of the daily title: the seed modulo the catalog size."""
	if catalog_size <= 0:
		raise ValueError("Catalog cannot be empty")
	return seed % catalog_size


def select_random(catalog_size: int, exclude: Set[int], rng: Optional[random.Random] = None) -> int:
	"""
	Pick an index uniformly from those not in `exclude`.
	When every index is excluded the set is cleared (in place) and the pick is retried over the full catalog.
	"""
	if catalog_size <= 0:
		raise ValueError("Catalog cannot be empty")
	rng = rng or random.Random()

	candidates = [i for i in range(catalog_size) if i not in exclude]  # still available
	if not candidates:
		logger.debug(f"[Pool] All {catalog_size} titles used; clearing exclusion set")
		exclude.clear()  # start a fresh cycle
		candidates = list(range(catalog_size))
	return rng.choice(candidates)


class PoolSelector:
	"""
	Owns the ordered catalog and the set of indices already served in practice mode.
	One instance per game; call reset() to forget the used indices.
	"""

	def __init__(self, catalog: Sequence[str], rng: Optional[random.Random] = None):
		if not catalog:
			raise ValueError("Catalog cannot be empty")
		self.catalog = list(catalog)  # fixed order; indices are meaningful
		self.rng = rng or random.Random()  # practice randomness
		self.used_indices: Set[int] = set()  # practice titles already served

	def __len__(self) -> int:
		return len(self.catalog)

	def daily_index(self, date_key: str) -> int:
		return select_daily(daily_seed(date_key), len(self.catalog))

	def daily_title(self, date_key: str) -> str:
		"""Title every player gets for the given YYYY-MM-DD key."""
		index = self.daily_index(date_key)
		logger.debug(f"[Pool] Daily pick for {date_key}: #{index} '{self.catalog[index]}'")
		return self.catalog[index]

	def random_title(self, avoid: Iterable[str] = ()) -> str:
		"""
		Title for a practice round, never repeating until the catalog is exhausted.
		Titles in `avoid` (e.g. today's daily answer) are marked as used first.
		"""
		avoid_keys = {t.lower() for t in avoid}
		for i, title in enumerate(self.catalog):
			if title.lower() in avoid_keys:
				self.used_indices.add(i)

		index = select_random(len(self.catalog), self.used_indices, self.rng)
		self.used_indices.add(index)
		logger.debug(f"[Pool] Practice pick: #{index} '{self.catalog[index]}' ({len(self.used_indices)} used)")
		return self.catalog[index]

	def reset(self):
		"""Forget which practice titles have been served."""
		self.used_indices.clear()
