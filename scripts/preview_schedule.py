"""
Preview the upcoming daily movies.

This script:
1) Loads the curated catalog (bundled list or CINEDLE_CATALOG_PATH)
2) Computes the daily seed for each of the next N days
3) Logs which catalog title each day maps to
4) Optionally resolves each title against TMDB to catch titles that no longer match

Usage:
    python -m scripts.preview_schedule --days 14 [--resolve]

Useful before appending titles to the catalog: it shows exactly which days change,
and `--find TITLE` shows whether a similar title is already listed.
"""

import argparse  # command-line flags
from datetime import date, timedelta  # walk forward day by day
from typing import List, Optional, Tuple  # type hints

from loguru import logger  # console logging

from cinedle.config import AppSettings  # environment-backed settings
from cinedle.errors import CinedleError  # resolution failures
from cinedle.pool import PoolSelector, load_catalog  # curated catalog
from cinedle.provider import TmdbProvider, resolve_title  # optional TMDB check
from cinedle.search import search_catalog  # fuzzy catalog lookup
from cinedle.seed import daily_seed, date_key, today_key  # deterministic per-day pick


def build_schedule(pool: PoolSelector, start: date, days: int) -> List[Tuple[str, int, str]]:
	"""(date key, seed, title) for `days` consecutive days starting at `start`."""
	schedule = []  # accumulator
	for offset in range(days):
		key = date_key(start + timedelta(days=offset))  # YYYY-MM-DD
		schedule.append((key, daily_seed(key), pool.daily_title(key)))
	return schedule


def main(argv: Optional[List[str]] = None):
	parser = argparse.ArgumentParser(description="Preview upcoming Cinedle daily movies")
	parser.add_argument('--days', type=int, default=14, help="number of days to show")
	parser.add_argument('--start', type=date.fromisoformat, default=date.fromisoformat(today_key()), help="first day (YYYY-MM-DD, UTC)")
	parser.add_argument('--resolve', action='store_true', help="also resolve each title against TMDB")
	parser.add_argument('--find', metavar='TITLE', help="list catalog titles close to TITLE instead of the schedule")
	args = parser.parse_args(argv)

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Cinedle daily schedule")
	logger.info("=" * 60)

	settings = AppSettings()  # configuration
	catalog = load_catalog(str(settings.catalog_path) if settings.catalog_path else None)  # read titles
	pool = PoolSelector(catalog)  # selector over the catalog

	# Fuzzy lookup, handy before adding a title that may already be listed
	if args.find:
		for title in search_catalog(args.find, catalog):
			logger.info(f"#{catalog.index(title)} {title}")
		logger.info("=" * 60)
		return

	provider = TmdbProvider(settings) if args.resolve else None  # only when asked

	for key, seed, title in build_schedule(pool, args.start, args.days):
		line = f"{key} | seed={seed} | #{pool.daily_index(key)} {title}"
		if provider is not None:
			try:
				record = resolve_title(provider, title)
				line += f" -> TMDB {record.id} ({record.release_year})"
			except CinedleError as e:
				line += f" -> UNRESOLVED ({e})"
		logger.info(line)

	# Footer
	logger.info("=" * 60)


if __name__ == '__main__':
	main()  # invoke preview
