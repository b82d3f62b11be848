"""
Daily seed generation.
Maps a calendar date to a deterministic non-negative integer so every player gets the same movie.
"""

from datetime import date, datetime, timezone  # date keys are always UTC calendar days
from typing import Optional

# Mixed into every step of the fold. Changing it changes every future daily selection.
SEED_SALT = 20

# Frozen date-key format; the seed of a date depends on this exact string
DATE_KEY_FORMAT = '%Y-%m-%d'


def _wrap32(value: int) -> int:
	"""Wrap an integer to the signed 32-bit range."""
	value &= 0xFFFFFFFF
	return value - 0x100000000 if value & 0x80000000 else value


def daily_seed(date_key: str) -> int:
	"""
	Fold the date key's characters into a signed 32-bit accumulator
	(acc * 31 + char, then + SEED_SALT, wrapping each time) and return its absolute value.
	An empty key yields 0.
	"""
	acc = 0
	for ch in date_key:
		acc = _wrap32(acc * 31 + ord(ch))
		acc = _wrap32(acc + SEED_SALT)
	return abs(acc)


def date_key(day: date) -> str:
	"""Format a date as the YYYY-MM-DD key used for seeding and storage."""
	return day.strftime(DATE_KEY_FORMAT)


def today_key(now: Optional[datetime] = None) -> str:
	"""Key for the current UTC calendar day."""
	now = now or datetime.now(timezone.utc)
	return date_key(now.astimezone(timezone.utc).date())
