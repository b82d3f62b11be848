"""
Error types raised by Cinedle.
Every failure is local to one session and recoverable by re-initializing it.
"""


class CinedleError(Exception):
	"""Base class for all game errors."""


class ProviderUnavailable(CinedleError):
	"""Search or detail fetch failed; nothing was recorded."""


class MovieNotFound(ProviderUnavailable):
	"""The provider has no movie for the requested id or title."""


class InvalidRecord(CinedleError):
	"""A fetched payload is missing required fields or is malformed."""


class TerminalSessionViolation(CinedleError):
	"""An operation was attempted on a session that is already won or given up."""


class CorruptSnapshot(CinedleError):
	"""A persisted session snapshot could not be parsed."""


class PracticeLocked(CinedleError):
	"""Practice rounds open only after today's daily session is complete."""
