"""
Application settings.
Read from environment variables prefixed with CINEDLE_ (or a local .env file).
"""

from pathlib import Path  # filesystem paths for state and catalog
from typing import Optional  # optional settings

from pydantic import Field  # field constraints and descriptions
from pydantic_settings import BaseSettings, SettingsConfigDict  # env-backed settings


class AppSettings(BaseSettings):
	"""Single configuration contract shared by the API, the provider and the scripts."""

	model_config = SettingsConfigDict(
		env_prefix='CINEDLE_',
		extra='ignore',
		case_sensitive=False,
		env_file='.env',
		env_file_encoding='utf-8',
	)

	tmdb_access_token: Optional[str] = Field(
		default=None,
		description="TMDB v4 read access token (sent as a bearer token).",
	)
	tmdb_base_url: str = Field(
		default='https://api.themoviedb.org/3',
		min_length=8,
		description="TMDB REST API base URL.",
	)
	tmdb_image_base_url: str = Field(
		default='https://image.tmdb.org/t/p',
		description="Base URL for posters and profile images.",
	)
	poster_size: str = Field(default='w342', description="TMDB poster size segment.")
	http_timeout_seconds: float = Field(
		default=10.0,
		gt=0,
		description="Timeout per provider request (seconds).",
	)
	state_dir: Path = Field(
		default=Path('state'),
		description="Directory holding the persisted session snapshots.",
	)
	catalog_path: Optional[Path] = Field(
		default=None,
		description="Curated title list; defaults to the bundled movie_list.txt.",
	)
	share_url: str = Field(
		default='https://cinedle.com',
		description="Link appended to share messages.",
	)

	def poster_url(self, poster_path: Optional[str]) -> Optional[str]:
		"""Absolute poster URL for a relative TMDB path, or None."""
		if not poster_path:
			return None
		return f"{self.tmdb_image_base_url}/{self.poster_size}{poster_path}"
