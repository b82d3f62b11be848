"""
Unit tests for the TMDB boundary: payload validation, error translation and title resolution.
Run: python tests/test_provider.py
"""

from datetime import date

import requests

from cinedle.config import AppSettings
from cinedle.errors import InvalidRecord, MovieNotFound, ProviderUnavailable
from cinedle.provider import TmdbProvider, resolve_title
from cinedle.schemas import parse_movie_details


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def assert_true(cond, msg):
	if not cond:
		raise AssertionError(msg)


def assert_raises(fn, exc, msg):
	try:
		fn()
	except exc:
		return
	raise AssertionError(msg)


def details_payload(**overrides):
	payload = {
		'id': 603,
		'title': 'The Matrix',
		'release_date': '1999-03-30',
		'poster_path': '/matrix.jpg',
		'budget': 63000000,
		'revenue': 463517383,
		'runtime': 136,
		'overview': 'A hacker learns the truth.',
		'tagline': 'Welcome to the Real World.',
		'genres': [{'id': 28, 'name': 'Action'}, {'id': 878, 'name': 'Science Fiction'}],
		'production_companies': [{'id': 79, 'name': 'Village Roadshow Pictures', 'origin_country': 'US', 'logo_path': None}],
		'belongs_to_collection': {'id': 2344, 'name': 'The Matrix Collection', 'poster_path': '/c.jpg'},
		'credits': {
			'cast': [
				{'id': 6384, 'name': 'Keanu Reeves', 'character': 'Neo', 'profile_path': '/k.jpg'},
				{'id': 2975, 'name': 'Laurence Fishburne', 'character': 'Morpheus'},
				{'id': 6384, 'name': 'Keanu Reeves', 'character': 'Thomas Anderson'},
			],
			'crew': [
				{'id': 9339, 'name': 'Lilly Wachowski', 'job': 'Director', 'department': 'Directing'},
				{'id': 9339, 'name': 'Lilly Wachowski', 'job': 'Writer', 'department': 'Writing'},
				{'id': 9339, 'name': 'Lilly Wachowski', 'job': 'Director', 'department': 'Directing'},
			],
		},
		'vote_average': 8.2,
	}
	payload.update(overrides)
	return payload


class FakeResponse:
	def __init__(self, status_code=200, body=None, bad_json=False):
		self.status_code = status_code
		self.ok = 200 <= status_code < 400
		self._body = body
		self._bad_json = bad_json

	def json(self):
		if self._bad_json:
			raise ValueError("not json")
		return self._body


class FakeSession:
	"""Stands in for requests.Session: routes by path suffix."""

	def __init__(self, routes=None, error=None):
		self.headers = {}
		self.routes = routes or {}
		self.error = error
		self.calls = []

	def get(self, url, params=None, timeout=None):
		self.calls.append((url, params, timeout))
		if self.error is not None:
			raise self.error
		for suffix, response in self.routes.items():
			if url.endswith(suffix):
				return response
		return FakeResponse(404, {})


def make_provider(session):
	return TmdbProvider(AppSettings(tmdb_access_token='token', tmdb_base_url='https://tmdb.test/3'), session=session)


def test_parse_details():
	m = parse_movie_details(details_payload())
	assert_equal((m.id, m.title, m.release_date), (603, 'The Matrix', date(1999, 3, 30)), "core fields")
	assert_equal([c.character for c in m.cast], ['Neo', 'Morpheus'], "duplicate actor collapsed")
	assert_equal([(c.id, c.job) for c in m.crew], [(9339, 'Director'), (9339, 'Writer')], "crew unique on (id, job)")
	assert_equal(m.belongs_to_collection.id, 2344, "collection kept")
	assert_equal(m.directors, ['Lilly Wachowski'], "director names")
	assert_equal(m.release_year, 1999, "year")


def test_parse_details_unknowns():
	m = parse_movie_details(details_payload(
		release_date='', runtime=0, budget=None, revenue=0, tagline=None, belongs_to_collection=None
	))
	assert_equal(m.release_date, None, "blank date is unknown")
	assert_equal(m.runtime, None, "zero runtime is unknown")
	assert_equal((m.budget, m.revenue), (0, 0), "missing money is zero")
	assert_equal(m.tagline, '', "missing tagline is empty")
	assert_equal(m.belongs_to_collection, None, "no collection")


def test_parse_details_rejects_bad_payloads():
	no_credits = details_payload()
	del no_credits['credits']
	assert_raises(lambda: parse_movie_details(no_credits), InvalidRecord, "credits required")
	assert_raises(lambda: parse_movie_details(details_payload(title='')), InvalidRecord, "title required")
	assert_raises(lambda: parse_movie_details(details_payload(id='abc')), InvalidRecord, "id must be numeric")
	assert_raises(lambda: parse_movie_details(details_payload(genres='Action')), InvalidRecord, "genres must be a list")


def test_get_details():
	session = FakeSession({'/movie/603': FakeResponse(200, details_payload())})
	provider = make_provider(session)
	record = provider.get_details(603)
	assert_equal(record.title, 'The Matrix', "parsed record")
	url, params, timeout = session.calls[0]
	assert_equal(url, 'https://tmdb.test/3/movie/603', "detail URL")
	assert_equal(params, {'append_to_response': 'credits'}, "credits requested")
	assert_true(timeout > 0, "timeout passed through")
	assert_equal(session.headers['Authorization'], 'Bearer token', "bearer auth")


def test_error_translation():
	assert_raises(lambda: make_provider(FakeSession()).get_details(1), MovieNotFound, "404 -> not found")
	assert_raises(
		lambda: make_provider(FakeSession({'/movie/1': FakeResponse(500, {})})).get_details(1),
		ProviderUnavailable,
		"5xx -> unavailable",
	)
	assert_raises(
		lambda: make_provider(FakeSession(error=requests.Timeout("slow"))).get_details(1),
		ProviderUnavailable,
		"timeout -> unavailable",
	)
	assert_raises(
		lambda: make_provider(FakeSession({'/movie/1': FakeResponse(200, bad_json=True)})).get_details(1),
		ProviderUnavailable,
		"bad json -> unavailable",
	)
	broken = details_payload()
	del broken['credits']
	assert_raises(
		lambda: make_provider(FakeSession({'/movie/1': FakeResponse(200, broken)})).get_details(1),
		InvalidRecord,
		"invalid payload -> invalid record",
	)


def test_search_filters_and_orders():
	page = {'results': [
		{'id': 1, 'title': 'Alien', 'vote_count': 14000, 'popularity': 60.0, 'release_date': '1979-05-25'},
		{'id': 2, 'title': 'Aliens', 'vote_count': 9000, 'popularity': 80.0, 'release_date': '1986-07-18'},
		{'id': 3, 'title': 'Alien Obscure', 'vote_count': 3, 'popularity': 0.5, 'release_date': ''},
		{'id': 1, 'title': 'Alien', 'vote_count': 14000, 'popularity': 60.0},
	]}
	provider = make_provider(FakeSession({'/search/movie': FakeResponse(200, page)}))
	results = provider.search('alien')
	assert_equal([r.id for r in results], [2, 1], "obscure dropped, duplicates merged, popular first")
	assert_equal(provider.search('a'), [], "single character queries return nothing")


def test_find_by_title_prefers_exact():
	page = {'results': [
		{'id': 10, 'title': 'Heat Wave'},
		{'id': 11, 'title': 'HEAT'},
	]}
	provider = make_provider(FakeSession({'/search/movie': FakeResponse(200, page)}))
	assert_equal(provider.find_by_title('Heat').id, 11, "exact case-insensitive title wins")

	first_only = {'results': [{'id': 10, 'title': 'Heat Wave'}, {'id': 12, 'title': 'Heatwave 2'}]}
	provider = make_provider(FakeSession({'/search/movie': FakeResponse(200, first_only)}))
	assert_equal(provider.find_by_title('Heat').id, 10, "otherwise the first hit")

	provider = make_provider(FakeSession({'/search/movie': FakeResponse(200, {'results': []})}))
	assert_equal(provider.find_by_title('Heat'), None, "no hit")


def test_resolve_title():
	session = FakeSession({
		'/search/movie': FakeResponse(200, {'results': [{'id': 603, 'title': 'The Matrix'}]}),
		'/movie/603': FakeResponse(200, details_payload()),
	})
	assert_equal(resolve_title(make_provider(session), 'the matrix').id, 603, "title -> record")

	empty = FakeSession({'/search/movie': FakeResponse(200, {'results': []})})
	assert_raises(lambda: resolve_title(make_provider(empty), 'Nothing'), MovieNotFound, "unresolvable title")


def main():
	print("Running provider tests...")
	test_parse_details()
	test_parse_details_unknowns()
	test_parse_details_rejects_bad_payloads()
	test_get_details()
	test_error_translation()
	test_search_filters_and_orders()
	test_find_by_title_prefers_exact()
	test_resolve_title()
	print("All provider tests passed!")


if __name__ == '__main__':
	main()
