"""
Unit tests for fuzzy search helpers.
Run: python tests/test_search.py
"""


from cinedle.schemas import TmdbSearchResult
from cinedle.search import pick_title_match, rank_search_results, search_catalog

CATALOG = ['The Dark Knight', 'The Dark Knight Rises', 'Batman Begins', 'Jurassic Park', 'Up', 'Heat']


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def assert_true(cond, msg):
	if not cond:
		raise AssertionError(msg)


def hit(movie_id, title, votes=1000, popularity=10.0, original_title=''):
	return TmdbSearchResult(id=movie_id, title=title, vote_count=votes, popularity=popularity, original_title=original_title)


def test_catalog_search():
	results = search_catalog('dark knight', CATALOG)
	assert_true(results[:2] == ['The Dark Knight', 'The Dark Knight Rises'] or results[:2] == ['The Dark Knight Rises', 'The Dark Knight'], "both Dark Knight titles first")
	assert_true('Up' not in results, "unrelated short title not matched")


def test_catalog_search_typo():
	assert_equal(search_catalog('jurasic park', CATALOG)[0], 'Jurassic Park', "misspelling still found")


def test_short_queries():
	assert_equal(search_catalog('h', CATALOG), [], "too short")
	assert_equal(search_catalog('   ', CATALOG), [], "blank")
	assert_equal(rank_search_results('x', [hit(1, 'X')]), [], "too short for remote search")


def test_rank_uses_original_title():
	results = rank_search_results('amelie', [hit(1, 'Le Fabuleux Destin', original_title='Amelie')])
	assert_equal([r.id for r in results], [1], "matched through the original title")


def test_rank_limits_results():
	hits = [hit(i, f"Star Wars Episode {i}", popularity=float(i + 2)) for i in range(30)]
	results = rank_search_results('star wars', hits)
	assert_equal(len(results), 15, "at most fifteen")
	assert_equal(results[0].id, 29, "most popular first")


def test_pick_title_match():
	assert_equal(pick_title_match('Up', []), None, "no candidates")
	candidates = [hit(1, 'Up in the Air'), hit(2, 'up ')]
	assert_equal(pick_title_match('Up', candidates).id, 2, "exact after trimming and lowercasing")


def main():
	print("Running search tests...")
	test_catalog_search()
	test_catalog_search_typo()
	test_short_queries()
	test_rank_uses_original_title()
	test_rank_limits_results()
	test_pick_title_match()
	print("All search tests passed!")


if __name__ == '__main__':
	main()
