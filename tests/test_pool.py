"""
Unit tests for pool selection: daily index, random picks with exclusion, catalog loading.
Run: python tests/test_pool.py
"""

import random
import tempfile
from pathlib import Path

from cinedle.pool import PoolSelector, dedupe_titles, load_catalog, select_daily, select_random
from cinedle.seed import daily_seed


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


def test_select_daily():
	assert_equal(select_daily(379653440, 10), 0, "seed mod size")
	assert_equal(select_daily(379653439, 10), 9, "neighbouring seed")
	assert_equal(select_daily(7, 7), 0, "exact multiple")
	assert_raises(lambda: select_daily(3, 0), ValueError, "empty catalog rejected")


def test_daily_title_is_stable():
	pool = PoolSelector(['A', 'B', 'C', 'D', 'E'])
	key = '2024-01-01'
	first = pool.daily_title(key)
	assert_equal(pool.daily_title(key), first, "same title on repeat")
	assert_equal(first, pool.catalog[daily_seed(key) % 5], "title follows the seed")
	# Practice picks never affect the daily one
	pool.random_title()
	pool.random_title()
	assert_equal(pool.daily_title(key), first, "daily unaffected by practice picks")


def test_select_random_respects_exclusion():
	rng = random.Random(42)
	exclude = {0, 1, 2, 4}
	for _ in range(20):
		assert_equal(select_random(5, exclude, rng), 3, "only index 3 available")


def test_select_random_clears_when_exhausted():
	rng = random.Random(1)
	exclude = {0, 1, 2}
	index = select_random(3, exclude, rng)
	assert_true(0 <= index < 3, "picked a valid index")
	assert_equal(exclude, set(), "exclusion set cleared")


def test_random_title_cycles_without_repeats():
	pool = PoolSelector(['A', 'B', 'C', 'D'], rng=random.Random(7))
	first_cycle = [pool.random_title() for _ in range(4)]
	assert_equal(sorted(first_cycle), ['A', 'B', 'C', 'D'], "each title once per cycle")
	# Fifth pick starts a new cycle instead of looping forever
	assert_true(pool.random_title() in pool.catalog, "fresh cycle after exhaustion")
	assert_equal(len(pool.used_indices), 1, "used set restarted")
	pool.reset()
	assert_equal(pool.used_indices, set(), "reset clears used titles")


def test_random_title_avoids_daily():
	pool = PoolSelector(['A', 'B'], rng=random.Random(3))
	for _ in range(5):
		pool.reset()
		assert_equal(pool.random_title(avoid=['a']), 'B', "avoided title never picked")


def test_dedupe_titles():
	lines = ['# comment', 'Alien', '', 'Heat', 'alien', 'Up', 'HEAT']
	assert_equal(dedupe_titles(lines), ['Alien', 'Heat', 'Up'], "first spelling kept, order preserved")


def test_load_catalog():
	with tempfile.TemporaryDirectory() as tmp:
		path = Path(tmp) / 'list.txt'
		path.write_text("# pool\nAlien\nAliens\nalien\n\nHeat\n", encoding='utf-8')
		assert_equal(load_catalog(str(path)), ['Alien', 'Aliens', 'Heat'], "file catalog")
	assert_raises(lambda: load_catalog('/no/such/catalog.txt'), FileNotFoundError, "missing file")


def test_bundled_catalog():
	titles = load_catalog()
	assert_true(len(titles) > 100, "bundled catalog is populated")
	assert_equal(len({t.lower() for t in titles}), len(titles), "bundled catalog has no duplicates")


def main():
	print("Running pool tests...")
	test_select_daily()
	test_daily_title_is_stable()
	test_select_random_respects_exclusion()
	test_select_random_clears_when_exhausted()
	test_random_title_cycles_without_repeats()
	test_random_title_avoids_daily()
	test_dedupe_titles()
	test_load_catalog()
	test_bundled_catalog()
	print("All pool tests passed!")


if __name__ == '__main__':
	main()
