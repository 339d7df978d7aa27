import itertools
import random
import unittest

from wordbox.core.exceptions import SearchCancelled, SearchTimeout
from wordbox.core.models import WordBox
from wordbox.data.lexicon import HashedLexicon, VectorLexicon
from wordbox.engine.search import (
    CancellationToken,
    SearchStats,
    depth_first_search,
    frontier_search,
    iter_candidate_rows,
    iter_solutions,
    search_each_start,
    seed_boxes,
)

BOX_WORDS = ["tab", "ore", "nee", "ton", "are", "bee"]
NO_BOX_WORDS = ["cat", "cot", "car", "art", "tar", "rat"]


def brute_force(words, row_dim, col_dim, symmetric=False):
    """Every box buildable from ``words``, by plain enumeration."""
    vocab = set(words)
    pool = [w for w in dict.fromkeys(words) if len(w) == col_dim]
    found = set()
    for rows in itertools.product(pool, repeat=row_dim):
        cols = ["".join(row[c] for row in rows) for c in range(col_dim)]
        if all(col in vocab for col in cols) and (not symmetric or list(rows) == cols):
            found.add(rows)
    return found


def assert_valid_box(test, box, words, symmetric=False):
    vocab = set(words)
    test.assertTrue(box.is_done())
    for row in box.rows:
        test.assertEqual(len(row), box.col_dim)
        test.assertIn(row, vocab)
    for c in range(box.col_dim):
        test.assertIn(box.column_prefix(c), vocab)
    if symmetric:
        for r in range(box.row_dim):
            for c in range(box.col_dim):
                test.assertEqual(box.rows[r][c], box.rows[c][r])


class DepthFirstSearchTests(unittest.TestCase):
    def test_finds_valid_box(self) -> None:
        lexicon = HashedLexicon.from_words(BOX_WORDS, {3})
        box = depth_first_search(WordBox.empty(3, 3), lexicon)
        self.assertIsNotNone(box)
        assert box is not None
        assert_valid_box(self, box, BOX_WORDS)

    def test_first_solution_follows_dictionary_order(self) -> None:
        lexicon = HashedLexicon.from_words(BOX_WORDS, {3})
        box = depth_first_search(WordBox.empty(3, 3), lexicon)
        assert box is not None
        self.assertEqual(box.rows, ("tab", "ore", "nee"))

    def test_reports_no_solution_for_unfillable_dictionary(self) -> None:
        lexicon = HashedLexicon.from_words(NO_BOX_WORDS, {3})
        self.assertIsNone(depth_first_search(WordBox.empty(3, 3), lexicon))
        self.assertEqual(brute_force(NO_BOX_WORDS, 3, 3), set())

    def test_single_word_dictionary_terminates_without_box(self) -> None:
        lexicon = HashedLexicon.from_words(["abc"], {3})
        stats = SearchStats()
        self.assertIsNone(depth_first_search(WordBox.empty(3, 3), lexicon, stats=stats))
        self.assertEqual(stats.nodes_visited, 1)
        self.assertEqual(stats.dead_ends, 1)

    def test_rectangular_box(self) -> None:
        words = ["abc", "def", "ad", "be", "cf"]
        lexicon = HashedLexicon.from_words(words, {2, 3})
        box = depth_first_search(WordBox.empty(2, 3), lexicon)
        assert box is not None
        self.assertEqual(box.rows, ("abc", "def"))
        self.assertEqual(str(box), "abc\ndef")

    def test_done_box_is_returned_as_is(self) -> None:
        lexicon = HashedLexicon.from_words(BOX_WORDS, {3})
        done = WordBox.empty(3, 3).add_word("tab").add_word("ore").add_word("nee")
        self.assertIs(depth_first_search(done, lexicon), done)

    def test_observer_sees_every_visit_without_changing_result(self) -> None:
        lexicon = HashedLexicon.from_words(BOX_WORDS, {3})
        seen = []
        stats = SearchStats()
        with_observer = depth_first_search(
            WordBox.empty(3, 3), lexicon, observer=seen.append, stats=stats
        )
        self.assertEqual(with_observer, depth_first_search(WordBox.empty(3, 3), lexicon))
        self.assertEqual(len(seen), stats.nodes_visited)
        self.assertEqual(seen[0], WordBox.empty(3, 3))
        self.assertEqual(seen[-1], with_observer)

    def test_symmetric_depth_first_seeded(self) -> None:
        words = ["aba", "bob", "abs", "bat"]
        lexicon = HashedLexicon.from_words(words, {3})
        box = depth_first_search(WordBox.seeded("aba"), lexicon)
        assert box is not None
        self.assertEqual(box.rows, ("aba", "bob", "aba"))
        assert_valid_box(self, box, words, symmetric=True)


class SolutionEnumerationTests(unittest.TestCase):
    def test_enumerates_every_plain_box(self) -> None:
        lexicon = HashedLexicon.from_words(BOX_WORDS, {3})
        solutions = [box.rows for box in iter_solutions(WordBox.empty(3, 3), lexicon)]
        self.assertEqual(len(solutions), len(set(solutions)))
        self.assertEqual(set(solutions), brute_force(BOX_WORDS, 3, 3))

    def test_enumerates_only_mirrored_boxes_when_symmetric(self) -> None:
        lexicon = HashedLexicon.from_words(BOX_WORDS, {3})
        solutions = {box.rows for box in iter_solutions(WordBox.empty(3, 3, symmetric=True), lexicon)}
        self.assertEqual(solutions, {("tab", "are", "bee"), ("ton", "ore", "nee")})
        self.assertEqual(solutions, brute_force(BOX_WORDS, 3, 3, symmetric=True))

    def test_exhaustion_matches_brute_force(self) -> None:
        rng = random.Random(1234)
        for trial in range(40):
            size = rng.choice([2, 3])
            alphabet = "abc"[: size]
            universe = ["".join(p) for p in itertools.product(alphabet, repeat=size)]
            words = rng.sample(universe, rng.randint(1, min(len(universe), 8)))
            symmetric = bool(trial % 2)
            for lexicon_type in (HashedLexicon, VectorLexicon):
                lexicon = lexicon_type.from_words(words, {size})
                start = WordBox.empty(size, size, symmetric=symmetric)
                found = {box.rows for box in iter_solutions(start, lexicon)}
                expected = brute_force(words, size, size, symmetric=symmetric)
                self.assertEqual(found, expected, (words, symmetric))
                self.assertEqual(
                    depth_first_search(start, lexicon) is None, not expected, (words, symmetric)
                )
                seeds = seed_boxes(lexicon, size, size, symmetric)
                self.assertEqual(
                    search_each_start(seeds, lexicon) is None, not expected, (words, symmetric)
                )


class FrontierSearchTests(unittest.TestCase):
    def test_symmetric_seed_respects_diagonal_mirror(self) -> None:
        words = ["aba", "bob", "abs", "bat"]
        lexicon = HashedLexicon.from_words(words, {3})
        box = frontier_search([WordBox.seeded("aba")], lexicon)
        assert box is not None
        self.assertEqual(box.rows[0], "aba")
        self.assertEqual(box.cols, box.rows)
        assert_valid_box(self, box, words, symmetric=True)

    def test_last_discovered_child_is_explored_first(self) -> None:
        lexicon = HashedLexicon.from_words(["aba", "bob", "abs", "bat"], {3})
        box = frontier_search([WordBox.seeded("aba")], lexicon)
        assert box is not None
        self.assertEqual(box.rows, ("aba", "bob", "abs"))

    def test_next_row_is_pruned_by_column_prefix(self) -> None:
        lexicon = HashedLexicon.from_words(["aba", "bob", "abs", "bat"], {3})
        box = WordBox.seeded("aba")
        self.assertEqual(list(iter_candidate_rows(box, lexicon)), ["bob"])

    def test_dead_seed_exhausts(self) -> None:
        lexicon = HashedLexicon.from_words(["aba", "bat"], {3})
        stats = SearchStats()
        self.assertIsNone(frontier_search([WordBox.seeded("aba")], lexicon, stats=stats))
        self.assertEqual(stats.dead_ends, 1)

    def test_empty_frontier_returns_none(self) -> None:
        lexicon = HashedLexicon.from_words(BOX_WORDS, {3})
        self.assertIsNone(frontier_search([], lexicon))

    def test_seed_boxes_only_keep_legal_first_rows(self) -> None:
        lexicon = HashedLexicon.from_words(BOX_WORDS, {3})
        self.assertEqual([b.rows for b in seed_boxes(lexicon, 3, 3)], [("tab",), ("ton",)])
        symmetric = seed_boxes(lexicon, 3, 3, symmetric=True)
        self.assertTrue(all(b.symmetric and b.cols == b.rows for b in symmetric))

    def test_each_start_counts_seeds(self) -> None:
        lexicon = HashedLexicon.from_words(NO_BOX_WORDS, {3})
        seeds = seed_boxes(lexicon, 3, 3, symmetric=True)
        stats = SearchStats()
        self.assertIsNone(search_each_start(seeds, lexicon, stats=stats))
        self.assertEqual(stats.seeds_tried, len(seeds))


class CancellationTests(unittest.TestCase):
    def test_cancelled_token_stops_search(self) -> None:
        lexicon = HashedLexicon.from_words(BOX_WORDS, {3})
        token = CancellationToken()
        token.cancel()
        with self.assertRaises(SearchCancelled):
            depth_first_search(WordBox.empty(3, 3), lexicon, token=token)
        with self.assertRaises(SearchCancelled):
            frontier_search([WordBox.seeded("tab")], lexicon, token=token)

    def test_deadline_raises_timeout(self) -> None:
        now = [100.0]
        token = CancellationToken(timeout=5.0, clock=lambda: now[0])
        token.check()
        now[0] = 105.0
        self.assertTrue(token.expired)
        with self.assertRaises(SearchTimeout):
            token.check()

    def test_child_inherits_parent_but_not_vice_versa(self) -> None:
        parent = CancellationToken()
        child = parent.child()
        child.cancel()
        self.assertTrue(child.cancelled)
        self.assertFalse(parent.cancelled)

        parent = CancellationToken()
        child = parent.child()
        parent.cancel()
        self.assertTrue(child.cancelled)

    def test_child_shares_parent_deadline(self) -> None:
        now = [0.0]
        parent = CancellationToken(timeout=1.0, clock=lambda: now[0])
        child = parent.child()
        self.assertFalse(child.expired)
        now[0] = 2.0
        with self.assertRaises(SearchTimeout):
            child.check()


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
