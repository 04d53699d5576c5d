"""Tests for rational approximation of frequency ratios."""

import math
import pytest

from tetrachord_explorer import ratios
from tetrachord_explorer.ratios import (
    InvalidRatioError,
    find_ratio,
    find_ratios,
    format_ratio,
)


class TestFindRatio:
    """Tests for find_ratio function."""

    def test_perfect_fifth(self):
        """1.5 at precision 10 is exactly 3/2."""
        assert find_ratio(1.5, 10) == (3, 2)

    def test_major_third(self):
        assert find_ratio(1.25, 4) == (5, 4)

    def test_unison(self):
        assert find_ratio(1.0, 1) == (1, 1)
        assert find_ratio(1.0, 17) == (1, 1)

    def test_equal_tempered_semitone(self):
        """2^(1/12) is closest to 17/16 among denominators 9-16."""
        assert find_ratio(2 ** (1 / 12), 16) == (17, 16)

    @pytest.mark.parametrize("numerator,denominator", [
        (3, 2), (5, 3), (9, 8), (7, 4), (15, 8), (16, 15), (11, 7),
    ])
    def test_exact_fractions_are_recovered(self, numerator, denominator):
        assert find_ratio(numerator / denominator, denominator) == (numerator, denominator)

    @pytest.mark.parametrize("target", [1.0, 1.1, 1.2599, 1.5, 1.75, 2.0, 3.3])
    @pytest.mark.parametrize("max_denominator", [1, 2, 5, 10, 31, 64])
    def test_lowest_terms_within_window(self, target, max_denominator):
        """Reduced result comes from a denominator in the upper half window."""
        numerator, denominator = find_ratio(target, max_denominator)
        assert math.gcd(numerator, denominator) == 1
        assert 1 <= denominator <= max_denominator
        lowest = max_denominator // 2 + 1
        assert any(
            lowest <= k * denominator <= max_denominator
            for k in range(1, max_denominator + 1)
        )

    def test_ties_prefer_smaller_denominator(self, monkeypatch):
        """Equal error replaces the incumbent (<=, not <).

        With every candidate tied, the last one scanned wins: the
        smallest denominator of the window, 10/6 -> 5/3. A strict
        comparison would keep the first, 17/10.
        """
        monkeypatch.setattr(ratios, "log_error", lambda n, d, t: 0.0)
        assert find_ratio(1.7, 10) == (5, 3)

    def test_numerator_is_at_least_one(self):
        numerator, denominator = find_ratio(0.01, 4)
        assert numerator >= 1

    @pytest.mark.parametrize("target", [0.0, -1.5, math.nan, math.inf])
    def test_invalid_target_raises(self, target):
        with pytest.raises(InvalidRatioError):
            find_ratio(target, 10)

    def test_invalid_denominator_raises(self):
        with pytest.raises(ValueError):
            find_ratio(1.5, 0)


class TestFindRatios:
    """Tests for find_ratios joint refinement."""

    def test_just_triad(self):
        assert find_ratios([1, 1.25, 1.5], 4) == [(1, 1), (5, 4), (3, 2)]

    def test_12tet_tetrachord(self):
        """Degrees 0, 2, 3, 5, 7 of 12-TET at precision 10."""
        multiples = [2 ** (steps / 12) for steps in (0, 2, 3, 5, 7)]
        assert find_ratios(multiples, 10) == [(1, 1), (9, 8), (6, 5), (4, 3), (3, 2)]

    def test_empty(self):
        assert find_ratios([], 10) == []

    def test_length_preserved(self):
        multiples = [2 ** (steps / 31) for steps in (0, 5, 8, 13, 18)]
        assert len(find_ratios(multiples, 12)) == len(multiples)

    @pytest.mark.parametrize("divisions", [12, 19, 22, 31, 53])
    @pytest.mark.parametrize("precision", [4, 10, 25])
    def test_refinement_never_raises_the_bound(self, divisions, precision):
        multiples = [2 ** (steps / divisions) for steps in range(0, divisions, 3)]
        first_pass = [find_ratio(m, precision) for m in multiples]
        refined = find_ratios(multiples, precision)
        assert max(max(r) for r in refined) <= max(max(r) for r in first_pass)
        assert all(math.gcd(*r) == 1 for r in refined)

    def test_invalid_multiple_raises(self):
        with pytest.raises(InvalidRatioError):
            find_ratios([1.0, 0.0, 1.5], 10)

    def test_invalid_denominator_raises(self):
        with pytest.raises(ValueError):
            find_ratios([1.0], 0)


class TestRefinementTermination:
    """Tests for which pass find_ratios returns.

    find_ratio is replaced by a table keyed on (multiple, max_denominator)
    so each pass's largest term is known.
    """

    @staticmethod
    def scripted(monkeypatch, table):
        calls = []

        def fake(multiple, max_denominator):
            calls.append((multiple, max_denominator))
            return table[(multiple, max_denominator)]

        monkeypatch.setattr(ratios, "find_ratio", fake)
        return calls

    def test_tied_pass_is_returned(self, monkeypatch):
        """A pass matching the previous bound is the stable result."""
        self.scripted(monkeypatch, {
            (1.0, 4): (1, 1), (1.5, 4): (7, 4),   # bound 7
            (1.0, 7): (6, 7),                     # bound 7 again
        })
        assert find_ratios([1.0, 1.5], 4) == [(6, 7), (7, 4)]

    def test_regressed_pass_is_discarded(self, monkeypatch):
        """A pass raising the bound falls back to the previous pass."""
        self.scripted(monkeypatch, {
            (1.0, 4): (1, 1), (1.5, 4): (7, 4),   # bound 7
            (1.0, 7): (11, 7),                    # bound 11
        })
        assert find_ratios([1.0, 1.5], 4) == [(1, 1), (7, 4)]

    def test_keeps_refining_while_bound_shrinks(self, monkeypatch):
        calls = self.scripted(monkeypatch, {
            (1.0, 4): (1, 1), (1.5, 4): (9, 4),   # bound 9
            (1.0, 9): (1, 1), (1.5, 6): (3, 2),   # bound 3
        })
        # Third pass asks for (1.0, 4) and (1.5, 4) again: bound 9, discarded
        assert find_ratios([1.0, 1.5], 4) == [(1, 1), (3, 2)]
        assert len(calls) == 6

    def test_pass_cap(self, monkeypatch):
        """A bound that shrinks forever stops after max_passes."""
        counter = iter(range(100, 0, -1))
        monkeypatch.setattr(ratios, "find_ratio", lambda m, d: (next(counter), 1))
        assert find_ratios([1.0], 1, max_passes=3) == [(97, 1)]


class TestFormatRatio:
    def test_format(self):
        assert format_ratio((5, 4)) == "5/4"
