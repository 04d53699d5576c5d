"""Low-denominator fractions for irrational frequency ratios.

Ratios of an equal tuning are irrational, but they are easier to read
as nearby fractions (5/4 rather than 1.2599). find_ratio picks the
closest fraction in pitch for one ratio; find_ratios labels a whole
scale so that all of its fractions stay of comparable complexity.
"""

import math
from typing import Sequence

from . import config
from .tuning import round_half_away


class InvalidRatioError(ValueError):
    """Raised when a multiple is zero, negative or not finite."""


def log_error(numerator: int, denominator: int, target: float) -> float:
    """Distance in octaves between a fraction and a target ratio."""
    return abs(math.log2(numerator / denominator / target))


def _check_target(target: float) -> None:
    if not math.isfinite(target) or target <= 0:
        raise InvalidRatioError(f"Invalid ratio input: ratio must be positive, got {target}")


def find_ratio(target: float, max_denominator: int) -> tuple[int, int]:
    """Best fraction for a ratio among the upper half of denominators.

    Tries every denominator from max_denominator down to
    max_denominator // 2 + 1, with the numerator rounded to the nearest
    integer, and keeps the one closest to the target in pitch. On equal
    error the later (smaller) denominator wins.

    Args:
        target: Frequency ratio (> 0)
        max_denominator: Largest denominator to try (>= 1)

    Returns:
        Tuple of (numerator, denominator) in lowest terms

    Raises:
        InvalidRatioError: If target is not a positive finite number

    Examples:
        >>> find_ratio(1.5, 10)
        (3, 2)
    """
    _check_target(target)
    if max_denominator < 1:
        raise ValueError(f"Denominator must be >= 1, got {max_denominator}")

    best = (1, 1)
    min_error = math.inf
    lowest = math.trunc(0.5 * max_denominator) + 1
    for denominator in range(max_denominator, lowest - 1, -1):
        numerator = max(round_half_away(target * denominator), 1)
        error = log_error(numerator, denominator, target)
        # <= rather than <: ties go to the smaller denominator
        if error <= min_error:
            min_error = error
            best = (numerator, denominator)

    divisor = math.gcd(*best)
    return best[0] // divisor, best[1] // divisor


def _largest_term(ratios: Sequence[tuple[int, int]]) -> int:
    """Largest numerator or denominator in a set of fractions."""
    return max((max(ratio) for ratio in ratios), default=0)


def find_ratios(
    multiples: Sequence[float],
    min_denominator: int,
    max_passes: int = config.MAX_REFINEMENT_PASSES,
) -> list[tuple[int, int]]:
    """Fractions for a set of ratios sharing a common complexity bound.

    A first pass approximates every multiple with min_denominator. The
    largest numerator or denominator found then bounds the denominators
    of the next pass: a multiple m gets prev_max // m, so that its
    numerator stays below the same bound. Passes repeat while that
    largest term keeps shrinking.

    When a pass stops shrinking the bound, its fractions are returned
    if it tied the previous bound and discarded in favour of the
    previous pass if it grew. After max_passes refinement passes the
    last (still shrinking) pass is returned.

    Args:
        multiples: Frequency ratios (> 0), usually cumulative scale ratios
        min_denominator: Base precision (>= 1)
        max_passes: Cap on refinement passes

    Returns:
        One (numerator, denominator) pair per multiple, in lowest terms

    Raises:
        InvalidRatioError: If any multiple is not a positive finite number
    """
    if min_denominator < 1:
        raise ValueError(f"Denominator must be >= 1, got {min_denominator}")
    for multiple in multiples:
        _check_target(multiple)
    if not multiples:
        return []

    ratios = [find_ratio(multiple, min_denominator) for multiple in multiples]
    max_found = _largest_term(ratios)

    for _ in range(max_passes):
        previous, prev_max_found = ratios, max_found
        ratios = [
            find_ratio(multiple, max(math.trunc(prev_max_found / multiple), min_denominator))
            for multiple in multiples
        ]
        max_found = _largest_term(ratios)
        if max_found >= prev_max_found:
            return ratios if max_found == prev_max_found else previous

    return ratios


def format_ratio(ratio: tuple[int, int]) -> str:
    """Text label of a fraction, e.g. (5, 4) -> "5/4"."""
    numerator, denominator = ratio
    return f"{numerator}/{denominator}"
