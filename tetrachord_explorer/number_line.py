"""Layout of fraction labels on a logarithmic number line."""

import math
from dataclasses import dataclass
from typing import Sequence

from .ratios import format_ratio


@dataclass(frozen=True)
class NumberLineLabel:
    """A fraction label and where it sits on the line."""
    ratio: tuple[int, int]
    multiple: float
    position: float  # 0.0 at the root, 1.0 at the largest multiple

    @property
    def text(self) -> str:
        return format_ratio(self.ratio)


def log_position(multiple: float, largest: float) -> float:
    """Position of a multiple on a log axis from 1 to largest.

    Uses logarithmic scaling so equal musical intervals get equal widths.
    """
    if largest <= 1:
        return 0.0
    return math.log(multiple) / math.log(largest)


def layout_number_line(
    multiples: Sequence[float],
    ratios: Sequence[tuple[int, int]],
) -> list[NumberLineLabel]:
    """Pair each multiple with its fraction and axis position.

    Args:
        multiples: Frequency ratios (>= 1)
        ratios: Fractions from find_ratios, one per multiple

    Returns:
        List of NumberLineLabel in the order of multiples
    """
    if len(multiples) != len(ratios):
        raise ValueError(
            f"Expected one ratio per multiple, got {len(ratios)} for {len(multiples)}"
        )
    largest = max(multiples, default=1.0)
    return [
        NumberLineLabel(ratio=ratio, multiple=multiple, position=log_position(multiple, largest))
        for multiple, ratio in zip(multiples, ratios)
    ]
