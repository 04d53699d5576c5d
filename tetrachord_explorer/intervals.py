"""Tetrachord interval derivation.

Turns three slider proportions into the step counts of a tetrachord:
a fourth divided into a big, a mid and a small interval, followed by
the residual interval that completes a fifth. Every bound is a
music-theoretic ratio converted to steps of the current tuning, so the
same slider positions give comparable tetrachords in any tuning.
"""

import math
from dataclasses import dataclass
from typing import Optional

from . import config
from .tuning import TuningSystem, round_half_away

# Orderings of the sub-intervals: 0 = big, 1 = mid, 2 = small
PERMUTATIONS: tuple[tuple[int, int, int], ...] = (
    (1, 2, 0),
    (1, 0, 2),
    (0, 1, 2),
    (0, 2, 1),
    (2, 0, 1),
    (2, 1, 0),
)


@dataclass(frozen=True)
class Slider:
    """Range and position of one slider, in steps."""
    minimum: int
    maximum: int
    value: int

    @property
    def proportion(self) -> float:
        """Fractional position of value between minimum and maximum.

        A collapsed range (maximum <= minimum) has proportion 0.
        """
        if self.maximum > self.minimum:
            return (self.value - self.minimum) / (self.maximum - self.minimum)
        return 0.0

    def value_at(self, proportion: float) -> int:
        """Value at a proportion (clamped to 0-1) of the range.

        A collapsed range pins the value to the minimum.
        """
        if self.maximum <= self.minimum:
            return self.minimum
        proportion = max(0.0, min(1.0, proportion))
        return round_half_away(proportion * (self.maximum - self.minimum)) + self.minimum

    def with_value(self, value: int) -> "Slider":
        """Same range, value moved (clamped into the range)."""
        if self.maximum <= self.minimum:
            return Slider(self.minimum, self.maximum, self.minimum)
        return Slider(self.minimum, self.maximum, max(self.minimum, min(self.maximum, value)))


@dataclass(frozen=True)
class Bounds:
    """Slider state handed back by derive_intervals for the next call."""
    fourth: Slider
    big: Slider
    mid: Slider


@dataclass(frozen=True)
class IntervalSet:
    """Step counts of a tetrachord plus the residual up to the fifth.

    Attributes:
        intervals: (interval1, interval2, interval3, residual)
        big, mid, small: The sub-intervals before reordering (big >= mid >= small)
        fourth: Steps spanned by the first three intervals
        fifth: Steps in a fifth
        smallest_interval: Smallest sub-interval the bounds allow
    """
    intervals: tuple[int, int, int, int]
    big: int
    mid: int
    small: int
    fourth: int
    fifth: int
    smallest_interval: int

    @property
    def tetrachord(self) -> tuple[int, int, int]:
        """The three intervals spanning the fourth, in playing order."""
        return self.intervals[:3]

    @property
    def residual(self) -> int:
        """Steps from the fourth up to the fifth."""
        return self.intervals[3]

    def __iter__(self):
        return iter(self.intervals)

    def __len__(self) -> int:
        return len(self.intervals)


def _slide(proportion: float, minimum: int, maximum: int) -> Slider:
    """Place a slider at a proportion of its range."""
    slider = Slider(minimum, maximum, minimum)
    return Slider(minimum, maximum, slider.value_at(proportion))


def _resolve(proportion: Optional[float], prior: Optional[Slider]) -> Optional[float]:
    """Explicit proportion first, then the prior slider's position."""
    if proportion is not None:
        return proportion
    if prior is not None:
        return prior.proportion
    return None


def permute(big: int, mid: int, small: int, order_index: int) -> tuple[int, int, int]:
    """Arrange the sub-intervals using one of the six PERMUTATIONS."""
    if not 0 <= order_index < len(PERMUTATIONS):
        raise ValueError(
            f"Order index must be in 0..{len(PERMUTATIONS) - 1}, got {order_index}"
        )
    ordered = (big, mid, small)
    first, second, third = PERMUTATIONS[order_index]
    return ordered[first], ordered[second], ordered[third]


def derive_intervals(
    equave: float,
    divisions: int,
    fourth_proportion: Optional[float] = None,
    big_proportion: Optional[float] = None,
    mid_proportion: Optional[float] = None,
    order_index: int = config.DEFAULT_ORDER,
    prior_bounds: Optional[Bounds] = None,
) -> tuple[IntervalSet, Bounds]:
    """Derive a tetrachord's step counts from slider proportions.

    Each proportion places its slider between bounds computed for the
    current tuning. A proportion left as None is taken from the matching
    slider of prior_bounds, so a value keeps its relative position when
    the bounds move. Without prior bounds the fourth and mid sliders
    start at their minimum and the big slider at a whole tone (9/8).

    Args:
        equave: Interval of equivalence (> 1)
        divisions: Equal steps per equave (>= 1)
        fourth_proportion: Position of the fourth between its bounds (0-1)
        big_proportion: Position of the big interval between its bounds (0-1)
        mid_proportion: Position of the mid interval between its bounds (0-1)
        order_index: Index into PERMUTATIONS (0-5)
        prior_bounds: Bounds returned by the previous call, if any

    Returns:
        Tuple of (IntervalSet, Bounds)

    Raises:
        InvalidTuningError: If equave <= 1 or divisions < 1
        ValueError: If order_index is out of range
    """
    tuning = TuningSystem(equave, divisions)
    step_multiple = tuning.step_multiple

    fifth = tuning.ratio_to_steps(config.PERFECT_FIFTH)
    smallest_interval = max(math.trunc(math.log2(config.QUARTER_TONE) * step_multiple), 1)

    # Fourth
    fourth_min = max(tuning.ratio_to_steps(config.PERFECT_FOURTH), config.MIN_FOURTH_STEPS)
    fourth_max = min(tuning.ratio_to_steps(config.WIDEST_FOURTH), fifth - smallest_interval)
    proportion = _resolve(fourth_proportion, prior_bounds.fourth if prior_bounds else None)
    fourth_slider = _slide(proportion or 0.0, fourth_min, fourth_max)
    fourth = fourth_slider.value

    # Big interval
    augmentation = fourth - fourth_min
    big_min = max(math.ceil(fourth / 3), augmentation + smallest_interval)
    big_max = min(tuning.ratio_to_steps(config.WIDEST_BIG_INTERVAL), fourth - 2 * smallest_interval)
    proportion = _resolve(big_proportion, prior_bounds.big if prior_bounds else None)
    if proportion is None:
        proportion = 0.0
        if big_max > big_min:
            whole_tone = tuning.ratio_to_steps(config.DEFAULT_BIG_INTERVAL)
            proportion = (whole_tone - big_min) / (big_max - big_min)
    big_slider = _slide(proportion, big_min, big_max)
    big = big_slider.value

    # Mid interval
    mid_min = math.ceil(0.5 * (fourth - big))
    mid_max = min(fourth - big - smallest_interval, big)
    proportion = _resolve(mid_proportion, prior_bounds.mid if prior_bounds else None)
    mid_slider = _slide(proportion or 0.0, mid_min, mid_max)
    mid = mid_slider.value

    small = fourth - big - mid

    first, second, third = permute(big, mid, small, order_index)
    interval_set = IntervalSet(
        intervals=(first, second, third, fifth - fourth),
        big=big,
        mid=mid,
        small=small,
        fourth=fourth,
        fifth=fifth,
        smallest_interval=smallest_interval,
    )
    return interval_set, Bounds(fourth=fourth_slider, big=big_slider, mid=mid_slider)
