"""Interactive session over the tetrachord engine.

A slider is dragged (preview) and then released (accept). While
dragging, proportions are measured against the slider ranges of the
last accepted state, so the other sliders keep their relative
positions even though their ranges shift. Releasing commits the new
ranges.
"""

from dataclasses import dataclass
from typing import Optional

from . import config
from .intervals import Bounds, IntervalSet, derive_intervals
from .number_line import NumberLineLabel, layout_number_line
from .ratios import find_ratios
from .scale import ScaleDegree, build_scale, scale_multiples
from .tuning import TuningSystem, root_note_number


@dataclass(frozen=True)
class ScaleSnapshot:
    """Everything derived from one set of slider positions."""
    intervals: IntervalSet
    bounds: Bounds
    degrees: list[ScaleDegree]
    ratios: list[tuple[int, int]]
    labels: list[NumberLineLabel]

    @property
    def multiples(self) -> list[float]:
        return scale_multiples(self.degrees)

    @property
    def note_numbers(self) -> list[int]:
        return [degree.note_number for degree in self.degrees]

    @property
    def playback_rates(self) -> list[float]:
        return [degree.playback_rate for degree in self.degrees]


class TetrachordExplorer:
    """Holds slider state between previews and derives scales from it."""

    def __init__(
        self,
        equave: float = config.DEFAULT_EQUAVE,
        divisions: int = config.DEFAULT_DIVISIONS,
        order_index: int = config.DEFAULT_ORDER,
        root_note: int = config.DEFAULT_ROOT_NOTE,
        precision: int = config.DEFAULT_PRECISION,
        verbose: bool = False,
    ):
        """Initialize the explorer and accept its starting tetrachord.

        Args:
            equave: Interval of equivalence (> 1)
            divisions: Equal steps per equave
            order_index: Index into intervals.PERMUTATIONS
            root_note: MIDI note of the first degree
            precision: Base denominator for the fraction labels
            verbose: If True, print each derived tetrachord
        """
        self.tuning = TuningSystem(equave, divisions)
        self.order_index = order_index
        self.root_note = root_note
        self.precision = precision
        self.verbose = verbose

        # Accepted slider ranges with the current slider values
        self._sliders: Optional[Bounds] = None
        self.snapshot = self.preview()
        self.accept()

    def preview(
        self,
        fourth: Optional[int] = None,
        big: Optional[int] = None,
        mid: Optional[int] = None,
    ) -> ScaleSnapshot:
        """Derive the scale for moved slider values without committing.

        Args:
            fourth: New fourth slider value in steps (None = unchanged)
            big: New big interval slider value in steps (None = unchanged)
            mid: New mid interval slider value in steps (None = unchanged)

        Returns:
            The derived ScaleSnapshot (also stored as self.snapshot)
        """
        sliders = self._sliders
        if sliders is not None:
            sliders = Bounds(
                fourth=sliders.fourth if fourth is None else sliders.fourth.with_value(fourth),
                big=sliders.big if big is None else sliders.big.with_value(big),
                mid=sliders.mid if mid is None else sliders.mid.with_value(mid),
            )
            self._sliders = sliders

        interval_set, bounds = derive_intervals(
            self.tuning.equave,
            self.tuning.divisions,
            order_index=self.order_index,
            prior_bounds=sliders,
        )
        degrees = build_scale(self.tuning, interval_set.intervals, self.root_note)
        multiples = scale_multiples(degrees)
        ratios = find_ratios(multiples, self.precision)

        self.snapshot = ScaleSnapshot(
            intervals=interval_set,
            bounds=bounds,
            degrees=degrees,
            ratios=ratios,
            labels=layout_number_line(multiples, ratios),
        )
        if self.verbose:
            steps = " ".join(str(i) for i in interval_set.tetrachord)
            labels = " ".join(label.text for label in self.snapshot.labels)
            print(f"⟳ Tetrachord: {steps} + {interval_set.residual} → {labels}")
        return self.snapshot

    def accept(self) -> Bounds:
        """Commit the ranges and values of the last preview."""
        self._sliders = self.snapshot.bounds
        return self._sliders

    @property
    def bounds(self) -> Optional[Bounds]:
        """Slider ranges and values proportions are measured against."""
        return self._sliders

    def set_tuning(
        self,
        equave: Optional[float] = None,
        divisions: Optional[int] = None,
    ) -> ScaleSnapshot:
        """Change the tuning and preview the result."""
        self.tuning = TuningSystem(
            self.tuning.equave if equave is None else equave,
            self.tuning.divisions if divisions is None else divisions,
        )
        return self.preview()

    def set_order(self, order_index: int) -> ScaleSnapshot:
        """Reorder the tetrachord's intervals and preview the result."""
        previous = self.order_index
        self.order_index = order_index
        try:
            return self.preview()
        except ValueError:
            self.order_index = previous
            raise

    def set_root(self, pitch_class: int, octave: int) -> ScaleSnapshot:
        """Move the root note (offsets from A4) and preview the result."""
        self.root_note = root_note_number(pitch_class, octave)
        return self.preview()
