"""Scale degrees of a tetrachord.

Accumulates interval step counts into scale degrees and maps each one
to a ratio above the root, the MIDI note whose sample plays it and the
playback rate that corrects that sample to the exact ratio.
"""

from dataclasses import dataclass
from typing import Iterable

from . import config
from .tuning import (
    TuningSystem,
    midi_note_name,
    ratio_to_pitch_index,
    ratio_to_playback_speed,
)


@dataclass(frozen=True)
class ScaleDegree:
    """One playable degree of the scale."""
    steps: int            # Steps above the root
    ratio: float          # Frequency ratio above the root
    note_number: int      # MIDI note of the sample
    playback_rate: float  # Sample speed multiplier

    @property
    def note_name(self) -> str:
        """Name of the sample's note, e.g. "Eb4"."""
        return midi_note_name(self.note_number)


def build_scale(
    tuning: TuningSystem,
    intervals: Iterable[int],
    root_note: int = config.DEFAULT_ROOT_NOTE,
    highest_note: int = config.HIGHEST_NOTE,
) -> list[ScaleDegree]:
    """Map a sequence of intervals to scale degrees.

    The root is always the first degree. Each interval adds one degree
    on top of the previous one.

    Args:
        tuning: Tuning the step counts belong to
        intervals: Step counts between consecutive degrees
        root_note: MIDI note of the root
        highest_note: Highest MIDI note with a sample

    Returns:
        List of ScaleDegree, one more than the number of intervals
    """
    degrees = [ScaleDegree(steps=0, ratio=1.0, note_number=root_note, playback_rate=1.0)]
    steps = 0
    for interval in intervals:
        steps += interval
        ratio = tuning.steps_to_ratio(steps)
        note_number = ratio_to_pitch_index(ratio, root_note, highest_note)
        degrees.append(ScaleDegree(
            steps=steps,
            ratio=ratio,
            note_number=note_number,
            playback_rate=ratio_to_playback_speed(ratio, note_number, root_note),
        ))
    return degrees


def scale_multiples(degrees: Iterable[ScaleDegree]) -> list[float]:
    """Ratios of the degrees above the root, for labelling."""
    return [degree.ratio for degree in degrees]
