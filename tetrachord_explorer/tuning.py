"""Equal-division tunings and pitch mapping.

This module converts step counts of an equal division of an equave
into frequency ratios, and ratios into the nearest MIDI note plus the
playback-rate multiplier that bends that note onto the exact ratio.
"""

import math
from dataclasses import dataclass

from . import config


class InvalidTuningError(ValueError):
    """Raised for an equave or division count that defines no tuning."""


def round_half_away(x: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's round() rounds halves to even, which would move step
    counts such as 4.5 down instead of up.
    """
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


@dataclass(frozen=True)
class TuningSystem:
    """An equave divided into equal steps.

    Attributes:
        equave: Interval of equivalence as a frequency ratio (2.0 = octave)
        divisions: Number of equal steps per equave
    """
    equave: float = config.DEFAULT_EQUAVE
    divisions: int = config.DEFAULT_DIVISIONS

    def __post_init__(self) -> None:
        if not math.isfinite(self.equave) or self.equave <= 1:
            raise InvalidTuningError(
                f"Invalid tuning configuration: equave must be > 1, got {self.equave}"
            )
        if isinstance(self.divisions, bool) or not isinstance(self.divisions, int) or self.divisions < 1:
            raise InvalidTuningError(
                f"Invalid tuning configuration: divisions must be an integer >= 1, got {self.divisions!r}"
            )

    @property
    def step_multiple(self) -> float:
        """Steps per octave (log2 of the equave times the division count)."""
        return math.log2(self.equave) * self.divisions

    def ratio_to_steps(self, ratio: float) -> int:
        """Nearest whole number of steps to a frequency ratio."""
        return round_half_away(math.log2(ratio) * self.step_multiple)

    def steps_to_ratio(self, steps: int) -> float:
        """Frequency ratio of a number of steps.

        Args:
            steps: Step count (can be negative)

        Returns:
            equave ** (steps / divisions)
        """
        return self.equave ** (steps / self.divisions)

    def steps_to_cents(self, steps: int) -> float:
        """Size of a number of steps in cents."""
        return 1200.0 * steps * math.log2(self.equave) / self.divisions


def ratio_to_pitch_index(
    ratio: float,
    root_note: int = config.DEFAULT_ROOT_NOTE,
    highest_note: int = config.HIGHEST_NOTE,
) -> int:
    """Pick the MIDI note a sample is played from for a ratio above the root.

    The ratio is first quantized to 1/512 of a semitone, so ratios a hair
    below a semitone boundary through floating point error still land on
    that semitone, and then rounded up to a whole semitone. Samples are
    therefore only ever slowed down.

    Args:
        ratio: Frequency ratio above the root (> 0)
        root_note: MIDI note of ratio 1/1
        highest_note: Highest note a sample exists for

    Returns:
        MIDI note number, at most highest_note
    """
    if ratio <= 0:
        raise ValueError(f"Ratio must be positive, got {ratio}")
    quanta = config.PITCH_QUANTIZATION
    semitones = math.ceil(round_half_away(math.log2(ratio) * 12 * quanta) / quanta)
    return min(semitones + root_note, highest_note)


def ratio_to_playback_speed(
    ratio: float,
    pitch_index: int,
    root_note: int = config.DEFAULT_ROOT_NOTE,
) -> float:
    """Playback-rate multiplier that turns a note's sample into the ratio.

    Args:
        ratio: Target frequency ratio above the root
        pitch_index: MIDI note whose sample is played
        root_note: MIDI note of ratio 1/1

    Returns:
        ratio divided by the 12-TET ratio of pitch_index above root_note
    """
    return ratio / (2 ** ((pitch_index - root_note) / 12))


def midi_note_name(midi_note: int) -> str:
    """Name of a MIDI note with flat spelling, e.g. 63 -> "Eb4"."""
    octave = int(midi_note / 12) - 1
    return f"{config.NOTE_NAMES[midi_note % 12]}{octave}"


def root_note_number(pitch_class: int, octave: int) -> int:
    """MIDI note of a root given as offsets from A4.

    Args:
        pitch_class: Semitones above A (-9 for C, 0 for A)
        octave: Octaves above the fourth octave

    Returns:
        MIDI note number (root_note_number(-9, 0) == 60)
    """
    return pitch_class + 12 * octave + 69
