"""Configuration constants for the Tetrachord Explorer."""

# =============================================================================
# Tuning Defaults
# =============================================================================

# Interval of equivalence (2.0 = octave)
DEFAULT_EQUAVE = 2.0

# Equal divisions of the equave
DEFAULT_DIVISIONS = 12

# Index into the permutation table (see intervals.PERMUTATIONS)
DEFAULT_ORDER = 0

# =============================================================================
# Music-Theoretic Bounds (frequency ratios)
# =============================================================================

PERFECT_FIFTH = 3 / 2
PERFECT_FOURTH = 4 / 3

# Largest fourth: 28:27 below the fifth
WIDEST_FOURTH = 81 / 56

# Largest "big" interval: a Pythagorean major third
WIDEST_BIG_INTERVAL = 81 / 64

# Default "big" interval: a whole tone
DEFAULT_BIG_INTERVAL = 9 / 8

# Intervals smaller than roughly a quarter tone are not considered
QUARTER_TONE = 36 / 35

# Fewest steps a fourth may span
MIN_FOURTH_STEPS = 3

# =============================================================================
# Pitch Mapping
# =============================================================================

# MIDI note of the first scale degree (C4)
DEFAULT_ROOT_NOTE = 60

# Highest MIDI note a scale degree may be mapped to (C8)
HIGHEST_NOTE = 108

# Ratios are quantized to 1/512 of a semitone before picking a note
PITCH_QUANTIZATION = 512

# Flat spelling, used for note names such as "Eb4"
NOTE_NAMES = ['C', 'Db', 'D', 'Eb', 'E', 'F', 'Gb', 'G', 'Ab', 'A', 'Bb', 'B']

# =============================================================================
# Rational Approximation
# =============================================================================

# Base precision: the denominator every ratio is first approximated with
DEFAULT_PRECISION = 10

# Upper limit on joint denominator refinement passes
MAX_REFINEMENT_PASSES = 32

# =============================================================================
# OSC Configuration
# =============================================================================

# Consumer of the published scale (sampler, synth or visualizer)
OSC_HOST = "127.0.0.1"
OSC_PORT = 9002

OSC_INTERVALS = "/tetrachord/intervals"
OSC_DEGREE = "/tetrachord/degree"
OSC_LABEL = "/tetrachord/label"
