"""Command-line entry point for the Tetrachord Explorer.

Derives a tetrachord from slider proportions, prints its scale degrees
and fraction labels, and optionally publishes it over OSC.
"""

import argparse
from typing import Optional

from . import config
from .explorer import ScaleSnapshot, TetrachordExplorer
from .intervals import PERMUTATIONS
from .osc_sender import MockScaleSender, ScaleSender
from .tuning import InvalidTuningError


def _proportion(text: str) -> float:
    value = float(text)
    if not 0.0 <= value <= 1.0:
        raise argparse.ArgumentTypeError(f"proportion must be in [0, 1], got {value}")
    return value


def apply_proportions(
    explorer: TetrachordExplorer,
    fourth: Optional[float] = None,
    big: Optional[float] = None,
    mid: Optional[float] = None,
) -> ScaleSnapshot:
    """Move the sliders one at a time, releasing each before the next.

    Each move is measured against the ranges left by the previous one,
    the way a user would set the sliders from top to bottom.
    """
    snapshot = explorer.snapshot
    for name, proportion in (("fourth", fourth), ("big", big), ("mid", mid)):
        if proportion is None:
            continue
        slider = getattr(explorer.bounds, name)
        snapshot = explorer.preview(**{name: slider.value_at(proportion)})
        explorer.accept()
    return snapshot


def format_snapshot(snapshot: ScaleSnapshot) -> str:
    """Human-readable summary of a derived scale."""
    intervals = snapshot.intervals
    lines = [
        f"Fourth: {intervals.fourth} steps, fifth: {intervals.fifth} steps",
        f"Big/mid/small: {intervals.big}/{intervals.mid}/{intervals.small} "
        f"(smallest allowed: {intervals.smallest_interval})",
        f"Intervals: {' '.join(str(i) for i in intervals.tetrachord)} + {intervals.residual}",
        "-" * 60,
    ]
    for index, (degree, label) in enumerate(zip(snapshot.degrees, snapshot.labels)):
        lines.append(
            f"{index + 1}: {degree.steps:3d} steps  ratio {degree.ratio:.4f}  "
            f"≈ {label.text:>7s}  {degree.note_name:4s} × {degree.playback_rate:.4f}  "
            f"[{label.position:.3f}]"
        )
    return "\n".join(lines)


def main() -> None:
    """Entry point for the Tetrachord Explorer CLI."""
    parser = argparse.ArgumentParser(
        description="Tetrachord Explorer - microtonal tetrachords with rational labels"
    )
    parser.add_argument(
        "--equave",
        type=float,
        default=config.DEFAULT_EQUAVE,
        help=f"Interval of equivalence as a ratio (default: {config.DEFAULT_EQUAVE})",
    )
    parser.add_argument(
        "--divisions",
        type=int,
        default=config.DEFAULT_DIVISIONS,
        help=f"Equal divisions of the equave (default: {config.DEFAULT_DIVISIONS})",
    )
    parser.add_argument("--fourth", type=_proportion, help="Fourth slider position (0-1)")
    parser.add_argument("--big", type=_proportion, help="Big interval slider position (0-1)")
    parser.add_argument("--mid", type=_proportion, help="Mid interval slider position (0-1)")
    parser.add_argument(
        "--order",
        type=int,
        choices=range(len(PERMUTATIONS)),
        default=config.DEFAULT_ORDER,
        help="Interval ordering (0-5)",
    )
    parser.add_argument(
        "--root",
        type=int,
        default=config.DEFAULT_ROOT_NOTE,
        help=f"MIDI note of the root (default: {config.DEFAULT_ROOT_NOTE})",
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=config.DEFAULT_PRECISION,
        help=f"Base denominator of the fraction labels (default: {config.DEFAULT_PRECISION})",
    )
    parser.add_argument(
        "--send",
        action="store_true",
        help=f"Publish the scale over OSC to {config.OSC_HOST}:{config.OSC_PORT}",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Log OSC messages instead of sending them",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce output verbosity",
    )

    args = parser.parse_args()
    if args.precision < 1:
        parser.error(f"--precision must be >= 1, got {args.precision}")

    try:
        explorer = TetrachordExplorer(
            equave=args.equave,
            divisions=args.divisions,
            order_index=args.order,
            root_note=args.root,
            precision=args.precision,
        )
    except InvalidTuningError as e:
        parser.error(str(e))

    snapshot = apply_proportions(explorer, args.fourth, args.big, args.mid)
    if not args.quiet:
        print(format_snapshot(snapshot))

    if args.send or args.mock:
        sender = MockScaleSender(verbose=not args.quiet) if args.mock else ScaleSender()
        with sender:
            sender.send_snapshot(snapshot)
        if not args.quiet:
            print(f"✓ OSC: Sent scale to {sender.host}:{sender.port}")


if __name__ == "__main__":
    main()
