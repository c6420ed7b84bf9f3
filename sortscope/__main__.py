"""
Command line front end: sort a shuffled 1..N in a window (or headless).

    python -m sortscope -n 200 -s introsort -d 5
"""

import argparse
import logging
import signal
import sys

from . import viewer
from .runner import (
    MAX_ELEMENTS, MIN_ELEMENTS, Algorithm, InvalidConfiguration, Outcome, SortConfig, run_sort,
)

# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

DEFAULT_COUNT     = 50
DEFAULT_ALGORITHM = Algorithm.QUICKSORT
DEFAULT_SEED      = None
HOLD_AFTER_MS     = 2000

logger = logging.getLogger(__name__)


def parse_dimensions(text: str):
    """``"WxH"`` -> ``(W, H)``, both positive."""
    parts = text.lower().split("x")
    if len(parts) != 2:
        raise ValueError(f"expected WxH, got {text!r}")
    w, h = int(parts[0]), int(parts[1])
    if w <= 0 or h <= 0:
        raise ValueError(f"dimensions must be positive, got {text!r}")
    return w, h


def _as_int(text):
    try:
        return int(text)
    except (TypeError, ValueError):
        return None


def _algorithm_help():
    # 0-6 keep the classic numbering, bogo and shellsort follow
    return "sorting method by name or number (default: %s): " % DEFAULT_ALGORITHM.value + \
        ", ".join(f"{i}={a.value}" for i, a in enumerate(Algorithm))


def build_parser():
    p = argparse.ArgumentParser(prog="sortscope", description="Sorting algorithm visualizer",
                                formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    p.add_argument("-n", dest="count", default=DEFAULT_COUNT, help="number of elements to sort")
    p.add_argument("-d", "--frame-delay", default=viewer.FRAME_DELAY_MS,
                   help="delay in ms after the window is refreshed")
    p.add_argument("--dimensions", default=f"{viewer.SCREEN_WIDTH}x{viewer.SCREEN_HEIGHT}",
                   help="screen dimensions, WxH")
    p.add_argument("-s", "--sorting", default=DEFAULT_ALGORITHM.value, help=_algorithm_help())
    p.add_argument("--seed", type=int, default=DEFAULT_SEED, help="random seed for the initial shuffle")
    p.add_argument("--headless", action="store_true", help="sort without opening a window")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p


def resolve_options(args):
    """Check each option, falling back to its default (with a message) when invalid."""
    count = _as_int(args.count)
    if count is None or not MIN_ELEMENTS <= count <= MAX_ELEMENTS:
        print(f"Invalid number of elements. Defaulting to {DEFAULT_COUNT}.", file=sys.stderr)
        count = DEFAULT_COUNT

    delay = _as_int(args.frame_delay)
    if delay is None or delay < 0:
        print(f"Invalid frame delay. Defaulting to {viewer.FRAME_DELAY_MS} ms.", file=sys.stderr)
        delay = viewer.FRAME_DELAY_MS

    try:
        size = parse_dimensions(args.dimensions)
    except ValueError:
        size = (viewer.SCREEN_WIDTH, viewer.SCREEN_HEIGHT)
        print("Invalid screen dimensions. Defaulting to %dx%d." % size, file=sys.stderr)

    try:
        algorithm = Algorithm.parse(args.sorting)
    except InvalidConfiguration:
        print(f"Invalid sorting method. Defaulting to {DEFAULT_ALGORITHM.title}.", file=sys.stderr)
        algorithm = DEFAULT_ALGORITHM

    return count, delay, size, algorithm


def _interrupt(signum, frame):
    print("\nExiting")
    sys.exit(0)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")
    signal.signal(signal.SIGINT, _interrupt)

    count, delay, size, algorithm = resolve_options(args)
    logger.debug("count=%d delay=%dms size=%dx%d algorithm=%s", count, delay, size[0], size[1], algorithm.value)
    config = SortConfig.shuffled(algorithm, count, args.seed)
    print(f"Sorting {count} elements with {algorithm.title}.")

    if args.headless:
        result = run_sort(config)
    else:
        with viewer.BarViewer(size[0], size[1], delay) as view:
            result = run_sort(config, view, view.should_stop)
            if result.outcome is not Outcome.CANCELLED:
                view.hold(HOLD_AFTER_MS)

    if result.outcome is Outcome.CANCELLED:
        print("\nExiting.\n")
        return 0
    if result.sorted:
        print("\nSorted!\n")
    else:
        print("\nError: Sorting Failure!\n", file=sys.stderr)
    print(f"Total comparisons: {result.comparisons}")
    print(f"Total swaps: {result.swaps}")
    return 0 if result.sorted else 1


if __name__ == "__main__":
    sys.exit(main())
