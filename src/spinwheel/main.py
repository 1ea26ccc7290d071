"""
Command-line simulator for the spin engine.

Runs a batch of spins on a frame-driven scheduler, checks that every spin
comes to rest with its winning segment centred under the pointer, and
prints a summary.

Usage:
    python -m spinwheel --segments 8 --spins 1000 --seed 42
    python -m spinwheel --prizes 6 --phases 4 --debug
"""

import argparse
import logging
import sys
from collections import Counter

import numpy as np

from spinwheel.config.settings import get_settings
from spinwheel.core.errors import ValidationError
from spinwheel.geometry.angles import landing_errors
from spinwheel.prizes.rng import generate_seed
from spinwheel.prizes.table import generate_production_prize_set
from spinwheel.wheel.engine import WheelEngine

# 60 fps host loop
FRAME_MS = 1000.0 / 60.0


def setup_logging(debug: bool = False, level_name: str = "INFO") -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spinwheel-sim",
        description="Deterministic prize wheel simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--segments', type=int, default=8, help='Segment count (default: 8)')
    parser.add_argument('--spins', type=int, default=100, help='Number of spins (default: 100)')
    parser.add_argument('--seed', type=int, default=None, help='Engine seed (default: random)')
    parser.add_argument(
        '--prizes', type=int, default=None,
        help='Spin a generated production prize table of this size instead of uniform segments'
    )
    parser.add_argument('--phases', type=int, choices=(3, 4), default=None,
                        help='Phase model (default: from settings)')
    parser.add_argument('--debug', action='store_true', help='Verbose logging')
    return parser


def run_simulation(
    segments: int,
    spins: int,
    seed: int,
    prize_count: int | None = None,
    phases: int | None = None,
) -> dict:
    """Run ``spins`` consecutive spins on one engine and collect landings."""
    settings = get_settings()
    spin_settings = settings.spin
    if phases is not None:
        phase_model = "four_phase" if phases == 4 else "three_phase"
        spin_settings = spin_settings.model_copy(update={"phase_model": phase_model})

    prize_table = None
    if prize_count is not None:
        prize_table = generate_production_prize_set(prize_count, seed)
        segments = prize_count

    indices: list[int] = []
    rotations: list[float] = []

    with WheelEngine(
        segments,
        on_spin_complete=indices.append,
        prize_table=prize_table,
        seed=seed,
        settings=spin_settings,
    ) as engine:
        for _ in range(spins):
            engine.start_spin()
            while engine.is_spinning:
                engine.update(FRAME_MS)
            rotations.append(engine.rotation)

    errors = landing_errors(indices, rotations, segments)
    return {
        "segments": segments,
        "spins": spins,
        "seed": seed,
        "phase_model": spin_settings.phase_model,
        "max_error": float(np.max(errors)) if len(errors) else 0.0,
        "hits": Counter(indices),
        "final_rotation": rotations[-1] if rotations else 0.0,
        "tolerance": spin_settings.landing_tolerance,
        "prizes": [p.id for p in prize_table] if prize_table is not None else None,
    }


def print_summary(result: dict) -> None:
    print(f"Spins:          {result['spins']} on {result['segments']} segments "
          f"({result['phase_model']}, seed={result['seed']})")
    print(f"Final rotation: {result['final_rotation']:.2f}°")
    print(f"Max landing error: {result['max_error']:.6f}° (tolerance {result['tolerance']}°)")
    print("Hits per segment:")
    prizes = result["prizes"]
    for index in range(result["segments"]):
        label = f" {prizes[index]}" if prizes else ""
        print(f"  [{index}]{label}: {result['hits'].get(index, 0)}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(args.debug or settings.debug, settings.log_level)

    logger = logging.getLogger(__name__)

    seed = generate_seed() if args.seed is None else args.seed

    try:
        result = run_simulation(args.segments, args.spins, seed, args.prizes, args.phases)
    except ValidationError as e:
        logger.error(f"Invalid simulation parameters: {e}")
        return 2
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 1

    print_summary(result)

    if result["max_error"] > result["tolerance"]:
        logger.error("Landing check failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
