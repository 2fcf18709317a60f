#!/usr/bin/env python
"""
Spectrum Duel Simulation Script
===============================

Headless driver for the transmitter/jammer simulation engine.

Usage:
    # 2000 ticks as fast as possible
    python simulate.py --ticks 2000

    # Real-time pacing (one tick every 350 ms), runs until Ctrl+C
    python simulate.py --ticks 0 --interval 0.35

    # Random (non-learning) jammer
    python simulate.py --mode static-jammer --seed 7

    # Re-draw the jammer's prior every 500 ticks, log ticks to CSV
    python simulate.py --mutate-every 500 --log-dir outputs

Author: Spectrum Duel Team
"""

import argparse
import sys
import time
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Run the adversarial spectrum simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python simulate.py --ticks 2000                  # Batch run
  python simulate.py --ticks 0 --interval 0.35     # Real-time, until Ctrl+C
  python simulate.py --mode frozen                 # Greedy, no learning
  python simulate.py --config my_config.json       # Custom configuration
        """
    )

    parser.add_argument(
        "--mode",
        type=str,
        choices=["default", "static-jammer", "frozen"],
        default="default",
        help="Configuration preset (default: default)"
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to EnvironmentConfig JSON file"
    )

    parser.add_argument(
        "--ticks",
        type=int,
        default=1000,
        help="Number of ticks to run, 0 = until interrupted (default: 1000)"
    )

    parser.add_argument(
        "--interval",
        type=float,
        default=0.0,
        help="Seconds between ticks (default: 0, no pacing)"
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: unseeded)"
    )

    parser.add_argument(
        "--mutate-every",
        type=int,
        default=0,
        help="Re-randomize the jammer's value table every K ticks (default: off)"
    )

    parser.add_argument(
        "--log-interval",
        type=int,
        default=100,
        help="Print rolling stats every N ticks (default: 100)"
    )

    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Write a CSV tick log under this directory (default: none)"
    )

    parser.add_argument(
        "--name",
        type=str,
        default="run",
        help="Experiment name for the CSV log (default: run)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print per-tick diagnostics"
    )

    return parser.parse_args(argv)


def get_config(args):
    """Get environment configuration from args."""
    from simulation.config import EnvironmentConfig, get_preset

    if args.config:
        config = EnvironmentConfig.load(args.config)
        print(f"Loaded config from: {args.config}")
    else:
        config = get_preset(args.mode)
        print(f"Using preset: {args.mode}")

    return config


def run(args) -> dict:
    """
    Drive the engine according to parsed arguments.

    Returns:
        Final rolling statistics
    """
    from simulation.engine import SimulationEngine
    from simulation.metrics import MetricsLogger

    config = get_config(args)
    engine = SimulationEngine(seed=args.seed, debug_mode=args.debug)
    logger = MetricsLogger(args.log_dir, args.name)

    engine.reset(config)

    try:
        while args.ticks <= 0 or engine.tick_count < args.ticks:
            outcome = engine.tick(config)
            logger.log_tick(outcome)

            if args.mutate_every > 0 and engine.tick_count % args.mutate_every == 0:
                engine.mutate_jammer()
                logger.log_mutation()

            if args.log_interval > 0 and engine.tick_count % args.log_interval == 0:
                logger.print_stats(prefix=f"[{engine.tick_count:>6}] ")

            if args.interval > 0:
                time.sleep(args.interval)
    except KeyboardInterrupt:
        print("\n\nSimulation interrupted by user.")
    finally:
        logger.close()

    snapshot = engine.snapshot()
    print("\nFinal State:")
    print(f"  Ticks: {snapshot['tick']:,}")
    print(f"  Learning: {snapshot['learning']}")
    print(f"  Tx strategy: {snapshot['tx']['greedy_action']}")
    print(f"  Jam strategy: {snapshot['jam']['greedy_action']}")

    return logger.get_stats()


def main(argv=None):
    """Main simulation entry point."""
    args = parse_args(argv)

    print("=" * 70)
    print("SPECTRUM DUEL")
    print("Adaptive Transmitter vs. Jammer, Tabular Reinforcement Learning")
    print("=" * 70)
    print()

    stats = run(args)

    print("\nFinal Results:")
    print(f"  Mean throughput: {stats['throughput_mean']:.2f} Mbps")
    print(f"  Mean jamming intensity: {stats['jamming_intensity_mean']:.3f}")
    print(f"  Jammer hit rate: {stats['hit_rate'] * 100:.1f}%")

    return 0


if __name__ == "__main__":
    sys.exit(main())
