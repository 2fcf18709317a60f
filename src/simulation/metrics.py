"""
Metrics Logger Module
=====================

Rolling statistics and tick logging for simulation runs.

Features:
    - Rolling statistics over the last N ticks
    - Optional CSV tick log
    - One-line console summaries

Author: Spectrum Duel Team
"""

import csv
import time
from pathlib import Path
from typing import Dict, Any, Optional, Sequence
from collections import deque
from dataclasses import dataclass, field
import numpy as np

from environment.action_space import describe_action

from .engine import TickOutcome


@dataclass
class RollingStats:
    """Rolling statistics tracker."""

    window_size: int = 100
    _values: deque = field(default_factory=lambda: deque(maxlen=100))

    def __post_init__(self):
        self._values = deque(maxlen=self.window_size)

    def add(self, value: float):
        """Add a value."""
        self._values.append(value)

    @property
    def mean(self) -> float:
        """Get rolling mean."""
        if len(self._values) == 0:
            return 0.0
        return float(np.mean(self._values))

    @property
    def std(self) -> float:
        """Get rolling std."""
        if len(self._values) < 2:
            return 0.0
        return float(np.std(self._values))

    @property
    def min(self) -> float:
        """Get rolling min."""
        if len(self._values) == 0:
            return 0.0
        return float(np.min(self._values))

    @property
    def max(self) -> float:
        """Get rolling max."""
        if len(self._values) == 0:
            return 0.0
        return float(np.max(self._values))

    def __len__(self) -> int:
        return len(self._values)


CSV_FIELDS = [
    "tick",
    "throughput_mbps",
    "jamming_intensity",
    "sinr_db",
    "overlap_factor",
    "tx_reward",
    "jam_reward",
    "tx_action",
    "tx_bin",
    "jam_action",
    "jam_center",
    "jam_span",
    "time_elapsed",
]


class MetricsLogger:
    """
    Metrics logging for a simulation run.

    Tracks:
        - Throughput and SINR of the link
        - Jamming intensity and spectral overlap
        - Both agents' rewards
        - Fraction of ticks on which the jammer hit the transmitter

    Example:
        >>> logger = MetricsLogger("outputs", "run1")
        >>> logger.log_tick(engine.tick(config))
        >>> logger.print_stats()
        >>> logger.close()
    """

    def __init__(
        self,
        output_dir: Optional[str] = None,
        experiment_name: str = "experiment",
        window_size: int = 100
    ):
        """
        Initialize logger.

        Args:
            output_dir: Directory for the CSV tick log (no file if None)
            experiment_name: Name of experiment
            window_size: Size of rolling statistics window
        """
        self.experiment_name = experiment_name
        self.window_size = window_size
        self.output_dir = None
        if output_dir is not None:
            self.output_dir = Path(output_dir) / experiment_name
            self.output_dir.mkdir(parents=True, exist_ok=True)

        # Rolling statistics
        self.throughputs = RollingStats(window_size)
        self.jamming_intensities = RollingStats(window_size)
        self.sinrs_db = RollingStats(window_size)
        self.overlaps = RollingStats(window_size)
        self.hits = RollingStats(window_size)
        self.tx_rewards = RollingStats(window_size)
        self.jam_rewards = RollingStats(window_size)

        # Counters
        self.total_ticks = 0
        self.total_mutations = 0
        self.start_time = time.time()

        # CSV writer
        self._csv_file = None
        self._csv_writer = None
        if self.output_dir is not None:
            self._init_csv()

    def _init_csv(self):
        """Initialize CSV logging."""
        csv_path = self.output_dir / "tick_log.csv"
        self._csv_file = open(csv_path, "w", newline="")
        self._csv_writer = csv.DictWriter(self._csv_file, fieldnames=CSV_FIELDS)
        self._csv_writer.writeheader()

    def log_tick(self, outcome: TickOutcome):
        """
        Log one tick outcome.

        Args:
            outcome: Record returned by SimulationEngine.tick()
        """
        self.throughputs.add(outcome.throughput_mbps)
        self.jamming_intensities.add(outcome.jamming_intensity)
        self.sinrs_db.add(outcome.sinr_db)
        self.overlaps.add(outcome.overlap_factor)
        self.hits.add(1.0 if outcome.overlap_factor > 0 else 0.0)
        self.tx_rewards.add(outcome.tx_reward)
        self.jam_rewards.add(outcome.jam_reward)

        self.total_ticks += 1

        if self._csv_writer:
            self._csv_writer.writerow(self._to_record(outcome))
            self._csv_file.flush()

    def log_mutation(self):
        """Count an externally triggered jammer mutation."""
        self.total_mutations += 1

    def _to_record(self, outcome: TickOutcome) -> Dict[str, Any]:
        return {
            "tick": outcome.tick,
            "throughput_mbps": outcome.throughput_mbps,
            "jamming_intensity": outcome.jamming_intensity,
            "sinr_db": outcome.sinr_db,
            "overlap_factor": outcome.overlap_factor,
            "tx_reward": outcome.tx_reward,
            "jam_reward": outcome.jam_reward,
            "tx_action": describe_action(outcome.tx.action),
            "tx_bin": outcome.tx.bin,
            "jam_action": describe_action(outcome.jam.action),
            "jam_center": outcome.jam.center_bin,
            "jam_span": outcome.jam.span_bins,
            "time_elapsed": time.time() - self.start_time,
        }

    def get_stats(self) -> Dict[str, float]:
        """Get current rolling statistics."""
        return {
            "throughput_mean": self.throughputs.mean,
            "throughput_std": self.throughputs.std,
            "jamming_intensity_mean": self.jamming_intensities.mean,
            "sinr_db_mean": self.sinrs_db.mean,
            "overlap_mean": self.overlaps.mean,
            "hit_rate": self.hits.mean,
            "tx_reward_mean": self.tx_rewards.mean,
            "jam_reward_mean": self.jam_rewards.mean,
            "total_ticks": self.total_ticks,
            "total_mutations": self.total_mutations,
            "time_elapsed": time.time() - self.start_time
        }

    def print_stats(self, prefix: str = ""):
        """Print current statistics."""
        stats = self.get_stats()
        tps = self.total_ticks / max(stats["time_elapsed"], 1e-6)

        print(f"{prefix}Ticks: {self.total_ticks:,} | "
              f"Thr: {stats['throughput_mean']:.2f}+/-{stats['throughput_std']:.2f} Mbps | "
              f"J: {stats['jamming_intensity_mean']:.3f} | "
              f"Hit: {stats['hit_rate'] * 100:.1f}% | "
              f"R_tx: {stats['tx_reward_mean']:.2f} | "
              f"R_jam: {stats['jam_reward_mean']:.2f} | "
              f"TPS: {tps:.0f}")

    def close(self):
        """Close file handles."""
        if self._csv_file:
            self._csv_file.close()
            self._csv_file = None
            self._csv_writer = None

    def __del__(self):
        self.close()


def summarize_history(history: Sequence[TickOutcome]) -> Dict[str, float]:
    """
    Summary statistics over a sequence of outcomes.

    Args:
        history: Outcomes, e.g. SimulationEngine.get_history()

    Returns:
        Dict of means and the hit rate (0.0 for each if history is empty)
    """
    if len(history) == 0:
        return {
            "throughput_mean": 0.0,
            "jamming_intensity_mean": 0.0,
            "overlap_mean": 0.0,
            "hit_rate": 0.0,
        }
    return {
        "throughput_mean": float(np.mean([o.throughput_mbps for o in history])),
        "jamming_intensity_mean": float(np.mean([o.jamming_intensity for o in history])),
        "overlap_mean": float(np.mean([o.overlap_factor for o in history])),
        "hit_rate": sum(1 for o in history if o.overlap_factor > 0) / len(history),
    }
