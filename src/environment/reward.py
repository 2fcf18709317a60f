"""
Reward Calculator Module
========================

Computes the scalar rewards of the transmitter and the jammer from a
resolved physical link outcome.

Reward Terms:
    Transmitter:
        R_tx  = throughput - w_power * P_tx - w_overlap * overlap
    Jammer:
        R_jam = jamming_intensity * P_jam - w_throughput * throughput

The overlap penalty (6) dominates the power cost (0.02), which biases the
transmitter towards frequency evasion over raw throughput. The weights are
empirically tuned constants.

Author: Spectrum Duel Team
"""

from typing import Dict, NamedTuple, TYPE_CHECKING

if TYPE_CHECKING:
    from physics.channel import PhysicalOutcome


class RewardComponents(NamedTuple):
    """Container for individual reward components."""
    throughput: float
    power_cost: float
    overlap_penalty: float
    jamming_gain: float
    throughput_penalty: float
    tx_total: float
    jam_total: float


class RewardCalculator:
    """
    Calculates rewards for the transmitter and jammer agents.

    Attributes:
        tx_power_weight: Transmitter power cost per unit power (default: 0.02)
        overlap_weight: Transmitter spectral overlap penalty (default: 6.0)
        throughput_weight: Jammer penalty per residual Mbps (default: 0.08)

    Example:
        >>> calculator = RewardCalculator()
        >>> components = calculator.compute(outcome)
        >>> components.tx_total, components.jam_total
    """

    def __init__(
        self,
        tx_power_weight: float = 0.02,
        overlap_weight: float = 6.0,
        throughput_weight: float = 0.08
    ):
        """
        Initialize reward calculator.

        Args:
            tx_power_weight: Weight for transmitter power cost
            overlap_weight: Weight for spectral overlap penalty
            throughput_weight: Weight for jammer's throughput penalty
        """
        self.tx_power_weight = tx_power_weight
        self.overlap_weight = overlap_weight
        self.throughput_weight = throughput_weight

    def tx_reward(self, outcome: "PhysicalOutcome") -> float:
        """Transmitter reward: throughput minus power and overlap penalties."""
        return (
            outcome.throughput_mbps
            - self.tx_power_weight * outcome.tx_power
            - self.overlap_weight * outcome.overlap_factor
        )

    def jam_reward(self, outcome: "PhysicalOutcome") -> float:
        """Jammer reward: power-weighted denial minus residual throughput."""
        return (
            outcome.jamming_intensity * outcome.jam_power
            - self.throughput_weight * outcome.throughput_mbps
        )

    def compute(self, outcome: "PhysicalOutcome") -> RewardComponents:
        """
        Compute both rewards and their breakdown.

        Args:
            outcome: Resolved physical outcome of the tick

        Returns:
            RewardComponents with raw terms and both totals
        """
        return RewardComponents(
            throughput=outcome.throughput_mbps,
            power_cost=outcome.tx_power,
            overlap_penalty=outcome.overlap_factor,
            jamming_gain=outcome.jamming_intensity * outcome.jam_power,
            throughput_penalty=outcome.throughput_mbps,
            tx_total=self.tx_reward(outcome),
            jam_total=self.jam_reward(outcome),
        )

    def get_reward_breakdown(
        self,
        components: RewardComponents
    ) -> Dict[str, float]:
        """
        Get human-readable reward breakdown.

        Returns dict with component names and weighted values.
        """
        return {
            "tx_throughput": components.throughput,
            "tx_power_cost": -self.tx_power_weight * components.power_cost,
            "tx_overlap_penalty": -self.overlap_weight * components.overlap_penalty,
            "tx_total": components.tx_total,
            "jam_gain": components.jamming_gain,
            "jam_throughput_penalty": -self.throughput_weight * components.throughput_penalty,
            "jam_total": components.jam_total,
        }
