"""
Channel Model Module
====================

Maps a (transmitter action, jammer action, environment) triple to physical
link outcomes: bin overlap, interference, SINR, throughput and jamming
intensity.

Link Budget:
    P_tx   = tx_max_power  * tx_action.power_level
    P_jam  = jam_max_power * jam_action.power_level
    N      = noise_density * bandwidth_Hz
    I      = P_jam * overlap(tx_bin, jam_center, span)
    S      = P_tx * SNR_lin * modulation_efficiency

    SINR       = S / (N + I + 1)
    Throughput = bandwidth_MHz * log2(1 + SINR)          [Mbps]
    Jamming    = I / (I + N + 1)                         in [0, 1)

The "+1" terms are a stabilizing floor: neither ratio can blow up when noise
and interference are both near zero.

All functions are pure. Out-of-range configuration (e.g. negative bandwidth)
is not rejected and yields degenerate numbers rather than exceptions.

Author: Spectrum Duel Team
"""

import numpy as np
from typing import NamedTuple, TYPE_CHECKING

from environment.action_space import TxAction, JamAction, TX_FREQ_SLOTS

if TYPE_CHECKING:
    from simulation.config import EnvironmentConfig


# =============================================================================
# CHANNEL CONSTANTS
# =============================================================================

# Frequency bins over the channel
BINS = 48


# =============================================================================
# UNIT CONVERSION FUNCTIONS
# =============================================================================

def db_to_linear(value_db: float) -> float:
    """
    Convert a power ratio from dB to linear scale.

    Example:
        >>> db_to_linear(10.0)
        10.0
    """
    return 10 ** (value_db / 10)


def linear_to_db(value: float) -> float:
    """
    Convert a linear power ratio to dB.

    Non-positive input maps to -inf/nan instead of raising.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(10 * np.log10(value))


# =============================================================================
# FREQUENCY MAPPING
# =============================================================================

def resolve_frequency(
    slot: int,
    num_slots: int = TX_FREQ_SLOTS,
    bins: int = BINS
) -> int:
    """
    Map a discrete frequency slot to a channel bin.

    The bins are split evenly into per-slot segments and the midpoint bin of
    the segment is returned, clamped to the last bin.

    Args:
        slot: Frequency slot index
        num_slots: Number of slots sharing the channel
        bins: Total number of bins

    Returns:
        Bin index in [0, bins - 1]

    Example:
        >>> resolve_frequency(0)   # 48 bins / 12 slots = 4 bins per slot
        2
        >>> resolve_frequency(5)
        22
    """
    bins_per_slot = bins // num_slots
    base = slot * bins_per_slot
    return min(bins - 1, base + bins_per_slot // 2)


def compute_overlap(
    tx_bin: int,
    jam_center: int,
    span_bins: int,
    bins: int = BINS
) -> float:
    """
    Compute triangular overlap weight between transmitter and jammer.

    The jammer covers [center - span//2, center + span//2], clipped to the
    channel. Inside that window the weight decays linearly from 1 at the
    center towards 0 at the edges:

        overlap = max(0, 1 - (|tx_bin - center| + 1) / (span//2 + 1))

    Args:
        tx_bin: Transmitter bin
        jam_center: Jammer center bin
        span_bins: Jammer span in bins
        bins: Total number of bins

    Returns:
        Overlap factor in [0, 1]

    Note:
        The center bin scores 1 - 1/(half + 1), the peak of the window.
        The weight approaches 1 only as the span grows.
    """
    half = span_bins // 2
    start = max(0, jam_center - half)
    end = min(bins - 1, jam_center + half)

    if tx_bin < start or tx_bin > end:
        return 0.0

    dist = abs(tx_bin - jam_center) + 1
    return max(0.0, 1.0 - dist / (half + 1))


def compute_spectrum_profile(
    jam_center: int,
    span_bins: int,
    bins: int = BINS
) -> np.ndarray:
    """
    Compute the jammer's overlap weight in every channel bin.

    Args:
        jam_center: Jammer center bin
        span_bins: Jammer span in bins
        bins: Total number of bins

    Returns:
        Array of shape (bins,) with values in [0, 1]
    """
    half = span_bins // 2
    start = max(0, jam_center - half)
    end = min(bins - 1, jam_center + half)

    idx = np.arange(bins)
    weights = 1.0 - (np.abs(idx - jam_center) + 1) / (half + 1)
    weights = np.maximum(weights, 0.0)

    # Zero outside the (clipped) jamming window
    inside = (idx >= start) & (idx <= end)
    return np.where(inside, weights, 0.0)


# =============================================================================
# LINK EVALUATION
# =============================================================================

class PhysicalOutcome(NamedTuple):
    """Resolved physical quantities for one Tx/Jam action pair."""
    tx_bin: int
    jam_center: int
    span_bins: int
    tx_power: float
    jam_power: float
    noise_power: float
    overlap_factor: float
    interference: float
    signal: float
    sinr: float
    sinr_db: float
    spectral_efficiency: float
    throughput_mbps: float
    jamming_intensity: float


def evaluate(
    tx_action: TxAction,
    jam_action: JamAction,
    cfg: "EnvironmentConfig"
) -> PhysicalOutcome:
    """
    Evaluate the link for one transmitter/jammer action pair.

    Args:
        tx_action: Transmitter action
        jam_action: Jammer action
        cfg: Environment configuration (read only)

    Returns:
        PhysicalOutcome with all intermediate and final link quantities
    """
    # Map to physical values
    tx_bin = resolve_frequency(tx_action.freq_slot)
    jam_center = resolve_frequency(jam_action.freq_slot)
    span_bins = min(jam_action.span, cfg.jam_max_span)

    snr_lin = db_to_linear(cfg.snr_db)
    bandwidth_hz = cfg.bandwidth_mhz * 1e6
    noise_power = cfg.noise_density * bandwidth_hz
    tx_power = cfg.tx_max_power * tx_action.power_level
    jam_power = cfg.jam_max_power * jam_action.power_level

    overlap_factor = compute_overlap(tx_bin, jam_center, span_bins)
    interference = jam_power * overlap_factor
    signal = tx_power * snr_lin * tx_action.efficiency

    # Degenerate configs give inf/nan instead of raising
    with np.errstate(divide="ignore", invalid="ignore"):
        sinr = float(np.float64(signal) / (noise_power + interference + 1))
        spectral_efficiency = float(np.log2(1 + sinr))
        jamming_intensity = float(
            np.float64(interference) / (interference + noise_power + 1)
        )

    throughput_mbps = (bandwidth_hz / 1e6) * spectral_efficiency

    return PhysicalOutcome(
        tx_bin=tx_bin,
        jam_center=jam_center,
        span_bins=span_bins,
        tx_power=tx_power,
        jam_power=jam_power,
        noise_power=noise_power,
        overlap_factor=overlap_factor,
        interference=interference,
        signal=signal,
        sinr=sinr,
        sinr_db=linear_to_db(sinr),
        spectral_efficiency=spectral_efficiency,
        throughput_mbps=throughput_mbps,
        jamming_intensity=jamming_intensity,
    )
