"""
Physics Module
==============

Channel and interference model for the transmitter/jammer link:
    - channel: Slot-to-bin mapping, triangular overlap, SINR and throughput
"""

from .channel import (
    BINS,
    db_to_linear,
    linear_to_db,
    resolve_frequency,
    compute_overlap,
    compute_spectrum_profile,
    PhysicalOutcome,
    evaluate,
)

__all__ = [
    "BINS",
    "db_to_linear",
    "linear_to_db",
    "resolve_frequency",
    "compute_overlap",
    "compute_spectrum_profile",
    "PhysicalOutcome",
    "evaluate",
]
