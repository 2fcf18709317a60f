"""
Simulation Configuration Module
===============================

Environment configuration supplied to the engine on every tick.

The engine treats a config as read-only input. Configs are frozen
dataclasses; presets derive variants with dataclasses.replace().

Author: Spectrum Duel Team
"""

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict
import json
from pathlib import Path


# Jammer learning parameters (not exposed as per-tick controls)
JAM_EXPLORATION_RATE = 0.12
JAM_LEARNING_RATE = 0.14


@dataclass(frozen=True)
class EnvironmentConfig:
    """Physical link and learning controls for one tick."""

    # Link budget
    snr_db: float = 15.0            # Transmitter SNR before interference (dB)
    bandwidth_mhz: float = 10.0     # Channel bandwidth (MHz)
    noise_density: float = 1e-7     # Noise power spectral density (mW/Hz)

    # Power and span limits
    jam_max_power: float = 50.0     # Jammer full-scale power
    jam_max_span: int = 12          # Widest span the jammer may use (bins)
    tx_max_power: float = 1.0       # Transmitter full-scale power

    # Transmitter learning
    learning_rate: float = 0.18     # TD step size alpha
    exploration_rate: float = 0.08  # Epsilon

    # Switches
    learning_frozen: bool = False   # Greedy acting, no value updates
    jammer_adaptive: bool = True    # False: jammer acts uniformly at random

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EnvironmentConfig":
        """
        Build a config from a dictionary.

        Missing keys keep their defaults.

        Raises:
            ValueError: If the dictionary holds unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys {unknown}. Must be in {sorted(known)}")
        return cls(**data)

    @classmethod
    def load(cls, path: str) -> "EnvironmentConfig":
        """Load configuration from JSON."""
        with open(Path(path), "r") as f:
            data = json.load(f)
        return cls.from_dict(data)


# =============================================================================
# PRESETS
# =============================================================================

def get_default_config() -> EnvironmentConfig:
    """Adaptive transmitter against an adaptive jammer."""
    return EnvironmentConfig()


def get_static_jammer_config() -> EnvironmentConfig:
    """Jammer stops learning and hops uniformly at random."""
    return replace(EnvironmentConfig(), jammer_adaptive=False)


def get_frozen_config() -> EnvironmentConfig:
    """Both agents act greedily on their current tables; nothing learns."""
    return replace(EnvironmentConfig(), learning_frozen=True)


PRESETS = {
    "default": get_default_config,
    "static-jammer": get_static_jammer_config,
    "frozen": get_frozen_config,
}


def get_preset(name: str) -> EnvironmentConfig:
    """
    Look up a configuration preset by name.

    Raises:
        ValueError: If the preset is unknown
    """
    if name not in PRESETS:
        raise ValueError(f"Invalid preset {name!r}. Must be in {list(PRESETS)}")
    return PRESETS[name]()
