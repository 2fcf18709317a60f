"""
Simulation Module
=================

Tick engine and run infrastructure for the spectrum contest.

Components:
    - config: Per-tick environment configuration and presets
    - engine: SimulationEngine (reset / tick / mutate_jammer / history)
    - metrics: Rolling statistics and CSV tick logging

Example:
    >>> from simulation import SimulationEngine, EnvironmentConfig
    >>> engine = SimulationEngine(seed=0)
    >>> config = EnvironmentConfig()
    >>> engine.reset(config)
    >>> outcome = engine.tick(config)
"""

from .config import (
    EnvironmentConfig,
    get_default_config,
    get_static_jammer_config,
    get_frozen_config,
    get_preset,
)

from .engine import (
    SimulationEngine,
    TickOutcome,
    ResolvedTxAction,
    ResolvedJamAction,
    EngineNotResetError,
    HISTORY_POINTS,
)

from .metrics import (
    MetricsLogger,
    RollingStats,
    summarize_history,
)

__all__ = [
    # Config
    "EnvironmentConfig",
    "get_default_config",
    "get_static_jammer_config",
    "get_frozen_config",
    "get_preset",
    # Engine
    "SimulationEngine",
    "TickOutcome",
    "ResolvedTxAction",
    "ResolvedJamAction",
    "EngineNotResetError",
    "HISTORY_POINTS",
    # Metrics
    "MetricsLogger",
    "RollingStats",
    "summarize_history",
]
