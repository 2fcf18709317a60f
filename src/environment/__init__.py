"""
Environment Module
==================

Discrete action spaces and rewards for the transmitter/jammer contest.
    - action_space: Enumerated Tx and Jam action sets
    - reward: Transmitter and jammer reward terms
"""

from .action_space import (
    TxAction,
    JamAction,
    ActionSpace,
    build_tx_actions,
    build_jam_actions,
    describe_action,
    tx_action_space,
    jam_action_space,
    TX_ACTIONS,
    JAM_ACTIONS,
)
from .reward import RewardCalculator, RewardComponents

__all__ = [
    "TxAction",
    "JamAction",
    "ActionSpace",
    "build_tx_actions",
    "build_jam_actions",
    "describe_action",
    "tx_action_space",
    "jam_action_space",
    "TX_ACTIONS",
    "JAM_ACTIONS",
    "RewardCalculator",
    "RewardComponents",
]
