"""
Agents Module
=============

Tabular reinforcement-learning agents for the spectrum contest.
    - tabular_agent: Epsilon-greedy selection with TD(0) value updates
"""

from .tabular_agent import (
    AgentPolicy,
    TabularAgent,
    select_action,
    update,
    reinitialize,
    perturb,
)

__all__ = [
    "AgentPolicy",
    "TabularAgent",
    "select_action",
    "update",
    "reinitialize",
    "perturb",
]
