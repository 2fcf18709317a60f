"""
Tabular Agent Module
====================

Epsilon-greedy action selection and TD(0) value updates over a finite,
enumerated action space. Used for both the transmitter and the jammer.

Update Rule:
    Q[a] <- Q[a] + alpha * (r - Q[a])

Selection Rule:
    with probability epsilon: uniform random index
    otherwise:                argmax Q (lowest index wins ties)

The value table is a 1-D float64 array whose length is fixed when the agent
is built; every operation here mutates it in place and never resizes it.

Author: Spectrum Duel Team
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Optional


# =============================================================================
# VALUE TABLE OPERATIONS
# =============================================================================

def select_action(
    value_table: np.ndarray,
    exploration_rate: float,
    rng: np.random.RandomState
) -> int:
    """
    Epsilon-greedy action selection.

    Args:
        value_table: Per-action value estimates, shape (A,)
        exploration_rate: Probability of a uniformly random action
        rng: Random state

    Returns:
        Action index in [0, A)

    Note:
        np.argmax returns the first occurrence of the maximum, so greedy
        selection over ties is deterministic.
    """
    if rng.random_sample() < exploration_rate:
        return int(rng.randint(0, len(value_table)))
    return int(np.argmax(value_table))


def update(
    value_table: np.ndarray,
    index: int,
    reward: float,
    learning_rate: float
) -> None:
    """
    Incremental TD(0) update of a single entry, in place.

    Args:
        value_table: Per-action value estimates, shape (A,)
        index: Action index that was taken
        reward: Observed reward
        learning_rate: Step size alpha
    """
    value_table[index] += learning_rate * (reward - value_table[index])


def reinitialize(value_table: np.ndarray) -> None:
    """Zero every entry in place."""
    value_table.fill(0.0)


def perturb(
    value_table: np.ndarray,
    rng: np.random.RandomState,
    low: float = -2.0,
    high: float = 2.0
) -> None:
    """
    Overwrite every entry with a fresh uniform draw in [low, high), in place.

    Simulates an abrupt change of prior without resetting the simulation.
    """
    value_table[:] = rng.uniform(low, high, size=len(value_table))


# =============================================================================
# AGENT
# =============================================================================

@dataclass
class AgentPolicy:
    """Mutable learning state owned by a single agent."""
    value_table: np.ndarray
    exploration_rate: float = 0.1
    learning_rate: float = 0.1
    last_action_index: Optional[int] = field(default=None)


class TabularAgent:
    """
    Tabular epsilon-greedy agent over an enumerated action space.

    The agent does not know whether learning is frozen; the caller decides
    when to call learn() and which exploration rate to act with.

    Attributes:
        name: Label used in logs ("tx" or "jam")
        policy: Value table, rates and last action

    Example:
        >>> rng = np.random.RandomState(0)
        >>> agent = TabularAgent(num_actions=108, exploration_rate=0.08,
        ...                      learning_rate=0.18, name="tx")
        >>> idx = agent.act(rng)
        >>> agent.learn(idx, reward=3.2)
    """

    def __init__(
        self,
        num_actions: int,
        exploration_rate: float = 0.1,
        learning_rate: float = 0.1,
        name: str = "agent"
    ):
        """
        Initialize agent with a zeroed value table.

        Args:
            num_actions: Size of the action space (fixed for life)
            exploration_rate: Default epsilon
            learning_rate: Default alpha
            name: Label used in logs
        """
        self.name = name
        self.policy = AgentPolicy(
            value_table=np.zeros(num_actions, dtype=np.float64),
            exploration_rate=exploration_rate,
            learning_rate=learning_rate,
        )

    @property
    def value_table(self) -> np.ndarray:
        return self.policy.value_table

    @property
    def num_actions(self) -> int:
        return len(self.policy.value_table)

    def act(
        self,
        rng: np.random.RandomState,
        exploration_rate: Optional[float] = None
    ) -> int:
        """
        Select an action and remember it.

        Args:
            rng: Shared random state
            exploration_rate: Override for this call (policy epsilon if None)

        Returns:
            Selected action index
        """
        if exploration_rate is None:
            exploration_rate = self.policy.exploration_rate
        index = select_action(self.policy.value_table, exploration_rate, rng)
        self.policy.last_action_index = index
        return index

    def greedy_action(self) -> int:
        """Current best action (no exploration, no side effects)."""
        return int(np.argmax(self.policy.value_table))

    def learn(
        self,
        index: int,
        reward: float,
        learning_rate: Optional[float] = None
    ):
        """
        Move the value of an action towards an observed reward.

        Args:
            index: Action index taken
            reward: Observed reward
            learning_rate: Override for this call (policy alpha if None)
        """
        if learning_rate is None:
            learning_rate = self.policy.learning_rate
        update(self.policy.value_table, index, reward, learning_rate)

    def reset(self):
        """Zero the value table and forget the last action."""
        reinitialize(self.policy.value_table)
        self.policy.last_action_index = None

    def mutate(self, rng: np.random.RandomState):
        """Re-randomize the value table in place."""
        perturb(self.policy.value_table, rng)
