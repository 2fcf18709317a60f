"""
Action Space Module
===================

Enumerates the finite discrete action sets of the transmitter and the jammer.

Action Sets:
    Transmitter: frequency slot x modulation x power level  (12 * 3 * 3 = 108)
    Jammer:      frequency slot x span       x power level  (12 * 4 * 3 = 144)

Enumeration order is slot (outer), then modulation/span (middle), then power
(inner). An action is identified by its position in the built sequence, so
the order must never change.

Author: Spectrum Duel Team
"""

import numpy as np
from typing import Iterator, NamedTuple, Optional, Sequence, Tuple, Union

from gymnasium import spaces


# =============================================================================
# ACTION CONSTANTS
# =============================================================================

# Discrete hopping choices across the channel
TX_FREQ_SLOTS = 12

# Modulation schemes and their integer spectral-efficiency multipliers
MODULATIONS = ("BPSK", "QPSK", "16QAM")
MODULATION_EFFICIENCY = {
    "BPSK": 1,
    "QPSK": 2,
    "16QAM": 4,
}

# Fractions of the configured maximum power
TX_POWER_LEVELS = (0.45, 0.72, 1.0)
JAM_POWER_LEVELS = (0.35, 0.65, 1.0)

# Jammer bandwidth choices, in frequency bins
JAM_SPANS = (2, 4, 8, 12)


class TxAction(NamedTuple):
    """Transmitter action: where to hop, how to modulate, how loud."""
    freq_slot: int
    modulation: str
    power_level: float

    @property
    def efficiency(self) -> int:
        """Spectral-efficiency multiplier of the modulation."""
        return MODULATION_EFFICIENCY[self.modulation]


class JamAction(NamedTuple):
    """Jammer action: center slot, span in bins, power fraction."""
    freq_slot: int
    span: int
    power_level: float


# =============================================================================
# BUILDERS
# =============================================================================

def build_tx_actions(
    num_slots: int = TX_FREQ_SLOTS,
    modulations: Sequence[str] = MODULATIONS,
    power_levels: Sequence[float] = TX_POWER_LEVELS
) -> Tuple[TxAction, ...]:
    """
    Build the full transmitter action set.

    Args:
        num_slots: Number of frequency slots
        modulations: Modulation scheme names
        power_levels: Power fractions in (0, 1]

    Returns:
        Tuple of TxAction, slot outer, modulation middle, power inner

    Example:
        >>> actions = build_tx_actions()
        >>> len(actions)
        108
        >>> actions[0]
        TxAction(freq_slot=0, modulation='BPSK', power_level=0.45)
    """
    return tuple(
        TxAction(slot, mod, power)
        for slot in range(num_slots)
        for mod in modulations
        for power in power_levels
    )


def build_jam_actions(
    num_slots: int = TX_FREQ_SLOTS,
    spans: Sequence[int] = JAM_SPANS,
    power_levels: Sequence[float] = JAM_POWER_LEVELS
) -> Tuple[JamAction, ...]:
    """
    Build the full jammer action set.

    Args:
        num_slots: Number of frequency slots
        spans: Span widths in bins
        power_levels: Power fractions in (0, 1]

    Returns:
        Tuple of JamAction, slot outer, span middle, power inner
    """
    return tuple(
        JamAction(slot, span, power)
        for slot in range(num_slots)
        for span in spans
        for power in power_levels
    )


# Built once at import; read-only thereafter
TX_ACTIONS = build_tx_actions()
JAM_ACTIONS = build_jam_actions()


class ActionSpace:
    """
    Read-only indexed view over an enumerated action set.

    Attributes:
        actions: The enumerated actions, identified by position
        name: Short label used in summaries ("tx" or "jam")

    Example:
        >>> space = ActionSpace(TX_ACTIONS, name="tx")
        >>> len(space)
        108
        >>> space.describe(4)
        'f0 | QPSK | 72% P'
    """

    def __init__(
        self,
        actions: Sequence[Union[TxAction, JamAction]],
        name: str = ""
    ):
        self.actions = tuple(actions)
        self.name = name

    def __len__(self) -> int:
        return len(self.actions)

    def __getitem__(self, index: int) -> Union[TxAction, JamAction]:
        return self.actions[index]

    def __iter__(self) -> Iterator[Union[TxAction, JamAction]]:
        return iter(self.actions)

    def get_action_space(self) -> spaces.Discrete:
        """
        Get Gymnasium action space matching this action set.

        Returns:
            Discrete space over [0, len(self))
        """
        return spaces.Discrete(len(self.actions))

    def sample(self, rng: Optional[np.random.RandomState] = None) -> int:
        """
        Sample a uniformly random action index.

        Args:
            rng: Random state (fresh unseeded state if None)

        Returns:
            Action index in [0, len(self))
        """
        if rng is None:
            rng = np.random.RandomState()
        return int(rng.randint(0, len(self.actions)))

    def index_of(self, action: Union[TxAction, JamAction]) -> int:
        """Position of an action in the enumeration."""
        return self.actions.index(action)

    def describe(self, index: int) -> str:
        """
        Get human-readable action label.

        Args:
            index: Action index

        Returns:
            e.g. "f3 | QPSK | 72% P" or "f5 | span 8 | 65% P"
        """
        return describe_action(self.actions[index])


def describe_action(action: Union[TxAction, JamAction]) -> str:
    """Format an action the way the timeline shows it."""
    power_pct = int(round(action.power_level * 100))
    if isinstance(action, TxAction):
        return f"f{action.freq_slot} | {action.modulation} | {power_pct}% P"
    return f"f{action.freq_slot} | span {action.span} | {power_pct}% P"


def tx_action_space() -> ActionSpace:
    """Transmitter action space over TX_ACTIONS."""
    return ActionSpace(TX_ACTIONS, name="tx")


def jam_action_space() -> ActionSpace:
    """Jammer action space over JAM_ACTIONS."""
    return ActionSpace(JAM_ACTIONS, name="jam")
