"""
Simulation Engine Module
========================

Tick-driven contest between a learning transmitter and a jammer.

Each tick:
    1. Transmitter selects an action (epsilon-greedy, epsilon = 0 if frozen)
    2. Jammer selects an action (epsilon-greedy if adaptive, else uniform)
    3. Channel model resolves the physical outcome
    4. Reward calculator scores both agents
    5. Value tables are updated (unless learning is frozen; the jammer
       only learns when adaptive)
    6. A TickOutcome is appended to a bounded history

The engine is synchronous and single-threaded. Pacing (e.g. one tick every
350 ms) and pause/resume belong to the caller; callers driving ticks from
several threads must serialize access themselves.

All randomness (exploration, the random jammer, mutation) is drawn from one
np.random.RandomState owned by the engine, so a fixed seed reproduces a run
bit for bit.

Author: Spectrum Duel Team
"""

import numpy as np
from collections import deque
from typing import Any, Deque, Dict, List, NamedTuple, Optional, Tuple

from environment.action_space import (
    ActionSpace,
    JamAction,
    TxAction,
    jam_action_space,
    tx_action_space,
)
from environment.reward import RewardCalculator
from physics.channel import evaluate
from agents.tabular_agent import TabularAgent

from .config import (
    EnvironmentConfig,
    JAM_EXPLORATION_RATE,
    JAM_LEARNING_RATE,
)


# Default history capacity (ticks)
HISTORY_POINTS = 180


class EngineNotResetError(RuntimeError):
    """Raised when the engine is driven before reset() was called."""


class ResolvedTxAction(NamedTuple):
    """Transmitter action together with the bin it landed on."""
    action: TxAction
    index: int
    bin: int


class ResolvedJamAction(NamedTuple):
    """Jammer action together with its resolved center and clamped span."""
    action: JamAction
    index: int
    center_bin: int
    span_bins: int


class TickOutcome(NamedTuple):
    """Immutable record of one simulation tick."""
    tick: int
    throughput_mbps: float
    jamming_intensity: float
    sinr_db: float
    overlap_factor: float
    tx: ResolvedTxAction
    jam: ResolvedJamAction
    tx_reward: float
    jam_reward: float


class SimulationEngine:
    """
    Adversarial spectrum simulation engine.

    The engine owns both agents, the tick counter, the history buffer and
    the random source. Callers pass an EnvironmentConfig in on every tick
    and read TickOutcome records out.

    Attributes:
        tx_space: Transmitter action space
        jam_space: Jammer action space
        tx_agent: Transmitter agent (rates follow the per-tick config)
        jam_agent: Jammer agent (fixed rates)
        tick_count: Number of ticks since the last reset
        history_size: History capacity

    Example:
        >>> engine = SimulationEngine(seed=7)
        >>> config = EnvironmentConfig()
        >>> engine.reset(config)
        >>> outcome = engine.tick(config)
        >>> outcome.tick
        0
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        rng: Optional[np.random.RandomState] = None,
        history_size: int = HISTORY_POINTS,
        reward_calculator: Optional[RewardCalculator] = None,
        debug_mode: bool = False
    ):
        """
        Initialize engine. Call reset() before the first tick.

        Args:
            seed: Seed for a fresh random state (ignored if rng is given)
            rng: Injected random state shared by all stochastic choices
            history_size: Maximum number of TickOutcome records kept
            reward_calculator: Reward weights (defaults if None)
            debug_mode: Print per-tick diagnostics
        """
        self._rng = rng if rng is not None else np.random.RandomState(seed)
        self.history_size = history_size
        self.reward_calculator = reward_calculator or RewardCalculator()
        self.debug_mode = debug_mode

        self.tx_space: ActionSpace = tx_action_space()
        self.jam_space: ActionSpace = jam_action_space()

        config = EnvironmentConfig()
        self.tx_agent = TabularAgent(
            len(self.tx_space),
            exploration_rate=config.exploration_rate,
            learning_rate=config.learning_rate,
            name="tx",
        )
        self.jam_agent = TabularAgent(
            len(self.jam_space),
            exploration_rate=JAM_EXPLORATION_RATE,
            learning_rate=JAM_LEARNING_RATE,
            name="jam",
        )

        self.config = config
        self.tick_count = 0
        self._history: Deque[TickOutcome] = deque(maxlen=history_size)
        self._is_reset = False

    # =========================================================================
    # PUBLIC INTERFACE
    # =========================================================================

    def seed(self, seed: Optional[int] = None):
        """Replace the random source with a freshly seeded one."""
        self._rng = np.random.RandomState(seed)

    def reset(self, config: Optional[EnvironmentConfig] = None):
        """
        Reinitialize tick counter, both value tables and the history.

        Args:
            config: Configuration to report in snapshots until the next tick
        """
        if config is not None:
            self.config = config
        self.tick_count = 0
        self.tx_agent.reset()
        self.jam_agent.reset()
        self._history.clear()
        self._is_reset = True

        if self.debug_mode:
            print(f"  [Reset] tx_actions={len(self.tx_space)}, "
                  f"jam_actions={len(self.jam_space)}, history_size={self.history_size}")

    def tick(self, config: EnvironmentConfig) -> TickOutcome:
        """
        Advance the simulation by one step.

        Args:
            config: Environment configuration for this tick (not mutated)

        Returns:
            The TickOutcome appended to history

        Raises:
            EngineNotResetError: If reset() has not been called
        """
        self._require_reset("tick")
        self.config = config

        frozen = config.learning_frozen
        self.tx_agent.policy.exploration_rate = config.exploration_rate
        self.tx_agent.policy.learning_rate = config.learning_rate

        # Action selection; frozen agents act greedily
        tx_idx = self.tx_agent.act(self._rng, 0.0 if frozen else None)
        if config.jammer_adaptive:
            jam_idx = self.jam_agent.act(self._rng, 0.0 if frozen else None)
        else:
            jam_idx = self.jam_space.sample(self._rng)
            self.jam_agent.policy.last_action_index = jam_idx

        tx_action = self.tx_space[tx_idx]
        jam_action = self.jam_space[jam_idx]

        physical = evaluate(tx_action, jam_action, config)
        rewards = self.reward_calculator.compute(physical)

        if not frozen:
            self.tx_agent.learn(tx_idx, rewards.tx_total)
            if config.jammer_adaptive:
                self.jam_agent.learn(jam_idx, rewards.jam_total)

        outcome = TickOutcome(
            tick=self.tick_count,
            throughput_mbps=physical.throughput_mbps,
            jamming_intensity=physical.jamming_intensity,
            sinr_db=physical.sinr_db,
            overlap_factor=physical.overlap_factor,
            tx=ResolvedTxAction(tx_action, tx_idx, physical.tx_bin),
            jam=ResolvedJamAction(
                jam_action, jam_idx, physical.jam_center, physical.span_bins
            ),
            tx_reward=rewards.tx_total,
            jam_reward=rewards.jam_total,
        )
        # deque(maxlen) evicts the oldest record once full
        self._history.append(outcome)
        self.tick_count += 1

        if self.debug_mode:
            print(f"    [Tick {outcome.tick}] tx={self.tx_space.describe(tx_idx)} "
                  f"(bin {physical.tx_bin}), jam={self.jam_space.describe(jam_idx)} "
                  f"(center {physical.jam_center}, span {physical.span_bins})")
            print(f"      thr={physical.throughput_mbps:.2f} Mbps, "
                  f"J={physical.jamming_intensity:.3f}, overlap={physical.overlap_factor:.2f}, "
                  f"R_tx={rewards.tx_total:.3f}, R_jam={rewards.jam_total:.3f}")

        return outcome

    def mutate_jammer(self):
        """
        Re-randomize the jammer's value table in place.

        Raises:
            EngineNotResetError: If reset() has not been called
        """
        self._require_reset("mutate_jammer")
        self.jam_agent.mutate(self._rng)

        if self.debug_mode:
            print(f"  [Mutate] jammer prior re-drawn, greedy="
                  f"{self.jam_space.describe(self.jam_agent.greedy_action())}")

    def get_history(self) -> Tuple[TickOutcome, ...]:
        """Read-only snapshot of the history, oldest first."""
        return tuple(self._history)

    def get_latest(self) -> Optional[TickOutcome]:
        """Most recent outcome, or None before the first tick."""
        if not self._history:
            return None
        return self._history[-1]

    def recent(self, n: int = 20) -> List[TickOutcome]:
        """Last n outcomes, newest first."""
        if n <= 0:
            return []
        return list(reversed(self._history))[:n]

    def greedy_actions(self) -> Tuple[int, int]:
        """Current best (tx, jam) action indices."""
        return self.tx_agent.greedy_action(), self.jam_agent.greedy_action()

    def snapshot(self) -> Dict[str, Any]:
        """
        Get a plain-dict view of the public engine state.

        Returns:
            Dict with tick counter, latest outcome, learning status, agent
            rates and each agent's current greedy action
        """
        tx_best, jam_best = self.greedy_actions()
        return {
            "tick": self.tick_count,
            "latest": self.get_latest(),
            "learning": "Frozen" if self.config.learning_frozen else "Updating",
            "jammer_adaptive": self.config.jammer_adaptive,
            "tx": {
                "exploration_rate": self.tx_agent.policy.exploration_rate,
                "learning_rate": self.tx_agent.policy.learning_rate,
                "greedy_index": tx_best,
                "greedy_action": self.tx_space.describe(tx_best),
            },
            "jam": {
                "exploration_rate": self.jam_agent.policy.exploration_rate,
                "learning_rate": self.jam_agent.policy.learning_rate,
                "greedy_index": jam_best,
                "greedy_action": self.jam_space.describe(jam_best),
            },
        }

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _require_reset(self, operation: str):
        if not self._is_reset:
            raise EngineNotResetError(
                f"{operation}() called before reset(); call reset(config) first"
            )


# =============================================================================
# VERIFICATION
# =============================================================================

def verify_engine() -> dict:
    """Run verification tests."""
    results = {}
    config = EnvironmentConfig()

    # Test 1: Tick counter and history growth
    engine = SimulationEngine(seed=42)
    engine.reset(config)
    for _ in range(5):
        engine.tick(config)
    ticks = [o.tick for o in engine.get_history()]

    results["test_tick_sequence"] = {
        "ticks": ticks,
        "pass": ticks == [0, 1, 2, 3, 4]
    }

    # Test 2: Bounded history
    engine = SimulationEngine(seed=42, history_size=10)
    engine.reset(config)
    for _ in range(25):
        engine.tick(config)
    history = engine.get_history()

    results["test_bounded_history"] = {
        "length": len(history),
        "first_tick": history[0].tick,
        "pass": len(history) == 10 and history[0].tick == 15
    }

    # Test 3: Frozen learning leaves tables untouched
    frozen = EnvironmentConfig(learning_frozen=True)
    engine = SimulationEngine(seed=42)
    engine.reset(frozen)
    engine.mutate_jammer()
    before_tx = engine.tx_agent.value_table.copy()
    before_jam = engine.jam_agent.value_table.copy()
    for _ in range(20):
        engine.tick(frozen)

    results["test_frozen"] = {
        "pass": (np.array_equal(before_tx, engine.tx_agent.value_table)
                 and np.array_equal(before_jam, engine.jam_agent.value_table))
    }

    # Test 4: Reproducibility under a fixed seed
    runs = []
    for _ in range(2):
        engine = SimulationEngine(seed=123)
        engine.reset(config)
        runs.append([engine.tick(config) for _ in range(30)])

    results["test_reproducible"] = {
        "pass": runs[0] == runs[1]
    }

    return results


if __name__ == "__main__":
    print("=" * 60)
    print("Simulation Engine Verification")
    print("=" * 60)

    results = verify_engine()

    all_passed = True
    for test_name, result in results.items():
        print(f"\n{test_name}:")
        for k, v in result.items():
            print(f"  {k}: {v}")
        if not result.get("pass", False):
            all_passed = False

    print("\n" + "=" * 60)
    print("PASSED" if all_passed else "FAILED")
    print("=" * 60)
