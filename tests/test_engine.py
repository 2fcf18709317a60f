"""
Test Suite for Simulation Engine Module
=======================================

Tests for src/simulation/engine.py

Author: Spectrum Duel Team
"""

import pytest
import numpy as np
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from simulation.engine import (
    SimulationEngine,
    TickOutcome,
    EngineNotResetError,
    HISTORY_POINTS,
    verify_engine,
)
from simulation.config import EnvironmentConfig
from physics.channel import resolve_frequency


class TestEngineLifecycle:
    """Tests for reset/tick preconditions and counters."""

    def test_tick_before_reset_raises(self):
        """Driving the engine before reset is a precondition violation."""
        engine = SimulationEngine(seed=0)

        with pytest.raises(EngineNotResetError):
            engine.tick(EnvironmentConfig())

    def test_mutate_before_reset_raises(self):
        """Mutation before reset is a precondition violation."""
        engine = SimulationEngine(seed=0)

        with pytest.raises(EngineNotResetError):
            engine.mutate_jammer()

    def test_not_reset_error_is_runtime_error(self):
        """Error type is a RuntimeError subclass."""
        assert issubclass(EngineNotResetError, RuntimeError)

    def test_reset_initial_state(self):
        """Reset gives tick 0, empty history, zeroed tables."""
        engine = SimulationEngine(seed=0)
        engine.reset(EnvironmentConfig())

        assert engine.tick_count == 0
        assert engine.get_history() == ()
        assert engine.get_latest() is None
        assert np.array_equal(engine.tx_agent.value_table, np.zeros(108))
        assert np.array_equal(engine.jam_agent.value_table, np.zeros(144))

    def test_tick_returns_outcome(self):
        """tick() returns the record it appended."""
        engine = SimulationEngine(seed=0)
        config = EnvironmentConfig()
        engine.reset(config)

        outcome = engine.tick(config)

        assert isinstance(outcome, TickOutcome)
        assert outcome.tick == 0
        assert engine.get_latest() == outcome
        assert engine.tick_count == 1

    def test_ticks_strictly_increasing(self):
        """Tick numbers increase by one from zero."""
        engine = SimulationEngine(seed=0)
        config = EnvironmentConfig()
        engine.reset(config)

        for _ in range(12):
            engine.tick(config)

        assert [o.tick for o in engine.get_history()] == list(range(12))

    def test_reset_restarts_counter_and_clears(self):
        """Reset after running starts over from tick 0."""
        engine = SimulationEngine(seed=0)
        config = EnvironmentConfig()
        engine.reset(config)
        for _ in range(10):
            engine.tick(config)

        engine.reset(config)

        assert engine.tick_count == 0
        assert engine.get_history() == ()
        assert np.array_equal(engine.tx_agent.value_table, np.zeros(108))
        assert np.array_equal(engine.jam_agent.value_table, np.zeros(144))
        assert engine.tick(config).tick == 0

    def test_table_sizes_never_change(self):
        """Value tables keep their length through ticks, mutation and reset."""
        engine = SimulationEngine(seed=0)
        config = EnvironmentConfig()
        engine.reset(config)

        for i in range(50):
            engine.tick(config)
            if i % 10 == 0:
                engine.mutate_jammer()
        engine.reset(config)

        assert len(engine.tx_agent.value_table) == 108
        assert len(engine.jam_agent.value_table) == 144


class TestHistory:
    """Tests for the bounded history buffer."""

    def test_default_capacity(self):
        """Default capacity matches HISTORY_POINTS."""
        engine = SimulationEngine(seed=0)

        assert engine.history_size == HISTORY_POINTS == 180

    def test_capacity_never_exceeded(self):
        """Oldest records are evicted, order preserved."""
        engine = SimulationEngine(seed=0, history_size=10)
        config = EnvironmentConfig()
        engine.reset(config)

        for _ in range(10 + 7):
            engine.tick(config)
            assert len(engine.get_history()) <= 10

        ticks = [o.tick for o in engine.get_history()]
        assert ticks == list(range(7, 17))

    def test_history_snapshot_is_immutable(self):
        """get_history returns a tuple detached from the buffer."""
        engine = SimulationEngine(seed=0)
        config = EnvironmentConfig()
        engine.reset(config)
        engine.tick(config)

        snapshot = engine.get_history()
        engine.tick(config)

        assert isinstance(snapshot, tuple)
        assert len(snapshot) == 1
        assert len(engine.get_history()) == 2

    def test_recent_newest_first(self):
        """recent(n) lists the last n outcomes in reverse order."""
        engine = SimulationEngine(seed=0)
        config = EnvironmentConfig()
        engine.reset(config)
        for _ in range(6):
            engine.tick(config)

        assert [o.tick for o in engine.recent(3)] == [5, 4, 3]
        assert len(engine.recent(20)) == 6
        assert engine.recent(0) == []


class TestLearning:
    """Tests for value-table updates under the frozen/adaptive switches."""

    def test_first_tick_updates_both_tables(self):
        """From zero, Q[a] becomes alpha * reward for each agent."""
        engine = SimulationEngine(seed=5)
        config = EnvironmentConfig()
        engine.reset(config)

        outcome = engine.tick(config)

        assert np.isclose(
            engine.tx_agent.value_table[outcome.tx.index],
            config.learning_rate * outcome.tx_reward
        )
        assert np.isclose(
            engine.jam_agent.value_table[outcome.jam.index],
            engine.jam_agent.policy.learning_rate * outcome.jam_reward
        )

    def test_tx_rates_follow_config(self):
        """Transmitter epsilon and alpha track the per-tick config."""
        engine = SimulationEngine(seed=0)
        config = EnvironmentConfig(learning_rate=0.5, exploration_rate=0.3)
        engine.reset(config)

        engine.tick(config)

        assert engine.tx_agent.policy.learning_rate == 0.5
        assert engine.tx_agent.policy.exploration_rate == 0.3

    def test_jammer_rates_fixed(self):
        """Jammer keeps its own epsilon and alpha."""
        engine = SimulationEngine(seed=0)
        config = EnvironmentConfig(learning_rate=0.9, exploration_rate=0.9)
        engine.reset(config)

        engine.tick(config)

        assert engine.jam_agent.policy.exploration_rate == 0.12
        assert engine.jam_agent.policy.learning_rate == 0.14

    def test_frozen_tables_bit_identical(self):
        """With learning frozen no table changes, however many ticks."""
        engine = SimulationEngine(seed=1)
        config = EnvironmentConfig()
        engine.reset(config)
        for _ in range(30):
            engine.tick(config)
        engine.mutate_jammer()

        tx_before = engine.tx_agent.value_table.copy()
        jam_before = engine.jam_agent.value_table.copy()

        frozen = EnvironmentConfig(learning_frozen=True)
        for _ in range(100):
            engine.tick(frozen)

        assert np.array_equal(engine.tx_agent.value_table, tx_before)
        assert np.array_equal(engine.jam_agent.value_table, jam_before)

    def test_frozen_acts_greedily(self):
        """Frozen agents always play their current argmax."""
        engine = SimulationEngine(seed=1)
        frozen = EnvironmentConfig(learning_frozen=True, exploration_rate=1.0)
        engine.reset(frozen)
        engine.mutate_jammer()

        tx_best, jam_best = engine.greedy_actions()
        for _ in range(20):
            outcome = engine.tick(frozen)
            assert outcome.tx.index == tx_best
            assert outcome.jam.index == jam_best

    def test_static_jammer_never_learns(self):
        """Non-adaptive jammer table is untouched while Tx keeps learning."""
        engine = SimulationEngine(seed=2)
        config = EnvironmentConfig(jammer_adaptive=False)
        engine.reset(config)

        for _ in range(100):
            engine.tick(config)

        assert np.array_equal(engine.jam_agent.value_table, np.zeros(144))
        assert np.any(engine.tx_agent.value_table != 0)

    def test_static_jammer_ignores_frozen(self):
        """Non-adaptive jammer acts randomly even when learning is frozen."""
        engine = SimulationEngine(seed=2)
        config = EnvironmentConfig(jammer_adaptive=False, learning_frozen=True)
        engine.reset(config)
        engine.mutate_jammer()
        jam_before = engine.jam_agent.value_table.copy()

        jam_indices = {engine.tick(config).jam.index for _ in range(100)}

        assert len(jam_indices) > 1
        assert np.array_equal(engine.jam_agent.value_table, jam_before)

    def test_config_not_mutated(self):
        """The engine never changes the caller's config."""
        engine = SimulationEngine(seed=0)
        config = EnvironmentConfig(snr_db=12.0, learning_frozen=False)
        before = config.to_dict()
        engine.reset(config)

        for _ in range(10):
            engine.tick(config)

        assert config.to_dict() == before


class TestMutateJammer:
    """Tests for jammer prior re-randomization."""

    def test_values_in_range(self):
        """All entries drawn in [-2, 2]."""
        engine = SimulationEngine(seed=3)
        engine.reset(EnvironmentConfig())

        engine.mutate_jammer()

        table = engine.jam_agent.value_table
        assert len(table) == 144
        assert np.all(table >= -2.0)
        assert np.all(table <= 2.0)

    def test_greedy_follows_new_max(self):
        """Right after mutation greedy play picks the new maximum."""
        engine = SimulationEngine(seed=3)
        frozen = EnvironmentConfig(learning_frozen=True)
        engine.reset(frozen)

        engine.mutate_jammer()
        expected = int(np.argmax(engine.jam_agent.value_table))

        assert engine.tick(frozen).jam.index == expected

    def test_tx_table_untouched(self):
        """Mutation only affects the jammer."""
        engine = SimulationEngine(seed=3)
        engine.reset(EnvironmentConfig())

        engine.mutate_jammer()

        assert np.array_equal(engine.tx_agent.value_table, np.zeros(108))


class TestOutcomeConsistency:
    """Tests for resolved actions recorded in each outcome."""

    def test_resolved_bins(self):
        """Recorded bins match the channel mapping."""
        engine = SimulationEngine(seed=4)
        config = EnvironmentConfig(jam_max_span=4)
        engine.reset(config)

        for _ in range(50):
            outcome = engine.tick(config)

            assert outcome.tx.action == engine.tx_space[outcome.tx.index]
            assert outcome.jam.action == engine.jam_space[outcome.jam.index]
            assert outcome.tx.bin == resolve_frequency(outcome.tx.action.freq_slot)
            assert outcome.jam.center_bin == resolve_frequency(outcome.jam.action.freq_slot)
            assert outcome.jam.span_bins == min(outcome.jam.action.span, 4)

    def test_indices_valid(self):
        """Action indices stay within their spaces."""
        engine = SimulationEngine(seed=4)
        config = EnvironmentConfig(exploration_rate=1.0)
        engine.reset(config)

        for _ in range(200):
            outcome = engine.tick(config)
            assert 0 <= outcome.tx.index < 108
            assert 0 <= outcome.jam.index < 144


class TestReproducibility:
    """Tests for seeded determinism."""

    def test_same_seed_same_run(self):
        """Two seeded runs produce identical outcomes and tables."""
        config = EnvironmentConfig()
        runs = []
        tables = []

        for _ in range(2):
            engine = SimulationEngine(seed=2024)
            engine.reset(config)
            outcomes = [engine.tick(config) for _ in range(150)]
            engine.mutate_jammer()
            outcomes += [engine.tick(config) for _ in range(50)]
            runs.append(outcomes)
            tables.append((engine.tx_agent.value_table.copy(), engine.jam_agent.value_table.copy()))

        assert runs[0] == runs[1]
        assert np.array_equal(tables[0][0], tables[1][0])
        assert np.array_equal(tables[0][1], tables[1][1])

    def test_injected_rng(self):
        """An injected random state drives every stochastic choice."""
        config = EnvironmentConfig(jammer_adaptive=False)

        a = SimulationEngine(rng=np.random.RandomState(77))
        b = SimulationEngine(rng=np.random.RandomState(77))
        a.reset(config)
        b.reset(config)

        assert [a.tick(config) for _ in range(40)] == [b.tick(config) for _ in range(40)]

    def test_reseed(self):
        """seed() restarts the random sequence."""
        config = EnvironmentConfig()
        engine = SimulationEngine()

        engine.seed(8)
        engine.reset(config)
        first = [engine.tick(config) for _ in range(20)]

        engine.seed(8)
        engine.reset(config)
        second = [engine.tick(config) for _ in range(20)]

        assert first == second


class TestSnapshot:
    """Tests for the public state snapshot."""

    def test_snapshot_fields(self):
        """Snapshot exposes tick, latest, learning status and agents."""
        engine = SimulationEngine(seed=0)
        config = EnvironmentConfig()
        engine.reset(config)
        latest = engine.tick(config)

        snapshot = engine.snapshot()

        assert snapshot["tick"] == 1
        assert snapshot["latest"] == latest
        assert snapshot["learning"] == "Updating"
        assert snapshot["jammer_adaptive"] is True
        assert snapshot["tx"]["exploration_rate"] == config.exploration_rate
        assert snapshot["tx"]["learning_rate"] == config.learning_rate
        assert snapshot["tx"]["greedy_action"] == engine.tx_space.describe(snapshot["tx"]["greedy_index"])
        assert snapshot["jam"]["greedy_action"] == engine.jam_space.describe(snapshot["jam"]["greedy_index"])

    def test_snapshot_frozen(self):
        """Frozen config reports frozen learning."""
        engine = SimulationEngine(seed=0)
        frozen = EnvironmentConfig(learning_frozen=True)
        engine.reset(frozen)

        assert engine.snapshot()["learning"] == "Frozen"
        assert engine.snapshot()["latest"] is None

    def test_debug_mode_prints(self, capsys):
        """Debug mode prints per-tick diagnostics."""
        engine = SimulationEngine(seed=0, debug_mode=True)
        config = EnvironmentConfig()
        engine.reset(config)
        engine.tick(config)
        engine.mutate_jammer()

        out = capsys.readouterr().out
        assert "[Reset]" in out
        assert "[Tick 0]" in out
        assert "[Mutate]" in out


class TestVerification:
    """Built-in verification routine."""

    def test_verify_engine_passes(self):
        """Every verification case passes."""
        results = verify_engine()

        for name, result in results.items():
            assert result["pass"], name


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
