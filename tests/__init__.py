"""
Spectrum Duel Tests Package
===========================

Unit tests for the simulation core:
    - test_action_space: Tx/Jam action enumeration
    - test_channel: Bin mapping, overlap, link evaluation
    - test_reward: Transmitter and jammer rewards
    - test_tabular_agent: Epsilon-greedy selection and TD(0) updates
    - test_engine: Tick state machine, history, reproducibility
    - test_config / test_metrics / test_simulate: Run infrastructure
"""
