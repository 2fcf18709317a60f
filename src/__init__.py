"""
Spectrum Duel
=============

Adversarial spectrum contest between a frequency-hopping transmitter and an
adaptive jammer, each learning a tabular epsilon-greedy policy online.

Modules:
    - environment: Discrete action spaces and reward calculation
    - physics: Channel bins, overlap, SINR and throughput model
    - agents: Tabular value-table agents (epsilon-greedy + TD(0))
    - simulation: Tick engine, configuration, metrics logging
"""

__version__ = "1.0.0"
__author__ = "Spectrum Duel Team"
