"""Hazard Grid Q-Learning - tabular reinforcement learning among lasers and patrols.

This package implements a Q-Learning agent that learns to cross a fixed grid
guarded by periodic lasers and randomly wandering patrols.
"""

__version__ = "1.0.0"
__author__ = "Hazard Grid Demo"
