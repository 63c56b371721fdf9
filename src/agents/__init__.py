"""
Minesweeper agents module.

- BaseAgent: interface every agent implements
- RandomAgent: baseline that reveals random hidden cells
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent

__all__ = [
    "BaseAgent",
    "RandomAgent",
]
