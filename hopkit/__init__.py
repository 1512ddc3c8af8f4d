"""
Hopkit - small pygame game framework.

Provides the pieces shared by the games under games/:
- logging: module loggers and structured record sinks
- scheduler: cooperative periodic and one-shot callbacks on a virtual clock
- games: BaseGame, GameState and the input abstraction layer
"""

__version__ = "1.0.0"

__all__ = ['__version__']
