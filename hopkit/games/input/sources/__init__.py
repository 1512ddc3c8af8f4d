"""
Input source implementations.
"""

from hopkit.games.input.sources.base import InputSource
from hopkit.games.input.sources.pointer import PointerKeyInputSource

__all__ = ['InputSource', 'PointerKeyInputSource']
