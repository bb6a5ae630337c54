# pointer.py
"""
Pointer state for the particle network.

The host's pointer listeners write into a PointerState slot and the tick
loop reads one snapshot per tick. The last write between two ticks wins.
"""
from typing import Optional, Tuple


class PointerState:
    """Single-writer slot holding the last pointer position, or None."""

    def __init__(self):
        self._position: Optional[Tuple[float, float]] = None

    def move(self, x: float, y: float) -> None:
        self._position = (float(x), float(y))

    def leave(self) -> None:
        self._position = None

    @property
    def present(self) -> bool:
        return self._position is not None

    def snapshot(self) -> Optional[Tuple[float, float]]:
        """Returns the current position, or None when the pointer is absent."""
        return self._position
