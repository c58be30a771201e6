"""
Collaborators the game core talks to: input, drawing, score display and
outcome reporting. The core only needs these shapes, never a concrete
window or backend.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

# Pointer (touch / mouse drag) deltas are scaled down before moving the ship
TOUCH_SCALE = 0.2


@dataclass
class InputIntent:
    """Directional intent sampled once per tick"""
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    pointer_dx: float = 0.0
    pointer_dy: float = 0.0

    @classmethod
    def from_pointer(cls, raw_dx: float, raw_dy: float, scale: float = TOUCH_SCALE) -> "InputIntent":
        return cls(pointer_dx=raw_dx * scale, pointer_dy=raw_dy * scale)


class RenderSink(Protocol):
    def draw_entity(
        self,
        shape: str,
        position: Tuple[float, float],
        size: Tuple[float, float],
        color: Optional[Tuple[int, int, int]],
    ) -> None:
        ...


class ScoreSink(Protocol):
    def show_score(self, elapsed_seconds: float) -> None:
        ...


class OutcomeSink(Protocol):
    def report_outcome(self, elapsed_seconds: float, defeat_count: int, outcome: str) -> None:
        ...
