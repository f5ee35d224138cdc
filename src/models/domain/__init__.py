"""Domain models - read-only state objects"""

from models.domain.animation import AnimationState, UndoState

__all__ = [
    "AnimationState",
    "UndoState",
]
