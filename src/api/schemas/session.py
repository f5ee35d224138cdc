"""
Session schemas - editing session state
"""

from pydantic import BaseModel, Field
from typing import List, Literal

from models.domain import AnimationState


class SessionResponse(BaseModel):
    """Current editing session state (frame content is served by /frames)"""
    active_frame: int = Field(ge=0, description="Index of the frame being edited")
    num_frames: int = Field(ge=1, description="Committed frame count")
    pending_frame_count: int = Field(ge=1, description="Proposed frame count (applied on /frames/count/apply)")
    is_playing: bool
    status: Literal["STOPPED", "PLAYING"]
    fps: float = Field(gt=0)
    keyframes: List[int] = Field(description="Keyframe indices, ascending")
    can_undo: bool
    is_exporting: bool
    is_empty: bool = Field(description="True when every frame is blank")
    blank_frames: List[int]

    model_config = {
        "json_schema_extra": {
            "example": {
                "active_frame": 4,
                "num_frames": 12,
                "pending_frame_count": 12,
                "is_playing": False,
                "status": "STOPPED",
                "fps": 12,
                "keyframes": [5],
                "can_undo": True,
                "is_exporting": False,
                "is_empty": False,
                "blank_frames": [0, 1, 2, 6, 7, 8, 9, 10, 11]
            }
        }
    }

    @classmethod
    def from_state(cls, state: AnimationState) -> 'SessionResponse':
        return cls(**state.to_dict())


class KeyPressRequest(BaseModel):
    """Key press forwarded from the frontend"""
    key: str = Field(min_length=1, description="Key value, e.g. 'z'")
    modifiers: List[Literal["ctrl", "meta", "shift", "alt"]] = Field(default_factory=list)


class KeyPressResponse(BaseModel):
    accepted: bool
    session: SessionResponse
