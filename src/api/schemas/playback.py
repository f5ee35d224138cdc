"""
Playback and export schemas
"""

from pydantic import BaseModel, Field


class FpsRequest(BaseModel):
    """Any positive rate; the UI offers 3, 12 and 24"""
    fps: float = Field(gt=0, le=240)


class ExportFileResponse(BaseModel):
    path: str
    size_bytes: int
