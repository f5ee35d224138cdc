"""
FlipFrame - API Layer

REST facade over AnimationService.

Structure:
- routes/     : Endpoint handlers (session, frames, playback, export, system)
- schemas/    : Pydantic request/response models
- middleware/ : Error handling
"""

from api.main import create_app

__all__ = ["create_app"]
