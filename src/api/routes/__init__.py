"""
API Routes - HTTP endpoint handlers

Each area (session, frames, playback, export, system) gets its own router;
create_app() mounts them all under /api/v1.
"""
