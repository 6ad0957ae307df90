"""Core synchronisation engine.

WHY: The core package holds the only logic with real invariants:
interval arithmetic across coordinate systems, first-match name
resolution, idempotent overwrite, and the text attribute fallback.
Everything host-specific lives in overlay_sync.hosts.

HOW: models.py defines the data structures, naming/tracks/intervals/
overwrite/placement/text_attribute implement one step each, and
controller.py runs them per marker against a SyncContext.

RULES:
- No module here imports a host implementation
- All state is passed explicitly through SyncContext
"""
