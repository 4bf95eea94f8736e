"""Core UI-layer primitives (handles, lifecycle events, and layout rendering).

Kept free of any rendering toolkit so the orchestrator can be driven from the
game loop, a CLI, or tests.
"""
