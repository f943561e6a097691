from __future__ import annotations


class EngineError(Exception):
    """Base class for caller-contract violations raised by the engine."""


class UnsupportedStrategyError(EngineError, ValueError):
    def __init__(self, strategy: object) -> None:
        super().__init__(f"Unsupported sort strategy: {strategy!r}")
        self.strategy = strategy


class InvalidMoveError(EngineError):
    """Raised when a move references an id outside the current filtered view."""

    def __init__(self, source_id: str, target_id: str) -> None:
        super().__init__(
            f"Cannot move {source_id!r} onto {target_id!r}: "
            "both ids must be present in the current view"
        )
        self.source_id = source_id
        self.target_id = target_id
