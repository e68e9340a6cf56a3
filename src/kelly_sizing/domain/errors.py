from __future__ import annotations

from kelly_sizing.domain.value_objects.modes import ErrorCategory


class KellyComputationError(ValueError):
    def __init__(self, category: ErrorCategory, message: str) -> None:
        super().__init__(message)
        self.category = category
        self.message = message
