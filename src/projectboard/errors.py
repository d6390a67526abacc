# SPDX-License-Identifier: MIT

from typing import Optional


class ProjectBoardError(Exception):
    """Base class for errors raised by the project store and its collaborators."""


class ValidationError(ProjectBoardError):
    """Raised before a mutation is applied when fields are missing or invalid.

    `fields` maps each offending field name to a message so a form can show
    field-level feedback.
    """

    def __init__(self, fields: dict[str, str]) -> None:
        self.fields = dict(fields)
        message = "; ".join(f"{name}: {reason}" for name, reason in self.fields.items())
        super().__init__(message or "invalid input")


class NotFoundError(ProjectBoardError):
    """Raised when an operation references an id the store does not hold."""

    def __init__(self, kind: str, id: Optional[str]) -> None:
        self.kind = kind
        self.id = id
        super().__init__(f"{kind} '{id}' not found")


class SyncError(ProjectBoardError):
    """Raised when the persistence backend fails; the store keeps its last good state."""
