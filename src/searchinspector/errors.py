"""
Error & Condition Taxonomy
==========================
Nothing in the inspector core is fatal. Hosts raise the exceptions below to
report trouble with a single entity, component or editor; the core catches them
per group and either drops the affected member or attaches an `Advisory` that
the render driver shows next to the group.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class InspectorError(Exception):
    """Base class for all inspector errors."""


class StaleReferenceError(InspectorError):
    """A host object was destroyed between two polls."""

    def __init__(self, obj: object, message: str | None = None) -> None:
        super().__init__(message or f"Reference to destroyed object: {obj!r}")
        self.obj = obj


class UnsupportedMultiEditError(InspectorError):
    """The editor for a component type cannot target more than one component."""

    def __init__(self, type_name: str, n_targets: int) -> None:
        super().__init__(f"'{type_name}' does not support editing {n_targets} targets at once.")
        self.type_name = type_name
        self.n_targets = n_targets


class AdvisoryLevel(StrEnum):
    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class Advisory:
    """Non-blocking notice shown in place of (or next to) a group's editor."""
    level: AdvisoryLevel
    message: str
