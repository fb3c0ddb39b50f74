"""
Configuration & Constants
=========================
This module serves as the central registry for the inspector's tunables.

Nothing here is persisted: fold state, search text and filter caches live only
as long as the inspector session.

Exports:
    POLL_INTERVAL_MS (int): How often the selection watcher runs.
    DEFAULT_EXPANDED (bool): Fold state given to a newly seen component group.
    InspectorConfig: Bundle of the above, passed to the store and controller.
"""
import logging
from dataclasses import dataclass

ORG_ID = "searchinspector"
APP_ID = "searchable-inspector"
VISIBLE_APP_NAME = "Searchable Inspector"

POLL_INTERVAL_MS: int = 100
DEFAULT_EXPANDED: bool = True

MULTI_EDIT_UNSUPPORTED_MESSAGE = "Multi-object editing not supported."
EDITOR_FAILED_MESSAGE = "Editor could not be created for this component."
SEARCH_PLACEHOLDER = "Search Text"


@dataclass(frozen=True)
class InspectorConfig:
    poll_interval_ms: int = POLL_INTERVAL_MS
    default_expanded: bool = DEFAULT_EXPANDED
    log_level: int = logging.INFO

    def __post_init__(self) -> None:
        if self.poll_interval_ms <= 0:
            raise ValueError(f"poll_interval_ms must be positive, got {self.poll_interval_ms}")
