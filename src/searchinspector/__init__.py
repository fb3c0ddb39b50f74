"""
Searchable multi-selection inspector core.

Groups same-type components across a multi-selection, keeps per-group fold
state across rebuilds, and prunes property trees down to search matches.
"""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("searchable-inspector")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
