"""Repository file discovery, loading and manifest parsing."""

from .discovery import (
    CONFIG_FILES,
    DEPENDENCY_FILES,
    IGNORED_DIRS,
    MAIN_FILES,
    MODEL_FILES,
    ROUTE_FILES,
    SOURCE_FILES,
    FileMatcher,
    discover_files,
    load_blobs,
    read_file,
)
from .manifests import (
    MANIFEST_PARSERS,
    parse_dependencies,
)

__all__ = [
    "FileMatcher",
    "IGNORED_DIRS",
    "SOURCE_FILES",
    "MAIN_FILES",
    "MODEL_FILES",
    "ROUTE_FILES",
    "CONFIG_FILES",
    "DEPENDENCY_FILES",
    "discover_files",
    "load_blobs",
    "read_file",
    "MANIFEST_PARSERS",
    "parse_dependencies",
]
