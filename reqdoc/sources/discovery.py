"""
File discovery and loading.

Selects repository files by naming convention (main files, model
directories, route directories, config files, dependency manifests)
and loads them as SourceBlobs for the analysis pipeline.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterable, Optional, Union

from ..core.types import SourceBlob

logger = logging.getLogger(__name__)

# Build output, vendored code and VCS metadata are never analyzed
IGNORED_DIRS = frozenset({
    "node_modules",
    "dist",
    "build",
    ".git",
    "bin",
    "obj",
    "target",
    "vendor",
})
# Dot-prefixed directories (.git, .venv, .tox, .idea) are skipped as well

CODE_EXTENSIONS = frozenset({
    "js", "ts", "jsx", "tsx", "py", "java", "cpp", "cs", "go", "rb",
    "php", "scala", "rs", "swift", "kt", "dart", "c",
})
SOURCE_EXTENSIONS = CODE_EXTENSIONS | {"h", "sql"}
CONFIG_EXTENSIONS = frozenset({
    "json", "yaml", "yml", "xml", "ini", "env", "properties", "toml",
})


@dataclass(frozen=True)
class FileMatcher:
    """Naming convention a repository-relative path must satisfy.

    A path matches when its name is in `filenames` or ends with one of
    `suffixes`, or when all of the following hold:
    - its extension is in `extensions` and its name does not start with a dot
    - its stem is in `stems` (if given)
    - some parent directory is named in `ancestor_dirs` (if given)
    - its immediate parent is named in `parent_dirs` (if given)
    """

    extensions: frozenset[str] = frozenset()
    stems: Optional[frozenset[str]] = None
    ancestor_dirs: Optional[frozenset[str]] = None
    parent_dirs: Optional[frozenset[str]] = None
    filenames: frozenset[str] = frozenset()
    suffixes: tuple[str, ...] = ()

    def matches(self, path: Union[str, PurePosixPath]) -> bool:
        """Check a repository-relative POSIX path."""
        path = PurePosixPath(path)
        name = path.name

        if name in self.filenames or (self.suffixes and name.endswith(self.suffixes)):
            return True

        stem, dot, extension = name.rpartition(".")
        # Dotfiles such as .env only match by explicit filename
        if not dot or not stem or extension.lower() not in self.extensions:
            return False
        if self.stems is not None and stem not in self.stems:
            return False

        directories = path.parts[:-1]
        if self.ancestor_dirs is not None and not self.ancestor_dirs.intersection(directories):
            return False
        if self.parent_dirs is not None:
            if not directories or directories[-1] not in self.parent_dirs:
                return False

        return True


SOURCE_FILES = FileMatcher(extensions=SOURCE_EXTENSIONS)

MAIN_FILES = FileMatcher(
    extensions=CODE_EXTENSIONS,
    stems=frozenset({"main", "index", "app", "program", "application"}),
)

MODEL_FILES = FileMatcher(
    extensions=CODE_EXTENSIONS,
    ancestor_dirs=frozenset({"models", "entities", "domain", "schemas", "types"}),
)

ROUTE_FILES = FileMatcher(
    extensions=CODE_EXTENSIONS,
    ancestor_dirs=frozenset({"routes", "controllers", "handlers", "endpoints", "apis"}),
)

CONFIG_FILES = FileMatcher(
    extensions=CONFIG_EXTENSIONS,
    parent_dirs=frozenset({"config", "settings", "configuration"}),
)

DEPENDENCY_FILES = FileMatcher(
    filenames=frozenset({
        "package.json",      # Node.js
        "requirements.txt",  # Python
        "pom.xml",           # Java (Maven)
        "build.gradle",      # Java/Kotlin (Gradle)
        "Gemfile",           # Ruby
        "composer.json",     # PHP
        "Cargo.toml",        # Rust
        "go.mod",            # Go
        "pubspec.yaml",      # Dart/Flutter
        "Podfile",           # iOS/Swift
    }),
    suffixes=(".csproj",),   # .NET
)


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def discover_files(root: Union[str, Path], *matchers: FileMatcher) -> list[str]:
    """Find files under root matching any of the given matchers.

    Dot-prefixed files and directories (.venv, .idea, .env) are skipped.

    Args:
        root: Repository root directory
        *matchers: Naming conventions to accept

    Returns:
        Sorted, de-duplicated POSIX paths relative to root
    """
    root = Path(root)
    found: set[str] = set()

    for dirpath, dirnames, filenames in os.walk(root):
        # Prune in place so os.walk never descends into ignored or hidden trees
        dirnames[:] = sorted(
            d for d in dirnames if d not in IGNORED_DIRS and not _is_hidden(d)
        )

        relative_dir = Path(dirpath).relative_to(root)
        for filename in filenames:
            if _is_hidden(filename):
                continue
            relative = (relative_dir / filename).as_posix()
            if any(matcher.matches(relative) for matcher in matchers):
                found.add(relative)

    logger.debug(f"Discovered {len(found)} files under {root}")
    return sorted(found)


def read_file(root: Union[str, Path], relative_path: str) -> Optional[str]:
    """Read a repository file as UTF-8 text.

    Returns:
        File content, or None if it cannot be read or decoded
    """
    try:
        return (Path(root) / relative_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read file {relative_path}: {e}")
        return None


def load_blobs(root: Union[str, Path], paths: Iterable[str]) -> list[SourceBlob]:
    """Load files as SourceBlobs, in the given order.

    Unreadable files and whitespace-only content are skipped.
    """
    blobs: list[SourceBlob] = []

    for relative_path in paths:
        content = read_file(root, relative_path)
        if content is None or not content.strip():
            continue
        blobs.append(SourceBlob(text=content, origin=relative_path))

    return blobs
