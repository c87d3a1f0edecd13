"""
Dependency manifest parsing.

Extracts declared dependencies from package manifests without any
LLM call. Results are keyed by ecosystem, then package name:

    {"nodejs": {"express": "^4.18.0"}, "python": {"requests": "2.31.0"}}
"""

import json
import logging
import re
import tomllib
from pathlib import Path, PurePosixPath
from typing import Callable, Iterable, Union

import yaml

from .discovery import read_file

logger = logging.getLogger(__name__)

LATEST = "latest"

_REQUIREMENT_RE = re.compile(r"^([A-Za-z0-9][A-Za-z0-9._-]*)(\[[^\]]*\])?\s*(.*)$")
_GEM_RE = re.compile(r"""^gem\s+['"]([^'"]+)['"](?:\s*,\s*['"]([^'"]+)['"])?""")


def parse_package_json(content: str) -> dict[str, str]:
    """Parse package.json dependencies and devDependencies."""
    data = json.loads(content)
    dependencies: dict[str, str] = {}

    for section in ("dependencies", "devDependencies"):
        entries = data.get(section) or {}
        if not isinstance(entries, dict):
            raise ValueError(f"{section} must be an object, got {type(entries).__name__}")
        dependencies.update((name, str(version)) for name, version in entries.items())

    return dependencies


def parse_requirements_txt(content: str) -> dict[str, str]:
    """Parse a pip requirements file.

    Pinned requirements (name==1.0) map to the version, other
    specifiers are kept verbatim, bare names map to "latest".
    Comments and pip options (-r, -e, --index-url) are skipped.
    """
    dependencies: dict[str, str] = {}

    for line in content.splitlines():
        line = line.split(" #", 1)[0].strip()
        if not line or line.startswith(("#", "-")):
            continue

        # Drop environment markers
        line = line.split(";", 1)[0].strip()
        match = _REQUIREMENT_RE.match(line)
        if not match:
            continue

        name, _extras, spec = match.groups()
        spec = spec.strip()
        if spec.startswith("==") and "," not in spec:
            dependencies[name] = spec[2:].strip()
        else:
            dependencies[name] = spec or LATEST

    return dependencies


def parse_gemfile(content: str) -> dict[str, str]:
    """Parse `gem 'name', 'version'` lines of a Gemfile."""
    dependencies: dict[str, str] = {}

    for line in content.splitlines():
        match = _GEM_RE.match(line.strip())
        if match:
            name, version = match.groups()
            dependencies[name] = version or LATEST

    return dependencies


def parse_cargo_toml(content: str) -> dict[str, str]:
    """Parse [dependencies] and [dev-dependencies] of a Cargo.toml."""
    data = tomllib.loads(content)
    dependencies: dict[str, str] = {}

    for section in ("dependencies", "dev-dependencies"):
        for name, spec in (data.get(section) or {}).items():
            if isinstance(spec, dict):
                dependencies[name] = str(spec.get("version", LATEST))
            else:
                dependencies[name] = str(spec)

    return dependencies


def parse_pubspec_yaml(content: str) -> dict[str, str]:
    """Parse dependencies and dev_dependencies of a pubspec.yaml."""
    data = yaml.safe_load(content) or {}
    dependencies: dict[str, str] = {}

    for section in ("dependencies", "dev_dependencies"):
        for name, spec in (data.get(section) or {}).items():
            if spec is None:
                dependencies[name] = LATEST
            elif isinstance(spec, dict):
                dependencies[name] = str(spec.get("version", LATEST))
            else:
                dependencies[name] = str(spec)

    return dependencies


def parse_go_mod(content: str) -> dict[str, str]:
    """Parse require directives of a go.mod (single-line and block form)."""
    dependencies: dict[str, str] = {}
    in_block = False

    for raw_line in content.splitlines():
        line = raw_line.split("//", 1)[0].strip()
        if not line:
            continue

        if in_block:
            if line == ")":
                in_block = False
                continue
            parts = line.split()
        elif line == "require (":
            in_block = True
            continue
        elif line.startswith("require "):
            parts = line.split()[1:]
        else:
            continue

        if len(parts) >= 2:
            dependencies[parts[0]] = parts[1]

    return dependencies


# Manifest filename -> (ecosystem, parser)
MANIFEST_PARSERS: dict[str, tuple[str, Callable[[str], dict[str, str]]]] = {
    "package.json": ("nodejs", parse_package_json),
    "requirements.txt": ("python", parse_requirements_txt),
    "gemfile": ("ruby", parse_gemfile),
    "cargo.toml": ("rust", parse_cargo_toml),
    "pubspec.yaml": ("dart", parse_pubspec_yaml),
    "go.mod": ("go", parse_go_mod),
}


def parse_dependencies(
    root: Union[str, Path],
    paths: Iterable[str],
) -> dict[str, dict[str, str]]:
    """Collect dependencies from manifest files.

    Manifests of the same ecosystem are merged, later files winning
    on conflicting names. Manifests without a parser (pom.xml,
    build.gradle, ...) are skipped, as are files that fail to parse.

    Args:
        root: Repository root directory
        paths: Manifest paths relative to root

    Returns:
        Mapping of ecosystem -> {package: version}
    """
    dependencies: dict[str, dict[str, str]] = {}

    for relative_path in paths:
        filename = PurePosixPath(relative_path).name.lower()
        entry = MANIFEST_PARSERS.get(filename)
        if entry is None:
            logger.debug(f"No dependency parser for {relative_path}")
            continue

        content = read_file(root, relative_path)
        if content is None:
            continue

        ecosystem, parser = entry
        try:
            parsed = parser(content)
        except (ValueError, AttributeError, TypeError, yaml.YAMLError) as e:
            logger.warning(f"Could not parse dependencies from {relative_path}: {e}")
            continue

        if parsed:
            dependencies.setdefault(ecosystem, {}).update(parsed)

    return dependencies
