"""
package.json dependency classification.

The manifest is read once per run, either from a local checkout or through the
GitHub contents API, and then queried with `classify()`.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional

from app.core.logging import get_logger
from app.schemas.enums import DependencyClassification

logger = get_logger(__name__)

MANIFEST_FILENAME = "package.json"
OTHER_SECTIONS = ("peerDependencies", "optionalDependencies")


@dataclass(frozen=True)
class DependencyManifest:
    """Package names per dependency section of a package.json."""

    production: FrozenSet[str] = field(default_factory=frozenset)
    development: FrozenSet[str] = field(default_factory=frozenset)
    other: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DependencyManifest":
        other = set()
        for section in OTHER_SECTIONS:
            other.update(data.get(section) or {})
        return cls(
            production=frozenset(data.get("dependencies") or {}),
            development=frozenset(data.get("devDependencies") or {}),
            other=frozenset(other),
        )

    @classmethod
    def from_json(cls, text: str) -> "DependencyManifest":
        return cls.from_dict(json.loads(text))

    @classmethod
    def from_file(cls, path: Path) -> "DependencyManifest":
        if not path.is_file():
            logger.warning("No manifest at %s, all packages are indirect", path)
            return cls()
        return cls.from_json(path.read_text(encoding="utf-8"))

    def classify(self, package_name: str) -> DependencyClassification:
        """
        Classify a package by the section it is declared in.

        A package listed in both dependencies and devDependencies counts as
        production.
        """
        if package_name in self.production:
            return DependencyClassification.PRODUCTION
        if package_name in self.development:
            return DependencyClassification.DEVELOPMENT
        if package_name in self.other:
            return DependencyClassification.ANY
        return DependencyClassification.UNKNOWN


def manifest_path(directory: str, root: Optional[Path] = None) -> str:
    """Repository-relative (or root-relative) path of the manifest in `directory`."""
    relative = "/".join(part for part in directory.strip("/").split("/") if part)
    path = f"{relative}/{MANIFEST_FILENAME}" if relative else MANIFEST_FILENAME
    if root is not None:
        return str(root / path)
    return path
