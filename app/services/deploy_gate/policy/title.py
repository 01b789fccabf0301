"""
Dependabot PR title parsing.

Titles look like:

    Bump lodash from 4.17.15 to 4.17.21
    [Security] Bump minimist from 1.2.0 to 1.2.5 in /frontend
    chore(deps-dev): bump @types/node from 14.0.1 to 14.1.0

Parsers never raise; they return either Parsed(value) or ParseFailure(reason)
so callers decide whether a failure is fatal.
"""

import re
from dataclasses import dataclass
from typing import Generic, Optional, Tuple, TypeVar, Union

from app.schemas.enums import VersionBump

T = TypeVar("T")

TITLE_PATTERN = re.compile(
    r"^(?:\[security\]\s*)?"
    r"(?:[\w-]+(?:\([\w-]+\))?!?:\s*)?"
    r"bump (?P<package>\S+) from (?P<old>\S+) to (?P<new>\S+)"
    r"(?: in (?P<directory>\S+))?\s*$",
    re.IGNORECASE,
)
VERSION_PATTERN = re.compile(r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?")


@dataclass(frozen=True)
class Parsed(Generic[T]):
    value: T


@dataclass(frozen=True)
class ParseFailure:
    reason: str


ParseResult = Union[Parsed[T], ParseFailure]


@dataclass(frozen=True)
class TitleParts:
    package: str
    old_version: str
    new_version: str
    directory: str = "/"


def parse_title(title: str) -> ParseResult[TitleParts]:
    match = TITLE_PATTERN.match(title.strip())
    if not match:
        return ParseFailure("title does not match 'Bump <package> from <old> to <new>'")
    return Parsed(
        TitleParts(
            package=match["package"],
            old_version=match["old"],
            new_version=match["new"],
            directory=match["directory"] or "/",
        )
    )


def _version_components(version: str) -> Optional[Tuple[int, int, int]]:
    match = VERSION_PATTERN.match(version)
    if not match:
        return None
    return tuple(int(part or 0) for part in match.groups())


def parse_version_bump(title: str) -> ParseResult[VersionBump]:
    """Derive the bump type from the two versions encoded in the title."""
    parts = parse_title(title)
    if isinstance(parts, ParseFailure):
        return parts

    old = _version_components(parts.value.old_version)
    new = _version_components(parts.value.new_version)
    if old is None or new is None:
        return ParseFailure(
            f"versions {parts.value.old_version!r} -> {parts.value.new_version!r} are not semantic versions"
        )

    if old[0] != new[0]:
        return Parsed(VersionBump.MAJOR)
    if old[1] != new[1]:
        return Parsed(VersionBump.MINOR)
    return Parsed(VersionBump.PATCH)


def parse_package_name(title: str) -> ParseResult[str]:
    parts = parse_title(title)
    if isinstance(parts, ParseFailure):
        return parts
    return Parsed(parts.value.package)
