# semrange/version.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, TypeAlias

from semrange.errors import FormatError

__all__ = [
    "NUMBER_PATTERN", "IDENTIFIER_PATTERN", "VERSION_PATTERN", "VERSION_RE",
    "Version", "WildcardVersion", "VersionLiteral",
    "parseVersion", "versionFromMatch", "compareVersions",
]



NUMBER_PATTERN = r"(?:0|[1-9][0-9]*)"
# Alphanumeric alternative first, so "1a" is read as one identifier and not "1" + junk.
# Its leading digits and first letter are split one way only, which keeps matching linear.
IDENTIFIER_PATTERN = r"(?:[0-9]*[A-Za-z-][0-9A-Za-z-]*|0|[1-9][0-9]*)"
DOTTED_IDENTIFIERS_PATTERN = rf"{IDENTIFIER_PATTERN}(?:\.{IDENTIFIER_PATTERN})*"

# Not anchored: the range scanner matches it at arbitrary offsets.
VERSION_PATTERN = (
    rf"v?(?P<major>{NUMBER_PATTERN})"
    rf"\.(?P<minor>{NUMBER_PATTERN})"
    rf"\.(?P<patch>{NUMBER_PATTERN})"
    rf"(?:-(?P<prerelease>{DOTTED_IDENTIFIERS_PATTERN}))?"
    rf"(?:\+(?P<build>{DOTTED_IDENTIFIERS_PATTERN}))?"
)
VERSION_RE = re.compile(VERSION_PATTERN)
_IDENTIFIER_RE = re.compile(IDENTIFIER_PATTERN)



def _checkIdentifiers(kind: str, idents: tuple[str, ...]) -> None:
    for ident in idents:
        if not isinstance(ident, str) or not _IDENTIFIER_RE.fullmatch(ident):
            raise FormatError(f"Invalid {kind} identifier {ident!r}", text=".".join(map(str, idents)))



def _checkComponent(name: str, value: object) -> None:
    # bool is an int subclass; True.True.False is not a version
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"Version {name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise FormatError(f"Negative {name} component {value} is not allowed")



@dataclass(frozen=True)
class Version:
    """
    A semantic version: major.minor.patch[-prerelease][+build].

    Equality is structural over all fields (build metadata included).
    Ordering follows semver precedence and ignores build metadata, so two
    versions differing only in build compare as neither smaller nor larger
    while still being unequal.
    """
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # "alpha.1" is accepted as shorthand for ("alpha", "1")
        for name in ("prerelease", "build"):
            value = getattr(self, name)
            if isinstance(value, str):
                object.__setattr__(self, name, tuple(value.split(".")) if value else ())
            elif not isinstance(value, tuple):
                raise TypeError(f"Version {name} must be a tuple of strings, got {type(value).__name__}")
        _checkComponent("major", self.major)
        _checkComponent("minor", self.minor)
        _checkComponent("patch", self.patch)
        _checkIdentifiers("prerelease", self.prerelease)
        _checkIdentifiers("build", self.build)

    @classmethod
    def parse(cls, text: str) -> Version:
        return parseVersion(text)

    @staticmethod
    def compare(first: Version, second: Version) -> Literal[-1, 0, 1]:
        return compareVersions(first, second)

    @property
    def prereleaseText(self) -> str | None:
        return ".".join(self.prerelease) if self.prerelease else None

    @property
    def buildText(self) -> str | None:
        return ".".join(self.build) if self.build else None

    @property
    def isPrerelease(self) -> bool:
        return bool(self.prerelease)

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        prerelease = f"-{'.'.join(self.prerelease)}" if self.prerelease else ""
        build = f"+{'.'.join(self.build)}" if self.build else ""
        return f"{base}{prerelease}{build}"

    def _prereleaseCmpKey(self) -> tuple:
        # Numeric identifiers have lower precedence than non-numeric.
        # We encode numeric as (0, int), non-numeric as (1, str),
        # so numeric < non-numeric in tuple comparison.
        parts: list[tuple[int, int | str]] = []
        for ident in self.prerelease:
            if ident.isdigit():
                parts.append((0, int(ident)))
            else:
                parts.append((1, ident))
        return tuple(parts)

    def _cmpKey(self) -> tuple:
        # Build is ignored for ordering
        # No prerelease version is preferred over any prerelease version
        releaseFlag = 1 if not self.prerelease else 0
        return (
            self.major,
            self.minor,
            self.patch,
            releaseFlag,
            self._prereleaseCmpKey()
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._cmpKey() < other._cmpKey()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._cmpKey() <= other._cmpKey()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._cmpKey() > other._cmpKey()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._cmpKey() >= other._cmpKey()



def parseVersion(raw: str) -> Version:
    """
    Parse a full semantic version string into Version.

    Accepted forms (examples):
        "1.2.3"
        "v1.2.3"
        "1.2.3-alpha.1"
        "1.2.3+build.1"
        "1.2.3-alpha+exp.sha"

    Rejected:
        "1", "1.2" (all three components are mandatory), "01.2.3",
        "1.2.3-", "1.2.3-01", " 1.2.3", "1.2.3.4", etc.
    """
    if not isinstance(raw, str):
        raise TypeError(f"Version string must be a string type, got {type(raw).__name__}")

    mtch = VERSION_RE.fullmatch(raw)
    if not mtch:
        raise FormatError("Invalid semantic version", text=raw)

    return versionFromMatch(mtch)



def versionFromMatch(mtch: re.Match[str]) -> Version:
    """Build a Version from a match of VERSION_RE."""
    prereleaseGroup = mtch.group("prerelease")
    buildGroup = mtch.group("build")
    return Version(
        major=int(mtch.group("major")),
        minor=int(mtch.group("minor")),
        patch=int(mtch.group("patch")),
        prerelease=tuple(prereleaseGroup.split(".")) if prereleaseGroup is not None else (),
        build=tuple(buildGroup.split(".")) if buildGroup is not None else (),
    )



def compareVersions(first: Version, second: Version) -> Literal[-1, 0, 1]:
    firstKey = first._cmpKey()
    secondKey = second._cmpKey()
    if firstKey < secondKey:
        return -1
    if firstKey > secondKey:
        return 1
    return 0



@dataclass(frozen=True)
class WildcardVersion:
    """
    An x-range version such as "x", "1.x" or "1.2.x".

    Only the first `prefixLength` components are meaningful; the rest are None.
    """
    major: int | None = None
    minor: int | None = None
    patch: int | None = None

    def __post_init__(self) -> None:
        seenUnset = False
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if value is None:
                seenUnset = True
                continue
            if seenUnset:
                raise FormatError(f"Wildcard {name} is set after a wildcarded component")
            _checkComponent(name, value)

    @property
    def prefixLength(self) -> int:
        if self.major is None:
            return 0
        if self.minor is None:
            return 1
        if self.patch is None:
            return 2
        return 3

    def floor(self) -> Version:
        """Lowest version this wildcard covers."""
        return Version(self.major or 0, self.minor or 0, self.patch or 0)

    def upperBound(self) -> tuple[Literal["<", ">="], Version]:
        """
        Exclusive upper bound one unit above the most specific concrete component.

        A fully wildcarded version has no upper bound; (">=", 0.0.0) is returned
        so callers can still build a comparator that accepts everything.
        """
        prefixLength = self.prefixLength
        if prefixLength == 1:
            return "<", Version(self.major + 1, 0, 0)
        if prefixLength == 2:
            return "<", Version(self.major, self.minor + 1, 0)
        if prefixLength == 3:
            return "<", Version(self.major, self.minor, self.patch + 1)
        return ">=", Version(0, 0, 0)

    def __str__(self) -> str:
        prefixLength = self.prefixLength
        if prefixLength == 0:
            return "x"
        if prefixLength == 1:
            return f"{self.major}.x.x"
        if prefixLength == 2:
            return f"{self.major}.{self.minor}.x"
        return f"{self.major}.{self.minor}.{self.patch}"



VersionLiteral: TypeAlias = Version | WildcardVersion
