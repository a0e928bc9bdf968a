# semrange/predicates.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from semrange.errors import FormatError, InvariantViolation
from semrange.version import Version, WildcardVersion, VersionLiteral

__all__ = [
    "RelationalOp", "CombinatorOp",
    "RangeSpec", "RelationalComparator", "WildcardComparator",
    "TildeComparator", "CaretComparator", "CombinatorNode",
    "LatestSentinel", "LATEST",
    "evaluate", "render",
]



RelationalOp = Literal["<", "<=", ">", ">=", "="]
RELATIONAL_OPS: tuple[str, ...] = ("<", "<=", ">", ">=", "=")



class CombinatorOp(Enum):
    # Declared in binding order: intersection binds tighter than union.
    INTERSECTION = "intersection"
    UNION = "union"



class RangeSpec:
    """
    A parsed range expression.

    Trees are built once by the parser and never mutated afterwards, so a
    single instance may be evaluated from several threads.
    """
    __slots__ = ()

    @classmethod
    def parse(cls, text: str) -> RangeSpec:
        from semrange.parser import parseRange
        return parseRange(text)

    def isSatisfiedBy(self, version: Version) -> bool:
        return evaluate(self, version)

    def isLatest(self) -> bool:
        return False

    def __str__(self) -> str:
        return render(self)



@dataclass(frozen=True)
class RelationalComparator(RangeSpec):
    op: RelationalOp
    version: VersionLiteral

    def __post_init__(self) -> None:
        if self.op not in RELATIONAL_OPS:
            raise FormatError(f"Unsupported operator {self.op!r}")



@dataclass(frozen=True)
class WildcardComparator(RangeSpec):
    wildcard: WildcardVersion



@dataclass(frozen=True)
class TildeComparator(RangeSpec):
    """~M.m.p: patch-level upgrades; ~M.m and ~M allow what their wildcard leaves open."""
    version: VersionLiteral



@dataclass(frozen=True)
class CaretComparator(RangeSpec):
    """^M.m.p: everything right of the leftmost non-zero component may float upward."""
    version: VersionLiteral



@dataclass(frozen=True)
class CombinatorNode(RangeSpec):
    op: CombinatorOp
    left: RangeSpec
    right: RangeSpec



@dataclass(frozen=True)
class LatestSentinel(RangeSpec):
    """Marker for "latest"; resolution happens elsewhere, so it never matches."""

    def isLatest(self) -> bool:
        return True



LATEST = LatestSentinel()



def _asConcrete(version: VersionLiteral) -> Version:
    if isinstance(version, WildcardVersion):
        return version.floor()
    return version



def _openWildcard(version: VersionLiteral) -> WildcardVersion | None:
    """Returns the wildcard if it leaves at least one component open."""
    if isinstance(version, WildcardVersion) and version.prefixLength < 3:
        return version
    return None



def _sameTriple(first: Version, second: Version) -> bool:
    return (
        first.major == second.major
        and first.minor == second.minor
        and first.patch == second.patch
    )



def _relationalSatisfied(op: RelationalOp, reference: VersionLiteral, version: Version) -> bool:
    reference = _asConcrete(reference)
    # Prerelease versions only satisfy comparators that themselves reference a prerelease
    if version.prerelease and not reference.prerelease:
        return False

    match op:
        case "<":
            return version < reference
        case "<=":
            return version <= reference
        case ">":
            return version > reference
        case ">=":
            return version >= reference
        case "=":
            return Version.compare(version, reference) == 0
    raise InvariantViolation(f"Unknown relational operator {op!r}")



def _wildcardSatisfied(wildcard: WildcardVersion, version: Version) -> bool:
    prefixLength = wildcard.prefixLength
    if prefixLength >= 1 and version.major != wildcard.major:
        return False
    if prefixLength >= 2 and version.minor != wildcard.minor:
        return False
    if prefixLength >= 3 and version.patch != wildcard.patch:
        return False
    return True



def _tildeSatisfied(reference: VersionLiteral, version: Version) -> bool:
    wildcard = _openWildcard(reference)
    if wildcard is not None:
        if version.prerelease:
            return False
        if wildcard.prefixLength == 0:
            return True
        if wildcard.prefixLength == 1:
            return version.major == wildcard.major
        return version.major == wildcard.major and version.minor == wildcard.minor

    reference = _asConcrete(reference)
    if reference.prerelease and version.prerelease:
        return _sameTriple(reference, version)
    if version.prerelease:
        return False
    return (
        version.major == reference.major
        and version.minor == reference.minor
        and version >= reference
    )



def _caretSatisfied(reference: VersionLiteral, version: Version) -> bool:
    wildcard = _openWildcard(reference)
    if wildcard is not None:
        if version.prerelease:
            return False
        if wildcard.prefixLength == 0:
            return True
        if wildcard.prefixLength == 2 and wildcard.major == 0:
            return version.major == 0 and version.minor == wildcard.minor
        # "^1.x" leaves minor open; reading it as 0 accepts every minor
        return version.major == wildcard.major and version.minor >= (wildcard.minor or 0)

    reference = _asConcrete(reference)
    if reference.prerelease and version.prerelease:
        return _sameTriple(reference, version)
    if version.prerelease:
        return False
    if reference.major == 0:
        if reference.minor == 0:
            return _sameTriple(reference, version)
        return (
            version.major == 0
            and version.minor == reference.minor
            and version >= reference
        )
    return version.major == reference.major and version >= reference



def evaluate(node: RangeSpec, version: Version) -> bool:
    """Returns whether `version` satisfies the range rooted at `node`."""
    match node:
        case RelationalComparator(op=op, version=reference):
            return _relationalSatisfied(op, reference, version)
        case WildcardComparator(wildcard=wildcard):
            return _wildcardSatisfied(wildcard, version)
        case TildeComparator(version=reference):
            return _tildeSatisfied(reference, version)
        case CaretComparator(version=reference):
            return _caretSatisfied(reference, version)
        case CombinatorNode(op=CombinatorOp.INTERSECTION, left=left, right=right):
            return evaluate(left, version) and evaluate(right, version)
        case CombinatorNode(op=CombinatorOp.UNION, left=left, right=right):
            return evaluate(left, version) or evaluate(right, version)
        case LatestSentinel():
            return False
    raise InvariantViolation(f"Unknown range node {node!r}")



def _isHyphenPair(left: RangeSpec, right: RangeSpec) -> bool:
    return (
        isinstance(left, RelationalComparator)
        and isinstance(right, RelationalComparator)
        and left.op == ">="
        and right.op == "<="
    )



def render(node: RangeSpec) -> str:
    """Canonical text for the range rooted at `node`."""
    match node:
        case RelationalComparator(op=op, version=reference):
            return f"{op}{reference}"
        case WildcardComparator(wildcard=wildcard):
            return str(wildcard)
        case TildeComparator(version=reference):
            return f"~{reference}"
        case CaretComparator(version=reference):
            return f"^{reference}"
        case CombinatorNode(op=CombinatorOp.UNION, left=left, right=right):
            return f"{render(left)} || {render(right)}"
        case CombinatorNode(op=CombinatorOp.INTERSECTION, left=left, right=right):
            # Hyphen ranges read back as hyphen ranges
            if _isHyphenPair(left, right):
                return f"{left.version} - {right.version}"
            # Intersection always binds tighter than union, so no grouping is needed
            return f"{render(left)} {render(right)}"
        case LatestSentinel():
            return "latest"
    raise InvariantViolation(f"Unknown range node {node!r}")
