# semrange/__init__.py
from __future__ import annotations

__version__ = "0.1.0"

from .errors import FormatError, InvariantViolation
from .version import Version, WildcardVersion, VersionLiteral, parseVersion, compareVersions
from .predicates import (
    RangeSpec,
    RelationalComparator,
    WildcardComparator,
    TildeComparator,
    CaretComparator,
    CombinatorNode,
    CombinatorOp,
    LatestSentinel,
    LATEST,
)
from .parser import parseRange
from .resolver import RangeMatchResult, RangeResolver

__all__ = [
    "__version__",
    "FormatError",
    "InvariantViolation",
    "Version",
    "WildcardVersion",
    "VersionLiteral",
    "parseVersion",
    "compareVersions",
    "RangeSpec",
    "RelationalComparator",
    "WildcardComparator",
    "TildeComparator",
    "CaretComparator",
    "CombinatorNode",
    "CombinatorOp",
    "LatestSentinel",
    "LATEST",
    "parseRange",
    "RangeMatchResult",
    "RangeResolver",
]
