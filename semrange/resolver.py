# semrange/resolver.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, Iterable, TypeVar

from semrange.parser import parseRange
from semrange.predicates import RangeSpec
from semrange.version import Version

logger = logging.getLogger(__name__)

__all__ = ["RangeMatchResult", "RangeResolver"]



T = TypeVar("T")



@dataclass(frozen=True)
class RangeMatchResult(Generic[T]):
    """
    Result of range-based selection among candidate versions.

    - spec: the range used (may be None).
    - candidates: all candidates seen by the resolver.
    - matches: candidates that satisfy the range.
    - best: the single best match by version, or None if no matches.
            If multiple candidates share the same best version, the
            first one in the input order is returned.
    """
    spec: RangeSpec | None
    candidates: tuple[tuple[Version, T], ...]
    matches: tuple[tuple[Version, T], ...]
    best: tuple[Version, T] | None



def _pickBest(pairs: list[tuple[Version, T]]) -> tuple[Version, T] | None:
    if not pairs:
        return None
    bestVersion, bestPayload = pairs[0]
    for version, payload in pairs[1:]:
        if version > bestVersion:
            bestVersion, bestPayload = version, payload
    return (bestVersion, bestPayload)



class RangeResolver:
    @staticmethod
    def matchCandidates(
        candidates: Iterable[tuple[Version, T]],
        spec: RangeSpec | str | None,
    ) -> RangeMatchResult[T]:
        """
        Filter candidates by range and select the best version.

        - If spec is None: all candidates are considered matches.
        - If spec is a string it is parsed first (FormatError propagates).
        - If spec is "latest": the highest non-prerelease candidate is the
          only match, since the latest marker itself never matches anything.
        - "Best" is the candidate with the highest Version.
          If multiple candidates share the same highest version, the
          first encountered in input order is used.
        """
        if isinstance(spec, str):
            spec = parseRange(spec)

        candidatesList: list[tuple[Version, T]] = list(candidates)

        matchList: list[tuple[Version, T]] = []
        if spec is not None and spec.isLatest():
            latest = _pickBest([(version, payload) for version, payload in candidatesList if not version.prerelease])
            if latest is not None:
                matchList.append(latest)
        else:
            for version, payload in candidatesList:
                if spec is None or spec.isSatisfiedBy(version):
                    matchList.append((version, payload))

        best = _pickBest(matchList)
        logger.debug(
            "matchCandidates: %s of %s candidates match %s, best=%s",
            len(matchList), len(candidatesList), spec, best[0] if best else None,
        )

        return RangeMatchResult(
            spec=spec,
            candidates=tuple(candidatesList),
            matches=tuple(matchList),
            best=best
        )

    @staticmethod
    def maxSatisfying(versions: Iterable[Version], spec: RangeSpec | str | None) -> Version | None:
        """Highest version in `versions` satisfying `spec`, or None."""
        result = RangeResolver.matchCandidates(((version, version) for version in versions), spec)
        return result.best[0] if result.best is not None else None
