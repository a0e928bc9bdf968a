# semrange/lexer.py
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from semrange.errors import FormatError
from semrange.predicates import CombinatorOp
from semrange.version import NUMBER_PATTERN, VERSION_RE, WildcardVersion, versionFromMatch

__all__ = ["TokenKind", "Token", "scanRange"]



OPERATOR_RE = re.compile(r"([<>]=?|=|[~^])\s*")
PATCH_WILDCARD_RE = re.compile(rf"({NUMBER_PATTERN})\.({NUMBER_PATTERN})(?:\.[xX*])?")
MINOR_WILDCARD_RE = re.compile(rf"({NUMBER_PATTERN})(?:\.[xX*])?(?:\.[xX*])?")
MAJOR_WILDCARD_RE = re.compile(r"[xX*](?:\.[xX*])?(?:\.[xX*])?")
HYPHEN_RE = re.compile(r"\s*-\s*")
COMBINATOR_RE = re.compile(r"\s*(\|\||\s+)\s*")



class TokenKind(Enum):
    OPERATOR = "operator"       # value: "<", "<=", ">", ">=", "=", "~", "^"
    VERSION = "version"         # value: Version
    WILDCARD = "wildcard"       # value: WildcardVersion
    HYPHEN = "hyphen"           # value: "-"
    COMBINATOR = "combinator"   # value: CombinatorOp
    NODE = "node"               # value: RangeSpec; only produced while reducing



@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Any
    offset: int

    @property
    def isLiteral(self) -> bool:
        return self.kind in (TokenKind.VERSION, TokenKind.WILDCARD)

    def __str__(self) -> str:
        if self.kind is TokenKind.COMBINATOR:
            return "||" if self.value is CombinatorOp.UNION else "<whitespace>"
        return str(self.value)



def scanRange(text: str) -> list[Token]:
    """
    Split a range expression into tokens.

    At every position the alternatives are tried in a fixed priority order:
    operator, full version, "M.m" wildcard, "M" wildcard, "x" wildcard,
    hyphen, then combinator ("||" or a run of whitespace). The first
    alternative matching at the position wins.
    """
    tokens: list[Token] = []
    pos = 0
    end = len(text)

    while pos < end:
        if (mtch := OPERATOR_RE.match(text, pos)):
            tokens.append(Token(TokenKind.OPERATOR, mtch.group(1), pos))
        elif (mtch := VERSION_RE.match(text, pos)):
            tokens.append(Token(TokenKind.VERSION, versionFromMatch(mtch), pos))
        elif (mtch := PATCH_WILDCARD_RE.match(text, pos)):
            wildcard = WildcardVersion(int(mtch.group(1)), int(mtch.group(2)))
            tokens.append(Token(TokenKind.WILDCARD, wildcard, pos))
        elif (mtch := MINOR_WILDCARD_RE.match(text, pos)):
            tokens.append(Token(TokenKind.WILDCARD, WildcardVersion(int(mtch.group(1))), pos))
        elif (mtch := MAJOR_WILDCARD_RE.match(text, pos)):
            tokens.append(Token(TokenKind.WILDCARD, WildcardVersion(), pos))
        elif (mtch := HYPHEN_RE.match(text, pos)):
            tokens.append(Token(TokenKind.HYPHEN, "-", pos))
        elif (mtch := COMBINATOR_RE.match(text, pos)):
            op = CombinatorOp.UNION if mtch.group(1) == "||" else CombinatorOp.INTERSECTION
            tokens.append(Token(TokenKind.COMBINATOR, op, pos))
        else:
            raise FormatError("Unexpected token", text=text, offset=pos)

        pos = mtch.end()

    return tokens
