# semrange/parser.py
from __future__ import annotations

import logging

from semrange.errors import FormatError, InvariantViolation
from semrange.lexer import Token, TokenKind, scanRange
from semrange.predicates import (
    LATEST,
    CaretComparator,
    CombinatorNode,
    CombinatorOp,
    RangeSpec,
    RelationalComparator,
    TildeComparator,
    WildcardComparator,
)
from semrange.version import Version, VersionLiteral, WildcardVersion

logger = logging.getLogger(__name__)

__all__ = ["parseRange"]



def _upperBoundComparator(wildcard: WildcardVersion) -> RelationalComparator:
    op, bound = wildcard.upperBound()
    return RelationalComparator(op, bound)



def _wildcardRange(wildcard: WildcardVersion) -> CombinatorNode:
    # Lower bound is the wildcard itself, read as its lowest member
    return CombinatorNode(
        CombinatorOp.INTERSECTION,
        RelationalComparator(">=", wildcard),
        _upperBoundComparator(wildcard),
    )



def _node(spec: RangeSpec, offset: int) -> Token:
    return Token(TokenKind.NODE, spec, offset)



def _bindUnary(tokens: list[Token], text: str) -> list[Token]:
    """Fuse every operator token with the version literal right after it."""
    out: list[Token] = []
    idx = 0
    while idx < len(tokens):
        token = tokens[idx]
        if token.kind is not TokenKind.OPERATOR:
            out.append(token)
            idx += 1
            continue

        following = tokens[idx + 1] if idx + 1 < len(tokens) else None
        if following is None or not following.isLiteral:
            raise FormatError(f"Version expected after {token.value!r}", text=text, offset=token.offset)

        literal: VersionLiteral = following.value
        if token.value == "~":
            out.append(_node(TildeComparator(literal), token.offset))
        elif token.value == "^":
            out.append(_node(CaretComparator(literal), token.offset))
        elif token.value == "=":
            # "=" adds nothing to a bare literal; "=1.x" stays the wildcard 1.x
            out.append(Token(following.kind, literal, token.offset))
        else:
            out.append(_node(RelationalComparator(token.value, literal), token.offset))
        idx += 2
    return out



def _bindHyphens(tokens: list[Token], text: str) -> list[Token]:
    """Fuse "A - B" into an inclusive [A, B] intersection."""
    out: list[Token] = []
    idx = 0
    while idx < len(tokens):
        token = tokens[idx]
        if token.kind is not TokenKind.HYPHEN or not out or idx + 1 >= len(tokens):
            out.append(token)
            idx += 1
            continue

        left = out[-1]
        right = tokens[idx + 1]
        if not left.isLiteral:
            raise FormatError(f"Expected version before hyphen, got '{left}'", text=text, offset=left.offset)
        if not right.isLiteral:
            raise FormatError(f"Expected version after hyphen, got '{right}'", text=text, offset=right.offset)

        # Ranges are inclusive, so an upper bound of 1.2 means <1.3.0
        if right.kind is TokenKind.WILDCARD:
            upper = _upperBoundComparator(right.value)
        else:
            upper = RelationalComparator("<=", right.value)

        lower = RelationalComparator(">=", left.value)
        out[-1] = _node(CombinatorNode(CombinatorOp.INTERSECTION, lower, upper), left.offset)
        idx += 2

    for token in out:
        if token.kind is TokenKind.HYPHEN:
            raise FormatError("Unmatched range", text=text, offset=token.offset)
    return out



def _checkAlternation(tokens: list[Token], text: str) -> None:
    """Operands and combinators must alternate, starting and ending with an operand."""
    for idx, token in enumerate(tokens):
        isCombinator = token.kind is TokenKind.COMBINATOR
        if idx % 2 == 0 and isCombinator:
            raise FormatError(f"Unexpected '{token}'", text=text, offset=token.offset)
        if idx % 2 == 1 and not isCombinator:
            raise FormatError(f"Expected '||' or whitespace before '{token}'", text=text, offset=token.offset)
    if tokens and tokens[-1].kind is TokenKind.COMBINATOR:
        last = tokens[-1]
        raise FormatError(f"Dangling '{last}'", text=text, offset=last.offset)



def _promote(token: Token) -> RangeSpec:
    """Turn an operand token into a predicate node."""
    if token.kind is TokenKind.NODE:
        return token.value
    if token.kind is TokenKind.WILDCARD:
        return _wildcardRange(token.value)
    if token.kind is TokenKind.VERSION:
        return RelationalComparator("=", token.value)
    raise InvariantViolation(f"Token '{token}' at char {token.offset} is not an operand")



def _bindPass(tokens: list[Token], op: CombinatorOp) -> list[Token]:
    """
    One left-to-right pass fusing `left OP right` triples.

    A neighbour consumed by a fusion is not reused in the same pass, so
    "a b c d" becomes "(a b) (c d)" here and "((a b) (c d))" on the next pass.
    """
    work: list[Token | None] = list(tokens)
    idx = 1
    while idx < len(work) - 1:
        token = work[idx]
        if token is None or token.kind is not TokenKind.COMBINATOR or token.value is not op:
            idx += 1
            continue

        left = work[idx - 1]
        right = work[idx + 1]
        if left is None or right is None:
            raise InvariantViolation(f"Combinator at char {token.offset} lost its operand")

        combined = CombinatorNode(op, _promote(left), _promote(right))
        work[idx - 1] = None
        work[idx + 1] = None
        work[idx] = _node(combined, left.offset)
        idx += 3
    return [token for token in work if token is not None]



def _hasCombinator(tokens: list[Token], op: CombinatorOp) -> bool:
    return any(token.kind is TokenKind.COMBINATOR and token.value is op for token in tokens)



def _reduce(tokens: list[Token], text: str) -> RangeSpec:
    tokens = _bindUnary(tokens, text)
    tokens = _bindHyphens(tokens, text)
    _checkAlternation(tokens, text)

    # CombinatorOp is declared in precedence order
    for op in CombinatorOp:
        while _hasCombinator(tokens, op):
            tokens = _bindPass(tokens, op)

    if len(tokens) != 1:
        raise InvariantViolation(
            f"Range {text!r} reduced to {len(tokens)} tokens instead of one: "
            + ", ".join(f"'{token}'" for token in tokens)
        )

    root = tokens[0]
    if root.kind is TokenKind.WILDCARD:
        return WildcardComparator(root.value)
    return _promote(root)



def parseRange(rawRange: str) -> RangeSpec:
    """
    Parse a range expression into a predicate tree.

    Accepted forms (examples):

        "", "   "               -> >=0.0.0
        "latest"                -> LATEST (never satisfied; resolution marker)
        "1.2.3", "=1.2.3"       -> =1.2.3
        ">=1.2.0 <2.0.0"        -> intersection of both comparators
        "1.x", "1.2.*", "x"     -> wildcard comparators
        "^1.2.3", "~1.2"        -> caret / tilde comparators
        "1.2.3 - 2.3"           -> >=1.2.3 <2.4.0
        "1.x || >=2.5.0"        -> union

    Precedence from tightest to loosest: unary operators, hyphen ranges,
    intersection (whitespace), union ("||").

    Raises FormatError for text outside the grammar.
    """
    if not isinstance(rawRange, str):
        raise TypeError(f"Range must be a string, got {type(rawRange).__name__}")

    text = rawRange.strip()
    if not text:
        return RelationalComparator(">=", Version(0, 0, 0))
    if text.lower() == "latest":
        return LATEST

    try:
        spec = _reduce(scanRange(text), text)
    except FormatError as err:
        logger.debug("parseRange: rejected %r: %s", rawRange, err)
        raise

    logger.debug("parseRange: %r -> %s", rawRange, spec)
    return spec
