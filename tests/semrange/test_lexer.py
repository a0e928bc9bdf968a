# tests/semrange/test_lexer.py
import pytest

from semrange.errors import FormatError
from semrange.lexer import TokenKind, scanRange
from semrange.predicates import CombinatorOp
from semrange.version import Version, WildcardVersion


def _kinds(text: str) -> list[TokenKind]:
    return [token.kind for token in scanRange(text)]


def test_scan_operators_absorb_trailing_whitespace():
    tokens = scanRange(">= 1.2.3")
    assert [t.kind for t in tokens] == [TokenKind.OPERATOR, TokenKind.VERSION]
    assert tokens[0].value == ">="
    assert tokens[1].value == Version(1, 2, 3)
    assert tokens[1].offset == 3


@pytest.mark.parametrize("op", ["<", "<=", ">", ">=", "=", "~", "^"])
def test_scan_every_operator(op):
    tokens = scanRange(f"{op}1.2.3")
    assert tokens[0].kind is TokenKind.OPERATOR
    assert tokens[0].value == op


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1.2", WildcardVersion(1, 2)),
        ("1.2.x", WildcardVersion(1, 2)),
        ("1.2.*", WildcardVersion(1, 2)),
        ("1", WildcardVersion(1)),
        ("1.x", WildcardVersion(1)),
        ("1.X.x", WildcardVersion(1)),
        ("x", WildcardVersion()),
        ("*", WildcardVersion()),
        ("x.X.*", WildcardVersion()),
    ],
)
def test_scan_wildcards(text, expected):
    tokens = scanRange(text)
    assert len(tokens) == 1
    assert tokens[0].kind is TokenKind.WILDCARD
    assert tokens[0].value == expected


def test_full_version_wins_over_wildcards():
    tokens = scanRange("1.2.3-beta.1+build")
    assert len(tokens) == 1
    assert tokens[0].kind is TokenKind.VERSION
    assert str(tokens[0].value) == "1.2.3-beta.1+build"


def test_scan_hyphen_and_combinators():
    assert _kinds("1.2.3 - 2.0.0") == [TokenKind.VERSION, TokenKind.HYPHEN, TokenKind.VERSION]
    assert _kinds("1.2.3-2.0.0") == [TokenKind.VERSION]

    tokens = scanRange("1.x  ||  2.x 3.x")
    assert [t.kind for t in tokens] == [
        TokenKind.WILDCARD, TokenKind.COMBINATOR, TokenKind.WILDCARD,
        TokenKind.COMBINATOR, TokenKind.WILDCARD,
    ]
    assert tokens[1].value is CombinatorOp.UNION
    assert tokens[3].value is CombinatorOp.INTERSECTION


def test_scan_union_without_spaces():
    tokens = scanRange(">=1.0.0||<0.5.0")
    assert [t.kind for t in tokens] == [
        TokenKind.OPERATOR, TokenKind.VERSION, TokenKind.COMBINATOR,
        TokenKind.OPERATOR, TokenKind.VERSION,
    ]


@pytest.mark.parametrize(
    "text, offset",
    [
        ("abc", 0),
        ("1.2.3 foo", 6),
        ("1.2.3.4", 5),
        ("x.y.z", 1),
        ("1.2.3 | 1.2.4", 6),
    ],
)
def test_scan_unexpected_token_cites_offset(text, offset):
    with pytest.raises(FormatError) as excInfo:
        scanRange(text)
    assert excInfo.value.offset == offset
    assert f"at char {offset}" in str(excInfo.value)
