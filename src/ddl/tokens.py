"""Token stream for DDL parsing, built on the sqlglot tokenizer.

sqlglot tokens are flattened into ``Unit``s: multi-word keyword tokens such as
``PRIMARY KEY`` become one unit per word, while quoted identifiers, string
literals and numbers stay atomic. Every unit keeps the source offsets of its
token so literal values can be sliced verbatim from the input.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import sqlglot
from sqlglot.tokens import Token, TokenType

_PUNCT_TYPES = {
    TokenType.L_PAREN,
    TokenType.R_PAREN,
    TokenType.COMMA,
    TokenType.SEMICOLON,
    TokenType.DOT,
}
_QUOTE_CHARS = "`\"[]"


class UnitKind(str, Enum):
    WORD = "word"
    QUOTED = "quoted"
    STRING = "string"
    NUMBER = "number"
    PUNCT = "punct"


@dataclass(frozen=True)
class Unit:
    """A single lexical unit of a DDL statement."""

    text: str
    kind: UnitKind
    start: int
    end: int

    @property
    def upper(self) -> str:
        return self.text.upper()

    def is_word(self, *words: str) -> bool:
        """True for an unquoted word matching any of ``words`` (case-insensitive)."""
        return self.kind is UnitKind.WORD and self.upper in words

    def is_punct(self, char: str) -> bool:
        return self.kind is UnitKind.PUNCT and self.text == char

    @property
    def is_name(self) -> bool:
        """True when the unit can serve as an identifier."""
        return self.kind in (UnitKind.WORD, UnitKind.QUOTED)

    @property
    def identifier(self) -> str:
        """Lower-cased identifier with any leftover quote characters removed."""
        return self.text.strip(_QUOTE_CHARS).lower()


def _units_for(token: Token) -> List[Unit]:
    token_type = token.token_type
    start, end = token.start, token.end
    if token_type in _PUNCT_TYPES:
        return [Unit(token.text, UnitKind.PUNCT, start, end)]
    if token_type == TokenType.IDENTIFIER:
        return [Unit(token.text, UnitKind.QUOTED, start, end)]
    if token_type.name.endswith("STRING"):
        return [Unit(token.text, UnitKind.STRING, start, end)]
    if token_type == TokenType.NUMBER:
        return [Unit(token.text, UnitKind.NUMBER, start, end)]
    return [Unit(word, UnitKind.WORD, start, end) for word in token.text.split()]


def tokenize(sql: str, read: str) -> List[Unit]:
    """Tokenize ``sql`` with the sqlglot dialect ``read``.

    Raises:
        sqlglot.errors.TokenError: when the text cannot be tokenized (for
            example an unterminated string literal).
    """
    units: List[Unit] = []
    for token in sqlglot.tokenize(sql, read=read):
        units.extend(_units_for(token))
    return units


def split_statements(units: List[Unit]) -> List[List[Unit]]:
    """Split on top-level ``;`` and before every ``CREATE`` that starts a statement.

    A missing terminator between two statements therefore never merges them.
    """
    statements: List[List[Unit]] = []
    current: List[Unit] = []
    depth = 0
    for unit in units:
        if unit.is_punct("("):
            depth += 1
        elif unit.is_punct(")"):
            depth = max(depth - 1, 0)
        elif unit.is_punct(";") and depth == 0:
            if current:
                statements.append(current)
            current = []
            continue
        elif unit.is_word("CREATE") and depth == 0 and current:
            statements.append(current)
            current = []
        current.append(unit)
    if current:
        statements.append(current)
    return statements


def find_closing(units: List[Unit], open_index: int) -> Optional[int]:
    """Return the index of the ``)`` matching the ``(`` at ``open_index``."""
    depth = 0
    for index in range(open_index, len(units)):
        unit = units[index]
        if unit.is_punct("("):
            depth += 1
        elif unit.is_punct(")"):
            depth -= 1
            if depth == 0:
                return index
    return None


def split_clauses(units: List[Unit]) -> List[List[Unit]]:
    """Split a table body on commas that are not nested inside parentheses.

    ``price NUMERIC(10,2) NOT NULL`` stays a single clause.
    """
    clauses: List[List[Unit]] = []
    current: List[Unit] = []
    depth = 0
    for unit in units:
        if unit.is_punct("("):
            depth += 1
        elif unit.is_punct(")"):
            depth -= 1
        elif unit.is_punct(",") and depth == 0:
            if current:
                clauses.append(current)
            current = []
            continue
        current.append(unit)
    if current:
        clauses.append(current)
    return clauses


def clause_text(units: List[Unit], source: str) -> str:
    """Original source text spanned by ``units``."""
    if not units:
        return ""
    return source[units[0].start : units[-1].end + 1]
