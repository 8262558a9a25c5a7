"""CREATE TABLE parser producing a structured Schema.

Input is tokenized with sqlglot and each ``CREATE TABLE`` statement is parsed by
a small recursive-descent reader. Parsing is best effort: statements or clauses
that do not fit are skipped and recorded as ``ParseIssue``s. In strict mode the
issues are raised as ``SchemaParseError`` instead.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from opentelemetry import trace
from sqlglot.errors import TokenError

from common.config.designer import get_settings
from common.errors import ErrorCode, SchemaParseError
from common.sql.dialect import normalize_sqlglot_dialect
from schema import FieldDef, ForeignKeyRef, Relationship, Schema, TableDef

from .extraction import extract_sql
from .inference import infer_relationships
from .tokens import (
    Unit,
    UnitKind,
    clause_text,
    find_closing,
    split_clauses,
    split_statements,
    tokenize,
)
from .types import AUTO_INCREMENT_TYPES, base_type, is_known_type, normalize_type

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

_SUPPORTED_READ_DIALECTS = {"postgres", "mysql", "sqlite"}
_CREATE_TABLE_RE = re.compile(
    r"\bCREATE\s+(?:(?:GLOBAL|LOCAL)\s+)?(?:(?:TEMP|TEMPORARY|UNLOGGED)\s+)?TABLE\b", re.I
)
_TABLE_PREFIX_WORDS = ("GLOBAL", "LOCAL", "TEMP", "TEMPORARY", "UNLOGGED")
_ALWAYS_CONSTRAINT_WORDS = ("CONSTRAINT", "EXCLUDE", "FULLTEXT", "SPATIAL")
_CONSTRAINT_OR_COLUMN_WORDS = ("UNIQUE", "CHECK")


class ParseMode(str, Enum):
    """How the parser reacts to input it cannot model."""

    LENIENT = "lenient"
    STRICT = "strict"


class IssueSeverity(str, Enum):
    """WARNING issues lose structure; INFO issues are clauses the model does not carry."""

    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class ParseIssue:
    """Something in the input that was skipped or could not be modeled."""

    code: ErrorCode
    message: str
    severity: IssueSeverity = IssueSeverity.WARNING
    table: Optional[str] = None
    clause: Optional[str] = None


@dataclass
class ParseReport:
    """Parsed schema plus the issues recorded while parsing it."""

    schema: Schema
    issues: List[ParseIssue] = field(default_factory=list)

    @property
    def warnings(self) -> List[ParseIssue]:
        return [i for i in self.issues if i.severity is IssueSeverity.WARNING]


@dataclass
class _PendingReference:
    table: TableDef
    field: FieldDef
    ref_table: str
    ref_column: Optional[str]


class DdlParser:
    """Parses ``CREATE TABLE`` statements into a ``Schema``."""

    def __init__(self, dialect: Optional[str] = None, mode: Optional[ParseMode] = None):
        """Initialize the parser.

        Args:
            dialect: SQL family of the input; controls identifier quoting
                (backticks for MySQL, double quotes elsewhere). Defaults to the
                configured default dialect.
            mode: Lenient or strict handling of unmodeled input. Defaults to the
                ``SCHEMA_DESIGNER_STRICT_PARSE`` setting.
        """
        settings = get_settings()
        read = normalize_sqlglot_dialect(dialect or settings.default_dialect)
        if read not in _SUPPORTED_READ_DIALECTS:
            logger.warning("Unsupported parse dialect '%s', defaulting to postgres", dialect)
            read = "postgres"
        self.read = read
        if mode is None:
            mode = ParseMode.STRICT if settings.strict_parse else ParseMode.LENIENT
        self.mode = ParseMode(mode)

    def parse(self, sql: str) -> ParseReport:
        """Parse SQL text (optionally wrapped in prose or code fences)."""
        with tracer.start_as_current_span("ddl.parse") as span:
            span.set_attribute("ddl.dialect", self.read)
            span.set_attribute("ddl.mode", self.mode.value)
            run = _ParseRun(self.read)
            try:
                run.execute(extract_sql(sql or ""))
            except Exception as exc:
                if self.mode is ParseMode.STRICT:
                    raise
                logger.exception("Unexpected DDL parser failure; returning partial schema")
                run.report(ErrorCode.INTERNAL_ERROR, f"internal parser failure: {exc}")

            report = ParseReport(schema=run.schema, issues=run.issues)
            span.set_attribute("ddl.table_count", len(report.schema.tables))
            span.set_attribute("ddl.relationship_count", len(report.schema.relationships))
            span.set_attribute("ddl.issue_count", len(report.issues))

        logger.info(
            "Parsed %d table(s) and %d relationship(s) with %d issue(s)",
            len(report.schema.tables),
            len(report.schema.relationships),
            len(report.issues),
        )
        if self.mode is ParseMode.STRICT and report.warnings:
            raise SchemaParseError(report.warnings)
        return report


class _ParseRun:
    """State of a single parse call."""

    def __init__(self, read: str):
        self.read = read
        self.schema = Schema()
        self.issues: List[ParseIssue] = []
        self._pending: List[_PendingReference] = []

    def report(
        self,
        code: ErrorCode,
        message: str,
        table: Optional[str] = None,
        clause: Optional[str] = None,
        severity: IssueSeverity = IssueSeverity.WARNING,
    ) -> None:
        issue = ParseIssue(code, message, severity, table, clause)
        self.issues.append(issue)
        level = logging.WARNING if severity is IssueSeverity.WARNING else logging.INFO
        logger.log(level, "DDL %s: %s", code.value, message)

    def execute(self, sql: str) -> None:
        for statement, source in self._statements(sql):
            if _is_create_table(statement):
                self._parse_create_table(statement, source)
            else:
                logger.debug(
                    "Skipping non CREATE TABLE statement: %.60s", clause_text(statement, source)
                )

        self._resolve_references()
        inferred = infer_relationships(self.schema)
        logger.debug("Inferred %d implicit relationship(s)", len(inferred))

    # -- statement location -------------------------------------------------

    def _statements(self, sql: str) -> List[Tuple[List[Unit], str]]:
        try:
            units = tokenize(sql, self.read)
        except TokenError as exc:
            logger.debug("Whole-input tokenization failed (%s); scanning statements", exc)
            return self._statements_from_chunks(sql)
        if _literal_hides_create_table(units, sql):
            # Apostrophes in surrounding prose paired up into a literal that
            # swallowed CREATE TABLE text; locate statements by keyword instead.
            logger.debug("String literal spans CREATE TABLE text; scanning statements")
            return self._statements_from_chunks(sql)
        return [(statement, sql) for statement in split_statements(units)]

    def _statements_from_chunks(self, sql: str) -> List[Tuple[List[Unit], str]]:
        """Tokenize each CREATE TABLE occurrence on its own so one bad span is isolated."""
        starts = [m.start() for m in _CREATE_TABLE_RE.finditer(sql)]
        found: List[Tuple[List[Unit], str]] = []
        for index, start in enumerate(starts):
            end = starts[index + 1] if index + 1 < len(starts) else len(sql)
            chunk = sql[start:end]
            units = self._tokenize_chunk(chunk)
            if units is None:
                self.report(
                    ErrorCode.TOKENIZE_FAILED,
                    "statement could not be tokenized",
                    clause=chunk.strip()[:120],
                )
                continue
            statements = split_statements(units)
            if statements:
                found.append((statements[0], chunk))
        return found

    def _tokenize_chunk(self, chunk: str) -> Optional[List[Unit]]:
        try:
            return tokenize(chunk, self.read)
        except TokenError:
            pass
        # Prose after the statement (an apostrophe in "Here's") breaks the
        # tokenizer; retry with the text up to the first terminator.
        cut = chunk.find(";")
        if cut == -1:
            return None
        try:
            return tokenize(chunk[: cut + 1], self.read)
        except TokenError:
            return None

    # -- CREATE TABLE -------------------------------------------------------

    def _parse_create_table(self, units: List[Unit], source: str) -> None:
        statement_text = clause_text(units, source)
        index = 1
        while index < len(units) and units[index].is_word(*_TABLE_PREFIX_WORDS):
            index += 1
        index += 1  # TABLE

        if (
            index + 2 < len(units)
            and units[index].is_word("IF")
            and units[index + 1].is_word("NOT")
            and units[index + 2].is_word("EXISTS")
        ):
            index += 3

        name, index = _read_qualified_name(units, index)
        if name is None:
            self.report(
                ErrorCode.MALFORMED_STATEMENT,
                "CREATE TABLE without a table name",
                clause=statement_text[:120],
            )
            return

        if index >= len(units) or not units[index].is_punct("("):
            self.report(
                ErrorCode.MALFORMED_STATEMENT,
                f"CREATE TABLE {name} has no column list",
                table=name,
                clause=statement_text[:120],
            )
            return

        close = find_closing(units, index)
        if close is None:
            self.report(
                ErrorCode.MALFORMED_STATEMENT,
                f"CREATE TABLE {name} column list is not closed",
                table=name,
                clause=statement_text[:120],
            )
            return

        if self.schema.get_table(name) is not None:
            self.report(
                ErrorCode.DUPLICATE_TABLE,
                f"table {name} is declared more than once; keeping the first declaration",
                table=name,
            )
            return

        table = TableDef(name=name)
        constraints: List[List[Unit]] = []
        for clause in split_clauses(units[index + 1 : close]):
            if _is_table_constraint(clause):
                constraints.append(clause)
                continue
            self._parse_column(table, clause, source)

        for clause in constraints:
            self._apply_table_constraint(table, clause, source)

        self.schema.tables.append(table)
        logger.debug("Parsed table %s with %d field(s)", table.name, len(table.fields))

    def _parse_column(self, table: TableDef, clause: List[Unit], source: str) -> None:
        text = clause_text(clause, source)
        if len(clause) < 2 or not clause[0].is_name:
            self.report(
                ErrorCode.MALFORMED_COLUMN,
                f"cannot read column definition '{text}'",
                table=table.name,
                clause=text,
            )
            return

        name = clause[0].identifier
        if table.get_field(name) is not None:
            self.report(
                ErrorCode.DUPLICATE_COLUMN,
                f"column {table.name}.{name} is declared more than once",
                table=table.name,
                clause=text,
            )
            return

        raw_type = clause[1].text if clause[1].is_name else ""
        nullable = True
        primary_key = False
        default_value: Optional[str] = None
        reference: Optional[Tuple[str, Optional[str]]] = None

        index = 2
        depth = 0
        while index < len(clause):
            unit = clause[index]
            if unit.is_punct("("):
                depth += 1
            elif unit.is_punct(")"):
                depth -= 1
            elif depth > 0:
                pass
            elif unit.is_word("NOT") and _next_is(clause, index, "NULL"):
                nullable = False
                index += 1
            elif unit.is_word("PRIMARY") and _next_is(clause, index, "KEY"):
                primary_key = True
                index += 1
            elif unit.is_word("REFERENCES"):
                parsed, index = self._read_reference(clause, index + 1, table.name, text)
                reference = parsed or reference
                continue
            elif unit.is_word("DEFAULT"):
                default_value, index = _read_default(clause, index + 1, source)
                continue
            index += 1

        if base_type(raw_type) in AUTO_INCREMENT_TYPES:
            primary_key = True
        if primary_key:
            nullable = False

        field_def = FieldDef(
            name=name,
            type=normalize_type(raw_type).value,
            nullable=nullable,
            primary_key=primary_key,
            default_value=default_value,
        )
        table.fields.append(field_def)
        if reference is not None:
            self._pending.append(_PendingReference(table, field_def, *reference))

    def _read_reference(
        self, clause: List[Unit], index: int, table: str, text: str
    ) -> Tuple[Optional[Tuple[str, Optional[str]]], int]:
        ref_table, index = _read_qualified_name(clause, index)
        if ref_table is None:
            self.report(
                ErrorCode.MALFORMED_COLUMN,
                f"REFERENCES without a table in '{text}'",
                table=table,
                clause=text,
            )
            return None, index
        if index < len(clause) and clause[index].is_punct("("):
            columns, index = _read_name_list(clause, index)
            if len(columns) != 1:
                self.report(
                    ErrorCode.UNSUPPORTED_CONSTRAINT,
                    f"reference to {ref_table}({', '.join(columns)}) is not a single column",
                    table=table,
                    clause=text,
                )
                return None, index
            return (ref_table, columns[0]), index
        return (ref_table, None), index

    # -- table-level constraints --------------------------------------------

    def _apply_table_constraint(self, table: TableDef, clause: List[Unit], source: str) -> None:
        text = clause_text(clause, source)
        index = 0
        if clause[0].is_word("CONSTRAINT"):
            index = 2  # CONSTRAINT <name>

        if _word_pair(clause, index, "PRIMARY", "KEY"):
            columns, _ = _read_name_list(clause, index + 2)
            if len(columns) != 1:
                self.report(
                    ErrorCode.UNSUPPORTED_CONSTRAINT,
                    f"composite primary key ({', '.join(columns)}) on {table.name} is not modeled",
                    table=table.name,
                    clause=text,
                )
                return
            target = table.get_field(columns[0])
            if target is None:
                self.report(
                    ErrorCode.UNRESOLVED_REFERENCE,
                    f"primary key names unknown column {table.name}.{columns[0]}",
                    table=table.name,
                    clause=text,
                )
                return
            target.primary_key = True
            target.nullable = False
            return

        if _word_pair(clause, index, "FOREIGN", "KEY"):
            self._apply_foreign_key(table, clause, index + 2, text)
            return

        self.report(
            ErrorCode.UNSUPPORTED_CONSTRAINT,
            f"table constraint on {table.name} is not modeled: {text}",
            table=table.name,
            clause=text,
            severity=IssueSeverity.INFO,
        )

    def _apply_foreign_key(
        self, table: TableDef, clause: List[Unit], index: int, text: str
    ) -> None:
        columns, index = _read_name_list(clause, index)
        if index >= len(clause) or not clause[index].is_word("REFERENCES"):
            self.report(
                ErrorCode.MALFORMED_COLUMN,
                f"FOREIGN KEY without REFERENCES on {table.name}",
                table=table.name,
                clause=text,
            )
            return
        reference, _ = self._read_reference(clause, index + 1, table.name, text)
        if reference is None:
            return
        if len(columns) != 1:
            self.report(
                ErrorCode.UNSUPPORTED_CONSTRAINT,
                f"composite foreign key ({', '.join(columns)}) on {table.name} is not modeled",
                table=table.name,
                clause=text,
            )
            return
        source_field = table.get_field(columns[0])
        if source_field is None:
            self.report(
                ErrorCode.UNRESOLVED_REFERENCE,
                f"foreign key names unknown column {table.name}.{columns[0]}",
                table=table.name,
                clause=text,
            )
            return
        if any(p.field is source_field for p in self._pending):
            self.report(
                ErrorCode.CONFLICTING_REFERENCE,
                f"{table.name}.{source_field.name} already has a REFERENCES clause",
                table=table.name,
                clause=text,
            )
            return
        self._pending.append(_PendingReference(table, source_field, *reference))

    # -- explicit relationships ---------------------------------------------

    def _resolve_references(self) -> None:
        """Attach explicit references in table order, filling omitted columns with the target PK."""
        by_table: Dict[int, List[_PendingReference]] = {}
        for pending in self._pending:
            by_table.setdefault(id(pending.table), []).append(pending)

        for table in self.schema.tables:
            for pending in by_table.get(id(table), []):
                column = pending.ref_column
                if column is None:
                    target = self.schema.get_table(pending.ref_table)
                    pk = target.primary_key_field() if target is not None else None
                    if pk is None:
                        self.report(
                            ErrorCode.UNRESOLVED_REFERENCE,
                            f"{table.name}.{pending.field.name} references {pending.ref_table} "
                            "without a column and no primary key is known",
                            table=table.name,
                        )
                        continue
                    column = pk.name
                pending.field.foreign_key = ForeignKeyRef(table=pending.ref_table, column=column)
                relationship = Relationship(
                    from_table=table.name,
                    from_field=pending.field.name,
                    to_table=pending.ref_table,
                    to_field=column,
                )
                self.schema.relationships.append(relationship)
                logger.debug("Found explicit relationship %s", relationship)
        self._pending = []


def _is_create_table(units: List[Unit]) -> bool:
    if not units or not units[0].is_word("CREATE"):
        return False
    index = 1
    while index < len(units) and units[index].is_word(*_TABLE_PREFIX_WORDS):
        index += 1
    return index < len(units) and units[index].is_word("TABLE")


def _is_table_constraint(clause: List[Unit]) -> bool:
    first = clause[0]
    if first.is_word(*_ALWAYS_CONSTRAINT_WORDS):
        return True
    if _word_pair(clause, 0, "PRIMARY", "KEY") or _word_pair(clause, 0, "FOREIGN", "KEY"):
        return True
    if first.is_word(*_CONSTRAINT_OR_COLUMN_WORDS):
        # "unique BOOLEAN" is a column named unique
        return not (len(clause) > 1 and clause[1].is_name and is_known_type(clause[1].text))
    if first.is_word("INDEX", "KEY") and len(clause) > 1:
        if clause[1].is_punct("("):
            return True
        second_is_type = clause[1].is_name and is_known_type(clause[1].text)
        return len(clause) > 2 and clause[2].is_punct("(") and not second_is_type
    return False


def _literal_hides_create_table(units: List[Unit], source: str) -> bool:
    return any(
        unit.kind is UnitKind.STRING and _CREATE_TABLE_RE.search(source, unit.start, unit.end + 1)
        for unit in units
    )


def _word_pair(units: List[Unit], index: int, first: str, second: str) -> bool:
    return (
        index + 1 < len(units) and units[index].is_word(first) and units[index + 1].is_word(second)
    )


def _next_is(units: List[Unit], index: int, word: str) -> bool:
    return index + 1 < len(units) and units[index + 1].is_word(word)


def _read_qualified_name(units: List[Unit], index: int) -> Tuple[Optional[str], int]:
    """Read ``name`` or ``schema.name``; returns the last part."""
    if index >= len(units) or not units[index].is_name:
        return None, index
    name = units[index].identifier
    index += 1
    while (
        index + 1 < len(units) and units[index].is_punct(".") and units[index + 1].is_name
    ):
        name = units[index + 1].identifier
        index += 2
    return name, index


def _read_name_list(units: List[Unit], index: int) -> Tuple[List[str], int]:
    """Read ``( a, b, ... )`` starting at ``index``; returns names and the index after ``)``."""
    if index >= len(units) or not units[index].is_punct("("):
        return [], index
    close = find_closing(units, index)
    end = close if close is not None else len(units)
    names = [
        group[0].identifier
        for group in split_clauses(units[index + 1 : end])
        if group and group[0].is_name
    ]
    return names, end + 1


def _read_default(units: List[Unit], index: int, source: str) -> Tuple[Optional[str], int]:
    """Capture the raw DEFAULT expression text starting at ``index``."""
    if index >= len(units):
        return None, index
    first = units[index]
    if first.is_punct(",") or first.is_punct(")"):
        return None, index

    end = index
    if first.is_punct("("):
        close = find_closing(units, index)
        end = close if close is not None else len(units) - 1
    elif first.text in ("-", "+") and index + 1 < len(units):
        end = index + 1
    elif index + 1 < len(units) and units[index + 1].is_punct("("):
        close = find_closing(units, index + 1)
        end = close if close is not None else len(units) - 1

    # Postgres casts: 'now'::timestamp
    while end + 2 < len(units) and units[end + 1].text == "::":
        end += 2

    raw = source[first.start : units[end].end + 1]
    return raw, end + 1


def parse_sql_with_report(
    sql: str, dialect: Optional[str] = None, mode: Optional[ParseMode] = None
) -> ParseReport:
    """Parse SQL text and return the schema together with parse issues."""
    return DdlParser(dialect=dialect, mode=mode).parse(sql)


def parse_sql(sql: str, dialect: Optional[str] = None, mode: Optional[ParseMode] = None) -> Schema:
    """Parse SQL text into a Schema.

    In the default lenient mode this never raises: malformed statements are
    skipped and the (possibly empty) schema is returned.
    """
    return parse_sql_with_report(sql, dialect=dialect, mode=mode).schema
