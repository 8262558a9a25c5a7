"""Comment-aware splitting of SQL scripts into statements."""

from __future__ import annotations


def split_sql_statements(sql: str, keep_terminator: bool = False) -> list[str]:
    """Split a script on top-level semicolons.

    Line (``--``) and block (``/* */``) comments are dropped, quoted strings and
    quoted identifiers are kept intact (a ``;`` inside them never splits).
    Empty statements are omitted.
    """
    if not isinstance(sql, str) or not sql:
        return []

    statements: list[str] = []
    buf: list[str] = []
    quote: str | None = None
    i = 0
    n = len(sql)

    def flush(terminator: str) -> None:
        text = "".join(buf).strip()
        buf.clear()
        if text:
            statements.append(text + terminator if keep_terminator else text)

    while i < n:
        ch = sql[i]
        nxt = sql[i + 1] if i + 1 < n else ""

        if quote is not None:
            buf.append(ch)
            if ch == quote:
                if nxt == quote:  # Doubled quote escape
                    buf.append(nxt)
                    i += 2
                    continue
                quote = None
            i += 1
            continue

        if ch in ("'", '"', "`"):
            quote = ch
            buf.append(ch)
            i += 1
            continue

        if ch == "-" and nxt == "-":
            end = sql.find("\n", i)
            if end == -1:
                break
            buf.append("\n")
            i = end + 1
            continue

        if ch == "/" and nxt == "*":
            end = sql.find("*/", i + 2)
            buf.append(" ")
            if end == -1:
                break
            i = end + 2
            continue

        if ch == ";":
            flush(";")
            i += 1
            continue

        buf.append(ch)
        i += 1

    flush("")
    return statements
