"""Pull SQL out of free-form AI responses.

Model output usually wraps SQL in fenced code blocks surrounded by prose. While a
response is still streaming the last block may not be closed yet.
"""

import re
from dataclasses import dataclass
from typing import List

_COMPLETE_BLOCK_RE = re.compile(r"```[ \t]*(?:sql)?[ \t]*\r?\n(.*?)\r?\n?[ \t]*```", re.I | re.S)
_OPEN_BLOCK_RE = re.compile(r"```[ \t]*(?:sql)?[ \t]*\r?\n(.*)$", re.I | re.S)


@dataclass(frozen=True)
class ResponsePart:
    """One slice of a response: prose (``kind == "text"``) or a SQL block."""

    kind: str
    content: str
    complete: bool = True


def split_response(text: str) -> List[ResponsePart]:
    """Split a response into prose and SQL parts in order of appearance."""
    if not text:
        return []

    parts: List[ResponsePart] = []
    cursor = 0
    for match in _COMPLETE_BLOCK_RE.finditer(text):
        before = text[cursor : match.start()]
        if before.strip():
            parts.append(ResponsePart("text", before))
        parts.append(ResponsePart("sql", match.group(1)))
        cursor = match.end()

    tail = text[cursor:]
    open_block = _OPEN_BLOCK_RE.search(tail)
    if open_block:
        before = tail[: open_block.start()]
        if before.strip():
            parts.append(ResponsePart("text", before))
        parts.append(ResponsePart("sql", open_block.group(1), complete=False))
    elif tail.strip():
        parts.append(ResponsePart("text", tail))
    return parts


def extract_sql(text: str) -> str:
    """Return the SQL carried by a response.

    Fenced blocks are joined with blank lines; text without any fence is returned
    unchanged so plain SQL passes straight through.
    """
    parts = split_response(text)
    blocks = [p.content for p in parts if p.kind == "sql"]
    if not blocks:
        return text or ""
    return "\n\n".join(blocks)
