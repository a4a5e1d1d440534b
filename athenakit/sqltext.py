"""Helpers for inspecting, escaping and formatting Athena SQL text."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from typing import Optional, Union

__all__ = [
    "scan_null_string",
    "escape_bytes_backslash",
    "format_string",
    "format_bytes",
    "is_qid",
    "col_in_first_page",
    "is_read_only_statement",
    "is_insert_statement",
    "get_table_names_in_query",
    "get_from_env_val",
]

DEFAULT_DB_NAME = "default"

_WS = r"[\t\n\f\r ]"
_MULTI_LINE_COMMENT = re.compile(r"/\*(.*)\*/" + _WS + "*")
_ONE_LINE_COMMENT = re.compile(r"(^--[^\n]+|" + _WS + r"--[^\n]+)")
_TABLE_NAME = re.compile(
    _WS + r"+(?:from|join)" + _WS + r"+([\w.]+)", re.IGNORECASE | re.ASCII
)
_QID = re.compile(r"[0-9a-f-]{36}")

_STR_ESCAPES = {
    "\x00": "\\0",
    "\n": "\\n",
    "\r": "\\r",
    "\x1a": "\\Z",
    # Athena escapes a single quote by doubling it.
    "'": "''",
    '"': '\\"',
    "\\": "\\\\",
}
_BYTE_ESCAPES = {ord(k): v.encode("ascii") for k, v in _STR_ESCAPES.items()}


def scan_null_string(value: object) -> Optional[str]:
    """Return ``value`` as a nullable string; ``None`` stays ``None``.

    Raises TypeError for anything that is neither ``None`` nor a ``str``.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(
            f"cannot convert {value!r} ({type(value).__name__}) to string"
        )
    return value


def escape_bytes_backslash(value: Union[bytes, bytearray, str]) -> Union[bytes, str]:
    """Escape special characters; returns the same kind (bytes or str) as given."""
    if isinstance(value, str):
        return "".join(_STR_ESCAPES.get(ch, ch) for ch in value)
    return b"".join(_BYTE_ESCAPES.get(c, bytes((c,))) for c in value)


def format_string(value: str) -> str:
    """Escape a string query argument and wrap it in single quotes."""
    return f"'{escape_bytes_backslash(value)}'"


def format_bytes(value: Union[bytes, bytearray]) -> bytes:
    """Escape a binary query argument and wrap it as ``_binary'...'``."""
    return b"_binary'" + escape_bytes_backslash(bytes(value)) + b"'"


def is_qid(query: str) -> bool:
    """Tell whether ``query`` is an Athena query execution id."""
    return _QID.fullmatch(query) is not None


def _normalized(query: str) -> str:
    return query.strip().lower()


def col_in_first_page(query: str) -> bool:
    """Tell whether the statement's first result page starts with column names."""
    return _normalized(query).startswith(("select", "using", "with", "values"))


def is_read_only_statement(query: str) -> bool:
    """Tell whether the statement only reads data (or is a query id)."""
    return _normalized(query).startswith(
        ("select", "using", "with", "desc", "show")
    ) or is_qid(query)


def is_insert_statement(query: str) -> bool:
    """Tell whether the statement is an INSERT."""
    return _normalized(query).startswith("insert")


def _strip_comments(query: str) -> str:
    query = _MULTI_LINE_COMMENT.sub("", query)
    return _ONE_LINE_COMMENT.sub("", query)


def get_table_names_in_query(query: str, default_db: str = DEFAULT_DB_NAME) -> set[str]:
    """Return the tables a query touches, as ``DB.TABLE`` names.

    The match is pessimistic: words after FROM or JOIN inside string
    literals are reported too. Unqualified names get ``default_db``.
    """
    tables: set[str] = set()
    for name in _TABLE_NAME.findall(_strip_comments(query)):
        tables.add(name if "." in name else f"{default_db}.{name}")
    return tables


def get_from_env_val(keys: Iterable[str]) -> str:
    """Return the first non-empty environment value among ``keys``, else ``""``."""
    for key in keys:
        value = os.environ.get(key, "")
        if value:
            return value
    return ""