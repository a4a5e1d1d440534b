"""Turn query results into CSV text and printable tables."""

from __future__ import annotations

import html
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Optional, TextIO

from tabulate import tabulate

__all__ = [
    "OUTPUT_STYLES",
    "OUTPUT_FORMATS",
    "ResultSet",
    "cols_to_csv",
    "rows_to_csv",
    "cols_rows_to_csv",
    "render_table",
    "pretty_print_rows",
    "pretty_print_cols_rows",
    "pretty_print_csv",
    "pretty_print_md",
    "pretty_print_fancy",
]

OUTPUT_STYLES = (
    "StyleDefault",
    "StyleBold",
    "StyleColoredBright",
    "StyleColoredDark",
    "StyleColoredBlackOnBlueWhite",
    "StyleColoredBlackOnCyanWhite",
    "StyleColoredBlackOnGreenWhite",
    "StyleColoredBlackOnMagentaWhite",
    "StyleColoredBlackOnYellowWhite",
    "StyleColoredBlackOnRedWhite",
    "StyleColoredBlueWhiteOnBlack",
    "StyleColoredCyanWhiteOnBlack",
    "StyleColoredGreenWhiteOnBlack",
    "StyleColoredMagentaWhiteOnBlack",
    "StyleColoredRedWhiteOnBlack",
    "StyleColoredYellowWhiteOnBlack",
    "StyleDouble",
    "StyleLight",
    "StyleRounded",
)

OUTPUT_FORMATS = ("csv", "html", "markdown", "table")

DEFAULT_PAGE_SIZE = 1024

# Box-drawing layouts for the uncoloured styles.
_BOX_FORMATS = {
    "StyleDefault": "psql",
    "StyleBold": "heavy_outline",
    "StyleDouble": "double_outline",
    "StyleLight": "simple_outline",
    "StyleRounded": "rounded_outline",
}

# ANSI SGR codes: (header, row, alternate row).
_COLOR_PALETTES = {
    "StyleColoredBright": ("30;106", "30;107", "30;47"),
    "StyleColoredDark": ("96;40", "97;40", "37;40"),
    "StyleColoredBlackOnBlueWhite": ("30;104", "30;107", "30;47"),
    "StyleColoredBlackOnCyanWhite": ("30;106", "30;107", "30;47"),
    "StyleColoredBlackOnGreenWhite": ("30;102", "30;107", "30;47"),
    "StyleColoredBlackOnMagentaWhite": ("30;105", "30;107", "30;47"),
    "StyleColoredBlackOnYellowWhite": ("30;103", "30;107", "30;47"),
    "StyleColoredBlackOnRedWhite": ("30;101", "30;107", "30;47"),
    "StyleColoredBlueWhiteOnBlack": ("30;104", "94;40", "34;40"),
    "StyleColoredCyanWhiteOnBlack": ("30;106", "96;40", "36;40"),
    "StyleColoredGreenWhiteOnBlack": ("30;102", "92;40", "32;40"),
    "StyleColoredMagentaWhiteOnBlack": ("30;105", "95;40", "35;40"),
    "StyleColoredRedWhiteOnBlack": ("30;101", "91;40", "31;40"),
    "StyleColoredYellowWhiteOnBlack": ("30;103", "93;40", "33;40"),
}


@dataclass
class ResultSet:
    """Column names plus the rows of a query result.

    Cells may be ``None``, ``bytes`` or any value; they are shown as text.
    """

    columns: list[str] = field(default_factory=list)
    rows: list[Sequence[Any]] = field(default_factory=list)

    def text_rows(self) -> list[list[str]]:
        """Rows as text, each fitted to the number of columns."""
        width = len(self.columns)
        fitted = []
        for row in self.rows:
            cells = list(row)[:width]
            cells.extend([None] * (width - len(cells)))
            fitted.append([_cell_text(cell) for cell in cells])
        return fitted


def _cell_text(cell: Any) -> str:
    if cell is None:
        return ""
    if isinstance(cell, (bytes, bytearray)):
        return bytes(cell).decode("utf-8", errors="replace")
    return str(cell)


def _csv_field(value: str) -> str:
    needs_quotes = value == "\\." or (
        value != ""
        and (any(ch in value for ch in ',"\r\n') or value[0].isspace())
    )
    if not needs_quotes:
        return value
    return '"' + value.replace('"', '""') + '"'


def _csv_line(cells: Sequence[str]) -> str:
    return ",".join(_csv_field(cell) for cell in cells)


def cols_to_csv(result: Optional[ResultSet]) -> str:
    """Column names as one comma separated line, or ``""`` without columns."""
    if result is None or not result.columns:
        return ""
    return ",".join(result.columns) + "\n"


def rows_to_csv(result: Optional[ResultSet]) -> str:
    """Rows as CSV records, each ending with a newline."""
    if result is None:
        return ""
    return "".join(_csv_line(row) + "\n" for row in result.text_rows())


def cols_rows_to_csv(result: Optional[ResultSet]) -> str:
    """Column line followed by the CSV rows."""
    return cols_to_csv(result) + rows_to_csv(result)


def _pages(rows: list[list[str]], page: int) -> list[list[list[str]]]:
    if page <= 0 or len(rows) <= page:
        return [rows]
    return [rows[start:start + page] for start in range(0, len(rows), page)]


def _render_box(headers: list[str], rows: list[list[str]], style: str) -> str:
    palette = _COLOR_PALETTES.get(style)
    if palette is None:
        fmt = _BOX_FORMATS.get(style, "psql")
        return tabulate(rows, headers=headers or (), tablefmt=fmt,
                        disable_numparse=True)
    header_code, row_code, alt_code = palette
    text = tabulate(rows, headers=headers or (), tablefmt="plain",
                    disable_numparse=True)
    lines = text.split("\n") if text else []
    colored = []
    if headers and lines:
        colored.append(f"\x1b[{header_code}m {lines[0]} \x1b[0m")
        lines = lines[1:]
    for number, line in enumerate(lines):
        code = row_code if number % 2 == 0 else alt_code
        colored.append(f"\x1b[{code}m {line} \x1b[0m")
    return "\n".join(colored)


def _render_text_table(headers, rows, style, page) -> str:
    if not headers and not rows:
        return ""
    return "\n\n".join(
        _render_box(headers, chunk, style) for chunk in _pages(rows, page)
    )


def _md_cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", "<br/>")


def _render_markdown(headers: list[str], rows: list[list[str]]) -> str:
    lines = []
    if headers:
        lines.append("| " + " | ".join(_md_cell(h) for h in headers) + " |")
        lines.append("| " + " | ".join("---" for _ in headers) + " |")
    lines.extend("| " + " | ".join(_md_cell(c) for c in row) + " |" for row in rows)
    return "\n".join(lines)


def _html_cell(tag: str, value: str) -> str:
    text = html.escape(value).replace("\n", "<br/>")
    return f"    <{tag}>{text}</{tag}>"


def _render_html(headers: list[str], rows: list[list[str]]) -> str:
    lines = ['<table class="result-table">']
    if headers:
        lines += ["  <thead>", "  <tr>"]
        lines += [_html_cell("th", h) for h in headers]
        lines += ["  </tr>", "  </thead>"]
    lines.append("  <tbody>")
    for row in rows:
        lines.append("  <tr>")
        lines += [_html_cell("td", c) for c in row]
        lines.append("  </tr>")
    lines += ["  </tbody>", "</table>"]
    return "\n".join(lines)


def _render_csv(headers: list[str], rows: list[list[str]]) -> str:
    lines = [_csv_line(headers)] if headers else []
    lines.extend(_csv_line(row) for row in rows)
    return "\n".join(lines)


def render_table(
    result: Optional[ResultSet],
    style: str = "StyleDefault",
    render: str = "csv",
    page: int = DEFAULT_PAGE_SIZE,
    header: bool = True,
) -> str:
    """Render a result as ``table``, ``markdown``, ``html`` or (otherwise) CSV.

    Unknown styles fall back to the default style; ``page`` splits
    table output into pages of that many rows when positive.
    """
    if result is None:
        return ""
    headers = list(result.columns) if header else []
    rows = result.text_rows()
    if render == "table":
        return _render_text_table(headers, rows, style, page)
    if render == "markdown":
        return _render_markdown(headers, rows)
    if render == "html":
        return _render_html(headers, rows)
    return _render_csv(headers, rows)


def _emit(text: str, file: Optional[TextIO]) -> str:
    out = sys.stdout if file is None else file
    if text:
        print(text, file=out)
    return text


def pretty_print_rows(
    result: Optional[ResultSet],
    style: str = "StyleDefault",
    render: str = "csv",
    page: int = DEFAULT_PAGE_SIZE,
    file: Optional[TextIO] = None,
) -> str:
    """Print the rows without a header; returns what was printed."""
    if result is None:
        return ""
    return _emit(render_table(result, style, render, page, header=False), file)


def pretty_print_cols_rows(
    result: Optional[ResultSet],
    style: str = "StyleDefault",
    render: str = "csv",
    page: int = DEFAULT_PAGE_SIZE,
    file: Optional[TextIO] = None,
) -> str:
    """Print the rows under a header of column names; returns what was printed."""
    if result is None:
        return ""
    return _emit(render_table(result, style, render, page, header=True), file)


def pretty_print_csv(result: Optional[ResultSet], file: Optional[TextIO] = None) -> str:
    """Print as CSV with a header."""
    return pretty_print_cols_rows(result, "StyleDefault", "csv", DEFAULT_PAGE_SIZE, file)


def pretty_print_md(result: Optional[ResultSet], file: Optional[TextIO] = None) -> str:
    """Print as a markdown table."""
    return pretty_print_cols_rows(
        result, "StyleDefault", "markdown", DEFAULT_PAGE_SIZE, file
    )


def pretty_print_fancy(result: Optional[ResultSet], file: Optional[TextIO] = None) -> str:
    """Print as a coloured text table."""
    return pretty_print_cols_rows(
        result, "StyleColoredGreenWhiteOnBlack", "table", DEFAULT_PAGE_SIZE, file
    )