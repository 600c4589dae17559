"""Locating a character position within multi-line source text."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ErrorLineExtract:
    """Line and column (both starting at 1) and the text of that line."""

    line_num: int
    column_num: int
    text: str


def _split_after_newlines(source: str) -> list[str]:
    parts = source.split("\n")
    return [part + "\n" for part in parts[:-1]] + [parts[-1]]


def extract_error_line(source: str, position: int) -> ErrorLineExtract:
    """Find the line, column and line text of a 1-based position in ``source``."""
    if position > len(source):
        raise ValueError(
            f"position ({position}) is greater than source length ({len(source)})"
        )

    line_num = 1
    column_num = 0
    text = ""
    for text in _split_after_newlines(source):
        if position - len(text) < 1:
            column_num = position
            break
        line_num += 1
        position -= len(text)

    return ErrorLineExtract(
        line_num=line_num, column_num=column_num, text=text.removesuffix("\n")
    )