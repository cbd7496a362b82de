"""Text helpers."""

from __future__ import annotations

import textwrap


def word_wrap(text: str, max_width: int) -> str:
    """Wrap each line to ``max_width``, keeping existing line breaks and blank lines."""
    wrapped: list[str] = []
    for line in text.split("\n"):
        if not line.strip():
            wrapped.append("")
        elif len(line) <= max_width:
            wrapped.append(line)
        else:
            # Words longer than the width stay on their own line, unbroken
            wrapped.extend(
                textwrap.wrap(line, width=max_width, break_long_words=False, break_on_hyphens=False)
            )
    return "\n".join(wrapped)


def indent_all_lines(text: str, indent: int) -> str:
    padding = " " * indent
    return "\n".join(padding + line for line in text.split("\n"))


def indent_multiline(text: str, indent: int) -> str:
    """Indent continuation lines so they align under the first one."""
    lines = text.split("\n")
    if len(lines) <= 1:
        return text
    padding = " " * indent
    return "\n".join([lines[0]] + [padding + line for line in lines[1:]])
