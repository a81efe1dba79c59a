"""Validation patterns written in JavaScript ``RegExp`` syntax.

Patterns come from the hosting platform, where they are evaluated with
``RegExp.test``. Python's ``re`` differs in two places that matter for a
gate: ``$`` also matches before a trailing newline, and ``\\d``/``\\w``
match any Unicode digit or letter. ``compile_pattern`` closes both gaps by
compiling with ``re.ASCII`` and rewriting end anchors to ``\\Z``.
"""

from __future__ import annotations

import re


def translate_pattern(source: str) -> str:
    """Rewrite unescaped ``$`` outside character classes to ``\\Z``."""
    out: list[str] = []
    in_class = False
    i = 0
    while i < len(source):
        char = source[i]
        if char == "\\":
            out.append(source[i : i + 2])
            i += 2
            continue
        if in_class:
            if char == "]":
                in_class = False
        elif char == "[":
            in_class = True
        elif char == "$":
            char = r"\Z"
        out.append(char)
        i += 1
    return "".join(out)


def compile_pattern(source: str) -> re.Pattern[str]:
    """Compile a ``RegExp`` source string with ``RegExp.test`` matching rules.

    Raises:
        re.error: The pattern is not a valid regular expression.
    """
    return re.compile(translate_pattern(source), re.ASCII)
