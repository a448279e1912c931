"""Case-insensitive name patterns."""

from __future__ import annotations

import re
from dataclasses import dataclass

from treefind.errors import CompileError


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    source: str
    regex: re.Pattern[str]

    def matches(self, name: str) -> bool:
        # Unanchored: the pattern may occur anywhere in the name.
        return self.regex.search(name) is not None


def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile ``pattern`` as an unanchored, case-insensitive regular expression.

    An empty pattern matches every name. Syntax errors raise ``CompileError``
    rather than degrading to match-all or match-nothing.
    """
    try:
        regex = re.compile(pattern, re.IGNORECASE)
    except re.error as exc:
        raise CompileError(pattern, str(exc)) from exc
    return CompiledPattern(source=pattern, regex=regex)


def matches(compiled: CompiledPattern, name: str) -> bool:
    return compiled.matches(name)
