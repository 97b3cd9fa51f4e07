"""
Base emission utilities shared by the mapping writers.

Provides the append-only text builder used as the emission sink, plus
small helpers for rendering C# literals.
"""

from contextlib import contextmanager
from typing import List, Optional


INDENT = '    '


def quote(value: str) -> str:
    """Render value as a C# regular string literal."""
    escaped = value.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


def quote_all(values: List[str]) -> str:
    """Render values as a comma separated list of C# string literals."""
    return ', '.join(quote(v) for v in values)


# ---------------------------------------------------------------------------
# Class builder
# ---------------------------------------------------------------------------

class ClassBuilder:
    """Append-only builder for indented C# source text.

    Each writer owns its own builder; the builder is never shared between
    tables, so generated output can not interleave.
    """

    def __init__(self):
        self._lines: List[str] = []
        self._depth = 0

    def append_line(self, text: str = ''):
        """Append one line at the current indentation level."""
        if text:
            self._lines.append(INDENT * self._depth + text)
        else:
            self._lines.append('')

    def append_format(self, template: str, *args):
        """Append one line built with str.format.

        Literal C# braces in the template must be doubled ('{{' / '}}').
        """
        self.append_line(template.format(*args))

    def append_summary(self, summary: str):
        """Append an XML documentation comment."""
        self.append_line('/// <summary>')
        self.append_line('/// ' + summary)
        self.append_line('/// </summary>')

    @contextmanager
    def begin_nest(self, signature: str, summary: Optional[str] = None):
        """Open a brace-delimited block, closing it when the context exits.

        Args:
            signature: Line written before the opening brace
                (e.g. 'namespace Domain.Mapping').
            summary: Optional documentation comment written above signature.
        """
        if summary:
            self.append_summary(summary)
        self.append_line(signature)
        self.append_line('{')
        self._depth += 1
        try:
            yield self
        finally:
            self._depth -= 1
            self.append_line('}')

    @contextmanager
    def begin_brace(self, opening: str):
        """Write opening then indent following lines until the context exits.

        Unlike begin_nest, no braces are written; the caller closes the
        construct itself (e.g. the ');' ending a lambda argument).
        """
        self.append_line(opening)
        self._depth += 1
        try:
            yield self
        finally:
            self._depth -= 1

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def to_string(self) -> str:
        return '\n'.join(self._lines) + '\n'

    def __str__(self):
        return self.to_string()
