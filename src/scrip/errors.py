"""Diagnostic types with formatted source context."""

from __future__ import annotations

from dataclasses import dataclass, field

from scrip.tokens import Position, Span, line_text, position_at


def format_diagnostic(message: str, span: Span, source: str, filename: str) -> str:
    """Render *message* with the offending source line and a ``~`` underline."""
    start = position_at(source, span.lo)
    end = position_at(source, span.hi)
    source_line = line_text(source, start.line)
    col = start.column

    # Underline the full span when on one line, otherwise to end of line
    if end.line == start.line:
        underline_len = max(1, end.column - col)
    else:
        underline_len = max(1, len(source_line) - col + 1)

    pad = " " * (col - 1)
    tildes = "~" * underline_len

    line_num = str(start.line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{start.line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{tildes}"
    )


@dataclass(frozen=True, slots=True)
class LexError:
    """A maximal run of adjacent characters that match no lexical rule."""

    text: str
    span: Span
    source: str = field(repr=False, compare=False)

    @property
    def message(self) -> str:
        noun = "character" if len(self.text) == 1 else "characters"
        return f"unexpected {noun} `{self.text}`"

    @property
    def start(self) -> Position:
        return position_at(self.source, self.span.lo)

    @property
    def end(self) -> Position:
        return position_at(self.source, self.span.hi)

    def merge(self, other: LexError) -> LexError:
        """Join a byte-contiguous error run onto this one."""
        return LexError(self.text + other.text, self.span | other.span, self.source)

    def format(self, filename: str = "input.scr") -> str:
        return format_diagnostic(self.message, self.span, self.source, filename)


@dataclass(frozen=True, slots=True)
class ParseError:
    """An expected-token mismatch or an unrecognized declaration start."""

    message: str
    span: Span
    source: str = field(repr=False, compare=False)

    @property
    def start(self) -> Position:
        return position_at(self.source, self.span.lo)

    @property
    def end(self) -> Position:
        return position_at(self.source, self.span.hi)

    def format(self, filename: str = "input.scr") -> str:
        return format_diagnostic(self.message, self.span, self.source, filename)


class CompileError(Exception):
    """Batch failure of one front-end stage, carrying every collected diagnostic."""

    def __init__(
        self,
        errors: tuple[LexError, ...] | tuple[ParseError, ...],
        filename: str = "input.scr",
    ) -> None:
        self.errors = errors
        self.filename = filename
        messages = [e.message for e in errors]
        super().__init__(f"{len(errors)} error(s): {'; '.join(messages)}")

    def format(self, filename: str | None = None, limit: int = 0) -> str:
        """Render all diagnostics, or the first *limit* of them when nonzero."""
        filename = filename or self.filename
        shown = self.errors[:limit] if limit > 0 else self.errors
        parts = [e.format(filename) for e in shown]
        hidden = len(self.errors) - len(shown)
        if hidden:
            parts.append(f"... and {hidden} more error(s)")
        return "\n\n".join(parts)
