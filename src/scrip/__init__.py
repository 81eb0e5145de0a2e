"""Scrip scripting language front end: tokenizer and parser."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scrip.ast import Program

__version__ = "0.1.0"


def check(source: str, filename: str = "input.scr") -> Program:
    """Tokenize and parse Scrip source into a Program.

    Raises CompileError carrying every diagnostic of the first failing stage.
    """
    from scrip.parser import parse

    return parse(source, filename)
