"""--tokens and --debug dumps to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from scrip.ast import (
    Block,
    BoolLit,
    Call,
    Expr,
    FloatLit,
    FuncDef,
    Global,
    IntLit,
    Name,
    Program,
    StrLit,
    VarDef,
)
from scrip.tokens import Token


def dump_tokens(tokens: list[Token] | tuple[Token, ...], *, file: TextIO = sys.stderr) -> None:
    """Print one token per line: kind, offsets, and source text."""
    for tok in tokens:
        file.write(f"{tok.kind.name:<10} {tok.span.lo}..{tok.span.hi} {tok.text!r}\n")


def dump_ast(program: Program, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    file.write("Program\n")
    for decl in program.declarations:
        _dump_expr(decl, 1, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_expr(node: Expr, depth: int, f: TextIO) -> None:
    pad = _indent(depth)
    if isinstance(node, Global):
        f.write(f"{pad}Global\n")
        _dump_expr(node.decl, depth + 1, f)
    elif isinstance(node, VarDef):
        f.write(f"{pad}VarDef {node.type.path} {node.name.path}\n")
        _dump_expr(node.value, depth + 1, f)
    elif isinstance(node, FuncDef):
        params = ", ".join(_inline(p) for p in node.params)
        f.write(f"{pad}FuncDef {node.name.path}({params})\n")
        _dump_expr(node.body, depth + 1, f)
    elif isinstance(node, Block):
        f.write(f"{pad}Block\n")
        for child in node.body:
            _dump_expr(child, depth + 1, f)
    elif isinstance(node, Call):
        args = ", ".join(_inline(a) for a in node.args)
        f.write(f"{pad}Call {_inline(node.callee)}({args})\n")
    else:
        f.write(f"{pad}{_inline(node)}\n")


def _inline(node: Expr) -> str:
    if isinstance(node, Name):
        return f"Name({node.path})"
    if isinstance(node, (IntLit, FloatLit, BoolLit, StrLit)):
        return f"{type(node).__name__}({node.value!r})"
    return type(node).__name__
