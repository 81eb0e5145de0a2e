"""AST node types for parsed Scrip programs."""

from __future__ import annotations

from dataclasses import dataclass

from scrip.tokens import Span


@dataclass(frozen=True, slots=True)
class Name:
    """Dotted name path, e.g. ``a.b.c``."""

    path: str
    span: Span

    @property
    def parts(self) -> tuple[str, ...]:
        return tuple(self.path.split("."))


@dataclass(frozen=True, slots=True)
class IntLit:
    value: int
    span: Span


@dataclass(frozen=True, slots=True)
class FloatLit:
    value: float
    span: Span


@dataclass(frozen=True, slots=True)
class BoolLit:
    value: bool
    span: Span


@dataclass(frozen=True, slots=True)
class StrLit:
    """String literal with the delimiting quotes removed."""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class VarDef:
    """Variable declaration: ``Type name = value``."""

    name: Name
    type: Name
    value: Expr
    span: Span


@dataclass(frozen=True, slots=True)
class Global:
    """``global`` wrapper around a variable declaration."""

    decl: Expr
    span: Span


@dataclass(frozen=True, slots=True)
class Block:
    """Brace-delimited statement sequence."""

    body: tuple[Expr, ...]
    span: Span


@dataclass(frozen=True, slots=True)
class FuncDef:
    """Function definition: ``func name(params) { ... }``."""

    name: Name
    params: tuple[Expr, ...]
    body: Block
    span: Span


@dataclass(frozen=True, slots=True)
class Call:
    """Call expression. Reserved for the expression grammar; not produced yet."""

    callee: Expr
    args: tuple[Expr, ...]
    span: Span


Atom = IntLit | FloatLit | BoolLit | StrLit
Expr = Global | Block | FuncDef | VarDef | Name | IntLit | FloatLit | BoolLit | StrLit | Call


@dataclass(frozen=True, slots=True)
class Program:
    """Root node: top-level declarations in program order."""

    declarations: tuple[Expr, ...]
    span: Span
