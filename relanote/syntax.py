"""Syntax tree nodes consumed by type inference and checking."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from relanote.errors import Span

_NO_SPAN = Span()


def _tuplify(node: Any, *names: str) -> None:
    for name in names:
        object.__setattr__(node, name, tuple(getattr(node, name)))


class BinaryOp(Enum):
    """Binary operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    EQ = "=="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    AND = "&&"
    OR = "||"
    CONCAT = "++"
    COMPOSE = ">>"


class UnaryOp(Enum):
    """Unary operators."""

    NEG = "-"
    NOT = "!"


# ---------------------------------------------------------------- expressions


@dataclass(frozen=True)
class IntegerLit:
    value: int
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class FloatLit:
    value: float
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class StringLit:
    value: str
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class BoolLit:
    value: bool
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class UnitLit:
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class Ident:
    name: str
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class IntervalLit:
    text: str
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class AbsolutePitchLit:
    name: str
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class Root:
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class ArticulationLit:
    kind: str
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class BlockExpr:
    slots: tuple = ()
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "slots")


@dataclass(frozen=True)
class TupletExpr:
    slots: tuple = ()
    target_beats: int = 1
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "slots")


@dataclass(frozen=True)
class EnvelopeExpr:
    points: tuple = ()
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "points")


@dataclass(frozen=True)
class PartExpr:
    instrument: str
    blocks: tuple = ()
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "blocks")


@dataclass(frozen=True)
class SectionExpr:
    name: str
    parts: tuple = ()
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "parts")


@dataclass(frozen=True)
class LayerExpr:
    parts: tuple = ()
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "parts")


@dataclass(frozen=True)
class Lambda:
    params: tuple
    body: "Expr"
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "params")


@dataclass(frozen=True)
class Application:
    func: "Expr"
    args: tuple
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "args")


@dataclass(frozen=True)
class Pipe:
    left: "Expr"
    right: "Expr"
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class Binary:
    op: BinaryOp
    left: "Expr"
    right: "Expr"
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class Unary:
    op: UnaryOp
    operand: "Expr"
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class ArrayExpr:
    elements: tuple = ()
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "elements")


@dataclass(frozen=True)
class TupleExpr:
    elements: tuple = ()
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "elements")


@dataclass(frozen=True)
class IndexExpr:
    base: "Expr"
    index: "Expr"
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class IfExpr:
    condition: "Expr"
    then_branch: "Expr"
    else_branch: Optional["Expr"] = None
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class LetExpr:
    pattern: "Pattern"
    value: "Expr"
    body: "Expr"
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class WithExpr:
    base: "Expr"
    modifiers: tuple = ()
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "modifiers")


@dataclass(frozen=True)
class FieldExpr:
    base: "Expr"
    name: str
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class MatchArm:
    pattern: "Pattern"
    body: "Expr"
    guard: Optional["Expr"] = None
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class MatchExpr:
    scrutinee: "Expr"
    arms: tuple
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "arms")


@dataclass(frozen=True)
class ParenExpr:
    inner: "Expr"
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class AnnotatedExpr:
    inner: "Expr"
    annotation: str
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class InScaleExpr:
    scale: "Expr"
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class ErrorExpr:
    span: Span = _NO_SPAN


Expr = Union[
    IntegerLit, FloatLit, StringLit, BoolLit, UnitLit, Ident, IntervalLit,
    AbsolutePitchLit, Root, ArticulationLit, BlockExpr, TupletExpr, EnvelopeExpr,
    PartExpr, SectionExpr, LayerExpr, Lambda, Application, Pipe, Binary, Unary,
    ArrayExpr, TupleExpr, IndexExpr, IfExpr, LetExpr, WithExpr, FieldExpr,
    MatchExpr, ParenExpr, AnnotatedExpr, InScaleExpr, ErrorExpr,
]


# ------------------------------------------------------------------- patterns


@dataclass(frozen=True)
class WildcardPattern:
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class IdentPattern:
    name: str
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class LiteralPattern:
    """A literal pattern; a value of None stands for the unit literal."""

    value: Union[int, float, str, bool, None] = None
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class TuplePattern:
    elements: tuple = ()
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "elements")


@dataclass(frozen=True)
class ArrayPattern:
    elements: tuple = ()
    rest: Optional[str] = None
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "elements")


@dataclass(frozen=True)
class ConstructorPattern:
    name: str
    args: tuple = ()
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "args")


@dataclass(frozen=True)
class OrPattern:
    left: "Pattern"
    right: "Pattern"
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class AnnotatedPattern:
    pattern: "Pattern"
    annotation: str
    span: Span = _NO_SPAN


Pattern = Union[
    WildcardPattern, IdentPattern, LiteralPattern, TuplePattern, ArrayPattern,
    ConstructorPattern, OrPattern, AnnotatedPattern,
]


# ---------------------------------------------------------------------- items


@dataclass(frozen=True)
class ScaleDef:
    name: str
    intervals: tuple = ()
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "intervals")


@dataclass(frozen=True)
class ChordDef:
    name: str
    intervals: tuple = ()
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "intervals")


@dataclass(frozen=True)
class SynthDef:
    name: str
    fields: tuple = ()
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "fields")


@dataclass(frozen=True)
class LetBinding:
    pattern: Pattern
    value: Expr
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class SetBinding:
    name: str
    value: Expr
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class FunctionDef:
    name: str
    params: tuple
    body: Expr
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "params")


@dataclass(frozen=True)
class Import:
    """``import names from module``."""

    module: str
    names: tuple = ()
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "names")


@dataclass(frozen=True)
class Export:
    names: tuple = ()
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "names")


@dataclass(frozen=True)
class ModDecl:
    name: str
    span: Span = _NO_SPAN


@dataclass(frozen=True)
class UseDecl:
    path: tuple = ()
    span: Span = _NO_SPAN

    def __post_init__(self) -> None:
        _tuplify(self, "path")


@dataclass(frozen=True)
class ExprStmt:
    expr: Expr
    span: Span = _NO_SPAN


Item = Union[
    ScaleDef, ChordDef, SynthDef, LetBinding, SetBinding, FunctionDef, Import,
    Export, ModDecl, UseDecl, ExprStmt,
]


@dataclass(frozen=True)
class Program:
    """A parsed source file: a sequence of items."""

    items: tuple = ()

    def __post_init__(self) -> None:
        _tuplify(self, "items")