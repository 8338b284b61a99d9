"""Type representation for the relanote type checker."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Union


@dataclass(frozen=True, order=True)
class TyVar:
    """Unique type variable identifier."""

    id: int

    def __str__(self) -> str:
        return f"t{self.id}"


class Prim(Enum):
    """Primitive (non-compound) types, valued by their display form."""

    UNIT = "()"
    BOOL = "Bool"
    INT = "Int"
    FLOAT = "Float"
    STRING = "String"
    INTERVAL = "Interval"
    SCALE = "Scale"
    CHORD = "Chord"
    BLOCK = "Block"
    PART = "Part"
    SECTION = "Section"
    SONG = "Song"
    ARTICULATION = "Articulation"
    ENVELOPE = "Envelope"
    DURATION = "Duration"
    DYNAMIC = "Dynamic"
    SYNTH = "Synth"
    OSCILLATOR = "Oscillator"
    FILTER = "Filter"
    ERROR = "Error"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FunctionType:
    """A single-argument function type ``param -> ret``."""

    param: "Type"
    ret: "Type"

    def __str__(self) -> str:
        return format_type(self)


@dataclass(frozen=True)
class TupleType:
    """A tuple of element types."""

    elems: tuple = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "elems", tuple(self.elems))

    def __str__(self) -> str:
        return format_type(self)


@dataclass(frozen=True)
class ArrayType:
    """A homogeneous array type."""

    elem: "Type"

    def __str__(self) -> str:
        return format_type(self)


@dataclass(frozen=True)
class VarType:
    """A type variable used during inference."""

    var: TyVar

    def __str__(self) -> str:
        return format_type(self)


Type = Union[Prim, FunctionType, TupleType, ArrayType, VarType]


def function(param: Type, ret: Type) -> FunctionType:
    """Build a function type."""
    return FunctionType(param, ret)


def function_n(params: Iterable[Type], ret: Type) -> Type:
    """Build a curried function type from several parameters."""
    result = ret
    for param in reversed(list(params)):
        result = FunctionType(param, result)
    return result


def array(elem: Type) -> ArrayType:
    """Build an array type."""
    return ArrayType(elem)


def has_vars(ty: Type) -> bool:
    """Return True if the type contains any type variable."""
    if isinstance(ty, VarType):
        return True
    if isinstance(ty, FunctionType):
        return has_vars(ty.param) or has_vars(ty.ret)
    if isinstance(ty, TupleType):
        return any(has_vars(e) for e in ty.elems)
    if isinstance(ty, ArrayType):
        return has_vars(ty.elem)
    return False


def free_vars(ty: Type) -> list[TyVar]:
    """Return the type variables of a type in order of appearance."""
    if isinstance(ty, VarType):
        return [ty.var]
    if isinstance(ty, FunctionType):
        return free_vars(ty.param) + free_vars(ty.ret)
    if isinstance(ty, TupleType):
        return [v for e in ty.elems for v in free_vars(e)]
    if isinstance(ty, ArrayType):
        return free_vars(ty.elem)
    return []


def format_type(ty: Type) -> str:
    """Render a type in its human-readable form."""
    if isinstance(ty, Prim):
        return ty.value
    if isinstance(ty, FunctionType):
        param = format_type(ty.param)
        if isinstance(ty.param, FunctionType):
            param = f"({param})"
        return f"{param} -> {format_type(ty.ret)}"
    if isinstance(ty, TupleType):
        return "(" + ", ".join(format_type(e) for e in ty.elems) + ")"
    if isinstance(ty, ArrayType):
        return f"[{format_type(ty.elem)}]"
    if isinstance(ty, VarType):
        return str(ty.var)
    raise TypeError(f"not a type: {ty!r}")


@dataclass(frozen=True)
class TypeScheme:
    """A polymorphic type: ``forall quantifiers. ty``."""

    quantifiers: tuple
    ty: Type

    def __post_init__(self) -> None:
        object.__setattr__(self, "quantifiers", tuple(self.quantifiers))

    @classmethod
    def mono(cls, ty: Type) -> "TypeScheme":
        """A scheme with no quantified variables."""
        return cls((), ty)

    @classmethod
    def poly(cls, quantifiers: Iterable[TyVar], ty: Type) -> "TypeScheme":
        """A scheme quantified over the given variables."""
        return cls(tuple(quantifiers), ty)