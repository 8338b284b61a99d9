"""Errors raised by the relanote type checker."""

from __future__ import annotations

from dataclasses import dataclass

from relanote.types import Type, format_type


@dataclass(frozen=True)
class Span:
    """A byte range in a source text."""

    start: int = 0
    end: int = 0


class TypeCheckError(Exception):
    """Base class for type errors; carries the span they refer to."""

    def __init__(self, message: str, span: Span) -> None:
        super().__init__(message)
        self.message = message
        self.span = span

    def __str__(self) -> str:
        return self.message


class MismatchError(TypeCheckError):
    def __init__(self, expected: Type, found: Type, span: Span) -> None:
        super().__init__(
            f"type mismatch: expected {format_type(expected)}, found {format_type(found)}",
            span,
        )
        self.expected = expected
        self.found = found


class UnificationError(TypeCheckError):
    def __init__(self, left: Type, right: Type, span: Span) -> None:
        super().__init__(
            f"cannot unify types: {format_type(left)} and {format_type(right)}", span
        )
        self.left = left
        self.right = right


class UndefinedVariableError(TypeCheckError):
    def __init__(self, name: str, span: Span) -> None:
        super().__init__(f"undefined variable: {name}", span)
        self.name = name


class UndefinedTypeError(TypeCheckError):
    def __init__(self, name: str, span: Span) -> None:
        super().__init__(f"undefined type: {name}", span)
        self.name = name


class OccursCheckError(TypeCheckError):
    def __init__(self, span: Span) -> None:
        super().__init__("occurs check failed: infinite type", span)


class NotAFunctionError(TypeCheckError):
    def __init__(self, ty: Type, span: Span) -> None:
        super().__init__(f"not a function type: {format_type(ty)}", span)
        self.ty = ty


class NotAScaleError(TypeCheckError):
    def __init__(self, found: Type, span: Span) -> None:
        super().__init__("not a scale type", span)
        self.found = found


class InvalidScaleIndexError(TypeCheckError):
    def __init__(self, index: int, span: Span) -> None:
        super().__init__(f"invalid scale index: {index}", span)
        self.index = index


class TimeAlignmentMismatchError(TypeCheckError):
    def __init__(
        self,
        expected_duration: str,
        found_duration: str,
        part_index: int,
        span: Span,
    ) -> None:
        super().__init__("time alignment mismatch in layer", span)
        self.expected_duration = expected_duration
        self.found_duration = found_duration
        self.part_index = part_index