"""Type environment, substitutions and unification."""

from __future__ import annotations

from relanote.errors import OccursCheckError, Span, UnificationError
from relanote.types import (
    ArrayType,
    FunctionType,
    Prim,
    TupleType,
    TyVar,
    Type,
    TypeScheme,
    VarType,
    free_vars,
)


def _substitute(ty: Type, mapping: dict[TyVar, Type]) -> Type:
    if isinstance(ty, VarType):
        return mapping.get(ty.var, ty)
    if isinstance(ty, FunctionType):
        return FunctionType(_substitute(ty.param, mapping), _substitute(ty.ret, mapping))
    if isinstance(ty, TupleType):
        return TupleType(_substitute(e, mapping) for e in ty.elems)
    if isinstance(ty, ArrayType):
        return ArrayType(_substitute(ty.elem, mapping))
    return ty


class TypeContext:
    """Holds bindings, scopes and the current substitution."""

    def __init__(self) -> None:
        self._next_var = 0
        self._env: dict[str, TypeScheme] = {}
        self._substitutions: dict[TyVar, Type] = {}
        self._scopes: list[dict[str, TypeScheme]] = []

    def fresh_var(self) -> VarType:
        """Return a new, unused type variable."""
        var = TyVar(self._next_var)
        self._next_var += 1
        return VarType(var)

    def push_scope(self) -> None:
        self._scopes.append({})

    def pop_scope(self) -> None:
        """Leave the innermost scope, removing the names bound in it."""
        if self._scopes:
            for name in self._scopes.pop():
                self._env.pop(name, None)

    def bind(self, name: str, scheme: TypeScheme) -> None:
        if self._scopes:
            self._scopes[-1][name] = scheme
        self._env[name] = scheme

    def bind_mono(self, name: str, ty: Type) -> None:
        self.bind(name, TypeScheme.mono(ty))

    def lookup(self, name: str) -> TypeScheme | None:
        return self._env.get(name)

    def add_substitution(self, var: TyVar, ty: Type) -> None:
        self._substitutions[var] = ty

    def apply(self, ty: Type) -> Type:
        """Apply the current substitution throughout a type."""
        if isinstance(ty, VarType):
            bound = self._substitutions.get(ty.var)
            return ty if bound is None else self.apply(bound)
        if isinstance(ty, FunctionType):
            return FunctionType(self.apply(ty.param), self.apply(ty.ret))
        if isinstance(ty, TupleType):
            return TupleType(self.apply(e) for e in ty.elems)
        if isinstance(ty, ArrayType):
            return ArrayType(self.apply(ty.elem))
        return ty

    def instantiate(self, scheme: TypeScheme) -> Type:
        """Replace a scheme's quantified variables with fresh ones."""
        mapping = {v: self.fresh_var() for v in scheme.quantifiers}
        return _substitute(scheme.ty, mapping)

    def generalize(self, ty: Type) -> TypeScheme:
        """Quantify the variables of a type that are not free in the environment."""
        ty = self.apply(ty)
        free_in_env = {v for scheme in self._env.values() for v in free_vars(scheme.ty)}
        quantifiers = [v for v in free_vars(ty) if v not in free_in_env]
        return TypeScheme.poly(quantifiers, ty)

    def unify(self, t1: Type, t2: Type, span: Span) -> None:
        """Make two types equal by extending the substitution, or raise."""
        t1 = self.apply(t1)
        t2 = self.apply(t2)

        if isinstance(t1, VarType) and isinstance(t2, VarType) and t1.var == t2.var:
            return
        if isinstance(t1, VarType) or isinstance(t2, VarType):
            var, other = (t1.var, t2) if isinstance(t1, VarType) else (t2.var, t1)
            if self.occurs_in(var, other):
                raise OccursCheckError(span)
            self.add_substitution(var, other)
            return
        if isinstance(t1, FunctionType) and isinstance(t2, FunctionType):
            self.unify(t1.param, t2.param, span)
            self.unify(t1.ret, t2.ret, span)
            return
        if (
            isinstance(t1, TupleType)
            and isinstance(t2, TupleType)
            and len(t1.elems) == len(t2.elems)
        ):
            for a, b in zip(t1.elems, t2.elems):
                self.unify(a, b, span)
            return
        if isinstance(t1, ArrayType) and isinstance(t2, ArrayType):
            self.unify(t1.elem, t2.elem, span)
            return
        if t1 == t2:
            return
        if t1 is Prim.ERROR or t2 is Prim.ERROR:
            return
        raise UnificationError(t1, t2, span)

    def occurs_in(self, var: TyVar, ty: Type) -> bool:
        """Return True if ``var`` appears in ``ty`` after substitution."""
        ty = self.apply(ty)
        if isinstance(ty, VarType):
            return ty.var == var
        if isinstance(ty, FunctionType):
            return self.occurs_in(var, ty.param) or self.occurs_in(var, ty.ret)
        if isinstance(ty, TupleType):
            return any(self.occurs_in(var, e) for e in ty.elems)
        if isinstance(ty, ArrayType):
            return self.occurs_in(var, ty.elem)
        return False