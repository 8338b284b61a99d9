"""Type inference for expressions and patterns."""

from __future__ import annotations

from relanote.context import TypeContext
from relanote.errors import UndefinedVariableError
from relanote.syntax import (
    AbsolutePitchLit,
    AnnotatedExpr,
    AnnotatedPattern,
    Application,
    ArrayExpr,
    ArrayPattern,
    ArticulationLit,
    Binary,
    BinaryOp,
    BlockExpr,
    BoolLit,
    ConstructorPattern,
    EnvelopeExpr,
    ErrorExpr,
    Expr,
    FieldExpr,
    FloatLit,
    Ident,
    IdentPattern,
    IfExpr,
    IndexExpr,
    InScaleExpr,
    IntegerLit,
    IntervalLit,
    Lambda,
    LayerExpr,
    LetExpr,
    LiteralPattern,
    MatchExpr,
    OrPattern,
    ParenExpr,
    PartExpr,
    Pattern,
    Pipe,
    Root,
    SectionExpr,
    StringLit,
    TupleExpr,
    TuplePattern,
    TupletExpr,
    Unary,
    UnaryOp,
    UnitLit,
    WildcardPattern,
    WithExpr,
)
from relanote.types import ArrayType, FunctionType, Prim, TupleType, Type, function_n

_ARITH_INT = {BinaryOp.MUL, BinaryOp.DIV, BinaryOp.MOD}
_COMPARISON = {BinaryOp.EQ, BinaryOp.NE, BinaryOp.LT, BinaryOp.LE, BinaryOp.GT, BinaryOp.GE}


class InferenceContext(TypeContext):
    """A type context that can infer the types of expressions and patterns."""

    def infer_expr(self, expr: Expr) -> Type:
        """Infer the type of an expression, raising a TypeCheckError on failure."""
        match expr:
            case IntegerLit():
                return Prim.INT
            case FloatLit():
                return Prim.FLOAT
            case StringLit():
                return Prim.STRING
            case BoolLit():
                return Prim.BOOL
            case UnitLit():
                return Prim.UNIT
            case Ident():
                scheme = self.lookup(expr.name)
                if scheme is None:
                    raise UndefinedVariableError(expr.name, expr.span)
                return self.instantiate(scheme)
            case IntervalLit() | AbsolutePitchLit() | Root():
                return Prim.INTERVAL
            case ArticulationLit():
                return Prim.ARTICULATION
            case BlockExpr() | TupletExpr():
                return Prim.BLOCK
            case EnvelopeExpr():
                return Prim.ENVELOPE
            case PartExpr():
                return Prim.PART
            case SectionExpr() | LayerExpr():
                return Prim.SECTION
            case Lambda():
                return self._infer_lambda(expr)
            case Application():
                result = self.infer_expr(expr.func)
                for arg in expr.args:
                    arg_ty = self.infer_expr(arg)
                    ret = self.fresh_var()
                    self.unify(result, FunctionType(arg_ty, ret), expr.span)
                    result = self.apply(ret)
                return result
            case Pipe():
                arg_ty = self.infer_expr(expr.left)
                func_ty = self.infer_expr(expr.right)
                ret = self.fresh_var()
                self.unify(func_ty, FunctionType(arg_ty, ret), expr.span)
                return self.apply(ret)
            case Binary():
                return self._infer_binary(expr)
            case Unary():
                operand = self.infer_expr(expr.operand)
                target = Prim.INT if expr.op is UnaryOp.NEG else Prim.BOOL
                self.unify(operand, target, expr.span)
                return target
            case ArrayExpr():
                elem = self.fresh_var()
                for element in expr.elements:
                    self.unify(elem, self.infer_expr(element), element.span)
                return ArrayType(self.apply(elem))
            case TupleExpr():
                return TupleType([self.infer_expr(e) for e in expr.elements])
            case IndexExpr():
                return self._infer_index(expr)
            case IfExpr():
                cond = self.infer_expr(expr.condition)
                self.unify(cond, Prim.BOOL, expr.condition.span)
                then_ty = self.infer_expr(expr.then_branch)
                if expr.else_branch is not None:
                    else_ty = self.infer_expr(expr.else_branch)
                    self.unify(then_ty, else_ty, expr.span)
                return self.apply(then_ty)
            case LetExpr():
                value_ty = self.infer_expr(expr.value)
                self.push_scope()
                if isinstance(expr.pattern, IdentPattern):
                    self.bind(expr.pattern.name, self.generalize(value_ty))
                body_ty = self.infer_expr(expr.body)
                self.pop_scope()
                return body_ty
            case WithExpr():
                return self.infer_expr(expr.base)
            case FieldExpr():
                return self.fresh_var()
            case MatchExpr():
                return self._infer_match(expr)
            case ParenExpr() | AnnotatedExpr():
                return self.infer_expr(expr.inner)
            case InScaleExpr():
                self.infer_expr(expr.scale)
                return FunctionType(Prim.BLOCK, Prim.BLOCK)
            case ErrorExpr():
                return Prim.ERROR
        raise TypeError(f"not an expression: {expr!r}")

    def infer_pattern(self, pattern: Pattern) -> Type:
        """Infer a pattern's type, binding the names it introduces."""
        match pattern:
            case WildcardPattern() | ConstructorPattern():
                return self.fresh_var()
            case IdentPattern():
                ty = self.fresh_var()
                self.bind_mono(pattern.name, ty)
                return ty
            case LiteralPattern():
                return _literal_type(pattern.value)
            case TuplePattern():
                return TupleType([self.infer_pattern(p) for p in pattern.elements])
            case ArrayPattern():
                elem = self.fresh_var()
                for p in pattern.elements:
                    self.unify(elem, self.infer_pattern(p), p.span)
                return ArrayType(self.apply(elem))
            case OrPattern():
                return self.infer_pattern(pattern.left)
            case AnnotatedPattern():
                return self.infer_pattern(pattern.pattern)
        raise TypeError(f"not a pattern: {pattern!r}")

    def _infer_lambda(self, expr: Lambda) -> Type:
        self.push_scope()
        params = []
        for param in expr.params:
            ty = self.fresh_var()
            if isinstance(param, IdentPattern):
                self.bind_mono(param.name, ty)
            params.append(ty)
        body = self.infer_expr(expr.body)
        self.pop_scope()
        return function_n(params, body)

    def _infer_binary(self, expr: Binary) -> Type:
        left = self.infer_expr(expr.left)
        right = self.infer_expr(expr.right)
        op, span = expr.op, expr.span

        if op in (BinaryOp.ADD, BinaryOp.SUB):
            if Prim.INTERVAL in (self.apply(left), self.apply(right)):
                target = Prim.INTERVAL
            else:
                target = Prim.INT
            self.unify(left, target, span)
            self.unify(right, target, span)
            return target
        if op in _ARITH_INT:
            self.unify(left, Prim.INT, span)
            self.unify(right, Prim.INT, span)
            return Prim.INT
        if op in _COMPARISON:
            self.unify(left, right, span)
            return Prim.BOOL
        if op in (BinaryOp.AND, BinaryOp.OR):
            self.unify(left, Prim.BOOL, span)
            self.unify(right, Prim.BOOL, span)
            return Prim.BOOL
        if op is BinaryOp.CONCAT:
            self.unify(left, right, span)
            return left
        # Composition: f >> g is \x -> g (f x)
        a, b, c = self.fresh_var(), self.fresh_var(), self.fresh_var()
        self.unify(left, FunctionType(a, b), span)
        self.unify(right, FunctionType(b, c), span)
        return FunctionType(a, c)

    def _infer_index(self, expr: IndexExpr) -> Type:
        base = self.infer_expr(expr.base)
        index = self.infer_expr(expr.index)
        elem = self.fresh_var()

        applied = self.apply(base)
        if isinstance(applied, ArrayType):
            self.unify(index, Prim.INT, expr.span)
            return applied.elem
        if applied is Prim.SCALE:
            self.unify(index, Prim.INT, expr.span)
            return Prim.INTERVAL

        self.unify(base, ArrayType(elem), expr.span)
        self.unify(index, Prim.INT, expr.span)
        return self.apply(elem)

    def _infer_match(self, expr: MatchExpr) -> Type:
        scrutinee = self.infer_expr(expr.scrutinee)
        result = self.fresh_var()
        for arm in expr.arms:
            self.unify(scrutinee, self.infer_pattern(arm.pattern), arm.pattern.span)
            if arm.guard is not None:
                self.unify(self.infer_expr(arm.guard), Prim.BOOL, arm.guard.span)
            self.unify(result, self.infer_expr(arm.body), arm.body.span)
        return self.apply(result)


def _literal_type(value: object) -> Type:
    if value is None:
        return Prim.UNIT
    if isinstance(value, bool):
        return Prim.BOOL
    if isinstance(value, int):
        return Prim.INT
    if isinstance(value, float):
        return Prim.FLOAT
    if isinstance(value, str):
        return Prim.STRING
    raise TypeError(f"unsupported literal pattern: {value!r}")