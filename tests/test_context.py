import pytest

from relanote.context import TypeContext
from relanote.errors import OccursCheckError, Span, UnificationError
from relanote.types import (
    Prim,
    TupleType,
    TypeScheme,
    VarType,
    array,
    free_vars,
    function,
)

SPAN = Span(0, 1)


@pytest.fixture
def ctx():
    return TypeContext()


def test_fresh_vars_are_distinct(ctx):
    a, b = ctx.fresh_var(), ctx.fresh_var()
    assert isinstance(a, VarType)
    assert a != b
    assert b.var.id == a.var.id + 1


def test_bind_and_lookup(ctx):
    ctx.bind_mono("x", Prim.INT)
    assert ctx.lookup("x") == TypeScheme.mono(Prim.INT)
    assert ctx.lookup("missing") is None


def test_pop_scope_removes_scoped_names(ctx):
    ctx.bind_mono("outer", Prim.BOOL)
    ctx.push_scope()
    ctx.bind_mono("inner", Prim.INT)
    assert ctx.lookup("inner").ty is Prim.INT
    ctx.pop_scope()
    assert ctx.lookup("inner") is None
    assert ctx.lookup("outer").ty is Prim.BOOL


def test_pop_scope_drops_shadowed_binding(ctx):
    ctx.bind_mono("x", Prim.BOOL)
    ctx.push_scope()
    ctx.bind_mono("x", Prim.INT)
    ctx.pop_scope()
    assert ctx.lookup("x") is None


def test_pop_without_scope_keeps_env(ctx):
    ctx.bind_mono("x", Prim.INT)
    ctx.pop_scope()
    assert ctx.lookup("x").ty is Prim.INT


def test_apply_follows_chains(ctx):
    a, b = ctx.fresh_var(), ctx.fresh_var()
    ctx.add_substitution(a.var, b)
    ctx.add_substitution(b.var, Prim.BLOCK)
    assert ctx.apply(function(a, array(b))) == function(Prim.BLOCK, array(Prim.BLOCK))


def test_unify_var_binds(ctx):
    a = ctx.fresh_var()
    ctx.unify(a, Prim.INT, SPAN)
    assert ctx.apply(a) is Prim.INT


def test_unify_var_on_right(ctx):
    a = ctx.fresh_var()
    ctx.unify(Prim.STRING, a, SPAN)
    assert ctx.apply(a) is Prim.STRING


def test_unify_functions(ctx):
    a, b = ctx.fresh_var(), ctx.fresh_var()
    ctx.unify(function(a, b), function(Prim.INTERVAL, Prim.BLOCK), SPAN)
    assert ctx.apply(function(a, b)) == function(Prim.INTERVAL, Prim.BLOCK)


def test_unify_mismatch_raises(ctx):
    with pytest.raises(UnificationError) as info:
        ctx.unify(Prim.STRING, Prim.INT, SPAN)
    assert info.value.left is Prim.STRING
    assert info.value.right is Prim.INT
    assert info.value.span == SPAN


def test_unify_tuple_length_mismatch_raises(ctx):
    with pytest.raises(UnificationError):
        ctx.unify(TupleType([Prim.INT]), TupleType([Prim.INT, Prim.INT]), SPAN)


def test_unify_tuples_elementwise(ctx):
    a = ctx.fresh_var()
    ctx.unify(TupleType([a, Prim.BOOL]), TupleType([Prim.FLOAT, Prim.BOOL]), SPAN)
    assert ctx.apply(a) is Prim.FLOAT


def test_unify_arrays(ctx):
    a = ctx.fresh_var()
    ctx.unify(array(a), array(Prim.SECTION), SPAN)
    assert ctx.apply(a) is Prim.SECTION


def test_error_type_unifies_with_anything(ctx):
    ctx.unify(Prim.ERROR, Prim.INT, SPAN)
    ctx.unify(function(Prim.INT, Prim.INT), Prim.ERROR, SPAN)
    assert ctx.apply(Prim.ERROR) is Prim.ERROR


def test_occurs_check(ctx):
    a = ctx.fresh_var()
    assert ctx.occurs_in(a.var, array(a))
    assert not ctx.occurs_in(a.var, Prim.INT)
    with pytest.raises(OccursCheckError):
        ctx.unify(a, function(a, Prim.INT), SPAN)


def test_same_var_unifies(ctx):
    a = ctx.fresh_var()
    ctx.unify(a, a, SPAN)
    assert ctx.apply(a) == a


def test_instantiate_uses_fresh_vars(ctx):
    a = ctx.fresh_var()
    scheme = TypeScheme.poly([a.var], function(a, a))
    inst = ctx.instantiate(scheme)
    assert inst.param == inst.ret
    assert inst.param != a


def test_instantiate_mono_is_identity(ctx):
    ty = function(Prim.INT, Prim.BOOL)
    assert ctx.instantiate(TypeScheme.mono(ty)) == ty


def test_generalize_quantifies_free_vars(ctx):
    a = ctx.fresh_var()
    scheme = ctx.generalize(function(a, a))
    assert set(scheme.quantifiers) == {a.var}
    assert free_vars(scheme.ty) == [a.var, a.var]


def test_generalize_skips_vars_in_env(ctx):
    a, b = ctx.fresh_var(), ctx.fresh_var()
    ctx.bind_mono("x", a)
    scheme = ctx.generalize(function(a, b))
    assert list(scheme.quantifiers) == [b.var]


def test_generalize_applies_substitution(ctx):
    a = ctx.fresh_var()
    ctx.add_substitution(a.var, Prim.INT)
    scheme = ctx.generalize(array(a))
    assert scheme.quantifiers == ()
    assert scheme.ty == array(Prim.INT)