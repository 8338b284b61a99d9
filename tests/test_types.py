import pytest

from relanote.types import (
    ArrayType,
    FunctionType,
    Prim,
    TupleType,
    TyVar,
    TypeScheme,
    VarType,
    array,
    format_type,
    free_vars,
    function,
    function_n,
    has_vars,
)


def test_function_n_is_curried():
    ty = function_n([Prim.INT, Prim.BLOCK], Prim.BLOCK)
    assert ty == function(Prim.INT, function(Prim.BLOCK, Prim.BLOCK))


def test_function_n_without_params_is_return_type():
    assert function_n([], Prim.SONG) is Prim.SONG


def test_array_builds_array_type():
    assert array(Prim.INT) == ArrayType(Prim.INT)


def test_primitive_display():
    assert format_type(Prim.UNIT) == "()"
    assert format_type(Prim.INTERVAL) == "Interval"
    assert str(Prim.SYNTH) == "Synth"


def test_function_display_parenthesises_function_param():
    inner = function(Prim.BLOCK, Prim.BLOCK)
    assert format_type(function(inner, Prim.PART)) == "(Block -> Block) -> Part"
    assert format_type(function(Prim.BLOCK, inner)) == "Block -> Block -> Block"


def test_tuple_and_array_display():
    assert str(TupleType([Prim.INT, Prim.BOOL])) == "(Int, Bool)"
    assert str(array(Prim.SECTION)) == "[Section]"


def test_var_display_uses_id():
    assert str(VarType(TyVar(7))) == "t7"


def test_tuple_elems_normalised_to_tuple():
    assert TupleType([Prim.INT]) == TupleType((Prim.INT,))


def test_has_vars():
    assert has_vars(VarType(TyVar(0)))
    assert has_vars(array(function(Prim.INT, VarType(TyVar(1)))))
    assert has_vars(TupleType([Prim.INT, VarType(TyVar(2))]))
    assert not has_vars(function(Prim.INT, Prim.BOOL))
    assert not has_vars(Prim.ERROR)


def test_free_vars_in_order():
    a, b = TyVar(3), TyVar(1)
    ty = function(VarType(a), TupleType([VarType(b), array(VarType(a))]))
    assert free_vars(ty) == [a, b, a]
    assert free_vars(Prim.INT) == []


def test_scheme_mono_and_poly():
    mono = TypeScheme.mono(Prim.INT)
    assert mono.quantifiers == ()
    assert mono.ty is Prim.INT
    poly = TypeScheme.poly([TyVar(0)], VarType(TyVar(0)))
    assert poly.quantifiers == (TyVar(0),)


def test_types_are_hashable_and_equal_structurally():
    first = function(Prim.INT, array(Prim.BOOL))
    second = FunctionType(Prim.INT, ArrayType(Prim.BOOL))
    assert {first: 1}[second] == 1


def test_format_type_rejects_non_type():
    with pytest.raises(TypeError):
        format_type("Int")