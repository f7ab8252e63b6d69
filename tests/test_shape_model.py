import pytest

from shape_model import (
    UNKNOWN, Array, Boolean, Field, Mixed, Null, Number, NumberLiteral, Object,
    String, kind_of, lift_leaf,
)


def test_lift_scalars():
    assert lift_leaf(None) == Null()
    assert lift_leaf(True) == Boolean()
    assert lift_leaf(False) == Boolean()
    assert lift_leaf(7) == Number((7,))
    assert lift_leaf(2.5) == Number((2.5,))
    assert lift_leaf("hi") == String(("hi",))


def test_lift_zero_cap_keeps_no_examples():
    assert lift_leaf(7, cap=0) == Number((), True)
    assert lift_leaf("hi", cap=0) == String((), True)


def test_lift_array_uses_given_element():
    assert lift_leaf([]) == Array(UNKNOWN, 0, 0)
    assert lift_leaf([1, 2], element=Number((1, 2))) == Array(Number((1, 2)), 2, 2)


def test_lift_object_marks_every_key_required():
    shape = lift_leaf({"b": 1, "a": None}, fields={"a": Null(), "b": Number((1,))})
    assert shape == Object({"a": Field(Null()), "b": Field(Number((1,)))})
    assert [key for key, _ in shape.sorted_fields()] == ["a", "b"]
    assert not any(entry.optional for entry in shape.fields.values())


def test_lift_object_requires_child_shapes():
    with pytest.raises(ValueError):
        lift_leaf({"a": 1})


def test_lift_rejects_non_json_values():
    with pytest.raises(TypeError):
        lift_leaf(object())


def test_kinds_and_mixed_ordering():
    assert kind_of(UNKNOWN) == 'unknown'
    assert kind_of(Array(UNKNOWN, 0, 0)) == 'array'
    mixed = Mixed((Object(), String(("x",)), Null(), Boolean()))
    assert [kind_of(alt) for alt in mixed.sorted_alternatives()] == ['null', 'boolean', 'string', 'object']


def test_lift_number_literal_is_a_number():
    shape = lift_leaf(NumberLiteral("1e400"))
    assert shape == Number((NumberLiteral("1e400"),))
    assert str(shape.examples[0]) == "1e400"
