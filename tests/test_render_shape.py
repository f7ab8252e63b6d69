import pytest

from merge_shapes import describe_value
from render_shape import render, render_scalar
from shape_model import (
    UNKNOWN, Array, Boolean, Mixed, Null, Number, NumberLiteral, String,
)

PEOPLE = {
    "data": [False, True, 123],
    "items": [
        {"name": "Xavier", "age": 30, "kids": ["Andrew", "Barbara", "Charlie"]},
        {"name": "Yulia", "age": 25, "kids": ["Doris", "Eric"]},
        {"name": "Zoe", "kids": ["Fran"]},
    ],
}

PEOPLE_PRETTY = """\
{
    "data": Array (len 3) [
        Boolean,
        Number (123)
    ],
    "items": Array (len 3) [
        {
            "age": optional Number (30, 25),
            "kids": Array (len 1..3) [
                String ("Andrew", "Barbara", "Charlie", ...)
            ],
            "name": String ("Xavier", "Yulia", "Zoe")
        }
    ]
}"""


def compact(value):
    return render(describe_value(value), compact=True)


def test_scalars():
    assert render_scalar(Null()) == 'Null'
    assert render_scalar(Boolean()) == 'Boolean'
    assert render_scalar(Number((1, 2.5))) == 'Number (1, 2.5)'
    assert render_scalar(String(("a", 'say "hi"'))) == 'String ("a", "say \\"hi\\"")'
    assert render_scalar(Number((1, 2, 3), True)) == 'Number (1, 2, 3, ...)'
    assert render_scalar(Number((), True)) == 'Number'


def test_non_ascii_strings_are_kept():
    assert render_scalar(String(("Zoë",))) == 'String ("Zoë")'


def test_single_key_object():
    assert compact({"a": 1}) == '{ "a": Number (1) }'


def test_array_of_numbers():
    assert compact([1, 2, 3]) == 'Array (len 3) [Number (1, 2, 3)]'


def test_array_of_objects_with_optional_keys():
    assert compact([{"x": 1}, {"y": 2}]) == \
        'Array (len 2) [{ "x": optional Number (1), "y": optional Number (2) }]'


def test_empty_containers():
    assert compact([]) == 'Array (len 0) []'
    assert compact({}) == '{}'
    assert render(describe_value([])) == 'Array (len 0) []'


def test_keys_sorted():
    assert compact({"b": None, "a": True, "A": "x"}) == \
        '{ "A": String ("x"), "a": Boolean, "b": Null }'


def test_length_range():
    assert compact([[1], [1, 2, 3]]) == 'Array (len 2) [Array (len 1..3) [Number (1, 2, 3)]]'


def test_mixed_element_lists_each_kind():
    assert compact([123, False, True]) == 'Array (len 3) [Boolean, Number (123)]'
    assert compact(["a", None, [], {}]) == 'Array (len 4) [Null, String ("a"), Array (len 0) [], {}]'


def test_mixed_field_renders_as_tuple():
    assert compact([{"v": "a"}, {"v": 1}, {}]) == \
        'Array (len 3) [{ "v": optional (Number (1), String ("a")) }]'


def test_people_pretty():
    assert render(describe_value(PEOPLE)) == PEOPLE_PRETTY


def test_people_compact():
    assert compact(PEOPLE) == (
        '{ "data": Array (len 3) [Boolean, Number (123)], '
        '"items": Array (len 3) [{ "age": optional Number (30, 25), '
        '"kids": Array (len 1..3) [String ("Andrew", "Barbara", "Charlie", ...)], '
        '"name": String ("Xavier", "Yulia", "Zoe") }] }'
    )


def test_custom_indent():
    assert render(describe_value({"a": [1]}), indent=2) == \
        '{\n  "a": Array (len 1) [\n    Number (1)\n  ]\n}'
    with pytest.raises(ValueError):
        render(Null(), indent=-1)


def test_root_mixed_and_unknown():
    assert render(Mixed((String(("a",)), Null())), compact=True) == '(Null, String ("a"))'
    assert render(UNKNOWN) == 'Unknown'
    assert render(Array(UNKNOWN, 0, 2), compact=True) == 'Array (len 0..2) []'


def test_number_literals_render_as_written():
    literals = tuple(NumberLiteral(text) for text in ("1e400", "1.50", "-0"))
    assert render_scalar(Number(literals)) == 'Number (1e400, 1.50, -0)'
