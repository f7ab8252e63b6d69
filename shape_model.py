"""Shape model: generalized descriptions of the JSON values seen at one slot."""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

# Distinct example values kept per Number/String shape
DEFAULT_EXAMPLE_CAP = 3

KIND_ORDER = ('null', 'boolean', 'number', 'string', 'array', 'object')


class NumberLiteral(str):
    """Text of a JSON number exactly as written in the source"""

    def __repr__(self):
        return f"NumberLiteral({str.__repr__(self)})"


@dataclass(frozen=True)
class Unknown:
    """Element shape of an array that never held any element"""


@dataclass(frozen=True)
class Null:
    pass


@dataclass(frozen=True)
class Boolean:
    pass


@dataclass(frozen=True)
class Number:
    examples: Tuple[Union[NumberLiteral, int, float], ...] = ()
    truncated: bool = False


@dataclass(frozen=True)
class String:
    examples: Tuple[str, ...] = ()
    truncated: bool = False


@dataclass(frozen=True)
class Array:
    element: 'Shape'
    length_min: int
    length_max: int


@dataclass(frozen=True)
class Field:
    shape: 'Shape'
    optional: bool = False


@dataclass(frozen=True)
class Object:
    fields: Dict[str, Field] = field(default_factory=dict)

    def sorted_fields(self):
        """Fields in display order (lexicographic by key)"""
        return sorted(self.fields.items())


@dataclass(frozen=True)
class Mixed:
    """Values of differing kinds seen at the same slot, one alternative per kind"""
    alternatives: Tuple['Shape', ...]

    def sorted_alternatives(self):
        return sorted(self.alternatives, key=kind_rank)


Shape = Union[Unknown, Null, Boolean, Number, String, Array, Object, Mixed]

UNKNOWN = Unknown()

_KINDS = {
    Unknown: 'unknown',
    Null: 'null',
    Boolean: 'boolean',
    Number: 'number',
    String: 'string',
    Array: 'array',
    Object: 'object',
    Mixed: 'mixed',
}


def kind_of(shape: Shape) -> str:
    return _KINDS[type(shape)]


def kind_rank(shape: Shape) -> int:
    """Sort key placing kinds in KIND_ORDER"""
    kind = kind_of(shape)
    if kind in KIND_ORDER:
        return KIND_ORDER.index(kind)
    return len(KIND_ORDER)


def lift_leaf(value: Any, element: Shape = UNKNOWN,
              fields: Optional[Dict[str, Shape]] = None,
              cap: int = DEFAULT_EXAMPLE_CAP) -> Shape:
    """Create the initial shape of a single JSON value.

    Containers are not walked here: a list takes its already unified
    element shape from `element`, and a dict takes its already lifted
    child shapes from `fields`. Every key of a fresh object is required and
    a fresh array's length range is its own length.
    """
    if value is None:
        return Null()
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return Boolean()
    # NumberLiteral is a str, check it before strings
    if isinstance(value, (NumberLiteral, int, float)):
        return Number(*_first_example(value, cap))
    if isinstance(value, str):
        return String(*_first_example(value, cap))
    if isinstance(value, list):
        return Array(element, len(value), len(value))
    if isinstance(value, dict):
        if fields is None:
            fields = {}
        missing = [key for key in value if key not in fields]
        if missing:
            raise ValueError(f"No lifted shape for keys: {', '.join(sorted(missing))}")
        return Object({key: Field(fields[key]) for key in value})

    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def _first_example(value, cap: int):
    if cap > 0:
        return (value,), False
    return (), True
