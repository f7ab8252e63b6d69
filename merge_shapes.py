"""Merge engine: fold every occurrence of a JSON slot into one shape."""
import logging
from functools import reduce
from typing import Any, Iterable

from shape_model import (
    DEFAULT_EXAMPLE_CAP, UNKNOWN, Array, Boolean, Field, Mixed, Null, Number,
    Object, Shape, String, Unknown, kind_of, lift_leaf,
)

logger = logging.getLogger(__name__)


def merge_examples(first, second, cap: int):
    """Union two example tuples, keeping first-encounter order up to `cap`"""
    examples = list(first.examples[:cap])
    truncated = first.truncated or second.truncated or len(first.examples) > cap
    for example in second.examples:
        if example in examples:
            continue
        if len(examples) >= cap:
            truncated = True
            break
        examples.append(example)
    return tuple(examples), truncated


def merge_fields(first: Object, second: Object, cap: int) -> Object:
    """Unify two objects key by key; a key missing on either side is optional"""
    fields = {}
    for key, entry in first.fields.items():
        other = second.fields.get(key)
        if other is None:
            fields[key] = Field(entry.shape, True)
        else:
            fields[key] = Field(merge(entry.shape, other.shape, cap),
                                entry.optional or other.optional)
    for key, entry in second.fields.items():
        if key not in first.fields:
            fields[key] = Field(entry.shape, True)
    return Object(fields)


def merge_mixed(first: Shape, second: Shape, cap: int) -> Mixed:
    """Combine shapes of differing kinds, merging alternatives of the same kind"""
    alternatives = list(first.alternatives if isinstance(first, Mixed) else [first])
    incoming = second.alternatives if isinstance(second, Mixed) else (second,)
    for shape in incoming:
        kind = kind_of(shape)
        for i, existing in enumerate(alternatives):
            if kind_of(existing) == kind:
                alternatives[i] = merge(existing, shape, cap)
                break
        else:
            alternatives.append(shape)
    return Mixed(tuple(alternatives))


def merge(first: Shape, second: Shape, cap: int = DEFAULT_EXAMPLE_CAP) -> Shape:
    """Unify two shapes of the same slot into a new shape.

    Neither argument is modified. Shapes of the same kind are unified
    field by field; shapes of differing kinds become (or join) a Mixed
    shape. Unknown is the identity.
    """
    if isinstance(first, Unknown):
        return second
    if isinstance(second, Unknown):
        return first

    if isinstance(first, Mixed) or isinstance(second, Mixed):
        return merge_mixed(first, second, cap)

    if type(first) is not type(second):
        return merge_mixed(first, second, cap)

    if isinstance(first, (Null, Boolean)):
        return first
    if isinstance(first, (Number, String)):
        examples, truncated = merge_examples(first, second, cap)
        return type(first)(examples, truncated)
    if isinstance(first, Array):
        return Array(merge(first.element, second.element, cap),
                     min(first.length_min, second.length_min),
                     max(first.length_max, second.length_max))
    if isinstance(first, Object):
        return merge_fields(first, second, cap)

    raise TypeError(f"Unsupported shape: {type(first).__name__}")


def merge_all(shapes: Iterable[Shape], cap: int = DEFAULT_EXAMPLE_CAP) -> Shape:
    """Fold shapes pairwise in order; no shapes at all give Unknown"""
    return reduce(lambda acc, shape: merge(acc, shape, cap), shapes, UNKNOWN)


def describe_value(value: Any, cap: int = DEFAULT_EXAMPLE_CAP) -> Shape:
    """Lift a parsed JSON value tree into a shape, children first.

    Takes one call per nesting level.
    """
    if isinstance(value, list):
        element = UNKNOWN
        for item in value:
            element = merge(element, describe_value(item, cap), cap)
        return lift_leaf(value, element=element, cap=cap)
    if isinstance(value, dict):
        fields = {}
        for key, item in value.items():
            fields[key] = describe_value(item, cap)
        return lift_leaf(value, fields=fields, cap=cap)
    return lift_leaf(value, cap=cap)


def describe_documents(values: Iterable[Any], cap: int = DEFAULT_EXAMPLE_CAP) -> Shape:
    """Merge the root values of several documents into one shape"""
    documents = list(values)
    shape = merge_all((describe_value(value, cap) for value in documents), cap)
    logger.debug(f"Merged {len(documents)} document(s)")
    return shape
