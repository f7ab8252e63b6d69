"""Render a merged shape as indented, JSON-like text for reading."""
import json
from typing import List

from shape_model import (
    Array, Boolean, Mixed, Null, Number, NumberLiteral, Object, Shape, String,
    Unknown,
)

DEFAULT_INDENT = 4

_SCALAR_NAMES = {
    Null: 'Null',
    Boolean: 'Boolean',
    Number: 'Number',
    String: 'String',
}


def render_example(value) -> str:
    if isinstance(value, NumberLiteral):
        return str(value)
    return json.dumps(value, ensure_ascii=False)


def render_scalar(shape: Shape) -> str:
    """`Number (1, 2, 3, ...)` style summary of a scalar shape"""
    name = _SCALAR_NAMES[type(shape)]
    examples = getattr(shape, 'examples', ())
    if not examples:
        return name
    parts = [render_example(example) for example in examples]
    if shape.truncated:
        parts.append('...')
    return f"{name} ({', '.join(parts)})"


def length_label(shape: Array) -> str:
    if shape.length_min == shape.length_max:
        return f"Array (len {shape.length_min})"
    return f"Array (len {shape.length_min}..{shape.length_max})"


class ShapeRenderer:
    """Formats shapes either one entry per line or on a single line"""

    def __init__(self, compact: bool = False, indent: int = DEFAULT_INDENT):
        if indent < 0:
            raise ValueError(f"indent must be >= 0, got {indent}")
        self.compact = compact
        self.indent = indent

    def render(self, shape: Shape, level: int = 0) -> str:
        if isinstance(shape, Array):
            # Unknown element: nothing seen; Mixed: one entry per alternative
            entries = []
            if isinstance(shape.element, Mixed):
                for alt in shape.element.sorted_alternatives():
                    entries.append(self.render(alt, level + 1))
            elif not isinstance(shape.element, Unknown):
                entries.append(self.render(shape.element, level + 1))
            return f"{length_label(shape)} {self.block('[', ']', entries, level)}"
        if isinstance(shape, Object):
            entries = []
            for key, entry in shape.sorted_fields():
                prefix = 'optional ' if entry.optional else ''
                entries.append(f"{json.dumps(key, ensure_ascii=False)}: {prefix}{self.render(entry.shape, level + 1)}")
            return self.block('{', '}', entries, level)
        if isinstance(shape, Mixed):
            entries = []
            for alt in shape.sorted_alternatives():
                entries.append(self.render(alt, level + 1))
            return self.block('(', ')', entries, level)
        if isinstance(shape, Unknown):
            return 'Unknown'
        return render_scalar(shape)

    def block(self, open_char: str, close_char: str, entries: List[str], level: int) -> str:
        if not entries:
            return open_char + close_char
        if self.compact:
            if open_char == '{':
                return '{ ' + ', '.join(entries) + ' }'
            return open_char + ', '.join(entries) + close_char
        pad = ' ' * (self.indent * (level + 1))
        body = ',\n'.join(pad + entry for entry in entries)
        return f"{open_char}\n{body}\n{' ' * (self.indent * level)}{close_char}"


def render(shape: Shape, compact: bool = False, indent: int = DEFAULT_INDENT) -> str:
    """Render a shape as text"""
    return ShapeRenderer(compact=compact, indent=indent).render(shape)
