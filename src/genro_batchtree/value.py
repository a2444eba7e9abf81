# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Typed member values.

A :class:`Value` is a small tagged union over three primitive kinds (integer,
floating point, text) plus the ``NONE`` sentinel that queries use to report
"no value for this batch". Values compare kind first, then payload, which is
what member deduplication relies on.

Literal text from a batch document is parsed the way C's ``strtol`` and
``strtod`` parse it: leading blanks are skipped, the longest valid numeric
prefix is used and anything after it is ignored. Only ASCII digits and C
whitespace count. Text with no numeric prefix parses to zero.

Example:
    >>> Value.from_text(ValueKind.INT, ' 42kg')
    Value(INT, 42)
    >>> Value.from_text(ValueKind.INT, '7') == Value(ValueKind.INT, 7)
    True
"""

from __future__ import annotations

import math
import re
from enum import IntEnum
from typing import Any

from .exceptions import IllegalTypeError

_INT_PREFIX = re.compile(r'\s*([+-]?\d+)', re.ASCII)
_FLOAT_PREFIX = re.compile(
    r'\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|infinity|inf|nan))',
    re.IGNORECASE | re.ASCII,
)
_HEX_FLOAT_PREFIX = re.compile(
    r'\s*([+-]?)0x(?:([0-9a-f]+)\.?([0-9a-f]*)|\.([0-9a-f]+))(?:p([+-]?\d+))?',
    re.IGNORECASE | re.ASCII,
)


class ValueKind(IntEnum):
    """Kind of a Value. Numbering follows the batch document type order."""

    NONE = 0
    INT = 1
    STRING = 2
    DOUBLE = 3

    @classmethod
    def from_type_name(cls, type_name: str) -> ValueKind:
        """Map a batch document type name ('int', 'string', 'double') to a kind.

        Raises:
            IllegalTypeError: If the name is not one of the three known types.
        """
        try:
            return _KIND_BY_TYPE_NAME[type_name]
        except KeyError:
            raise IllegalTypeError(f"Unknown value type '{type_name}'") from None

    @property
    def type_name(self) -> str:
        """The batch document type name for this kind ('' for NONE)."""
        return _TYPE_NAME_BY_KIND[self]


_TYPE_NAME_BY_KIND = {
    ValueKind.NONE: '',
    ValueKind.INT: 'int',
    ValueKind.STRING: 'string',
    ValueKind.DOUBLE: 'double',
}
_KIND_BY_TYPE_NAME = {
    name: kind for kind, name in _TYPE_NAME_BY_KIND.items() if kind is not ValueKind.NONE
}


def parse_integer(text: str) -> int:
    """Parse a base-10 integer prefix, ignoring trailing characters."""
    match = _INT_PREFIX.match(text)
    if match is None:
        return 0
    return int(match.group(1))


def parse_float(text: str) -> float:
    """Parse a floating point prefix, ignoring trailing characters.

    Hexadecimal literals with an optional binary exponent ('0x1.8p3') are
    accepted as well as decimal ones.
    """
    hex_match = _HEX_FLOAT_PREFIX.match(text)
    if hex_match is not None:
        sign, whole, fraction, bare_fraction, exponent = hex_match.groups()
        fraction = bare_fraction if whole is None else fraction
        literal = f"{sign}0x{whole or '0'}.{fraction or '0'}p{exponent or '0'}"
        try:
            return float.fromhex(literal)
        except OverflowError:
            return -math.inf if sign == '-' else math.inf
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return 0.0
    return float(match.group(1))


class Value:
    """A typed value held by a tree member or returned by a query.

    Values are mutable and therefore unhashable.

    Attributes:
        kind: The ValueKind of the payload.
        payload: The Python payload (int, float, str), or None for NONE.
    """

    __slots__ = ('kind', 'payload')

    def __init__(self, kind: ValueKind = ValueKind.NONE, payload: Any = None) -> None:
        self.kind = ValueKind(kind)
        self.payload = None if self.kind is ValueKind.NONE else payload

    @classmethod
    def none(cls) -> Value:
        """Return the 'no value present' sentinel."""
        return cls(ValueKind.NONE)

    @classmethod
    def from_text(cls, kind: ValueKind, text: str) -> Value:
        """Build a Value of ``kind`` from the literal text of a member entry."""
        kind = ValueKind(kind)
        if kind is ValueKind.INT:
            return cls(kind, parse_integer(text))
        if kind is ValueKind.DOUBLE:
            return cls(kind, parse_float(text))
        if kind is ValueKind.STRING:
            return cls(kind, str(text))
        return cls.none()

    @property
    def is_none(self) -> bool:
        """True for the NONE sentinel."""
        return self.kind is ValueKind.NONE

    def copy(self) -> Value:
        """Return an independent Value with the same kind and payload."""
        return Value(self.kind, self.payload)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.kind is other.kind and self.payload == other.payload

    def __repr__(self) -> str:
        if self.is_none:
            return 'Value(NONE)'
        return f"Value({self.kind.name}, {self.payload!r})"

    def __str__(self) -> str:
        if self.kind is ValueKind.DOUBLE:
            return f"{self.payload:f}(double)"
        if self.is_none:
            return '(none)'
        return f"{self.payload}({self.kind.type_name})"
