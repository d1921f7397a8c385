r"""
Argosy typed values.

Overview
- ValueType: the closed set of declared value types
  (NULL, BOOLEAN, INTEGER, FLOAT, STRING). NULL is a sentinel that must never
  reach a constructed specification.
- convert(type, raw): the canonical, pure conversion of one token. It never
  raises on bad input; it returns either the converted Python value or a
  ConversionError instance for the caller to raise, collect or ignore.
- Value: one raw token paired with its declared type. The raw text is
  validated on construction and on every reassignment (fail-fast), and read
  back through typed getters.

Grammars
- boolean: "true"/"false" in any case, otherwise an integer (non-zero → True).
- integer: r"[+-]?[0-9]+" over ASCII digits. No exponent, no 0x/0o prefixes,
  no decimal point, no surrounding whitespace, no "_" separators.
- float: r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?" plus
  inf/infinity/nan in any case with an optional sign.
- string: stored verbatim, always convertible.

Getters
- Value.get(kind) accepts bool, int, float, str, a ValueType member, or a
  ctypes simple type (c_int8 ... c_uint64, c_float, c_double, c_bool) for
  fixed-width narrowing with C wrap-around semantics:
      >>> Value(ValueType.INTEGER, "70000").get(ctypes.c_int16)
      4464
- Every getter re-derives from the canonical conversion of the declared type
  and then narrows or widens it (float → int truncates, bool → int gives 0/1,
  numbers → bool compare with zero, anything → str returns the raw text), so a
  validated value never fails again. Two reads have no such counterpart and
  still raise ConversionError: a non-finite float read as an integer, and a
  string-typed value read as a number or boolean (the text is then parsed
  with the requested grammar).

Quick example
    >>> value = Value(ValueType.BOOLEAN, "7")
    >>> value.get(), value.get(int), value.get(str)
    (True, 1, '7')
    >>> value.raw = "maybe"
    Traceback (most recent call last):
    ...
    argosy.faults.ConversionError: value is not convertible to boolean-type
"""
import ctypes
import math
import re
from enum import Enum

from .faults import *
from .utils import *

VARIABLE = -1
"""
Arity sentinel meaning "consume all remaining tokens".
"""

_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)
_FLOAT = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?", re.ASCII)
_SPECIAL = re.compile(r"[+-]?(?:inf|infinity|nan)", re.ASCII | re.IGNORECASE)


class ValueType(Enum):
    """
    Declared type of a positional argument or option.

    Members carry their human description as value ("integer", ...), except
    NULL whose description is undefined.
    """
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"

    @classmethod
    def coerce(cls, object, /):
        """
        Normalize a user-facing type designator to a ValueType member.

        Accepted forms
        - a ValueType member (returned as-is)
        - a description string: "boolean", "integer", "float", "string"
        - a builtin type: bool, int, float, str

        Raises
        - ConfigurationError: for NULL, None, or anything unrecognized.
        """
        if isinstance(object, cls):
            member = object
        elif isinstance(object, str):
            try:
                member = cls(object.strip().lower())
            except ValueError:
                member = None
        elif isinstance(object, type):
            member = {bool: cls.BOOLEAN, int: cls.INTEGER, float: cls.FLOAT, str: cls.STRING}.get(object)
        else:
            member = None

        if member is None:
            raise ConfigurationError(
                f"{object!r} is not a value type",
                code=FaultCode.NULL_TYPE,
                title="unknown value type",
                hint="use one of boolean, integer, float or string",
            )
        if member is cls.NULL:
            raise ConfigurationError(
                "argument type is null",
                code=FaultCode.NULL_TYPE,
                title="null value type",
                hint="declare a boolean, integer, float or string type",
            )
        return member

    def describe(self):
        """
        Return "boolean", "integer", "float" or "string".

        Raises
        - ConfigurationError: when called on NULL.
        """
        if self is ValueType.NULL:
            raise ConfigurationError(
                "wrong argument type",
                code=FaultCode.NULL_TYPE,
                title="null value type",
                hint="null has no description",
            )
        return self.value


def _failure(type, raw):
    return ConversionError(
        f"value is not convertible to {type.value}-type",
        code=FaultCode.INCONVERTIBLE_VALUE,
        title="inconvertible value",
        hint=f"{raw!r} is not a valid {type.value}",
        type=type,
        raw=raw,
    )


def _boolean(raw):
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if _INTEGER.fullmatch(raw):
        return int(raw) != 0
    return Unset


def _integer(raw):
    return int(raw) if _INTEGER.fullmatch(raw) else Unset


def _float(raw):
    return float(raw) if _FLOAT.fullmatch(raw) or _SPECIAL.fullmatch(raw) else Unset


_CONVERTERS = {
    ValueType.BOOLEAN: _boolean,
    ValueType.INTEGER: _integer,
    ValueType.FLOAT: _float,
    ValueType.STRING: str,
}


def convert(type, raw, /):
    """
    Convert one raw token to the canonical Python value of `type`.

    Returns
    - bool | int | float | str on success.
    - a ConversionError instance (not raised) when `raw` does not match the
      grammar of `type`, including when `type` is NULL.
    """
    if not isinstance(raw, str):
        raise TypeError("convert() raw token must be a string")
    if type is ValueType.NULL or type not in _CONVERTERS:
        return ConversionError(
            "argument type is null",
            code=FaultCode.NULL_TYPE,
            title="null value type",
            hint="declare a boolean, integer, float or string type",
            type=type,
            raw=raw,
        )
    result = _CONVERTERS[type](raw)
    if result is Unset:
        return _failure(type, raw)
    return result


def _unwrap(result):
    if isinstance(result, ConversionError):
        raise result
    return result


_BUILTINS = {
    bool: ValueType.BOOLEAN,
    int: ValueType.INTEGER,
    float: ValueType.FLOAT,
    str: ValueType.STRING,
}

_WIDTHS = {
    ctypes.c_bool: ValueType.BOOLEAN,
    ctypes.c_int8: ValueType.INTEGER,
    ctypes.c_int16: ValueType.INTEGER,
    ctypes.c_int32: ValueType.INTEGER,
    ctypes.c_int64: ValueType.INTEGER,
    ctypes.c_uint8: ValueType.INTEGER,
    ctypes.c_uint16: ValueType.INTEGER,
    ctypes.c_uint32: ValueType.INTEGER,
    ctypes.c_uint64: ValueType.INTEGER,
    ctypes.c_float: ValueType.FLOAT,
    ctypes.c_double: ValueType.FLOAT,
}


class Value:
    """
    A raw token together with its declared ValueType.

    Invariant
    - `raw` is always convertible to `type`: construction and reassignment
      raise ConversionError otherwise, leaving no half-valid instance behind.

    Equality compares (type, raw); values are unhashable because `raw` can be
    reassigned.
    """

    __slots__ = ("_type", "_raw")

    def __init__(self, type, raw="", /):
        if not isinstance(type, ValueType):
            raise TypeError("Value() type must be a ValueType")
        self._type = type
        self._raw = self._validate(raw)

    def _validate(self, raw):
        if not isinstance(raw, str):
            raise TypeError("Value() raw token must be a string")
        _unwrap(convert(self._type, raw))
        return raw

    @property
    def type(self):
        return self._type

    @property
    def raw(self):
        return self._raw

    @raw.setter
    def raw(self, raw):
        # validate before storing so a failed assignment keeps the old text
        self._raw = self._validate(raw)

    def describe(self):
        return self._type.describe()

    def get(self, kind=Unset, /):
        """
        Return the value converted to `kind`.

        Parameters
        - kind: Unset | bool | int | float | str | ValueType | ctypes simple type
          Unset selects the canonical Python type of the declared type.

        Raises
        - ConversionError: for a non-finite float read as an integer, or a
          string-typed value whose text does not fit the requested grammar.
        - TypeError: for an unsupported kind.
        """
        if kind is Unset:
            return self._derive(self._type)
        if isinstance(kind, ValueType):
            return self._derive(kind)
        if kind in _BUILTINS:
            return self._derive(_BUILTINS[kind])
        if kind in _WIDTHS:
            # ctypes truncates/wraps like a C cast
            return kind(self._derive(_WIDTHS[kind])).value
        raise TypeError(f"unsupported value kind {kind!r}")

    def _derive(self, target):
        """
        Internal: narrow or widen the canonical value of the declared type.
        """
        if target is self._type:
            return _unwrap(convert(target, self._raw))
        if target is ValueType.STRING:
            return self._raw
        if target is ValueType.NULL or self._type is ValueType.STRING:
            return _unwrap(convert(target, self._raw))

        canonical = _unwrap(convert(self._type, self._raw))
        if target is ValueType.BOOLEAN:
            return canonical != 0
        if target is ValueType.FLOAT:
            return float(canonical)
        if not math.isfinite(canonical):
            raise _failure(target, self._raw)
        return int(canonical)

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return (self._type, self._raw) == (other._type, other._raw)

    __hash__ = None

    def __repr__(self):
        return f"value({self._type.value}, {self._raw!r})"

    def __rich_repr__(self):
        yield "type", self._type.value
        yield "raw", self._raw


__all__ = (
    "VARIABLE",
    "ValueType",
    "Value",
    "convert",
)
