r"""
Argosy argument specifications.

Overview
- Specs
  • Positional: a value-bearing argument matched by position, e.g. "FILE".
  • Option: a named argument with one or more flag strings (e.g. -n/--num),
    either presence-only (nargs=0, implicit value true) or value-bearing.

- Shared interface (no shared base class)
  • name, type, nargs, descr, variadic
  • matches(token) -> bool
  • usage() -> str    usage-line fragment
  • explain() -> str  detailed help block

- Introspection & representation
  • SpecType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ as read-only properties.

Metadata (sanitized on construction)
- name: non-empty string, the key used in the result map.
- type: ValueType (or "integer", int, ...), never NULL.
- nargs: positive int | VARIABLE (-1, also spelled ... or "...").
  Option additionally accepts 0 (presence-only switch, type forced to BOOLEAN).
  When omitted, an Option defaults to 0 for BOOLEAN and 1 for other types.
- descr: free text shown in detailed help.
- flags (Option only): one string or an iterable of strings; duplicates are
  collapsed, declaration order is kept for display.

Quick example:
    >>> from argosy.arguments import Positional, Option
    >>> Positional("file", "string", 2).usage()
    'file(0) file(1)'
    >>> Option(["-n", "--num"], "num", int).usage()
    '[{-n|--num} num]'
"""
import builtins
import functools
import operator
import re
from collections.abc import Iterable
from types import EllipsisType

from .faults import *
from .rendering import explanation, fragment
from .utils import *
from .values import VARIABLE, ValueType


class SpecType(type):
    """
    Metaclass that turns spec classes into introspectable, read-only records.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics (Parser.render_status, rich.pretty).
    - Expose every name listed in __introspectable__ as a read-only property
      backed by the private "_{name}" field (see mirror()).

    Conventions
    - __typename__ is derived from the class name (camel-case split with
      hyphens, lowercased) and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(flags=('-v', '--verbose'), name='verbose', ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in type(self).__introspectable__:
                object = getattr(self, name)
                yield name, object.value if isinstance(object, ValueType) else object
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_name(cls, name, /):
    """
    Internal: validate the result-map name of a spec.

    Raises
    - TypeError: when the name is not a string.
    - ConfigurationError: when the name is empty or only whitespace.
    """
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    if not name.strip():
        raise ConfigurationError(
            f"{cls.__typename__} name cannot be empty",
            code=FaultCode.INVALID_NAME,
            title="empty name",
            hint="give every argument a non-empty name",
        )
    return name


def _sanitize_type(cls, type, /):
    """
    Internal: normalize the declared type; NULL and unknown designators fail.
    """
    return ValueType.coerce(type)


def _sanitize_nargs(cls, nargs, /, *, switch):
    """
    Internal: normalize and validate an arity.

    Accepted
    - int >= 1, or VARIABLE (-1). Ellipsis and the literal "..." are accepted
      as spellings of VARIABLE.
    - 0 only when `switch` is True (options).

    Raises
    - TypeError: for non-integer arities (bool included).
    - ConfigurationError: for negative arities other than VARIABLE, or 0 on a
      positional.
    """
    if isinstance(nargs, EllipsisType) or nargs == "...":
        return VARIABLE
    if isinstance(nargs, bool) or not isinstance(nargs, int):
        raise TypeError(f"{cls.__typename__} 'nargs' must be an integer or ellipsis")
    if nargs < VARIABLE:
        raise ConfigurationError(
            f"{cls.__typename__} 'nargs' must be a positive integer or variable (-1), not {nargs}",
            code=FaultCode.INVALID_ARITY,
            title="invalid arity",
            hint="only -1 (or ...) may be used as a negative arity",
        )
    if nargs == 0 and not switch:
        raise ConfigurationError(
            f"{cls.__typename__} 'nargs' must be a positive integer or variable (-1), not 0",
            code=FaultCode.INVALID_ARITY,
            title="invalid arity",
            hint="only options can be presence-only",
        )
    return nargs


def _sanitize_descr(cls, descr, /):
    if not isinstance(descr, str):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    return descr


def _sanitize_flags(cls, flags, /):
    """
    Internal: validate and normalize the flag strings of an option.

    - A single string is treated as a one-element collection.
    - Duplicates are collapsed; the first-seen order is kept for help output.

    Raises
    - TypeError: when flags are not strings / not iterable.
    - ConfigurationError: when the collection is empty or a flag is blank.
    """
    if isinstance(flags, str):
        flags = (flags,)
    if not isinstance(flags, Iterable):
        raise TypeError(f"{cls.__typename__} flags must be a string or an iterable of strings")

    sanitized = []
    for flag in flags:
        if not isinstance(flag, str):
            raise TypeError(f"{cls.__typename__} flags must be strings")
        if not flag.strip():
            raise ConfigurationError(
                f"{cls.__typename__} flags cannot be empty strings",
                code=FaultCode.EMPTY_FLAGS,
                title="empty flag",
                hint="use flags like '-h' or '--help'",
            )
        if flag not in sanitized:
            sanitized.append(flag)

    if not sanitized:
        raise ConfigurationError(
            f"{cls.__typename__} must specify at least one flag",
            code=FaultCode.EMPTY_FLAGS,
            title="empty flag set",
            hint="use flags like '-h' or '--help'",
        )
    return tuple(sanitized)


class Positional(metaclass=SpecType):
    """
    Positional, value-bearing argument specification.

    Remaining tokens (those not consumed by options) are assigned to
    positionals in declaration order; each one consumes exactly `nargs`
    tokens, or every token left when variadic.

    Identity is by name: two positionals are equal when their names are.
    """

    __introspectable__ = (
        "name",
        "type",
        "nargs",
        "descr",
    )

    def __init__(self, name, type, nargs=1, descr="", /):
        """
        Construct a Positional spec.

        Parameters
        - name: str
          Key in the result map and label in usage/help.
        - type: ValueType | str | type
          Declared value type; NULL is rejected.
        - nargs: int | ellipsis
          Exact number of tokens (>= 1), or VARIABLE/... for all remaining.
        - descr: str
          Description shown in detailed help.
        """
        cls = builtins.type(self)
        self._name = _sanitize_name(cls, name)
        self._type = _sanitize_type(cls, type)
        self._nargs = _sanitize_nargs(cls, nargs, switch=False)
        self._descr = _sanitize_descr(cls, descr)

    @property
    def variadic(self):
        return self._nargs == VARIABLE

    def matches(self, token, /):
        """
        Return True when `token` is this positional's name.
        """
        return token == self._name

    def usage(self):
        """
        Usage-line fragment: "name", "name(0) name(1) ...", or "name...".
        """
        return fragment(self).plain

    def explain(self):
        """
        Detailed help block: "  name [type,...]:" plus the wrapped description.
        """
        return explanation(self).plain

    def __eq__(self, other):
        if not isinstance(other, Positional):
            return NotImplemented
        return self._name == other._name

    def __hash__(self):
        return hash((Positional, self._name))


class Option(metaclass=SpecType):
    """
    Named argument specification matched by any of its flag strings.

    - nargs == 0: presence-only switch; when given, its value list is
      [true] and its type is always BOOLEAN.
    - nargs >= 1: consumes exactly that many following tokens.
    - VARIABLE: consumes every token after the flag up to the end of input.

    Identity is by flag membership: two options are equal when they share a
    flag string. Options are unhashable for that reason.
    """

    __introspectable__ = (
        "flags",
        "name",
        "type",
        "nargs",
        "descr",
    )

    def __init__(self, flags, name, type=ValueType.BOOLEAN, nargs=Unset, descr="", /):
        """
        Construct an Option spec.

        Parameters
        - flags: str | Iterable[str]
          One or more flag strings, e.g. "-v" or ("-v", "--verbose").
        - name: str
          Key in the result map and label in usage/help.
        - type: ValueType | str | type
          Declared value type; NULL is rejected. Forced to BOOLEAN when
          nargs is 0.
        - nargs: Unset | int | ellipsis
          0 for a switch, >= 1 for a fixed count, VARIABLE/... for all
          remaining tokens. Defaults to 0 for BOOLEAN and 1 otherwise.
        - descr: str
          Description shown in detailed help.
        """
        cls = builtins.type(self)
        self._flags = _sanitize_flags(cls, flags)
        self._name = _sanitize_name(cls, name)
        self._type = _sanitize_type(cls, type)
        nargs = coalesce(nargs, 0 if self._type is ValueType.BOOLEAN else 1)
        self._nargs = _sanitize_nargs(cls, nargs, switch=True)
        if self._nargs == 0:
            self._type = ValueType.BOOLEAN
        self._descr = _sanitize_descr(cls, descr)

    @property
    def variadic(self):
        return self._nargs == VARIABLE

    @property
    def switch(self):
        return self._nargs == 0

    def matches(self, token, /):
        """
        Return True when `token` is one of this option's flag strings.
        """
        return token in self._flags

    def overlaps(self, other, /):
        """
        Return True when this option shares at least one flag with `other`.
        """
        return not set(self._flags).isdisjoint(other.flags)

    def usage(self):
        """
        Usage-line fragment, e.g. "[-v]", "[{-n|--num} num]", "[-f file...]".
        """
        return fragment(self).plain

    def explain(self):
        """
        Detailed help block, e.g. "  -n|--num [num:integer]:" plus the wrapped
        description.
        """
        return explanation(self).plain

    def __eq__(self, other):
        if not isinstance(other, Option):
            return NotImplemented
        return self.overlaps(other)

    __hash__ = None


__all__ = (
    "Positional",
    "Option",
)

# Remove the internal metaclass from the module namespace; not part of the public API.
del SpecType
