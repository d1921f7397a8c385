"""
Argosy result store.

Results maps each spec name to the ordered list of Values a parse produced.
It is built by one parse session and is read-only for callers afterwards.

Gating
- completed is False until the session succeeded. Typed reads (get/getall)
  raise IncompleteParseError before that, defaults or not.
- find(name) is an existence check that works regardless of completion, so a
  caller can still ask "was --help given?" after a failed parse.

Accessors
- getall(name) → list of converted values; NotFoundError when absent.
- getall(name, default) → [default] when absent.
- get(name) / get(name, default) → first element of the above.
- kind= selects the output type (bool, int, float, str, a ValueType, or a
  ctypes fixed-width type); by default every value converts to the Python type
  of its declared ValueType.
"""
from .faults import *
from .utils import *


class Results:
    """
    Name → list-of-Value mapping with typed accessors.
    """

    __slots__ = ("_map", "_completed")

    def __init__(self):
        self._map = {}
        self._completed = False

    @property
    def completed(self):
        return self._completed

    def find(self, name, /):
        """
        Return True when `name` is a key of the result map (completion not required).
        """
        return name in self._map

    __contains__ = find

    def names(self):
        return tuple(self._map)

    def items(self):
        """
        Return (name, values) pairs in recording order.
        """
        return tuple((name, tuple(values)) for name, values in self._map.items())

    def _record(self, name, values, /):
        """
        Internal: store the values of a spec. The first recording of a name wins.

        Returns
        - True when stored, False when the name was already present.
        """
        if name in self._map:
            return False
        self._map[name] = list(values)
        return True

    def _complete(self):
        self._completed = True

    def _require(self):
        if not self._completed:
            raise IncompleteParseError(
                "arguments are not parsed",
                code=FaultCode.INCOMPLETE_PARSE,
                title="incomplete parse",
                hint="call parse() successfully before reading values",
            )

    def getall(self, name, default=Unset, /, *, kind=Unset):
        """
        Return every value recorded under `name`, converted to `kind`.

        Parameters
        - name: str
        - default: any (positional-only, optional)
          When given and `name` is absent, [default] is returned as-is.
        - kind: Unset | bool | int | float | str | ValueType | ctypes type

        Raises
        - IncompleteParseError: before a successful parse.
        - NotFoundError: when `name` is absent and no default was given.
        - ConversionError: when a value is not convertible to `kind`.
        """
        self._require()
        if name not in self._map:
            if default is not Unset:
                return [default]
            raise NotFoundError(
                f"argument {name!r} not found",
                code=FaultCode.ARGUMENT_NOT_FOUND,
                title="argument not found",
                hint="use find() to check for optional arguments, or pass a default",
            )
        return [value.get(kind) for value in self._map[name]]

    def get(self, name, default=Unset, /, *, kind=Unset):
        """
        Return the first value recorded under `name`, converted to `kind`.

        With a default, an absent name (or a variadic option that consumed no
        token) yields `default`. Raises like getall() otherwise.
        """
        values = self.getall(name, default, kind=kind)
        if not values:
            if default is not Unset:
                return default
            raise NotFoundError(
                f"argument {name!r} has no values",
                code=FaultCode.ARGUMENT_NOT_FOUND,
                title="argument not found",
                hint="the argument was given without any value",
            )
        return values[0]

    def __len__(self):
        return len(self._map)

    def __repr__(self):
        return f"results(completed={self._completed!r}, names={self.names()!r})"

    def __rich_repr__(self):
        yield "completed", self._completed
        for name, values in self._map.items():
            yield name, [value.get() for value in values]


__all__ = (
    "Results",
)
