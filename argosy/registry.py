"""
Argosy specification registry.

The registry owns the ordered list of positional specs and the ordered list of
option specs of one parser, and enforces the registration-time invariants:

- nothing may be added once a variadic spec (nargs == VARIABLE) exists, be it
  a positional or an option, since two greedy consumers cannot coexist;
- positional names are unique;
- option flag sets are pairwise disjoint;
- names are unique across positionals and options (they share one result map).

Violations raise ConfigurationError at the call site, never at parse time.

A parse session runs over freeze(), an immutable snapshot, so registering
more specs later never aliases a finished or in-flight parse.
"""
import logging

from .faults import *

logger = logging.getLogger(__name__)


class Registry:
    """
    Ordered collections of Positional and Option specs.

    Declaration order of positionals decides token assignment; declaration
    order of options decides match priority and help display order.
    """

    __slots__ = ("_positionals", "_options", "_frozen")

    def __init__(self, positionals=(), options=(), /, *, frozen=False):
        self._positionals = list(positionals)
        self._options = list(options)
        self._frozen = bool(frozen)

    @property
    def positionals(self):
        return tuple(self._positionals)

    @property
    def options(self):
        return tuple(self._options)

    @property
    def frozen(self):
        return self._frozen

    @property
    def variadic(self):
        """
        True once a variadic positional or option has been registered.
        """
        return any(spec.variadic for spec in (*self._positionals, *self._options))

    def names(self):
        return {spec.name for spec in (*self._positionals, *self._options)}

    def option(self, token, /):
        """
        Return the first option (declaration order) matching `token`, or None.
        """
        for spec in self._options:
            if spec.matches(token):
                return spec
        return None

    def _admit(self, spec, kind):
        if self._frozen:
            raise ConfigurationError(
                "cannot add any argument to a frozen registry",
                code=FaultCode.FROZEN_REGISTRY,
                title="frozen registry",
                hint="register arguments on the parser before parsing",
            )
        if self.variadic:
            raise ConfigurationError(
                "cannot add any argument after varargs",
                code=FaultCode.AFTER_VARIADIC,
                title="argument after varargs",
                hint=f"declare {kind} {spec.name!r} before the variadic argument",
            )
        if spec.name in self.names():
            raise ConfigurationError(
                f"argument name {spec.name!r} is already in use",
                code=FaultCode.DUPLICATED_NAME,
                title="duplicated name",
                hint="every positional and option needs its own name",
            )

    def add_positional(self, spec, /):
        """
        Append a Positional spec.

        Raises
        - ConfigurationError: after a variadic spec, on a frozen registry, or
          when the name is already used.
        """
        self._admit(spec, "positional")
        self._positionals.append(spec)
        logger.debug("registered positional %r (nargs=%d)", spec.name, spec.nargs)

    def add_option(self, spec, /):
        """
        Append an Option spec.

        Raises
        - ConfigurationError: after a variadic spec, on a frozen registry, when
          the name is already used, or when a flag is already taken.
        """
        self._admit(spec, "option")
        for other in self._options:
            if spec.overlaps(other):
                shared = sorted(set(spec.flags) & set(other.flags))
                raise ConfigurationError(
                    f"flag {shared[0]!r} is already used by option {other.name!r}",
                    code=FaultCode.DUPLICATED_FLAG,
                    title="duplicated flag",
                    hint="every flag string can identify a single option",
                )
        self._options.append(spec)
        logger.debug("registered option %r %s (nargs=%d)", spec.name, "|".join(spec.flags), spec.nargs)

    def freeze(self):
        """
        Return an immutable snapshot of the current registrations.
        """
        return type(self)(self._positionals, self._options, frozen=True)

    def __len__(self):
        return len(self._positionals) + len(self._options)

    def __repr__(self):
        return f"registry(positionals={self.positionals!r}, options={self.options!r})"

    def __rich_repr__(self):
        yield "positionals", self.positionals
        yield "options", self.options


__all__ = (
    "Registry",
)
