"""
Argosy parsing engine.

A Session feeds one token list through a frozen registry snapshot and fills a
fresh Results store.

phases
- option pass
  • scan tokens left to right; test each one against every option in
    declaration order, the first match wins.
  • a switch (nargs 0) records [true]; a fixed arity consumes exactly that
    many following tokens, whatever they look like; a variadic option consumes
    every token up to the end of input.
  • every consumed token is converted to the option's type; the first
    inconvertible token aborts the session with a ConversionError.
  • tokens matching no option are kept, in order, for the positional pass.
  • an option given again keeps its first values; the repetition is consumed,
    validated, and reported as a DuplicatedOptionWarning.
- help short-circuit
  • when the configured helper option was given with a true first value,
    the positional pass is skipped and the session completes, so "-h" alone
    always succeeds.
- positional pass
  • walk the remaining tokens and the positionals in lockstep; running out
    of tokens raises ArityError("insufficient number of arguments").
  • a variadic positional takes everything left.
  • tokens left over after the last positional are discarded.

invariants
- session.results is available after run() whether it succeeded or not; it
  is marked completed only on success.
- messages stay short and stable ("value is not convertible to integer-type");
  positions (1-based ordinals) go in the hint.
"""
import copy
import logging
from collections import deque

from .faults import *
from .results import Results
from .utils import *
from .values import Value, ValueType

logger = logging.getLogger(__name__)


class Session:
    """
    One parse attempt over a frozen registry.

    Parameters
    - registry: Registry (frozen on entry if it is not already)
    - tokens: Iterable[str], the argv tail (program name excluded)
    - helper: str | None, name of the presence option that short-circuits
      the positional pass
    """

    def __init__(self, registry, tokens, /, *, helper=None):
        tokens = tuple(tokens)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse tokens must be strings")
        self._registry = registry if registry.frozen else registry.freeze()
        self._tokens = tokens
        self._helper = helper
        self._results = Results()
        self._remaining = []
        self._warnings = []

    @property
    def registry(self):
        return self._registry

    @property
    def tokens(self):
        return self._tokens

    @property
    def results(self):
        return self._results

    @property
    def remaining(self):
        """
        Tokens left for the positional pass, in input order.
        """
        return tuple(token for _, token in self._remaining)

    @property
    def warnings(self):
        return tuple(self._warnings)

    @property
    def helped(self):
        """
        True when the helper option was given with a true first value.

        A presence switch always records true; a value-bearing helper such as
        "--help false" does not short-circuit. String-typed helpers never do.
        """
        if self._helper is None:
            return False
        values = dict(self._results.items()).get(self._helper, ())
        if not values or values[0].type is ValueType.STRING:
            return False
        return values[0].get(bool)

    def _convert(self, spec, kind, consumed):
        """
        convert (index, token) pairs into Values of the spec's type.
        """
        values = []
        for index, token in consumed:
            try:
                values.append(Value(spec.type, token))
            except ConversionError as error:
                raise copy.replace(
                    error,
                    hint=f"{token!r} at {ordinal(index)} position is not a valid "
                         f"{spec.type.describe()} for {kind} {spec.name!r}",
                    argument=spec.name,
                    index=index,
                ) from None
        return values

    def _insufficient(self, spec, kind, available):
        expected = "at least 1 value" if spec.variadic else f"{spec.nargs} value(s)"
        return ArityError(
            "insufficient number of arguments",
            code=FaultCode.INSUFFICIENT_ARGUMENTS,
            title="insufficient arguments",
            hint=f"{kind} {spec.name!r} expects {expected} but {available} remain",
            argument=spec.name,
        )

    def _options(self):
        tokens = deque(enumerate(self._tokens, 1))
        while tokens:
            index, token = tokens.popleft()
            spec = self._registry.option(token)
            if spec is None:
                self._remaining.append((index, token))
                continue

            if spec.switch:
                values = [Value(ValueType.BOOLEAN, "true")]
            elif spec.variadic:
                values = self._convert(spec, "option", tokens)
                tokens.clear()
            else:
                if len(tokens) < spec.nargs:
                    raise self._insufficient(spec, "option", len(tokens))
                values = self._convert(spec, "option", [tokens.popleft() for _ in range(spec.nargs)])

            if self._results._record(spec.name, values):
                logger.debug("option %r matched %r at position %d", spec.name, token, index)
            else:
                self._warnings.append(DuplicatedOptionWarning(
                    f"option {spec.name!r} given more than once",
                    code=FaultCode.DUPLICATED_OPTION,
                    title="duplicated option",
                    hint=f"{token!r} at {ordinal(index)} position is ignored, the first occurrence is kept",
                    argument=spec.name,
                    index=index,
                ))

    def _positionals(self):
        tokens = deque(self._remaining)
        for spec in self._registry.positionals:
            if not tokens:
                raise self._insufficient(spec, "positional", 0)
            if spec.variadic:
                consumed = list(tokens)
                tokens.clear()
            else:
                if len(tokens) < spec.nargs:
                    raise self._insufficient(spec, "positional", len(tokens))
                consumed = [tokens.popleft() for _ in range(spec.nargs)]
            self._results._record(spec.name, self._convert(spec, "positional", consumed))

        if tokens:
            logger.debug("discarding %d trailing token(s): %r", len(tokens), [token for _, token in tokens])

    def run(self):
        """
        Execute both passes and return the completed Results.

        Raises
        - ConversionError: a consumed token does not fit its declared type.
        - ArityError: not enough tokens for an option or a positional.
        """
        self._options()
        if self.helped:
            logger.debug("helper option %r given, skipping positional pass", self._helper)
        else:
            self._positionals()
        self._results._complete()
        return self._results


__all__ = (
    "Session",
)
