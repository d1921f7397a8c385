"""
Argosy faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain (configuration, parsing, queries, warnings).
- ArgosyException / ArgosyWarning: base types that carry a message plus
  read-only options and know how to render themselves through rich.
- trigger(): central entry point to surface any fault, honoring shell mode.

Kinds
- ConfigurationError: an invalid spec or registration (null type, bad arity,
  empty flag set, duplicate identity, anything added after a variadic spec).
  Always raised at the registration call site.
- ParseError: a parse attempt failed.
  • ConversionError: a token does not match its declared type's grammar.
  • ArityError: not enough tokens to satisfy a declared arity.
- QueryError: a result accessor was misused.
  • IncompleteParseError: values requested before a successful parse.
  • NotFoundError: a name absent from the result map, and no default given.
- DuplicatedOptionWarning: an option was given more than once; the first
  occurrence is kept.

Integration
- The engine raises ParseError subclasses; Parser.parse() hands them to
  trigger(fault, shell=...). In shell mode the fault is printed on stderr and
  the process exits with status 1; otherwise the exception is raised.
- Hosts may define __prog__, __styles__ and __codes__ in __main__ to rename the
  program, restyle the output, or relabel fault codes.
"""
import copy
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - configuration (101xx)
      • NULL_TYPE, INVALID_ARITY, EMPTY_FLAGS, INVALID_NAME,
        AFTER_VARIADIC, DUPLICATED_NAME, DUPLICATED_FLAG, FROZEN_REGISTRY
    - parsing (111xx)
      • INCONVERTIBLE_VALUE, INSUFFICIENT_ARGUMENTS
    - queries (131xx)
      • INCOMPLETE_PARSE, ARGUMENT_NOT_FOUND
    - warnings (121xx)
      • DUPLICATED_OPTION
    """
    # --- configuration errors (10xxx) ---
    NULL_TYPE                   = 10101
    INVALID_ARITY               = 10102
    EMPTY_FLAGS                 = 10103
    INVALID_NAME                = 10104
    AFTER_VARIADIC              = 10111
    DUPLICATED_NAME             = 10112
    DUPLICATED_FLAG             = 10113
    FROZEN_REGISTRY             = 10114

    # --- parse errors (11xxx) ---
    INCONVERTIBLE_VALUE         = 11111
    INSUFFICIENT_ARGUMENTS      = 11125

    # --- query errors (13xxx) ---
    INCOMPLETE_PARSE            = 13101
    ARGUMENT_NOT_FOUND          = 13102

    # --- warnings (12xxx) ---
    DUPLICATED_OPTION           = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _renderer(options, defaults):
    """
    build the (styler, text) pair shared by every fault renderer.

    - styler(name) resolves a palette entry, or "" when colorful is off.
    - text(fragment, style) returns a rich Text, unstyled when colorful is off.
    """
    main = __import__("__main__")
    styles = defaultdict(str, defaults | getattr(main, "__styles__", {}))
    colorful = options.get("colorful", False)

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment if colorful else Text(fragment.plain)
        return Text(str(fragment), style if colorful else "")

    return styler, text


def _program(options):
    """
    resolve the program name shown in fault headers.
    """
    main = __import__("__main__")
    parser = options.get("parser")
    return getattr(main, "__prog__", getattr(parser, "prog", None) or "argosy")


class ArgosyException(Exception):
    """
    base class of every argosy error.

    attributes
    - message: str, the one-line, lowercased description.
    - options: read-only mapping with rendering/context keys, typically
      code (FaultCode), title, hint, parser, shell, colorful, fancy.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        styler, text = _renderer(self.options, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title
            "error-label": "bold #FF4DA6",
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

        prog = text(_program(self.options), styler("prog-name"))
        message = text(self.message, styler("error-message"))

        if self.options.get("fancy", False):
            code = self.code.normalize() if self.code is not None else "-"
            header = Text.assemble(
                "[ ",
                prog,
                " — ",
                text(code, styler("code")),
                " | ",
                text(str(self.options.get("title", "error")).title(), styler("error-title")),
                " ]"
            )
            renders = [message]
            if self.hint:
                renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))
            return Panel(Group(*renders), title=header, title_align="left")

        renders = [Text.assemble(prog, ": ", text("error", styler("error-label")), ": ", message)]
        if self.hint:
            renders.append(Text.assemble(text("hint: ", styler("hint-arrow")), text(self.hint, styler("hint"))))
        return Group(*renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self, soft_wrap=True, highlight=False)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ConfigurationError(ArgosyException, ValueError): ...


class ParseError(ArgosyException): ...
class ConversionError(ParseError, ValueError): ...
class ArityError(ParseError): ...


class QueryError(ArgosyException, LookupError): ...
class IncompleteParseError(QueryError): ...
class NotFoundError(QueryError, KeyError):
    def __str__(self):
        # KeyError quotes its argument; keep the plain message instead.
        return str(self.message)


class ArgosyWarning(UserWarning):
    """
    base class of every argosy warning.

    non-shell mode routes the warning through warnings.warn (so it can be
    filtered or turned into an error); shell mode prints it on stderr.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        styler, text = _renderer(self.options, {
            "prog-name": "bold #E6E6F0",
            "warning-label": "bold #FFB400",  # amber
            "warning-message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        })
        prog = text(_program(self.options), styler("prog-name"))
        renders = [Text.assemble(
            prog, ": ", text("warning", styler("warning-label")), ": ",
            text(self.message, styler("warning-message"))
        )]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text("hint: ", styler("hint-arrow")), text(hint, styler("hint"))))
        return Group(*renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self, soft_wrap=True, highlight=False)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DuplicatedOptionWarning(ArgosyWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, rendering happens on the rich console; otherwise errors
      are raised and warnings are emitted through the warnings module.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ArgosyException",
    "ConfigurationError",
    "ParseError",
    "ConversionError",
    "ArityError",
    "QueryError",
    "IncompleteParseError",
    "NotFoundError",
    "ArgosyWarning",
    "DuplicatedOptionWarning",
    "trigger",
)
