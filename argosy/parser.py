"""
Argosy parser: declare, parse, query, explain.

What this module provides
- Parser: the user-facing object that owns the token list, the registry of
  positional/option specs, the parse policy, and the latest Results.

Lifecycle
- construct with the argv tail (or use Parser.from_argv with a full argv),
- register positionals with add_positional() (alias add_argument()) and
  options with add_option(),
- call parse(),
- read values with find()/get()/getall(), render help at any time.

Parse policy (shell)
- shell=True (default): a failed parse prints the usage and the fault on
  stderr and exits with status 1; a successful parse that saw the helper
  option prints the full help on stdout and exits with status 0.
- shell=False: a failed parse raises the ParseError (ConversionError or
  ArityError) and a helper option is left for the caller to check with
  find(helper). parse(shell=...) overrides the policy for one call.

Helper option
- helper names the option (conventionally a switch named "help" with flags
  -h/--help) that skips the positional pass when given with a true value, so
  that "prog -h" succeeds even when positionals are mandatory. helper=None turns
  the short-circuit off entirely.

Threading
- A Parser is plain mutable state. Registering, parsing and reading the same
  instance from several threads must be serialized by the caller.

Quick start
    from argosy import Parser, ValueType

    parser = Parser(["-n", "3", "in.txt"], "Copy a file a few times.")
    parser.add_option(["-h", "--help"], "help", descr="show this help")
    parser.add_option(["-n", "--num"], "num", ValueType.INTEGER, descr="copies")
    parser.add_positional("file", ValueType.STRING, descr="input file")
    parser.parse()
    parser.get("num")        # 3
    parser.get("file")       # 'in.txt'
    parser.get("verbose", False)  # False (absent, default used)
"""
import logging
import os.path
import sys

from rich.console import Console

from . import rendering
from .arguments import Option, Positional
from .engine import Session
from .faults import *
from .registry import Registry
from .results import Results
from .utils import *
from .values import ValueType

logger = logging.getLogger(__name__)


def _program(argv0=Unset):
    """
    Resolve the default program name: __main__.__prog__, then the basename of
    argv[0], then "argosy".
    """
    main = __import__("__main__")
    if hasattr(main, "__prog__"):
        return str(main.__prog__)
    argv0 = coalesce(argv0, sys.argv[0] if sys.argv else "")
    return os.path.basename(argv0) or "argosy"


class Parser:
    """
    Command-line parser over a fixed token list.

    Parameters
    - tokens: Iterable[str] (positional-only, optional)
      The arguments to parse, program name excluded. Defaults to sys.argv[1:].
    - description: str (positional-only)
      Leading line of the help text; may be changed later.
    - prog: str
      Program name shown in usage and faults. Defaults to __main__.__prog__,
      then to the basename of sys.argv[0].
    - shell: bool
      Default parse policy (see module docstring).
    - helper: str | None
      Name of the option that short-circuits the positional pass.
    - colorful: bool
      Style help and faults through rich.
    - fancy: bool
      Render faults inside a rich panel.
    """

    def __init__(
            self,
            tokens=Unset,
            description="",
            /,
            *,
            prog=Unset,
            shell=True,
            helper="help",
            colorful=False,
            fancy=False,
    ):
        tokens = tuple(coalesce(tokens, sys.argv[1:]))
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError(f"{type(self).__name__} tokens must be strings")
        if not isinstance(description, str):
            raise TypeError(f"{type(self).__name__} description must be a string")
        if not isinstance(helper, str | None):
            raise TypeError(f"{type(self).__name__} helper must be a string or None")

        self._tokens = tokens
        self._description = description
        self._prog = str(prog) if prog is not Unset else _program()
        self._shell = bool(shell)
        self._helper = helper
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._registry = Registry()
        self._results = Results()

    @classmethod
    def from_argv(cls, argv=Unset, description="", /, **options):
        """
        Build a parser from a full argv whose first element is the program name.

        Defaults to sys.argv. An explicit prog= keyword still wins over argv[0].
        """
        argv = list(coalesce(argv, sys.argv))
        if not argv:
            raise ValueError("from_argv() argv must contain the program name")
        options.setdefault("prog", _program(argv[0]))
        return cls(argv[1:], description, **options)

    @property
    def tokens(self):
        return self._tokens

    @property
    def prog(self):
        return self._prog

    @property
    def description(self):
        return self._description

    @description.setter
    def description(self, description):
        if not isinstance(description, str):
            raise TypeError(f"{type(self).__name__} description must be a string")
        self._description = description

    def set_description(self, description, /):
        self.description = description

    @property
    def shell(self):
        return self._shell

    @property
    def helper(self):
        return self._helper

    @property
    def colorful(self):
        return self._colorful

    @property
    def fancy(self):
        return self._fancy

    @property
    def registry(self):
        return self._registry

    @property
    def results(self):
        """
        Results of the latest parse attempt (empty and incomplete before any).
        """
        return self._results

    @property
    def completed(self):
        return self._results.completed

    # --- registration -------------------------------------------------------

    def add_positional(self, name, type, nargs=1, descr=""):
        """
        Declare a positional argument and return its spec.

        Raises
        - ConfigurationError: invalid spec, duplicate name, or a variadic spec
          already registered.
        """
        spec = Positional(name, type, nargs, descr)
        self._registry.add_positional(spec)
        self._results = Results()
        return spec

    add_argument = add_positional

    def add_option(self, flags, name, type=ValueType.BOOLEAN, nargs=Unset, descr=""):
        """
        Declare an option and return its spec.

        flags is one flag string or several aliases (e.g. ["-h", "--help"]).
        nargs defaults to 0 (presence-only) for BOOLEAN and to 1 otherwise.

        Raises
        - ConfigurationError: invalid spec, duplicate name or flag, or a
          variadic spec already registered.
        """
        spec = Option(flags, name, type, nargs, descr)
        self._registry.add_option(spec)
        self._results = Results()
        return spec

    # --- parsing ------------------------------------------------------------

    def trigger(self, fault, /, *, shell=Unset):
        """
        Surface a fault with this parser's presentation options.
        """
        trigger(
            fault,
            parser=self,
            shell=coalesce(shell, self._shell),
            colorful=self._colorful,
            fancy=self._fancy,
        )

    def parse(self, shell=Unset):
        """
        Parse the tokens against the registered specs and return the Results.

        Any previous result is discarded first. See the module docstring for
        the shell policy; shell overrides the constructor default for this
        call only.

        Raises (shell=False)
        - ConversionError, ArityError: the parse failed; find() still sees the
          names recorded before the failure.
        """
        shell = coalesce(shell, self._shell)
        session = Session(self._registry, self._tokens, helper=self._helper)
        self._results = session.results
        logger.debug("parsing %d token(s) against %d spec(s)", len(self._tokens), len(session.registry))

        try:
            session.run()
        except ParseError as fault:
            logger.debug("parse failed: %s", fault)
            for warning in session.warnings:
                self.trigger(warning, shell=shell)
            if shell:
                self.print_usage(sys.stderr)
            return self.trigger(fault, shell=shell)

        for warning in session.warnings:
            self.trigger(warning, shell=shell)

        if shell and session.helped:
            self.print_help()
            sys.exit(0)

        return self._results

    # --- queries ------------------------------------------------------------

    def find(self, name, /):
        return self._results.find(name)

    def get(self, name, default=Unset, /, *, kind=Unset):
        return self._results.get(name, default, kind=kind)

    def getall(self, name, default=Unset, /, *, kind=Unset):
        return self._results.getall(name, default, kind=kind)

    # --- rendering ----------------------------------------------------------

    def _styler(self):
        return rendering.palette(self._colorful)

    def render_usage(self):
        """
        Description and usage line (brief help), as plain text.
        """
        return rendering.usage(self._prog, self._description, self._registry).plain

    def render_help(self):
        """
        Full help (usage, Arguments, Options), as plain text.
        """
        return rendering.help(self._prog, self._description, self._registry).plain

    def render_status(self):
        """
        Diagnostic dump of inputs, specs and the latest parsed values.
        """
        return rendering.status(self._tokens, self._registry, self._results).plain

    def _print(self, text, file):
        file = file if file is not None else sys.stdout
        if not self._colorful:
            file.write(text.plain)
            return
        Console(file=file, highlight=False, soft_wrap=True).print(text, end="")

    def print_usage(self, file=None):
        self._print(rendering.usage(self._prog, self._description, self._registry, self._styler()), file)

    def print_help(self, file=None):
        self._print(rendering.help(self._prog, self._description, self._registry, self._styler()), file)

    def print_status(self, file=None):
        self._print(rendering.status(self._tokens, self._registry, self._results), file)

    def __repr__(self):
        return f"parser(prog={self._prog!r}, tokens={self._tokens!r}, completed={self.completed!r})"

    def __rich_repr__(self):
        yield "prog", self._prog
        yield "description", self._description
        yield "tokens", self._tokens
        yield "positionals", self._registry.positionals
        yield "options", self._registry.options
        yield "results", self._results


__all__ = (
    "Parser",
)
