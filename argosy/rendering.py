"""
Argosy help, usage and status rendering.

Every renderer builds a rich Text. Its `.plain` form is the exact, stable
layout (safe to compare byte for byte); when colorful rendering is requested
the same Text carries styles from the palette below.

Layout
- usage:
      <description>
      <blank>
      usage:
        prog [{-h|--help}] [-n num] file(0) file(1) rest...
  The usage line is "prog " followed by every option fragment and every
  positional fragment, each one followed by a single space.

- help: usage, then
      <blank>
      Arguments
        file [string,string]:
              description wrapped at column 80, indented by 8
      <blank>
      Options
        -h|--help:
        -n|--num [num:integer]:

- status: a "# ..." diagnostic dump of the inputs, the declared specs and the
  parsed result map (sorted by name).

Palette keys
- program-name, usage-label, description-section, group-label,
  option-name, positional-name, metavar, greedy-metavar, value-type,
  argument-description

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
"""
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .values import VARIABLE

WIDTH = 80
INDENT = 8

_PALETTE = {
    # === Head sections ===
    "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
    "usage-label": "bold #00E6FF",  # CYAN → signature info color
    "description-section": "italic #A3A3A3",  # Neutral gray

    # === Groups / arguments ===
    "group-label": "bold #FFFFFF",  # Pure white headers
    "argument-description": "#9CA3AF",  # Muted gray

    # === Names / metavars ===
    "option-name": "bold #00E6FF",  # CYAN for options
    "positional-name": "bold #22C55E",  # GREEN for positionals
    "metavar": "bold #FFD600",  # AMBER for parameters
    "greedy-metavar": "bold italic #FFD600",
    "value-type": "#36C5F0",  # SKY-BLUE for types
}


def _plain(style):
    return ""


def palette(colorful=False, /):
    """
    Return a styler(name) -> style function.

    When colorful is False every style resolves to "" so the rendered Text is
    plain; otherwise __main__.__styles__ entries override the defaults.
    """
    if not colorful:
        return _plain
    styles = defaultdict(str, _PALETTE | getattr(__import__("__main__"), "__styles__", {}))
    return lambda style: styles[style]


def _metavar(spec, styler):
    """
    Yield the metavar labels of a spec according to its arity.
    """
    if spec.nargs == VARIABLE:
        yield Text(spec.name + "...", styler("greedy-metavar"))
    elif spec.nargs == 1:
        yield Text(spec.name, styler("metavar"))
    else:
        for index in range(spec.nargs):
            yield Text(f"{spec.name}({index})", styler("metavar"))


def _flags(spec, styler):
    return Text("|").join(Text(flag, styler("option-name")) for flag in spec.flags)


def fragment(spec, styler=_plain, /):
    """
    Usage-line fragment of a positional or an option.

    Positional
    - nargs 1: "name"; nargs n: "name(0) ... name(n-1)"; variadic: "name..."

    Option
    - "[" + ("{" flags "}" when aliased, else the flag) + metavars + "]"
      where every metavar is preceded by a space.
    """
    if not hasattr(spec, "flags"):
        return Text(" ").join(_metavar(spec, styler))

    flags = _flags(spec, styler)
    if len(spec.flags) > 1:
        flags = Text.assemble("{", flags, "}")
    parts = [Text("["), flags]
    if spec.nargs:
        for metavar in _metavar(spec, styler):
            parts.extend((Text(" "), metavar))
    parts.append(Text("]"))
    return Text.assemble(*parts)


def _signature(spec, styler):
    """
    Bracketed type list used in detailed help.

    Positional: "[integer,integer]" / "[integer,...]"
    Option:     "[num:integer]" / "[num(0):integer,num(1):integer]" / "[num:integer,...]"
    """
    kind = spec.type.describe()
    named = hasattr(spec, "flags")
    entries = []

    if spec.nargs == VARIABLE or spec.nargs == 1:
        label = Text.assemble((spec.name, styler("metavar")), ":") if named else Text("")
        entries.append(Text.assemble(label, (kind, styler("value-type"))))
    else:
        for index in range(spec.nargs):
            label = Text.assemble((f"{spec.name}({index})", styler("metavar")), ":") if named else Text("")
            entries.append(Text.assemble(label, (kind, styler("value-type"))))

    if spec.nargs == VARIABLE:
        entries.append(Text("..."))
    return Text.assemble("[", Text(",").join(entries), "]")


def _description(descr, styler):
    """
    Word-wrap a description at WIDTH columns with an INDENT-space indent.
    """
    section = Text()
    if not descr:
        return section
    console = Console(width=WIDTH)
    for line in Text(descr, styler("argument-description")).wrap(console, WIDTH - INDENT):
        line.rstrip()
        section.append(" " * INDENT).append(line).append("\n")
    return section


def explanation(spec, styler=_plain, /):
    """
    Detailed help block of a positional or an option (newline-terminated).
    """
    if hasattr(spec, "flags"):
        head = [Text("  "), _flags(spec, styler)]
        if spec.nargs:
            head.extend((Text(" "), _signature(spec, styler)))
    else:
        head = [Text("  "), Text(spec.name, styler("positional-name")), Text(" "), _signature(spec, styler)]
    return Text.assemble(*head, ":\n", _description(spec.descr, styler))


def usage_line(prog, registry, styler=_plain, /):
    """
    "prog " followed by each option then each positional fragment, each
    fragment followed by one space.
    """
    parts = [Text(prog, styler("program-name")), Text(" ")]
    for spec in (*registry.options, *registry.positionals):
        parts.extend((fragment(spec, styler), Text(" ")))
    return Text.assemble(*parts)


def usage(prog, description, registry, styler=_plain, /):
    """
    Description (when given), then the "usage:" section.
    """
    parts = []
    if description:
        parts.append(Text(description + "\n\n", styler("description-section")))
    parts.extend((
        Text("usage:", styler("usage-label")),
        Text("\n  "),
        usage_line(prog, registry, styler),
        Text("\n"),
    ))
    return Text.assemble(*parts)


def help(prog, description, registry, styler=_plain, /):
    """
    Full help: usage followed by the "Arguments" and "Options" sections
    (each omitted when empty).
    """
    parts = [usage(prog, description, registry, styler)]
    if registry.positionals:
        parts.append(Text.assemble("\n", ("Arguments", styler("group-label")), "\n"))
        parts.extend(explanation(spec, styler) for spec in registry.positionals)
    if registry.options:
        parts.append(Text.assemble("\n", ("Options", styler("group-label")), "\n"))
        parts.extend(explanation(spec, styler) for spec in registry.options)
    return Text.assemble(*parts)


def _format(value):
    object = value.get()
    if isinstance(object, bool):
        return "true" if object else "false"
    if isinstance(object, float):
        return "%f" % object
    return str(object)


def status(tokens, registry, results, /):
    """
    Diagnostic dump of inputs, declared specs and parsed values.
    """
    lines = [
        "# input arguments:" + "".join(" " + token for token in tokens),
        "# defined options: " + "".join(spec.usage() + " " for spec in registry.options),
        "# named arguments: " + "".join(spec.usage() + " " for spec in registry.positionals),
        "# parsed arguments:",
    ]
    for name, values in sorted(results.items()):
        lines.append(f"    {name}:" + "".join(" " + _format(value) for value in values))
    return Text("".join(line + "\n" for line in lines))


__all__ = (
    "WIDTH",
    "INDENT",
    "palette",
    "fragment",
    "explanation",
    "usage_line",
    "usage",
    "help",
    "status",
)
