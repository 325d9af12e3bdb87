"""
Schemargs help rendering.

generate_help() produces the deterministic plain-text help of a command:

    <name>
    > <description>

    SUBCOMMANDS:
      <name> - <description>

    ARGUMENTS:
      <key:type> - <descr> (default: <json>)
      ...<key:type[]> - <descr>

    OPTIONS:
      --<key>, -<short> <type> - <descr> (default: <json>)

    FLAGS:
      --help, -h - show help

Sections other than FLAGS only appear when non-empty. Positionals are listed
in index order with the rest-argument last; options keep declaration order.
Boolean options never show a type tag since their presence alone toggles them.

stylize() turns that text into a rich Text for terminals, and print_help()
writes it to a console (optionally framed in a panel).
"""
import re
from collections import defaultdict

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .resolver import layout
from .utils import jsonify

# Palette (host overrides through __main__.__styles__).
_STYLES = {
    "program-name": "bold #FF4D94",  # magenta-pink brand pop
    "description": "italic #9CA3AF",  # neutral gray
    "section": "bold #FFD600",  # amber section headers
    "switch": "bold #36C5F0",  # sky-blue --name / -s
    "placeholder": "#00E6FF",  # cyan <key:type>
    "default": "dim #E5E7EB",  # muted "(default: ...)"
    "panel-title": "bold #FF4D94",
}

_PATTERNS = (
    ("section", re.compile(r"^[A-Z]+:$", re.MULTILINE)),
    ("description", re.compile(r"^> .*$", re.MULTILINE)),
    ("switch", re.compile(r"(?<=[\s,])--?[^\W\d_][\w-]*", re.MULTILINE)),
    ("placeholder", re.compile(r"(?:\.\.\.)?<[^<>\n]+>")),
    ("default", re.compile(r"\(default: [^\n]*\)$", re.MULTILINE)),
)


def _entry(head, descr, fallback=None):
    if descr := descr or fallback:
        return "  %s - %s" % (head, descr)
    return "  %s" % head


def _default(argument):
    if not argument.type.has_default:
        return ""
    return " (default: %s)" % jsonify(argument.type.get_default())


def generate_help(name, descr, arguments=None, subcommands=None):
    """
    Render the help text of a command.

    Parameters
    - name: program or command name (first line).
    - descr: one-line description (second line, prefixed with "> ").
    - arguments: Mapping[str, Argument] | None
    - subcommands: Mapping[str, CommandSchema] | None; each value needs a
      'descr' attribute.
    """
    arguments = arguments or {}
    help = "%s\n> %s\n\n" % (name, descr)

    if subcommands:
        help += "SUBCOMMANDS:\n"
        for key, command in subcommands.items():
            help += _entry(key, command.descr) + "\n"
        help += "\n"

    plan = layout(arguments)
    entries = []
    for key in plan.indexed:
        argument = arguments[key]
        entries.append(_entry("<%s:%s>" % (key, argument.type.display), argument.descr) + _default(argument))
    if plan.rest is not None:
        argument = arguments[plan.rest]
        entries.append(
            _entry("...<%s:%s>" % (plan.rest, argument.type.display), argument.descr, "rest arguments") + _default(argument)
        )
    if entries:
        help += "ARGUMENTS:\n" + "\n".join(entries) + "\n\n"

    entries = []
    for key, argument in arguments.items():
        if argument.positional:
            continue
        head = "--" + key
        if argument.short:
            head += ", -" + argument.short
        if argument.type.kind != "boolean":
            head += " <%s>" % argument.type.display
        entries.append(_entry(head, argument.descr) + _default(argument))
    if entries:
        help += "OPTIONS:\n" + "\n".join(entries) + "\n\n"

    help += "FLAGS:\n"
    help += "  --help, -h - show help\n"
    return help


def stylize(help, /, *, colorful=True):
    """
    Return the help text as a rich Text, styled when colorful is True.
    """
    text = Text(help.rstrip("\n"))
    if not colorful:
        return text

    styles = defaultdict(str, _STYLES | getattr(__import__("__main__"), "__styles__", {}))
    first, _, _ = text.plain.partition("\n")
    text.stylize(styles["program-name"], 0, len(first))
    for style, pattern in _PATTERNS:
        text.highlight_regex(pattern, styles[style])
    return text


def print_help(help, /, *, colorful=True, fancy=False, console=None):
    """
    Print help text to a console (stdout by default).

    With fancy=True the text is framed in a panel titled after the first line.
    """
    console = console or Console()
    renderable = stylize(help, colorful=colorful)
    if fancy:
        title = help.partition("\n")[0]
        style = defaultdict(str, _STYLES | getattr(__import__("__main__"), "__styles__", {}))["panel-title"]
        renderable = Panel(
            renderable,
            title=Text.assemble("[ ", title.upper(), " ]", style=style if colorful else ""),
            title_align="left",
        )
    console.print(renderable)


__all__ = (
    "generate_help",
    "stylize",
    "print_help",
)
