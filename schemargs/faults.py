"""
Schemargs faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing
  issue. Codes are grouped by domain so logs and searches stay predictable.
- ParserFault / ParserWarning: base types carrying a message plus read-only
  options (title, code, hint, ...) that know how to render themselves with rich.
- ConfigurationError: the schema itself is malformed (a programming mistake).
- ValidationError: a well-formed schema rejected the supplied tokens; carries
  every Issue (field path + message) found in one pass.
- UnknownOptionError / UnknownSubcommandError: a token matched no slot.
- HelpRequested: raised only by throwing parse entry points.
- trigger(): surface a fault (render in shell mode, raise otherwise).
- getdoc(): optional description lookup for a code from the host application.

Host configuration (read from __main__, like any other CLI setting)
- __styles__: palette overrides for rendering.
- __codes__: FaultCode → label remapping.
- __docs__: FaultCode → short documentation string.
- __prog__: program name shown in fault headers.
"""
import copy
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType
from typing import NamedTuple

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - configuration (101xx): the schema cannot be used at all.
    - routing (1110x): UNKNOWN_SUBCOMMAND
    - switches (1111x): UNKNOWN_OPTION, OPTION_VALUE_REQUIRED
    - positionals (1112x): UNEXPECTED_POSITIONAL
    - values (1113x): INVALID_VALUES
    - help (112xx): HELP_REQUESTED
    - warnings (12xxx): EMPTY_INLINE_VALUE
    """
    # --- configuration errors (10xxx) ---
    DUPLICATED_POSITION         = 10101
    NONCONTIGUOUS_POSITIONS     = 10102
    MULTIPLE_REST_ARGUMENTS     = 10103
    NON_ARRAY_REST_ARGUMENT     = 10104
    RESERVED_ARGUMENT           = 10105
    DUPLICATED_SHORT_ALIAS      = 10106
    UNKNOWN_DEFAULT_COMMAND     = 10107

    # --- routing errors (11xxx) ---
    UNKNOWN_SUBCOMMAND          = 11102

    # --- switch errors (11xxx) ---
    UNKNOWN_OPTION              = 11112
    OPTION_VALUE_REQUIRED       = 11117

    # --- positional errors (11xxx) ---
    UNEXPECTED_POSITIONAL       = 11121

    # --- value errors (11xxx) ---
    INVALID_VALUES              = 11131

    # --- help (11xxx) ---
    HELP_REQUESTED              = 11201

    # --- warnings (12xxx) ---
    EMPTY_INLINE_VALUE          = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class Issue(NamedTuple):
    """
    One validation problem: where it happened and what went wrong.

    path is a tuple of keys (argument name, then list indexes for arrays).
    """
    path: tuple
    message: str

    def __str__(self):
        if not self.path:
            return self.message
        return "%s: %s" % (".".join(map(str, self.path)), self.message)


_PALETTES = {
    "error": {
        "prog-name": "bold #E6E6F0",  # near-white program name
        "code": "bold #00E5FF",  # neon cyan fault code
        "title": "bold #FF4DA6",  # friendly pinky title
        "message": "#C8C8D0",  # soft light gray message
        "issue-dot": "#FF4DA6 dim",
        "issue": "#C8C8D0",
        "hint-arrow": "#9CE19C dim",  # gentle green arrow
        "hint": "italic #9CE19C",  # gentle green hint text
    },
    "warning": {
        "prog-name": "bold #E6E6F0",
        "code": "bold #FFB400",  # amber fault code for warnings
        "title": "bold #FFC2E0",  # softer pinky title for warnings
        "message": "#D6D6DE",
        "issue-dot": "#FFC2E0 dim",
        "issue": "#D6D6DE",
        "hint-arrow": "#B8EFAF dim",
        "hint": "italic #B8EFAF",
    },
}


def _render(fault, kind):
    """
    Build the rich renderable shared by errors and warnings.

    Layout: "[ prog — code | Title ]", the message, one bullet per issue
    (validation errors only), then an optional "→ hint" line. With
    fancy=True the body is wrapped in a panel titled by the header.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", True)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, _PALETTES[kind] | getattr(main, "__styles__", {}))

    def text(fragment, style):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    prog = text(getattr(main, "__prog__", options.get("prog", "")), "prog-name")
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        *((prog, " — ") if prog else ()),
        text(code.normalize() if isinstance(code, FaultCode) else code, "code"),
        " | ",
        text(str(options.get("title", kind)).title(), "title"),
        " ]"
    )

    body = [text(fault.message, "message")]
    for issue in getattr(fault, "issues", ()):
        body.append(Text.assemble(text(" • ", "issue-dot"), text(issue, "issue")))
    if hint := options.get("hint"):
        body.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if fancy:
        return Panel(Group(*body), title=header, title_align="left")
    return Group(header, *body)


class ParserFault(Exception):
    """
    Base class for every error raised by the parser.

    Carries a message and a read-only mapping of options. Common options:
    title, code, hint, colorful, fancy, shell, status. Subclasses add their
    own context (token, suggestions, issues, ...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    @property
    def title(self):
        return self.options.get("title", "error")

    @property
    def code(self):
        return self.options.get("code")

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        return _render(self, "error")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(self.options.get("status", 1))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ConfigurationError(ParserFault):
    """
    The schema itself is invalid; no argv can make it work.
    """


class ValidationError(ParserFault):
    """
    Supplied tokens failed coercion or shape checks.

    All issues found during one resolution are reported together.
    """

    def __init__(self, issues=(), /, **options):
        self.issues = tuple(Issue(*issue) for issue in issues)
        if len(self.issues) == 1:
            message = "invalid argument %s" % (self.issues[0],)
        else:
            message = "%d invalid arguments" % len(self.issues)
        options.setdefault("title", "invalid arguments")
        options.setdefault("code", FaultCode.INVALID_VALUES)
        super().__init__(message, **options)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.issues, **{**self.options, **overrides})


class OptionValueRequiredError(ValidationError):
    """
    A value-taking option was the last token, with nothing to consume.
    """


class UnknownOptionError(ParserFault):
    """
    A token matched no named option and no positional slot.
    """

    @property
    def token(self):
        return self.options.get("token")

    @property
    def suggestions(self):
        return tuple(self.options.get("suggestions", ()))


class UnknownSubcommandError(ParserFault):
    """
    The first token names no declared subcommand and no default exists.
    """

    @property
    def token(self):
        return self.options.get("token")

    @property
    def suggestions(self):
        return tuple(self.options.get("suggestions", ()))


class HelpRequested(ParserFault):
    """
    Not a failure: the user asked for help. Raised only by throwing parse
    entry points; safe_parse reports it as a Help result instead.
    """

    @property
    def text(self):
        return self.options.get("text", "")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        Console().print(self.text, markup=False, highlight=False)
        sys.exit(0)


class ParserWarning(Warning):
    """
    Base class for soft feedback; rendered like faults, never fatal.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, "warning")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            warnings.warn(self, stacklevel=self.options.get("stacklevel", 2))
            return
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyOptionValueWarning(ParserWarning):
    """
    An option was given as '--name=' with nothing after the equals sign.
    """


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options).
    - in shell mode, errors are rendered on stderr and the process exits;
      otherwise the error is raised (or the warning issued).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ whose keys
    are FaultCode members. returns None when nothing is registered.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "FaultCode",
    "Issue",
    "ParserFault",
    "ConfigurationError",
    "ValidationError",
    "OptionValueRequiredError",
    "UnknownOptionError",
    "UnknownSubcommandError",
    "HelpRequested",
    "ParserWarning",
    "EmptyOptionValueWarning",
    "trigger",
    "getdoc",
)
