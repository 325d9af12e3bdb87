"""
Schemargs subcommand dispatcher: route the first token to a sub-schema.

Routing rules (in order)
1. Empty argv, or --help / -h anywhere → root Help listing every subcommand.
2. argv[0] names a subcommand → consume it and parse the rest with it.
3. A default subcommand is configured → parse the entire argv with it, so
   `tool a b` behaves like `tool <default> a b`.
4. Otherwise → Failure(UnknownSubcommandError, root help).

Results
- safe_parse(argv) → Routed(command, result) | Help | Failure, where result
  is the subcommand's own Success | Help | Failure (Success also carries the
  command name).
- parse(argv) → Invocation(command, data), raising on help or failure.

Quick example
    >>> git = subcommands({
    ...     "add": CommandSchema("git add", "Add files", {
    ...         "files": Argument(String().array(), position=...),
    ...     }),
    ...     "commit": CommandSchema("git commit", "Commit changes", {
    ...         "message": Argument(String(), position=0),
    ...     }),
    ... }, name="git", descr="Git command line tool")
    >>> git.parse(["add", "a.txt", "b.txt"])
    Invocation(command='add', data={'files': ['a.txt', 'b.txt']})
"""
import copy
import difflib
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import NamedTuple

from .faults import *
from .help import generate_help
from .parsers import Parser, Success, Help, Failure, is_help, tokens
from .utils import *


@dataclass(frozen=True, slots=True)
class Routed:
    """A subcommand was selected; result is that subcommand's own outcome."""
    command: str
    result: Success | Help | Failure


class Invocation(NamedTuple):
    """Return value of Dispatcher.parse."""
    command: str
    data: dict


class Dispatcher:
    """
    Map of subcommand name → parser, plus an optional default subcommand.

    Parameters
    - commands: Mapping[str, CommandSchema | Parser | dict]
    - name, descr: root name and description shown in root help.
    - default: name of the subcommand used when argv[0] matches none.

    Raises
    - ConfigurationError: default names no declared subcommand.
    - TypeError / ValueError: malformed names or schemas.
    """
    __typename__ = "dispatcher"

    name = mirror("name")
    descr = mirror("descr")
    default = mirror("default")

    def __init__(self, commands, /, name="command", descr="Command with subcommands", default=Unset):
        if not isinstance(name, str):
            raise TypeError(f"{self.__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{self.__typename__} 'name' cannot be empty")
        if not isinstance(descr, str):
            raise TypeError(f"{self.__typename__} 'descr' must be a string")

        parsers = {}
        for key, schema in commands.items():
            if not isinstance(key, str):
                raise TypeError(f"{self.__typename__} subcommand names must be strings")
            elif not re.fullmatch(r"[^\W_][\w.:-]*", key):
                raise ValueError(f"{self.__typename__} subcommand name {key!r} is not valid")
            parsers[key] = schema if isinstance(schema, Parser) else Parser(schema)
        if not parsers:
            raise TypeError(f"{self.__typename__} must specify at least one subcommand")

        if not isinstance(default, str | Unset):
            raise TypeError(f"{self.__typename__} 'default' must be a string")
        if default is not Unset and default not in parsers:
            raise ConfigurationError(
                "default subcommand %r not found in subcommands" % default,
                title="unknown default subcommand",
                code=FaultCode.UNKNOWN_DEFAULT_COMMAND,
                hint="choose one of %s" % ", ".join(map(repr, parsers)),
            )

        self._name = name
        self._descr = descr.strip()
        self._default = coalesce(default)
        self._parsers = MappingProxyType(parsers)
        self._help = self.root_help()

    @property
    def commands(self):
        """Read-only mapping of subcommand name → Parser."""
        return self._parsers

    @property
    def names(self):
        return tuple(self._parsers)

    @property
    def help(self):
        return self._help

    def root_help(self, name=Unset, descr=Unset):
        """
        Render root help, optionally under another name/description (useful
        when the dispatcher is mounted inside a larger program).
        """
        schemas = {key: parser.schema for key, parser in self._parsers.items()}
        return generate_help(coalesce(name, self._name), coalesce(descr, self._descr), {}, schemas)

    def _unknown(self, token):
        suggestions = difflib.get_close_matches(token, self._parsers.keys(), 3)
        try:
            hint = "did you mean %r? run '%s --help' to see available subcommands" % (suggestions[0], self._name)
        except IndexError:
            hint = "run '%s --help' to see available subcommands" % self._name
        return UnknownSubcommandError(
            "unknown subcommand %r" % token,
            title="unknown subcommand",
            code=FaultCode.UNKNOWN_SUBCOMMAND,
            token=token,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_SUBCOMMAND),
        )

    def safe_parse(self, argv=Unset, /):
        """Route and parse argv; never raises."""
        try:
            argv = tokens(argv)
        except TypeError as exception:
            return Failure(exception, self._help)

        if not argv or is_help(argv):
            return Help(self._help)

        if argv[0] in self._parsers:
            command, rest = argv[0], argv[1:]
        elif self._default is not None:
            command, rest = self._default, argv
        else:
            return Failure(self._unknown(argv[0]), self._help)

        result = self._parsers[command].safe_parse(rest)
        if isinstance(result, Success):
            result = copy.replace(result, command=command)
        return Routed(command, result)

    def parse(self, argv=Unset, /):
        """Route and parse argv; return Invocation(command, data) or raise."""
        match self.safe_parse(argv):
            case Routed(command, Success(data)):
                return Invocation(command, data)
            case Routed(_, Failure(cause)) | Failure(cause):
                raise cause
            case Routed(_, Help(text)) | Help(text):
                raise HelpRequested(
                    "help requested",
                    title="help requested",
                    code=FaultCode.HELP_REQUESTED,
                    text=text,
                )

    def __repr__(self):
        return "%s(name=%r, commands=%r, default=%r)" % (
            self.__typename__, self._name, list(self._parsers), self._default
        )


def subcommands(commands, /, name="command", descr="Command with subcommands", default=Unset):
    """
    Build a Dispatcher from a mapping of subcommand name → schema.

    See Dispatcher for parameters.
    """
    return Dispatcher(commands, name=name, descr=descr, default=default)


__all__ = (
    "Routed",
    "Invocation",
    "Dispatcher",
    "subcommands",
)
