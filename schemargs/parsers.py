"""
Schemargs command parser: argv → Success | Help | Failure.

Per call the parser goes through
    start → help detected → Help
    start → tokenized → resolved → Success
    start → tokenized → resolution failed → Failure
and keeps no state between calls.

Entry points
- Parser.safe_parse(argv) never raises; it returns one of the result types
  below, to be matched exhaustively:

      match parser.safe_parse(argv):
          case Success(data):
              ...
          case Help(text):
              print(text)
          case Failure(cause, help):
              print(cause, help, sep="\\n\\n")

- Parser.parse(argv) returns the record directly and raises the failure cause
  (ConfigurationError, ValidationError, UnknownOptionError, ...) or
  HelpRequested.

argv may be a list of tokens, a shell-like string (split with shlex), or
omitted to read sys.argv[1:].
"""
import shlex
import sys
from collections.abc import Iterable
from dataclasses import dataclass

from .faults import *
from .schemas import CommandSchema
from .utils import Unset


@dataclass(frozen=True, slots=True)
class Success:
    """Parsed record; command is set when a dispatcher routed the call."""
    data: dict
    command: str | None = None


@dataclass(frozen=True, slots=True)
class Help:
    """The user asked for help; text is ready to print."""
    text: str


@dataclass(frozen=True, slots=True)
class Failure:
    """Parsing failed; cause explains why and help shows the usage."""
    cause: Exception
    help: str


type ParseResult = Success | Help | Failure


def is_help(argv, /):
    """
    True when --help or -h appears anywhere in argv, with or without an
    inline value (--help=false is still a help request).
    """
    return any(token.partition("=")[0] in ("--help", "-h") for token in argv)


def tokens(prompt=Unset, /):
    """
    Normalize a prompt into a list of argv tokens.

    - Unset: sys.argv[1:]
    - str: shell-like string, split with shlex.split
    - Iterable[str]: used as-is (each item must be a string)
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        argv = list(prompt)
        if not all(isinstance(item, str) for item in argv):
            raise TypeError("argv must be a string or an iterable of strings")
        return argv
    raise TypeError("argv must be a string or an iterable of strings")


class Parser:
    """
    Parser bound to one CommandSchema.

    The schema is shared, never copied or mutated, so a Parser may be used
    from any number of threads at once.
    """
    __typename__ = "parser"

    def __init__(self, schema, /):
        self._schema = CommandSchema.coerce(schema)

    @property
    def schema(self):
        return self._schema

    @property
    def name(self):
        return self._schema.name

    @property
    def descr(self):
        return self._schema.descr

    @property
    def help(self):
        return self._schema.help

    def safe_parse(self, argv=Unset, /):
        """Parse argv and return Success, Help or Failure; never raises."""
        help = self._schema.help
        try:
            argv = tokens(argv)
            if is_help(argv):
                return Help(help)
            split = self._schema.tokenize(argv)
            data = self._schema.resolve(split.values, split.positionals, literal=split.literal)
        except Exception as exception:
            return Failure(exception, help)
        return Success(data)

    def parse(self, argv=Unset, /):
        """Parse argv and return the record; raise on help or failure."""
        match self.safe_parse(argv):
            case Success(data):
                return data
            case Help(text):
                raise HelpRequested(
                    "help requested",
                    title="help requested",
                    code=FaultCode.HELP_REQUESTED,
                    text=text,
                )
            case Failure(cause):
                raise cause

    def __repr__(self):
        return "%s(%r)" % (self.__typename__, self._schema)


def command(name, descr, args=None):
    """
    Build a Parser from a name, a description and an argument mapping.

    Example
        >>> search = command("search", "Search with custom parameters", {
        ...     "query": Argument(String(), position=0),
        ...     "count": Argument(Number().default(5), short="c"),
        ... })
        >>> search.parse(["hello", "--count", "10"])
        {'query': 'hello', 'count': 10}
    """
    return Parser(CommandSchema(name, descr, args))


__all__ = (
    "Success",
    "Help",
    "Failure",
    "ParseResult",
    "Parser",
    "command",
    "is_help",
    "tokens",
)
