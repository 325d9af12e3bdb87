"""
Schemargs command schema: a named, described bundle of arguments.

A CommandSchema is built once (usually at import time) and never changes.
Construction validates everything that can be validated without argv:
- argument names are shell-friendly identifiers and never 'help',
- short aliases are unique and never 'h' (reserved for help),
- positional indexes are unique and contiguous, with at most one
  rest-argument of array type.

It then derives:
- options: the tokenizer's option table, always including help/-h,
- layout: positional index → argument name, plus the rest-argument,
- help: the rendered help text,
- json_schema(): a JSON-Schema object describing the parsed record.

Quick example
    >>> schema = CommandSchema("search", "Search with custom parameters", {
    ...     "query": Argument(String(), position=0, descr="search query"),
    ...     "count": {"type": Number().default(5), "short": "c"},
    ... })
    >>> schema.resolve({}, ["hello"])
    {'query': 'hello', 'count': 5}
"""
import re
from types import MappingProxyType

from .arguments import Argument
from .faults import *
from .help import generate_help
from .resolver import layout, resolve, validate
from .tokenizer import OptionConfig, tokenize
from .utils import *


class CommandSchema:
    """
    Immutable description of one command's arguments.

    Properties
    - name, descr: shown at the top of help.
    - args: read-only mapping of name → Argument, in declaration order.
    - options, layout, help: derived once at construction.
    """
    __typename__ = "command-schema"
    __introspectable__ = ("name", "descr", "args")

    name = mirror("name")
    descr = mirror("descr")

    def __init__(self, name, descr, args=None):
        if not isinstance(name, str):
            raise TypeError(f"{self.__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{self.__typename__} 'name' cannot be empty")
        if not isinstance(descr, str):
            raise TypeError(f"{self.__typename__} 'descr' must be a string")

        arguments = {}
        shorts = {}
        for key, argument in (args or {}).items():
            if not isinstance(key, str):
                raise TypeError(f"{self.__typename__} argument names must be strings")
            elif not re.fullmatch(r"[^\W\d_][\w-]*", key):
                raise ValueError(f"{self.__typename__} argument name {key!r} is not a valid option name")
            argument = Argument.coerce(argument)
            if key == "help" or argument.short == "h":
                raise ConfigurationError(
                    "argument %r overrides the built-in help option (--help, -h)" % key,
                    title="reserved argument",
                    code=FaultCode.RESERVED_ARGUMENT,
                    hint="rename the argument or choose another short alias",
                )
            if argument.short is not None:
                if argument.short in shorts:
                    raise ConfigurationError(
                        "short alias '-%s' is used by both %r and %r" % (argument.short, shorts[argument.short], key),
                        title="duplicated short alias",
                        code=FaultCode.DUPLICATED_SHORT_ALIAS,
                        hint="give every option its own short alias",
                    )
                shorts[argument.short] = key
            arguments[key] = argument

        self._name = name
        self._descr = descr.strip()
        self._args = MappingProxyType(arguments)
        self._layout = layout(self._args)
        self._options = MappingProxyType(
            {"help": OptionConfig("boolean", "h")} | {
                key: OptionConfig(argument.type.kind, argument.short, argument.type.multiple)
                for key, argument in arguments.items() if argument.named
            }
        )
        self._help = generate_help(self._name, self._descr, self._args)

    @classmethod
    def coerce(cls, object, /):
        """
        Accept a CommandSchema as-is, or build one from a mapping such as
        {"name": "git add", "descr": "Add files", "args": {...}}.
        """
        if isinstance(object, cls):
            return object
        if isinstance(object, dict):
            try:
                return cls(**object)
            except TypeError as exception:
                raise TypeError(f"{cls.__typename__} mapping is malformed: {exception}") from None
        raise TypeError(f"{cls.__typename__} must be a CommandSchema or a mapping")

    @property
    def args(self):
        return self._args

    @property
    def options(self):
        return self._options

    @property
    def layout(self):
        return self._layout

    @property
    def help(self):
        return self._help

    def tokenize(self, argv, /):
        """Split argv with this schema's option table."""
        return tokenize(argv, self._options)

    def resolve(self, values, positionals, /, *, literal=Unset):
        """Resolve tokenizer output into a typed record (see resolver.resolve)."""
        return resolve(self._args, values, positionals, literal=literal)

    def validate(self, record, /):
        """Validate an already-typed record against the arguments."""
        return validate(self._args, record)

    def json_schema(self):
        """
        JSON-Schema (draft 2020-12) of the record produced by a successful parse.
        """
        properties = {}
        for key, argument in self._args.items():
            properties[key] = argument.type.schema()
            if argument.descr:
                properties[key] = properties[key] | {"description": argument.descr}
        return {
            "$schema": "https://json-schema.org/draft/2020-12/schema",
            "title": self._name,
            "description": self._descr,
            "type": "object",
            "properties": properties,
            "required": [key for key, argument in self._args.items() if argument.type.required],
            "additionalProperties": False,
        }

    def __repr__(self):
        return "%s(name=%r, descr=%r, args=%r)" % (self.__typename__, self._name, self._descr, dict(self._args))

    def __rich_repr__(self):
        for name in self.__introspectable__:
            yield name, getattr(self, name)


__all__ = (
    "CommandSchema",
)
