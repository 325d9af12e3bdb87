r"""
Schemargs argument specifications.

Overview
- Argument: one named option or positional argument of a command schema.
  • type: a value type from schemargs.values (String, Number, ...).
  • position: where the value comes from
      - omitted: a named option (--name / -s)
      - int >= 0: a fixed positional index
      - True: the next free index, assigned in declaration order
      - ... (or the literal "..."): the rest-argument, capturing every
        positional token after the highest index
  • short: single-character alias for named options (-c for --count).
  • descr: help text only; no functional effect.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes
    the fields listed in __introspectable__ as read-only properties.

Validation highlights (sanitized on construction)
- type must be a value type.
- position must be omitted, a non-negative integer, True, or the rest marker.
- short must be a single letter or digit and is only allowed on named options.
- descr strings are trimmed; empty strings are rejected.

Cross-argument rules (unique/contiguous positions, a single rest argument,
reserved help/-h) need the whole schema and are checked by CommandSchema.

Quick example:
    >>> from schemargs import Argument, String, Number
    >>> query = Argument(String(), position=0, descr="search query")
    >>> count = Argument(Number().default(5), short="c")
    >>> query.positional, count.positional
    (True, False)
"""
import builtins
import functools
import operator
import re

from .utils import *
from .values import ValueType


REST = Ellipsis


class ArgumentType(type):
    """
    Metaclass that turns specs into introspectable, read-only descriptors.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and pretty printing.
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.

    Conventions
    - __typename__ is derived from the class name (camel-case split with
      hyphens) and used in messages.
    - __displayable__ (if set) narrows which properties are shown by
      __rich_repr__; otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - argument(type=number(), position=None, short='c', descr=None)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the 'type' and 'descr' fields.

    - type: required, must be a value type.
    - descr: optional. If omitted (Unset), it becomes None. If provided, it
      must be a non-empty string after trimming.

    Raises
    - TypeError: wrong kind of object.
    - ValueError: a string that is empty after trimming.
    """
    if not isinstance(metadata["type"], ValueType):
        raise TypeError(f"{cls.__typename__} 'type' must be a value type (e.g. String(), Number())")

    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


def _sanitize_positional_metadata(cls, metadata, /):
    """
    Internal: validate and normalize 'position' and 'short'.

    position
    - Unset → None (named option).
    - int >= 0 → explicit index. bool is handled before int since True is
      an auto-assigned index and False means nothing sensible.
    - "..." → Ellipsis (rest marker).

    short
    - Unset → None.
    - a single letter or digit, only for named options.
    """
    position = metadata["position"]
    if position == "...":
        position = Ellipsis
    if position is True or position is Ellipsis or position is Unset:
        pass
    elif isinstance(position, bool):
        raise TypeError(f"{cls.__typename__} 'position' cannot be False (omit it for a named option)")
    elif isinstance(position, int):
        if position < 0:
            raise ValueError(f"{cls.__typename__} 'position' must be a non-negative integer")
    else:
        raise TypeError(f"{cls.__typename__} 'position' must be an integer, True, or '...'")
    metadata["position"] = coalesce(position)

    if not isinstance(short := metadata["short"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    elif isinstance(short, str):
        short = short.strip().removeprefix("-")
        if not re.fullmatch(r"[^\W_]", short):
            raise ValueError(f"{cls.__typename__} 'short' must be a single letter or digit")
        if metadata["position"] is not None:
            raise TypeError(f"positional {cls.__typename__} cannot specify a 'short' alias")
    metadata["short"] = coalesce(short)


class Argument(metaclass=ArgumentType):
    """
    One argument of a command schema.

    Properties
    - The names listed in __introspectable__ are exposed as read-only
      attributes mirroring the sanitized metadata.
    - positional / named / rest: convenience views over 'position'.
    """

    __introspectable__ = (
        "type",
        "position",
        "short",
        "descr",
    )

    def __new__(
            cls,
            type,
            position=Unset,
            short=Unset,
            descr=Unset,
    ):
        """
        Construct an Argument spec with the provided metadata.

        Parameters
        - type: ValueType
          Governs coercion, validation and the help tag.
        - position: Unset | int | True | Ellipsis | "..."
          See the module docstring.
        - short: Unset | str
          Single-character alias for named options ("c" or "-c").
        - descr: Unset | str
          Help text.
        """
        metadata = {
            "type": type,
            "position": position,
            "short": short,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_positional_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @classmethod
    def coerce(cls, object, /):
        """
        Accept an Argument as-is, or build one from a mapping such as
        {"type": Number(), "short": "c"}.
        """
        if isinstance(object, cls):
            return object
        if isinstance(object, dict):
            try:
                return cls(**object)
            except TypeError as exception:
                raise TypeError(f"{cls.__typename__} mapping is malformed: {exception}") from None
        raise TypeError(f"{cls.__typename__} must be an Argument or a mapping")

    @property
    def positional(self):
        return self._position is not None

    @property
    def named(self):
        return self._position is None

    @property
    def rest(self):
        return self._position is Ellipsis

    def __eq__(self, other):
        if builtins.type(self) is not builtins.type(other):
            return NotImplemented
        return all(getattr(self, "_" + name) == getattr(other, "_" + name) for name in self.__introspectable__)

    __hash__ = None


__all__ = (
    "Argument",
    "REST",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ArgumentType
