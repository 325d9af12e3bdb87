"""
Schemargs utilities (internal helpers shared across the package).

Overview
- UnsetType / Unset
  • Singleton sentinel for “value not provided”, distinct from None.
  • Falsy, printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default while preserving None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated callables.

- mirror("attr")
  • Read-only property exposing a private backing field (self._attr) with
    fresh copies of containers, so public state cannot be mutated in place.

- ordinal(number)
  • Human-friendly ordinal labels ("first", "second", "11th", ...) for
    position-first messages.

- jsonify(value)
  • Compact JSON rendering used for defaults in help output.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> ordinal(3)
    'third'
    >>> jsonify(["a", 1])
    '["a",1]'
"""
import builtins
import functools
import json
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Used where None is a legitimate value (an option default may well be None)
    and the API still needs to tell “not provided” apart.

    Characteristics
    - Boolean-false, distinct from None and 0.
    - repr(Unset) -> "Unset".
    - Sealed and singleton per process.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsy values like None, 0, "" or [] are returned as-is; only Unset is
    replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable (renamed in place)
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Recursively copy containers so callers never hold a reference to
    internal state. Mappings keep their keys; tuples stay tuples.
    """
    if isinstance(object, tuple):
        return tuple(map(_immortalize, object))
    elif isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors the private field "_{name}".

    Example
    - Given self._items, declare items = mirror("items") to expose it safely.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, ...)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f"{number}%s" % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def jsonify(object, /):
    """
    Render a value as compact JSON for help output.

    Non-JSON values (sets, custom objects) fall back to their repr so help
    rendering never fails on an exotic default.
    """
    try:
        return json.dumps(object, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(object)


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid value; materialize with
coalesce(value, default).
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "ordinal",
    "jsonify",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
