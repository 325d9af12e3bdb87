"""
Schemargs value types: the tagged variants behind every argument.

Overview
- Scalars
  • String: raw text, passed through unchanged.
  • Number: numeric text parsed to int (integral literals) or float.
  • Boolean: presence flag; also accepts the literals true/false.
  • Enum(*values): one of a fixed set of strings.
- Containers
  • Array(element): zero or more values of one element type.
- Wrappers
  • Optional(inner): the value may be absent (resolves to None).
  • WithDefault(inner, default): absent values resolve to default; a
    zero-argument callable default is evaluated lazily on every use.

Each variant answers four questions for the rest of the package:
- display: the help tag ("str", "num", "bool", "a|b|c", "T[]").
- kind/multiple: how the tokenizer must treat the option ("boolean" options
  never consume a value token; "multiple" options accumulate).
- coerce(raw): convert tokenizer output into a typed value. Coercion is
  lenient: a token that cannot be converted is returned unchanged so that
  validate() reports it with its field path.
- validate(value, path, issues): check the shape, append Issue-like tuples
  for problems, and return the normalized value.

Quick example
    >>> count = Number().default(5)
    >>> count.display, count.coerce(Unset), count.coerce("10")
    ('num', 5, 10)
    >>> Enum("json", "text").array().display
    'json|text[]'
"""
import difflib
import math
import re
from collections.abc import Sequence

from .utils import Unset, jsonify

# plain ASCII literals only: no digit separators, no non-ASCII digits
_INTEGRAL = re.compile(r"[+-]?\d+", re.ASCII)
_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def _describe(value):
    """Short description of a rejected value for messages."""
    if isinstance(value, bool):
        return "boolean %s" % jsonify(value)
    if isinstance(value, str):
        return "%r" % value
    if isinstance(value, Sequence):
        return "a list"
    return "%r" % (value,)


class ValueType:
    """
    Base class for all value variants.

    Subclasses declare __fields__, the attribute names that define their
    identity; equality, hashing and repr are derived from them.
    """
    __fields__ = ()
    __typename__ = "value"

    def __init_subclass__(cls, **options):
        super().__init_subclass__(**options)
        # "WithDefault" -> "with-default", like every other typename in the package
        cls.__typename__ = "".join(
            "-" + char.lower() if char.isupper() and index else char.lower()
            for index, char in enumerate(cls.__name__)
        )

    # --- fluent builders ---

    def optional(self):
        """Wrap this type so the value may be absent."""
        return Optional(self)

    def default(self, default, /):
        """Wrap this type with a default value (or a zero-argument callable)."""
        return WithDefault(self, default)

    def array(self):
        """An array whose elements are of this type."""
        return Array(self)

    # --- introspection ---

    @property
    def base(self):
        """The innermost type once wrappers are peeled off."""
        return self

    @property
    def display(self):
        raise NotImplementedError

    @property
    def kind(self):
        return "string"

    @property
    def multiple(self):
        return False

    @property
    def required(self):
        return True

    @property
    def has_default(self):
        return False

    def get_default(self):
        """Return the default value, or Unset when there is none."""
        return Unset

    # --- behaviour ---

    def coerce(self, raw, /):
        return raw

    def validate(self, value, path=(), issues=None, /):
        raise NotImplementedError

    def schema(self):
        """JSON-Schema fragment describing accepted values."""
        raise NotImplementedError

    # --- identity ---

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__fields__)

    def __hash__(self):
        return hash((type(self), *map(lambda name: getattr(self, name), self.__fields__)))

    def __repr__(self):
        return "%s(%s)" % (type(self).__typename__, ", ".join(repr(getattr(self, name)) for name in self.__fields__))

    def __rich_repr__(self):
        for name in self.__fields__:
            yield getattr(self, name)


def _missing(path, issues):
    issues.append((path, "missing required value"))
    return Unset


class String(ValueType):
    """Raw text."""

    @property
    def display(self):
        return "str"

    def validate(self, value, path=(), issues=None, /):
        issues = [] if issues is None else issues
        if value is Unset:
            return _missing(path, issues)
        if not isinstance(value, str):
            issues.append((path, "expected a string, received %s" % _describe(value)))
        return value

    def schema(self):
        return {"type": "string"}


class Number(ValueType):
    """
    Numeric text. Integral literals become int, anything else float;
    NaN and infinities are rejected.
    """

    @property
    def display(self):
        return "num"

    def coerce(self, raw, /):
        if not isinstance(raw, str):
            return raw
        text = raw.strip()
        if _INTEGRAL.fullmatch(text):
            return int(text)
        if not _DECIMAL.fullmatch(text):
            return raw
        number = float(text)
        return number if math.isfinite(number) else raw

    def validate(self, value, path=(), issues=None, /):
        issues = [] if issues is None else issues
        if value is Unset:
            return _missing(path, issues)
        if isinstance(value, bool) or not isinstance(value, int | float) or not math.isfinite(value):
            issues.append((path, "expected a number, received %s" % _describe(value)))
        return value

    def schema(self):
        return {"type": "number"}


class Boolean(ValueType):
    """
    Presence flag. The bare switch means True; the inline literals
    true/false (case-insensitive) are accepted as well.
    """
    __literals__ = {"true": True, "false": False}

    @property
    def display(self):
        return "bool"

    @property
    def kind(self):
        return "boolean"

    def coerce(self, raw, /):
        if isinstance(raw, str):
            return self.__literals__.get(raw.strip().lower(), raw)
        return raw

    def validate(self, value, path=(), issues=None, /):
        issues = [] if issues is None else issues
        if value is Unset:
            return _missing(path, issues)
        if not isinstance(value, bool):
            issues.append((path, "expected a boolean, received %s" % _describe(value)))
        return value

    def schema(self):
        return {"type": "boolean"}


class Enum(ValueType):
    """One of a fixed, ordered set of strings."""
    __fields__ = ("values",)

    def __init__(self, *values):
        if not values:
            raise TypeError("enum must specify at least one value")
        sanitized = []
        for value in values:
            if not isinstance(value, str):
                raise TypeError("enum values must be strings")
            elif not value:
                raise ValueError("enum values cannot be empty-strings")
            elif value in sanitized:
                raise ValueError("enum values cannot contain duplicates")
            sanitized.append(value)
        self.values = tuple(sanitized)

    @property
    def display(self):
        return "|".join(self.values)

    def validate(self, value, path=(), issues=None, /):
        issues = [] if issues is None else issues
        if value is Unset:
            return _missing(path, issues)
        if value not in self.values:
            message = "invalid choice %s (choose from %s)" % (
                _describe(value), ", ".join(map(repr, self.values))
            )
            if isinstance(value, str) and (suggestions := difflib.get_close_matches(value, self.values, 1)):
                message += "; did you mean %r?" % suggestions[0]
            issues.append((path, message))
        return value

    def schema(self):
        return {"type": "string", "enum": list(self.values)}


class Array(ValueType):
    """
    Zero or more values of a single element type.

    A bare (non-list) raw value is wrapped into a one-element list.
    """
    __fields__ = ("element",)

    def __init__(self, element):
        if not isinstance(element, ValueType):
            raise TypeError("array element must be a value type")
        if element.base is not element or isinstance(element, Array):
            raise TypeError("array element must be a plain scalar type")
        self.element = element

    @property
    def display(self):
        return self.element.display + "[]"

    @property
    def multiple(self):
        return True

    def coerce(self, raw, /):
        if raw is Unset:
            return raw
        if isinstance(raw, list | tuple):
            return [self.element.coerce(item) for item in raw]
        return [self.element.coerce(raw)]

    def validate(self, value, path=(), issues=None, /):
        issues = [] if issues is None else issues
        if value is Unset:
            return _missing(path, issues)
        if not isinstance(value, list | tuple):
            issues.append((path, "expected a list, received %s" % _describe(value)))
            return value
        return [self.element.validate(item, (*path, index), issues) for index, item in enumerate(value)]

    def schema(self):
        return {"type": "array", "items": self.element.schema()}


class _Wrapper(ValueType):
    """Shared plumbing for Optional and WithDefault."""
    __fields__ = ("inner",)

    def __init__(self, inner):
        if not isinstance(inner, ValueType):
            raise TypeError(f"{type(self).__typename__} must wrap a value type")
        self.inner = inner

    @property
    def base(self):
        return self.inner.base

    @property
    def display(self):
        return self.inner.display

    @property
    def kind(self):
        return self.inner.kind

    @property
    def multiple(self):
        return self.inner.multiple

    @property
    def required(self):
        return False

    @property
    def has_default(self):
        return self.inner.has_default

    def get_default(self):
        return self.inner.get_default()

    def schema(self):
        return self.inner.schema()


class Optional(_Wrapper):
    """The value may be absent; absent resolves to None."""

    def coerce(self, raw, /):
        if raw is Unset:
            return self.get_default()
        return self.inner.coerce(raw)

    def validate(self, value, path=(), issues=None, /):
        issues = [] if issues is None else issues
        if value is Unset or value is None:
            return None
        return self.inner.validate(value, path, issues)


class WithDefault(_Wrapper):
    """
    Absent values resolve to the default.

    The default may be a plain value or a zero-argument callable; callables
    are invoked on every resolution, so mutable defaults are never shared.
    """
    __fields__ = ("inner", "fallback")

    def __init__(self, inner, fallback, /):
        super().__init__(inner)
        self.fallback = fallback

    @property
    def has_default(self):
        return True

    def get_default(self):
        if callable(self.fallback):
            return self.fallback()
        return self.fallback

    def coerce(self, raw, /):
        if raw is Unset:
            return self.get_default()
        return self.inner.coerce(raw)

    def validate(self, value, path=(), issues=None, /):
        issues = [] if issues is None else issues
        if value is Unset:
            value = self.get_default()
        # an explicit None default means "no value"
        if value is None:
            return None
        return self.inner.validate(value, path, issues)

    def schema(self):
        return self.inner.schema() | {"default": self.get_default()}


__all__ = (
    "ValueType",
    "String",
    "Number",
    "Boolean",
    "Enum",
    "Array",
    "Optional",
    "WithDefault",
)
