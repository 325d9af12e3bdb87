"""
Schemargs argument resolver: raw tokens in, typed record out.

resolve(arguments, values, positionals) is a pure function. Given
- arguments: mapping of name → Argument (declaration order matters),
- values: named option values from the tokenizer (name → str | bool | list),
- positionals: leftover positional tokens, in order,
it returns a fresh dict of typed values, or raises
- ConfigurationError when the arguments themselves are malformed,
- UnknownOptionError when a token matches no option and no positional slot,
- ValidationError (with every Issue found) when values fail coercion/shape.

Algorithm
1. layout(): validate positions (unique, contiguous from 0, at most one rest
   argument, rest must be an array) and assign True positions.
2. rest extraction: tokens after the highest index, coerced element-wise.
3. indexed extraction: positionals[i], else the default, else absent.
4. named extraction: values[name], else the default, else absent.
5. legality: switch-shaped positionals and positionals without a slot.
6. validation: every field through its value type.
"""
import difflib
import re
from typing import NamedTuple

from .faults import *
from .utils import Unset, ordinal
from .values import Array

# same grammar as option names: -x, --name, --long-name (unicode letters allowed)
_SWITCH = re.compile(r"--?[^\W\d_](-?[^\W_]+)*(=.*)?", re.DOTALL)


class Layout(NamedTuple):
    """
    Resolved positional layout of a schema.

    indexed[i] is the argument name bound to positional index i; rest is the
    name of the rest-argument, or None.
    """
    indexed: tuple
    rest: str | None

    @property
    def width(self):
        return len(self.indexed)


def layout(arguments, /):
    """
    Validate positional declarations and return the Layout.

    Explicit integer positions must be unique and form {0, ..., max}. True
    positions are then appended after the highest explicit index, in
    declaration order. At most one argument may be the rest-argument, and it
    must declare an array type.
    """
    explicit = {}
    for name, argument in arguments.items():
        position = argument.position
        if position is None or position is True or position is Ellipsis:
            continue
        if position in explicit:
            raise ConfigurationError(
                "positional index %d is declared by both %r and %r" % (position, explicit[position], name),
                title="duplicated positional index",
                code=FaultCode.DUPLICATED_POSITION,
                hint="give every positional argument its own index",
                position=position,
            )
        explicit[position] = name

    for index in range(len(explicit)):
        if index not in explicit:
            raise ConfigurationError(
                "positional indexes must be contiguous from 0, but index %d is missing" % index,
                title="non-contiguous positional indexes",
                code=FaultCode.NONCONTIGUOUS_POSITIONS,
                hint="number positional arguments 0, 1, 2, ... without gaps",
                position=index,
            )

    rests = [name for name, argument in arguments.items() if argument.rest]
    if len(rests) > 1:
        raise ConfigurationError(
            "only one rest argument is allowed, got %s" % ", ".join(map(repr, rests)),
            title="multiple rest arguments",
            code=FaultCode.MULTIPLE_REST_ARGUMENTS,
            hint="keep a single argument with position '...'",
        )
    if rests and not isinstance(arguments[rests[0]].type.base, Array):
        raise ConfigurationError(
            "rest argument %r must declare an array type" % rests[0],
            title="non-array rest argument",
            code=FaultCode.NON_ARRAY_REST_ARGUMENT,
            hint="declare it as an array, e.g. String().array()",
        )

    indexed = [explicit[index] for index in range(len(explicit))]
    indexed.extend(name for name, argument in arguments.items() if argument.position is True)
    return Layout(tuple(indexed), rests[0] if rests else None)


def _check_legality(arguments, positionals, literal, plan):
    """
    Reject tokens that landed nowhere.

    - A switch-shaped token before the literal boundary ('--') is an unknown
      option that fell through the tokenizer.
    - Any positional beyond the declared slots, when there is no rest
      argument to absorb it, is unexpected.
    """
    switches = ["--" + name for name, argument in arguments.items() if argument.named]
    switches.append("--help")
    for index, token in enumerate(positionals[:literal]):
        if not _SWITCH.fullmatch(token):
            continue
        input = token.partition("=")[0]
        suggestions = difflib.get_close_matches(input, switches, 3)
        try:
            hint = "did you mean %r? run with --help to see all options" % suggestions[0]
        except IndexError:
            hint = "run with --help to see all options"
        raise UnknownOptionError(
            "unknown option %r" % input,
            title="unknown option",
            code=FaultCode.UNKNOWN_OPTION,
            token=input,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_OPTION),
        )

    if plan.rest is None and len(positionals) > plan.width:
        index = plan.width
        raise UnknownOptionError(
            "unexpected positional argument %r at %s position" % (positionals[index], ordinal(index + 1)),
            title="unexpected positional",
            code=FaultCode.UNEXPECTED_POSITIONAL,
            token=positionals[index],
            suggestions=(),
            hint="remove the extra value or run with --help to see the expected usage",
            docs=getdoc(FaultCode.UNEXPECTED_POSITIONAL),
        )


def resolve(arguments, values, positionals, /, *, literal=Unset):
    """
    Resolve raw tokens against the argument specs.

    Parameters
    - arguments: Mapping[str, Argument]
    - values: Mapping[str, str | bool | list] from the tokenizer.
    - positionals: Sequence[str] of positional tokens.
    - literal: index into positionals from which tokens are literal (they
      followed a '--' terminator); defaults to len(positionals).

    Returns
    - dict[str, Any]: a fresh record; optional absent fields are None.
    """
    plan = layout(arguments)
    positionals = list(positionals)
    literal = len(positionals) if literal is Unset else literal

    _check_legality(arguments, positionals, literal, plan)

    raw = {}

    # rest-argument: everything after the highest index
    if plan.rest is not None:
        argument = arguments[plan.rest]
        tail = positionals[plan.width:]
        if tail:
            raw[plan.rest] = argument.type.coerce(tail)
        elif argument.type.has_default:
            raw[plan.rest] = argument.type.get_default()
        else:
            raw[plan.rest] = []

    # indexed positionals
    for index, name in enumerate(plan.indexed):
        type = arguments[name].type
        raw[name] = type.coerce(positionals[index] if index < len(positionals) else Unset)

    # named options
    for name, argument in arguments.items():
        if argument.named:
            raw[name] = argument.type.coerce(values.get(name, Unset))

    return validate(arguments, raw)


def validate(arguments, raw, /):
    """
    Run a raw record through every argument's value type.

    Missing keys count as absent. Keys that name no argument are dropped.
    Every problem is collected before raising one ValidationError.
    """
    issues = []
    record = {}
    for name, argument in arguments.items():
        value = argument.type.validate(raw.get(name, Unset), (name,), issues)
        if value is not Unset:
            record[name] = value

    if issues:
        raise ValidationError(issues, docs=getdoc(FaultCode.INVALID_VALUES))
    return record


__all__ = (
    "Layout",
    "layout",
    "resolve",
    "validate",
)
