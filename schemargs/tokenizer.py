"""
Schemargs tokenizer: split argv into named option values and positionals.

The tokenizer is lenient. It only needs to know which options
exist, whether they take a value ("string") or not ("boolean"), and whether
they repeat ("multiple"). Everything it does not recognize falls through to
the positional list; legality and types are decided later by the resolver.

Recognized forms
- --name value, --name=value
- -s value, -s=value, -svalue (value attached to a value-taking alias)
- --name, -s (boolean options only; means True)
- -abc, -abc value (boolean short aliases; the last one may take a value)
- --  (everything after it is a literal positional)

Repeated options accumulate into a list when the option is "multiple";
otherwise the last occurrence wins.
"""
from collections import deque
from typing import NamedTuple

from .faults import *
from .utils import ordinal


class OptionConfig(NamedTuple):
    """
    Low-level description of one named option.

    - kind: "boolean" (presence flag) or "string" (takes a value token).
    - short: single-character alias or None.
    - multiple: repeated occurrences accumulate into a list.
    """
    kind: str
    short: str | None = None
    multiple: bool = False


class Tokens(NamedTuple):
    """
    Tokenizer output.

    - values: option name → str | bool | list[str | bool]
    - positionals: positional tokens in order (unknown switches included)
    - literal: index into positionals from which tokens followed '--'
    """
    values: dict
    positionals: list
    literal: int


def tokenize(argv, options, /):
    """
    Split argv according to an option table (name → OptionConfig).

    Raises
    - OptionValueRequiredError: a value-taking option has nothing to consume.

    Warns
    - EmptyOptionValueWarning: '--name=' with an empty inline value.
    """
    shorts = {config.short: name for name, config in options.items() if config.short}
    switches = {"--" + name for name in options} | {"-" + short for short in shorts}

    values = {}
    positionals = []
    literal = None
    tokens = deque(argv)
    index = 0

    def store(name, value):
        if options[name].multiple:
            values.setdefault(name, []).append(value)
        else:
            values[name] = value

    while tokens:
        token = tokens.popleft()
        index += 1

        if literal is not None:
            positionals.append(token)
            continue

        if token == "--":
            literal = len(positionals)
            continue

        if token.startswith("--") and len(token) > 2:
            input, assigned, value = token[2:].partition("=")
            name = input if input in options else None
            spelled = token.partition("=")[0]
        elif token.startswith("-") and len(token) > 1:
            input, assigned, value = token[1:].partition("=")
            name = shorts.get(input)
            spelled = token.partition("=")[0]
            if name is None and input[:1] in shorts and options[shorts[input[0]]].kind != "boolean":
                # -c10: the value is attached to a value-taking short alias
                name, assigned, value, spelled = shorts[input[0]], "=", token[2:], token[:2]
            elif name is None and len(input) > 1 and all(char in shorts for char in input) and all(
                    options[shorts[char]].kind == "boolean" for char in input[:-1]
            ):
                # -abc: boolean short aliases; the last one may take a value
                for char in input[:-1]:
                    store(shorts[char], True)
                name = shorts[input[-1]]
        else:
            name = None

        if name is None:
            positionals.append(token)
            continue

        if assigned:
            if not value:
                trigger(EmptyOptionValueWarning(
                    "empty inline value for option %r at %s position" % (spelled, ordinal(index)),
                    title="empty inline value",
                    code=FaultCode.EMPTY_INLINE_VALUE,
                    input=spelled,
                    hint="add a value after '=' or pass it after a space (for example: %s <value>)" % spelled,
                    docs=getdoc(FaultCode.EMPTY_INLINE_VALUE),
                ), stacklevel=4)
            store(name, value)
        elif options[name].kind == "boolean":
            store(name, True)
        elif tokens and tokens[0] != "--" and tokens[0].partition("=")[0] not in switches:
            store(name, tokens.popleft())
            index += 1
        else:
            raise OptionValueRequiredError(
                [((name,), "option %r at %s position requires a value" % (spelled, ordinal(index)))],
                title="missing option value",
                code=FaultCode.OPTION_VALUE_REQUIRED,
                input=spelled,
                hint="provide a value (for example: %s=<value>)" % spelled,
                docs=getdoc(FaultCode.OPTION_VALUE_REQUIRED),
            )

    return Tokens(values, positionals, len(positionals) if literal is None else literal)


__all__ = (
    "OptionConfig",
    "Tokens",
    "tokenize",
)
