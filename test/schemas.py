# python
"""
Command schema behavioral tests.

Scope
- Validate eager positional checks (duplicate, gaps, rest exclusivity,
  rest type) and reserved names/aliases.
- Validate derived artifacts: option table, layout, help text, JSON-Schema.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from schemargs import (
    Argument,
    Boolean,
    CommandSchema,
    ConfigurationError,
    Enum,
    FaultCode,
    Number,
    OptionConfig,
    String,
)


def _search():
    return CommandSchema("search", "Search with custom parameters", {
        "query": Argument(String(), position=0, descr="search query"),
        "count": Argument(Number().default(5), short="c", descr="number of results"),
        "verbose": Argument(Boolean().default(False), short="v"),
    })


class TestPositionalChecks(TestCase):
    """Configuration errors raised before any argv is examined."""

    def testDuplicatedIndex(self):
        with self.assertRaises(ConfigurationError) as context:
            CommandSchema("cp", "Copy", {
                "source": Argument(String(), position=0),
                "target": Argument(String(), position=0),
            })
        self.assertEqual(context.exception.code, FaultCode.DUPLICATED_POSITION)

    def testGapInIndexes(self):
        with self.assertRaises(ConfigurationError) as context:
            CommandSchema("cp", "Copy", {
                "source": Argument(String(), position=0),
                "target": Argument(String(), position=2),
            })
        self.assertEqual(context.exception.code, FaultCode.NONCONTIGUOUS_POSITIONS)

    def testIndexesMustStartAtZero(self):
        with self.assertRaises(ConfigurationError):
            CommandSchema("cp", "Copy", {"target": Argument(String(), position=1)})

    def testMultipleRestArguments(self):
        with self.assertRaises(ConfigurationError) as context:
            CommandSchema("cat", "Concatenate", {
                "files": Argument(String().array(), position=...),
                "others": Argument(String().array(), position=...),
            })
        self.assertEqual(context.exception.code, FaultCode.MULTIPLE_REST_ARGUMENTS)

    def testRestMustBeArray(self):
        with self.assertRaises(ConfigurationError) as context:
            CommandSchema("cat", "Concatenate", {"files": Argument(String(), position=...)})
        self.assertEqual(context.exception.code, FaultCode.NON_ARRAY_REST_ARGUMENT)

    def testAutoPositionsFollowExplicitOnes(self):
        schema = CommandSchema("mv", "Move", {
            "target": Argument(String(), position=True),
            "source": Argument(String(), position=0),
        })
        self.assertEqual(schema.layout.indexed, ("source", "target"))
        self.assertIsNone(schema.layout.rest)


class TestReservedNames(TestCase):
    """The implicit --help/-h switch cannot be overridden."""

    def testHelpNameReserved(self):
        with self.assertRaises(ConfigurationError) as context:
            CommandSchema("tool", "Tool", {"help": Argument(Boolean().default(False))})
        self.assertEqual(context.exception.code, FaultCode.RESERVED_ARGUMENT)

    def testHelpShortReserved(self):
        with self.assertRaises(ConfigurationError):
            CommandSchema("tool", "Tool", {"host": Argument(String(), short="h")})

    def testDuplicatedShortAlias(self):
        with self.assertRaises(ConfigurationError) as context:
            CommandSchema("tool", "Tool", {
                "verbose": Argument(Boolean().default(False), short="v"),
                "version": Argument(Boolean().default(False), short="v"),
            })
        self.assertEqual(context.exception.code, FaultCode.DUPLICATED_SHORT_ALIAS)

    def testArgumentNamesValidated(self):
        with self.assertRaises(ValueError):
            CommandSchema("tool", "Tool", {"1st": Argument(String())})
        with self.assertRaises(ValueError):
            CommandSchema("tool", "Tool", {"_private": Argument(String())})

    def testNameAndDescrValidated(self):
        with self.assertRaises(ValueError):
            CommandSchema("  ", "Tool")
        with self.assertRaises(TypeError):
            CommandSchema("tool", 42)


class TestDerived(TestCase):
    """Option table, help text and JSON-Schema."""

    def testOptionTable(self):
        options = _search().options
        self.assertEqual(options["help"], OptionConfig("boolean", "h"))
        self.assertEqual(options["count"], OptionConfig("string", "c", False))
        self.assertEqual(options["verbose"], OptionConfig("boolean", "v", False))
        self.assertNotIn("query", options)

    def testArgsAreReadOnly(self):
        schema = _search()
        with self.assertRaises(TypeError):
            schema.args["extra"] = Argument(String())  # type: ignore[index]

    def testHelpText(self):
        self.assertEqual(
            _search().help,
            "search\n"
            "> Search with custom parameters\n"
            "\n"
            "ARGUMENTS:\n"
            "  <query:str> - search query\n"
            "\n"
            "OPTIONS:\n"
            "  --count, -c <num> - number of results (default: 5)\n"
            "  --verbose, -v (default: false)\n"
            "\n"
            "FLAGS:\n"
            "  --help, -h - show help\n"
        )

    def testHelpTextRestArgumentLast(self):
        schema = CommandSchema("git add", "Add files", {
            "files": Argument(String().array(), position=...),
            "command": Argument(String(), position=0),
        })
        self.assertIn(
            "ARGUMENTS:\n"
            "  <command:str>\n"
            "  ...<files:str[]> - rest arguments\n",
            schema.help,
        )

    def testHelpTextWithoutArguments(self):
        self.assertEqual(
            CommandSchema("noop", "Do nothing").help,
            "noop\n> Do nothing\n\nFLAGS:\n  --help, -h - show help\n",
        )

    def testHelpTextEnumTag(self):
        schema = CommandSchema("fmt", "Format", {
            "format": Argument(Enum("json", "text").default("text"), short="f"),
        })
        self.assertIn('  --format, -f <json|text> (default: "text")\n', schema.help)

    def testJsonSchema(self):
        document = _search().json_schema()
        self.assertEqual(document["type"], "object")
        self.assertEqual(document["required"], ["query"])
        self.assertFalse(document["additionalProperties"])
        self.assertEqual(document["properties"]["query"], {"type": "string", "description": "search query"})
        self.assertEqual(document["properties"]["count"]["default"], 5)

    def testCoerceFromMapping(self):
        schema = CommandSchema.coerce({
            "name": "echo",
            "descr": "Print text",
            "args": {"text": {"type": String(), "position": 0}},
        })
        self.assertEqual(schema.layout.indexed, ("text",))
        self.assertIs(CommandSchema.coerce(schema), schema)


if __name__ == "__main__":
    unittest.main()
