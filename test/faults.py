"""
Faults module behavioral tests (codes, handlers, rendering).

Scope
- FaultCode grouping and host normalization through __main__.__codes__.
- collect()/report() handler shapes.
- replace() and getdoc() helpers.
- rich rendering of headers, hints and fancy panels.

Conventions
- Test method names follow CamelCase per project convention.
"""
import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console
from rich.panel import Panel

from argbind import faults
from argbind.faults import *


def render(renderable):
    console = Console(file=io.StringIO(), width=200, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


class TestFaultCode(TestCase):
    """Stable identifiers and host normalization."""

    def testStructuralGrouping(self):
        self.assertTrue(FaultCode.MALFORMED_TOKEN.structural)
        self.assertTrue(FaultCode.MISSING_PARAMETER.structural)
        self.assertFalse(FaultCode.UNCASTABLE_PARAMETER.structural)
        self.assertFalse(FaultCode.SHADOWED_KEY.structural)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.UNKNOWN_FLAG.normalize(), "11113")

    def testNormalizeHonorsHostCodes(self):
        with mock.patch.object(sys.modules["__main__"], "__codes__", {FaultCode.UNKNOWN_FLAG: "E-FLAG"}, create=True):
            self.assertEqual(FaultCode.UNKNOWN_FLAG.normalize(), "E-FLAG")
            self.assertEqual(FaultCode.MALFORMED_TOKEN.normalize(), "11111")


class TestParseError(TestCase):
    """Fault values."""

    def setUp(self):
        self.fault = MalformedTokenError(
            "unrecognized command format 'x' at first position",
            code=FaultCode.MALFORMED_TOKEN,
            title="unrecognized command format",
            hint="options look like -k",
            token="x",
            index=1,
        )

    def testMessageAndOptions(self):
        self.assertEqual(str(self.fault), self.fault.message)
        self.assertIs(self.fault.code, FaultCode.MALFORMED_TOKEN)
        self.assertFalse(self.fault.fatal)
        with self.assertRaises(TypeError):
            self.fault.options["index"] = 2

    def testCodeDefaultsToUnset(self):
        self.assertFalse(ParseError("plain").code)

    def testReplaceKeepsTypeAndMessage(self):
        other = replace(self.fault, index=5, prog="cakes")
        self.assertIsInstance(other, MalformedTokenError)
        self.assertEqual(other.message, self.fault.message)
        self.assertEqual(other.options["index"], 5)
        self.assertEqual(other.options["prog"], "cakes")
        self.assertEqual(self.fault.options["index"], 1)

    def testReplaceRequiresReplaceProtocol(self):
        with self.assertRaises(TypeError):
            replace(object(), index=1)

    def testRenderHeaderAndHint(self):
        output = render(replace(self.fault, prog="cakes", colorful=False))
        self.assertIn("[ cakes — 11111 | Unrecognized Command Format ]", output)
        self.assertIn(self.fault.message, output)
        self.assertIn("→ options look like -k", output)

    def testRenderFallsBackToPackageName(self):
        self.assertIn("[ argbind — 11111 |", render(self.fault))

    def testRenderHonorsHostProgramName(self):
        with mock.patch.object(sys.modules["__main__"], "__prog__", "host", create=True):
            self.assertIn("[ host — ", render(replace(self.fault, prog="cakes")))

    def testFancyRendersPanel(self):
        self.assertIsInstance(replace(self.fault, fancy=True).__rich__(), Panel)
        self.assertNotIsInstance(self.fault.__rich__(), Panel)


class TestHandlers(TestCase):
    """Default and collecting handlers."""

    def testCollectAppendsAndContinues(self):
        handler = collect()
        fault = UnknownFlagError("unrecognized flag")
        self.assertIs(handler(fault), ErrorResult.CONTINUE)
        self.assertEqual(handler.faults, [fault])

    def testCollectIntoGivenList(self):
        gathered = []
        handler = collect(gathered, result=ErrorResult.TERMINATE)
        self.assertIs(handler(ParseError("x")), ErrorResult.TERMINATE)
        self.assertIs(handler.faults, gathered)
        self.assertEqual(len(gathered), 1)

    def testReportPrintsAndContinues(self):
        console = Console(file=io.StringIO(), width=200, color_system=None)
        with mock.patch.object(faults, "console", console):
            result = report(MissingParameterError("unexpected termination", title="missing parameter"))
        self.assertIsNone(result)
        self.assertIn("unexpected termination", console.file.getvalue())
        self.assertIn("Missing Parameter", console.file.getvalue())


class TestGetDoc(TestCase):
    """Host documentation lookup."""

    def testMissingDocIsNone(self):
        self.assertIsNone(getdoc(FaultCode.UNKNOWN_COMMAND))

    def testHostDocs(self):
        docs = {FaultCode.UNKNOWN_COMMAND: "see --help"}
        with mock.patch.object(sys.modules["__main__"], "__docs__", docs, create=True):
            self.assertEqual(getdoc(FaultCode.UNKNOWN_COMMAND), "see --help")

    def testRejectsNonCodes(self):
        with self.assertRaises(TypeError):
            getdoc(11101)


if __name__ == "__main__":
    unittest.main()
