"""
Coercion module behavioral tests (pure token → value rules).

Scope
- Boolean keyword sets (case-insensitive, no partial matches).
- Integer shape detection, hex/negative-hex, 64-bit accumulator and saturation.
- Floating point (decimal, hex, specials, saturation, single precision).
- Character and string rules.

Conventions
- Test method names follow CamelCase per project convention.
"""
import math
import sys
import unittest
from unittest import TestCase

from argbind.coercion import (
    CoercionError,
    NumberShape,
    numbershape,
    parsebool,
    parseint,
    parsefloat,
    parsechar,
    parsestring,
    roundsingle,
    FLOAT32_MAX,
    INT64_MAX,
    INT64_MIN,
    UINT64_MAX,
)


class TestBool(TestCase):
    """Boolean keyword rules."""

    def testTrueKeywords(self):
        for token in ("true", "t", "yes", "y", "1"):
            self.assertIs(parsebool(token), True, token)

    def testFalseKeywords(self):
        for token in ("false", "f", "no", "n", "0"):
            self.assertIs(parsebool(token), False, token)

    def testKeywordsAreCaseInsensitive(self):
        self.assertIs(parsebool("TRUE"), True)
        self.assertIs(parsebool("Yes"), True)
        self.assertIs(parsebool("N"), False)
        self.assertIs(parsebool("FaLsE"), False)

    def testAnythingElseFails(self):
        for token in ("", "maybe", "truee", " true", "on", "2", "ye"):
            with self.assertRaises(CoercionError, msg=token):
                parsebool(token)


class TestIntegerShape(TestCase):
    """Numeric shape detection."""

    def testGeneral(self):
        self.assertIs(numbershape("10"), NumberShape.GENERAL)
        self.assertIs(numbershape("-10"), NumberShape.GENERAL)
        self.assertIs(numbershape("abc"), NumberShape.GENERAL)

    def testHex(self):
        self.assertIs(numbershape("0x1F"), NumberShape.HEX)
        self.assertIs(numbershape("0X1F"), NumberShape.HEX)

    def testNegativeHex(self):
        self.assertIs(numbershape("-0x1F"), NumberShape.NEGATIVE_HEX)
        self.assertIs(numbershape("-0X1F"), NumberShape.NEGATIVE_HEX)


class TestInteger(TestCase):
    """Integer parsing and saturation."""

    def testDecimal(self):
        self.assertEqual(parseint("-10", -128, 127, signed=True), -10)
        self.assertEqual(parseint("4000000000", 0, 2 ** 32 - 1, signed=False), 4_000_000_000)

    def testHex(self):
        self.assertEqual(parseint("0x10", -128, 127, signed=True), 16)
        self.assertEqual(parseint("0x0F", 0, 2 ** 32 - 1, signed=False), 15)
        self.assertEqual(parseint("0xff", 0, 255, signed=False), 255)

    def testNegativeHex(self):
        self.assertEqual(parseint("-0xA0", -2 ** 31, 2 ** 31 - 1, signed=True), -160)

    def testSaturatesToDestinationBounds(self):
        self.assertEqual(parseint("200", -128, 127, signed=True), 127)
        self.assertEqual(parseint("-200", -128, 127, signed=True), -128)
        self.assertEqual(parseint("256", 0, 255, signed=False), 255)
        self.assertEqual(parseint("0x8000", -32768, 32767, signed=True), 32767)

    def testSaturatesPastAccumulator(self):
        self.assertEqual(parseint("99999999999999999999999", INT64_MIN, INT64_MAX, signed=True), INT64_MAX)
        self.assertEqual(parseint("-99999999999999999999999", INT64_MIN, INT64_MAX, signed=True), INT64_MIN)
        self.assertEqual(parseint("0xFFFFFFFFFFFFFFFFFFFF", 0, UINT64_MAX, signed=False), UINT64_MAX)

    def testUnsignedRejectsNegatives(self):
        with self.assertRaises(CoercionError):
            parseint("-0x1", 0, 255, signed=False)
        with self.assertRaises(CoercionError):
            parseint("-1", 0, 255, signed=False)

    def testHugeTokensSaturate(self):
        self.assertEqual(parseint("9" * 5000, INT64_MIN, INT64_MAX, signed=True), INT64_MAX)
        self.assertEqual(parseint("-" + "9" * 5000, INT64_MIN, INT64_MAX, signed=True), INT64_MIN)
        self.assertEqual(parseint("0x" + "F" * 5000, 0, UINT64_MAX, signed=False), UINT64_MAX)
        self.assertEqual(parseint("-0x" + "1" * 17, -128, 127, signed=True), -128)

    def testLeadingZerosDoNotSaturate(self):
        self.assertEqual(parseint("0" * 5000 + "5", -128, 127, signed=True), 5)
        self.assertEqual(parseint("0x" + "0" * 40 + "1F", 0, 255, signed=False), 31)
        self.assertEqual(parseint("000", 0, 255, signed=False), 0)

    def testTrailingTextIsIgnored(self):
        self.assertEqual(parseint("12abc", INT64_MIN, INT64_MAX, signed=True), 12)
        self.assertEqual(parseint("1_000", INT64_MIN, INT64_MAX, signed=True), 1)
        self.assertEqual(parseint("1.5", INT64_MIN, INT64_MAX, signed=True), 1)
        self.assertEqual(parseint("-7 cakes", INT64_MIN, INT64_MAX, signed=True), -7)
        self.assertEqual(parseint("0x1G", 0, 255, signed=False), 1)

    def testNonNumbersFail(self):
        for token in ("", "a", "-", "0x", "-0x", "+5", " 5", "0xG", "-a", "x1"):
            with self.assertRaises(CoercionError, msg=token):
                parseint(token, INT64_MIN, INT64_MAX, signed=True)


class TestFloat(TestCase):
    """Floating point parsing."""

    def testDecimal(self):
        self.assertEqual(parsefloat("14.897"), 14.897)
        self.assertEqual(parsefloat("-0.17"), -0.17)
        self.assertEqual(parsefloat("8"), 8.0)
        self.assertEqual(parsefloat("1e3"), 1000.0)
        self.assertEqual(parsefloat(".5"), 0.5)

    def testHex(self):
        self.assertEqual(parsefloat("0xFF"), 255.0)
        self.assertEqual(parsefloat("-0x10"), -16.0)
        self.assertEqual(parsefloat("0x1.8p1"), 3.0)

    def testSpecials(self):
        self.assertEqual(parsefloat("inf"), math.inf)
        self.assertEqual(parsefloat("-Infinity"), -math.inf)
        self.assertTrue(math.isnan(parsefloat("nan")))

    def testOverflowSaturates(self):
        self.assertEqual(parsefloat("1e999"), sys.float_info.max)
        self.assertEqual(parsefloat("-1e999"), -sys.float_info.max)
        self.assertEqual(parsefloat("1e39", single=True), FLOAT32_MAX)
        self.assertEqual(parsefloat("-1e39", single=True), -FLOAT32_MAX)

    def testSinglePrecisionRounds(self):
        self.assertEqual(parsefloat("3.14", single=True), roundsingle(3.14))
        self.assertNotEqual(parsefloat("3.14", single=True), 3.14)

    def testSingleRoundingRejectsFiniteOverflow(self):
        with self.assertRaises(OverflowError):
            roundsingle(1e39)
        with self.assertRaises(OverflowError):
            roundsingle(-1e39)
        self.assertEqual(roundsingle(math.inf), math.inf)
        self.assertEqual(roundsingle(FLOAT32_MAX), FLOAT32_MAX)

    def testTrailingTextIsIgnored(self):
        self.assertEqual(parsefloat("1.5x"), 1.5)
        self.assertEqual(parsefloat("1_0"), 1.0)
        self.assertEqual(parsefloat("2e"), 2.0)
        self.assertEqual(parsefloat("0x1p4z"), 16.0)
        self.assertEqual(parsefloat("infinite"), math.inf)

    def testNonNumbersFail(self):
        for token in ("", "abc", " 1.5", "0x", "+1", "e5", ".", "-"):
            with self.assertRaises(CoercionError, msg=token):
                parsefloat(token)


class TestCharAndString(TestCase):
    """Character and string rules."""

    def testCharAcceptsExactlyOne(self):
        self.assertEqual(parsechar("G"), "G")
        self.assertEqual(parsechar("&"), "&")

    def testCharRejectsOtherLengths(self):
        for token in ("", "ab"):
            with self.assertRaises(CoercionError):
                parsechar(token)

    def testStringIsVerbatim(self):
        self.assertEqual(parsestring(""), "")
        self.assertEqual(parsestring("  spaced = out "), "  spaced = out ")


if __name__ == "__main__":
    unittest.main()
