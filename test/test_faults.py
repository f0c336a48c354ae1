"""
Faults module behavioral tests (codes, rendering and surfacing).

Scope
- Validate trigger(): raise outside shell mode, print in deferred shell mode,
  exit otherwise; non-fault objects are rejected.
- Validate copy.replace() support keeps message, options and cause.
- Validate the rendered header (program, code, title) and host overrides.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from switchboard import (
    ExecutionLaunchError,
    FaultCode,
    ProviderError,
    ValidationError,
    WidgetException,
    trigger,
)


def recorder():
    return Console(file=io.StringIO(), width=120)


class TestFaultCode(TestCase):
    """Behavioral tests for FaultCode."""

    def testStableValues(self):
        self.assertEqual(FaultCode.INVALID_FILE, 21101)
        self.assertEqual(FaultCode.PROVIDER_FAILED, 21201)
        self.assertEqual(FaultCode.LAUNCH_FAILED, 21202)

    def testNormalize(self):
        self.assertEqual(FaultCode.INVALID_FILE.normalize(), "21101")

    def testNormalizeWithHostCodes(self):
        main = sys.modules["__main__"]
        with mock.patch.object(main, "__codes__", {FaultCode.INVALID_FILE: "E-FILE"}, create=True):
            self.assertEqual(FaultCode.INVALID_FILE.normalize(), "E-FILE")
            self.assertEqual(FaultCode.LAUNCH_FAILED.normalize(), "21202")


class TestWidgetException(TestCase):
    """Behavioral tests for WidgetException and its subclasses."""

    def testHierarchy(self):
        self.assertTrue(issubclass(ExecutionLaunchError, ProviderError))
        self.assertTrue(issubclass(ProviderError, WidgetException))
        self.assertTrue(issubclass(ValidationError, WidgetException))
        self.assertFalse(issubclass(ValidationError, ProviderError))

    def testStrFallsBackToTitle(self):
        self.assertEqual(str(ValidationError()), "invalid file")
        self.assertEqual(str(ValidationError("'x' is not an existing file")), "'x' is not an existing file")

    def testOptionFallsBackToClassDefault(self):
        fault = ProviderError("boom", hint="custom hint")
        self.assertEqual(fault.option("hint"), "custom hint")
        self.assertEqual(fault.option("code"), FaultCode.PROVIDER_FAILED)
        self.assertEqual(ExecutionLaunchError("x").option("code"), FaultCode.LAUNCH_FAILED)

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            ProviderError("boom").options["shell"] = True

    def testReplaceKeepsMessageAndCause(self):
        cause = OSError("no such file")
        fault = ExecutionLaunchError("cannot run 'lpstat'", program="lpstat")
        fault.__cause__ = cause
        replaced = copy.replace(fault, shell=True)
        self.assertIsInstance(replaced, ExecutionLaunchError)
        self.assertEqual(str(replaced), "cannot run 'lpstat'")
        self.assertEqual(replaced.options["program"], "lpstat")
        self.assertTrue(replaced.options["shell"])
        self.assertIs(replaced.__cause__, cause)
        self.assertNotIn("shell", fault.options)

    def testRender(self):
        console = recorder()
        console.print(ValidationError("'x' is not an existing file"))
        text = console.file.getvalue()
        self.assertIn("21101", text)
        self.assertIn("Invalid File", text)
        self.assertIn("'x' is not an existing file", text)
        self.assertIn("existing file", text.splitlines()[-1])

    def testRenderUsesHostProgramName(self):
        main = sys.modules["__main__"]
        console = recorder()
        with mock.patch.object(main, "__prog__", "lp-menu", create=True):
            console.print(ProviderError("boom"))
        self.assertIn("[ lp-menu", console.file.getvalue())

    def testRenderFancy(self):
        console = recorder()
        console.print(copy.replace(ProviderError("boom"), fancy=True))
        self.assertIn("Choices Unavailable", console.file.getvalue())
        self.assertIn("╭", console.file.getvalue())


class TestTrigger(TestCase):
    """Behavioral tests for trigger()."""

    def testRaisesOutsideShell(self):
        with self.assertRaises(ProviderError) as context:
            trigger(ProviderError("boom"), fancy=True)
        self.assertTrue(context.exception.options["fancy"])

    def testDeferredShellPrints(self):
        console = recorder()
        self.assertIsNone(trigger(ValidationError("bad"), shell=True, deferred=True, console=console))
        self.assertIn("bad", console.file.getvalue())

    def testShellExits(self):
        console = recorder()
        with self.assertRaises(SystemExit) as context:
            trigger(ValidationError("bad"), shell=True, console=console)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("21101", console.file.getvalue())

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("not a fault"))


if __name__ == "__main__":
    unittest.main()
