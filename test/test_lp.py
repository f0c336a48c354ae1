"""
lp menu behavioral tests.

Scope
- Validate the widget set, its providers and the assembled lp command.
- Page sizes are parsed from patched lpoptions output; no printer is needed.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase, mock

from switchboard import CommandFilter, Context, DynamicOption, ExclusiveSwitch, FileOrBuffer, first_word
from switchboard.lp import command, menu, page_sizes, printers


class TestMenu(TestCase):
    """Behavioral tests for the lp menu."""

    def testWidgets(self):
        widgets = menu(Context(filename="/tmp/x.pdf"))
        self.assertEqual([widget.key for widget in widgets], ["f", "d", "m", "o", "s"])
        self.assertIsInstance(widgets[0], FileOrBuffer)
        self.assertIsInstance(widgets[1], DynamicOption)
        self.assertIsInstance(widgets[3], ExclusiveSwitch)
        self.assertTrue(widgets[1].cached)
        self.assertFalse(widgets[2].cached)

    def testPrintersProvider(self):
        self.assertEqual(printers, CommandFilter("lpstat", ["-a"], first_word))

    def testCommand(self):
        widgets = menu(Context(filename="/tmp/x.pdf"))
        widgets[1].set("printer1")
        widgets[3].cycle()
        self.assertEqual(
            command(widgets),
            ["lp", "-d", "printer1", "-oorientation-requested=4", "--", "/tmp/x.pdf"],
        )

    def testCommandForBuffer(self):
        widgets = menu(Context(buffer="*scratch*"))
        widgets[4].cycle()
        widgets[4].cycle()
        self.assertEqual(command(widgets), ["lp", "-osides=two-sided-long-edge"])

    def testEachMenuIsIndependent(self):
        first, second = menu(), menu()
        first[3].cycle()
        self.assertIsNone(second[3].value)


class TestPageSizes(TestCase):
    """Behavioral tests for page_sizes()."""

    def testParsesPageSizeLine(self):
        with mock.patch("switchboard.lp.filter_command_output", return_value=["Letter *A4 Legal"]) as patched:
            self.assertEqual(page_sizes(), ["Letter", "A4", "Legal"])
        self.assertEqual(patched.call_args.args[:2], ("lpoptions", ["-l"]))

    def testLineMapper(self):
        mapper = None

        def capture(program, arguments, line_mapper):
            nonlocal mapper
            mapper = line_mapper
            return []

        with mock.patch("switchboard.lp.filter_command_output", capture):
            page_sizes()
        self.assertEqual(mapper("PageSize/Media Size: Letter *A4"), "Letter *A4")
        self.assertIsNone(mapper("Duplex/2-Sided Printing: *None DuplexNoTumble"))


if __name__ == "__main__":
    unittest.main()
