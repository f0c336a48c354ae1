"""
Switchboard faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  raised while reading widget values. Codes are grouped by domain.
- WidgetException: base type that carries message + options and knows how to
  render itself (rich) and how to surface itself (raise vs. print).
- ValidationError / ProviderError / ExecutionLaunchError: the concrete faults.
- trigger(): central entry point to surface any fault (respecting shell/deferred/fancy/colorful).

Recovery policy
- ValidationError: the entered file path does not name an existing file. The
  console prompt triggers it in deferred shell mode (printed, not raised) and
  asks again.
- ProviderError: a choice provider failed. It always propagates out of
  DynamicOption.read; no partial candidate list is kept.
- ExecutionLaunchError: the listed program could not be started at all
  (missing executable, permission denied). It is a ProviderError, so callers
  handling provider failures also handle launch failures.
- A non-zero exit status of a listed program is not a fault.

Styling
- Default styles can be overridden with a __styles__ mapping in __main__;
  __prog__ in __main__ names the program in the header.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the widgets (stable identifiers).

    grouping
    - input validation (211xx)
      • INVALID_FILE
    - choice providers (212xx)
      • PROVIDER_FAILED, LAUNCH_FAILED
    """
    # --- input validation (211xx) ---
    INVALID_FILE    = 21101

    # --- choice providers (212xx) ---
    PROVIDER_FAILED = 21201
    LAUNCH_FAILED   = 21202

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class WidgetException(Exception):
    """
    base fault: a message plus free-form rendering options.

    subclasses pin a default code, title and hint; any of them can be
    overridden per instance through options (see trigger()).
    """
    code = FaultCode.PROVIDER_FAILED
    title = "widget error"
    hint = ""

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if self.message is not Unset else self.title

    def option(self, name, /):
        """
        return a runtime option, falling back to the class-level default.
        """
        return self.options.get(name, getattr(type(self), name, None))

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",

            # body
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style] if colorful else "")

        prog = text(getattr(main, "__prog__", "switchboard"), "prog-name")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.option("code").normalize(), "code"),
            " | ",
            text(self.option("title").title(), "error-title"),
            " ]"
        )
        message = text(str(self), "error-message")
        renders = [message]
        if hint := self.option("hint"):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            raise self
        self.options.get("console", console).print(self)
        if self.options.get("deferred"):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        replaced = type(self)(self.message, **{**self.options, **overrides})
        replaced.__cause__ = self.__cause__
        return replaced


class ValidationError(WidgetException):
    code = FaultCode.INVALID_FILE
    title = "invalid file"
    hint = "enter the path of an existing file"


class ProviderError(WidgetException):
    code = FaultCode.PROVIDER_FAILED
    title = "choices unavailable"
    hint = "the candidate list could not be computed; try again or type a value"


class ExecutionLaunchError(ProviderError):
    code = FaultCode.LAUNCH_FAILED
    title = "cannot run program"
    hint = "check that the program is installed and executable"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see WidgetException).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode the fault is printed through rich; otherwise it is raised.

    typical options
    - shell, deferred, fancy, colorful, console, title, code, hint.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "WidgetException",
    "ValidationError",
    "ProviderError",
    "ExecutionLaunchError",
    "trigger",
)
