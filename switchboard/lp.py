"""
A ready-made print menu for the CUPS lp command.

Widgets (in display order)
- f  Files        the marked files, the visited file, or the buffer itself
- d  Printer      -d <printer>, candidates from `lpstat -a`, cached
- m  Page size    -omedia=<size>, candidates from `lpoptions -l`, asked fresh
- o  Orientation  -oorientation-requested=4|5|6
- s  Sides        -osides=one-sided|two-sided-long-edge|two-sided-short-edge

command(widgets) returns the lp argv with the files last, after "--". When
the files widget holds a BufferHandle no path is passed and the host is
expected to feed the buffer contents to lp on standard input.
"""
from .filters import filter_command_output, first_word, make_command_filter
from .widgets import DynamicOption, ExclusiveSwitch, FileOrBuffer, assemble

ORIENTATIONS = (
    ("4", "90°"),
    ("5", "-90°"),
    ("6", "180°"),
)

SIDES = (
    ("one-sided", "one"),
    ("two-sided-long-edge", "long"),
    ("two-sided-short-edge", "short"),
)

printers = make_command_filter("lpstat", ["-a"], first_word)


def _page_size_line(line, /):
    # "PageSize/Media Size: Letter *A4 Legal" → "Letter *A4 Legal"
    option, _, values = line.partition(":")
    if option.split("/", 1)[0].strip() == "PageSize":
        return values.strip()
    return None


def page_sizes():
    """
    List the page sizes of the default printer, the current one included.
    """
    return [
        size.lstrip("*")
        for line in filter_command_output("lpoptions", ["-l"], _page_size_line)
        for size in line.split()
    ]


def menu(context=None, /):
    return (
        FileOrBuffer("f", "Files", "--", context=context),
        DynamicOption("d", "Printer", "-d ", printers, cached=True),
        DynamicOption("m", "Page size", "-omedia=", page_sizes),
        ExclusiveSwitch("o", "Orientation", "-oorientation-requested=%s", ORIENTATIONS),
        ExclusiveSwitch("s", "Sides", "-osides=%s", SIDES),
    )


def command(widgets, /):
    widgets = tuple(widgets)
    return assemble("lp", (
        *(widget for widget in widgets if not isinstance(widget, FileOrBuffer)),
        *(widget for widget in widgets if isinstance(widget, FileOrBuffer)),
    ))


__all__ = (
    "ORIENTATIONS",
    "SIDES",
    "printers",
    "page_sizes",
    "menu",
    "command",
)
