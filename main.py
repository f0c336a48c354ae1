import sys

from rich.console import Console
from rich.pretty import pprint
from rich.text import Text

from switchboard import *
from switchboard.lp import command, menu

__prog__ = "lp-menu"


if __name__ == '__main__':
    widgets = menu(Context(filename=sys.argv[1]) if len(sys.argv) > 1 else Context(buffer="*scratch*"))
    widgets[3].cycle()
    pprint(widgets)
    console = Console()
    for widget in widgets:
        console.print(Text.assemble((widget.key, "bold"), " ", widget.description, "  ", widget.render()))
    pprint(command(widgets))
