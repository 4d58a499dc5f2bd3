from rich.pretty import pprint

from covenant import *

HELP = """\
usage:
  main.py list [-s|--state acc|prop]... [--fancy]
  main.py show ID
  main.py move ID STATE"""

matchers = (
    options("list", (
        MultiOption("state", "-s", "--state", "--filter-by-state", choices=("acc", "prop")),
        Flag("fancy", "--fancy"),
    ), HELP),
    cmd1("show", "id", HELP),
    cmd2("move", "id", "state", HELP),
)


if __name__ == '__main__':
    pprint(invoke(matchers, help=HELP))
