from rich.console import Console
from rich.pretty import pprint

from usagematch import *

__prog__ = "usagematch-demo"

console = Console()


# naval_fate.py ship <name> move <x> <y> [--speed=<kn>]
usage = Required(
    Command("ship"),
    Argument("<name>"),
    Command("move"),
    OneOrMore(Argument("<xy>")),
    Optional(Option(None, "--speed", 1, "10")),
)


if __name__ == '__main__':
    normalize(usage)
    console.print(usage)

    tokens = [
        Argument(None, "ship"),
        Argument(None, "Guardian"),
        Argument(None, "move"),
        Argument(None, "10"),
        Argument(None, "50"),
        Option(None, "--speed", 1, "20"),
    ]
    outcome = match(usage, tokens)
    pprint(outcome.dictionary() if outcome.matched else outcome)
