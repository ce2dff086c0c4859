from typing import Any

from termcolor import colored

from boolset.bounds import UNBOUNDED

###############################################################################
# Output prefixes
###############################################################################

CHECKMARK    = '[' + colored("✓", "green") + ']'
CROSSMARK    = '[' + colored("✗", "red") + ']'
QUESTIONMARK = '[' + colored("?", "yellow") + ']'
INFOMARK     = '[' + colored("i", "blue") + ']'

# Prefixes are three visible characters wide regardless of colour codes
_PREFIX_WIDTH = 3

def _message(prefix: str, *args):
    lines = '\n'.join(str(arg) for arg in args).split('\n')
    print(f"{prefix} {lines[0]}")
    for line in lines[1:]:
        print(f"{' ' * _PREFIX_WIDTH} {line}")

def error(*msg): _message(CROSSMARK, *msg)

def warning(*msg): _message(QUESTIONMARK, *msg)

def info(*msg): _message(INFOMARK, *msg)

def success(*msg): _message(CHECKMARK, *msg)

###############################################################################
# Value rendering
###############################################################################

def render_value(value: Any) -> str:
    """Renders a query result the way the script language spells it."""
    if value is None:
        return colored("none", "yellow")
    if value is UNBOUNDED:
        return "inf"
    if isinstance(value, bool):
        return colored("true", "green") if value else colored("false", "red")
    if isinstance(value, list):
        return ''.join('1' if v else '0' for v in value)
    return str(value)

def render_bits(values: list, start: int) -> str:
    """Shows a window of values with the index of its first position."""
    return f"{start:>6} | {''.join('1' if v else '0' for v in values)}"
