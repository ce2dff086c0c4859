from typing import Any, Callable, List, Optional, Tuple
import argparse
import logging
from pathlib import Path

from boolset.booleanset import BooleanSet
from boolset.bounds import UNBOUNDED
from boolset.config import get_config
from boolset.errors import BooleanSetError
from boolset.messages import error, info, render_bits, render_value, success
from boolset.script import parse_script, execute

##################################################################################################
# Commands
##################################################################################################

ArgParser = argparse.ArgumentParser


class Commands:
    def __init__(self, parser: ArgParser) -> None:
        self.root_parser = parser
        self.subparsers = parser.add_subparsers(dest='command')

    class Command:
        def __init__(self, commands: 'Commands', name: str, help: str) -> None:
            self.parser = commands.subparsers.add_parser(name, help=help)

        def __enter__(self) -> ArgParser:
            return self.parser

        def __exit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
            pass

    def __call__(self, name: str, help: str = '') -> 'Commands.Command':
        return Commands.Command(self, name, help)


def build_parser() -> ArgParser:
    parser = argparse.ArgumentParser(prog='bset', description='Explore an infinite boolean sequence')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log every mutation')
    commands = Commands(parser)

    with commands('run', help='Apply operations to a fresh set and print query results') as cmd:
        cmd.add_argument('ops', type=str, nargs='*', help='Operations, e.g. "set-range true 5 10"')
        cmd.add_argument('--file', type=Path, help='Read operations from a file, one per line')
        cmd.add_argument('--show', type=int, nargs=2, metavar=('START', 'END'),
                         help='Print the values in [START, END) at the end')
        cmd.add_argument('--state', action='store_true', help='Print the final internal state')

    with commands('demo', help='Walk through the reference scenarios') as cmd:
        pass

    return parser

##################################################################################################
# run
##################################################################################################

def run_ops(op_texts: List[str], file: Optional[Path], show: Optional[List[int]], state: bool) -> int:
    lines = list(op_texts)
    if file is not None:
        lines = file.read_text(encoding='utf-8').splitlines() + lines

    try:
        ops = parse_script(lines)
    except BooleanSetError as e:
        error(str(e))
        return 2

    bs = BooleanSet()
    for op in ops:
        try:
            result = execute(bs, op)
        except BooleanSetError as e:
            error(f"{op}: {e}")
            return 1
        if op.is_query:
            info(f"{op} = {render_value(result)}")

    if show is not None:
        start, end = show
        try:
            info(render_bits(bs.to_list(start, end), start))
        except BooleanSetError as e:
            error(f"--show {start} {end}: {e}")
            return 1
    if state:
        info(repr(bs.get_state()))

    success(f"Applied {len(ops)} operations: {bs}")
    return 0

##################################################################################################
# demo
##################################################################################################

def _scenarios() -> List[Tuple[str, Callable[[BooleanSet], bool]]]:
    return [
        ("A: a new set is false everywhere",
         lambda bs: not bs.get(0) and not bs.get(1_000_000)),
        ("B: set_range(True, 5, 10)",
         lambda bs: bs.set_range(True, 5, 10) is bs
            and all(bs.get(i) == (5 <= i <= 10) for i in range(20))
            and bs.get_first(True) == 5 and bs.get_last(True) == 10
            and bs.all_set(True, 5, 10) and not bs.any_set(True, 0, 4)),
        ("C: flip_range(7, 8)",
         lambda bs: bs.flip_range(7, 8) is bs
            and not bs.get(7) and not bs.get(8)
            and all(bs.get(i) for i in (5, 6, 9, 10))),
        ("D: flip()",
         lambda bs: bs.flip() is bs
            and bs.get(7) and bs.get(8) and not bs.get(5) and bs.get(1000)
            and bs.get_last(True) is UNBOUNDED),
        ("E: to_list(5, 11) after B",
         lambda bs: BooleanSet().set_range(True, 5, 10).to_list(5, 11) == [True] * 6),
    ]


def demo() -> int:
    bs = BooleanSet()
    failures = 0
    for title, check in _scenarios():
        if check(bs):
            success(f"{title} -> {bs}")
        else:
            error(f"{title} -> {bs}")
            failures += 1
    return 1 if failures else 0

##################################################################################################
# Main
##################################################################################################

def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else config.logging_level
    logging.basicConfig(level=level, format='%(message)s')

    if args.command is None:
        parser.print_help()
        return 0

    match args.command:
        case 'run':
            return run_ops(args.ops, args.file, args.show, args.state)
        case 'demo':
            return demo()
        case _:
            raise ValueError(f"Unknown command: {args.command}")
