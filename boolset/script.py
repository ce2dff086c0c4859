from typing import Any, Dict, List, Tuple
from dataclasses import dataclass

from boolset.booleanset import BooleanSet
from boolset.bounds import UNBOUNDED
from boolset.errors import InvalidArgument

################################################################################
# Operation language
#
#   set V [I]            clear                set-range V [S [E]]
#   flip [I]             flip-range [S [E]]   get I
#   first V [S [E]]      last V [S [E]]       all V [S [E]]
#   any V [S [E]]        list [S [E]]         length
#
# V is true/false (or 1/0), I and S are indices, E is an index or inf (or *).
################################################################################


class ScriptError(InvalidArgument):
    """An operation could not be parsed."""


# name -> (argument kinds, number of required arguments, is a query)
_SIGNATURES: Dict[str, Tuple[Tuple[str, ...], int, bool]] = {
    'set':        (('bool', 'index'), 1, False),
    'clear':      ((), 0, False),
    'set-range':  (('bool', 'index', 'bound'), 1, False),
    'flip':       (('index',), 0, False),
    'flip-range': (('index', 'bound'), 0, False),
    'get':        (('index',), 1, True),
    'first':      (('bool', 'index', 'bound'), 1, True),
    'last':       (('bool', 'index', 'bound'), 1, True),
    'all':        (('bool', 'index', 'bound'), 1, True),
    'any':        (('bool', 'index', 'bound'), 1, True),
    'list':       (('index', 'index'), 0, True),
    'length':     ((), 0, True),
}

_BOOLS = {'true': True, '1': True, 'false': False, '0': False}


@dataclass(frozen=True)
class Op:
    name: str
    args: Tuple[Any, ...] = ()

    @property
    def is_query(self) -> bool:
        return _SIGNATURES[self.name][2]

    def __str__(self) -> str:
        return ' '.join([self.name] + [_format_arg(a) for a in self.args])


def _format_arg(arg: Any) -> str:
    if arg is UNBOUNDED:
        return 'inf'
    if isinstance(arg, bool):
        return 'true' if arg else 'false'
    return str(arg)


def _parse_arg(kind: str, token: str) -> Any:
    match kind:
        case 'bool':
            if token.lower() not in _BOOLS:
                raise ScriptError(f"Expected true or false, got {token!r}")
            return _BOOLS[token.lower()]
        case 'index' | 'bound':
            if kind == 'bound' and token.lower() in ('inf', '*'):
                return UNBOUNDED
            if not (token.isascii() and token.isdigit()):
                raise ScriptError(f"Expected a non-negative integer, got {token!r}")
            return int(token)
        case _:
            raise ValueError(f"Unknown argument kind: {kind}")


def parse_op(text: str) -> Op:
    """Parses one operation, e.g. ``set-range true 5 10``."""
    tokens = text.split()
    if not tokens:
        raise ScriptError("Empty operation")

    name, raw_args = tokens[0].lower(), tokens[1:]
    if name not in _SIGNATURES:
        raise ScriptError(f"Unknown operation {name!r}. Expected one of: {', '.join(_SIGNATURES)}")

    kinds, required, _ = _SIGNATURES[name]
    if not required <= len(raw_args) <= len(kinds):
        expected = str(required) if required == len(kinds) else f"{required} to {len(kinds)}"
        raise ScriptError(f"{name} takes {expected} arguments but got {len(raw_args)}")

    return Op(name, tuple(_parse_arg(kind, token) for kind, token in zip(kinds, raw_args)))


def parse_script(lines: List[str]) -> List[Op]:
    """Parses one operation per line, skipping blank lines and # comments."""
    ops = []
    for number, line in enumerate(lines, start=1):
        line = line.split('#', 1)[0].strip()
        if not line:
            continue
        try:
            ops.append(parse_op(line))
        except ScriptError as e:
            raise ScriptError(f"Line {number}: {e}") from e
    return ops


def execute(bs: BooleanSet, op: Op) -> Any:
    """Applies ``op`` to ``bs``. Returns the result of a query, None otherwise."""
    args = op.args
    match op.name:
        case 'set':
            bs.set(*args)
        case 'clear':
            bs.clear()
        case 'set-range':
            bs.set_range(*args)
        case 'flip':
            bs.flip(*args)
        case 'flip-range':
            bs.flip_range(*args)
        case 'get':
            return bs.get(*args)
        case 'first':
            return bs.get_first(*args)
        case 'last':
            return bs.get_last(*args)
        case 'all':
            return bs.all_set(*args)
        case 'any':
            return bs.any_set(*args)
        case 'list':
            return bs.to_list(*args)
        case 'length':
            return bs.length()
        case _:
            raise ScriptError(f"Unknown operation {op.name!r}")
    return None


def run(ops: List[Op], bs: BooleanSet | None = None) -> List[Tuple[Op, Any]]:
    """Executes ``ops`` in order and collects the result of every query."""
    if bs is None:
        bs = BooleanSet()
    results = []
    for op in ops:
        result = execute(bs, op)
        if op.is_query:
            results.append((op, result))
    return results
