"""
Schemargs runner: parse, then hand the outcome to the host program.

run() is the shell-facing counterpart of safe_parse():
- Help: the help text is printed to stdout and run() returns.
- Failure: on_error(cause) is called when given; otherwise the help text and
  the rendered fault are printed to stderr and the process exits with
  status 1.
- Success: on_success(data) is called (dispatchers call
  on_success(data, command)); without a callback the record is
  pretty-printed.

Example
    >>> search = command("search", "Search with custom parameters", {
    ...     "query": Argument(String(), position=0),
    ... })
    >>> run(search, "hello", lambda data: print(data["query"]))
    hello
"""
from rich.console import Console
from rich.pretty import pprint

from .commands import Dispatcher, Routed
from .faults import *
from .help import print_help
from .parsers import Parser, Success, Help, Failure
from .utils import Unset


def _fault(cause, /):
    # foreign exceptions (a failing default thunk, a bad argv type) are
    # rendered like any other fault, titled after their type
    if isinstance(cause, ParserFault):
        return cause
    return ParserFault(str(cause), title=type(cause).__name__)


def run(target, argv=Unset, /, on_success=Unset, on_error=Unset, *, colorful=True, fancy=False):
    """
    Parse argv with a Parser or Dispatcher and dispatch the outcome.

    Parameters
    - target: Parser | Dispatcher | CommandSchema | dict
    - argv: Unset (sys.argv[1:]) | str (split with shlex) | Iterable[str]
    - on_success: Callable[[dict], Any] for parsers,
      Callable[[dict, str], Any] for dispatchers.
    - on_error: Callable[[Exception], Any]; suppresses the default
      print-and-exit behaviour.
    - colorful, fancy: rendering options for help and faults.

    Returns
    - whatever on_success / on_error returned, or None.
    """
    if not isinstance(target, Parser | Dispatcher):
        target = Parser(target)

    result = target.safe_parse(argv)
    command = None
    if isinstance(result, Routed):
        command, result = result.command, result.result

    match result:
        case Help(text):
            print_help(text, colorful=colorful, fancy=fancy)
            return None
        case Failure(cause, help):
            if on_error is not Unset:
                return on_error(cause)
            print_help(help, colorful=colorful, fancy=fancy, console=Console(stderr=True))
            trigger(_fault(cause), shell=True, status=1, colorful=colorful, fancy=fancy)
        case Success(data):
            if on_success is Unset:
                pprint(data, expand_all=False)
                return None
            if command is not None:
                return on_success(data, command)
            return on_success(data)


__all__ = (
    "run",
)
