"""
Switchboard command output filters: external programs as choice providers.

What this module provides
- filter_command_output(program, arguments, mapper): run a program to completion,
  split what it printed into lines and map/filter them into candidate values.
- CommandFilter: a small value type bundling program + arguments + mapper into a
  zero-argument provider (call it, or use invoke()).
- make_command_filter(program, arguments, mapper): build a CommandFilter.
- first_word(line): the usual mapper for listing utilities ("name  status ...").

Execution contract
- The call is synchronous and blocks until the program exits; there is no timeout.
- Standard output is captured into a scoped temporary file that is always closed
  (and therefore discarded) before the function returns or raises.
- Standard input is detached (the program cannot wait on the terminal).
- Only standard output is captured. Standard error is discarded rather than
  merged into the capture, so warnings a program prints there never become
  candidates; hosts that want them must run the program themselves.
- A non-zero exit status is not an error: listing utilities commonly exit non-zero
  on "nothing to list" while still printing a valid (possibly empty) listing.
- Only a failure to start the program raises, as ExecutionLaunchError.

Mapping contract
- The mapper receives one non-empty line (without the newline) and returns the
  candidate string, or None / Unset / "" to omit the line.
- Surviving candidates keep the relative order of their lines.

Quick example
    >>> printers = make_command_filter("lpstat", ["-a"], first_word)
    >>> printers()
    ['printer1', 'printer2']
"""
import subprocess
import tempfile

from .faults import ExecutionLaunchError
from .utils import coalesce, mirror


def first_word(line, /):
    """
    Return the token before the first whitespace of a line, or None for a blank line.
    """
    words = line.split(None, 1)
    return words[0] if words else None


def filter_command_output(program, arguments=(), mapper=None, /):
    """
    Run program with arguments and return its mapped, filtered output lines.

    Parameters
    - program: str
      Executable name (looked up on PATH) or path.
    - arguments: Iterable[str]
      Command-line arguments passed verbatim (no shell involved).
    - mapper: Callable[[str], str | None] | None
      Line transformer; None keeps lines unchanged.

    Returns
    - list[str]: mapped lines in input order, omitted/empty results removed.

    Raises
    - ExecutionLaunchError: the program could not be started.
    """
    argv = [program, *arguments]

    with tempfile.TemporaryFile() as buffer:
        try:
            subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=buffer,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError as exc:
            raise ExecutionLaunchError(
                f"cannot run {program!r}: {exc.strerror or exc}",
                program=program,
            ) from exc
        buffer.seek(0)
        output = buffer.read().decode(errors="replace")

    candidates = []
    for line in output.split("\n"):
        if not line:
            continue
        candidate = mapper(line) if mapper is not None else line
        # Unset, None and "" all mean "omit this line".
        if coalesce(candidate) is None or candidate == "":
            continue
        candidates.append(candidate)
    return candidates


class CommandFilter:
    """
    A zero-argument choice provider backed by an external program.

    Instances are immutable once built and may be shared between widgets;
    every call runs the program again (caching is the widget's business).
    """

    __slots__ = ("_program", "_arguments", "_mapper")

    program = mirror("program")
    arguments = mirror("arguments")
    mapper = mirror("mapper")

    def __init__(self, program, arguments=(), mapper=None, /):
        if not isinstance(program, str):
            raise TypeError("command filter 'program' must be a string")
        elif not (program := program.strip()):
            raise ValueError("command filter 'program' cannot be empty")
        if isinstance(arguments, str):
            raise TypeError("command filter 'arguments' must be an iterable of strings, not a string")
        arguments = tuple(arguments)
        if not all(isinstance(argument, str) for argument in arguments):
            raise TypeError("command filter 'arguments' must be strings")
        if mapper is not None and not callable(mapper):
            raise TypeError("command filter 'mapper' must be callable")

        self._program = program
        self._arguments = arguments
        self._mapper = mapper

    def invoke(self):
        """
        Run the program and return the filtered candidates.
        """
        return filter_command_output(self._program, self._arguments, self._mapper)

    def __call__(self):
        return self.invoke()

    def __eq__(self, other):
        if not isinstance(other, CommandFilter):
            return NotImplemented
        return (self._program, self._arguments, self._mapper) == (other._program, other._arguments, other._mapper)

    def __hash__(self):
        return hash((self._program, self._arguments, self._mapper))

    def __repr__(self):
        return "command-filter(%s)" % " ".join((self._program, *self._arguments))

    def __rich_repr__(self):
        yield "program", self._program
        yield "arguments", self._arguments
        yield "mapper", self._mapper


def make_command_filter(program, arguments=(), mapper=None, /):
    """
    Build a provider that runs filter_command_output(program, arguments, mapper) when called.

    This is the standard way to plug an external data source into DynamicOption:
        DynamicOption("d", "Printer", "-d ", make_command_filter("lpstat", ["-a"], first_word))
    """
    return CommandFilter(program, arguments, mapper)


__all__ = (
    "first_word",
    "filter_command_output",
    "CommandFilter",
    "make_command_filter",
)
