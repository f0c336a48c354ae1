"""
Switchboard prompts: the terminal side of widget reads.

Widgets never talk to the terminal themselves; their read() receives a
prompter. Any object with the two methods below works (hosts with their own
completion UI plug in there); ConsolePrompter is the rich-based default.

Prompter protocol
- choose(prompt, choices, initial=None) -> str | None
  Ask for one value, offering choices as candidates. initial is the current
  value and is only shown as a hint: an empty answer means "no value" and
  returns None, which is how the user clears an option.
- read_file(prompt, initial=None) -> str
  Ask for the path of an existing file and return it with "~" expanded.
  An empty answer accepts initial when one is given. Invalid answers are
  reported and asked again; this method only returns a path that names an
  existing file.

End of input
- With a stream, an exhausted stream raises EOFError (as input() does on a
  terminal) instead of being read as an endless run of empty answers.
"""
import os.path

from rich.console import Console
from rich.prompt import Prompt
from rich.text import Text

from .faults import ValidationError, trigger


class _AnswerPrompt(Prompt):
    """
    Prompt that reports an exhausted answer stream as EOFError.

    Console.input() returns the raw line read from a stream: end of input is ""
    and an answered line still carries its newline, which is dropped so that an
    empty line behaves as it does on a terminal.
    """

    @classmethod
    def get_input(cls, console, prompt, password, stream=None):
        answer = super().get_input(console, prompt, password, stream=stream)
        if stream is not None and not answer:
            raise EOFError("no more answers")
        return answer.rstrip("\r\n")


class ConsolePrompter:
    """
    Prompter reading answers from the terminal through a rich Prompt.

    Parameters
    - console: rich Console used for questions, candidates and faults.
    - strict: when True, choose() only accepts one of the offered candidates
      (or an empty answer); otherwise free text is allowed and candidates are
      only listed.
    - stream: optional text stream to read answers from instead of stdin.
    """

    def __init__(self, console=None, *, strict=False, stream=None):
        self.console = console if console is not None else Console()
        self.strict = bool(strict)
        self.stream = stream

    def _ask(self, prompt, default="", choices=None):
        return _AnswerPrompt.ask(
            prompt,
            console=self.console,
            choices=choices,
            default=default,
            show_default=bool(default),
            stream=self.stream,
        ).strip()

    def choose(self, prompt, choices, initial=None):
        choices = list(choices)
        question = Text(prompt)
        if initial:
            question.append(f" ({initial})", "prompt.default")
        if choices and self.strict:
            answer = self._ask(question, choices=choices)
        else:
            if choices:
                self.console.print(Text.assemble(("candidates: ", "dim"), ", ".join(choices)))
            answer = self._ask(question)
        return answer or None

    def read_file(self, prompt, initial=None):
        while True:
            answer = self._ask(prompt, initial or "")
            path = os.path.expanduser(answer)
            if answer and os.path.isfile(path):
                return path
            trigger(
                ValidationError(f"{answer!r} is not an existing file" if answer else "no file given"),
                shell=True,
                deferred=True,
                console=self.console,
            )


__all__ = (
    "ConsolePrompter",
)
