r"""
Switchboard widgets: interactive controls that each contribute one argument
to a command line assembled in a keyboard-driven menu.

Overview
- Widgets
  • ExclusiveSwitch: cycles through a fixed, ordered set of mutually exclusive
    (value, label) choices; renders every label and highlights the active one.
  • DynamicOption: single-value option whose candidates are computed at read time
    by a provider (usually a CommandFilter), optionally cached across reads.
  • FileOrBuffer: the files (or the unsaved buffer) the command operates on;
    starts from a context-dependent default and can be replaced by one chosen file.

- Host seams
  • read(prompter, prompt=Unset) is called when the user presses the widget key.
  • render(colorful=True) is called on every redraw and returns a rich Text.
  • arguments is the argv fragment the widget contributes (empty when unset).
  • assemble(program, widgets) joins a program name and widget fragments.

Metadata (sanitized on construction, read-only afterwards)
- key: non-empty string, the keybinding shown by the host.
- description: non-empty string, the human label.
- argument: the argument format. With a "%s" substitution site the value
  replaces it (e.g. "-oorientation-requested=%s"); without one the value
  is appended (e.g. "-d " + "printer1" → "-d printer1"). At most one "%s".
- choices (ExclusiveSwitch): Choice(value, label) records; duplicates rejected.

Values
- ExclusiveSwitch.value: None (unset) or exactly one of its formatted tokens.
- DynamicOption.selection: raw value or None; DynamicOption.value is its token.
- FileOrBuffer.value: None, a FileList or a BufferHandle.

Styling
- Active parts use the "active" style, everything else "inactive"; separators and
  brackets have their own styles. A __styles__ mapping in __main__ overrides them.

Quick example:
    >>> orientation = ExclusiveSwitch(
    ...     "o", "Orientation", "-oorientation-requested=%s",
    ...     choices=(("4", "90°"), ("5", "-90°"), ("6", "180°")),
    ... )
    >>> orientation.cycle()
    '-oorientation-requested=4'
"""
import itertools
import os.path
import re
import shlex
from collections import defaultdict, namedtuple
from collections.abc import Iterable

from rich.text import Text

from .context import BufferHandle, FileList, resolve
from .faults import ProviderError
from .utils import *

Choice = namedtuple("Choice", ("value", "label"))
Choice.__doc__ = """
A fixed choice of an exclusive switch: the machine value substituted into the
argument format, and the label shown to the user.
"""


def _styles():
    return defaultdict(str, {
        "active": "bold #00E5FF",  # neon cyan for the value that will be used
        "inactive": "#6B6F7A",  # muted gray for everything else
        "separator": "dim #6B6F7A",
        "bracket": "dim #6B6F7A",
    } | getattr(__import__("__main__"), "__styles__", {}))


def _text(fragment, style, colorful, styles):
    return Text(str(fragment), styles[style] if colorful else "")


class WidgetType(type):
    """
    Metaclass that gives widgets stable introspection.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens).
    - Expose every name in __introspectable__ as a read-only property mirroring
      the private "_name" field set by the constructor.
    - Provide __repr__/__rich_repr__ listing __displayable__ (or __introspectable__).
    - Seal concrete widgets (sealed=True) so the set of widget kinds stays closed.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                field: mirror(field) for field in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join("%s=%r" % pair for pair in self.__rich_repr__())
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        if options.get("sealed", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate the metadata shared by every widget (key, description, argument).

    Raises
    - TypeError: a field is not a string.
    - ValueError: a field is empty after trimming, or argument has more than one "%s".

    Notes
    - key and description are trimmed; argument is kept verbatim because trailing
      spaces are significant ("-d " produces "-d printer1").
    """
    for name in ("key", "description"):
        if not isinstance(field := metadata[name], str):
            raise TypeError(f"{cls.__typename__} '{name}' must be a string")
        elif not (field := field.strip()):
            raise ValueError(f"{cls.__typename__} '{name}' cannot be empty")
        metadata[name] = field

    if not isinstance(argument := metadata["argument"], str):
        raise TypeError(f"{cls.__typename__} 'argument' must be a string")
    elif not argument.strip():
        raise ValueError(f"{cls.__typename__} 'argument' cannot be empty")
    elif argument.count("%s") > 1:
        raise ValueError(f"{cls.__typename__} 'argument' must have at most one '%s' substitution")


def _sanitize_choices(cls, metadata, /):
    """
    Internal: normalize exclusive choices into a tuple of Choice records.

    Accepted items are Choice instances or (value, label) pairs of non-empty strings.
    """
    if isinstance(choices := metadata["choices"], str) or not isinstance(choices, Iterable):
        raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of (value, label) pairs")

    sanitized = []
    for choice in choices:
        try:
            value, label = choice
        except (TypeError, ValueError):
            raise TypeError(f"{cls.__typename__} choices must be (value, label) pairs") from None
        if not isinstance(value, str) or not isinstance(label, str):
            raise TypeError(f"{cls.__typename__} choice values and labels must be strings")
        elif not value or not label:
            raise ValueError(f"{cls.__typename__} choice values and labels cannot be empty")
        elif any(value == other.value for other in sanitized):
            raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
        sanitized.append(Choice(value, label))

    if not sanitized:
        raise ValueError(f"{cls.__typename__} must specify at least one choice")
    metadata["choices"] = tuple(sanitized)


class Widget(metaclass=WidgetType):
    """
    Common capability of every widget: a value slot plus render/read hooks.

    Not meant to be used directly; the concrete widgets are ExclusiveSwitch,
    DynamicOption and FileOrBuffer.
    """

    __introspectable__ = (
        "key",
        "description",
        "argument",
    )

    def __init__(self, key, description, argument, /, **metadata):
        metadata = {"key": key, "description": description, "argument": argument} | metadata
        _sanitize_metadata(type(self), metadata)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def _template(self):
        return self._argument if "%s" in self._argument else self._argument + "%s"

    def format(self, value, /):
        """
        Return the command-line token for a raw value.
        """
        return self._template().replace("%s", value)

    def tokenize(self, value, /):
        """
        Return the argv pieces for a raw value.

        The argument format is split on whitespace and the value substituted into
        its word, so "-d " gives ("-d", value) and a value with spaces stays whole.
        """
        return tuple(word.replace("%s", value) for word in self._template().split())

    def _prompt(self, prompt):
        return coalesce(prompt, self._description)

    @property
    def arguments(self):
        raise NotImplementedError

    def render(self, colorful=True):
        raise NotImplementedError

    def read(self, prompter, prompt=Unset):
        raise NotImplementedError


class ExclusiveSwitch(Widget, sealed=True):
    """
    A switch whose value cycles through mutually exclusive choices.

    States are unset followed by the formatted token of every choice in
    declaration order: unset → first → second → … → last → first → …
    A value that matches no token is treated as unset.
    """

    __introspectable__ = (
        "key",
        "description",
        "argument",
        "choices",
    )
    __displayable__ = (
        "key",
        "description",
        "argument",
        "choices",
        "value",
    )

    def __init__(self, key, description, argument, /, choices, *, value=None):
        metadata = {"choices": choices}
        _sanitize_choices(type(self), metadata)
        super().__init__(key, description, argument, **metadata)
        self.value = value

    @property
    def tokens(self):
        """
        The formatted tokens of all choices, in declaration order.
        """
        return tuple(self.format(choice.value) for choice in self._choices)

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, value):
        # Accept a token or a raw choice value; anything else leaves the switch unset.
        tokens = self.tokens
        if value in tokens:
            self._value = value
        elif (index := next((i for i, c in enumerate(self._choices) if c.value == value), None)) is not None:
            self._value = tokens[index]
        else:
            self._value = None

    def cycle(self):
        """
        Move to the next choice (the first one when unset) and return the new value.
        """
        tokens = self.tokens
        try:
            index = tokens.index(self._value)
        except ValueError:
            self._value = tokens[0]
        else:
            self._value = tokens[(index + 1) % len(tokens)]
        return self._value

    @property
    def arguments(self):
        if self._value is None:
            return ()
        return self.tokenize(self._choices[self.tokens.index(self._value)].value)

    def read(self, prompter=None, prompt=Unset):
        return self.cycle()

    def render(self, colorful=True):
        styles = _styles()
        fragments = [_text("[", "bracket", colorful, styles)]
        for index, (choice, token) in enumerate(zip(self._choices, self.tokens)):
            if index:
                fragments.append(_text("|", "separator", colorful, styles))
            fragments.append(_text(choice.label, "active" if token == self._value else "inactive", colorful, styles))
        fragments.append(_text("]", "bracket", colorful, styles))
        return Text.assemble(*fragments)


class DynamicOption(Widget, sealed=True):
    """
    A single-value option whose candidates come from a provider.

    Candidate state
    - choices is None until the provider has been called for the current read.
    - Uncached options reset choices to None after every read, successful or not,
      so the next read calls the provider again.
    - Cached options keep choices until invalidate() or reset().
    - A failing provider leaves choices as None and raises ProviderError.
    """

    __introspectable__ = (
        "key",
        "description",
        "argument",
        "provider",
        "cached",
    )
    __displayable__ = (
        "key",
        "description",
        "argument",
        "cached",
        "choices",
        "value",
    )

    def __init__(self, key, description, argument, /, provider, *, cached=False, selection=None):
        if not callable(provider):
            raise TypeError(f"{type(self).__typename__} 'provider' must be callable")
        super().__init__(key, description, argument, provider=provider, cached=bool(cached))
        self.choices = None
        self.selection = None
        self.set(selection)

    @property
    def value(self):
        return self.format(self.selection) if self.selection is not None else None

    def set(self, selection, /):
        """
        Select a raw value; None or "" clears the option.
        """
        if selection is not None and not isinstance(selection, str):
            raise TypeError(f"{type(self).__typename__} selection must be a string")
        self.selection = selection or None

    def invalidate(self):
        """
        Drop the candidates so the next read calls the provider again.
        """
        self.choices = None

    def reset(self):
        """
        Clear both the selection and the candidates.
        """
        self.selection = None
        self.invalidate()

    @property
    def arguments(self):
        return self.tokenize(self.selection) if self.selection is not None else ()

    def _provide(self):
        try:
            choices = self._provider()
        except ProviderError:
            raise
        except Exception as exc:
            raise ProviderError(f"cannot list choices for {self._description!r}: {exc}", widget=self._key) from exc
        if isinstance(choices, str) or not isinstance(choices, Iterable):
            raise ProviderError(f"choices for {self._description!r} must be a sequence of strings", widget=self._key)
        return tuple(choices)

    def read(self, prompter, prompt=Unset):
        if self.choices is None:
            self.choices = self._provide()
        try:
            selection = prompter.choose(self._prompt(prompt), self.choices, self.selection)
        finally:
            if not self._cached:
                self.choices = None
        self.set(selection)
        return self.selection

    def render(self, colorful=True):
        styles = _styles()
        if self.value is None:
            return _text(self._argument.replace("%s", "").strip(), "inactive", colorful, styles)
        return _text(self.value, "active", colorful, styles)


def _display_path(path, /):
    """
    Internal: show a path relative to the working directory, or with "~" for the
    home directory, trimming surrounding quotes.
    """
    path = os.path.abspath(os.path.expanduser(path.strip("\"'")))
    cwd = os.getcwd()
    home = os.path.expanduser("~")

    if os.path.commonpath((path, cwd)) == cwd:
        return os.path.relpath(path, cwd)
    if os.path.commonpath((path, home)) == home:
        return os.path.join("~", os.path.relpath(path, home))
    return path


class FileOrBuffer(Widget, sealed=True):
    """
    The files, or the file-less buffer, a command operates on.

    - initialize(context) sets the context-dependent default (see context.resolve).
    - read() asks for one existing file and replaces the value with it.
    - arguments is the argument followed by the paths for a FileList, and nothing
      for a BufferHandle (the host feeds the buffer to the command itself).
    """

    __displayable__ = (
        "key",
        "description",
        "argument",
        "value",
    )

    def __init__(self, key, description, argument="--", /, *, context=None):
        super().__init__(key, description, argument)
        self.value = None
        if context is not None:
            self.initialize(context)

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, value):
        if value is not None and not isinstance(value, FileList | BufferHandle):
            raise TypeError(f"{type(self).__typename__} value must be a FileList or a BufferHandle")
        self._value = value

    def initialize(self, context, /):
        """
        Set and return the default value for the given host context.
        """
        self.value = resolve(context)
        return self.value

    def read(self, prompter, prompt=Unset):
        path = prompter.read_file(self._prompt(prompt))
        self.value = FileList((os.path.abspath(os.path.expanduser(path)),))
        return self.value

    @property
    def arguments(self):
        if isinstance(self._value, FileList) and self._value:
            return (*shlex.split(self._argument), *self._value)
        return ()

    def render(self, colorful=True):
        styles = _styles()
        if self._value is None:
            return _text(self._argument.strip(), "inactive", colorful, styles)
        if isinstance(self._value, BufferHandle):
            return _text(str(self._value), "active", colorful, styles)
        return _text(" ".join(map(_display_path, self._value)), "active", colorful, styles)


def assemble(program, widgets, /):
    """
    Return the argv of program followed by every widget's arguments, in order.
    """
    return [program, *itertools.chain.from_iterable(widget.arguments for widget in widgets)]


__all__ = (
    # Records
    "Choice",

    # Widgets
    "Widget",
    "ExclusiveSwitch",
    "DynamicOption",
    "FileOrBuffer",

    # Helpers
    "assemble",
)

# Not part of the public API.
del WidgetType
