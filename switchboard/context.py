"""
Switchboard context: what the files-or-buffer widget operates on by default.

What this module provides
- FileList: ordered, immutable sequence of path strings (one variant of the value).
- BufferHandle: opaque reference to the host's active buffer (the other variant).
- Context: a plain snapshot of the host state the resolver looks at.
- resolve(context): pure, total function from a context to a FileList or BufferHandle.

Resolution order
1. multi-selection mode (a file browser with marked entries) → FileList(marked), order kept
2. active buffer backed by a file → FileList((filename,))
3. otherwise → BufferHandle(buffer)

Host contract
- Any object exposing the Context attributes (multi_selection, marked, buffer,
  filename) can be passed to resolve(); Context is only a convenient default.
- In multi-selection mode the host guarantees that marked is not empty.
"""
from rich.text import Text


class FileList(tuple):
    """
    Ordered sequence of path strings.
    """

    __slots__ = ()

    def __new__(cls, paths=(), /):
        if isinstance(paths, str):
            raise TypeError("file list must be built from an iterable of paths, not a string")
        paths = tuple(paths)
        if not all(isinstance(path, str) for path in paths):
            raise TypeError("file list paths must be strings")
        return super().__new__(cls, paths)

    def __repr__(self):
        return f"FileList({tuple(self)!r})"

    def __rich__(self):
        return Text(" ".join(self))


class BufferHandle:
    """
    Opaque reference to a host buffer that is not backed by a file.

    Two handles are equal when they reference the same buffer object.
    """

    __slots__ = ("_buffer",)

    def __init__(self, buffer, /):
        self._buffer = buffer

    @property
    def buffer(self):
        return self._buffer

    def __eq__(self, other):
        if not isinstance(other, BufferHandle):
            return NotImplemented
        return self._buffer is other._buffer

    def __hash__(self):
        return id(self._buffer)

    def __str__(self):
        return str(self._buffer)

    def __repr__(self):
        return f"BufferHandle({self._buffer!r})"


class Context:
    """
    Snapshot of the host state relevant to default resolution.

    Attributes
    - multi_selection: bool: the current mode is a browser with marked entries.
    - marked: tuple[str, ...]: marked paths, in display order.
    - buffer: object: opaque handle for the active buffer.
    - filename: str | None: path backing the active buffer, if any.
    """

    __slots__ = ("multi_selection", "marked", "buffer", "filename")

    def __init__(self, *, multi_selection=False, marked=(), buffer=None, filename=None):
        if isinstance(marked, str):
            raise TypeError("context 'marked' must be an iterable of paths, not a string")
        if filename is not None and not isinstance(filename, str):
            raise TypeError("context 'filename' must be a string")
        self.multi_selection = bool(multi_selection)
        self.marked = tuple(marked)
        self.buffer = buffer
        self.filename = filename or None

    def __repr__(self):
        return "context(%s)" % ", ".join(f"{name}={getattr(self, name)!r}" for name in self.__slots__)


def resolve(context, /):
    """
    Return the default files-or-buffer value for a context.
    """
    if context.multi_selection:
        return FileList(context.marked)
    if context.filename:
        return FileList((context.filename,))
    return BufferHandle(context.buffer)


__all__ = (
    "FileList",
    "BufferHandle",
    "Context",
    "resolve",
)
