"""
Actions understood by :py:func:`psd_rename.reducer.reduce`.

Each action is a small immutable value. Actions that address a single layer
carry its ``path``; the selection-scoped ones act on every selected layer of
the document.
"""

from typing import Optional

from attrs import field, frozen
from attrs.validators import instance_of

from psd_rename.tree import Document, Path


@frozen
class OpenDocument:
    """Replace the whole tree and reset the history."""

    document: Document = field(validator=instance_of(Document))
    filename: Optional[str] = None


@frozen
class ToggleSelf:
    path: Path = field(converter=tuple)


@frozen
class ToggleChildren:
    path: Path = field(converter=tuple)


@frozen
class ToggleDescendants:
    path: Path = field(converter=tuple)


@frozen
class Rename:
    """Set the name of one layer verbatim. The kind is left as it is."""

    path: Path = field(converter=tuple)
    new_name: str = field(validator=instance_of(str))


@frozen
class GainRequired:
    pass


@frozen
class GainRadio:
    pass


@frozen
class RemoveSpecifier:
    pass


@frozen
class AppendPrefix:
    prefix: str = field(validator=instance_of(str))


@frozen
class RemovePrefix:
    prefix: str = field(validator=instance_of(str))


@frozen
class AppendPostfix:
    postfix: str = field(validator=instance_of(str))


@frozen
class RemovePostfix:
    postfix: str = field(validator=instance_of(str))


@frozen
class DeselectAll:
    pass


@frozen
class Undo:
    pass


@frozen
class Redo:
    pass
