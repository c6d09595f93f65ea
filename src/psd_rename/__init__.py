"""
psd-rename: Bulk renaming and classification of PSD layers.

This package edits the names of the layers of a Photoshop document by a
simple convention: a leading ``!`` marks a required layer, a leading ``*``
marks a radio layer, and no marker means optional. Layers are selected, then
renamed or reclassified in batches, with linear undo and redo.

Basic usage::

    from psd_rename import Editor
    from psd_rename.actions import GainRequired, ToggleSelf

    editor = Editor.open('face.psd')
    editor.dispatch(ToggleSelf((1,)))
    editor.dispatch(GainRequired())
    editor.save('face-renamed.psd')

Architecture:

- :py:mod:`psd_rename.tree`: Immutable layer tree and path addressing
- :py:mod:`psd_rename.selection`: Selection-scoped traversal
- :py:mod:`psd_rename.history`: Undo/redo history
- :py:mod:`psd_rename.reducer`: Pure ``(state, action) -> state`` reducer
- :py:mod:`psd_rename.psd_io`: Import from and export to psd-tools
"""

from psd_rename.constants import LayerKind
from psd_rename.editor import Editor
from psd_rename.reducer import State, initial_state, reduce
from psd_rename.tree import Document, Layer, Renaming
from psd_rename.version import __version__

__all__ = [
    "Document",
    "Editor",
    "Layer",
    "LayerKind",
    "Renaming",
    "State",
    "initial_state",
    "reduce",
    "__version__",
]
