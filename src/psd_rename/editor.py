"""
Editor module.

:py:class:`Editor` owns the single state variable of an editing session and
applies actions to it one at a time, in the order they are dispatched::

    from psd_rename import Editor
    from psd_rename.actions import AppendPrefix, ToggleDescendants, Undo

    editor = Editor.open('face.psd')
    editor.dispatch(ToggleDescendants(editor.state.document.find_path(3)))
    editor.dispatch(AppendPrefix('hat_'))
    editor.dispatch(Undo())
    editor.save('face-renamed.psd')

Every dispatch replaces :py:attr:`Editor.state` with a new snapshot; a state
obtained earlier is never modified and can be read safely at any time.
"""

import logging
import os
from typing import Any, BinaryIO, Optional, Union

from psd_rename import psd_io
from psd_rename.actions import OpenDocument, Redo, Undo
from psd_rename.reducer import State, initial_state, reduce

logger = logging.getLogger(__name__)


class Editor:
    """
    Stateful front end to :py:func:`~psd_rename.reducer.reduce`.

    :param state: initial :py:class:`~psd_rename.reducer.State`. Defaults to
        an empty editor.
    """

    def __init__(self, state: Optional[State] = None):
        self._state = initial_state() if state is None else state

    @classmethod
    def open(
        cls, fp: Union[BinaryIO, str, bytes, os.PathLike], **kwargs: Any
    ) -> "Editor":
        """
        Open a PSD document in a new editor.

        :param fp: filename or file-like object.
        :param kwargs: passed to :py:func:`psd_rename.psd_io.open_psd`.
        :return: :py:class:`Editor`
        """
        editor = cls()
        filename = os.fsdecode(fp) if isinstance(fp, (str, bytes, os.PathLike)) else None
        editor.dispatch(OpenDocument(psd_io.open_psd(fp, **kwargs), filename))
        return editor

    @property
    def state(self) -> State:
        """Current :py:class:`~psd_rename.reducer.State`."""
        return self._state

    def dispatch(self, action: Any) -> State:
        """
        Apply `action` to the current state.

        :return: the new :py:class:`~psd_rename.reducer.State`.
        """
        self._state = reduce(self._state, action)
        return self._state

    def can_undo(self) -> bool:
        return self._state.history.can_undo

    def can_redo(self) -> bool:
        return self._state.history.can_redo

    def undo(self) -> State:
        return self.dispatch(Undo())

    def redo(self) -> State:
        return self.dispatch(Redo())

    def save(self, fp: Union[BinaryIO, str, bytes, os.PathLike], **kwargs: Any) -> int:
        """
        Save the edited document through psd-tools.

        :return: number of renamed layers.
        """
        return psd_io.save_psd(self._state.document, fp, **kwargs)
