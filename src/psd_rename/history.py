"""
Linear undo/redo history.

The history keeps two stacks of batches. ``past`` holds the batches of the
recorded actions, oldest first; ``future`` holds the undone batches, the most
recently undone last. Recording a new batch discards ``future``, so there is
never more than one line of history.

Undo writes each renaming's original name and kind back to the layer its
path addresses; redo writes the new ones. Renamings whose path does not
resolve are skipped.
"""

import logging
from typing import Iterable

from attrs import evolve, field, frozen

from psd_rename.tree import Batch, Children, Layer, Renaming, Transform, update_at

logger = logging.getLogger(__name__)


def _to_batches(value: Iterable[Iterable[Renaming]]) -> tuple[Batch, ...]:
    return tuple(tuple(batch) for batch in value)


def _set_name(renaming: Renaming, undo: bool) -> Transform:
    if undo:
        name, kind = renaming.original_name, renaming.original_kind
    else:
        name, kind = renaming.new_name, renaming.new_kind

    def transform(layer: Layer) -> Layer:
        return evolve(layer, name=name, kind=kind)

    return transform


def apply_undo(children: Children, batch: Batch) -> Children:
    """Restore the original names and kinds recorded in `batch`."""
    for renaming in reversed(batch):
        children = update_at(children, renaming.path, _set_name(renaming, undo=True))
    return children


def apply_redo(children: Children, batch: Batch) -> Children:
    """Reapply the new names and kinds recorded in `batch`."""
    for renaming in batch:
        children = update_at(children, renaming.path, _set_name(renaming, undo=False))
    return children


@frozen
class History:
    """
    Immutable pair of past and future batch stacks.

    Example::

        history = History().record(batch)
        children, history = history.undo(children)
        children, history = history.redo(children)
    """

    past: tuple[Batch, ...] = field(default=(), converter=_to_batches)
    future: tuple[Batch, ...] = field(default=(), converter=_to_batches)

    @property
    def can_undo(self) -> bool:
        return len(self.past) > 0

    @property
    def can_redo(self) -> bool:
        return len(self.future) > 0

    def record(self, batch: Batch) -> "History":
        """
        Push `batch` onto the past stack and clear the future stack.

        :return: :py:class:`History`
        """
        if self.future:
            logger.debug("Discarding %d undone batches", len(self.future))
        return History(past=self.past + (tuple(batch),), future=())

    def undo(self, children: Children) -> tuple[Children, "History"]:
        """
        Revert the last recorded batch on `children`.

        :return: tuple of the new children and the new history. Both are
            returned unchanged when there is nothing to undo.
        """
        if not self.past:
            logger.debug("Nothing to undo")
            return children, self
        batch = self.past[-1]
        return apply_undo(children, batch), History(
            past=self.past[:-1], future=self.future + (batch,)
        )

    def redo(self, children: Children) -> tuple[Children, "History"]:
        """
        Reapply the last undone batch on `children`.

        :return: tuple of the new children and the new history. Both are
            returned unchanged when there is nothing to redo.
        """
        if not self.future:
            logger.debug("Nothing to redo")
            return children, self
        batch = self.future[-1]
        return apply_redo(children, batch), History(
            past=self.past + (batch,), future=self.future[:-1]
        )
