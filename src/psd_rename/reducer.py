"""
Reducer module.

:py:func:`reduce` maps an editor :py:class:`State` and one action from
:py:mod:`psd_rename.actions` to the next state. It is a pure function: the
input state is never modified, and snapshots held by readers stay valid.

Handlers are registered per action type::

    state = initial_state()
    state = reduce(state, OpenDocument(document, "face.psd"))
    state = reduce(state, ToggleSelf((1,)))
    state = reduce(state, GainRequired())
    state = reduce(state, Undo())

Actions that rewrite names or kinds record exactly one batch, possibly
empty, and discard the redo stack. Selection changes are not recorded.
"""

import logging
from typing import Any, Callable, Optional

from attrs import evolve, field, frozen

from psd_rename import actions, naming
from psd_rename.constants import LayerKind
from psd_rename.history import History
from psd_rename.registry import new_registry
from psd_rename.selection import (
    apply_to_selected,
    deselect_all,
    toggle_children_selection,
    toggle_descendant_selection,
    toggle_selection,
)
from psd_rename.tree import Batch, Children, Document, Layer

logger = logging.getLogger(__name__)

HANDLERS, register = new_registry(attribute="action_type")


@frozen
class State:
    """
    Editor state threaded through :py:func:`reduce`.

    .. py:attribute:: document

        Current :py:class:`~psd_rename.tree.Document`.

    .. py:attribute:: filename

        Name of the opened file, if known.

    .. py:attribute:: history

        :py:class:`~psd_rename.history.History` of recorded batches.
    """

    document: Document = field(factory=Document)
    filename: Optional[str] = None
    history: History = field(factory=History)

    @property
    def past_history(self) -> tuple[Batch, ...]:
        return self.history.past

    @property
    def future_history(self) -> tuple[Batch, ...]:
        return self.history.future


def initial_state() -> State:
    """Returns the state of an editor with no document open."""
    return State()


def reduce(state: State, action: Any) -> State:
    """
    Apply one action to `state`.

    :param state: current :py:class:`State`.
    :param action: one of the actions in :py:mod:`psd_rename.actions`.
    :return: the next :py:class:`State`.
    :raise TypeError: if `action` is not a known action.
    """
    handler = HANDLERS.get(type(action))
    if handler is None:
        raise TypeError("Unknown action: %s" % type(action).__name__)
    logger.debug("reduce %r", action)
    return handler(state, action)


def _with_children(state: State, children: Children) -> State:
    if children is state.document.children:
        return state
    return evolve(state, document=evolve(state.document, children=children))


def _commit(state: State, children: Children, batch: Batch) -> State:
    state = _with_children(state, children)
    return evolve(state, history=state.history.record(batch))


def _apply_to_selected(state: State, transform: Callable[[Layer], Layer]) -> State:
    children, batch = apply_to_selected(state.document.children, transform)
    logger.debug("%d selected layers updated", len(batch))
    return _commit(state, children, batch)


def _gain_kind(kind: LayerKind) -> Callable[[Layer], Layer]:
    def transform(layer: Layer) -> Layer:
        return evolve(layer, name=naming.with_kind(layer.name, kind), kind=kind)

    return transform


def _rename_with(func: Callable[[str, str], str], affix: str) -> Callable[[Layer], Layer]:
    def transform(layer: Layer) -> Layer:
        return evolve(layer, name=func(layer.name, affix))

    return transform


@register(actions.OpenDocument)
def open_document(state: State, action: actions.OpenDocument) -> State:
    logger.debug(
        "Opened %s with %d top-level layers", action.filename, len(action.document)
    )
    return State(document=action.document, filename=action.filename)


@register(actions.ToggleSelf)
def toggle_self(state: State, action: actions.ToggleSelf) -> State:
    return _with_children(
        state, toggle_selection(state.document.children, action.path)
    )


@register(actions.ToggleChildren)
def toggle_children(state: State, action: actions.ToggleChildren) -> State:
    return _with_children(
        state, toggle_children_selection(state.document.children, action.path)
    )


@register(actions.ToggleDescendants)
def toggle_descendants(state: State, action: actions.ToggleDescendants) -> State:
    return _with_children(
        state, toggle_descendant_selection(state.document.children, action.path)
    )


@register(actions.Rename)
def rename(state: State, action: actions.Rename) -> State:
    new_name = action.new_name
    document, batch = state.document.replace_at(
        action.path, lambda layer: evolve(layer, name=new_name)
    )
    return _commit(state, document.children, batch)


@register(actions.GainRequired)
def gain_required(state: State, action: actions.GainRequired) -> State:
    return _apply_to_selected(state, _gain_kind(LayerKind.REQUIRED))


@register(actions.GainRadio)
def gain_radio(state: State, action: actions.GainRadio) -> State:
    return _apply_to_selected(state, _gain_kind(LayerKind.RADIO))


@register(actions.RemoveSpecifier)
def remove_specifier(state: State, action: actions.RemoveSpecifier) -> State:
    return _apply_to_selected(state, _gain_kind(LayerKind.OPTIONAL))


@register(actions.AppendPrefix)
def append_prefix(state: State, action: actions.AppendPrefix) -> State:
    return _apply_to_selected(state, _rename_with(naming.add_prefix, action.prefix))


@register(actions.RemovePrefix)
def remove_prefix(state: State, action: actions.RemovePrefix) -> State:
    return _apply_to_selected(
        state, _rename_with(naming.remove_prefix, action.prefix)
    )


@register(actions.AppendPostfix)
def append_postfix(state: State, action: actions.AppendPostfix) -> State:
    return _apply_to_selected(
        state, _rename_with(naming.add_postfix, action.postfix)
    )


@register(actions.RemovePostfix)
def remove_postfix(state: State, action: actions.RemovePostfix) -> State:
    return _apply_to_selected(
        state, _rename_with(naming.remove_postfix, action.postfix)
    )


@register(actions.DeselectAll)
def deselect(state: State, action: actions.DeselectAll) -> State:
    return _with_children(state, deselect_all(state.document.children))


@register(actions.Undo)
def undo(state: State, action: actions.Undo) -> State:
    children, history = state.history.undo(state.document.children)
    if history is state.history:
        return state
    return evolve(_with_children(state, children), history=history)


@register(actions.Redo)
def redo(state: State, action: actions.Redo) -> State:
    children, history = state.history.redo(state.document.children)
    if history is state.history:
        return state
    return evolve(_with_children(state, children), history=history)
