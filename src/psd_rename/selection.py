"""
Selection-scoped traversal of the layer tree.

:py:func:`apply_to_selected` is the workhorse of batch edits. It visits the
tree in post-order, siblings in display order, so that every descendant of a
layer is processed before the layer itself. A layer is transformed when it
was selected before its subtree was visited, and the transform receives the
layer with its already-updated children attached.

The toggle helpers reuse the same rebuilding scheme but only flip
``is_selected``; they never produce renamings.
"""

import logging
from typing import Callable, Sequence

from attrs import evolve

from psd_rename.tree import (
    Batch,
    Children,
    Layer,
    Renaming,
    Transform,
    display_order,
    update_at,
)

logger = logging.getLogger(__name__)


def apply_to_selected(children: Children, transform: Transform) -> tuple[Children, Batch]:
    """
    Apply `transform` to every selected layer below `children`.

    :param children: children mapping of the document or of a layer.
    :param transform: pure function from the old layer to its replacement.
    :return: tuple of the new children and the batch of renamings, descendants
        before their ancestors.
    """
    batch: list[Renaming] = []
    new_children = _apply_to_selected(children, transform, batch)
    return new_children, tuple(batch)


def _apply_to_selected(
    children: Children, transform: Transform, batch: list[Renaming]
) -> Children:
    replaced = {}
    for layer in display_order(children):
        updated = layer
        if layer.children:
            new_children = _apply_to_selected(layer.children, transform, batch)
            if new_children is not layer.children:
                updated = evolve(layer, children=new_children)
        if layer.is_selected:
            new = transform(updated)
            batch.append(Renaming.between(updated, new))
            updated = new
        if updated is not layer:
            replaced[layer.id] = updated
    if not replaced:
        return children
    return {key: replaced.get(key, value) for key, value in children.items()}


def map_layers(children: Children, func: Callable[[Layer], Layer]) -> Children:
    """
    Apply `func` to every layer below `children`, descendants first.

    Unlike :py:func:`apply_to_selected` nothing is recorded.
    """
    result = {}
    for key, layer in children.items():
        if layer.children:
            layer = evolve(layer, children=map_layers(layer.children, func))
        result[key] = func(layer)
    return result


def _flip(layer: Layer) -> Layer:
    return evolve(layer, is_selected=not layer.is_selected)


def _deselect(layer: Layer) -> Layer:
    if not layer.is_selected:
        return layer
    return evolve(layer, is_selected=False)


def toggle_selection(children: Children, path: Sequence[int]) -> Children:
    """Flip the selection of the layer at `path`."""
    return update_at(children, path, _flip)


def toggle_children_selection(children: Children, path: Sequence[int]) -> Children:
    """Flip the selection of each direct child of the layer at `path`."""

    def flip_children(layer: Layer) -> Layer:
        return evolve(
            layer, children={key: _flip(child) for key, child in layer.children.items()}
        )

    return update_at(children, path, flip_children)


def toggle_descendant_selection(children: Children, path: Sequence[int]) -> Children:
    """Flip the selection of every layer below the layer at `path`."""

    def flip_descendants(layer: Layer) -> Layer:
        return evolve(layer, children=map_layers(layer.children, _flip))

    return update_at(children, path, flip_descendants)


def deselect_all(children: Children) -> Children:
    """Clear the selection of every layer. Idempotent."""
    return map_layers(children, _deselect)
