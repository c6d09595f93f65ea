"""
Layer tree module.

This module implements the immutable layer hierarchy that the editor works
on, and the path-based addressing used to locate and replace single layers.

Key classes:

- :py:class:`Layer`: A single layer, possibly holding child layers
- :py:class:`Document`: The document root holding the top-level layers
- :py:class:`Renaming`: A recorded before/after name and kind of one layer

Every layer carries an ``id`` assigned once at import time and a ``path``,
the sequence of ids from the top level down to the layer itself. Because the
editor never inserts, deletes or moves layers, a path stays valid for the
lifetime of its document.

Nothing here mutates in place. Replacing a layer rebuilds the ancestors on
its path and shares every other subtree with the previous snapshot::

    new_children, batch = replace_at(
        document.children, (3, 4), lambda layer: evolve(layer, name="Rim")
    )

Children are stored in insertion order, which is bottom-to-top stacking order
as read from the file. Layer panels list them the other way round; see
:py:func:`display_order`.
"""

import logging
from typing import Any, Callable, Iterator, Mapping, Optional, Sequence

from attrs import evolve, field, frozen

from psd_rename.constants import LayerKind
from psd_rename.naming import classify

logger = logging.getLogger(__name__)

Path = tuple[int, ...]
Children = Mapping[int, "Layer"]
Transform = Callable[["Layer"], "Layer"]


def _to_path(value: Sequence[int]) -> Path:
    return tuple(value)


@frozen
class Layer:
    """
    A single layer of the document.

    .. py:attribute:: id

        Stable identifier, unique within the document.

    .. py:attribute:: name

        Layer name, possibly carrying a kind marker.

    .. py:attribute:: path

        Ids from the top level down to this layer, inclusive.

    .. py:attribute:: kind

        :py:class:`~psd_rename.constants.LayerKind` of this layer.

    .. py:attribute:: is_selected

        Whether the layer is a target of selection-scoped edits.

    .. py:attribute:: is_group

        Whether the layer holds sub-layers rather than raster content.

    .. py:attribute:: children

        Mapping of id to child :py:class:`Layer`, in insertion order.

    .. py:attribute:: payload

        Opaque data of the source codec. Never interpreted here.
    """

    id: int
    name: str
    path: Path = field(converter=_to_path)
    kind: LayerKind = field(converter=LayerKind)
    is_selected: bool = False
    is_group: bool = False
    children: Children = field(factory=dict)
    payload: Any = field(default=None, eq=False, repr=False)

    @classmethod
    def new(
        cls,
        layer_id: int,
        name: str,
        path: Sequence[int],
        children: Optional[Children] = None,
        payload: Any = None,
    ) -> "Layer":
        """
        Create a layer whose kind is derived from its name.

        :param layer_id: identifier of the layer.
        :param name: layer name.
        :param path: ids from the top level down to this layer.
        :param children: child layers, or `None` for a raster layer.
        :param payload: opaque codec data.
        :return: :py:class:`Layer`
        """
        return cls(
            id=layer_id,
            name=name,
            path=path,
            kind=classify(name),
            is_group=children is not None,
            children=children if children is not None else {},
            payload=payload,
        )

    def __iter__(self) -> Iterator["Layer"]:
        return display_order(self.children)


@frozen
class Renaming:
    """
    Name and kind of one layer before and after an edit.

    A batch of renamings, in the order they were produced by one action, is
    the unit of undo and redo.
    """

    path: Path = field(converter=_to_path)
    original_name: str
    original_kind: LayerKind = field(converter=LayerKind)
    new_name: str
    new_kind: LayerKind = field(converter=LayerKind)

    @classmethod
    def between(cls, old: Layer, new: Layer) -> "Renaming":
        return cls(
            path=old.path,
            original_name=old.name,
            original_kind=old.kind,
            new_name=new.name,
            new_kind=new.kind,
        )


Batch = tuple[Renaming, ...]


@frozen
class Document:
    """
    Root of a layer tree.

    Example::

        layer = document[(3, 4)]
        for layer in document.descendants():
            print(layer.path, layer.name)
    """

    width: int = 0
    height: int = 0
    children: Children = field(factory=dict)
    payload: Any = field(default=None, eq=False, repr=False)

    def __iter__(self) -> Iterator[Layer]:
        return display_order(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def __getitem__(self, path: Sequence[int]) -> Layer:
        layer = resolve(self.children, path)
        if layer is None:
            raise KeyError(tuple(path))
        return layer

    def get(self, path: Sequence[int], default: Optional[Layer] = None) -> Optional[Layer]:
        """Returns the layer at `path`, or `default` if it does not resolve."""
        layer = resolve(self.children, path)
        return default if layer is None else layer

    def descendants(self) -> Iterator[Layer]:
        """Return a generator over all the layers in display order."""
        return descendants(self.children)

    def selected(self) -> list[Layer]:
        """Returns the selected layers in display order."""
        return [layer for layer in self.descendants() if layer.is_selected]

    def find_path(self, layer_id: int) -> Optional[Path]:
        """Returns the path of the layer with `layer_id`, if any."""
        return find_path(self.children, layer_id)

    def replace_at(self, path: Sequence[int], transform: Transform) -> tuple["Document", Batch]:
        """
        Replace one layer. See :py:func:`replace_at`.

        :return: tuple of the new :py:class:`Document` and the recorded batch.
        """
        children, batch = replace_at(self.children, path, transform)
        if children is self.children:
            return self, batch
        return evolve(self, children=children), batch


def display_order(children: Children) -> Iterator[Layer]:
    """Iterate over `children` topmost first, the order a layer panel shows."""
    return reversed(list(children.values()))


def descendants(children: Children) -> Iterator[Layer]:
    """
    Return a generator over every layer below `children`, in pre-order and
    display order.
    """
    for layer in display_order(children):
        yield layer
        yield from descendants(layer.children)


def find_path(children: Children, layer_id: int) -> Optional[Path]:
    for layer in descendants(children):
        if layer.id == layer_id:
            return layer.path
    return None


def resolve(children: Children, path: Sequence[int]) -> Optional[Layer]:
    """
    Walk `path` id by id from `children`.

    :return: the addressed :py:class:`Layer`, or `None` when any id is absent
        at its level or the path is empty.
    """
    layer = None
    for layer_id in path:
        layer = children.get(layer_id)
        if layer is None:
            return None
        children = layer.children
    return layer


def _with_child(children: Children, layer: Layer) -> Children:
    new_children = dict(children)
    new_children[layer.id] = layer
    return new_children


def _rebuild(
    children: Children, path: Path, transform: Transform, index: int
) -> Optional[tuple[Children, Layer, Layer]]:
    layer = children.get(path[index])
    if layer is None:
        return None
    if index + 1 == len(path):
        replacement = transform(layer)
        return _with_child(children, replacement), layer, replacement
    result = _rebuild(layer.children, path, transform, index + 1)
    if result is None:
        return None
    new_children, old, new = result
    return _with_child(children, evolve(layer, children=new_children)), old, new


def update_at(children: Children, path: Sequence[int], transform: Transform) -> Children:
    """
    Replace the layer at `path` with ``transform(layer)``.

    Ancestors on the path are rebuilt with the single child replaced; all
    the siblings are shared. A path that does not resolve leaves `children`
    unchanged.

    :return: new children mapping.
    """
    path = tuple(path)
    result = _rebuild(children, path, transform, 0) if path else None
    if result is None:
        logger.debug("Path %r does not resolve, ignored", path)
        return children
    return result[0]


def replace_at(
    children: Children, path: Sequence[int], transform: Transform
) -> tuple[Children, Batch]:
    """
    Like :py:func:`update_at`, but also records the name and kind delta.

    :return: tuple of the new children and a batch with a single
        :py:class:`Renaming`, or the original children and an empty batch
        when the path does not resolve.
    """
    path = tuple(path)
    result = _rebuild(children, path, transform, 0) if path else None
    if result is None:
        logger.debug("Path %r does not resolve, ignored", path)
        return children, ()
    new_children, old, new = result
    return new_children, (Renaming.between(old, new),)
