"""
Conversion between layer trees and psd-tools documents.

Decoding and encoding the file format is left to psd-tools. This module only
builds a :py:class:`~psd_rename.tree.Document` from an opened
:py:class:`~psd_tools.PSDImage` and writes the edited names back to it::

    from psd_rename import psd_io

    document = psd_io.open_psd('face.psd')
    ...
    psd_io.save_psd(document, 'face-renamed.psd')

The psd-tools layer objects are kept as opaque payloads of the imported
layers, so that everything the editor does not touch is written back as it
was read. Plain nested records (``dict`` with ``name`` and optionally
``children``) are supported as well through :py:meth:`DocumentImporter.from_records`
and :py:func:`to_records`.
"""

import itertools
import logging
import os
from typing import Any, BinaryIO, Callable, Iterable, Optional, Union

from psd_tools import PSDImage

from psd_rename.tree import Children, Document, Layer, Path, descendants

logger = logging.getLogger(__name__)

# (name, sub-items or None for a raster layer)
Describe = Callable[[Any], tuple[str, Optional[Iterable[Any]]]]


def _describe_psd_layer(layer: Any) -> tuple[str, Optional[Iterable[Any]]]:
    if layer.is_group():
        return layer.name, list(layer)
    return layer.name, None


def _describe_record(record: dict) -> tuple[str, Optional[Iterable[Any]]]:
    return record.get("name") or "", record.get("children")


class DocumentImporter:
    """
    Builds documents, assigning layer ids from its own sequence.

    Ids are handed out in a single pre-order pass over the source tree, in
    the source's stacking order, starting at `start`. Use one importer per
    load; ids of different importers are unrelated.

    :param start: first id to assign.
    """

    def __init__(self, start: int = 1):
        self._ids = itertools.count(start)

    def from_psd(self, psdimage: Any) -> Document:
        """
        Import an opened psd-tools document.

        :param psdimage: :py:class:`~psd_tools.PSDImage`, or any object with
            ``width``, ``height`` and iterable group layers.
        :return: :py:class:`~psd_rename.tree.Document`
        """
        children = self._import(psdimage, (), _describe_psd_layer)
        logger.debug("Imported %d top-level layers from %r", len(children), psdimage)
        return Document(
            width=psdimage.width,
            height=psdimage.height,
            children=children,
            payload=psdimage,
        )

    def from_records(
        self, width: int, height: int, records: Iterable[dict], payload: Any = None
    ) -> Document:
        """
        Import nested records.

        Each record is a ``dict`` with a ``name`` and, for a group, a list of
        ``children`` records. The record itself becomes the layer payload.

        :return: :py:class:`~psd_rename.tree.Document`
        """
        children = self._import(records, (), _describe_record)
        return Document(width=width, height=height, children=children, payload=payload)

    def _import(self, items: Iterable[Any], parent: Path, describe: Describe) -> Children:
        children = {}
        for item in items:
            name, sub_items = describe(item)
            layer_id = next(self._ids)
            path = parent + (layer_id,)
            children[layer_id] = Layer.new(
                layer_id,
                name,
                path,
                children=None
                if sub_items is None
                else self._import(sub_items, path, describe),
                payload=item,
            )
        return children


def from_psd(psdimage: Any) -> Document:
    """Import `psdimage` with a fresh :py:class:`DocumentImporter`."""
    return DocumentImporter().from_psd(psdimage)


def open_psd(fp: Union[BinaryIO, str, bytes, os.PathLike], **kwargs: Any) -> Document:
    """
    Open a PSD document and import its layer tree.

    :param fp: filename or file-like object.
    :param kwargs: passed to :py:meth:`psd_tools.PSDImage.open`, e.g.
        ``encoding``.
    :return: :py:class:`~psd_rename.tree.Document`
    """
    return from_psd(PSDImage.open(fp, **kwargs))


def _export_record(layer: Layer) -> dict:
    record = dict(layer.payload or {})
    record["name"] = layer.name
    if layer.is_group:
        record["children"] = [_export_record(child) for child in layer.children.values()]
    else:
        record.pop("children", None)
    return record


def to_records(document: Document) -> list[dict]:
    """
    Export the layer tree as nested records in stacking order.

    Every record is the layer's record payload overridden with the current
    ``name``. Raster layers carry no ``children`` list.
    """
    return [_export_record(layer) for layer in document.children.values()]


def apply_to_psd(document: Document) -> int:
    """
    Write the current layer names to the psd-tools layers held as payloads.

    Only names that differ are written.

    :return: number of renamed layers.
    :raise ValueError: if psd-tools rejects a name.
    """
    count = 0
    for layer in descendants(document.children):
        target = layer.payload
        if target is None or target.name == layer.name:
            continue
        logger.debug("Rename %r to %r", target.name, layer.name)
        target.name = layer.name
        count += 1
    return count


def save_psd(
    document: Document, fp: Union[BinaryIO, str, bytes, os.PathLike], **kwargs: Any
) -> int:
    """
    Write the current names back and save the source psd-tools document.

    :param document: document imported with :py:func:`from_psd`.
    :param fp: filename or file-like object.
    :param kwargs: passed to :py:meth:`psd_tools.PSDImage.save`.
    :return: number of renamed layers.
    """
    if document.payload is None:
        raise ValueError("Document has no source PSD to save")
    count = apply_to_psd(document)
    document.payload.save(fp, **kwargs)
    logger.info("Saved %s with %d renamed layers", fp, count)
    return count
