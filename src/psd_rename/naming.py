"""
Naming convention for layer kinds.

A layer name may carry a single leading marker that classifies the layer:

- ``!`` marks a :py:attr:`~psd_rename.constants.LayerKind.REQUIRED` layer,
- ``*`` marks a :py:attr:`~psd_rename.constants.LayerKind.RADIO` layer,
- no marker means :py:attr:`~psd_rename.constants.LayerKind.OPTIONAL`.

All functions here are pure and total::

    >>> strip_marker("!*!Head")
    'Head'
    >>> as_radio("!Hat")
    '*Hat'
    >>> classify("*Hat")
    <LayerKind.RADIO: 'RADIO'>
"""

from psd_rename.constants import MARKERS, RADIO_MARKER, REQUIRED_MARKER, LayerKind


def strip_marker(name: str) -> str:
    """
    Remove every leading kind marker, however many and in whatever order.

    :param name: layer name.
    :return: `str`
    """
    return name.lstrip(MARKERS)


def as_required(name: str) -> str:
    """Rewrite `name` to carry exactly one required marker."""
    return REQUIRED_MARKER + strip_marker(name)


def as_radio(name: str) -> str:
    """Rewrite `name` to carry exactly one radio marker."""
    return RADIO_MARKER + strip_marker(name)


def as_optional(name: str) -> str:
    """Rewrite `name` to carry no marker."""
    return strip_marker(name)


def classify(name: str) -> LayerKind:
    """
    Derive the kind of a layer from its name.

    :param name: layer name.
    :return: :py:class:`~psd_rename.constants.LayerKind`
    """
    if name.startswith(REQUIRED_MARKER):
        return LayerKind.REQUIRED
    if name.startswith(RADIO_MARKER):
        return LayerKind.RADIO
    return LayerKind.OPTIONAL


_REWRITES = {
    LayerKind.REQUIRED: as_required,
    LayerKind.RADIO: as_radio,
    LayerKind.OPTIONAL: as_optional,
}


def with_kind(name: str, kind: LayerKind) -> str:
    """
    Rewrite `name` so that its marker agrees with `kind`.

    :param name: layer name.
    :param kind: target :py:class:`~psd_rename.constants.LayerKind`.
    :return: `str`
    """
    return _REWRITES[LayerKind(kind)](name)


def add_prefix(name: str, prefix: str) -> str:
    """Prepend `prefix` unless `name` already starts with it."""
    return name if name.startswith(prefix) else prefix + name


def remove_prefix(name: str, prefix: str) -> str:
    """Drop a leading `prefix` if `name` carries it."""
    if prefix and name.startswith(prefix):
        return name[len(prefix) :]
    return name


def add_postfix(name: str, postfix: str) -> str:
    """Append `postfix` unless `name` already ends with it."""
    return name if name.endswith(postfix) else name + postfix


def remove_postfix(name: str, postfix: str) -> str:
    """Drop a trailing `postfix` if `name` carries it."""
    if postfix and name.endswith(postfix):
        return name[: -len(postfix)]
    return name
