"""
Various constants for psd_rename
"""

from enum import Enum

#: Leading name marker of a required layer.
REQUIRED_MARKER = "!"

#: Leading name marker of a radio layer.
RADIO_MARKER = "*"

MARKERS = REQUIRED_MARKER + RADIO_MARKER


class LayerKind(str, Enum):
    """
    Classification of a layer, encoded in the leading marker of its name.
    """

    REQUIRED = "REQUIRED"
    RADIO = "RADIO"
    OPTIONAL = "OPTIONAL"
