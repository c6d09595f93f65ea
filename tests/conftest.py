"""Pytest configuration for psd-rename tests."""

from types import SimpleNamespace
from typing import Any, Iterator, Optional

import pytest

from psd_rename import psd_io
from psd_rename.psd_io import DocumentImporter
from psd_rename.tree import Document

# Eyes (1), !Mouth (2), *Hat (3) > Brim (4), in stacking order.
SCENARIO_RECORDS = [
    {"name": "Eyes", "opacity": 255},
    {"name": "!Mouth", "opacity": 128},
    {"name": "*Hat", "children": [{"name": "Brim", "opacity": 64}]},
]

# Body (1) > [Arm (2) > [Hand (3), !Sleeve (4)], Leg (5)], Background (6)
NESTED_RECORDS = [
    {
        "name": "Body",
        "children": [
            {
                "name": "Arm",
                "children": [{"name": "Hand"}, {"name": "!Sleeve"}],
            },
            {"name": "Leg"},
        ],
    },
    {"name": "Background"},
]


class FakeLayer:
    """Stands in for a psd-tools layer: a name and, for groups, sub-layers."""

    def __init__(self, name: str, children: Optional[list] = None) -> None:
        self.name = name
        self._children = children

    def is_group(self) -> bool:
        return self._children is not None

    def __iter__(self) -> Iterator["FakeLayer"]:
        return iter(self._children or [])


class FakePSDImage(FakeLayer):
    """Stands in for :py:class:`psd_tools.PSDImage`."""

    def __init__(self, layers: list, width: int = 64, height: int = 48) -> None:
        super().__init__("Root", layers)
        self.width = width
        self.height = height
        self.saved: list = []

    def save(self, fp: Any, **kwargs: Any) -> None:
        self.saved.append((fp, kwargs))


def make_fake_psd() -> FakePSDImage:
    return FakePSDImage(
        [
            FakeLayer("Eyes"),
            FakeLayer("!Mouth"),
            FakeLayer("*Hat", [FakeLayer("Brim")]),
        ]
    )


@pytest.fixture
def scenario_document() -> Document:
    return DocumentImporter().from_records(64, 48, SCENARIO_RECORDS)


@pytest.fixture
def nested_document() -> Document:
    return DocumentImporter().from_records(32, 32, NESTED_RECORDS)


@pytest.fixture
def fake_psd() -> FakePSDImage:
    return make_fake_psd()


@pytest.fixture
def opened_psd(monkeypatch: pytest.MonkeyPatch, fake_psd: FakePSDImage) -> FakePSDImage:
    """Make :py:func:`psd_rename.psd_io.open_psd` return `fake_psd`."""
    calls = []

    def open_psd(fp: Any, **kwargs: Any) -> FakePSDImage:
        calls.append((fp, kwargs))
        return fake_psd

    monkeypatch.setattr(psd_io, "PSDImage", SimpleNamespace(open=open_psd))
    fake_psd.open_calls = calls  # type: ignore[attr-defined]
    return fake_psd
