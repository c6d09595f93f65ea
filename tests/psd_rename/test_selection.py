import logging

from attrs import evolve

from psd_rename.constants import LayerKind
from psd_rename.naming import as_required
from psd_rename.selection import (
    apply_to_selected,
    deselect_all,
    map_layers,
    toggle_children_selection,
    toggle_descendant_selection,
    toggle_selection,
)
from psd_rename.tree import Children, Document, Layer, descendants, resolve

logger = logging.getLogger(__name__)


def _selected_ids(children: Children) -> set:
    return {layer.id for layer in descendants(children) if layer.is_selected}


def _select(children: Children, *paths: tuple) -> Children:
    for path in paths:
        children = toggle_selection(children, path)
    return children


def _required(layer: Layer) -> Layer:
    return evolve(layer, name=as_required(layer.name), kind=LayerKind.REQUIRED)


def test_toggle_selection(scenario_document: Document) -> None:
    children = toggle_selection(scenario_document.children, (3, 4))
    assert _selected_ids(children) == {4}
    assert toggle_selection(children, (3, 4)) == scenario_document.children


def test_toggle_selection_stale_path(scenario_document: Document) -> None:
    children = scenario_document.children
    assert toggle_selection(children, (4,)) is children


def test_toggle_children_selection(nested_document: Document) -> None:
    children = toggle_children_selection(nested_document.children, (1,))
    assert _selected_ids(children) == {2, 5}
    children = toggle_children_selection(children, (1, 2))
    assert _selected_ids(children) == {2, 3, 4, 5}
    children = toggle_children_selection(children, (1,))
    assert _selected_ids(children) == {3, 4}


def test_toggle_descendant_selection(nested_document: Document) -> None:
    children = toggle_selection(nested_document.children, (1, 2, 3))
    children = toggle_descendant_selection(children, (1,))
    assert _selected_ids(children) == {2, 4, 5}

    twice = toggle_descendant_selection(
        toggle_descendant_selection(nested_document.children, (1,)), (1,)
    )
    assert twice == nested_document.children


def test_deselect_all(nested_document: Document) -> None:
    children = _select(nested_document.children, (1,), (1, 2, 4), (6,))
    assert _selected_ids(children) == {1, 4, 6}
    cleared = deselect_all(children)
    assert _selected_ids(cleared) == set()
    assert deselect_all(cleared) == cleared


def test_map_layers_visits_everything(nested_document: Document) -> None:
    seen = []

    def visit(layer: Layer) -> Layer:
        seen.append(layer.id)
        return layer

    map_layers(nested_document.children, visit)
    assert sorted(seen) == [1, 2, 3, 4, 5, 6]
    # Children before their parent.
    assert seen.index(3) < seen.index(2) < seen.index(1)


def test_apply_to_selected_scenario(scenario_document: Document) -> None:
    children = _select(scenario_document.children, (1,), (3, 4))
    new_children, batch = apply_to_selected(children, _required)

    assert resolve(new_children, (1,)).name == "!Eyes"  # type: ignore[union-attr]
    assert resolve(new_children, (3, 4)).name == "!Brim"  # type: ignore[union-attr]
    assert resolve(new_children, (3, 4)).kind == LayerKind.REQUIRED  # type: ignore[union-attr]
    assert new_children[2] is children[2]
    assert new_children[3].name == "*Hat"
    assert [renaming.path for renaming in batch] == [(3, 4), (1,)]
    assert batch[0].original_name == "Brim"
    assert batch[0].new_name == "!Brim"
    assert batch[1].original_kind == LayerKind.OPTIONAL


def test_apply_to_selected_post_order(nested_document: Document) -> None:
    children = _select(nested_document.children, (1,), (1, 2), (1, 2, 3), (6,))
    received = []

    def transform(layer: Layer) -> Layer:
        received.append(layer)
        return evolve(layer, name=layer.name + "_x")

    new_children, batch = apply_to_selected(children, transform)
    assert [renaming.path[-1] for renaming in batch] == [6, 3, 2, 1]

    # Ancestors receive their already-updated subtree.
    body = received[-1]
    assert body.id == 1
    assert body.children[2].name == "Arm_x"
    assert body.children[2].children[3].name == "Hand_x"
    assert resolve(new_children, (1, 2, 3)).name == "Hand_x"  # type: ignore[union-attr]
    assert resolve(new_children, (1, 2, 4)).name == "!Sleeve"  # type: ignore[union-attr]


def test_apply_to_selected_touches_only_selected(nested_document: Document) -> None:
    children = _select(nested_document.children, (1, 2, 4), (1, 5))
    new_children, batch = apply_to_selected(children, _required)
    changed = {
        layer.id
        for layer in descendants(new_children)
        if layer.name != resolve(children, layer.path).name  # type: ignore[union-attr]
    }
    assert changed == {5}
    assert {renaming.path[-1] for renaming in batch} == {4, 5}
    # Selection survives the edit.
    assert _selected_ids(new_children) == {4, 5}


def test_apply_to_selected_without_selection(scenario_document: Document) -> None:
    children = scenario_document.children
    new_children, batch = apply_to_selected(children, _required)
    assert new_children is children
    assert batch == ()
