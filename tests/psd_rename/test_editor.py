import logging

from psd_rename.actions import GainRadio, ToggleSelf
from psd_rename.editor import Editor
from psd_rename.reducer import State

logger = logging.getLogger(__name__)


def test_editor_open(opened_psd) -> None:
    editor = Editor.open("face.psd", encoding="utf-8")
    assert editor.state.filename == "face.psd"
    assert len(editor.state.document) == 3
    assert not editor.can_undo()
    assert not editor.can_redo()


def test_editor_dispatch(opened_psd) -> None:
    editor = Editor.open("face.psd")
    opened = editor.state
    editor.dispatch(ToggleSelf((3,)))
    state = editor.dispatch(GainRadio())
    assert isinstance(state, State)
    assert editor.state is state
    assert state.document[(3,)].name == "*Hat"
    assert opened.document[(3,)].is_selected is False
    assert editor.can_undo()

    editor.undo()
    assert editor.can_redo()
    assert not editor.can_undo()
    editor.redo()
    assert editor.can_undo()


def test_editor_save(opened_psd) -> None:
    editor = Editor.open("face.psd")
    editor.dispatch(ToggleSelf((1,)))
    editor.dispatch(GainRadio())
    assert editor.save("out.psd") == 1
    assert opened_psd.saved == [("out.psd", {})]
    assert list(opened_psd)[0].name == "*Eyes"


def test_empty_editor() -> None:
    editor = Editor()
    assert editor.state.document.children == {}
    assert editor.undo() is editor.state
