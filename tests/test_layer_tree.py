import pytest

from psdkit.layer_tree import (
    ItemFlag,
    LayerTreeItem,
    LayerTreeModel,
    ModelIndex,
    Orientation,
    Role,
)

LINES = [
    "Widgets",
    "  QWidget",
    "    QWidget",
    "  QDialog",
    "Tools",
    "  Qt Designer",
    "  Qt Assistant",
]


@pytest.fixture
def model():
    return LayerTreeModel(LINES)


def test_top_level_rows(model):
    assert model.row_count() == 2
    assert model.data(model.index(0, 0)) == "Widgets"
    assert model.data(model.index(1, 0)) == "Tools"


def test_nested_structure(model):
    widgets = model.index(0, 0)
    assert model.row_count(widgets) == 2
    qwidget = model.index(0, 0, widgets)
    assert model.data(qwidget) == "QWidget"
    assert model.data(model.index(0, 0, qwidget)) == "QWidget"
    assert model.data(model.index(1, 0, widgets)) == "QDialog"
    tools = model.index(1, 0)
    assert [model.data(model.index(r, 0, tools)) for r in range(model.row_count(tools))] == [
        "Qt Designer",
        "Qt Assistant",
    ]


def test_parent_round_trip(model):
    widgets = model.index(0, 0)
    dialog = model.index(1, 0, widgets)
    assert model.parent(dialog) == widgets
    assert not model.parent(widgets).is_valid()
    assert not model.parent(ModelIndex()).is_valid()


def test_missing_row_gives_invalid_index(model):
    assert not model.index(model.row_count(), 0).is_valid()


def test_header_data(model):
    assert model.header_data(0, Orientation.HORIZONTAL) == "GroupLayer"
    assert model.header_data(0, Orientation.VERTICAL) is None
    assert model.header_data(0, Orientation.HORIZONTAL, Role.EDIT) is None


def test_data_only_for_display_role(model):
    index = model.index(0, 0)
    assert model.data(index, Role.EDIT) is None
    assert model.data(ModelIndex()) is None


def test_flags(model):
    assert model.flags(ModelIndex()) == ItemFlag.ENABLED
    assert model.flags(model.index(0, 0)) == ItemFlag.ENABLED | ItemFlag.SELECTABLE


def test_tab_separated_columns():
    model = LayerTreeModel(["name\tkind"])
    index = model.index(0, 0)
    assert model.column_count(index) == 2
    assert model.data(model.index(0, 1)) == "kind"


def test_blank_lines_are_skipped():
    model = LayerTreeModel(["", "a", "   ", "b"])
    assert model.row_count() == 2


def test_insert_rows_adds_blank_items(model):
    model.insert_rows(1, 2)
    assert model.row_count() == 4
    assert model.data(model.index(1, 0)) == ""
    assert model.data(model.index(3, 0)) == "Tools"


def test_insert_rows_bad_position(model):
    with pytest.raises(IndexError):
        model.insert_rows(model.row_count() + 1, 1)


def test_remove_rows(model):
    model.remove_rows(0, 1)
    assert model.row_count() == 1
    assert model.data(model.index(0, 0)) == "Tools"


def test_remove_rows_bad_position(model):
    with pytest.raises(IndexError):
        model.remove_rows(-1, 1)


def test_set_data_updates_and_notifies(model):
    seen = []
    model.data_changed.append(lambda first, last: seen.append((first, last)))
    index = model.index(1, 0)
    model.set_data(index, "Renamed")
    assert model.data(model.index(1, 0)) == "Renamed"
    assert seen == [(index, index)]


def test_set_data_errors(model):
    with pytest.raises(ValueError):
        model.set_data(ModelIndex(), "x")
    with pytest.raises(ValueError):
        model.set_data(model.index(0, 0), "x", Role.DISPLAY)
    with pytest.raises(IndexError):
        model.set_data(model.index(0, 5), "x")


def test_item_children_and_row():
    root = LayerTreeItem(["root"])
    first = LayerTreeItem(["a"], root)
    second = LayerTreeItem(["b"], root)
    root.append_child(first)
    root.insert_child(0, second)
    assert root.child(0) is second
    assert first.row() == 1
    assert root.row() == 0
    assert root.child(5) is None
    root.remove_child(0)
    assert root.child_count() == 1
    assert first.row() == 0


def test_item_errors():
    item = LayerTreeItem(["x"])
    with pytest.raises(IndexError):
        item.insert_child(2, LayerTreeItem([]))
    with pytest.raises(IndexError):
        item.remove_child(0)
    with pytest.raises(IndexError):
        item.set_data(1, "y")
    assert item.data(3) is None


def test_item_set_data():
    item = LayerTreeItem(["x", "y"])
    item.set_data(1, "z")
    assert item.data(1) == "z"
    assert item.column_count() == 2