"""A tree model of layer names built from indented text lines."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Any

ROOT_HEADER = "GroupLayer"


class ItemFlag(IntFlag):
    """Capabilities of an item in the model."""

    NO_FLAGS = 0
    SELECTABLE = 1
    EDITABLE = 2
    DRAG_ENABLED = 4
    DROP_ENABLED = 8
    USER_CHECKABLE = 16
    ENABLED = 32


class Role(IntEnum):
    """Which aspect of an item's data is requested."""

    DISPLAY = 0
    EDIT = 2


class Orientation(IntEnum):
    HORIZONTAL = 1
    VERTICAL = 2


class LayerTreeItem:
    """A node holding one row of column values and its child nodes."""

    def __init__(self, data: Iterable[Any], parent: LayerTreeItem | None = None):
        self._data = list(data)
        self._children: list[LayerTreeItem] = []
        self.parent = parent

    def append_child(self, item: LayerTreeItem) -> None:
        self._children.append(item)

    def child(self, row: int) -> LayerTreeItem | None:
        """Return the child at ``row``, or None when there is none."""
        if 0 <= row < len(self._children):
            return self._children[row]
        return None

    def child_count(self) -> int:
        return len(self._children)

    def column_count(self) -> int:
        return len(self._data)

    def data(self, column: int) -> Any:
        """Return the value in ``column``, or None when out of range."""
        if 0 <= column < len(self._data):
            return self._data[column]
        return None

    def insert_child(self, row: int, item: LayerTreeItem) -> None:
        if not 0 <= row <= len(self._children):
            raise IndexError(f"cannot insert child at row {row}")
        self._children.insert(row, item)

    def remove_child(self, row: int) -> None:
        if not 0 <= row < len(self._children):
            raise IndexError(f"no child at row {row}")
        del self._children[row]

    def row(self) -> int:
        """Return this item's position among its parent's children."""
        if self.parent is None:
            return 0
        return next(
            (n for n, sibling in enumerate(self.parent._children) if sibling is self),
            -1,
        )

    def set_data(self, column: int, value: Any) -> None:
        if not 0 <= column < len(self._data):
            raise IndexError(f"no column {column}")
        self._data[column] = value


@dataclass(frozen=True)
class ModelIndex:
    """A position in the model; the default index is invalid and means the root."""

    row: int = -1
    column: int = -1
    item: LayerTreeItem | None = None

    def is_valid(self) -> bool:
        return self.row >= 0 and self.column >= 0 and self.item is not None


def _indentation(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


class LayerTreeModel:
    """A tree model whose structure is given by space-indented lines."""

    def __init__(self, lines: Iterable[str]):
        self._root = LayerTreeItem([ROOT_HEADER])
        self.data_changed: list[Callable[[ModelIndex, ModelIndex], None]] = []
        self._setup_model_data(lines, self._root)

    def _item_for(self, parent: ModelIndex | None) -> LayerTreeItem:
        if parent is None or not parent.is_valid():
            return self._root
        return parent.item

    def data(self, index: ModelIndex, role: Role = Role.DISPLAY) -> Any:
        if not index.is_valid() or role != Role.DISPLAY:
            return None
        return index.item.data(index.column)

    def flags(self, index: ModelIndex) -> ItemFlag:
        if not index.is_valid():
            return ItemFlag.ENABLED
        return ItemFlag.ENABLED | ItemFlag.SELECTABLE

    def header_data(
        self, section: int, orientation: Orientation, role: Role = Role.DISPLAY
    ) -> Any:
        if orientation == Orientation.HORIZONTAL and role == Role.DISPLAY:
            return self._root.data(section)
        return None

    def index(
        self, row: int, column: int, parent: ModelIndex | None = None
    ) -> ModelIndex:
        child = self._item_for(parent).child(row)
        if child is None:
            return ModelIndex()
        return ModelIndex(row, column, child)

    def parent(self, index: ModelIndex) -> ModelIndex:
        if not index.is_valid():
            return ModelIndex()
        parent_item = index.item.parent
        if parent_item is None or parent_item is self._root:
            return ModelIndex()
        return ModelIndex(parent_item.row(), 0, parent_item)

    def row_count(self, parent: ModelIndex | None = None) -> int:
        return self._item_for(parent).child_count()

    def column_count(self, parent: ModelIndex | None = None) -> int:
        return self._item_for(parent).column_count()

    def insert_rows(
        self, position: int, rows: int, parent: ModelIndex | None = None
    ) -> None:
        """Insert ``rows`` blank items at ``position`` under ``parent``."""
        parent_item = self._item_for(parent)
        if not 0 <= position <= parent_item.child_count():
            raise IndexError(f"cannot insert rows at position {position}")
        columns = self.column_count()
        for _ in range(rows):
            parent_item.insert_child(position, LayerTreeItem([""] * columns, parent_item))

    def remove_rows(
        self, position: int, rows: int, parent: ModelIndex | None = None
    ) -> None:
        """Remove up to ``rows`` items starting at ``position`` under ``parent``."""
        parent_item = self._item_for(parent)
        if not 0 <= position <= parent_item.child_count():
            raise IndexError(f"cannot remove rows at position {position}")
        for _ in range(min(rows, parent_item.child_count() - position)):
            parent_item.remove_child(position)

    def set_data(self, index: ModelIndex, value: Any, role: Role = Role.EDIT) -> None:
        if not index.is_valid():
            raise ValueError("cannot set data on an invalid index")
        if role != Role.EDIT:
            raise ValueError(f"data can only be set with the edit role, not {role!r}")
        index.item.set_data(index.column, value)
        for listener in self.data_changed:
            listener(index, index)

    @staticmethod
    def _setup_model_data(lines: Iterable[str], root: LayerTreeItem) -> None:
        parents = [root]
        indentations = [0]
        for line in lines:
            position = _indentation(line)
            line_data = line[position:].strip()
            if not line_data:
                continue
            columns = [part for part in line_data.split("\t") if part]
            if position > indentations[-1]:
                current = parents[-1]
                if current.child_count() > 0:
                    parents.append(current.child(current.child_count() - 1))
                    indentations.append(position)
            else:
                while position < indentations[-1] and len(parents) > 1:
                    parents.pop()
                    indentations.pop()
            parents[-1].append_child(LayerTreeItem(columns, parents[-1]))