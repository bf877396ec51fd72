"""Drag and drop support for the layer tree model."""

from __future__ import annotations

import struct
from collections.abc import Iterable, Mapping
from enum import IntFlag

from psdkit.layer_tree import ItemFlag, LayerTreeModel, ModelIndex, Role

MIME_TYPE = "text/plain"

_HEADER = struct.Struct(">qii")
_LENGTH = struct.Struct(">I")
_NULL_STRING = 0xFFFFFFFF

Record = tuple[int, int, int, str]


class DropAction(IntFlag):
    IGNORE = 0
    COPY = 1
    MOVE = 2
    LINK = 4


def encode_items(records: Iterable[Record]) -> bytes:
    """Serialise (id, row, column, text) records in data-stream form.

    Each record is a big-endian 64-bit id, two 32-bit integers, and the text
    as a 32-bit byte count followed by UTF-16BE code units.
    """
    out = bytearray()
    for item_id, row, column, text in records:
        encoded = text.encode("utf-16-be")
        out += _HEADER.pack(item_id, row, column)
        out += _LENGTH.pack(len(encoded))
        out += encoded
    return bytes(out)


def decode_items(payload: bytes) -> list[Record]:
    """Parse records written by :func:`encode_items`."""
    records: list[Record] = []
    offset = 0
    size = len(payload)
    while offset < size:
        if offset + _HEADER.size + _LENGTH.size > size:
            raise ValueError("truncated item record")
        item_id, row, column = _HEADER.unpack_from(payload, offset)
        offset += _HEADER.size
        (length,) = _LENGTH.unpack_from(payload, offset)
        offset += _LENGTH.size
        if length == _NULL_STRING:
            text = ""
        else:
            if length % 2 or offset + length > size:
                raise ValueError("truncated item text")
            text = payload[offset : offset + length].decode("utf-16-be")
            offset += length
        records.append((item_id, row, column, text))
    return records


def _item_id(index: ModelIndex) -> int:
    return id(index.item) & 0x7FFFFFFFFFFFFFFF


class LayerDragDropModel(LayerTreeModel):
    """A layer tree model whose items can be dragged and dropped."""

    def flags(self, index: ModelIndex) -> ItemFlag:
        default = super().flags(index)
        if index.is_valid():
            return ItemFlag.DRAG_ENABLED | ItemFlag.DROP_ENABLED | default
        return ItemFlag.DROP_ENABLED | default

    def drop_mime_data(
        self,
        data: Mapping[str, bytes],
        action: DropAction,
        row: int,
        column: int,
        parent: ModelIndex | None = None,
    ) -> bool:
        """Insert the dropped items at ``row`` under ``parent``.

        Returns False when the data holds no item payload or the rows cannot
        be inserted there.
        """
        if action == DropAction.IGNORE:
            return True
        if MIME_TYPE not in data:
            return False
        parent = parent if parent is not None else ModelIndex()

        if row != -1:
            begin_row = row
        elif parent.is_valid():
            begin_row = 0
        else:
            begin_row = self.row_count(ModelIndex())

        grouped: dict[int, dict[int, dict[int, str]]] = {}
        for item_id, item_row, item_column, text in decode_items(data[MIME_TYPE]):
            grouped.setdefault(item_id, {}).setdefault(item_row, {})[item_column] = text

        try:
            self.insert_rows(begin_row, len(grouped), parent)
        except IndexError:
            return False

        for rows in grouped.values():
            for _, columns in sorted(rows.items()):
                for col, text in columns.items():
                    target = self.index(begin_row, col, parent)
                    if target.is_valid() and col < target.item.column_count():
                        self.set_data(target, text, Role.EDIT)
                begin_row += 1
        return True

    def mime_data(self, indexes: Iterable[ModelIndex]) -> dict[str, bytes]:
        records = []
        for index in indexes:
            if index.is_valid():
                value = self.data(index, Role.DISPLAY)
                text = "" if value is None else str(value)
                records.append((_item_id(index), index.row, index.column, text))
        return {MIME_TYPE: encode_items(records)}

    def mime_types(self) -> list[str]:
        return [MIME_TYPE]

    def supported_drop_actions(self) -> DropAction:
        return DropAction.COPY | DropAction.MOVE