import struct
import zlib

import pytest

from psdkit.model import PNG_SIGNATURE, Document, ImageData, Layer, Rect


def _pixels(width, height):
    return bytes((i * 7) % 256 for i in range(width * height * 4))


def test_rect_dimensions():
    rect = Rect(10, 20, 30, 70)
    assert rect.width == 20
    assert rect.height == 50


def test_png_starts_with_signature_and_header():
    image = ImageData(3, 2, _pixels(3, 2))
    png = image.to_png()
    assert png[:8] == b"\x89PNG\r\n\x1a\n"
    assert png[12:16] == b"IHDR"
    assert struct.unpack(">II", png[16:24]) == (3, 2)
    assert png.endswith(b"IEND\xaeB`\x82")


def test_png_round_trip():
    image = ImageData(5, 4, _pixels(5, 4))
    assert ImageData.from_png(image.to_png()) == image


def test_store_png(tmp_path):
    image = ImageData(2, 2, _pixels(2, 2))
    path = image.store_png(tmp_path / "layer.png")
    assert path.read_bytes() == image.to_png()
    assert ImageData.from_png(path.read_bytes()) == image


def test_wrong_pixel_count_rejected():
    with pytest.raises(ValueError):
        ImageData(2, 2, b"\x00" * 15)


def test_empty_image_rejected():
    with pytest.raises(ValueError):
        ImageData(0, 1, b"")


def test_not_png_rejected():
    with pytest.raises(ValueError):
        ImageData.from_png(b"GIF89a")


def test_bad_crc_rejected():
    png = bytearray(ImageData(1, 1, b"\x01\x02\x03\x04").to_png())
    png[20] ^= 0xFF
    with pytest.raises(ValueError):
        ImageData.from_png(bytes(png))


def _chunk(kind, body):
    return (
        struct.pack(">I", len(body))
        + kind
        + body
        + struct.pack(">I", zlib.crc32(kind + body) & 0xFFFFFFFF)
    )


def test_decode_sub_filtered_row():
    raw = bytes([1, 10, 20, 30, 40, 5, 5, 5, 5])
    png = (
        PNG_SIGNATURE
        + _chunk(b"IHDR", struct.pack(">IIBBBBB", 2, 1, 8, 6, 0, 0, 0))
        + _chunk(b"IDAT", zlib.compress(raw))
        + _chunk(b"IEND", b"")
    )
    image = ImageData.from_png(png)
    assert image.pixels == bytes([10, 20, 30, 40, 15, 25, 35, 45])


def test_layer_and_group():
    leaf = Layer("leaf", Rect(0, 0, 1, 1))
    group = Layer.group("folder", [leaf])
    assert not leaf.is_group
    assert group.is_group
    assert group.layers == [leaf]


def test_document_rect():
    doc = Document(640, 480)
    assert doc.rect == Rect(0, 0, 640, 480)
    assert doc.layers == []
    assert doc.overview is None