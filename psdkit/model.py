"""The layered document that the exporters work on."""

from __future__ import annotations

import struct
import zlib
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

_BYTES_PER_PIXEL = 4
_COLOR_TYPE_RGBA = 6
_BIT_DEPTH = 8


@dataclass(frozen=True)
class Rect:
    """A rectangle given by its left, top, right and bottom edges."""

    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top


def _chunk(kind: bytes, body: bytes) -> bytes:
    crc = zlib.crc32(kind + body) & 0xFFFFFFFF
    return struct.pack(">I", len(body)) + kind + body + struct.pack(">I", crc)


def _paeth(a: int, b: int, c: int) -> int:
    p = a + b - c
    pa, pb, pc = abs(p - a), abs(p - b), abs(p - c)
    if pa <= pb and pa <= pc:
        return a
    if pb <= pc:
        return b
    return c


def _unfilter(kind: int, row: bytes, prior: bytes) -> bytearray:
    out = bytearray(row)
    bpp = _BYTES_PER_PIXEL
    if kind == 0:
        return out
    for i, value in enumerate(row):
        left = out[i - bpp] if i >= bpp else 0
        up = prior[i]
        upper_left = prior[i - bpp] if i >= bpp else 0
        if kind == 1:
            predictor = left
        elif kind == 2:
            predictor = up
        elif kind == 3:
            predictor = (left + up) // 2
        elif kind == 4:
            predictor = _paeth(left, up, upper_left)
        else:
            raise ValueError(f"unknown PNG filter type {kind}")
        out[i] = (value + predictor) & 0xFF
    return out


@dataclass(frozen=True)
class ImageData:
    """Straight RGBA pixels, 8 bits per channel, rows top to bottom."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("image dimensions must be positive")
        pixels = bytes(self.pixels)
        expected = self.width * self.height * _BYTES_PER_PIXEL
        if len(pixels) != expected:
            raise ValueError(
                f"expected {expected} bytes of RGBA pixels, got {len(pixels)}"
            )
        object.__setattr__(self, "pixels", pixels)

    def to_png(self) -> bytes:
        """Encode the pixels as a PNG file."""
        stride = self.width * _BYTES_PER_PIXEL
        raw = b"".join(
            b"\x00" + self.pixels[start : start + stride]
            for start in range(0, len(self.pixels), stride)
        )
        header = struct.pack(
            ">IIBBBBB", self.width, self.height, _BIT_DEPTH, _COLOR_TYPE_RGBA, 0, 0, 0
        )
        return (
            PNG_SIGNATURE
            + _chunk(b"IHDR", header)
            + _chunk(b"IDAT", zlib.compress(raw))
            + _chunk(b"IEND", b"")
        )

    def store_png(self, path: str | PathLike[str]) -> Path:
        """Write the image as a PNG file and return its path."""
        target = Path(path)
        target.write_bytes(self.to_png())
        return target

    @classmethod
    def from_png(cls, data: bytes) -> ImageData:
        """Decode an 8-bit RGBA, non-interlaced PNG file."""
        if not data.startswith(PNG_SIGNATURE):
            raise ValueError("not a PNG file")
        offset = len(PNG_SIGNATURE)
        header: tuple[int, ...] | None = None
        compressed = bytearray()
        while offset < len(data):
            if offset + 8 > len(data):
                raise ValueError("truncated PNG chunk")
            length, kind = struct.unpack_from(">I4s", data, offset)
            body_start = offset + 8
            body_end = body_start + length
            if body_end + 4 > len(data):
                raise ValueError("truncated PNG chunk")
            body = data[body_start:body_end]
            (crc,) = struct.unpack_from(">I", data, body_end)
            if zlib.crc32(kind + body) & 0xFFFFFFFF != crc:
                raise ValueError(f"bad CRC in {kind.decode('latin-1')} chunk")
            offset = body_end + 4
            if kind == b"IHDR":
                header = struct.unpack(">IIBBBBB", body)
            elif kind == b"IDAT":
                compressed += body
            elif kind == b"IEND":
                break
        if header is None:
            raise ValueError("PNG file has no header chunk")
        width, height, depth, color_type, _, _, interlace = header
        if depth != _BIT_DEPTH or color_type != _COLOR_TYPE_RGBA or interlace:
            raise ValueError("only 8-bit non-interlaced RGBA PNG files are supported")
        raw = zlib.decompress(bytes(compressed))
        stride = width * _BYTES_PER_PIXEL
        if len(raw) != (stride + 1) * height:
            raise ValueError("PNG image data has the wrong size")
        prior = bytes(stride)
        rows = []
        for start in range(0, len(raw), stride + 1):
            row = _unfilter(raw[start], raw[start + 1 : start + 1 + stride], prior)
            rows.append(bytes(row))
            prior = bytes(row)
        return cls(width, height, b"".join(rows))


@dataclass
class Layer:
    """A layer of the document, or a group of layers when ``layers`` is set.

    Child layers are kept in file order, bottom-most first.
    """

    name: str
    rect: Rect = field(default_factory=Rect)
    image: ImageData | None = None
    layers: list[Layer] | None = None

    @property
    def is_group(self) -> bool:
        return self.layers is not None

    @classmethod
    def group(cls, name: str, layers: list[Layer]) -> Layer:
        return cls(name, layers=list(layers))


@dataclass
class Document:
    """A layered image: its canvas size, its layers and a flattened overview."""

    width: int
    height: int
    layers: list[Layer] = field(default_factory=list)
    overview: ImageData | None = None

    @property
    def rect(self) -> Rect:
        return Rect(0, 0, self.width, self.height)