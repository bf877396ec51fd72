"""Indented layer listings and per-layer PNG export for the layer viewer."""

from __future__ import annotations

from collections.abc import Sequence
from os import PathLike
from pathlib import Path

from psdkit.model import Layer
from psdkit.naming import indent_name, png_file_name

DEFAULT_EXPORT_DIR = "exportedPng.d"
_GROUP_INDENT = 2


def export_layer_images(
    layers: Sequence[Layer], export_dir: str | PathLike[str] = DEFAULT_EXPORT_DIR
) -> list[str]:
    """Store the image of every layer, top-most first, descending into groups.

    Layers without an image, and images that cannot be written, are skipped.
    Returns the paths of the PNG files written.
    """
    directory = Path(export_dir)
    stored: list[str] = []
    for layer in reversed(layers):
        if layer.is_group:
            stored.extend(export_layer_images(layer.layers or [], directory))
            continue
        if layer.image is None:
            continue
        try:
            path = layer.image.store_png(directory / png_file_name(layer.name))
        except OSError:
            continue
        stored.append(str(path))
    return stored


def _collect(
    layers: Sequence[Layer],
    directory: Path,
    level: int,
    names: list[str],
    images: list[str],
) -> None:
    for layer in reversed(layers):
        if layer.is_group:
            names.append(indent_name(layer.name, level))
            _collect(layer.layers or [], directory, level + _GROUP_INDENT, names, images)
        else:
            # Every plain layer exports the images of its whole sibling list.
            images.extend(export_layer_images(layers, directory))
            names.append(indent_name(layer.name, level))


def prepare_items(
    layers: Sequence[Layer] | None,
    export_dir: str | PathLike[str] = DEFAULT_EXPORT_DIR,
) -> tuple[list[str], list[str]]:
    """List layer names indented by depth and export their images.

    Names are listed top-most first; each group level adds two spaces of
    indentation. Returns ``(names, image_paths)``.
    """
    if layers is None:
        raise ValueError("the document has no layers")
    directory = Path(export_dir)
    directory.mkdir(parents=True, exist_ok=True)
    names: list[str] = []
    images: list[str] = []
    _collect(layers, directory, 0, names, images)
    return names, images