"""An HTML page that shows a document's overview and each of its layers."""

from __future__ import annotations

from os import PathLike
from pathlib import Path
from typing import TextIO

from psdkit.model import Document, ImageData, Layer, Rect
from psdkit.naming import to_ideal_file_name, to_safe_html

OVERVIEW_FILE = "__overview__.png"
STYLESHEET_FILE = "psdhtml_styles.css"
SCRIPT_FILE = "psdhtml.js"
JQUERY_FILE = "jquery.min.js"


def _base_name(file_name: str) -> str:
    dot = file_name.rfind(".")
    return file_name[:dot] if dot >= 0 else file_name


class HtmlReport:
    """Writes ``<base>_html/<base>.html`` and the layer images beside it."""

    def __init__(
        self,
        document: Document,
        source_path: str | PathLike[str],
        output_parent: str | PathLike[str] = ".",
    ):
        self.document = document
        self.source_path = Path(source_path)
        self.file_name = self.source_path.name
        self.base_name = _base_name(self.file_name)
        self.output_root = Path(output_parent) / f"{self.base_name}_html"
        self.files_dir = f"{self.base_name}.files"
        self.files_path = self.output_root / self.files_dir
        self.html_path = self.output_root / f"{self.base_name}.html"
        self._file_names: list[str] = []
        self._layer_names: list[str] = []
        self._group_names: list[str] = []
        self._layers_processed = 0
        self._groups_processed = 0
        self._rows_processed = 0
        self._dimension = ""
        self._background_overview = ""

    def write(self) -> Path:
        """Write the page and images; return the path of the HTML file."""
        self.output_root.mkdir(parents=True, exist_ok=True)
        self.files_path.mkdir(exist_ok=True)
        self._file_names = []
        self._layer_names = []
        self._group_names = []
        with open(self.html_path, "w", encoding="utf-8") as out:
            doc = self.document
            out.write(
                "<!DOCTYPE html>\n"
                "<html><head>"
                '<meta http-equiv="Content-Type" content="text/html; charset=utf-8" />'
                '<link rel="stylesheet" type="text/css" media="all" '
                f'href="{self.files_dir}/{STYLESHEET_FILE}" />'
                '<style type="text/css">'
                f".layer-canvas {{ width: {doc.width}px; height: {doc.height}px; }}"
                "</style>"
                f"<title>{self.file_name}</title></head><body>"
                '<div id="toolbox"><div id="go-toc" class="button">'
                '<a href="#toc">TOC</a></div></div>'
                '<div id="scroll-content">'
                f"<h1>{self.file_name}</h1>"
            )
            if doc.layers:
                self._write_index(out)
                self._write_content(out)
            out.write(
                "</div>"
                '<script type="text/javascript" '
                f'src="{self.files_dir}/{JQUERY_FILE}"></script>'
                '<script type="text/javascript" '
                f'src="{self.files_dir}/{SCRIPT_FILE}"></script>'
                "</body></html>\n"
            )
        return self.html_path

    def _write_index(self, out: TextIO) -> None:
        self._layers_processed = self._groups_processed = 0
        out.write(
            '<ul id="toc" class="toc-group">'
            f'<li><a href="#layer-name-{OVERVIEW_FILE}" id="toc-overview">Overview</a></li>'
        )
        self._index_layers(out, self.document.layers)
        out.write("</ul>")

    def _index_layers(self, out: TextIO, layers: list[Layer] | None) -> None:
        for layer in reversed(layers or []):
            name = to_safe_html(layer.name)
            if layer.is_group:
                self._groups_processed += 1
                self._group_names.append(name)
                out.write(f'<li class="toc-group">{name}<ul>')
                self._index_layers(out, layer.layers)
                out.write("</ul></li>")
            else:
                self._layers_processed += 1
                file_name = to_ideal_file_name(layer.name, self._layers_processed)
                self._file_names.append(file_name)
                self._layer_names.append(name)
                out.write(f'<li><a href="#layer-name-{file_name}">{name}</a></li>')

    def _write_content(self, out: TextIO) -> None:
        doc = self.document
        self._layers_processed = self._groups_processed = self._rows_processed = 0
        self._dimension = f"{doc.width} x {doc.height}"
        out.write('<div id="content-container"><table id="content"><tbody>')
        self._background_overview = ""
        self._write_row(out, doc.overview, doc.rect, "Overview", OVERVIEW_FILE)
        self._background_overview = (
            f'<img src="{self.files_dir}/{OVERVIEW_FILE}" class="background-overview" />'
        )
        self._content_layers(out, doc.layers, "")
        out.write("</tbody></table></div>")

    def _content_layers(self, out: TextIO, layers: list[Layer] | None, path: str) -> None:
        for layer in reversed(layers or []):
            if layer.is_group:
                group_name = self._group_names[self._groups_processed]
                self._groups_processed += 1
                self._content_layers(out, layer.layers, f"{path}{group_name} &gt; ")
            else:
                n = self._layers_processed
                self._write_row(
                    out, layer.image, layer.rect,
                    self._layer_names[n], self._file_names[n], path,
                )
                self._layers_processed += 1

    def _store(self, image: ImageData | None, file_name: str) -> bool:
        if image is None:
            return False
        try:
            image.store_png(self.files_path / file_name)
        except OSError:
            return False
        return True

    def _write_row(
        self,
        out: TextIO,
        image: ImageData | None,
        rect: Rect,
        title: str,
        file_name: str,
        layer_path: str = "",
    ) -> None:
        self._rows_processed += 1
        odd_or_even = "row-odd" if self._rows_processed else "row-even"
        out.write(
            f'<tr id="layer-name-{file_name}" class="layer-row {odd_or_even}">'
            '<td class="layer-image-container">'
            f'<div class="layer-canvas-header">{layer_path}{title}</div>'
        )
        if self._store(image, file_name):
            canvas = "is-a-layer" if self._background_overview else "background-grid"
            out.write(
                f'<div class="layer-canvas {canvas}">'
                f"{self._background_overview}"
                f'<img src="{self.files_dir}/{file_name}" class="layer-image" '
                f'style="position: absolute; top: {rect.top}px; left: {rect.left}px;" '
                f'title="{file_name}" alt="{title}" />'
                "</div>"
            )
        else:
            out.write('<div class="layer-no-image">No Image</div>')
        out.write(
            "</td>"
            '<td class="layer-info-container">'
            f'<div class="layer-name">{title}</div>'
            '<dl class="layer-properties">'
            "<dt>position (left, top, right, bottom)</dt>"
            f"<dd>({rect.left}, {rect.top}, {rect.right}, {rect.bottom})<dd>"
            "<dt>dimension (width x height)</dt>"
            f"<dd>{rect.width} x {rect.height} @ {self._dimension}</dd>"
            "</td>"
            "</tr>"
        )


def generate_html(
    document: Document,
    source_path: str | PathLike[str],
    output_parent: str | PathLike[str] = ".",
) -> Path:
    """Write the HTML report for ``document``; return the HTML file's path."""
    return HtmlReport(document, source_path, output_parent).write()