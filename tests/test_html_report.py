import pytest

from psdkit.html_report import HtmlReport, generate_html
from psdkit.model import Document, ImageData, Layer, Rect


def _image(value: int) -> ImageData:
    return ImageData(1, 1, bytes([value, 0, 0, 255]))


def _document(**kwargs) -> Document:
    layers = kwargs.pop(
        "layers",
        [
            Layer("a<b", rect=Rect(1, 2, 3, 4), image=_image(9)),
            Layer.group("G", [Layer("inner", image=_image(8))]),
        ],
    )
    return Document(4, 3, layers, overview=_image(1), **kwargs)


@pytest.fixture
def page(tmp_path):
    path = generate_html(_document(), "dir/art.psd", tmp_path)
    return path, path.read_text(encoding="utf-8")


def test_output_locations(page, tmp_path):
    path, _ = page
    assert path == tmp_path / "art_html" / "art.html"
    assert (tmp_path / "art_html" / "art.files").is_dir()


def test_document_frame(page):
    _, html = page
    assert html.startswith("<!DOCTYPE html>\n<html><head>")
    assert html.endswith("</body></html>\n")
    assert ".layer-canvas { width: 4px; height: 3px; }" in html
    assert "<title>art.psd</title>" in html
    assert 'href="art.files/psdhtml_styles.css"' in html
    assert 'src="art.files/psdhtml.js"' in html


def test_index_lists_layers_top_first(page):
    _, html = page
    group = html.index('<li class="toc-group">G<ul>')
    inner = html.index('<li><a href="#layer-name-inner.1.png">inner</a></li>')
    escaped = html.index('<li><a href="#layer-name-a_b.2.png">a&lt;b</a></li>')
    assert group < inner < escaped


def test_images_written_and_round_trip(page, tmp_path):
    files = tmp_path / "art_html" / "art.files"
    assert ImageData.from_png((files / "a_b.2.png").read_bytes()) == _image(9)
    assert ImageData.from_png((files / "inner.1.png").read_bytes()) == _image(8)
    assert ImageData.from_png((files / "__overview__.png").read_bytes()) == _image(1)


def test_rows_show_group_path_and_geometry(page):
    _, html = page
    assert '<div class="layer-canvas-header">G &gt; inner</div>' in html
    assert "<dd>(1, 2, 3, 4)<dd>" in html
    assert "@ 4 x 3</dd>" in html
    assert 'style="position: absolute; top: 2px; left: 1px;"' in html


def test_overview_row_uses_grid_and_layers_use_overview(page):
    _, html = page
    assert html.count("background-grid") == 1
    assert html.count('<img src="art.files/__overview__.png" class="background-overview" />') == 2
    assert html.count("is-a-layer") == 2


def test_layer_without_image_says_no_image(tmp_path):
    doc = _document(layers=[Layer("blank")])
    html = generate_html(doc, "art.psd", tmp_path).read_text(encoding="utf-8")
    assert '<div class="layer-no-image">No Image</div>' in html


def test_no_layers_means_no_index(tmp_path):
    doc = _document(layers=[])
    html = generate_html(doc, "art.psd", tmp_path).read_text(encoding="utf-8")
    assert 'id="toc"' not in html
    assert "content-container" not in html


def test_base_name_without_extension(tmp_path):
    report = HtmlReport(_document(), "plain", tmp_path)
    assert report.write() == tmp_path / "plain_html" / "plain.html"
    assert report.files_dir == "plain.files"


def test_write_is_repeatable(tmp_path):
    report = HtmlReport(_document(), "art.psd", tmp_path)
    first = report.write().read_text(encoding="utf-8")
    second = report.write().read_text(encoding="utf-8")
    assert first == second