# psdkit

A library for working with the layer structure of layered image documents.

- **Document model** – `psdkit.model` holds `Document` (canvas size, layers,
  optional flattened `overview`), `Layer` (a plain layer with a `Rect` and an
  optional `ImageData`, or a group made with `Layer.group`), `Rect` and
  `ImageData`. `ImageData` keeps 8-bit RGBA pixels and can encode them as PNG
  (`to_png`, `store_png`) and decode 8-bit non-interlaced RGBA PNG files
  (`ImageData.from_png`).
- **HTML layer reports** – `psdkit.html_report.generate_html(document,
  source_path, output_parent=".")`, or the `HtmlReport` class, writes
  `<base>_html/<base>.html` with a table of contents, an overview row and one
  row per layer giving its position and size, and stores the overview and
  layer images as PNG files in `<base>_html/<base>.files/`.
- **Layer listings** – `psdkit.layer_listing.prepare_items(layers,
  export_dir="exportedPng.d")` returns the layer names top-most first,
  indented by two spaces per group level, together with the paths of the PNG
  files it exported; `export_layer_images` does only the export.
- **Tree models** – `psdkit.layer_tree.LayerTreeModel` builds a tree from
  space-indented lines (a deeper line becomes a child of the line above) and
  gives row/column access through `ModelIndex` values, with `insert_rows`,
  `remove_rows` and `set_data`. `psdkit.dragdrop.LayerDragDropModel` adds
  drag-and-drop: `mime_data` serialises rows and `drop_mime_data` inserts
  them; `encode_items` / `decode_items` handle the byte format.
- **Option scanning** – `psdkit.argscan` offers GNU-style command-line
  parsing: short option strings such as `"abc:d::"`, long options
  (`psdkit.longopts.LongOption`) with unique-prefix abbreviation
  (`psdkit.longmatch.find_long_option`), `--name=value`, `-W name`, and the
  permute, require-order and return-in-order modes. `getopt`, `getopt_long`
  and `getopt_long_only` return `(options, remaining_arguments)`; the
  `Getopt` class scans step by step and writes error messages to stderr
  unless `opterr=False` or the option string starts with `:`.

## Naming helpers

```python
from psdkit.naming import to_safe_html, to_ideal_file_name, indent_name

to_safe_html('Logo <main> & "text"')
# 'Logo &lt;main&gt; &amp; &quot;text&quot;'

to_ideal_file_name("Header/Title", 3)
# 'Header_Title.3.png'

indent_name("Button", 2)
# '  Button'
```

## Building a layer tree

```python
from psdkit.layer_tree import LayerTreeModel, ModelIndex

model = LayerTreeModel([
    "Background",
    "Toolbar",
    "  Button",
    "  Label",
])
root = ModelIndex()
model.row_count(root)            # 2 top-level rows
toolbar = model.index(1, 0, root)
model.row_count(toolbar)         # 2 children
```

## Scanning options

```python
from psdkit.argscan import getopt_long
from psdkit.longopts import HasArg, LongOption

options, rest = getopt_long(
    ["prog", "input.psd", "-a", "--file=out.html"],
    "ab",
    [LongOption("file", HasArg.REQUIRED, val="f")],
)
# options == [("a", None), ("f", "out.html")]
# rest == ["input.psd"]
```

## What it does not do

- It does not read layered image files. A `Document` and its `Layer`s must be
  built in code; image data comes from RGBA pixels or PNG files.
- It installs no command-line program and has no graphical viewer.
- The HTML page links a stylesheet (`psdhtml_styles.css`) and scripts
  (`jquery.min.js`, `psdhtml.js`) in the `.files` directory, but the report
  does not write them; supply them yourself if the page should be styled.

## Requirements

Python 3.10 or later; no third-party dependencies.