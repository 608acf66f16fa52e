# codeprint

`codeprint` gathers the source files of a project and lays them out as a
compact Word (`.docx`) document, the kind of listing handed in when
registering a program's source code. Each file gets a short header (name,
language and line count). Its lines are numbered, and a thin rule separates
one file from the next. A smart page break keeps a file from starting near
the bottom of a page when most of that page is already used.

When the listing runs past 100 pages, a second, shortened document is written
as well. It holds three slices of the content, taken from the start, the
middle and the end, sized from the layout's target page count.

It needs nothing outside the Python standard library (3.10 or later).

## What it does

- Walks a directory tree in name order and skips build and tool directories:
  `node_modules`, `.git`, `vendor`, `target`, `__pycache__`, `.next`,
  `build`, `dist`, `bin`, `obj`, `.dart_tool` and `.packages`.
- Picks up files whose extension (compared case-insensitively) is in the set
  you give. An optional predicate on the file name can leave out sensitive
  files; the scanner counts them in `excluded_count`.
- Skips empty files and sorts the rest by file name.
- Works out page counts, page ranges and the three slices for the shortened
  document from a fixed number of lines per page.
- Writes A4 portrait documents with a right-aligned "Trang N / M" footer
  built from Word's `PAGE` and `NUMPAGES` fields. Code lines longer than
  120 bytes are cut and end with `...`.

Progress is reported through the standard `logging` module (loggers
`codeprint.scanner` and `codeprint.generator`).

## Building blocks

| Name | Module | Role |
| --- | --- | --- |
| `Layout` | `codeprint.models` | Page geometry: `lines_per_page`, `min_lines_for_page_break`, `compact_header_lines`, `file_separator_lines`, `target_pages` |
| `CodeFile` | `codeprint.models` | One source file: name, extension, lines and page count; `content` joins the lines and `header_text()` gives its heading |
| `PageRange` | `codeprint.models` | A run of lines from one file that falls on one page |
| `Paginator` | `codeprint.paginator` | `total_lines`, `total_pages`, `page_ranges` and `content_sections` for a list of files |
| `ContentSections` | `codeprint.paginator` | The first, middle and last slices used by the shortened document |
| `FileScanner` | `codeprint.scanner` | Walks a directory and returns the included files as `CodeFile` objects |
| `read_code_file` | `codeprint.scanner` | Reads a single file into a `CodeFile`, or `None` if it is empty |
| `WordDocument`, `Paragraph`, `Run`, `FieldCode` | `codeprint.generator` | A small `.docx` writer |
| `DocumentGenerator` | `codeprint.generator` | Builds the full and shortened documents and saves them |

## Example

`Layout` has no defaults; every value is given explicitly and checked
(`lines_per_page` must be positive, the rest must not be negative).

```python
from codeprint.models import Layout
from codeprint.scanner import FileScanner
from codeprint.generator import DocumentGenerator

layout = Layout(
    lines_per_page=50,
    min_lines_for_page_break=10,
    compact_header_lines=2,
    file_separator_lines=1,
    target_pages=60,
)
sensitive = {"program.cs", "appsettings.json"}

scanner = FileScanner(
    layout,
    extensions={".cs", ".dart"},
    is_excluded=lambda name: name.lower() in sensitive or "secret" in name.lower(),
)
files = scanner.scan("./src")

generator = DocumentGenerator(layout, "copyright_documents")
saved_paths = generator.generate(files)
```

`scan` raises `FileNotFoundError` if the root does not exist. `generate`
raises `ValueError` if `files` is empty and returns the paths it wrote. The
file names are `source_code_full_optimized_<timestamp>.docx` and, past 100
pages, `source_code_shortened_optimized_<timestamp>.docx`, with the timestamp
to the second.

To build a document without saving it, call `full_document` or
`shortened_document`; they return a `WordDocument`, which has `to_xml()` and
`save(path)`.

To check the size of the output before writing anything, use the paginator:

```python
from codeprint.paginator import Paginator

paginator = Paginator(layout)
print(paginator.total_pages(files))
sections = paginator.content_sections(files)
```

## What it does not do

There is no command-line program; the package is used from Python code.
It has no built-in list of sensitive files or name patterns and reads no
settings from the environment or a `.env` file: the layout, the extensions
and the exclusion predicate all come from the caller.

## Tests

The test suite uses pytest, available through the `test` extra:

```
pip install -e ".[test]"
pytest
```