import dataclasses

import pytest

from codeprint.models import CodeFile, Layout, PageRange


def make_layout(**overrides):
    values = dict(
        lines_per_page=50,
        min_lines_for_page_break=10,
        compact_header_lines=2,
        file_separator_lines=1,
        target_pages=30,
    )
    values.update(overrides)
    return Layout(**values)


def test_header_text_format():
    code_file = CodeFile("main.cs", ".cs", ["a", "b", "c"])
    assert code_file.header_text() == "📄 main.cs (CS, 3 lines)"


def test_header_text_uppercases_extension():
    code_file = CodeFile("app.dart", ".dart", ["x"])
    assert "(DART, 1 lines)" in code_file.header_text()


def test_content_joins_lines_with_newlines():
    code_file = CodeFile("a.cs", ".cs", ["first", "second"])
    assert code_file.content == "first\nsecond\n"
    assert code_file.content.splitlines() == list(code_file.lines)


def test_lines_are_stored_as_tuple():
    code_file = CodeFile("a.cs", ".cs", ["x", "y"])
    assert code_file.lines == ("x", "y")


def test_code_file_is_frozen():
    code_file = CodeFile("a.cs", ".cs", ["x"])
    with pytest.raises(dataclasses.FrozenInstanceError):
        code_file.file_name = "b.cs"
    assert code_file.file_name == "a.cs"
    assert code_file.header_text() == "📄 a.cs (CS, 1 lines)"


def test_page_range_defaults_to_one_page():
    page_range = PageRange(file_index=2, start_line=5, end_line=9)
    assert page_range.pages == 1
    assert (page_range.file_index, page_range.start_line, page_range.end_line) == (2, 5, 9)


def test_layout_rejects_non_positive_page_size():
    with pytest.raises(ValueError):
        make_layout(lines_per_page=0)


@pytest.mark.parametrize(
    "name",
    ["min_lines_for_page_break", "compact_header_lines", "file_separator_lines", "target_pages"],
)
def test_layout_rejects_negative_values(name):
    with pytest.raises(ValueError):
        make_layout(**{name: -1})


def test_layout_keeps_values():
    layout = make_layout(lines_per_page=42)
    assert layout.lines_per_page == 42