import pytest

from codeprint.models import Layout
from codeprint.scanner import FileScanner, read_code_file


@pytest.fixture
def layout():
    return Layout(
        lines_per_page=10,
        min_lines_for_page_break=3,
        compact_header_lines=2,
        file_separator_lines=1,
        target_pages=3,
    )


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8"))
    return path


def test_read_code_file_splits_lines(tmp_path, layout):
    path = write(tmp_path / "Main.cs", "one\ntwo\nthree")
    code_file = read_code_file(path, layout)
    assert code_file.file_name == "Main.cs"
    assert code_file.extension == ".cs"
    assert code_file.lines == ("one", "two", "three")
    assert code_file.content == "one\ntwo\nthree\n"


def test_read_code_file_strips_carriage_returns(tmp_path, layout):
    path = write(tmp_path / "a.cs", "x\r\ny\r\n")
    assert read_code_file(path, layout).lines == ("x", "y")


def test_read_code_file_keeps_blank_lines(tmp_path, layout):
    path = write(tmp_path / "a.cs", "x\n\ny\n")
    assert read_code_file(path, layout).lines == ("x", "", "y")


def test_read_code_file_empty_returns_none(tmp_path, layout):
    path = write(tmp_path / "empty.cs", "")
    assert read_code_file(path, layout) is None


@pytest.mark.parametrize("count", [1, 7, 8, 20, 33])
def test_page_count_covers_file(tmp_path, layout, count):
    path = write(tmp_path / "a.cs", "x\n" * count)
    code_file = read_code_file(path, layout)
    needed = count + layout.compact_header_lines + layout.file_separator_lines
    assert code_file.page_count >= 1
    assert code_file.page_count * layout.lines_per_page >= needed
    assert (code_file.page_count - 1) * layout.lines_per_page < needed


def test_scan_collects_supported_files_sorted(tmp_path, layout):
    write(tmp_path / "sub" / "b.cs", "b\n")
    write(tmp_path / "a.dart", "a\n")
    write(tmp_path / "notes.txt", "ignored\n")
    scanner = FileScanner(layout, [".cs", ".dart"])
    files = scanner.scan(tmp_path)
    assert [f.file_name for f in files] == ["a.dart", "b.cs"]


def test_scan_matches_extension_case_insensitively(tmp_path, layout):
    write(tmp_path / "Upper.CS", "x\n")
    files = FileScanner(layout, [".cs"]).scan(tmp_path)
    assert [(f.file_name, f.extension) for f in files] == [("Upper.CS", ".cs")]


def test_scan_skips_known_directories(tmp_path, layout):
    write(tmp_path / "node_modules" / "dep.cs", "x\n")
    write(tmp_path / "bin" / "out.cs", "x\n")
    write(tmp_path / "src" / "keep.cs", "x\n")
    files = FileScanner(layout, [".cs"]).scan(tmp_path)
    assert [f.file_name for f in files] == ["keep.cs"]


def test_scan_counts_excluded_files(tmp_path, layout):
    write(tmp_path / "secrets.cs", "x\n")
    write(tmp_path / "app.cs", "x\n")
    scanner = FileScanner(layout, [".cs"], lambda name: name == "secrets.cs")
    files = scanner.scan(tmp_path)
    assert [f.file_name for f in files] == ["app.cs"]
    assert scanner.excluded_count == 1


def test_exclusion_only_counts_supported_extensions(tmp_path, layout):
    write(tmp_path / "a.txt", "x\n")
    write(tmp_path / "b.cs", "x\n")
    scanner = FileScanner(layout, [".cs"], lambda name: True)
    assert scanner.scan(tmp_path) == []
    assert scanner.excluded_count == 1


def test_scan_skips_empty_files(tmp_path, layout):
    write(tmp_path / "empty.cs", "")
    write(tmp_path / "full.cs", "x\n")
    files = FileScanner(layout, [".cs"]).scan(tmp_path)
    assert [f.file_name for f in files] == ["full.cs"]


def test_scan_resets_between_runs(tmp_path, layout):
    write(tmp_path / "a.cs", "x\n")
    scanner = FileScanner(layout, [".cs"], lambda name: True)
    scanner.scan(tmp_path)
    scanner.scan(tmp_path)
    assert scanner.excluded_count == 1


def test_scan_missing_root_raises(tmp_path, layout):
    with pytest.raises(FileNotFoundError):
        FileScanner(layout, [".cs"]).scan(tmp_path / "missing")


def test_scan_accepts_single_file_root(tmp_path, layout):
    path = write(tmp_path / "one.cs", "x\ny\n")
    files = FileScanner(layout, [".cs"]).scan(path)
    assert [f.lines for f in files] == [("x", "y")]


def test_scan_root_named_like_skipped_dir_yields_nothing(tmp_path, layout):
    write(tmp_path / "build" / "a.cs", "x\n")
    assert FileScanner(layout, [".cs"]).scan(tmp_path / "build") == []