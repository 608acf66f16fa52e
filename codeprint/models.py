"""Data types shared by the scanner, paginator and document generator."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Layout:
    """Page layout settings that drive pagination and page counts."""

    lines_per_page: int
    min_lines_for_page_break: int
    compact_header_lines: int
    file_separator_lines: int
    target_pages: int

    def __post_init__(self) -> None:
        if self.lines_per_page <= 0:
            raise ValueError("lines_per_page must be positive")
        for name in (
            "min_lines_for_page_break",
            "compact_header_lines",
            "file_separator_lines",
            "target_pages",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")


@dataclass(frozen=True)
class CodeFile:
    """A source file loaded for printing."""

    file_name: str
    extension: str
    lines: tuple[str, ...] = field(default_factory=tuple)
    page_count: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", tuple(self.lines))

    @property
    def content(self) -> str:
        """The file's text, each line terminated by a newline."""
        return "".join(f"{line}\n" for line in self.lines)

    def header_text(self) -> str:
        """The compact one-line heading printed above the file."""
        kind = self.extension[1:].upper()
        return f"📄 {self.file_name} ({kind}, {len(self.lines)} lines)"


@dataclass(frozen=True)
class PageRange:
    """A run of lines of one file that lands on a single page."""

    file_index: int
    start_line: int
    end_line: int
    pages: int = 1