"""Line and page arithmetic for laying code files out on pages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .models import CodeFile, Layout, PageRange


@dataclass(frozen=True)
class ContentSections:
    """Global line positions of the three excerpts of a shortened document."""

    first_section: int
    middle_start: int
    middle_end: int
    last_start: int
    total_lines: int


class Paginator:
    """Computes page counts, page ranges and excerpt sections."""

    def __init__(self, layout: Layout) -> None:
        self.layout = layout

    def total_lines(self, files: Sequence[CodeFile]) -> int:
        """Lines taken by all files: headers, content and separators between files."""
        files = list(files)
        layout = self.layout
        separators = max(len(files) - 1, 0) * layout.file_separator_lines
        body = sum(layout.compact_header_lines + len(f.lines) for f in files)
        return body + separators

    def total_pages(self, files: Sequence[CodeFile]) -> int:
        """Number of pages needed for all files."""
        lines = self.total_lines(files)
        per_page = self.layout.lines_per_page
        return (lines + per_page - 1) // per_page

    def page_ranges(self, files: Sequence[CodeFile]) -> list[PageRange]:
        """Split the files' content lines into per-page ranges."""
        per_page = self.layout.lines_per_page
        min_break = self.layout.min_lines_for_page_break
        ranges: list[PageRange] = []
        current = 0

        for index, code_file in enumerate(files):
            count = len(code_file.lines)
            start = 0
            while start < count:
                remaining = count - start
                take = min(per_page - current, remaining)
                if current > 0 and take < min_break and remaining > min_break:
                    current = 0
                    take = min(per_page, remaining)
                end = min(start + take - 1, count - 1)
                ranges.append(PageRange(index, start, end))
                start = end + 1
                current = (current + take) % per_page

        return ranges

    def content_sections(self, files: Sequence[CodeFile]) -> ContentSections:
        """Pick the first, middle and last excerpts for a shortened document."""
        total = self.total_lines(files)
        per_section = (self.layout.target_pages * self.layout.lines_per_page) // 3

        first = min(per_section, total)
        middle_start = max(0, total // 2 - per_section // 2)
        middle_end = min(total, middle_start + per_section)
        last_start = max(0, total - per_section)
        return ContentSections(first, middle_start, middle_end, last_start, total)