"""Discovery and loading of source files under a directory tree."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator

from .models import CodeFile, Layout

logger = logging.getLogger(__name__)

SKIP_DIRS = frozenset(
    {
        "node_modules",
        ".git",
        "vendor",
        "target",
        "__pycache__",
        ".next",
        "build",
        "dist",
        "bin",
        "obj",
        ".dart_tool",
        ".packages",
    }
)


def _extension(name: str) -> str:
    dot = name.rfind(".")
    return name[dot:].lower() if dot >= 0 else ""


def _split_lines(text: str) -> list[str]:
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _page_count(line_count: int, layout: Layout) -> int:
    total = line_count + layout.compact_header_lines + layout.file_separator_lines
    pages = (total + layout.lines_per_page - 1) // layout.lines_per_page
    return pages or 1


def read_code_file(path: str | os.PathLike[str], layout: Layout) -> CodeFile | None:
    """Load one file; return None when it holds no lines."""
    path = Path(path)
    text = path.read_bytes().decode("utf-8", errors="replace")
    lines = _split_lines(text)
    if not lines:
        logger.warning("Skipped empty file: %s", path.name)
        return None
    return CodeFile(
        file_name=path.name,
        extension=_extension(path.name),
        lines=tuple(lines),
        page_count=_page_count(len(lines), layout),
    )


class FileScanner:
    """Walks a directory tree and collects supported, non-excluded files."""

    def __init__(
        self,
        layout: Layout,
        extensions: Iterable[str],
        is_excluded: Callable[[str], bool] | None = None,
    ) -> None:
        self.layout = layout
        self.extensions = frozenset(ext.lower() for ext in extensions)
        self.is_excluded = is_excluded or (lambda _name: False)
        self.excluded_count = 0

    def scan(self, root: str | os.PathLike[str]) -> list[CodeFile]:
        """Return the collected files sorted by file name."""
        root = Path(root)
        if not root.exists() and not root.is_symlink():
            raise FileNotFoundError(f"no such file or directory: {root}")

        self.excluded_count = 0
        files: list[CodeFile] = []
        for path in self._walk(root):
            code_file = self._handle_file(path)
            if code_file is not None:
                files.append(code_file)

        files.sort(key=lambda f: f.file_name)
        self._log_summary(files)
        return files

    def _walk(self, root: Path) -> Iterator[Path]:
        if root.is_symlink() or not root.is_dir():
            yield root
            return
        if root.name in SKIP_DIRS:
            return
        yield from self._walk_dir(root)

    def _walk_dir(self, directory: Path) -> Iterator[Path]:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                if entry.name not in SKIP_DIRS:
                    yield from self._walk_dir(Path(entry.path))
            else:
                yield Path(entry.path)

    def _handle_file(self, path: Path) -> CodeFile | None:
        if _extension(path.name) not in self.extensions:
            return None
        if self.is_excluded(path.name):
            logger.info("Excluded: %s (sensitive file)", path.name)
            self.excluded_count += 1
            return None
        try:
            code_file = read_code_file(path, self.layout)
        except OSError as exc:
            logger.error("Error processing %s: %s", path, exc)
            return None
        if code_file is not None:
            logger.info("Added: %s", path.name)
        return code_file

    def _log_summary(self, files: list[CodeFile]) -> None:
        logger.info("Files included: %d", len(files))
        logger.info("Files excluded: %d", self.excluded_count)
        logger.info("Total processed: %d", len(files) + self.excluded_count)
        for code_file in files:
            logger.info("  - %s (%d lines)", code_file.file_name, len(code_file.lines))