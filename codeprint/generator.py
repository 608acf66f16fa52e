"""Builds Word (.docx) documents that print code files page by page."""

from __future__ import annotations

import logging
import re
import zipfile
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Sequence
from xml.sax.saxutils import escape

from .models import CodeFile, Layout
from .paginator import Paginator

logger = logging.getLogger(__name__)

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
R_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
_PKG_REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
_CT_NS = "http://schemas.openxmlformats.org/package/2006/content-types"
_WML_CT = "application/vnd.openxmlformats-officedocument.wordprocessingml"

GRAY = "808080"
BLUE = "0000FF"
LIGHT_GRAY = "D3D3D3"
BLACK = "000000"

MAX_LINE_BYTES = 120
SEPARATOR_TEXT = "─" * 60
FULL_PAGE_LIMIT = 100

_INVALID_XML = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def _xml_text(text: str) -> str:
    return escape(_INVALID_XML.sub("", text), {'"': "&quot;"})


class FieldCode(str, Enum):
    """Word fields that can be placed in a run."""

    CURRENT_PAGE = "PAGE"
    NUMBER_OF_PAGES = "NUMPAGES"


@dataclass
class Run:
    """A stretch of text sharing one set of character properties."""

    text: str = ""
    font: str | None = None
    size: float | None = None
    color: str | None = None
    bold: bool = False
    field_code: FieldCode | None = None
    page_break: bool = False

    def _properties_xml(self) -> str:
        parts = []
        if self.font:
            font = _xml_text(self.font)
            parts.append(f'<w:rFonts w:ascii="{font}" w:hAnsi="{font}" w:cs="{font}"/>')
        if self.bold:
            parts.append("<w:b/>")
        if self.color:
            parts.append(f'<w:color w:val="{_xml_text(self.color)}"/>')
        if self.size is not None:
            half_points = int(round(self.size * 2))
            parts.append(f'<w:sz w:val="{half_points}"/><w:szCs w:val="{half_points}"/>')
        return f"<w:rPr>{''.join(parts)}</w:rPr>" if parts else ""

    def to_xml(self) -> str:
        """The run as a WordprocessingML element."""
        if self.page_break:
            body = '<w:br w:type="page"/>'
        elif self.field_code is not None:
            body = (
                '<w:fldChar w:fldCharType="begin"/>'
                f'<w:instrText xml:space="preserve"> {self.field_code.value} </w:instrText>'
                '<w:fldChar w:fldCharType="end"/>'
            )
        else:
            body = f'<w:t xml:space="preserve">{_xml_text(self.text)}</w:t>'
        return f"<w:r>{self._properties_xml()}{body}</w:r>"


@dataclass
class Paragraph:
    """A paragraph made of runs."""

    runs: list[Run] = field(default_factory=list)
    alignment: str | None = None

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)

    @property
    def is_page_break(self) -> bool:
        return any(run.page_break for run in self.runs)

    def to_xml(self) -> str:
        """The paragraph as a WordprocessingML element."""
        props = f'<w:pPr><w:jc w:val="{self.alignment}"/></w:pPr>' if self.alignment else ""
        return f"<w:p>{props}{''.join(run.to_xml() for run in self.runs)}</w:p>"


class WordDocument:
    """A minimal single-section A4 portrait Word document."""

    PAGE_WIDTH_TWIPS = 11906
    PAGE_HEIGHT_TWIPS = 16838
    MARGIN_TWIPS = 1440

    def __init__(self) -> None:
        self.paragraphs: list[Paragraph] = []
        self.footer: list[Paragraph] = []

    def add_paragraph(self, *args: Run | str) -> Paragraph:
        """Append a paragraph built from runs or plain strings."""
        runs = []
        for item in args:
            if isinstance(item, Run):
                runs.append(item)
            elif isinstance(item, str):
                runs.append(Run(item))
            else:
                raise TypeError(f"expected Run or str, got {type(item).__name__}")
        paragraph = Paragraph(runs)
        self.paragraphs.append(paragraph)
        return paragraph

    def add_page_break(self) -> Paragraph:
        """Append a paragraph holding a page break."""
        return self.add_paragraph(Run(page_break=True))

    def _section_xml(self) -> str:
        footer_ref = (
            '<w:footerReference w:type="default" r:id="rIdFooter1"/>' if self.footer else ""
        )
        m = self.MARGIN_TWIPS
        return (
            f"<w:sectPr>{footer_ref}"
            f'<w:pgSz w:w="{self.PAGE_WIDTH_TWIPS}" w:h="{self.PAGE_HEIGHT_TWIPS}"'
            ' w:orient="portrait"/>'
            f'<w:pgMar w:top="{m}" w:right="{m}" w:bottom="{m}" w:left="{m}"'
            ' w:header="720" w:footer="720" w:gutter="0"/>'
            "</w:sectPr>"
        )

    def to_xml(self) -> str:
        """The main document part (word/document.xml)."""
        body = "".join(p.to_xml() for p in self.paragraphs)
        return (
            '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
            f'<w:document xmlns:w="{W_NS}" xmlns:r="{R_NS}">'
            f"<w:body>{body}{self._section_xml()}</w:body></w:document>"
        )

    def _footer_xml(self) -> str:
        body = "".join(p.to_xml() for p in self.footer)
        return (
            '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
            f'<w:ftr xmlns:w="{W_NS}" xmlns:r="{R_NS}">{body}</w:ftr>'
        )

    def _content_types_xml(self) -> str:
        footer = (
            '<Override PartName="/word/footer1.xml"'
            f' ContentType="{_WML_CT}.footer+xml"/>'
            if self.footer
            else ""
        )
        return (
            '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
            f'<Types xmlns="{_CT_NS}">'
            '<Default Extension="rels"'
            ' ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
            '<Default Extension="xml" ContentType="application/xml"/>'
            '<Override PartName="/word/document.xml"'
            f' ContentType="{_WML_CT}.document.main+xml"/>'
            f"{footer}</Types>"
        )

    def _document_rels_xml(self) -> str:
        footer = (
            f'<Relationship Id="rIdFooter1" Type="{R_NS}/footer" Target="footer1.xml"/>'
            if self.footer
            else ""
        )
        return (
            '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
            f'<Relationships xmlns="{_PKG_REL_NS}">{footer}</Relationships>'
        )

    def save(self, path: str | Path) -> None:
        """Write the document as a .docx package."""
        package_rels = (
            '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
            f'<Relationships xmlns="{_PKG_REL_NS}">'
            f'<Relationship Id="rId1" Type="{R_NS}/officeDocument"'
            ' Target="word/document.xml"/></Relationships>'
        )
        with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as archive:
            archive.writestr("[Content_Types].xml", self._content_types_xml())
            archive.writestr("_rels/.rels", package_rels)
            archive.writestr("word/document.xml", self.to_xml())
            archive.writestr("word/_rels/document.xml.rels", self._document_rels_xml())
            if self.footer:
                archive.writestr("word/footer1.xml", self._footer_xml())


def _truncate(line: str) -> str:
    raw = line.encode("utf-8")
    if len(raw) <= MAX_LINE_BYTES:
        return line
    return raw[:MAX_LINE_BYTES].decode("utf-8", errors="ignore") + "..."


class DocumentGenerator:
    """Lays code files out into full and shortened Word documents."""

    def __init__(self, layout: Layout, output_dir: str | Path = "copyright_documents") -> None:
        self.layout = layout
        self.output_dir = Path(output_dir)
        self.paginator = Paginator(layout)

    def generate(self, files: Sequence[CodeFile]) -> list[Path]:
        """Save the full document, plus a shortened one past 100 pages."""
        files = list(files)
        if not files:
            raise ValueError("no .cs or .dart files found")

        total_pages = self.paginator.total_pages(files)
        self._log_statistics(files, total_pages)

        if total_pages <= FULL_PAGE_LIMIT:
            logger.info("<=%d pages - creating full document", FULL_PAGE_LIMIT)
            return [self._save(self.full_document(files), "full_optimized")]

        logger.info(
            ">%d pages - creating full (%d pages) and shortened (%d pages) documents",
            FULL_PAGE_LIMIT,
            total_pages,
            self.layout.target_pages,
        )
        saved = [self._save(self.full_document(files), "full_optimized")]
        saved.append(self._save(self.shortened_document(files), "shortened_optimized"))
        return saved

    def full_document(self, files: Sequence[CodeFile]) -> WordDocument:
        """Every file in full, with smart page breaks between files."""
        files = list(files)
        doc = self._new_document()
        layout = self.layout
        last = len(files) - 1
        current = 0

        for index, code_file in enumerate(files):
            separator = 0 if index == last else layout.file_separator_lines
            needed = layout.compact_header_lines + len(code_file.lines) + separator

            if (
                current > layout.min_lines_for_page_break
                and current + needed > layout.lines_per_page
            ):
                doc.add_page_break()
                current = 0
                logger.info("Smart page break before %s", code_file.file_name)

            self._add_header(doc, code_file)
            self._add_content(doc, code_file, 0, len(code_file.lines) - 1)
            current += needed

            if index < last:
                self._add_separator(doc)

            if current >= layout.lines_per_page:
                current %= layout.lines_per_page

        return doc

    def shortened_document(self, files: Sequence[CodeFile]) -> WordDocument:
        """First, middle and last excerpts of the files."""
        files = list(files)
        doc = self._new_document()
        sections = self.paginator.content_sections(files)

        logger.info("Total content: %d lines", sections.total_lines)
        logger.info("First: lines 1-%d", sections.first_section)
        logger.info("Middle: lines %d-%d", sections.middle_start + 1, sections.middle_end)
        logger.info("Last: lines %d-%d", sections.last_start + 1, sections.total_lines)

        self._add_line_range(doc, files, 0, sections.first_section - 1)
        self._add_line_range(doc, files, sections.middle_start, sections.middle_end - 1)
        self._add_line_range(doc, files, sections.last_start, sections.total_lines - 1)
        return doc

    def _new_document(self) -> WordDocument:
        doc = WordDocument()

        def footer_run(text: str = "", code: FieldCode | None = None) -> Run:
            return Run(text, font="Arial", size=10, color=GRAY, field_code=code)

        doc.footer.append(
            Paragraph(
                [
                    footer_run("Trang "),
                    footer_run(code=FieldCode.CURRENT_PAGE),
                    footer_run(" / "),
                    footer_run(code=FieldCode.NUMBER_OF_PAGES),
                ],
                alignment="right",
            )
        )
        return doc

    def _add_line_range(
        self,
        doc: WordDocument,
        files: list[CodeFile],
        global_start: int,
        global_end: int,
    ) -> None:
        header = self.layout.compact_header_lines
        last = len(files) - 1
        position = 0

        for index, code_file in enumerate(files):
            count = len(code_file.lines)
            separator = 0 if index == last else self.layout.file_separator_lines
            file_start = position
            content_start = file_start + header
            file_end = content_start + count + separator - 1

            if file_end >= global_start and file_start <= global_end:
                local_start = global_start - content_start if global_start > content_start else 0
                if global_end < content_start + count - 1:
                    local_end = global_end - content_start
                else:
                    local_end = count - 1

                if global_start <= content_start:
                    self._add_header(doc, code_file)

                if local_start <= local_end and local_end >= 0 and local_start < count:
                    self._add_content(
                        doc, code_file, max(0, local_start), min(count - 1, local_end)
                    )

                if index < last and global_end >= file_end - separator:
                    self._add_separator(doc)

            position = file_end + 1

    @staticmethod
    def _add_header(doc: WordDocument, code_file: CodeFile) -> None:
        doc.add_paragraph(Run(code_file.header_text(), bold=True, size=11, color=BLUE))
        doc.add_paragraph()

    @staticmethod
    def _add_separator(doc: WordDocument) -> None:
        doc.add_paragraph(Run(SEPARATOR_TEXT, size=8, color=LIGHT_GRAY))

    @staticmethod
    def _add_content(doc: WordDocument, code_file: CodeFile, start: int, end: int) -> None:
        start = max(start, 0)
        end = min(end, len(code_file.lines) - 1)
        for number in range(start, end + 1):
            doc.add_paragraph(
                Run(f"{number + 1:4d} │ ", font="Consolas", size=9, color=GRAY),
                Run(_truncate(code_file.lines[number]), font="Consolas", size=9, color=BLACK),
            )

    def _save(self, doc: WordDocument, doc_type: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = self.output_dir / f"source_code_{doc_type}_{timestamp}.docx"
        doc.save(path)
        logger.info("Created Word file: %s", path)
        return path

    def _log_statistics(self, files: list[CodeFile], total_pages: int) -> None:
        logger.info("Files: %d", len(files))
        logger.info("Total pages: %d (%d lines/page)", total_pages, self.layout.lines_per_page)
        logger.info(
            "Details: %s",
            " ".join(f"{f.file_name}({f.page_count}p)" for f in files),
        )