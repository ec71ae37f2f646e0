"""Word document text extraction using python-docx."""

import io
import logging
import zipfile

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from docx.table import Table
from docx.text.paragraph import Paragraph

from src.parsing.errors import DocumentParseError

logger = logging.getLogger(__name__)

NO_TEXT_PLACEHOLDER = "No text content found in Word document"


class WordParseError(DocumentParseError):
    """Raised when a Word document cannot be read."""

    pass


def _table_text(table: Table) -> list[str]:
    rows = []
    for row in table.rows:
        cells = [cell.text.strip() for cell in row.cells]
        if any(cells):
            rows.append("\t".join(cells))
    return rows


def parse_word(file_content: bytes) -> str:
    """Extract raw text from a .docx file.

    Paragraphs and table rows are emitted in document order, one per line.
    Legacy binary .doc files are not readable by python-docx and raise.

    Raises:
        WordParseError: If the bytes are not a readable Word document.
    """
    if not file_content:
        raise WordParseError("Empty file provided")

    try:
        document = Document(io.BytesIO(file_content))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
        raise WordParseError(f"Failed to extract Word content: {e}") from e

    lines: list[str] = []
    for block in document.iter_inner_content():
        if isinstance(block, Paragraph):
            lines.append(block.text)
        elif isinstance(block, Table):
            lines.extend(_table_text(block))

    text = "\n".join(lines).strip()
    if not text:
        logger.warning("Word document contains no text")
        return NO_TEXT_PLACEHOLDER
    return text
