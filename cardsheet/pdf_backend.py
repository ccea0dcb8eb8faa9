"""
Работа с PDF: загрузка исходников, листы, размещение страниц, сохранение

PyPDF2 переносит страницы исходников на листы, reportlab рисует векторную
графику (линии реза, заливку пустых ячеек) отдельным слоем.
"""
import logging
from dataclasses import dataclass, field
from io import BytesIO
from typing import List, Tuple

from PyPDF2 import PageObject, PdfReader, PdfWriter, Transformation
from PyPDF2.errors import DependencyError, PdfReadError
from reportlab.pdfgen import canvas

from .exceptions import SourceDecodeError
from .models import PlacementRect

logger = logging.getLogger(__name__)


@dataclass
class EmbeddedPage:
    """Страница исходника, приведенная к началу координат"""
    page: PageObject
    width: float
    height: float


@dataclass
class SheetPage:
    page: PageObject
    width: float
    height: float
    pending: List[tuple] = field(default_factory=list)


@dataclass
class OutputDocument:
    writer: PdfWriter
    sheets: List[SheetPage] = field(default_factory=list)


def load(data: bytes, source: str = 'source') -> PdfReader:
    if not data:
        raise SourceDecodeError(source, "empty input")
    try:
        reader = PdfReader(BytesIO(data))
        if reader.is_encrypted and not reader.decrypt(''):
            raise SourceDecodeError(source, "document is encrypted")
        # Дерево страниц читается лениво, ошибки структуры всплывают здесь
        len(reader.pages)
    except SourceDecodeError:
        raise
    except (PdfReadError, DependencyError, ValueError, KeyError, TypeError,
            NotImplementedError) as e:
        raise SourceDecodeError(source, str(e) or type(e).__name__) from e
    return reader


def page_count(doc: PdfReader) -> int:
    return len(doc.pages)


def get_page(doc: PdfReader, index: int) -> PageObject:
    return doc.pages[index]


def page_size(page: PageObject) -> Tuple[float, float]:
    return float(page.mediabox.width), float(page.mediabox.height)


def create(title: str = '') -> OutputDocument:
    writer = PdfWriter()
    if title:
        writer.add_metadata({'/Title': title})
    return OutputDocument(writer)


def embed(dest: OutputDocument, src_page: PageObject) -> EmbeddedPage:
    width, height = page_size(src_page)
    left = float(src_page.mediabox.left)
    bottom = float(src_page.mediabox.bottom)

    # merge_page обрезает по TrimBox/CropBox, у копии они равны MediaBox
    source = PageObject(src_page.pdf, src_page.indirect_reference)
    source.update(src_page)
    source.trimbox = src_page.mediabox
    source.cropbox = src_page.mediabox

    normalized = PageObject.create_blank_page(width=width, height=height)
    normalized.merge_page(source)
    if left or bottom:
        normalized.add_transformation(Transformation().translate(-left, -bottom))
    return EmbeddedPage(normalized, width, height)


def add_page(doc: OutputDocument, size: Tuple[float, float]) -> SheetPage:
    width, height = size
    # В writer лист попадает при сохранении, add_page копирует страницу
    page = PageObject.create_blank_page(width=width, height=height)
    sheet = SheetPage(page, width, height)
    doc.sheets.append(sheet)
    return sheet


def draw(sheet: SheetPage, embedded: EmbeddedPage, rect: PlacementRect):
    _flush(sheet)

    stamp = PageObject.create_blank_page(width=sheet.width, height=sheet.height)
    stamp.merge_page(embedded.page)
    stamp.add_transformation(
        Transformation()
        .scale(rect.width / embedded.width, rect.height / embedded.height)
        .translate(rect.x, rect.y)
    )
    sheet.page.merge_page(stamp)


def draw_line(sheet: SheetPage, start: Tuple[float, float], end: Tuple[float, float],
              thickness: float = 0.5, gray: float = 0.8):
    sheet.pending.append(('line', start, end, thickness, gray))


def draw_rect(sheet: SheetPage, rect: PlacementRect, gray: float = 1.0):
    sheet.pending.append(('rect', rect, gray))


def save(doc: OutputDocument) -> bytes:
    logger.debug(f"Saving document with {len(doc.sheets)} sheets")
    for sheet in doc.sheets:
        _flush(sheet)
        doc.writer.add_page(sheet.page)
    buffer = BytesIO()
    doc.writer.write(buffer)
    return buffer.getvalue()


def _flush(sheet: SheetPage):
    """Накопленная векторная графика ложится на лист одним слоем"""
    if not sheet.pending:
        return
    sheet.page.merge_page(_render_overlay(sheet.width, sheet.height, sheet.pending))
    sheet.pending = []


def _render_overlay(width: float, height: float, operations: List[tuple]) -> PageObject:
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=(width, height))

    for op in operations:
        if op[0] == 'line':
            _, (x1, y1), (x2, y2), thickness, gray = op
            c.setStrokeColorRGB(gray, gray, gray)
            c.setLineWidth(thickness)
            c.line(x1, y1, x2, y2)
        elif op[0] == 'rect':
            _, rect, gray = op
            c.setFillColorRGB(gray, gray, gray)
            c.rect(rect.x, rect.y, rect.width, rect.height, stroke=0, fill=1)
        else:
            raise ValueError(f"Unknown drawing operation: {op[0]}")

    c.showPage()
    c.save()
    buffer.seek(0)
    return PdfReader(buffer).pages[0]
