"""
Генератор PDF с раскладкой карт на листы
"""
import logging
from contextlib import contextmanager
from typing import Optional

from . import pdf_backend
from .config import LayoutConfig
from .exceptions import CardSheetException, PlacementError, SourceDecodeError
from .layout_calculator import LayoutCalculator, cell_rect, fit_to_cell, place_in_cell
from .models import GenerationReport, GenerationStage, Layout, OutputMode, OutputResult

logger = logging.getLogger(__name__)


@contextmanager
def _stage(stage: GenerationStage, card_index: Optional[int] = None):
    try:
        yield
    except CardSheetException:
        raise
    except Exception as e:
        raise PlacementError(stage, card_index, e) from e


class PDFGenerator:
    def __init__(self, config: Optional[LayoutConfig] = None, backend=pdf_backend):
        self.config = config or LayoutConfig()
        self.backend = backend
        self.layout: Layout = LayoutCalculator.resolve(self.config)
        self.report: Optional[GenerationReport] = None

    def generate(self, front_bytes: bytes, back_bytes: bytes,
                 mode: OutputMode = OutputMode.MERGED_ALTERNATING) -> OutputResult:
        mode = OutputMode(mode)
        logger.info(f"Generation started, mode: {mode.value}")
        try:
            return self._generate(front_bytes, back_bytes, mode)
        except CardSheetException as e:
            logger.error(f"Generation failed: {e}")
            raise

    def _generate(self, front_bytes: bytes, back_bytes: bytes, mode: OutputMode) -> OutputResult:
        layout = self.layout
        cells_per_sheet = layout.cells_per_sheet
        sheet_size = (layout.sheet.width, layout.sheet.height)

        front_src = self._load(front_bytes, 'front', GenerationStage.LOAD_FRONT)
        back_src = self._load(back_bytes, 'back', GenerationStage.LOAD_BACK)
        if self.backend.page_count(back_src) < 1:
            raise SourceDecodeError('back', "document has no pages")

        card_count = self.backend.page_count(front_src)
        total_sheets = LayoutCalculator.sheets_needed(card_count, cells_per_sheet)
        logger.info(f"Cards: {card_count}, sheets: {total_sheets}")

        front_doc = self.backend.create(self.config.title)
        back_doc = front_doc if mode.is_merged else self.backend.create(self.config.title)

        # Рубашка одна на все ячейки: встраивается один раз
        with _stage(GenerationStage.BACK_EMBEDDING):
            back_page = self.backend.get_page(back_src, 0)
            back_width, back_height = self.backend.page_size(back_page)
        back_fit = fit_to_cell(back_width, back_height, layout.card)
        with _stage(GenerationStage.BACK_EMBEDDING):
            back_embedded = self.backend.embed(back_doc, back_page)

        # Заполненные ячейки: (лист, ячейка) -> номер карты в исходнике
        filled = {(sheet_index, cell_index): global_index
                  for sheet_index, cell_index, global_index
                  in LayoutCalculator.iter_slots(card_count, cells_per_sheet)}

        blank_cells = 0
        for sheet_index in range(total_sheets):
            logger.debug(f"Sheet {sheet_index + 1}/{total_sheets}")
            with _stage(GenerationStage.GRID):
                front_sheet = self.backend.add_page(front_doc, sheet_size)
                back_sheet = self.backend.add_page(back_doc, sheet_size)
                self._draw_grid(front_sheet)
                self._draw_grid(back_sheet)

            for cell_index in range(cells_per_sheet):
                front_rect = cell_rect(layout, cell_index)
                back_rect = cell_rect(layout, cell_index, mirrored=mode.mirrors_back)

                global_index = filled.get((sheet_index, cell_index))
                if global_index is not None:
                    card_number = global_index + 1
                    self._place_front(front_src, front_doc, front_sheet, global_index, front_rect)
                    with _stage(GenerationStage.BACK_PLACEMENT, card_number):
                        self.backend.draw(back_sheet, back_embedded, place_in_cell(back_rect, back_fit))
                elif self.config.blank_unfilled:
                    with _stage(GenerationStage.BLANK_FILL):
                        self.backend.draw_rect(front_sheet, front_rect, 1.0)
                        self.backend.draw_rect(back_sheet, back_rect, 1.0)
                    blank_cells += 1
                else:
                    with _stage(GenerationStage.BACK_PLACEMENT):
                        self.backend.draw(back_sheet, back_embedded, place_in_cell(back_rect, back_fit))

        with _stage(GenerationStage.SAVE):
            if mode.is_merged:
                result = OutputResult(merged=self.backend.save(front_doc))
            else:
                result = OutputResult(front=self.backend.save(front_doc),
                                      back=self.backend.save(back_doc))

        self.report = GenerationReport(mode=mode, card_count=card_count,
                                       sheet_count=total_sheets, blank_cells=blank_cells)
        logger.info(f"Generation finished: {total_sheets} sheets, {blank_cells} blank cells")
        return result

    def _load(self, data: bytes, source: str, stage: GenerationStage):
        logger.debug(f"Loading {source} document ({len(data or b'')} bytes)")
        try:
            return self.backend.load(data, source)
        except CardSheetException:
            raise
        except Exception as e:
            raise SourceDecodeError(source, f"{stage.value} failed: {e}") from e

    def _place_front(self, front_src, front_doc, front_sheet, global_index: int, cell):
        card_number = global_index + 1
        logger.debug(f"Card {card_number}")

        with _stage(GenerationStage.EMBEDDING, card_number):
            page = self.backend.get_page(front_src, global_index)
            width, height = self.backend.page_size(page)
        # Страницы лица могут быть разного размера, масштаб считается для каждой
        fit = fit_to_cell(width, height, self.layout.card, card_index=card_number)

        with _stage(GenerationStage.EMBEDDING, card_number):
            embedded = self.backend.embed(front_doc, page)
        with _stage(GenerationStage.PLACEMENT, card_number):
            self.backend.draw(front_sheet, embedded, place_in_cell(cell, fit))

    def _draw_grid(self, sheet):
        """cols+1 вертикальных и rows+1 горизонтальных линий реза"""
        layout = self.layout
        left = layout.margins.x
        right = left + layout.grid_size.width
        top = layout.sheet.height - layout.margins.y
        bottom = top - layout.grid_size.height
        thickness = self.config.grid_line_width
        gray = self.config.grid_line_gray

        for col in range(layout.grid.cols + 1):
            x = left + col * layout.card.width
            self.backend.draw_line(sheet, (x, top), (x, bottom), thickness, gray)

        for row in range(layout.grid.rows + 1):
            y = top - row * layout.card.height
            self.backend.draw_line(sheet, (left, y), (right, y), thickness, gray)
