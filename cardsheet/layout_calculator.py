"""
Расчет раскладки карт на листе
"""
import logging
import math
from typing import Iterator, Optional, Tuple

from .config import LayoutConfig
from .exceptions import ConfigurationError, MalformedSourceError
from .models import (
    CardFormat, CellPosition, FitResult, Grid, GridSize, Layout, Margins, PlacementRect
)

logger = logging.getLogger(__name__)


class LayoutCalculator:
    @staticmethod
    def resolve(config: LayoutConfig) -> Layout:
        """Сетка, размер сетки и поля для заданного листа и карты"""
        sheet, card = config.sheet, config.card

        cols = config.cols if config.cols is not None else int(sheet.width // card.width)
        rows = config.rows if config.rows is not None else int(sheet.height // card.height)
        if cols <= 0 or rows <= 0:
            raise ConfigurationError(
                f"Card {card.width:.2f}x{card.height:.2f}pt does not fit on sheet "
                f"{sheet.width:.2f}x{sheet.height:.2f}pt")

        grid = Grid(cols, rows)
        grid_size = GridSize(cols * card.width, rows * card.height)
        if grid_size.width > sheet.width or grid_size.height > sheet.height:
            raise ConfigurationError(
                f"Grid {cols}x{rows} ({grid_size.width:.2f}x{grid_size.height:.2f}pt) "
                f"exceeds sheet {sheet.width:.2f}x{sheet.height:.2f}pt")

        margins = Margins((sheet.width - grid_size.width) / 2,
                          (sheet.height - grid_size.height) / 2)

        logger.info(f"Layout: {cols}x{rows} cards, margins: ({margins.x:.2f}, {margins.y:.2f})")
        return Layout(sheet=sheet, card=card, grid=grid, grid_size=grid_size, margins=margins)

    @staticmethod
    def sheets_needed(card_count: int, cells_per_sheet: int) -> int:
        if card_count < 0:
            raise ValueError(f"Card count must not be negative: {card_count}")
        if cells_per_sheet <= 0:
            raise ValueError(f"Cells per sheet must be positive: {cells_per_sheet}")
        return math.ceil(card_count / cells_per_sheet)

    @staticmethod
    def iter_slots(card_count: int, cells_per_sheet: int) -> Iterator[Tuple[int, int, int]]:
        """(sheet_index, cell_index, global_index) для каждой заполненной ячейки"""
        total_sheets = LayoutCalculator.sheets_needed(card_count, cells_per_sheet)
        for sheet_index in range(total_sheets):
            for cell_index in range(cells_per_sheet):
                global_index = sheet_index * cells_per_sheet + cell_index
                if global_index < card_count:
                    yield sheet_index, cell_index, global_index

    @staticmethod
    def get_preview_data(layout: Layout) -> dict:
        return {
            'cols': layout.grid.cols,
            'rows': layout.grid.rows,
            'cards_per_sheet': layout.cells_per_sheet,
            'card_width': layout.card.width,
            'card_height': layout.card.height,
            'page_width': layout.sheet.width,
            'page_height': layout.sheet.height,
            'x_offset': layout.margins.x,
            'y_offset': layout.margins.y,
        }


def cell_position(cell_index: int, cols: int) -> CellPosition:
    # Построчно: слева направо, сверху вниз, ячейка 0 в левом верхнем углу
    if cell_index < 0:
        raise ValueError(f"Cell index must not be negative: {cell_index}")
    return CellPosition(row=cell_index // cols, col=cell_index % cols)


def mirror_col(col: int, cols: int) -> int:
    if not 0 <= col < cols:
        raise ValueError(f"Column {col} is outside [0, {cols})")
    return (cols - 1) - col


def cell_origin(layout: Layout, row: int, col: int) -> Tuple[float, float]:
    """Левый нижний угол ячейки; ось Y в PDF направлена вверх"""
    x = layout.margins.x + col * layout.card.width
    y = layout.sheet.height - layout.margins.y - (row + 1) * layout.card.height
    return x, y


def cell_rect(layout: Layout, cell_index: int, mirrored: bool = False) -> PlacementRect:
    if not 0 <= cell_index < layout.cells_per_sheet:
        raise ValueError(f"Cell index {cell_index} is outside [0, {layout.cells_per_sheet})")
    position = cell_position(cell_index, layout.grid.cols)
    col = mirror_col(position.col, layout.grid.cols) if mirrored else position.col
    x, y = cell_origin(layout, position.row, col)
    return PlacementRect(x, y, layout.card.width, layout.card.height)


def fit_to_cell(src_width: float, src_height: float, card: CardFormat,
                card_index: Optional[int] = None) -> FitResult:
    """Равномерное масштабирование страницы в ячейку с центровкой"""
    if src_width <= 0 or src_height <= 0:
        raise MalformedSourceError(src_width, src_height, card_index)

    scale = min(card.width / src_width, card.height / src_height)
    width = src_width * scale
    height = src_height * scale
    # Погрешность float не должна выводить изображение за границу ячейки
    width = min(width, card.width)
    height = min(height, card.height)

    return FitResult(
        scale=scale,
        width=width,
        height=height,
        x_offset=(card.width - width) / 2,
        y_offset=(card.height - height) / 2,
    )


def place_in_cell(cell: PlacementRect, fit: FitResult) -> PlacementRect:
    return PlacementRect(cell.x + fit.x_offset, cell.y + fit.y_offset, fit.width, fit.height)
