"""
Data classes и Enum для раскладки карт на листы
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OutputMode(Enum):
    SEPARATE_FRONT_BACK = "separate_front_back"
    MERGED_ALTERNATING = "merged_alternating"
    SEPARATE_FRONT_BACK_MIRRORED = "separate_front_back_mirrored"

    @property
    def is_merged(self) -> bool:
        return self is OutputMode.MERGED_ALTERNATING

    @property
    def mirrors_back(self) -> bool:
        # Раздельные файлы без переворота листа не зеркалятся
        return self is not OutputMode.SEPARATE_FRONT_BACK


class GenerationStage(Enum):
    LOAD_FRONT = "front loading"
    LOAD_BACK = "back loading"
    EMBEDDING = "embedding"
    PLACEMENT = "placement"
    BACK_EMBEDDING = "back embedding"
    BACK_PLACEMENT = "back placement"
    GRID = "grid"
    BLANK_FILL = "blank fill"
    SAVE = "save"


@dataclass(frozen=True)
class SheetFormat:
    """Размер печатного листа в пунктах"""
    width: float
    height: float


@dataclass(frozen=True)
class CardFormat:
    """Размер ячейки под карту в пунктах"""
    width: float
    height: float


@dataclass(frozen=True)
class Grid:
    cols: int
    rows: int

    @property
    def cells_per_sheet(self) -> int:
        return self.cols * self.rows


@dataclass(frozen=True)
class GridSize:
    width: float
    height: float


@dataclass(frozen=True)
class Margins:
    x: float
    y: float


@dataclass(frozen=True)
class Layout:
    sheet: SheetFormat
    card: CardFormat
    grid: Grid
    grid_size: GridSize
    margins: Margins

    @property
    def cells_per_sheet(self) -> int:
        return self.grid.cells_per_sheet


@dataclass(frozen=True)
class CellPosition:
    row: int
    col: int


@dataclass(frozen=True)
class PlacementRect:
    """Прямоугольник в координатах листа (начало в левом нижнем углу)"""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class FitResult:
    scale: float
    width: float
    height: float
    x_offset: float
    y_offset: float


@dataclass
class OutputResult:
    front: Optional[bytes] = None
    back: Optional[bytes] = None
    merged: Optional[bytes] = None

    @property
    def is_merged(self) -> bool:
        return self.merged is not None


@dataclass
class GenerationReport:
    mode: OutputMode
    card_count: int
    sheet_count: int
    blank_cells: int = 0
