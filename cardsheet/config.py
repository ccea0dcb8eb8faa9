# -*- coding: utf-8 -*-
# cardsheet/config.py
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from .exceptions import ConfigurationError
from .models import CardFormat, SheetFormat

logger = logging.getLogger(__name__)

# Один и тот же коэффициент для всех листов, иначе линии реза разъедутся
MM_TO_PT = 2.83465

# A4 в альбомной ориентации, пункты
A4_LANDSCAPE_PT = (841.89, 595.28)

# Стандартные размеры листов (ширина × высота в мм, книжная ориентация)
SHEET_SIZES = {
    'A4': (210, 297),
    'A3': (297, 420),
    'Letter': (215.9, 279.4),
}

# Стандартные размеры карт (ширина × высота в мм)
CARD_SIZES = {
    'Trading card (63×88)': (63, 88),
    'Mini (44×63)': (44, 63),
    'Tarot (70×120)': (70, 120),
}

DEFAULT_CARD_MM = CARD_SIZES['Trading card (63×88)']


def mm_to_pt(value: float) -> float:
    return value * MM_TO_PT


def _default_sheet() -> SheetFormat:
    return SheetFormat(*A4_LANDSCAPE_PT)


def _default_card() -> CardFormat:
    return CardFormat(mm_to_pt(DEFAULT_CARD_MM[0]), mm_to_pt(DEFAULT_CARD_MM[1]))


@dataclass(frozen=True)
class LayoutConfig:
    sheet: SheetFormat = field(default_factory=_default_sheet)
    card: CardFormat = field(default_factory=_default_card)
    cols: Optional[int] = 4
    rows: Optional[int] = 2
    blank_unfilled: bool = True
    grid_line_width: float = 0.5
    grid_line_gray: float = 0.8
    title: str = "Trading card sheets"

    def __post_init__(self):
        if self.sheet.width <= 0 or self.sheet.height <= 0:
            raise ConfigurationError(
                f"Sheet size must be positive: {self.sheet.width}x{self.sheet.height}")
        if self.card.width <= 0 or self.card.height <= 0:
            raise ConfigurationError(
                f"Card size must be positive: {self.card.width}x{self.card.height}")
        for name in ('cols', 'rows'):
            value = getattr(self, name)
            if value is not None and (not isinstance(value, int) or value <= 0):
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        if self.grid_line_width < 0:
            raise ConfigurationError(f"Grid line width must not be negative: {self.grid_line_width}")
        if not 0 <= self.grid_line_gray <= 1:
            raise ConfigurationError(f"Grid line gray must be within [0, 1]: {self.grid_line_gray}")

    @classmethod
    def from_mm(cls, sheet_mm: Tuple[float, float], card_mm: Tuple[float, float],
                landscape: bool = True, **kwargs) -> 'LayoutConfig':
        sheet_w, sheet_h = sorted(sheet_mm)
        if landscape:
            sheet_w, sheet_h = sheet_h, sheet_w
        sheet = SheetFormat(mm_to_pt(sheet_w), mm_to_pt(sheet_h))
        card = CardFormat(mm_to_pt(card_mm[0]), mm_to_pt(card_mm[1]))
        logger.debug(f"Config from mm: sheet={sheet_w}x{sheet_h}mm, card={card_mm[0]}x{card_mm[1]}mm")
        return cls(sheet=sheet, card=card, **kwargs)

    @classmethod
    def from_presets(cls, sheet_name: str = 'A4', card_name: str = 'Trading card (63×88)',
                     landscape: bool = True, **kwargs) -> 'LayoutConfig':
        if sheet_name not in SHEET_SIZES:
            raise ConfigurationError(f"Unknown sheet size: {sheet_name}")
        if card_name not in CARD_SIZES:
            raise ConfigurationError(f"Unknown card size: {card_name}")
        return cls.from_mm(SHEET_SIZES[sheet_name], CARD_SIZES[card_name], landscape, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sheet': {'width': self.sheet.width, 'height': self.sheet.height},
            'card': {'width': self.card.width, 'height': self.card.height},
            'grid': {'cols': self.cols, 'rows': self.rows},
            'blank_unfilled': self.blank_unfilled,
            'grid_line': {'width': self.grid_line_width, 'gray': self.grid_line_gray},
            'title': self.title,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LayoutConfig':
        try:
            grid = data.get('grid', {})
            grid_line = data.get('grid_line', {})
            return cls(
                sheet=SheetFormat(**data['sheet']),
                card=CardFormat(**data['card']),
                cols=grid.get('cols', 4),
                rows=grid.get('rows', 2),
                blank_unfilled=data.get('blank_unfilled', True),
                grid_line_width=grid_line.get('width', 0.5),
                grid_line_gray=grid_line.get('gray', 0.8),
                title=data.get('title', "Trading card sheets"),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ConfigurationError(f"Invalid layout config: {e}") from e


def save_config(config: LayoutConfig, config_file: Union[str, Path]):
    with open(config_file, 'w', encoding='utf-8') as f:
        json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
    logger.info(f"Config saved: {config_file}")


def load_config(config_file: Union[str, Path]) -> LayoutConfig:
    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Config file {config_file} is not valid JSON: {e}") from e

    config = LayoutConfig.from_dict(data)
    logger.info(f"Config loaded: {config_file}")
    return config
