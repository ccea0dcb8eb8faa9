# -*- coding: utf-8 -*-
# cardsheet/exceptions.py
from typing import Optional

from .models import GenerationStage


class CardSheetException(Exception):
    """Базовое исключение приложения"""
    pass


class ConfigurationError(CardSheetException):
    """Некорректная геометрия листа, карты или сетки"""
    pass


class SourceDecodeError(CardSheetException):
    """Исходный PDF не читается"""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source} document: {message}")


class MalformedSourceError(CardSheetException):
    """Страница исходника с нулевой шириной или высотой"""

    def __init__(self, width: float, height: float, card_index: Optional[int] = None):
        self.width = width
        self.height = height
        self.card_index = card_index
        owner = f"card {card_index}" if card_index is not None else "back page"
        super().__init__(f"{owner} has degenerate size {width}x{height}")


class PlacementError(CardSheetException):
    """Ошибка встраивания или отрисовки конкретной карты"""

    def __init__(self, stage: GenerationStage, card_index: Optional[int] = None,
                 cause: Optional[BaseException] = None):
        self.stage = stage
        self.card_index = card_index
        self.cause = cause
        super().__init__(self._format())

    def _format(self) -> str:
        where = self.stage.value
        if self.card_index is not None:
            where = f"card {self.card_index} {where}"
        if self.cause is not None:
            return f"{where}: {self.cause}"
        return where
