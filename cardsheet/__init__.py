"""
Раскладка торговых карт на листы для печати и резки
"""

from .models import (
    OutputMode, GenerationStage,
    SheetFormat, CardFormat, Grid, Margins, Layout, PlacementRect, OutputResult
)
from .config import MM_TO_PT, LayoutConfig, mm_to_pt, load_config, save_config
from .exceptions import (
    CardSheetException, ConfigurationError, SourceDecodeError,
    MalformedSourceError, PlacementError
)
from .layout_calculator import LayoutCalculator
from .pdf_generator import PDFGenerator
from .imposition_app import ImpositionApp, generate

__all__ = [
    'OutputMode',
    'GenerationStage',
    'SheetFormat',
    'CardFormat',
    'Grid',
    'Margins',
    'Layout',
    'PlacementRect',
    'OutputResult',
    'MM_TO_PT',
    'LayoutConfig',
    'mm_to_pt',
    'load_config',
    'save_config',
    'CardSheetException',
    'ConfigurationError',
    'SourceDecodeError',
    'MalformedSourceError',
    'PlacementError',
    'LayoutCalculator',
    'PDFGenerator',
    'ImpositionApp',
    'generate'
]
