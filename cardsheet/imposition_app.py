"""
Главный класс приложения для раскладки карт
"""
import logging
from pathlib import Path
from typing import Optional, Union

from .config import LayoutConfig, load_config, save_config
from .models import OutputMode, OutputResult
from .pdf_generator import PDFGenerator

logger = logging.getLogger(__name__)


class ImpositionApp:
    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()
        self.logger = logging.getLogger(__name__)

    def generate(self, front_bytes: bytes, back_bytes: bytes,
                 mode: OutputMode = OutputMode.MERGED_ALTERNATING) -> OutputResult:
        generator = PDFGenerator(self.config)
        result = generator.generate(front_bytes, back_bytes, mode)

        report = generator.report
        self.logger.info(f"Done: {report.card_count} cards on {report.sheet_count} sheets "
                         f"({report.mode.value})")
        return result

    def save_config(self, config_file: Union[str, Path]):
        save_config(self.config, config_file)

    def load_config(self, config_file: Union[str, Path]):
        self.config = load_config(config_file)


def generate(front_bytes: bytes, back_bytes: bytes,
             mode: OutputMode = OutputMode.MERGED_ALTERNATING,
             config: Optional[LayoutConfig] = None) -> OutputResult:
    """Разложить лица и общую рубашку на листы.

    Возвращает ``OutputResult`` с ``merged`` для режима MERGED_ALTERNATING
    и с ``front``/``back`` для раздельных режимов.
    """
    return ImpositionApp(config).generate(front_bytes, back_bytes, mode)
