# -*- coding: utf-8 -*-
# cardsheet/utils/logger.py
import logging
import os
from datetime import datetime


def setup_logging(log_dir: str = "logs", level: int = logging.INFO):
    """Настройка логирования

    Если у корневого логгера уже есть обработчики, его настройка
    не меняется и файл лога не открывается.
    """
    root = logging.getLogger()
    if not root.handlers:
        os.makedirs(log_dir, exist_ok=True)

        log_file = os.path.join(log_dir, f"cardsheet_{datetime.now().strftime('%Y%m%d')}.log")

        logging.basicConfig(
            level=level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=[
                logging.FileHandler(log_file, encoding='utf-8'),
                logging.StreamHandler()
            ]
        )

    # Уменьшаем логирование для PDF библиотек
    logging.getLogger('reportlab').setLevel(logging.WARNING)
    logging.getLogger('PyPDF2').setLevel(logging.WARNING)

    return logging.getLogger('cardsheet')
