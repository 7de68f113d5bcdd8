"""Punto de entrada de la calculadora estándar / científica."""

import logging
import tkinter as tk
from logging.handlers import RotatingFileHandler

from calculator_engine import CalculatorEngine
from calculator_ui import CalculatorApp
from config import Settings, load_settings


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_MAX_BYTES = 512_000
LOG_BACKUP_COUNT = 2


def setup_logging(settings: Settings) -> logging.Logger:
    level = getattr(logging, settings.log_level, logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(level)

    if logger.handlers:
        return logger  # ya configurado

    fmt = logging.Formatter(LOG_FORMAT)

    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(fmt)
    logger.addHandler(sh)

    if settings.log_file:
        fh = RotatingFileHandler(
            settings.log_file,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        fh.setLevel(level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger


def main():
    settings = load_settings()
    log = setup_logging(settings)

    root = tk.Tk()
    root.minsize(340, 520)
    engine = CalculatorEngine(settings)
    CalculatorApp(root, engine=engine, scientific=settings.start_mode == "scientific")
    log.info("Calculadora iniciada (modo %s, %s)", settings.start_mode,
             engine.angle_mode.label)
    root.mainloop()
    log.info("Calculadora cerrada")


if __name__ == "__main__":
    main()
