"""Configuración de la calculadora a partir de variables de entorno."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from operations import AngleMode

START_MODES = ("standard", "scientific")


@dataclass
class Settings:
    angle_mode: AngleMode = AngleMode.DEG
    start_mode: str = "standard"     # "standard" o "scientific"
    random_seed: Optional[int] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def validate(self) -> None:
        self.angle_mode = AngleMode(self.angle_mode)
        if self.start_mode not in START_MODES:
            raise ValueError("start_mode debe ser 'standard' o 'scientific'")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Nivel de log desconocido: {self.log_level}")


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Lee CALC_* del entorno; valores inválidos lanzan ValueError."""
    env = os.environ if environ is None else environ

    seed = env.get("CALC_RANDOM_SEED")
    try:
        random_seed = int(seed) if seed else None
    except ValueError as exc:
        raise ValueError(f"CALC_RANDOM_SEED no es un entero: {seed!r}") from exc

    settings = Settings(
        angle_mode=env.get("CALC_ANGLE_MODE", "DEG"),
        start_mode=env.get("CALC_START_MODE", "standard").lower(),
        random_seed=random_seed,
        log_level=env.get("CALC_LOG_LEVEL", "INFO").upper(),
        log_file=env.get("CALC_LOG_FILE") or None,
    )
    settings.validate()
    return settings
