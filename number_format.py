"""Conversión entre el texto de la pantalla y valores numéricos.

La pantalla usa coma como separador decimal; la lectura acepta coma o
punto y normaliza antes de convertir.
"""

import math
import re

SEPARATOR = ","

_NUMBER_RE = re.compile(
    r"^[+-]?(?:\d+(?:[.,]\d*)?|[.,]\d+)(?:[eE][+-]?\d+)?$"
)


def parse_number(text: str | None) -> float | None:
    """Devuelve el valor del texto, o None si no es un número válido."""
    if text is None:
        return None
    text = text.strip()
    if not _NUMBER_RE.fullmatch(text):
        return None
    value = float(text.replace(",", "."))
    # 1e400 y similares desbordan a inf
    return value if math.isfinite(value) else None


def parse_or_zero(text: str | None) -> float:
    value = parse_number(text)
    return 0.0 if value is None else value


def format_number(value) -> str:
    """Formatea un resultado para la pantalla."""
    value = float(value)

    if math.isnan(value):
        return "NaN"
    if value == float("inf"):
        return "∞"
    if value == float("-inf"):
        return "-∞"
    if value == int(value) and abs(value) < 1e15:
        # int() descarta también el signo de -0.0
        return str(int(value))
    return f"{value:.15g}".replace(".", SEPARATOR)


def format_dms(value: float) -> str:
    """Grados decimales → texto D° M' S,##"."""
    degrees = int(value)
    minutes_full = abs(value - degrees) * 60
    minutes = int(minutes_full)
    seconds = (minutes_full - minutes) * 60
    seconds_text = f"{seconds:.2f}".rstrip("0").rstrip(".")
    return f"{degrees}° {minutes}' {seconds_text.replace('.', SEPARATOR)}\""


def dms_to_degrees(value: float) -> float:
    """Interpreta D,MM como grados y minutos y devuelve grados decimales."""
    degrees = math.trunc(value)
    minutes = (value - degrees) * 100
    return degrees + minutes / 60.0
