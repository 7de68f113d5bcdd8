"""Identificadores de las entradas de la calculadora y reglas de despacho.

Cada enum usa como valor la etiqueta del botón, de modo que la capa de
presentación puede pasar tanto el miembro como el texto del botón.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from errors import CalculatorError, InvalidInputError


class _LabeledEnum(Enum):
    """Enum cuyo valor es la etiqueta del botón; admite alias."""

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, str):
            return None
        key = value.strip()
        aliases = _ALIASES.get(cls, {})
        if key in aliases:
            return cls(aliases[key])
        for member in cls:
            if member.value.lower() == key.lower():
                return member
        return None

    @property
    def label(self) -> str:
        return self.value


# ── Operadores binarios ──────────────────────────────────────────

class BinaryOperator(_LabeledEnum):
    ADD = "+"
    SUBTRACT = "−"
    MULTIPLY = "×"
    DIVIDE = "÷"
    MODULO = "mod"
    POWER = "xʸ"
    ROOT = "ʸ√x"
    LOG_BASE = "logy(x)"

    def trace(self, stored: str) -> str:
        """Texto de la operación pendiente, p. ej. '5 ×'."""
        pattern = _BINARY_TRACES.get(self, "{stored} {label}")
        return pattern.format(stored=stored, label=self.value)


_BINARY_TRACES = {
    BinaryOperator.POWER: "{stored} ^",
    BinaryOperator.ROOT: "{stored}√",
    BinaryOperator.LOG_BASE: "log{stored}(x)",
}

EQUALS = "="


# ── Funciones de un argumento ────────────────────────────────────

class UnaryOperation(_LabeledEnum):
    SQUARE_ROOT = "√"
    SQUARE = "x²"
    CUBE = "x³"
    RECIPROCAL = "1/x"
    CUBE_ROOT = "³√x"
    FACTORIAL = "n!"
    POW10 = "10^x"
    POW2 = "2^x"
    EXP = "exp"
    POW_E = "e^x"
    LOG10 = "log"
    LN = "ln"
    ABS = "|x|"
    PI = "π"
    E = "e"


class TrigFunction(_LabeledEnum):
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    COT = "cot"
    CSC = "csc"
    SEC = "sec"
    ASIN = "sin^-1"
    ACOS = "cos^-1"
    ATAN = "tan^-1"
    ACOT = "cot^-1"
    ACSC = "csc^-1"
    ASEC = "sec^-1"
    SINH = "sinh"
    COSH = "cosh"
    TANH = "tanh"
    COTH = "coth"
    CSCH = "csch"
    SECH = "sech"
    ASINH = "sinh^-1"
    ACOSH = "cosh^-1"
    ATANH = "tanh^-1"
    ACOTH = "coth^-1"
    ACSCH = "csch^-1"
    ASECH = "sech^-1"


class UtilityFunction(_LabeledEnum):
    ABS = "|x|"
    FLOOR = "⌊x⌋"
    CEILING = "⌈x⌉"
    RANDOM = "rand"
    TO_DMS = "→dms"
    FROM_DMS = "→deg"


class MemoryOperation(_LabeledEnum):
    CLEAR = "MC"
    RECALL = "MR"
    STORE = "MS"
    ADD = "M+"
    SUBTRACT = "M-"
    PEEK = "M↓"


class AngleMode(_LabeledEnum):
    DEG = "DEG"
    RAD = "RAD"
    GRAD = "GRAD"

    def next(self) -> "AngleMode":
        order = list(AngleMode)
        return order[(order.index(self) + 1) % len(order)]


_ALIASES = {
    BinaryOperator: {
        "-": "−",
        "*": "×",
        "x": "×",
        "/": "÷",
        "^": "xʸ",
    },
    UnaryOperation: {
        "sqrt": "√",
        "x^2": "x²",
        "x^3": "x³",
        "fact": "n!",
        "cbrt": "³√x",
        "pi": "π",
    },
    UtilityFunction: {
        "abs": "|x|",
        "floor": "⌊x⌋",
        "ceil": "⌈x⌉",
        "dms": "→dms",
        "deg": "→deg",
    },
    MemoryOperation: {
        "M−": "M-",
        "MP": "M↓",
    },
}


# ── Reglas de las tablas de despacho ─────────────────────────────

class DisplayStyle(Enum):
    PREFIX = "prefix"   # sin(30)
    SUFFIX = "suffix"   # 3²
    BARE = "bare"       # π


@dataclass(frozen=True)
class UnaryRule:
    """Validación, transformación y formato de una función inmediata."""

    symbol: str
    transform: Callable[[float], float]
    style: DisplayStyle = DisplayStyle.PREFIX
    guard: Optional[Callable[[float], bool]] = None
    error: type[CalculatorError] = InvalidInputError
    needs_input: bool = True

    def check(self, value: float):
        if self.guard is not None and self.guard(value):
            raise self.error()

    def trace(self, value_text: str) -> str:
        if self.style is DisplayStyle.BARE:
            return self.symbol
        if self.style is DisplayStyle.SUFFIX:
            return f"{value_text}{self.symbol}"
        return f"{self.symbol}({value_text})"


@dataclass(frozen=True)
class FunctionRule:
    """Función auxiliar: sin tabla de validación, siempre se aplica.

    `transform` devuelve un número o, para conversiones de texto como
    →dms, directamente el texto a mostrar.
    """

    transform: Callable[[float], object]
    trace: str

    def describe(self, value_text: str) -> str:
        return self.trace.format(value=value_text)
