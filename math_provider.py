"""Proveedor matemático basado en mpmath.

Construye las tablas de despacho de funciones inmediatas, trigonométricas
y auxiliares. Los cálculos se hacen con precisión doble (53 bits) y el
resultado se devuelve como float.
"""

import math
import random

try:
    from mpmath import mp
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc

from errors import DivisionByZeroError, InvalidInputError
from number_format import dms_to_degrees, format_dms
from operations import (
    AngleMode,
    DisplayStyle,
    FunctionRule,
    TrigFunction,
    UnaryOperation,
    UnaryRule,
    UtilityFunction,
)

WORKING_PRECISION = 53

_HALF_TURN = {
    AngleMode.DEG: 180,
    AngleMode.GRAD: 200,
}


def _out_of_unit_range(x: float) -> bool:
    return x < -1 or x > 1


class MPMathProvider:
    """Funciones científicas con conversión según el modo angular."""

    def __init__(self, angle_mode=AngleMode.DEG, seed: int | None = None):
        self._angle_mode = AngleMode(angle_mode)
        self._random = random.Random(seed)

    # ── Propiedad: modo angular ──────────────────────────────────

    @property
    def angle_mode(self) -> AngleMode:
        return self._angle_mode

    @angle_mode.setter
    def angle_mode(self, mode):
        try:
            self._angle_mode = AngleMode(mode)
        except ValueError as exc:
            raise ValueError("El modo debe ser 'DEG', 'RAD' o 'GRAD'") from exc

    # ── Conversión angular ───────────────────────────────────────

    def to_radians(self, value):
        half_turn = _HALF_TURN.get(self._angle_mode)
        if half_turn is None:
            return value
        return value * mp.pi / half_turn

    def from_radians(self, radians):
        half_turn = _HALF_TURN.get(self._angle_mode)
        if half_turn is None:
            return radians
        return radians * half_turn / mp.pi

    # ── Envoltorios ──────────────────────────────────────────────

    @staticmethod
    def _real(fn):
        """Evalúa fn con precisión doble y exige un resultado real."""

        def wrapped(x):
            with mp.workprec(WORKING_PRECISION):
                result = fn(mp.mpf(x))
            if isinstance(result, mp.mpc):
                if result.imag != 0:
                    raise InvalidInputError()
                result = result.real
            return float(result)

        return wrapped

    def _trig(self, fn):
        return self._real(lambda x: fn(self.to_radians(x)))

    def _inv_trig(self, fn):
        return self._real(lambda x: self.from_radians(fn(x)))

    @staticmethod
    def _reciprocal_of(fn):
        """1/fn(x); un denominador exactamente cero es una singularidad."""

        def wrapped(x):
            denominator = fn(x)
            if denominator == 0:
                raise InvalidInputError()
            return 1 / denominator

        return wrapped

    @staticmethod
    def _factorial(x):
        if not mp.isfinite(x):
            raise InvalidInputError()

        if mp.floor(x) == x and x >= 0:
            return mp.factorial(int(x))

        raise InvalidInputError()

    @staticmethod
    def _cube_root(x):
        if x < 0:
            return -mp.cbrt(-x)
        return mp.cbrt(x)

    # ── Tablas de despacho ───────────────────────────────────────

    def build_unary_table(self) -> dict:
        real = self._real
        prefix, suffix, bare = DisplayStyle.PREFIX, DisplayStyle.SUFFIX, DisplayStyle.BARE

        return {
            UnaryOperation.SQUARE_ROOT: UnaryRule(
                "√", real(mp.sqrt), prefix, guard=lambda x: x < 0,
            ),
            UnaryOperation.SQUARE: UnaryRule("²", real(lambda x: x * x), suffix),
            UnaryOperation.CUBE: UnaryRule("³", real(lambda x: x ** 3), suffix),
            UnaryOperation.RECIPROCAL: UnaryRule(
                "1/", real(lambda x: 1 / x), prefix,
                guard=lambda x: x == 0, error=DivisionByZeroError,
            ),
            UnaryOperation.CUBE_ROOT: UnaryRule("³√", real(self._cube_root), prefix),
            UnaryOperation.FACTORIAL: UnaryRule(
                "fact", real(self._factorial), prefix,
                guard=lambda x: x < 0 or x != math.floor(x),
            ),
            UnaryOperation.POW10: UnaryRule("10^", real(lambda x: mp.power(10, x)), prefix),
            UnaryOperation.POW2: UnaryRule("2^", real(lambda x: mp.power(2, x)), prefix),
            UnaryOperation.EXP: UnaryRule("exp", real(mp.exp), prefix),
            UnaryOperation.POW_E: UnaryRule("e^", real(mp.exp), prefix),
            UnaryOperation.LOG10: UnaryRule(
                "log", real(mp.log10), prefix, guard=lambda x: x <= 0,
            ),
            UnaryOperation.LN: UnaryRule(
                "ln", real(mp.log), prefix, guard=lambda x: x <= 0,
            ),
            UnaryOperation.ABS: UnaryRule("|x|", real(abs), prefix),
            UnaryOperation.PI: UnaryRule(
                "π", real(lambda _x: +mp.pi), bare, needs_input=False,
            ),
            UnaryOperation.E: UnaryRule(
                "e", real(lambda _x: +mp.e), bare, needs_input=False,
            ),
        }

    def build_trig_table(self) -> dict:
        """Tabla trigonométrica para el modo angular actual."""
        trig, inv_trig, real = self._trig, self._inv_trig, self._real
        reciprocal = self._reciprocal_of
        unit = _out_of_unit_range

        table = {
            TrigFunction.SIN: trig(mp.sin),
            TrigFunction.COS: trig(mp.cos),
            TrigFunction.TAN: trig(mp.tan),
            TrigFunction.COT: trig(reciprocal(mp.tan)),
            TrigFunction.CSC: trig(reciprocal(mp.sin)),
            TrigFunction.SEC: trig(reciprocal(mp.cos)),
            TrigFunction.ASIN: inv_trig(mp.asin),
            TrigFunction.ACOS: inv_trig(mp.acos),
            TrigFunction.ATAN: inv_trig(mp.atan),
            TrigFunction.ACOT: inv_trig(mp.acot),
            TrigFunction.ACSC: inv_trig(mp.acsc),
            TrigFunction.ASEC: inv_trig(mp.asec),
            TrigFunction.SINH: real(mp.sinh),
            TrigFunction.COSH: real(mp.cosh),
            TrigFunction.TANH: real(mp.tanh),
            TrigFunction.COTH: real(reciprocal(mp.tanh)),
            TrigFunction.CSCH: real(reciprocal(mp.sinh)),
            TrigFunction.SECH: real(reciprocal(mp.cosh)),
            TrigFunction.ASINH: real(mp.asinh),
            TrigFunction.ACOSH: real(mp.acosh),
            TrigFunction.ATANH: real(mp.atanh),
            TrigFunction.ACOTH: real(mp.acoth),
            TrigFunction.ACSCH: real(mp.acsch),
            TrigFunction.ASECH: real(mp.asech),
        }
        guarded = {TrigFunction.ASIN, TrigFunction.ACOS, TrigFunction.ACSC, TrigFunction.ASEC}
        hyperbolic_inverse = {
            TrigFunction.ASINH: "asinh",
            TrigFunction.ACOSH: "acosh",
            TrigFunction.ATANH: "atanh",
            TrigFunction.ACOTH: "acoth",
            TrigFunction.ACSCH: "acsch",
            TrigFunction.ASECH: "asech",
        }

        return {
            func: UnaryRule(
                hyperbolic_inverse.get(func, func.value),
                transform,
                guard=unit if func in guarded else None,
            )
            for func, transform in table.items()
        }

    def build_function_table(self) -> dict:
        return {
            UtilityFunction.ABS: FunctionRule(abs, "|{value}|"),
            UtilityFunction.FLOOR: FunctionRule(
                lambda x: float(math.floor(x)), "⌊{value}⌋",
            ),
            UtilityFunction.CEILING: FunctionRule(
                lambda x: float(math.ceil(x)), "⌈{value}⌉",
            ),
            UtilityFunction.RANDOM: FunctionRule(
                lambda _x: self._random.random(), "rand()",
            ),
            UtilityFunction.TO_DMS: FunctionRule(format_dms, "{value}° → DMS"),
            UtilityFunction.FROM_DMS: FunctionRule(dms_to_degrees, "{value} → °"),
        }
