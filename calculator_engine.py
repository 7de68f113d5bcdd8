"""
Motor de estado de la calculadora estándar y científica.

Este módulo provee la clase CalculatorEngine, que acumula las pulsaciones
de botones y teclas en números, resuelve operaciones binarias pendientes,
aplica funciones inmediatas sobre el valor mostrado y mantiene la memoria
y el modo angular. La capa de presentación solo envía eventos de entrada
y muestra los textos de salida.

Contrato de interfaz:
    - enter_digit(token), enter_operator(op), equals()
    - apply_unary(op), apply_trig(name), apply_function(name)
    - percentage(), toggle_sign(), backspace(), clear_entry(), clear_all()
    - toggle_angle_mode() -> str
    - memory_op(op) -> Notification (también enviada a los oyentes)
    - display, operation: textos a mostrar
"""

import logging
import math
import operator
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional

from config import Settings
from errors import (
    ERROR_MESSAGES,
    CalculatorError,
    DivisionByZeroError,
    InvalidInputError,
    ResultOverflowError,
    from_arithmetic,
)
from math_provider import MPMathProvider
from number_format import SEPARATOR, format_number, parse_number, parse_or_zero
from operations import (
    EQUALS,
    AngleMode,
    BinaryOperator,
    MemoryOperation,
    TrigFunction,
    UnaryOperation,
    UtilityFunction,
)

logger = logging.getLogger(__name__)

DIGITS = "0123456789"


class EntryState(Enum):
    """Ciclo de entrada: IDLE → ENTERING → CALCULATED."""

    IDLE = "idle"              # el próximo dígito empieza un número nuevo
    ENTERING = "entering"      # se están tecleando dígitos
    CALCULATED = "calculated"  # se muestra un resultado

    @property
    def is_fresh(self) -> bool:
        return self is not EntryState.ENTERING

    @property
    def just_calculated(self) -> bool:
        return self is EntryState.CALCULATED


class NotificationKind(Enum):
    INFO = "info"
    MEMORY_EMPTY = "memory_empty"


@dataclass(frozen=True)
class Notification:
    title: str
    message: str
    kind: NotificationKind = NotificationKind.INFO


@dataclass
class EngineState:
    buffer: str = "0"
    operation: str = ""
    current_value: float = 0.0
    stored_value: float = 0.0
    memory_value: Optional[float] = None
    pending_operator: Optional[BinaryOperator] = None
    entry: EntryState = EntryState.IDLE
    angle_mode: AngleMode = AngleMode.DEG


# ── Operaciones binarias ─────────────────────────────────────────

def _divide(left: float, right: float) -> float:
    if right == 0:
        raise DivisionByZeroError()
    return left / right


def _modulo(left: float, right: float) -> float:
    if right == 0:
        raise InvalidInputError()
    return math.fmod(left, right)


def _power(base: float, exponent: float) -> float:
    if base == 0 and exponent < 0:
        raise DivisionByZeroError()
    return math.pow(base, exponent)


def _root(degree: float, radicand: float) -> float:
    if degree == 0:
        raise DivisionByZeroError()
    return _power(radicand, 1.0 / degree)


def _log_base(base: float, value: float) -> float:
    if base <= 0 or base == 1 or value <= 0:
        raise InvalidInputError()
    return math.log(value) / math.log(base)


_BINARY_TABLE: dict[BinaryOperator, Callable[[float, float], float]] = {
    BinaryOperator.ADD: operator.add,
    BinaryOperator.SUBTRACT: operator.sub,
    BinaryOperator.MULTIPLY: operator.mul,
    BinaryOperator.DIVIDE: _divide,
    BinaryOperator.MODULO: _modulo,
    BinaryOperator.POWER: _power,
    BinaryOperator.ROOT: _root,
    BinaryOperator.LOG_BASE: _log_base,
}

# Toman la base de la pantalla sin resolver la operación pendiente.
_DIRECT_OPERATORS = frozenset({
    BinaryOperator.POWER,
    BinaryOperator.ROOT,
    BinaryOperator.LOG_BASE,
})

# Porcentaje relativo al valor guardado; ÷ usa el porcentaje como divisor.
_PERCENT_TABLE: dict[BinaryOperator, Callable[[float, float], float]] = {
    BinaryOperator.ADD: lambda base, pct: base + base * pct / 100,
    BinaryOperator.SUBTRACT: lambda base, pct: base - base * pct / 100,
    BinaryOperator.MULTIPLY: lambda base, pct: base * (pct / 100),
    BinaryOperator.DIVIDE: lambda base, pct: _divide(base, pct / 100),
}


def _finite(value) -> float:
    value = float(value)
    if math.isnan(value):
        raise InvalidInputError()
    if math.isinf(value):
        raise ResultOverflowError()
    return value


class CalculatorEngine:
    """Máquina de estados de la calculadora."""

    def __init__(self, settings: Settings | None = None, provider=None):
        settings = settings if settings is not None else Settings()
        if provider is None:
            provider = MPMathProvider(settings.angle_mode, seed=settings.random_seed)
        self._provider = provider
        self._unary_rules = provider.build_unary_table()
        self._trig_rules = provider.build_trig_table()
        self._function_rules = provider.build_function_table()
        self._memory_handlers = {
            MemoryOperation.CLEAR: self._memory_clear,
            MemoryOperation.RECALL: self._memory_recall,
            MemoryOperation.STORE: self._memory_store,
            MemoryOperation.ADD: self._memory_add,
            MemoryOperation.SUBTRACT: self._memory_subtract,
            MemoryOperation.PEEK: self._memory_peek,
        }
        self._listeners: list[Callable[[Notification], None]] = []
        self._state = EngineState(angle_mode=provider.angle_mode)

    # ── Salida observable ────────────────────────────────────────

    @property
    def display(self) -> str:
        return self._state.buffer

    @property
    def operation(self) -> str:
        return self._state.operation

    @property
    def current_value(self) -> float:
        return self._state.current_value

    @property
    def stored_value(self) -> float:
        return self._state.stored_value

    @property
    def pending_operator(self) -> BinaryOperator | None:
        return self._state.pending_operator

    @property
    def memory_value(self) -> float | None:
        return self._state.memory_value

    @property
    def has_memory(self) -> bool:
        return self._state.memory_value is not None

    @property
    def entry_state(self) -> EntryState:
        return self._state.entry

    @property
    def is_entry_fresh(self) -> bool:
        return self._state.entry.is_fresh

    @property
    def just_calculated(self) -> bool:
        return self._state.entry.just_calculated

    @property
    def state(self) -> EngineState:
        """Copia del estado actual."""
        return replace(self._state)

    # ── Propiedad: modo angular ──────────────────────────────────

    @property
    def angle_mode(self) -> AngleMode:
        return self._provider.angle_mode

    @angle_mode.setter
    def angle_mode(self, mode):
        self._provider.angle_mode = mode
        self._state.angle_mode = self._provider.angle_mode

    def toggle_angle_mode(self) -> str:
        """DEG → RAD → GRAD → DEG. Devuelve la etiqueta del nuevo modo."""
        self.angle_mode = self.angle_mode.next()
        logger.info("Modo angular: %s", self.angle_mode.label)
        return self.angle_mode.label

    # ── Notificaciones ───────────────────────────────────────────

    def add_listener(self, callback: Callable[[Notification], None]):
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[Notification], None]):
        self._listeners.remove(callback)

    def _notify(self, notification: Notification) -> Notification:
        logger.info("%s: %s", notification.title, notification.message)
        for callback in list(self._listeners):
            callback(notification)
        return notification

    # ── Entrada de dígitos ───────────────────────────────────────

    def enter_digit(self, token: str):
        token = str(token).strip()
        if token == ".":
            token = SEPARATOR
        if len(token) != 1 or (token not in DIGITS and token != SEPARATOR):
            raise ValueError(f"Dígito no válido: {token!r}")

        state = self._state
        if state.entry is not EntryState.ENTERING:
            state.buffer = ""
            state.entry = EntryState.ENTERING

        if token == SEPARATOR:
            if SEPARATOR in state.buffer:
                return
            state.buffer = (state.buffer or "0") + SEPARATOR
        elif state.buffer == "0":
            state.buffer = token
        elif parse_number(state.buffer + token) is None:
            logger.debug("Dígito %s ignorado: fuera de rango", token)
            return
        else:
            state.buffer += token
        logger.debug("Dígito %s -> pantalla=%s", token, state.buffer)

    # ── Operadores binarios ──────────────────────────────────────

    def enter_operator(self, op):
        if isinstance(op, str) and op.strip() == EQUALS:
            self.equals()
            return

        pending = BinaryOperator(op)
        state = self._state
        if pending in _DIRECT_OPERATORS:
            base = parse_number(state.buffer)
            if base is None:
                return
            state.stored_value = base
        else:
            try:
                self._resolve_pending()
            except CalculatorError as exc:
                self._fail(exc, clear_pending=True)
                return
            state.stored_value = state.current_value

        state.pending_operator = pending
        state.operation = pending.trace(format_number(state.stored_value))
        state.entry = EntryState.IDLE
        logger.debug("Operador %s (guardado=%s)", pending.label, state.stored_value)

    def equals(self):
        state = self._state
        try:
            resolved = self._resolve_pending()
        except CalculatorError as exc:
            self._fail(exc, clear_pending=True)
            return

        if resolved:
            state.buffer = format_number(state.current_value)
        state.operation = format_number(state.current_value)
        state.pending_operator = None
        state.entry = EntryState.CALCULATED
        logger.info("= -> resultado=%s", state.buffer)

    def _resolve_pending(self) -> bool:
        """Aplica el operador pendiente al número de la pantalla.

        Devuelve False si la pantalla no contiene un número; en ese caso
        el estado no cambia.
        """
        state = self._state
        right = parse_number(state.buffer)
        if right is None:
            return False

        pending = state.pending_operator
        if pending is None:
            state.current_value = right
            return True

        result = self._evaluate(_BINARY_TABLE[pending], state.stored_value, right)
        logger.debug(
            "Cálculo: %s %s %s = %s", state.stored_value, pending.label, right, result
        )
        state.current_value = result
        state.buffer = format_number(result)
        return True

    # ── Funciones inmediatas ─────────────────────────────────────

    def apply_unary(self, op):
        self._apply_rule(self._unary_rules[UnaryOperation(op)])

    def apply_trig(self, name):
        self._apply_rule(self._trig_rules[TrigFunction(name)])

    def _apply_rule(self, rule):
        state = self._state
        value = parse_number(state.buffer)
        if value is None:
            if rule.needs_input:
                logger.debug("%s ignorado: pantalla=%r", rule.symbol, state.buffer)
                return
            value = 0.0

        try:
            rule.check(value)
            result = self._evaluate(rule.transform, value)
        except CalculatorError as exc:
            self._fail(exc)
            return

        state.current_value = result
        state.buffer = format_number(result)
        state.operation = rule.trace(format_number(value))
        state.entry = EntryState.CALCULATED
        logger.debug("%s -> %s", state.operation, state.buffer)

    def apply_function(self, name):
        rule = self._function_rules[UtilityFunction(name)]
        state = self._state
        value = parse_or_zero(state.buffer)

        try:
            result = self._evaluate(rule.transform, value)
        except CalculatorError as exc:
            self._fail(exc)
            return

        state.operation = rule.describe(format_number(value))
        if isinstance(result, str):
            state.buffer = result
        else:
            state.current_value = float(result)
            state.buffer = format_number(result)
        state.entry = EntryState.CALCULATED
        logger.debug("%s -> %s", state.operation, state.buffer)

    def percentage(self):
        state = self._state
        percent = parse_number(state.buffer)
        if percent is None:
            return

        rule = _PERCENT_TABLE.get(state.pending_operator, lambda _base, pct: pct / 100)
        try:
            result = self._evaluate(rule, state.stored_value, percent)
        except CalculatorError as exc:
            self._fail(exc)
            return

        state.buffer = state.operation = format_number(result)
        state.current_value = state.stored_value = result
        state.pending_operator = None
        state.entry = EntryState.CALCULATED
        logger.info("Porcentaje -> %s", state.buffer)

    # ── Edición ──────────────────────────────────────────────────

    def toggle_sign(self):
        state = self._state
        if state.buffer in ("", "0", "0" + SEPARATOR):
            return
        value = parse_number(state.buffer)
        if value is None:
            return
        state.buffer = format_number(-value)

    def backspace(self):
        state = self._state
        if state.buffer in ERROR_MESSAGES or parse_number(state.buffer) is None:
            state.buffer = "0"
            return
        trimmed = state.buffer[:-1]
        state.buffer = trimmed if trimmed not in ("", "-") else "0"

    def clear_entry(self):
        self._state.buffer = "0"
        self._state.entry = EntryState.IDLE
        logger.info("CE")

    def clear_all(self):
        self._state = EngineState(
            memory_value=self._state.memory_value,
            angle_mode=self._state.angle_mode,
        )
        logger.info("C: estado reiniciado")

    # ── Memoria ──────────────────────────────────────────────────

    def memory_op(self, op) -> Notification:
        handler = self._memory_handlers[MemoryOperation(op)]
        try:
            notification = handler(parse_or_zero(self._state.buffer))
        except CalculatorError as exc:
            self._fail(exc)
            notification = Notification("Memory", exc.message)
        return self._notify(notification)

    def _memory_clear(self, _value: float) -> Notification:
        self._state.memory_value = None
        return Notification("Memory", "Memory cleared.")

    def _memory_recall(self, _value: float) -> Notification:
        memory = self._state.memory_value
        if memory is None:
            return _memory_empty()
        self._state.buffer = format_number(memory)
        self._state.entry = EntryState.CALCULATED
        return Notification("Memory", f"Recalled {format_number(memory)}")

    def _memory_store(self, value: float) -> Notification:
        self._state.memory_value = value
        return Notification("Memory", f"Saved {format_number(value)}")

    def _memory_add(self, value: float) -> Notification:
        return self._memory_accumulate(value)

    def _memory_subtract(self, value: float) -> Notification:
        return self._memory_accumulate(-value)

    def _memory_accumulate(self, delta: float) -> Notification:
        memory = self._state.memory_value
        if memory is None:
            self._state.memory_value = delta
            return Notification(
                "Memory", f"Memory initialized to {format_number(delta)}"
            )
        self._state.memory_value = _finite(memory + delta)
        return Notification(
            "Memory", f"Memory updated to {format_number(self._state.memory_value)}"
        )

    def _memory_peek(self, _value: float) -> Notification:
        memory = self._state.memory_value
        if memory is None:
            return _memory_empty()
        return Notification("Memory", f"Stored value: {format_number(memory)}")

    # ── Errores ──────────────────────────────────────────────────

    @staticmethod
    def _evaluate(fn, *args) -> float:
        try:
            result = fn(*args)
        except CalculatorError:
            raise
        except (ArithmeticError, ValueError) as exc:
            raise from_arithmetic(exc) from exc
        if isinstance(result, str):
            return result  # texto DMS
        return _finite(result)

    def _fail(self, error: CalculatorError, clear_pending: bool = False):
        """Muestra el error; el motor queda listo para la siguiente entrada."""
        state = self._state
        state.buffer = error.message
        if clear_pending:
            state.pending_operator = None
        state.entry = EntryState.CALCULATED
        logger.warning("%s (operación=%r)", error.message, state.operation)


def _memory_empty() -> Notification:
    return Notification("Memory", "Memory is empty.", NotificationKind.MEMORY_EMPTY)
