"""Errores del motor de la calculadora.

Cada error lleva el mensaje que se muestra en la pantalla. Ninguno es
fatal: el motor los captura al final de cada evento de entrada.
"""


class CalculatorError(Exception):
    """Error recuperable que reemplaza el contenido de la pantalla."""

    message = "Error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class DivisionByZeroError(CalculatorError):
    message = "Division by zero"


class InvalidInputError(CalculatorError):
    message = "Invalid input"


class ResultOverflowError(CalculatorError):
    message = "Overflow"


ERROR_MESSAGES = frozenset(
    cls.message
    for cls in (DivisionByZeroError, InvalidInputError, ResultOverflowError)
)


def from_arithmetic(exc: Exception) -> CalculatorError:
    """Traduce excepciones de Python/mpmath al error de la calculadora."""
    if isinstance(exc, CalculatorError):
        return exc
    if isinstance(exc, ZeroDivisionError):
        return DivisionByZeroError()
    if isinstance(exc, OverflowError):
        return ResultOverflowError()
    return InvalidInputError()
