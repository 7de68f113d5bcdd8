import math

import pytest
from mpmath import mp

from errors import DivisionByZeroError, InvalidInputError, ResultOverflowError, from_arithmetic
from math_provider import MPMathProvider
from operations import (
    AngleMode,
    BinaryOperator,
    MemoryOperation,
    TrigFunction,
    UnaryOperation,
    UtilityFunction,
)


class TestLabels:
    @pytest.mark.parametrize("enum_cls, label, member", [
        (BinaryOperator, "-", BinaryOperator.SUBTRACT),
        (BinaryOperator, "*", BinaryOperator.MULTIPLY),
        (BinaryOperator, "/", BinaryOperator.DIVIDE),
        (BinaryOperator, "^", BinaryOperator.POWER),
        (BinaryOperator, "MOD", BinaryOperator.MODULO),
        (UnaryOperation, "sqrt", UnaryOperation.SQUARE_ROOT),
        (UnaryOperation, "pi", UnaryOperation.PI),
        (TrigFunction, "SIN^-1", TrigFunction.ASIN),
        (UtilityFunction, "dms", UtilityFunction.TO_DMS),
        (MemoryOperation, "M−", MemoryOperation.SUBTRACT),
        (AngleMode, "rad", AngleMode.RAD),
    ])
    def test_alias(self, enum_cls, label, member):
        assert enum_cls(label) is member

    def test_percent_is_not_an_operator(self):
        with pytest.raises(ValueError):
            BinaryOperator("%")

    def test_label(self):
        assert UnaryOperation.FACTORIAL.label == "n!"

    def test_angle_mode_cycle(self):
        assert AngleMode.DEG.next() is AngleMode.RAD
        assert AngleMode.GRAD.next() is AngleMode.DEG


class TestErrors:
    @pytest.mark.parametrize("exc, expected", [
        (ZeroDivisionError(), DivisionByZeroError),
        (OverflowError(), ResultOverflowError),
        (ValueError("math domain error"), InvalidInputError),
    ])
    def test_from_arithmetic(self, exc, expected):
        assert isinstance(from_arithmetic(exc), expected)

    def test_custom_message(self):
        assert str(InvalidInputError("Bad base")) == "Bad base"
        assert InvalidInputError().message == "Invalid input"


class TestMathProvider:
    @pytest.mark.parametrize("mode, value, radians", [
        (AngleMode.DEG, 180, math.pi),
        (AngleMode.GRAD, 100, math.pi / 2),
        (AngleMode.RAD, 2, 2),
    ])
    def test_to_radians(self, mode, value, radians):
        provider = MPMathProvider(mode)
        assert float(provider.to_radians(value)) == pytest.approx(radians)
        assert float(provider.from_radians(radians)) == pytest.approx(value)

    def test_rejects_unknown_mode(self):
        provider = MPMathProvider()
        with pytest.raises(ValueError):
            provider.angle_mode = "turns"

    def test_complex_result_is_invalid(self):
        sqrt = MPMathProvider._real(mp.sqrt)
        with pytest.raises(InvalidInputError):
            sqrt(-1)

    def test_trig_table_follows_mode_changes(self):
        provider = MPMathProvider(AngleMode.DEG)
        sin = provider.build_trig_table()[TrigFunction.SIN]
        assert sin.transform(90) == pytest.approx(1)
        provider.angle_mode = AngleMode.RAD
        assert sin.transform(math.pi / 2) == pytest.approx(1)

    def test_seeded_random(self):
        first = MPMathProvider(seed=3).build_function_table()[UtilityFunction.RANDOM]
        second = MPMathProvider(seed=3).build_function_table()[UtilityFunction.RANDOM]
        assert first.transform(0) == second.transform(0)
