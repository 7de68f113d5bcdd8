"""Entrada de dígitos, signo, borrado y limpieza."""

import pytest

from calculator_engine import EngineState, EntryState
from number_format import parse_number
from operations import AngleMode, BinaryOperator
from regression_checks import press


class TestDigitEntry:
    def test_initial_state(self, engine):
        assert engine.display == "0"
        assert engine.operation == ""
        assert engine.entry_state is EntryState.IDLE
        assert engine.is_entry_fresh
        assert not engine.just_calculated

    def test_leading_zero_is_replaced(self, engine):
        press(["0", "5"], engine)
        assert engine.display == "5"

    def test_zeros_do_not_accumulate(self, engine):
        press(["0", "0", "0"], engine)
        assert engine.display == "0"

    def test_decimal_entry(self, engine):
        press(["5", ",", "5"], engine)
        assert engine.display == "5,5"

    def test_point_is_stored_as_comma(self, engine):
        press(["1", ".", "2", "5"], engine)
        assert engine.display == "1,25"

    def test_second_separator_is_ignored(self, engine):
        press(["1", ",", "2", ","], engine)
        assert engine.display == "1,2"
        press([","], engine)
        assert engine.display == "1,2"

    def test_separator_on_fresh_entry_keeps_leading_zero(self, engine):
        press([","], engine)
        assert engine.display == "0,"
        press(["5"], engine)
        assert engine.display == "0,5"

    def test_zero_then_separator(self, engine):
        press(["0", ",", "0", "7"], engine)
        assert engine.display == "0,07"

    def test_entering_state(self, engine):
        press(["4"], engine)
        assert engine.entry_state is EntryState.ENTERING
        assert not engine.is_entry_fresh

    def test_digit_after_result_starts_new_number(self, engine):
        press(["2", "+", "3", "=", "4"], engine)
        assert engine.display == "4"

    def test_digit_after_operator_starts_new_number(self, engine):
        press(["1", "2", "+", "7"], engine)
        assert engine.display == "7"

    @pytest.mark.parametrize("token", ["a", "12", "", "-", "²"])
    def test_invalid_token(self, engine, token):
        with pytest.raises(ValueError):
            engine.enter_digit(token)


class TestToggleSign:
    def test_negates(self, engine):
        press(["5", "±"], engine)
        assert engine.display == "-5"
        press(["±"], engine)
        assert engine.display == "5"

    def test_decimal_value(self, engine):
        press(["2", ",", "5", "±"], engine)
        assert engine.display == "-2,5"

    @pytest.mark.parametrize("keys", [["0"], ["0", ","], []])
    def test_zero_is_untouched(self, engine, keys):
        press(keys + ["±"], engine)
        assert engine.display in ("0", "0,")

    def test_error_text_is_untouched(self, engine):
        press(["1", "/", "0", "=", "±"], engine)
        assert engine.display == "Division by zero"


class TestBackspace:
    def test_removes_last_character(self, engine):
        press(["1", "2", ",", "5", "⌫"], engine)
        assert engine.display == "12,"

    def test_empty_buffer_resets_to_zero(self, engine):
        press(["7", "⌫"], engine)
        assert engine.display == "0"

    def test_lone_minus_resets_to_zero(self, engine):
        press(["5", "±", "⌫"], engine)
        assert engine.display == "0"

    def test_error_message_is_cleared(self, engine):
        press(["4", "±", "√", "⌫"], engine)
        assert engine.display == "0"


class TestClear:
    def test_clear_entry_keeps_pending_operation(self, engine):
        press(["5", "+", "3", "CE"], engine)
        assert engine.display == "0"
        assert engine.is_entry_fresh
        assert engine.pending_operator is BinaryOperator.ADD
        assert engine.stored_value == 5
        press(["2", "="], engine)
        assert engine.display == "7"

    def test_clear_all_resets_state(self, engine):
        press(["1", "2", "×", "3", "sin"], engine)
        engine.clear_all()
        assert engine.display == "0"
        assert engine.operation == ""
        assert engine.current_value == 0
        assert engine.stored_value == 0
        assert engine.pending_operator is None
        assert engine.entry_state is EntryState.IDLE

    def test_clear_all_is_idempotent(self, engine):
        press(["9", "÷", "0", "=", "M+", "DRG", "4", ",", "2"], engine)
        engine.clear_all()
        first = engine.state
        engine.clear_all()
        assert engine.state == first
        assert first == EngineState(
            memory_value=engine.memory_value,
            angle_mode=AngleMode.RAD,
        )

    def test_clear_all_keeps_memory_and_angle_mode(self, engine):
        press(["8", "MS", "DRG"], engine)
        engine.clear_all()
        assert engine.memory_value == 8
        assert engine.angle_mode is AngleMode.RAD

    def test_state_is_a_copy(self, engine):
        snapshot = engine.state
        snapshot.buffer = "123"
        assert engine.display == "0"


class TestLongEntry:
    def test_digits_beyond_float_range_are_ignored(self, engine):
        press(["9"] * 400, engine)
        assert engine.display == "9" * 308
        assert parse_number(engine.display) is not None

    def test_separator_still_accepted(self, engine):
        press(["9"] * 400 + [",", "5"], engine)
        assert engine.display == "9" * 308 + ",5"
