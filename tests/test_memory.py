"""Registro de memoria y notificaciones."""

import pytest

from calculator_engine import EntryState, Notification, NotificationKind
from operations import MemoryOperation
from regression_checks import press


class TestMemory:
    def test_starts_empty(self, engine):
        assert engine.memory_value is None
        assert not engine.has_memory

    def test_store(self, engine, notifications):
        press(["4", ",", "5", "MS"], engine)
        assert engine.memory_value == 4.5
        assert notifications == [Notification("Memory", "Saved 4,5")]

    def test_store_does_not_touch_display(self, engine):
        press(["4", "MS"], engine)
        assert engine.display == "4"
        assert engine.entry_state is EntryState.ENTERING

    def test_clear(self, engine, notifications):
        press(["4", "MS", "MC"], engine)
        assert engine.memory_value is None
        assert notifications[-1].message == "Memory cleared."

    def test_recall(self, engine, notifications):
        press(["8", "MS", "C", "MR"], engine)
        assert engine.display == "8"
        assert engine.just_calculated
        assert notifications[-1].message == "Recalled 8"

    def test_digit_after_recall_starts_new_number(self, engine):
        press(["8", "MS", "MR", "3"], engine)
        assert engine.display == "3"

    def test_recall_feeds_pending_operation(self, engine):
        press(["6", "MS", "C", "4", "+", "MR", "="], engine)
        assert engine.display == "10"

    @pytest.mark.parametrize("key", ["MR", "M↓"])
    def test_empty_memory(self, engine, notifications, key):
        press(["7", key], engine)
        assert engine.display == "7"
        assert notifications == [
            Notification("Memory", "Memory is empty.", NotificationKind.MEMORY_EMPTY),
        ]

    def test_add_initializes_then_updates(self, engine, notifications):
        press(["3", "M+", "C", "2", "M+"], engine)
        assert engine.memory_value == 5
        assert [n.message for n in notifications] == [
            "Memory initialized to 3",
            "Memory updated to 5",
        ]

    def test_subtract_on_empty_memory(self, engine, notifications):
        press(["3", "M-"], engine)
        assert engine.memory_value == -3
        assert notifications[-1].message == "Memory initialized to -3"

    def test_subtract_updates(self, engine):
        press(["1", "0", "MS", "4", "M−"], engine)
        assert engine.memory_value == 6

    def test_peek(self, engine, notifications):
        press(["2", ",", "5", "MS", "C", "M↓"], engine)
        assert notifications[-1].message == "Stored value: 2,5"
        assert engine.display == "0"

    def test_unparseable_buffer_reads_as_zero(self, engine):
        press(["0", "1/x", "MS"], engine)
        assert engine.memory_value == 0

    def test_memory_op_returns_notification(self, engine):
        result = engine.memory_op(MemoryOperation.STORE)
        assert result == Notification("Memory", "Saved 0")

    def test_remove_listener(self, engine, notifications):
        engine.remove_listener(notifications.append)
        press(["1", "MS"], engine)
        assert notifications == []

    def test_unknown_operation(self, engine):
        with pytest.raises(ValueError):
            engine.memory_op("M*")


class TestMemoryRange:
    def test_store_long_entry(self, engine, notifications):
        press(["9"] * 400 + ["MS"], engine)
        assert engine.memory_value == float("9" * 308)
        assert "∞" not in notifications[-1].message

    def test_accumulate_overflow(self, engine, notifications):
        press(["9"] * 400 + ["MS", "M+"], engine)
        assert engine.display == "Overflow"
        assert engine.memory_value == float("9" * 308)
        assert notifications[-1] == Notification("Memory", "Overflow")
