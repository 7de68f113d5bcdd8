from calculator_engine import CalculatorEngine, EngineState, EntryState
from operations import (
	BinaryOperator,
	MemoryOperation,
	TrigFunction,
	UnaryOperation,
	UtilityFunction,
)
import sys


_SIMPLE_KEYS = {
	"=": "equals",
	"%": "percentage",
	"±": "toggle_sign",
	"⌫": "backspace",
	"CE": "clear_entry",
	"C": "clear_all",
	"DRG": "toggle_angle_mode",
}


def _dispatch(engine: CalculatorEngine, key: str):
	if (len(key) == 1 and key in "0123456789") or key in (",", "."):
		engine.enter_digit(key)
		return
	if key in _SIMPLE_KEYS:
		getattr(engine, _SIMPLE_KEYS[key])()
		return

	handlers = (
		(BinaryOperator, engine.enter_operator),
		(UnaryOperation, engine.apply_unary),
		(TrigFunction, engine.apply_trig),
		(UtilityFunction, engine.apply_function),
		(MemoryOperation, engine.memory_op),
	)
	for enum_cls, handler in handlers:
		try:
			member = enum_cls(key)
		except ValueError:
			continue
		handler(member)
		return
	raise SystemExit(f"Tecla desconocida: {key}")


def press(keys, engine: CalculatorEngine | None = None) -> CalculatorEngine:
	"""Envía una secuencia de teclas al motor y lo devuelve."""
	engine = engine if engine is not None else CalculatorEngine()
	for key in keys:
		_dispatch(engine, key)
	return engine


def inspect_sequence(keys) -> None:
	"""Imprime pantalla y traza después de cada tecla."""
	engine = CalculatorEngine()
	print("Key inspection")
	print(f"keys:  {' '.join(keys)}")
	for i, key in enumerate(keys, start=1):
		_dispatch(engine, key)
		print(
			f"  {i}. {key:<8} display={engine.display!r:<22}"
			f" operation={engine.operation!r:<18} entry={engine.entry_state.value}"
		)
	print(f"final: {engine.display}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	checks.append(("leading zero replaced", press(["0", "5"]).display == "5"))
	checks.append(("decimal entry keeps separator", press(["5", ",", "5"]).display == "5,5"))
	checks.append((
		"second separator ignored",
		press(["1", ",", "2", ","]).display == "1,2",
	))

	engine = press(["5", "÷", "0", "="])
	expected_actual.append(("5 ÷ 0 =", "Division by zero", engine.display))
	press(["7"], engine)
	checks.append(("input accepted after division by zero", engine.display == "7"))

	engine = press(["4", "√"])
	checks.append(("square root result", engine.display == "2"))
	checks.append(("square root trace", engine.operation == "√(4)"))
	expected_actual.append(("-4 √", "Invalid input", press(["4", "±", "√"]).display))

	expected_actual.append(("9 %", "0,09", press(["9", "%"]).display))
	expected_actual.append((
		"100 + 10 %",
		"110",
		press(["1", "0", "0", "+", "1", "0", "%"]).display,
	))
	expected_actual.append(("0 + =", "0", press(["+", "="]).display))
	expected_actual.append(("5 ×", "5 ×", press(["5", "×"]).operation))
	expected_actual.append(("2 xʸ 10 =", "1024", press(["2", "xʸ", "1", "0", "="]).display))
	expected_actual.append((
		"2 + 3 xʸ 2 =",
		"9",
		press(["2", "+", "3", "xʸ", "2", "="]).display,
	))
	expected_actual.append(("3 ʸ√x 8 =", "2", press(["3", "ʸ√x", "8", "="]).display))
	expected_actual.append(("2 logy(x) 8 =", "3", press(["2", "logy(x)", "8", "="]).display))
	expected_actual.append((
		"1 logy(x) 5 =",
		"Invalid input",
		press(["1", "logy(x)", "5", "="]).display,
	))
	expected_actual.append(("7 mod 3 =", "1", press(["7", "mod", "3", "="]).display))
	expected_actual.append(("5 n!", "120", press(["5", "n!"]).display))
	expected_actual.append(("0 1/x", "Division by zero", press(["0", "1/x"]).display))
	expected_actual.append(("sin 30 (DEG)", "0,5", press(["3", "0", "sin"]).display))
	expected_actual.append(("csc 0", "Invalid input", press(["0", "csc"]).display))
	expected_actual.append(("2 sin^-1", "Invalid input", press(["2", "sin^-1"]).display))
	expected_actual.append(("30,5 →dms", "30° 30' 0\"", press(["3", "0", ",", "5", "→dms"]).display))
	expected_actual.append(("123 ⌫", "12", press(["1", "2", "3", "⌫"]).display))

	engine = CalculatorEngine()
	modes = [engine.toggle_angle_mode() for _ in range(3)]
	checks.append(("angle mode cycle", modes == ["RAD", "GRAD", "DEG"]))

	engine = press(["3", "M+"])
	first = engine.memory_value
	press(["C", "2"], engine)
	notification = engine.memory_op(MemoryOperation.ADD)
	checks.append(("M+ initializes empty memory", first == 3))
	checks.append(("M+ accumulates", engine.memory_value == 5))
	expected_actual.append(("M+ message", "Memory updated to 5", notification.message))

	engine = press(["1", "2", "+", "3", "sin", "M+", "DRG"])
	engine.clear_all()
	first_reset = engine.state
	engine.clear_all()
	checks.append(("clear all is idempotent", engine.state == first_reset))
	checks.append((
		"clear all canonical state",
		first_reset == EngineState(
			memory_value=engine.memory_value,
			angle_mode=engine.angle_mode,
		) and first_reset.entry is EntryState.IDLE,
	))

	failed = [name for name, ok in checks if not ok]
	failed += [label for label, expected, actual in expected_actual if expected != actual]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect 1 0 0 + 1 0 %
	if "--inspect" in sys.argv:
		keys = sys.argv[sys.argv.index("--inspect") + 1:]
		if not keys:
			raise SystemExit("Missing keys after --inspect")
		inspect_sequence(keys)
	else:
		run_regressions()
