from calculator_engine import CalculatorEngine
from keypad import replay
import random
import sys


# (nombre, secuencia, pantalla esperada tras cada token)
REGRESSIONS = [
	("digit cap at nine digits", "11111111111111111111", ["111111111"]),
	("division by zero then digit", "5 ÷ 0 = 3", ["5", "5", "0", "Error", "3"]),
	("percent relative to accumulator", "200 + 10 % =", ["200", "200", "10", "20", "220"]),
	("percent of a product operand", "200 × 50 % =", ["200", "200", "50", "0.5", "100"]),
	("parenthesis scoping", "( 2 + 3 ) × 4 =", ["0", "2", "2", "3", "5", "5", "4", "20"]),
	("nested parentheses", "2 × ( 3 + ( 1 + 1 ) ) =", ["2", "2", "2", "3", "3", "3", "1", "1", "1", "2", "5", "10"]),
	("repeated equals", "5 + 3 = = =", ["5", "5", "3", "8", "11", "14"]),
	("operator overwrite", "5 + × 2 =", ["5", "5", "5", "2", "10"]),
	("operand doubled by bare equals", "5 + =", ["5", "5", "10"]),
	("left-to-right chaining", "5 + 3 × 2 =", ["5", "5", "3", "8", "2", "16"]),
	("negate fresh zero", "± 5", ["-0", "-5"]),
	("negate while typing decimal", "3. ±", ["3.", "-3."]),
	("decimal addition", "1.5 + 2.3 =", ["1.5", "1.5", "2.3", "3.8"]),
	("large product stays integral", "99999 × 99999 =", ["99999", "99999", "99999", "9999800001"]),
	("nine significant digits", "2 ÷ 3 =", ["2", "2", "3", "0.666666667"]),
	("factorial of five", "5 x!", ["5", "120"]),
	("factorial overflow", "171 x!", ["171", "Error"]),
	("reciprocal of zero", "0 1/x", ["0", "Error"]),
	("zero-th root", "8 ʸ√x 0 =", ["8", "8", "0", "Error"]),
	("cube root keeps sign", "27 ± ³√x", ["27", "-27", "-3"]),
	("scientific exponent", "3 EE 4 =", ["3", "3", "4", "30000"]),
	("sine in degrees", "30 sin", ["30", "0.5"]),
	("memory round trip", "7 m+ AC mr", ["7", "7", "0", "7"]),
	("clear entry keeps operation", "5 + 3 C 7 =", ["5", "5", "3", "0", "7", "12"]),
]


def _run(sequence: str) -> list[str]:
	engine = CalculatorEngine(rng=random.Random(0))
	return replay(engine, sequence)


def inspect_sequence(sequence: str) -> None:
	"""Imprime la pantalla y los indicadores tras cada token."""
	engine = CalculatorEngine(rng=random.Random(0))

	print("Sequence inspection")
	print(f"sequence:       {sequence}")
	for token in sequence.split():
		replay(engine, token)
		state = engine.snapshot()
		active = state.active_operation.value if state.active_operation else "-"
		clear = "AC" if state.is_all_clear else "C"
		print(f"  {token:>8}  {state.display_text:>16}  op={active:<4} {clear:<2} depth={state.parentheses_depth}")

	print(f"final text:     {engine.display_text}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	for name, sequence, expected in REGRESSIONS:
		actual = _run(sequence)
		checks.append((name, actual == expected))
		expected_actual.append((sequence, " | ".join(expected), " | ".join(actual)))

	failed = [name for name, ok in checks if not ok]
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
	#   python regression_checks.py --inspect "5 + 3 = ="
	if "--inspect" in sys.argv:
		try:
			sequence = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing sequence after --inspect")

		inspect_sequence(sequence)
	else:
		run_regressions()
