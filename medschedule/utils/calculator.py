"""
Single-screen calculator accumulator with operator chaining.

Pressing an operator while another is pending evaluates the pending one first,
so ``2 + 3 ×`` shows ``5`` before the next operand is entered.
"""

import math
from decimal import Decimal
from typing import Iterable, Optional

# Display symbols map onto the ASCII operators used internally
OPERATOR_ALIASES = {
    "+": "+",
    "-": "-",
    "−": "-",
    "*": "*",
    "×": "*",
    "/": "/",
    "÷": "/",
}

CLEAR_KEYS = {"C", "AC"}


def format_number(value: float) -> str:
    """Render a float the way a calculator display shows it.

    Integral values drop the decimal point, very large or very small values use
    exponent form, and division by zero reads ``Infinity``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    text = repr(value)
    if 1e-6 <= abs(value) < 1e21:
        text = format(Decimal(text), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text

    mantissa, _, exponent = text.partition("e")
    if not exponent:
        return mantissa
    exp = int(exponent)
    return f"{mantissa}e{'+' if exp > 0 else '-'}{abs(exp)}"


def calculate(first: float, second: float, operator: str) -> float:
    if operator == "+":
        return first + second
    if operator == "-":
        return first - second
    if operator == "*":
        return first * second
    if operator == "/":
        return math.inf if second == 0 else first / second
    return second


class Calculator:
    def __init__(self):
        self.clear_all()

    def clear_all(self) -> None:
        self.display = "0"
        self.first_operand: Optional[float] = None
        self.operator: Optional[str] = None
        self.waiting_for_second_operand = False

    def input_digit(self, digit: str) -> None:
        if len(digit) != 1 or not digit.isdigit():
            raise ValueError(f"Not a digit: {digit!r}")

        if self.waiting_for_second_operand:
            self.display = digit
            self.waiting_for_second_operand = False
        else:
            self.display = digit if self.display == "0" else self.display + digit

    def input_decimal(self) -> None:
        # A decimal point right after an operator starts the next operand
        if self.waiting_for_second_operand:
            self.display = "0."
            self.waiting_for_second_operand = False
        elif "." not in self.display:
            self.display += "."

    def handle_operator(self, next_operator: str) -> None:
        operator = OPERATOR_ALIASES.get(next_operator)
        if operator is None:
            raise ValueError(f"Unknown operator: {next_operator!r}")

        input_value = float(self.display)
        if self.operator and not self.waiting_for_second_operand:
            result = calculate(self.first_operand, input_value, self.operator)
            self.display = format_number(result)
            self.first_operand = result
        else:
            self.first_operand = input_value

        self.waiting_for_second_operand = True
        self.operator = operator

    def handle_equals(self) -> None:
        if not self.operator or self.first_operand is None:
            return

        result = calculate(self.first_operand, float(self.display), self.operator)
        self.display = format_number(result)
        self.first_operand = result
        self.operator = None
        self.waiting_for_second_operand = True

    def handle_percent(self) -> None:
        self.display = format_number(float(self.display) / 100)

    def press(self, key: str) -> str:
        """Apply one key press and return the new display"""
        if key in CLEAR_KEYS:
            self.clear_all()
        elif key == ".":
            self.input_decimal()
        elif key == "=":
            self.handle_equals()
        elif key == "%":
            self.handle_percent()
        elif key in OPERATOR_ALIASES:
            self.handle_operator(key)
        else:
            self.input_digit(key)
        return self.display

    def press_all(self, keys: Iterable[str]) -> str:
        for key in keys:
            self.press(key)
        return self.display
