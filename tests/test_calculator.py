import pytest

from medschedule.utils.calculator import Calculator, format_number


def press(keys):
    return Calculator().press_all(keys)


def test_starts_at_zero():
    assert Calculator().display == "0"


def test_digits_replace_leading_zero():
    assert press(["0", "0", "7", "5"]) == "75"


def test_simple_addition():
    assert press(["1", "2", "+", "3", "="]) == "15"


def test_operator_chaining_evaluates_pending_operation():
    calc = Calculator()
    calc.press_all(["2", "+", "3"])
    assert calc.press("×") == "5"
    assert calc.press_all(["4", "="]) == "20"


def test_switching_operator_does_not_evaluate():
    assert press(["8", "+", "-", "3", "="]) == "5"


def test_decimal_input():
    assert press(["1", ".", ".", "5", "+", "1", "="]) == "2.5"


def test_decimal_after_operator_starts_new_operand():
    assert press(["3", "+", ".", "5", "="]) == "3.5"


def test_floating_point_rendering():
    assert press(["0", ".", "1", "+", "0", ".", "2", "="]) == "0.30000000000000004"


def test_division_by_zero_is_infinity():
    assert press(["5", "÷", "0", "="]) == "Infinity"


def test_percent():
    assert press(["5", "0", "%"]) == "0.5"


def test_equals_without_operator_keeps_display():
    assert press(["4", "2", "="]) == "42"


def test_result_feeds_next_operation():
    assert press(["6", "*", "7", "=", "-", "2", "="]) == "40"


def test_clear():
    assert press(["9", "+", "1", "C"]) == "0"


def test_invalid_key():
    with pytest.raises(ValueError):
        Calculator().press("x")


@pytest.mark.parametrize(
    "value, expected",
    [
        (3.0, "3"),
        (-0.5, "-0.5"),
        (1e21, "1e+21"),
        (1e-7, "1e-7"),
        (123456789012.0, "123456789012"),
        (float("-inf"), "-Infinity"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_calculator_endpoint(client):
    response = client.post("/tools/calculator", json={"keys": ["9", "−", "4", "="]})
    assert response.json() == {"display": "5"}

    assert client.post("/tools/calculator", json={"keys": ["?"]}).status_code == 422
