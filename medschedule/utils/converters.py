"""Unit conversion and everyday health/shopping formulas. Pure functions, no I/O."""

import math

# unit -> (label, factor to the base unit)
LENGTH_UNITS = {
    "m": ("Meter", 1),
    "km": ("Kilometer", 1000),
    "cm": ("Centimeter", 0.01),
    "mi": ("Mile", 1609.34),
    "ft": ("Foot", 0.3048),
    "in": ("Inch", 0.0254),
}

MASS_UNITS = {
    "kg": ("Kilogram", 1),
    "g": ("Gram", 0.001),
    "lb": ("Pound", 0.453592),
    "oz": ("Ounce", 0.0283495),
}

AREA_UNITS = {
    "sqm": ("Square meter", 1),
    "sqkm": ("Square kilometer", 1_000_000),
    "sqft": ("Square foot", 0.092903),
    "acre": ("Acre", 4046.86),
}

DATA_UNITS = {
    "B": ("Byte", 1),
    "KB": ("Kilobyte", 1024),
    "MB": ("Megabyte", 1024**2),
    "GB": ("Gigabyte", 1024**3),
    "TB": ("Terabyte", 1024**4),
}

UNIT_TABLES = {
    "length": LENGTH_UNITS,
    "mass": MASS_UNITS,
    "area": AREA_UNITS,
    "data": DATA_UNITS,
}

ACTIVITY_LEVELS = {
    "sedentary": 1.2,  # desk job
    "light": 1.375,  # exercise 1-3 days/week
    "moderate": 1.55,  # exercise 3-5 days/week
    "active": 1.725,  # exercise 6-7 days/week
    "very_active": 1.9,  # hard physical work
}

TEMPERATURE_SCALES = ("celsius", "fahrenheit", "kelvin")


def to_precision(value: float, digits: int) -> float:
    """Round to ``digits`` significant digits"""
    return float(f"{value:.{digits}g}")


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def convert_temperature(value: float, scale: str) -> dict:
    """
    Convert a temperature to all three scales.

    The input scale keeps the exact value; the others are rounded to 6
    significant digits.
    """
    if scale == "celsius":
        celsius = value
    elif scale == "fahrenheit":
        celsius = (value - 32) * 5 / 9
    elif scale == "kelvin":
        celsius = value - 273.15
    else:
        raise ValueError(f"Unknown temperature scale: {scale}")

    results = {
        "celsius": celsius,
        "fahrenheit": celsius * 9 / 5 + 32,
        "kelvin": celsius + 273.15,
    }
    return {
        name: value if name == scale else to_precision(converted, 6)
        for name, converted in results.items()
    }


def convert_units(value: float, from_unit: str, to_unit: str, category: str) -> float:
    """Linear conversion through the category's base unit, 8 significant digits"""
    units = UNIT_TABLES.get(category)
    if units is None:
        raise ValueError(f"Unknown unit category: {category}")
    if from_unit not in units or to_unit not in units:
        raise ValueError(f"Unknown {category} unit: {from_unit if from_unit not in units else to_unit}")

    result = value * units[from_unit][1] / units[to_unit][1]
    if result == 0:
        return 0.0
    return to_precision(result, 8)


def bmi_category(bmi: float) -> str:
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal weight"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def calculate_bmi(weight_kg: float, height_cm: float) -> dict:
    if weight_kg <= 0 or height_cm <= 0:
        raise ValueError("Weight and height must be positive")

    height_m = height_cm / 100
    bmi = weight_kg / (height_m * height_m)
    return {"bmi": round(bmi, 1), "category": bmi_category(bmi)}


def calculate_calories(
    gender: str, age: int, weight_kg: float, height_cm: float, activity_level: str
) -> int:
    """Daily calorie needs: Mifflin-St Jeor BMR times the activity factor"""
    if age <= 0 or weight_kg <= 0 or height_cm <= 0:
        raise ValueError("Age, weight and height must be positive")
    if activity_level not in ACTIVITY_LEVELS:
        raise ValueError(f"Unknown activity level: {activity_level}")

    bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == "male":
        bmr += 5
    elif gender == "female":
        bmr -= 161
    else:
        raise ValueError(f"Unknown gender: {gender}")

    return round_half_up(bmr * ACTIVITY_LEVELS[activity_level])


def calculate_discount(price: float, discount_percent: float) -> dict:
    if price <= 0 or discount_percent < 0:
        raise ValueError("Price must be positive and discount cannot be negative")

    saved = price * (discount_percent / 100)
    return {"saved": round(saved, 2), "finalPrice": round(price - saved, 2)}
