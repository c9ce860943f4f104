"""Calculator and converter endpoints. Stateless; no authentication required."""

from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ..errors import Invalid
from ..utils.calculator import Calculator
from ..utils.converters import (
    ACTIVITY_LEVELS,
    UNIT_TABLES,
    calculate_bmi,
    calculate_calories,
    calculate_discount,
    convert_temperature,
    convert_units,
)

router = APIRouter(prefix="/tools", tags=["Tools"])


class CalculatorRequest(BaseModel):
    keys: list[str] = Field(..., description='Key presses in order, e.g. ["1", "+", "2", "="]')


class CalculatorResponse(BaseModel):
    display: str


class TemperatureRequest(BaseModel):
    value: float
    scale: Literal["celsius", "fahrenheit", "kelvin"]


class UnitConversionRequest(BaseModel):
    category: Literal["length", "mass", "area", "data"]
    value: float
    fromUnit: str
    toUnit: str


class BMIRequest(BaseModel):
    weightKg: float
    heightCm: float


class CalorieRequest(BaseModel):
    gender: Literal["male", "female"]
    age: int
    weightKg: float
    heightCm: float
    activityLevel: str = "sedentary"


class DiscountRequest(BaseModel):
    price: float
    discountPercent: float


@router.post("/calculator", response_model=CalculatorResponse)
async def run_calculator(data: CalculatorRequest):
    """Replay key presses on a fresh calculator and return the display"""
    try:
        display = Calculator().press_all(data.keys)
    except ValueError as e:
        raise Invalid(str(e)) from e
    return CalculatorResponse(display=display)


@router.post("/temperature")
async def temperature(data: TemperatureRequest):
    return convert_temperature(data.value, data.scale)


@router.get("/units")
async def list_units():
    """Unit codes and labels per conversion category"""
    return {
        category: {code: label for code, (label, _factor) in units.items()}
        for category, units in UNIT_TABLES.items()
    }


@router.post("/convert")
async def convert(data: UnitConversionRequest):
    try:
        result = convert_units(data.value, data.fromUnit, data.toUnit, data.category)
    except ValueError as e:
        raise Invalid(str(e)) from e
    return {"value": data.value, "fromUnit": data.fromUnit, "toUnit": data.toUnit, "result": result}


@router.post("/bmi")
async def bmi(data: BMIRequest):
    try:
        return calculate_bmi(data.weightKg, data.heightCm)
    except ValueError as e:
        raise Invalid(str(e)) from e


@router.get("/activity-levels")
async def activity_levels():
    return ACTIVITY_LEVELS


@router.post("/calories")
async def calories(data: CalorieRequest):
    try:
        total = calculate_calories(
            data.gender, data.age, data.weightKg, data.heightCm, data.activityLevel
        )
    except ValueError as e:
        raise Invalid(str(e)) from e
    return {"calories": total}


@router.post("/discount")
async def discount(data: DiscountRequest):
    try:
        return calculate_discount(data.price, data.discountPercent)
    except ValueError as e:
        raise Invalid(str(e)) from e
