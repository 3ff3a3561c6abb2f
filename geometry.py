from __future__ import annotations
import re
from typing import Optional

INCHES_TO_PX = 96.0
CM_TO_PX = INCHES_TO_PX / 2.54
MM_TO_PX = CM_TO_PX / 10
PT_TO_PX = INCHES_TO_PX / 72.0
PC_TO_PX = PT_TO_PX * 12

number_pattern = re.compile(r'[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?')
leading_number_pattern = re.compile(r'^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([a-zA-Z%]*)')
delimiter_pattern = re.compile(r'[\s,]+')

def parse_number_with_unit(value: str) -> Optional[tuple[float, str]]:
    """Read a leading number and its unit suffix, ``None`` if there is no number.

    Trailing garbage after the unit is ignored, the way a browser's
    parseFloat reads "12px;" or "3e2foo".
    """
    if not value or not isinstance(value, str):
        return None

    match = leading_number_pattern.match(value)
    if not match:
        return None

    try:
        return (float(match.group(1)), match.group(2))
    except ValueError:
        return None

def parse_float(value: str, default: Optional[float] = None) -> Optional[float]:
    parsed = parse_number_with_unit(value)
    if parsed is None:
        return default
    return parsed[0]

def is_percentage(value: str) -> bool:
    parsed = parse_number_with_unit(value)
    return parsed is not None and parsed[1] == '%'

def normalize_unit(value: str, default: Optional[float] = 0.0) -> Optional[float]:
    parsed = parse_number_with_unit(value)
    if parsed is None:
        return default

    num_value, unit = parsed
    unit = unit.lower()

    if unit == "" or unit == "px":
        return num_value
    elif unit == "pt":
        return num_value * PT_TO_PX
    elif unit == "pc":
        return num_value * PC_TO_PX
    elif unit == "in":
        return num_value * INCHES_TO_PX
    elif unit == "cm":
        return num_value * CM_TO_PX
    elif unit == "mm":
        return num_value * MM_TO_PX

    # em, ex and % have no reference length here
    return num_value

def parse_number_list(value: str) -> list[float]:
    if not value:
        return []

    numbers = []
    for token in delimiter_pattern.split(value.strip()):
        # "10-5" is two numbers in the points grammar
        for num_str in number_pattern.findall(token):
            numbers.append(float(num_str))
    return numbers

def parse_points(value: str) -> list[tuple[float, float]]:
    numbers = parse_number_list(value)
    # an odd trailing coordinate has no partner and is dropped
    return [(numbers[i], numbers[i + 1]) for i in range(0, len(numbers) - 1, 2)]
