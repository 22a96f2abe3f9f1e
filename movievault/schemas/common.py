from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

RELEASE_YEAR_RANGE = (1800, 2100)


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None


def check_range(value, bounds: Tuple[float, float], message: str):
    low, high = bounds
    if value < low or value > high:
        raise ValueError(message)
    return value


def check_release_year(value: int) -> int:
    return check_range(value, RELEASE_YEAR_RANGE, "Release year must be between 1800 and 2100")


def reject_bool(value, message: str):
    # JSON true/false would otherwise coerce to 1/0
    if isinstance(value, bool):
        raise ValueError(message)
    return value
