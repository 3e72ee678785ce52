from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .errors import InvalidColorError

RGB_MIN = 0
RGB_MAX = 255


@dataclass(frozen=True)
class Color:
    """An RGB colour with integer components in ``[0, 255]``."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidColorError(f"{name} must be an int, got {type(value).__name__}")
            if not RGB_MIN <= value <= RGB_MAX:
                raise InvalidColorError(f"{name}={value} outside [{RGB_MIN}, {RGB_MAX}]")

    def rgb_unit(self) -> Tuple[float, float, float]:
        """Components mapped onto the unit interval, as matplotlib expects."""
        return (self.red / 255.0, self.green / 255.0, self.blue / 255.0)

    @property
    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        text = value.lstrip("#")
        if len(text) != 6:
            raise InvalidColorError(f"expected #rrggbb, got {value!r}")
        try:
            return cls(int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
        except ValueError as exc:
            raise InvalidColorError(f"expected #rrggbb, got {value!r}") from exc
