"""Meters-per-pixel zoom scale."""

import re

from pydantic import BaseModel, ConfigDict, Field

MPP_MIN = 1 / 32
MPP_MAX = 32768.0

# Digits after the decimal point in scale labels.
SCALE_PRECISION = 8

_LABEL_RE = re.compile(
    r"^\s*(?P<x>[0-9]*\.?[0-9]+)(?:/(?P<y>[0-9]*\.?[0-9]+)f?)?\s*(?:mpp|pixelfact)?\s*$"
)


def is_valid_mpp(value: float) -> bool:
    return MPP_MIN <= value <= MPP_MAX


def _format_mpp(value: float) -> str:
    if value == int(value):
        return str(int(value))
    return f"{value:.{SCALE_PRECISION}f}".rstrip("0")


class Scale(BaseModel):
    """Zoom level as meters-per-pixel along X and Y.

    Both components stay within [MPP_MIN, MPP_MAX]. Operations that would
    leave that range do nothing and report failure; they never clamp.
    """

    model_config = ConfigDict(validate_assignment=True)

    x_mpp: float = Field(default=4.0, ge=MPP_MIN, le=MPP_MAX)
    y_mpp: float = Field(default=4.0, ge=MPP_MIN, le=MPP_MAX)

    @property
    def is_square(self) -> bool:
        return self.x_mpp == self.y_mpp

    def set(self, x_mpp: float, y_mpp: float | None = None) -> None:
        """Set both components at once, or raise ValueError and change nothing."""
        if y_mpp is None:
            y_mpp = x_mpp
        for name, value in (("x_mpp", x_mpp), ("y_mpp", y_mpp)):
            if not is_valid_mpp(value):
                raise ValueError(
                    f"{name} {value} is outside the valid range {MPP_MIN}-{MPP_MAX}"
                )
        self.x_mpp = x_mpp
        self.y_mpp = y_mpp

    def _try_set(self, x_mpp: float, y_mpp: float) -> bool:
        if not (is_valid_mpp(x_mpp) and is_valid_mpp(y_mpp)):
            return False
        self.set(x_mpp, y_mpp)
        return True

    def zoom_in(self, factor: float = 2.0) -> bool:
        """Divide both components by ``factor``. False if that would go below MPP_MIN."""
        return self._try_set(self.x_mpp / factor, self.y_mpp / factor)

    def zoom_out(self, factor: float = 2.0) -> bool:
        """Multiply both components by ``factor``. False if that would exceed MPP_MAX."""
        return self._try_set(self.x_mpp * factor, self.y_mpp * factor)

    def to_string(self, unit: str = "mpp") -> str:
        """Status-bar label such as "4 mpp", "0.5 mpp" or "2/4f pixelfact"."""
        if self.is_square:
            return f"{_format_mpp(self.x_mpp)} {unit}"
        return f"{_format_mpp(self.x_mpp)}/{_format_mpp(self.y_mpp)}f {unit}"

    @classmethod
    def from_string(cls, label: str) -> "Scale":
        """Parse a label produced by to_string (unit suffix optional)."""
        match = _LABEL_RE.match(label)
        if not match:
            raise ValueError(f"Cannot parse scale '{label}'")
        x = float(match.group("x"))
        y = float(match.group("y")) if match.group("y") else x
        result = cls()
        result.set(x, y)
        return result

    def __str__(self) -> str:
        return self.to_string()
