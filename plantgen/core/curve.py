"""Named profile curves stored in a plant's curve library."""

from typing import Optional

from .spline import Spline


class Curve:
    """A ``Spline`` with a display name, e.g. a shared radius profile."""

    def __init__(
        self,
        spline: Optional[Spline] = None,
        name: str = "",
        preset: Optional[int] = None,
    ):
        if spline is None:
            spline = Spline(preset) if preset is not None else Spline()
        self.spline = spline.copy()
        self.name = name

    def __eq__(self, other) -> bool:
        if not isinstance(other, Curve):
            return NotImplemented
        return self.name == other.name and self.spline == other.spline

    def __repr__(self) -> str:
        return f"Curve(name={self.name!r}, spline={self.spline!r})"

    def copy(self) -> "Curve":
        return Curve(self.spline, self.name)


__all__ = ["Curve"]
