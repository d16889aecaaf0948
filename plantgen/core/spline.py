"""
Piecewise Bezier spline used for stem centerlines and profile curves.

A spline is an ordered list of control points chained into Bezier segments
that share end points, so ``(len(controls) - 1) % degree == 0`` holds for
every non-empty spline. For degree 3, indices with ``i % 3 == 0`` are anchor
points lying on the curve; ``i % 3 == 1`` is the outgoing handle of the
anchor before it and ``i % 3 == 2`` the incoming handle of the anchor after
it.

Profile curves (radius, density, incline) overload the axes of their control
points as (parameter, unused, value) and are assumed to be monotonic in x.

Index arguments are trusted: the editing operations do not bounds check.
"""

from typing import Iterable, List, Optional
import numpy as np

from ..math import vec3, as_vec, magnitude, normalize, is_zero, bezier, vectors_equal

SUPPORTED_DEGREES = (1, 3)

# Fallback direction used when a tangent collapses onto its anchor.
DEFAULT_TANGENT = (0.0, 0.0, 1.0)


class Spline:
    """
    Chained Bezier curve of degree 1 or 3.

    Parameters
    ----------
    preset : int, optional
        Built-in control set to start from (see ``set_default``)
    controls : iterable of array-like, optional
        Explicit control points
    degree : int
        1 for polylines, 3 for cubic curves
    """

    def __init__(
        self,
        preset: Optional[int] = None,
        controls: Optional[Iterable] = None,
        degree: int = 3,
    ):
        self._controls: List[np.ndarray] = []
        self._degree = 3
        self.set_degree(degree)
        if preset is not None:
            self.set_default(preset)
        elif controls is not None:
            self.set_controls(controls)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Spline):
            return NotImplemented
        return self._degree == other._degree and vectors_equal(self._controls, other._controls)

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __repr__(self) -> str:
        return f"Spline(degree={self._degree}, controls={len(self._controls)})"

    def copy(self) -> "Spline":
        return Spline(controls=self._controls, degree=self._degree)

    def set_default(self, preset: int) -> None:
        """
        Replace the controls with a built-in profile curve.

        0 is a cubic bulge, 1 is a flat line at full value and 2 is a
        linear ramp from zero to full value.
        """
        if preset == 0:
            self._degree = 3
            self._controls = [
                vec3(0.0, 0.0, 0.0),
                vec3(0.0, 0.0, 1.0),
                vec3(1.0, 0.0, 1.0),
                vec3(1.0, 0.0, 0.0),
            ]
        elif preset == 1:
            self._degree = 1
            self._controls = [vec3(0.0, 0.0, 1.0), vec3(1.0, 0.0, 1.0)]
        elif preset == 2:
            self._degree = 1
            self._controls = [vec3(0.0, 0.0, 0.0), vec3(1.0, 0.0, 1.0)]
        else:
            raise ValueError(f"Unknown spline preset: {preset}")

    def set_controls(self, controls: Iterable) -> None:
        self._controls = [as_vec(c) for c in controls]

    def get_controls(self) -> List[np.ndarray]:
        return [c.copy() for c in self._controls]

    @property
    def controls(self) -> List[np.ndarray]:
        return self.get_controls()

    def add_control(self, control) -> None:
        self._controls.append(as_vec(control))

    def get_control(self, index: int) -> np.ndarray:
        return self._controls[index].copy()

    @property
    def size(self) -> int:
        return len(self._controls)

    def set_degree(self, degree: int) -> None:
        """Set the degree without touching the controls."""
        if degree not in SUPPORTED_DEGREES:
            raise ValueError(f"Unsupported spline degree: {degree}")
        self._degree = degree

    def get_degree(self) -> int:
        return self._degree

    @property
    def degree(self) -> int:
        return self._degree

    def get_curve_count(self) -> int:
        if not self._controls:
            return 0
        return (len(self._controls) - 1) // self._degree

    def validate(self) -> List[str]:
        """Return the structural problems of the spline (empty if well formed)."""
        errors = []
        if self._degree not in SUPPORTED_DEGREES:
            errors.append(f"Unsupported degree: {self._degree}")
        elif self._controls and (len(self._controls) - 1) % self._degree != 0:
            errors.append(
                f"{len(self._controls)} controls do not form whole "
                f"degree {self._degree} segments"
            )
        return errors

    def get_point(self, t: float) -> np.ndarray:
        """
        Evaluate a profile curve at parameter ``t`` measured along x.

        The segment whose end anchors bracket ``t`` in x is located and ``t``
        is remapped into that segment. Values outside the curve's x range
        clamp to the first or last control.
        """
        d = self._degree
        controls = self._controls
        if not controls:
            return vec3()
        for i in range(0, len(controls) - d, d):
            x0 = controls[i][0]
            x1 = controls[i + d][0]
            if x0 <= t <= x1:
                span = x1 - x0
                local = 0.0 if span == 0.0 else (t - x0) / span
                return bezier(local, controls[i:i + d + 1])
        if t < controls[0][0]:
            return controls[0].copy()
        return controls[-1].copy()

    def get_curve_point(self, curve: int, t: float) -> np.ndarray:
        """Evaluate segment ``curve`` at local parameter ``t`` in [0, 1]."""
        index = self._degree * curve
        return bezier(t, self._controls[index:index + self._degree + 1])

    def get_direction(self, index: int) -> np.ndarray:
        """Direction of the control polygon leaving control ``index``."""
        controls = self._controls
        if index >= len(controls) - 1:
            return normalize(controls[index] - controls[index - 1])
        return normalize(controls[index + 1] - controls[index])

    def insert(self, index: int, point) -> int:
        """
        Insert a point next to control ``index``.

        For cubic splines a whole handle/anchor/handle group is synthesized
        whose handles mirror the tangent of the neighbouring anchor.

        Returns
        -------
        int
            Index of the new anchor point
        """
        p = as_vec(point)
        c = self._controls

        if self._degree == 1:
            c.insert(index + 1, p)
            return index + 1

        last = len(c) - 1
        remainder = index % 3
        if remainder == 0:
            if index == last:
                d = c[index - 1] - c[index]
                group = [p - d, p + d, p]
                center = index + 3
                position = index + 1
            else:
                d = c[index + 1] - c[index]
                group = [p - d, p, p + d]
                center = index + 3
                position = index + 2
        elif remainder == 1:
            if index == 1:
                d = c[index] - c[index - 1]
                group = [p - d, p, p + d]
            else:
                group = [
                    p + (c[index - 1] - c[index]),
                    p,
                    p + (c[index - 1] - c[index - 2]),
                ]
            center = index + 2
            position = index + 1
        else:
            if index == last - 1:
                d = c[index + 1] - c[index]
                group = [p - d, p, p + d]
            else:
                group = [
                    p + (c[index] - c[index + 1]),
                    p,
                    p + (c[index + 2] - c[index + 1]),
                ]
            center = index + 1
            position = index

        c[position:position] = group
        return center

    def remove(self, index: int) -> None:
        """
        Remove control ``index``.

        Cubic splines lose a whole anchor group. Removing from the first or
        last group trims that end; a single remaining segment is cleared.
        """
        c = self._controls
        if self._degree == 1:
            del c[index]
            return

        if len(c) == 4:
            c.clear()
        elif index < 2:
            del c[0:3]
        elif index > len(c) - 3:
            del c[-3:]
        else:
            remainder = index % 3
            if remainder == 0:
                index -= 1
            elif remainder == 1:
                index -= 2
            del c[index:index + 3]

    def adjust(self, degree: int, index: int = 0) -> int:
        """
        Convert the spline to ``degree``.

        Converting to linear keeps only anchors. Converting to cubic
        synthesizes handles at a quarter of the adjacent segment length along
        the averaged direction of the neighbouring segments.

        Parameters
        ----------
        degree : int
            Target degree (1 or 3)
        index : int
            Control index to translate into the new indexing

        Returns
        -------
        int
            ``index`` mapped onto the converted controls
        """
        if degree not in SUPPORTED_DEGREES:
            raise ValueError(f"Unsupported spline degree: {degree}")
        if degree == self._degree:
            return index

        if degree == 1:
            remainder = index % 3
            if remainder == 1:
                index -= 1
            elif remainder == 2:
                index += 1
            index //= 3
            self._controls = self._controls[::3]
        else:
            index *= 3
            self._synthesize_handles()

        self._degree = degree
        return index

    def _synthesize_handles(self) -> None:
        c = self._controls
        if len(c) < 2:
            return

        direction = normalize(c[1] - c[0])
        t = magnitude(c[1] - c[0]) / 4.0
        c.insert(1, c[0] + t * direction)

        i = 2
        while i < len(c) - 1:
            d1 = c[i - 2] - c[i]
            d2 = c[i] - c[i + 1]
            t1 = magnitude(d1) / 4.0
            t2 = -magnitude(d2) / 4.0
            direction = normalize(d1 + d2)
            incoming = c[i] + t1 * direction
            outgoing = c[i] + t2 * direction
            c.insert(i + 1, outgoing)
            c.insert(i, incoming)
            i += 3

        last = len(c) - 1
        direction = normalize(c[last] - c[last - 1])
        t = magnitude(c[last] - c[last - 2]) / 4.0
        c.insert(last, c[last] - t * direction)

    def move(self, index: int, location, parallel: bool = False) -> None:
        """
        Move control ``index`` to ``location``.

        Moving a cubic anchor carries both of its handles along. Moving a
        handle with ``parallel`` re-aligns the opposite handle through the
        anchor.
        """
        location = as_vec(location)
        c = self._controls
        if self._degree == 3:
            if index % 3 == 0:
                delta = location - c[index]
                if index != 0:
                    c[index - 1] = c[index - 1] + delta
                if index != len(c) - 1:
                    c[index + 1] = c[index + 1] + delta
                c[index] = location
            else:
                c[index] = location
                if parallel:
                    self.parallelize(index)
        else:
            c[index] = location

    def parallelize(self, index: int) -> None:
        """
        Align the handle opposite ``index`` with it through their anchor.

        The opposite handle keeps its distance from the anchor (a collapsed
        handle gets unit distance). A handle lying on its anchor points the
        opposite handle along the fallback axis.
        """
        if self._degree != 3:
            return
        c = self._controls
        remainder = index % 3
        if remainder == 1:
            if index == 1:
                return
            anchor, opposite = index - 1, index - 2
        elif remainder == 2:
            if index >= len(c) - 2:
                return
            anchor, opposite = index + 1, index + 2
        else:
            return

        m = magnitude(c[opposite] - c[anchor])
        if m == 0.0:
            m = 1.0
        d = c[anchor] - c[index]
        if is_zero(d):
            d = np.array(DEFAULT_TANGENT, dtype=float)
        c[opposite] = c[anchor] + m * normalize(d)


__all__ = ["Spline", "SUPPORTED_DEGREES", "DEFAULT_TANGENT"]
