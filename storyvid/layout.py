"""Canvas layouts for scene illustrations.

Positions are percentages of the canvas (0-100) and sizes are pixels
at the reference canvas size.
"""

from dataclasses import asdict, dataclass

DEFAULT_LAYOUT = "centered-large"


@dataclass(frozen=True)
class LayoutPosition:
    """Placement of one illustration."""

    x: float
    y: float
    size: int

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


def _row(count: int, size: int) -> list[LayoutPosition]:
    return [LayoutPosition(x=(100 / (count + 1)) * (i + 1), y=50, size=size) for i in range(count)]


def _column(count: int, size: int) -> list[LayoutPosition]:
    return [LayoutPosition(x=50, y=(100 / (count + 1)) * (i + 1), size=size) for i in range(count)]


def _fixed(*points: tuple[float, float, int]) -> list[LayoutPosition]:
    return [LayoutPosition(x=x, y=y, size=size) for x, y, size in points]


_FIXED_LAYOUTS: dict[str, list[LayoutPosition]] = {
    "grid-2x2": _fixed((33, 33, 80), (67, 33, 80), (33, 67, 80), (67, 67, 80)),
    "grid-3x3": _fixed(
        (25, 25, 60), (50, 25, 60), (75, 25, 60),
        (25, 50, 60), (50, 50, 60), (75, 50, 60),
        (25, 75, 60), (50, 75, 60), (75, 75, 60),
    ),
    "centered-large": _fixed(
        (50, 50, 150), (20, 20, 60), (80, 20, 60), (20, 80, 60), (80, 80, 60)
    ),
    "scattered": _fixed(
        (25, 30, 70), (65, 25, 85), (40, 65, 75), (75, 70, 80), (20, 75, 65), (85, 40, 70)
    ),
    "editorial": _fixed((30, 40, 120), (70, 30, 70), (75, 65, 80), (25, 75, 60)),
    # Focal point on the golden-ratio intersection, the rest along the spiral
    "golden-ratio": _fixed(
        (61.8, 38.2, 120), (38.2, 61.8, 80), (23.6, 23.6, 60),
        (76.4, 76.4, 70), (38.2, 38.2, 65), (61.8, 61.8, 75),
    ),
    "rule-of-thirds": _fixed(
        (33.3, 33.3, 100), (66.7, 33.3, 100), (33.3, 66.7, 100), (66.7, 66.7, 100),
        (50, 33.3, 80), (50, 66.7, 80), (33.3, 50, 80), (66.7, 50, 80),
    ),
}

LAYOUT_TYPES = (
    "horizontal-row",
    "vertical-stack",
    "side-by-side",
    *_FIXED_LAYOUTS,
)


def get_layout_config(layout: str, count: int = 4) -> list[LayoutPosition]:
    """Return positions for ``count`` illustrations in ``layout``.

    Fixed layouts return at most as many slots as they define; unknown
    layouts fall back to ``centered-large``.
    """
    if layout == "horizontal-row":
        return _row(count, 80)
    if layout == "vertical-stack":
        return _column(count, 80)
    if layout == "side-by-side":
        if count == 2:
            return _fixed((35, 50, 100), (65, 50, 100))
        return _row(count, 100)

    positions = _FIXED_LAYOUTS.get(layout, _FIXED_LAYOUTS[DEFAULT_LAYOUT])
    return positions[:count]

