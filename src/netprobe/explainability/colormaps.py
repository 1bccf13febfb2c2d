"""
Colour maps for normalised saliency values.

Pure functions of a value in [0, 1] (clamped) returning an (r, g, b) triple.
"""

from typing import Callable

from .models import SaliencyResult

RGB = tuple[int, int, int]


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def heat(value: float) -> RGB:
    """Black -> red -> yellow -> white in three bands."""
    v = _clamp(value)
    if v < 0.33:
        t = v / 0.33
        return (round(t * 255), 0, 0)
    if v < 0.66:
        t = (v - 0.33) / 0.33
        return (255, round(t * 255), 0)
    t = (v - 0.66) / 0.34
    return (255, 255, round(t * 255))


def diverging(value: float) -> RGB:
    """Blue -> white -> red, centred on 0.5."""
    v = _clamp(value)
    if v < 0.5:
        t = v / 0.5
        return (round(t * 255), round(t * 255), 255)
    t = (v - 0.5) / 0.5
    return (255, round((1 - t) * 255), round((1 - t) * 255))


def viridis(value: float) -> RGB:
    """Linear approximation of viridis between its endpoint colours."""
    v = _clamp(value)
    return (
        round(68 + v * (253 - 68)),
        round(1 + v * (231 - 1)),
        round(84 + (1 - v) * (168 - 84)),
    )


COLOR_SCHEMES: dict[str, Callable[[float], RGB]] = {
    "heat": heat,
    "diverging": diverging,
    "viridis": viridis,
}


def get_color(value: float, scheme: str = "heat") -> RGB:
    """Colour for a normalised value under the named scheme."""
    if scheme not in COLOR_SCHEMES:
        raise ValueError(
            f"Unsupported color scheme: {scheme}. Supported: {', '.join(COLOR_SCHEMES)}"
        )
    return COLOR_SCHEMES[scheme](value)


def saliency_to_colors(result: SaliencyResult, scheme: str = "heat") -> list[list[RGB]]:
    """Colour every cell, normalising by the maximum saliency."""
    normalizer = result.max_saliency if result.max_saliency > 0 else 1.0
    return [
        [get_color(cell.saliency / normalizer, scheme) for cell in row]
        for row in result.grid
    ]
