from __future__ import annotations

from dataclasses import dataclass

from .config import VIEWBOX_ORIGIN


@dataclass(frozen=True)
class ViewportTransform:
    """Translate + uniform scale: a point p maps to p * k + (x, y)."""

    x: float = 0.0
    y: float = 0.0
    k: float = 1.0

    @classmethod
    def identity(cls) -> "ViewportTransform":
        return cls()

    def to_d3(self) -> str:
        return f"d3.zoomIdentity.translate({self.x:g}, {self.y:g}).scale({self.k:g})"

    def __str__(self) -> str:
        return f"translate({self.x:g},{self.y:g}) scale({self.k:g})"


class ViewportController:
    """
    Holds the single pan/zoom transform of the map group.

    Gestures are recognised by d3.zoom in the page; zoom_script() seeds d3's
    zoom state with this transform so the first gesture continues from it.
    """

    def __init__(self, transform: ViewportTransform | None = None):
        self._transform = ViewportTransform.identity()
        self.on_zoom(transform or ViewportTransform.identity())

    @property
    def transform(self) -> ViewportTransform:
        return self._transform

    def on_zoom(self, transform: ViewportTransform) -> ViewportTransform:
        if transform.k <= 0:
            raise ValueError(f"Zoom scale must be positive, got {transform.k}")
        self._transform = transform
        return transform

    def group_attribute(self) -> str:
        return str(self._transform)

    def zoom_script(self, canvas: str = "svgCanvas", group: str = "mapGroup") -> str:
        return f"""
    // Pan/zoom moves the whole group, never single countries
    const zoomBehavior = d3.zoom().on("zoom", (event) => {{
      {group}.attr("transform", event.transform);
    }});
    {canvas}.call(zoomBehavior);
    {canvas}.call(zoomBehavior.transform, {self._transform.to_d3()});"""


def viewport_box(width: int, height: int) -> str:
    x, y = VIEWBOX_ORIGIN
    return f"{x} {y} {width} {height}"
