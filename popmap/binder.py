"""
Visual encoding and hover behaviour for country features.

The page only displays what is computed here: each feature's fill and the
text its detail panel shows while hovered. Hover itself is a two-state
machine (idle / hovered) with at most one hovered feature; the panel is a
pure function of that feature.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum

from .config import (
    HIGHLIGHT_STROKE,
    HIGHLIGHT_STROKE_WIDTH,
    IDLE_STROKE_WIDTH,
    NO_DATA_TEXT,
)
from .features import CountryFeature
from .population import PopulationRecord
from .scale import ThresholdScale


def format_count(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def fill_for(feature: CountryFeature, scale: ThresholdScale) -> str | None:
    total = feature.population_details.total
    # 0, missing and coerced junk all mean "no data": leave unfilled
    if not total:
        return None
    return scale(total)


def _count_line(label: str, value: float | None) -> str:
    return f"{label} {format_count(value)}" if value else NO_DATA_TEXT


def female_line(details: PopulationRecord) -> str:
    return _count_line("Female", details.females)


def male_line(details: PopulationRecord) -> str:
    return _count_line("Male", details.males)


@dataclass(frozen=True)
class DetailPanel:
    visible: bool = False
    country: str = ""
    females: str = ""
    males: str = ""


HIDDEN_PANEL = DetailPanel()


def panel_regions(panel: DetailPanel) -> dict[str, str]:
    """Text per display region, keyed by the region's CSS class."""
    return {"country": panel.country, "females": panel.females, "males": panel.males}


def detail_panel(hovered: CountryFeature | None) -> DetailPanel:
    if hovered is None:
        return HIDDEN_PANEL
    details = hovered.population_details
    return DetailPanel(
        visible=True,
        country=hovered.name,
        females=female_line(details),
        males=male_line(details),
    )


@dataclass
class BoundFeature:
    feature: CountryFeature
    fill: str | None

    @property
    def name(self) -> str:
        return self.feature.name

    @property
    def id(self):
        return self.feature.id

    def to_geometry(self) -> dict:
        """The topology geometry with fill, panel text and population attached."""
        panel = panel_regions(detail_panel(self.feature))
        props = dict(self.feature.geometry.get("properties") or {})
        props.update(
            name=self.name,
            fill=self.fill,
            panel=panel,
            population=self.feature.population_details.to_dict(),
        )
        return {**self.feature.geometry, "properties": props}


def bind_features(features: list[CountryFeature], scale: ThresholdScale) -> list[BoundFeature]:
    return [BoundFeature(feature=f, fill=fill_for(f, scale)) for f in features]


class HoverState(Enum):
    IDLE = "idle"
    HOVERED = "hovered"


IDLE_STYLE = {"stroke": None, "stroke-width": IDLE_STROKE_WIDTH}
HIGHLIGHT_STYLE = {
    "stroke": HIGHLIGHT_STROKE,
    "stroke-width": HIGHLIGHT_STROKE_WIDTH,
    "cursor": "pointer",
}


class HoverController:
    """Tracks the single hovered feature and derives highlight and panel from it."""

    def __init__(self):
        self._hovered: CountryFeature | None = None

    @property
    def state(self) -> HoverState:
        return HoverState.IDLE if self._hovered is None else HoverState.HOVERED

    @property
    def hovered(self) -> CountryFeature | None:
        return self._hovered

    @property
    def panel(self) -> DetailPanel:
        return detail_panel(self._hovered)

    def enter(self, feature: CountryFeature) -> DetailPanel:
        # entering a new feature replaces the previous one, even without an exit
        self._hovered = feature
        return self.panel

    def exit(self, feature: CountryFeature | None = None) -> DetailPanel:
        self._hovered = None
        return self.panel

    def is_highlighted(self, feature: CountryFeature) -> bool:
        return self._hovered is feature

    def style_for(self, feature: CountryFeature) -> dict:
        return dict(HIGHLIGHT_STYLE if self.is_highlighted(feature) else IDLE_STYLE)


def _visibility(panel: DetailPanel) -> str:
    return "visible" if panel.visible else "hidden"


def hover_script(selection: str = "countries") -> str:
    """
    d3 mouseover/mouseout handlers for `selection` that follow HoverController:
    entering restores the previous node to the idle style, highlights the new
    one and overwrites every panel region; leaving always goes back to idle.
    """
    highlight = json.dumps(HIGHLIGHT_STYLE)
    idle = json.dumps(IDLE_STYLE)
    shown = _visibility(DetailPanel(visible=True))
    hidden = _visibility(HIDDEN_PANEL)
    return f"""
    const HIGHLIGHT = {highlight};
    const IDLE = {idle};
    let hovered = null;

    function applyStyle(node, style) {{
      const sel = d3.select(node);
      Object.entries(style).forEach(([k, v]) => sel.style(k, v));
    }}

    {selection}
      .on("mouseover", function (event, d) {{
        if (hovered) applyStyle(hovered, IDLE);
        hovered = this;
        applyStyle(this, HIGHLIGHT);
        Object.entries(d.properties.panel).forEach(([cls, text]) => d3.select("." + cls).text(text));
        d3.select(".details").style("visibility", "{shown}");
      }})
      .on("mouseout", function () {{
        if (hovered) applyStyle(hovered, IDLE);
        hovered = null;
        d3.select(".details").style("visibility", "{hidden}");
      }});"""
