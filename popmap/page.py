from __future__ import annotations

import html
import json
from pathlib import Path

from .binder import IDLE_STYLE, BoundFeature, hover_script
from .config import COUNTRIES_OBJECT, DEFAULT_HEIGHT, DEFAULT_WIDTH, PAGE_TITLE, PROJECTION_SCALE, VIEWBOX_ORIGIN
from .scale import ThresholdScale
from .viewport import ViewportController, viewport_box


def enriched_topology(world: dict, bound: list[BoundFeature], object_name: str = COUNTRIES_OBJECT) -> dict:
    """Copy of the topology whose country geometries carry the bound properties."""
    o = world["objects"][object_name]
    geometries = [b.to_geometry() for b in bound]
    if o.get("type") == "GeometryCollection":
        o = {**o, "geometries": geometries}
    else:
        o = geometries[0]
    return {**world, "objects": {**world["objects"], object_name: o}}


def _script_json(data) -> str:
    # keep "</script>" inside strings from closing the tag
    return json.dumps(data, ensure_ascii=False).replace("</", "<\\/")


def _bound(value) -> str:
    return f"{value:,.0f}"


def legend_html(scale: ThresholdScale) -> str:
    items = []
    for lower, upper, color in scale.buckets():
        if lower is None:
            label = f"&lt; {_bound(upper)}"
        elif upper is None:
            label = f"&ge; {_bound(lower)}"
        else:
            label = f"{_bound(lower)} &ndash; {_bound(upper)}"
        items.append(
            f'<li><span class="swatch" style="background:{color}"></span>{label}</li>'
        )
    return "\n        ".join(items)


def render_page(
    world: dict,
    bound: list[BoundFeature],
    scale: ThresholdScale,
    object_name: str = COUNTRIES_OBJECT,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    title: str = PAGE_TITLE,
    viewport: ViewportController | None = None,
) -> str:
    viewport = viewport or ViewportController()
    world_js = _script_json(enriched_topology(world, bound, object_name))
    object_js = json.dumps(object_name)
    hover_js = hover_script("countries")
    zoom_js = viewport.zoom_script("svgCanvas", "mapGroup")
    origin_x, origin_y = VIEWBOX_ORIGIN
    idle_width = IDLE_STYLE["stroke-width"]

    return f"""<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>{html.escape(title)}</title>
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <style>
    html, body {{
      margin: 0; padding: 0; height: 100%;
      overflow: hidden;
      font-family: ui-sans-serif, system-ui, -apple-system;
      background: #fdfdfd;
    }}

    svg {{
      width: 100vw;
      height: 100vh;
      display: block;
    }}

    path {{
      fill: #d9d9d9;
      stroke: #7f7f7f;
      stroke-width: {idle_width};
    }}

    .details {{
      position: fixed;
      left: 16px; bottom: 16px;
      padding: 10px 14px;
      border-radius: 10px;
      background: rgba(15, 18, 24, 0.78);
      color: #e6edf3;
      font-size: 13px;
      line-height: 1.5;
      visibility: hidden;
      pointer-events: none;
    }}
    .details .country {{
      font-weight: 900;
    }}

    .legend {{
      position: fixed;
      right: 16px; bottom: 16px;
      margin: 0; padding: 10px 12px;
      list-style: none;
      background: rgba(255,255,255,0.85);
      border-radius: 10px;
      font-size: 11px;
    }}
    .legend .swatch {{
      display: inline-block;
      width: 12px; height: 12px;
      margin-right: 6px;
      vertical-align: middle;
      border: 1px solid rgba(0,0,0,0.1);
    }}
  </style>
  <script src="https://d3js.org/d3.v7.min.js"></script>
  <script src="https://cdn.jsdelivr.net/npm/topojson-client@3"></script>
</head>

<body>
  <svg viewBox="{viewport_box(width, height)}" preserveAspectRatio="xMinYMin" style="cursor: move">
    <g class="map-group" transform="{viewport.group_attribute()}"></g>
  </svg>

  <div class="details">
    <div class="country"></div>
    <div class="females"></div>
    <div class="males"></div>
  </div>

  <ul class="legend">
        {legend_html(scale)}
  </ul>

  <script>
    const WORLD = {world_js};
    const countryFeatures = topojson.feature(WORLD, WORLD.objects[{object_js}]).features;

    // Sized once, at load time
    const viewportWidth = Math.max(document.documentElement.clientWidth, window.innerWidth || 0) || {width};
    const viewportHeight = Math.max(document.documentElement.clientHeight, window.innerHeight || 0) || {height};

    const svgCanvas = d3.select("svg")
      .attr("viewBox", "{origin_x} {origin_y} " + viewportWidth + " " + viewportHeight);

    const mapGroup = svgCanvas.select(".map-group");
{zoom_js}

    const geoProjection = d3.geoMercator()
      .scale({PROJECTION_SCALE})
      .translate([viewportWidth / 2, viewportHeight / 1.5]);
    const geoPath = d3.geoPath().projection(geoProjection);

    const countries = mapGroup.append("g")
      .selectAll("path")
      .data(countryFeatures)
      .enter().append("path")
      .attr("name", d => d.properties.name)
      .attr("id", d => d.id)
      .attr("d", geoPath)
      .style("fill", d => d.properties.fill);
{hover_js}
  </script>
</body>
</html>
"""


def write_page(out_path: Path, page: str) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(page, encoding="utf-8")
    return out_path
