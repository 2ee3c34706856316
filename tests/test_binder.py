import json

from popmap.binder import (
    HIDDEN_PANEL,
    DetailPanel,
    HoverController,
    HoverState,
    bind_features,
    detail_panel,
    female_line,
    fill_for,
    format_count,
    hover_script,
    male_line,
    panel_regions,
)
from popmap.config import NO_DATA_TEXT
from popmap.features import CountryFeature
from popmap.population import PopulationRecord
from popmap.scale import population_scale


def _feature(name, details=None, id=None):
    geometry = {"type": "Polygon", "id": id, "properties": {"name": name, "iso": "XX"}, "arcs": [[0]]}
    f = CountryFeature(id=id, name=name, geometry=geometry)
    if details is not None:
        f.population_details = details
    return f


def test_no_data_text():
    assert NO_DATA_TEXT == "¯\\_(ツ)_/¯"


def test_fill_unset_without_total():
    scale = population_scale()

    assert fill_for(_feature("Empty"), scale) is None
    assert fill_for(_feature("Zero", PopulationRecord(0.0, 0.0, 0.0)), scale) is None


def test_fill_uses_scale():
    feature = _feature("Big", PopulationRecord(1_200_000.0, 600_000.0, 600_000.0))

    assert fill_for(feature, population_scale()) == "#8c96c6"


def test_format_count():
    assert format_count(600000.0) == "600000"
    assert format_count(12.5) == "12.5"


def test_count_lines():
    details = PopulationRecord(10.0, 4.0, 0.0)

    assert female_line(details) == "Female 4"
    assert male_line(details) == NO_DATA_TEXT
    assert female_line(PopulationRecord.empty()) == NO_DATA_TEXT
    assert male_line(PopulationRecord.empty()) == NO_DATA_TEXT


def test_detail_panel():
    feature = _feature("Testland", PopulationRecord(1_200_000.0, 600_000.0, 600_000.0))

    assert detail_panel(None) == HIDDEN_PANEL
    assert detail_panel(None).visible is False
    assert detail_panel(feature) == DetailPanel(
        visible=True, country="Testland", females="Female 600000", males="Male 600000"
    )


def test_hover_enter_and_exit():
    x = _feature("X", PopulationRecord(5.0, 2.0, 3.0))
    hover = HoverController()

    assert hover.state is HoverState.IDLE
    panel = hover.enter(x)
    assert hover.state is HoverState.HOVERED
    assert panel.visible and panel.country == "X"
    assert hover.style_for(x)["stroke"] == "white"
    assert hover.style_for(x)["stroke-width"] == 1

    panel = hover.exit(x)
    assert hover.state is HoverState.IDLE
    assert panel == HIDDEN_PANEL
    assert hover.style_for(x) == {"stroke": None, "stroke-width": 0.25}


def test_second_enter_replaces_first():
    x = _feature("X", PopulationRecord(5.0, 2.0, 3.0))
    y = _feature("Y")
    hover = HoverController()

    hover.enter(x)
    panel = hover.enter(y)

    assert hover.hovered is y
    assert hover.is_highlighted(y)
    assert not hover.is_highlighted(x)
    assert panel.country == "Y"
    assert panel.females == NO_DATA_TEXT
    assert panel.males == NO_DATA_TEXT


def test_exit_of_stale_feature_still_clears():
    x = _feature("X")
    y = _feature("Y")
    hover = HoverController()

    hover.enter(x)
    hover.enter(y)
    panel = hover.exit(x)

    assert panel.visible is False
    assert hover.hovered is None
    assert not hover.is_highlighted(x)
    assert not hover.is_highlighted(y)


def test_highlight_follows_identity_not_equality():
    a = _feature("Twin")
    b = _feature("Twin")
    hover = HoverController()

    hover.enter(a)

    assert hover.is_highlighted(a)
    assert not hover.is_highlighted(b)


def test_bind_features():
    features = [
        _feature("Testland", PopulationRecord(1_200_000.0, 600_000.0, 600_000.0), id=1),
        _feature("NoDataLand", id=2),
    ]
    bound = bind_features(features, population_scale())

    assert [(b.name, b.id, b.fill) for b in bound] == [
        ("Testland", 1, "#8c96c6"),
        ("NoDataLand", 2, None),
    ]

    testland = bound[0].to_geometry()
    assert testland["arcs"] == [[0]]
    assert testland["id"] == 1
    assert testland["properties"]["iso"] == "XX"
    assert testland["properties"]["panel"] == {
        "country": "Testland",
        "females": "Female 600000",
        "males": "Male 600000",
    }
    assert testland["properties"]["population"] == {
        "total": 1_200_000.0,
        "females": 600_000.0,
        "males": 600_000.0,
    }

    empty = bound[1].to_geometry()
    assert empty["properties"]["fill"] is None
    assert empty["properties"]["population"] == {}
    assert empty["properties"]["panel"]["females"] == NO_DATA_TEXT
    # the source geometry is not modified
    assert "fill" not in features[1].geometry["properties"]


def test_panel_regions_cover_every_text_field():
    panel = DetailPanel(visible=True, country="C", females="F", males="M")

    assert panel_regions(panel) == {"country": "C", "females": "F", "males": "M"}


def test_hover_script_follows_controller():
    script = hover_script("countries")
    mouseover, mouseout = script.split('.on("mouseout"')

    # entering restores the previous node before highlighting the new one
    assert mouseover.index("applyStyle(hovered, IDLE)") < mouseover.index("applyStyle(this, HIGHLIGHT)")
    assert "if (hovered && hovered !== this)" not in mouseover
    # every panel region is overwritten, then the panel is shown
    assert "Object.entries(d.properties.panel)" in mouseover
    assert 'd3.select("." + cls).text(text)' in mouseover
    assert 'style("visibility", "visible")' in mouseover
    # leaving always clears the highlight and hides the panel
    assert "applyStyle(hovered, IDLE)" in mouseout
    assert "hovered = null" in mouseout
    assert 'style("visibility", "hidden")' in mouseout


def test_hover_script_uses_controller_styles():
    x = _feature("X")
    hover = HoverController()
    hover.enter(x)
    highlighted = hover.style_for(x)
    hover.exit(x)
    idle = hover.style_for(x)

    script = hover_script("countries")

    assert f"const HIGHLIGHT = {json.dumps(highlighted)};" in script
    assert f"const IDLE = {json.dumps(idle)};" in script
    assert "countries\n      .on(\"mouseover\"" in script
