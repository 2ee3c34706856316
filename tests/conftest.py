import json

import pytest


@pytest.fixture
def world():
    return {
        "type": "Topology",
        "arcs": [
            [[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]],
            [[20, 0], [30, 0], [30, 10], [20, 10], [20, 0]],
        ],
        "objects": {
            "countries": {
                "type": "GeometryCollection",
                "geometries": [
                    {"type": "Polygon", "id": 1, "properties": {"name": "Testland"}, "arcs": [[0]]},
                    {"type": "Polygon", "id": 2, "properties": {"name": "NoDataLand"}, "arcs": [[1]]},
                ],
            }
        },
    }


@pytest.fixture
def population_rows():
    return [
        {"country": "Testland", "total": "1200000", "females": "600000", "males": "600000"},
    ]


@pytest.fixture
def data_files(tmp_path, world, population_rows):
    world_path = tmp_path / "50m.json"
    population_path = tmp_path / "population.json"
    world_path.write_text(json.dumps(world), encoding="utf-8")
    population_path.write_text(json.dumps(population_rows), encoding="utf-8")
    return world_path, population_path
