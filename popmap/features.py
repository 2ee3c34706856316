"""
Country features straight from the topology's geometry collection.

Only `id` and `properties.name` are read here. Arcs stay encoded; the page
turns them into shapes with topojson-client.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .config import COUNTRIES_OBJECT
from .population import PopulationRecord

logger = logging.getLogger(__name__)


@dataclass
class CountryFeature:
    id: int | str | None
    name: str
    geometry: dict
    # attached after extraction; the empty record means "no data"
    population_details: PopulationRecord = field(default_factory=PopulationRecord.empty)

    @classmethod
    def from_geometry(cls, geom: dict) -> "CountryFeature":
        props = geom.get("properties") or {}
        return cls(id=geom.get("id"), name=props.get("name") or "", geometry=geom)


def country_geometries(world: dict, object_name: str = COUNTRIES_OBJECT) -> list[dict]:
    objects = world.get("objects", {})
    if object_name not in objects:
        raise KeyError(f"Topology has no object {object_name!r}; available: {sorted(objects)}")
    o = objects[object_name]
    if o.get("type") == "GeometryCollection":
        return o.get("geometries", [])
    return [o]


def extract_features(world: dict, object_name: str = COUNTRIES_OBJECT) -> list[CountryFeature]:
    geometries = country_geometries(world, object_name)
    logger.debug("Found %d geometries in collection %r", len(geometries), object_name)
    return [CountryFeature.from_geometry(g) for g in geometries]


def enrich_features(
    features: list[CountryFeature],
    index: dict[str, PopulationRecord],
) -> list[CountryFeature]:
    """
    Attach population details by exact country name.

    No normalization is applied: "United States of America" will not find a
    row named "United States". A miss leaves the empty record.
    """
    matched = 0
    for f in features:
        details = index.get(f.name)
        if details is None:
            f.population_details = PopulationRecord.empty()
        else:
            f.population_details = details
            matched += 1

    logger.info("Matched population data for %d of %d countries", matched, len(features))
    return features
