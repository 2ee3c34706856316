from __future__ import annotations

from dataclasses import dataclass

from .binder import BoundFeature, bind_features
from .config import COUNTRIES_OBJECT
from .features import CountryFeature, enrich_features, extract_features
from .population import PopulationRecord, build_population_index
from .scale import ThresholdScale, population_scale


@dataclass
class MapModel:
    world: dict
    object_name: str
    features: list[CountryFeature]
    index: dict[str, PopulationRecord]
    bound: list[BoundFeature]
    scale: ThresholdScale


def build_map(
    world: dict,
    population_rows,
    object_name: str = COUNTRIES_OBJECT,
    scale: ThresholdScale | None = None,
) -> MapModel:
    """Index -> extract -> enrich -> bind, for one render pass."""
    scale = scale or population_scale()
    index = build_population_index(population_rows)
    features = enrich_features(extract_features(world, object_name), index)
    return MapModel(
        world=world,
        object_name=object_name,
        features=features,
        index=index,
        bound=bind_features(features, scale),
        scale=scale,
    )
