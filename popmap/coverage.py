"""
Join coverage: which countries got no population data, and what the
population dataset probably calls them.

Suggestions are for the operator only. The join itself stays an exact
name match.
"""
from __future__ import annotations

import logging
from collections.abc import Collection

import pycountry

from .features import CountryFeature
from .population import PopulationRecord

logger = logging.getLogger(__name__)


def unmatched_features(features: list[CountryFeature]) -> list[CountryFeature]:
    return [f for f in features if f.population_details.is_empty]


def suggest_population_name(name: str, population_names: Collection[str]) -> str | None:
    if not isinstance(name, str) or not name.strip():
        return None
    try:
        c = pycountry.countries.lookup(name.strip())
    except LookupError:
        return None

    for candidate in (
        getattr(c, "name", None),
        getattr(c, "official_name", None),
        getattr(c, "common_name", None),
        getattr(c, "alpha_3", None),
    ):
        if candidate and candidate != name and candidate in population_names:
            return candidate
    return None


def coverage_report(
    features: list[CountryFeature],
    index: dict[str, PopulationRecord],
) -> dict:
    missing = unmatched_features(features)
    suggestions = {}
    for f in missing:
        suggestion = suggest_population_name(f.name, index)
        if suggestion:
            suggestions[f.name] = suggestion

    if suggestions:
        logger.info("%d unmatched countries have a likely population name", len(suggestions))

    return {
        "matched": len(features) - len(missing),
        "unmatched": sorted(f.name for f in missing),
        "suggestions": suggestions,
    }


def format_report(report: dict) -> str:
    lines = [
        f"Matched: {report['matched']}",
        f"Unmatched: {len(report['unmatched'])}",
    ]
    for name in report["unmatched"]:
        hint = report["suggestions"].get(name)
        lines.append(f"  {name} -> {hint}?" if hint else f"  {name}")
    return "\n".join(lines)
