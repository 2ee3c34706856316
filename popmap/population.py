"""
Population index: country name -> coerced population breakdown.

Source rows look like
  {"country": "Chile", "total": "17574003", "females": "8885000", "males": "8689000"}
and may carry numbers, numeric strings, blanks or junk in the three count
fields. Junk never raises; it becomes 0.0 and therefore reads as "no data".
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass

import pandas as pd

logger = logging.getLogger(__name__)

COUNT_FIELDS = ("total", "females", "males")


@dataclass(frozen=True)
class PopulationRecord:
    total: float | None = None
    females: float | None = None
    males: float | None = None

    @classmethod
    def empty(cls) -> "PopulationRecord":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.total is None and self.females is None and self.males is None

    def to_dict(self) -> dict[str, float]:
        return {k: v for k, v in asdict(self).items() if v is not None}


RADIX_LITERAL = re.compile(r"^0([xXoObB])([0-9a-fA-F]+)$")
RADIX = {"x": 16, "o": 8, "b": 2}


def _clean(value):
    """Strip strings and expand 0x / 0o / 0b literals, which JS numbers accept."""
    if not isinstance(value, str):
        return value
    value = value.strip()
    m = RADIX_LITERAL.match(value)
    if m:
        try:
            return float(int(m.group(2), RADIX[m.group(1).lower()]))
        except ValueError:
            # e.g. "0b12"
            return None
    return value


def coerce_series(s: pd.Series) -> pd.Series:
    return pd.to_numeric(s.map(_clean), errors="coerce").fillna(0.0).astype(float)


def build_population_index(
    rows: Iterable[Mapping] | pd.DataFrame,
) -> dict[str, PopulationRecord]:
    df = rows.copy() if isinstance(rows, pd.DataFrame) else pd.DataFrame(list(rows))
    if df.empty:
        return {}

    for col in ("country",) + COUNT_FIELDS:
        if col not in df.columns:
            df[col] = None

    for col in COUNT_FIELDS:
        df[col] = coerce_series(df[col])

    index: dict[str, PopulationRecord] = {}
    skipped = 0
    for country, total, females, males in df[["country", *COUNT_FIELDS]].itertuples(
        index=False, name=None
    ):
        if not isinstance(country, str):
            skipped += 1
            continue
        # last write wins on duplicate names
        index[country] = PopulationRecord(float(total), float(females), float(males))

    if skipped:
        logger.debug("Skipped %d population rows without a country name", skipped)
    logger.debug("Indexed %d countries from %d rows", len(index), len(df))
    return index
