from __future__ import annotations

import json
import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pandas as pd
import requests

from .config import HTTP_TIMEOUT

logger = logging.getLogger(__name__)


class LoadError(RuntimeError):
    def __init__(self, source, cause: BaseException):
        self.source = str(source)
        self.cause = cause
        super().__init__(f"{self.source}: {cause}")


def is_url(source) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def read_source(source: str | Path):
    """Read one dataset from a URL or a local .json / .csv file."""
    if is_url(source):
        r = requests.get(source, timeout=HTTP_TIMEOUT)
        r.raise_for_status()
        return r.json()

    path = Path(source)
    if path.suffix.lower() == ".csv":
        return pd.read_csv(path, dtype=str, keep_default_na=False).to_dict(orient="records")
    return json.loads(path.read_text(encoding="utf-8"))


def _read(source):
    try:
        return read_source(source)
    except Exception as e:
        raise LoadError(source, e) from e


def load_datasets(
    boundary_source: str | Path,
    population_source: str | Path,
    on_done: Callable,
):
    """
    Fetch both datasets concurrently, then call on_done(error, world, population).

    on_done runs once, after both reads settle: with (None, world, population)
    when both succeeded, otherwise with (LoadError, None, None). A single
    attempt is made; nothing is retried or cached.
    """
    with ThreadPoolExecutor(max_workers=2) as pool:
        futures = [pool.submit(_read, boundary_source), pool.submit(_read, population_source)]

    errors = [f.exception() for f in futures]
    error = next((e for e in errors if e is not None), None)
    if error is not None:
        logger.error("Error loading data: %s", error)
        return on_done(error, None, None)

    world, population = (f.result() for f in futures)
    return on_done(None, world, population)
