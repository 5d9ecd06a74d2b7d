"""Load readings and tags from CSV or JSON exports.

This is the storage side of the engine: it turns an export file into
Reading objects and a tags-by-reading-id mapping. Expected columns:

    id, systolic, diastolic, timestamp           (required; id optional)
    pulse, location, posture, notes, weight      (optional)
    tags                                          (optional, ";"-separated)

Timestamps are epoch seconds or ISO 8601 strings (naive strings are UTC).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd

from bp_insights.models import Reading

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("systolic", "diastolic", "timestamp")
TAG_SEPARATOR = ";"


def read_frame(path: str | Path) -> pd.DataFrame:
    """Read an export file into a DataFrame with normalised columns.

    Args:
        path: CSV or JSON file

    Returns:
        DataFrame with an ``id`` column and epoch-second ``timestamp`` column

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the format is unsupported or required columns are missing
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Readings file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        df = pd.read_csv(path)
    elif suffix == ".json":
        df = pd.read_json(path, orient="records", convert_dates=False)
    else:
        raise ValueError(f"Unsupported readings file format: {suffix or path.name}")

    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {', '.join(missing)}")

    if "id" not in df.columns:
        df["id"] = [str(i + 1) for i in range(len(df))]
    df["id"] = df["id"].astype(str)

    if not pd.api.types.is_numeric_dtype(df["timestamp"]):
        parsed = pd.to_datetime(df["timestamp"], utc=True, format="ISO8601")
        df["timestamp"] = (parsed - pd.Timestamp(0, tz="UTC")) // pd.Timedelta(seconds=1)

    logger.debug(f"Read {len(df)} rows from {path}")
    return df


def _rows(df: pd.DataFrame) -> list[dict[str, Any]]:
    """DataFrame rows as dicts with missing values as None."""
    clean = df.astype(object).where(pd.notna(df), None)
    return clean.to_dict(orient="records")


def _readings_from_frame(df: pd.DataFrame) -> list[Reading]:
    readings = []
    for i, row in enumerate(_rows(df), 1):
        try:
            readings.append(Reading.from_dict(row))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid reading in row {i}: {e}") from e
    return readings


def _tags_from_frame(df: pd.DataFrame) -> dict[str, list[str]]:
    if "tags" not in df.columns:
        return {}

    tags_by_reading_id: dict[str, list[str]] = {}
    for row in _rows(df):
        raw = row.get("tags")
        if not raw:
            continue
        tags = [t.strip() for t in str(raw).split(TAG_SEPARATOR) if t.strip()]
        if tags:
            tags_by_reading_id[row["id"]] = tags
    return tags_by_reading_id


def load_readings(path: str | Path) -> list[Reading]:
    """Load readings from an export file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file or one of its rows is malformed
    """
    readings = _readings_from_frame(read_frame(path))
    logger.info(f"Loaded {len(readings)} readings from {path}")
    return readings


def load_tags(path: str | Path) -> dict[str, list[str]]:
    """Load the tags attached to each reading; empty if there is no tags column."""
    return _tags_from_frame(read_frame(path))


def load_export(path: str | Path) -> tuple[list[Reading], dict[str, list[str]]]:
    """Load readings and their tags from one parse of the export file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file or one of its rows is malformed
    """
    df = read_frame(path)
    readings = _readings_from_frame(df)
    tags_by_reading_id = _tags_from_frame(df)
    logger.info(
        f"Loaded {len(readings)} readings ({len(tags_by_reading_id)} tagged) from {path}"
    )
    return readings, tags_by_reading_id
