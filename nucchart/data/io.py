"""
Record file loading.

Reads nuclide tables from JSON, CSV or Parquet into :class:`NuclideRecord`
lists.  JSON files hold either a list of records or an object with a
``"nuclides"`` list; tabular files use one row per nuclide with a flat
``DecayMode`` (or ``Mode``) column.
"""

import json
import logging
from pathlib import Path
from typing import List, Union

import pandas as pd

from nucchart.data.records import NuclideRecord, coerce_records

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = ('.json', '.csv', '.parquet')


def read_table(path: Union[str, Path]):
    """Load the raw entries of a record file (list of dicts or DataFrame)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Nuclide data file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == '.json':
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if isinstance(data, dict):
            if 'nuclides' not in data:
                raise ValueError(f"{path}: JSON object has no 'nuclides' list")
            data = data['nuclides']
        if not isinstance(data, list):
            raise ValueError(f"{path}: expected a list of nuclides, got {type(data).__name__}")
        return data
    if suffix == '.csv':
        return pd.read_csv(path)
    if suffix == '.parquet':
        return pd.read_parquet(path, engine='pyarrow')

    raise ValueError(
        f"Unsupported nuclide data format '{suffix}'. "
        f"Supported: {', '.join(SUPPORTED_SUFFIXES)}"
    )


def load_records(path: Union[str, Path]) -> List[NuclideRecord]:
    """Load and coerce a record file; malformed rows are skipped."""
    records, rejected = coerce_records(read_table(path))
    logger.info(f"Loaded {len(records)} nuclides from {path}")
    if rejected:
        logger.warning(f"  {rejected} malformed entries skipped")
    return records


def save_records(records: List[NuclideRecord], path: Union[str, Path]) -> Path:
    """Write records back out; the format follows the file suffix."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = [r.to_mapping() for r in records]
    suffix = path.suffix.lower()
    if suffix == '.json':
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(rows, f, indent=2, ensure_ascii=False)
        return path

    # Flatten DecayMode for tabular formats
    for row in rows:
        if 'DecayMode' in row:
            row['DecayMode'] = row['DecayMode']['Mode']
    df = pd.DataFrame(rows)
    if suffix == '.csv':
        df.to_csv(path, index=False)
    elif suffix == '.parquet':
        df.to_parquet(path, engine='pyarrow', index=False)
    else:
        raise ValueError(
            f"Unsupported nuclide data format '{suffix}'. "
            f"Supported: {', '.join(SUPPORTED_SUFFIXES)}"
        )
    return path
