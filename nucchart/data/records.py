"""
Nuclide Records
===============

Explicit schema for the per-nuclide data a host hands to the chart.

Input records are loosely typed (JSON-like mappings or DataFrame rows) using
the keys ``Z``, ``A``, ``Symbol``, ``Yield``, ``HalflifeText`` and
``DecayMode`` (an object with a ``Mode`` short code).  They are coerced into
frozen :class:`NuclideRecord` instances where an absent field is ``None``.

Key Components:
    DecayMode       -- Decay-mode short code wrapper
    NuclideRecord   -- One nuclide (Z, A) plus optional display data
    coerce_records  -- Sequence / DataFrame -> (records, rejected count)
    verify_data     -- Reject empty or absent datasets
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


def _is_missing(value: Any) -> bool:
    """True for None and NaN-like cells coming from DataFrames."""
    if value is None:
        return True
    if isinstance(value, (float, np.floating)):
        return math.isnan(value)
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _as_int(value: Any, name: str) -> int:
    if _is_missing(value):
        raise ValueError(f"Nuclide record is missing '{name}'")
    try:
        as_float = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{name}' must be an integer, got {value!r}") from exc
    if not as_float.is_integer():
        raise ValueError(f"'{name}' must be an integer, got {value!r}")
    return int(as_float)


@dataclass(frozen=True)
class DecayMode:
    """Primary decay mode of a nuclide, e.g. ``DecayMode('b-')``."""

    mode: str

    @classmethod
    def from_value(cls, value: Any) -> Optional['DecayMode']:
        """Accept a ``{'Mode': ...}`` mapping, a bare string or None."""
        if _is_missing(value):
            return None
        if isinstance(value, DecayMode):
            return value
        if isinstance(value, Mapping):
            mode = value.get('Mode')
            if _is_missing(mode):
                return None
            return cls(str(mode).strip())
        return cls(str(value).strip())


@dataclass(frozen=True)
class NuclideRecord:
    """
    One nuclide of the chart.

    Attributes:
        Z: Proton number (>= 0).
        A: Mass number (>= Z).
        symbol: Element symbol, None when unknown.
        yield_: Production value; -1 marks an undefined ratio in comparison mode.
        halflife_text: Preformatted half-life string.
        decay_mode: Primary decay mode.
    """

    Z: int
    A: int
    symbol: Optional[str] = None
    yield_: Optional[float] = None
    halflife_text: Optional[str] = None
    decay_mode: Optional[DecayMode] = None

    def __post_init__(self):
        if self.Z < 0:
            raise ValueError(f"Z must be >= 0, got {self.Z}")
        if self.A < self.Z:
            raise ValueError(f"A must be >= Z, got Z={self.Z}, A={self.A}")

    @property
    def N(self) -> int:
        """Neutron number."""
        return self.A - self.Z

    @property
    def has_yield(self) -> bool:
        return self.yield_ is not None

    @property
    def has_decay_mode(self) -> bool:
        return self.decay_mode is not None

    @classmethod
    def from_mapping(cls, d: Mapping[str, Any]) -> 'NuclideRecord':
        """
        Build a record from a JSON-like mapping.

        Raises:
            ValueError: If Z or A is missing or not integral, Z < 0, or A < Z.
        """
        symbol = d.get('Symbol')
        symbol = None if _is_missing(symbol) else str(symbol)

        yield_ = d.get('Yield')
        if _is_missing(yield_):
            yield_ = None
        else:
            try:
                yield_ = float(yield_)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"'Yield' must be numeric, got {yield_!r}") from exc

        halflife = d.get('HalflifeText')
        halflife = None if _is_missing(halflife) else str(halflife)

        # Flat tables may carry the short code in a 'Mode' column
        decay = d.get('DecayMode')
        if _is_missing(decay):
            decay = d.get('Mode')

        return cls(
            Z=_as_int(d.get('Z'), 'Z'),
            A=_as_int(d.get('A'), 'A'),
            symbol=symbol,
            yield_=yield_,
            halflife_text=halflife,
            decay_mode=DecayMode.from_value(decay),
        )

    def to_mapping(self) -> dict:
        """Inverse of :meth:`from_mapping` (absent fields are omitted)."""
        d = {'Z': self.Z, 'A': self.A}
        if self.symbol is not None:
            d['Symbol'] = self.symbol
        if self.yield_ is not None:
            d['Yield'] = self.yield_
        if self.halflife_text is not None:
            d['HalflifeText'] = self.halflife_text
        if self.decay_mode is not None:
            d['DecayMode'] = {'Mode': self.decay_mode.mode}
        return d


RecordInput = Union[pd.DataFrame, Iterable[Union[NuclideRecord, Mapping[str, Any]]], None]


def verify_data(data: RecordInput) -> bool:
    """
    Return True if ``data`` holds at least one entry.

    Only the trivial empty/absent case is rejected; the producer of the
    records is trusted for everything else.
    """
    if data is None:
        return False
    if isinstance(data, pd.DataFrame):
        return not data.empty
    try:
        return len(data) > 0
    except TypeError:
        # Generators and other iterables without a length
        return True


def _iter_entries(data: RecordInput):
    if data is None:
        return iter(())
    if isinstance(data, pd.DataFrame):
        return iter(data.to_dict(orient='records'))
    if isinstance(data, Mapping):
        # {'nuclides': [...]} envelope or a single record
        if 'nuclides' in data:
            return iter(data['nuclides'])
        return iter([data])
    return iter(data)


def coerce_records(data: RecordInput) -> Tuple[List[NuclideRecord], int]:
    """
    Convert host data into :class:`NuclideRecord` instances.

    Entries failing the minimal shape checks are skipped and logged.

    Returns:
        Tuple of (records, number of rejected entries).
    """
    records: List[NuclideRecord] = []
    rejected = 0
    for i, entry in enumerate(_iter_entries(data)):
        if isinstance(entry, NuclideRecord):
            records.append(entry)
            continue
        if not isinstance(entry, Mapping):
            logger.warning(f"Skipping nuclide entry {i}: expected a mapping, got {type(entry).__name__}")
            rejected += 1
            continue
        try:
            records.append(NuclideRecord.from_mapping(entry))
        except ValueError as exc:
            logger.warning(f"Skipping nuclide entry {i}: {exc}")
            rejected += 1
    return records, rejected
