"""
Data Module
===========

Nuclide record schema, identifier codec and record file loading.

Key Components:
    NuclideRecord: One nuclide (Z, A) with optional yield, half-life and decay mode
    DecayMode: Decay-mode short code
    verify_data: Reject empty datasets before drawing
    nuclide_id / parse_to_id: Canonical cell identifiers ('He4')
    load_records: Read JSON / CSV / Parquet record files
"""

from nucchart.data.records import DecayMode, NuclideRecord, coerce_records, verify_data
from nucchart.data.identifiers import nuclide_id, nuclide_name, parse_to_id
from nucchart.data.io import load_records, read_table, save_records

__all__ = [
    "DecayMode",
    "NuclideRecord",
    "coerce_records",
    "verify_data",
    "nuclide_id",
    "nuclide_name",
    "parse_to_id",
    "load_records",
    "read_table",
    "save_records",
]
