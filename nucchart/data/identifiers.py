"""
Nuclide identifiers.

``nuclide_id`` builds the canonical key of a rendered cell (``"He4"``) and
``parse_to_id`` turns loosely formatted user input (``"he-4"``, ``"4HE"``,
``" He 4 "``) into the same form.
"""

import re
from typing import Any, Mapping, Optional, Union

from nucchart.data.records import NuclideRecord

PLACEHOLDER_SYMBOL = 'noname'

_SYMBOL_RE = re.compile(r'[A-Za-z]+')
_NUMBER_RE = re.compile(r'\d+')


def _symbol_and_mass(record: Union[NuclideRecord, Mapping[str, Any]]):
    if isinstance(record, NuclideRecord):
        return record.symbol, record.A
    return record.get('Symbol'), record['A']


def nuclide_id(
    record: Union[NuclideRecord, Mapping[str, Any]],
    placeholder: str = PLACEHOLDER_SYMBOL,
) -> str:
    """Identifier of a nuclide: trimmed symbol + mass number, e.g. 'He4'."""
    symbol, a = _symbol_and_mass(record)
    name = symbol or placeholder
    return f"{name.strip()}{int(a)}"


def nuclide_name(
    record: Union[NuclideRecord, Mapping[str, Any]],
    placeholder: str = PLACEHOLDER_SYMBOL,
) -> str:
    """Cell label, e.g. 'He 4'."""
    symbol, a = _symbol_and_mass(record)
    name = symbol or placeholder
    return f"{name.strip()} {int(a)}"


def parse_to_id(raw: Optional[str]) -> Optional[str]:
    """
    Parse free-form input into a nuclide identifier.

    Takes the first alphabetic run and the first numeric run, wherever they
    occur, so 'U235', '235u' and 'u-235' all give 'U235'.  With more than one
    numeric run the first one wins ('He4x2' -> 'He4').  Returns None when
    either run is missing.  Whether the identifier exists is up to the caller.
    """
    if not raw:
        return None
    symbol = _SYMBOL_RE.search(raw)
    number = _NUMBER_RE.search(raw)
    if symbol is None or number is None:
        return None
    letters = symbol.group(0)
    return letters[0].upper() + letters[1:].lower() + number.group(0)
