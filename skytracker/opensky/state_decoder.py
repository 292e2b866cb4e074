"""
Decoder for OpenSky state vectors.

OpenSky returns each aircraft as a positional JSON array whose values may
arrive as numbers, strings, booleans or null. This module maps that array
onto a typed FlightState using a field table, so every field is converted
(and may fail) independently of the others.

OpenSky state vector format (array indices):
0: icao24          - ICAO24 hex address
1: callsign        - Callsign (8 chars max)
2: origin_country  - Country of registration
3: time_position   - Unix timestamp of last position update
4: last_contact    - Unix timestamp of last message
5: longitude       - WGS84 longitude
6: latitude        - WGS84 latitude
7: baro_altitude   - Barometric altitude (meters)
8: on_ground       - Boolean
9: velocity        - Ground speed (m/s)
10: true_track     - Track angle (degrees, 0=north)
11: vertical_rate  - Vertical rate (m/s)
12: sensors        - Sensor IDs (array), not decoded
13: geo_altitude   - Geometric altitude (meters)
14: squawk         - Transponder code
15: spi            - Special position indicator
16: position_source - 0=ADS-B, 1=ASTERIX, 2=MLAT, 3=FLARM
17: category       - Aircraft category (only with extended=1)
"""

import json
import logging
import math
import re
from dataclasses import asdict, dataclass
from typing import Any, Callable, Iterable, List, NamedTuple, Optional, Tuple

from skytracker.errors import DecodeError

logger = logging.getLogger(__name__)

# Rows shorter than this lack the ground-status and position-source block
MIN_ROW_LENGTH = 17

_INT_PATTERN = re.compile(r'\s*[+-]?\d+\s*')
_FLOAT_PATTERN = re.compile(r'\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*')


@dataclass
class FlightState:
    """
    Decoded state vector for a single aircraft.

    Units follow OpenSky: meters, m/s, degrees, Unix seconds.
    """
    icao24: str
    callsign: Optional[str] = None
    origin_country: Optional[str] = None
    time_position: Optional[int] = None
    last_contact: int = 0
    longitude: Optional[float] = None
    latitude: Optional[float] = None
    baro_altitude: Optional[float] = None
    on_ground: bool = False
    velocity: Optional[float] = None
    true_track: Optional[float] = None
    vertical_rate: Optional[float] = None
    geo_altitude: Optional[float] = None
    squawk: Optional[str] = None
    spi: bool = False
    position_source: int = 0
    category: Optional[int] = None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return asdict(self)


# -----------------------------------------------------------------------------
# Value converters
# -----------------------------------------------------------------------------

def stringify(value: Any) -> Optional[str]:
    """
    Render a JSON value as its wire text.

    Strings pass through, booleans become 'true'/'false', nested
    arrays and objects are re-serialized compactly. None stays None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (list, dict)):
        return json.dumps(value, separators=(',', ':'))
    return str(value)


def _to_trimmed_str(value: Any) -> Optional[str]:
    text = stringify(value)
    return text.strip() if text is not None else None


def _to_int(value: Any) -> Optional[int]:
    text = stringify(value)
    if text is None:
        return None
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f'not an integer: {text!r}')
    return int(text)


def _to_float(value: Any) -> Optional[float]:
    text = stringify(value)
    if text is None:
        return None
    if not _FLOAT_PATTERN.fullmatch(text):
        raise ValueError(f'not a number: {text!r}')
    result = float(text)
    if not math.isfinite(result):
        raise ValueError(f'out of range: {text!r}')
    return result


def _to_flag(value: Any) -> bool:
    return stringify(value) == 'true'


class StateField(NamedTuple):
    """One positional column of the state vector."""
    index: int
    name: str
    convert: Callable[[Any], Any]
    default: Any = None


# Index 12 (sensors) is deliberately absent.
STATE_FIELDS: Tuple[StateField, ...] = (
    StateField(0, 'icao24', stringify, ''),
    StateField(1, 'callsign', _to_trimmed_str),
    StateField(2, 'origin_country', stringify),
    StateField(3, 'time_position', _to_int),
    StateField(4, 'last_contact', _to_int, 0),
    StateField(5, 'longitude', _to_float),
    StateField(6, 'latitude', _to_float),
    StateField(7, 'baro_altitude', _to_float),
    StateField(8, 'on_ground', _to_flag, False),
    StateField(9, 'velocity', _to_float),
    StateField(10, 'true_track', _to_float),
    StateField(11, 'vertical_rate', _to_float),
    StateField(13, 'geo_altitude', _to_float),
    StateField(14, 'squawk', stringify),
    StateField(15, 'spi', _to_flag, False),
    StateField(16, 'position_source', _to_int, 0),
    StateField(17, 'category', _to_int),
)


def _convert_field(field: StateField, row: List[Any]) -> Any:
    """Convert one column, falling back to the field default."""
    if field.index >= len(row):
        return field.default
    try:
        value = field.convert(row[field.index])
    except (TypeError, ValueError):
        value = None
    return field.default if value is None else value


def decode(row: Any) -> FlightState:
    """
    Decode one raw state vector array into a FlightState.

    Raises DecodeError if the row is not an array or is shorter than
    MIN_ROW_LENGTH. Individual unparsable values never reject the row;
    they fall back to that field's default.
    """
    if not isinstance(row, (list, tuple)):
        raise DecodeError(f'state vector must be an array, got {type(row).__name__}')
    if len(row) < MIN_ROW_LENGTH:
        raise DecodeError(f'state vector has {len(row)} elements, need {MIN_ROW_LENGTH}')

    try:
        values = {field.name: _convert_field(field, row) for field in STATE_FIELDS}
        return FlightState(**values)
    except Exception as e:
        raise DecodeError(f'failed to decode state vector: {e}') from e


def decode_rows(rows: Iterable[Any]) -> Tuple[List[FlightState], int]:
    """
    Decode a batch of state vectors.

    Returns the decoded states in upstream order plus the number of
    rows that were rejected. One bad row never voids the batch.
    """
    states = []
    rejected = 0
    for row in rows:
        try:
            states.append(decode(row))
        except DecodeError as e:
            rejected += 1
            logger.debug(f'Dropping state vector: {e}')
    return states, rejected
