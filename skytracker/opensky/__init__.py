"""
OpenSky Network integration for SkyTracker.

Handles token caching, querying the /states/all endpoint, and decoding
state vectors into FlightState records.
"""

from skytracker.opensky.auth import TokenCache
from skytracker.opensky.client import BoundingBox, FlightQueryClient, flight_client
from skytracker.opensky.guard import QueryGuard
from skytracker.opensky.state_decoder import FlightState, decode, decode_rows

__all__ = [
    'BoundingBox',
    'FlightQueryClient',
    'FlightState',
    'QueryGuard',
    'TokenCache',
    'decode',
    'decode_rows',
    'flight_client',
]
