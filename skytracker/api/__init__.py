"""
API module for SkyTracker.

Provides REST endpoints for:
- Flight state queries (all, by ICAO24, by bounding box)
- Aircraft detail lookups
"""

from skytracker.api.aircraft import aircraft_bp
from skytracker.api.flights import flights_bp

__all__ = ['aircraft_bp', 'flights_bp']
