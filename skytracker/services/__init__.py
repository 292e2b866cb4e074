"""
External service integrations for SkyTracker.

Currently: FlightDB aircraft detail lookups.
"""

from skytracker.services.aircraft_info import AircraftInfoService, aircraft_info_service

__all__ = ['AircraftInfoService', 'aircraft_info_service']
