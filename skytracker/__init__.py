"""
SkyTracker Package.

Live aircraft state proxy for the OpenSky Network, built with Flask and
requests.

Modules:
    api/         REST endpoints for flight queries and aircraft lookups
    opensky/     OpenSky client, token cache, state vector decoder, result guard
    services/    External lookups (FlightDB aircraft details)
    errors.py    Error types shared across the package
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
