"""
Configuration management for SkyTracker.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class OpenSkyConfig:
    """OpenSky Network API configuration."""
    client_id: Optional[str] = os.getenv('OPENSKY_CLIENT_ID') or None
    client_secret: Optional[str] = os.getenv('OPENSKY_CLIENT_SECRET') or None
    auth_url: str = os.getenv(
        'OPENSKY_AUTH_URL',
        'https://auth.opensky-network.org/auth/realms/opensky-network/protocol/openid-connect/token',
    )
    base_url: str = os.getenv('OPENSKY_BASE_URL', 'https://opensky-network.org/api')
    timeout_seconds: float = float(os.getenv('OPENSKY_TIMEOUT_SECONDS', '30'))

    @property
    def is_authenticated(self) -> bool:
        return bool(self.client_id and self.client_secret)


@dataclass(frozen=True)
class GuardConfig:
    """Result-size limits for bulk queries."""
    max_area_results: int = int(os.getenv('MAX_AREA_RESULTS', '500'))


@dataclass(frozen=True)
class FlightDbConfig:
    """FlightDB aircraft lookup configuration."""
    base_url: str = os.getenv('FLIGHTDB_BASE_URL', 'https://www.flightdb.net')
    timeout_seconds: float = float(os.getenv('FLIGHTDB_TIMEOUT_SECONDS', '30'))
    # Pause between consecutive lookups in a bulk request
    lookup_delay_seconds: float = float(os.getenv('FLIGHTDB_LOOKUP_DELAY_SECONDS', '0.2'))


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    opensky: OpenSkyConfig
    guard: GuardConfig
    flightdb: FlightDbConfig

    # Flask settings
    port: int
    debug: bool


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        opensky=OpenSkyConfig(),
        guard=GuardConfig(),
        flightdb=FlightDbConfig(),
        port=int(os.getenv('PORT', '5000')),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
    )


# Singleton instance
config = load_config()
