"""
OpenSky Network API client.

Handles communication with the OpenSky REST API, including:
- OAuth2 bearer authentication (optional, falls back to anonymous access)
- Queries for all flights, a single aircraft, or a bounding box
- Translating transport and parsing failures into SkyTracker errors

Every query goes to /states/all; only the query parameters differ.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from skytracker.config import config
from skytracker.errors import AuthFailure, UpstreamResponseInvalid, UpstreamUnavailable
from skytracker.opensky.auth import TokenCache
from skytracker.opensky.guard import QueryGuard
from skytracker.opensky.state_decoder import FlightState, decode_rows

logger = logging.getLogger(__name__)


@dataclass
class BoundingBox:
    """
    Geographic bounding box for API queries.

    Bounds are sent exactly as given. OpenSky expects:
    lamin=south, lamax=north, lomin=west, lomax=east
    """
    south: float
    north: float
    east: float
    west: float

    @property
    def is_inverted(self) -> bool:
        return self.south > self.north or self.west > self.east

    def to_params(self) -> dict:
        """Convert to OpenSky API query parameters."""
        return {
            'lamin': self.south,
            'lamax': self.north,
            'lomin': self.west,
            'lomax': self.east,
        }


class FlightQueryClient:
    """
    Client for the OpenSky /states/all endpoint.

    Handles:
    - Bearer token from a shared TokenCache, when credentials are configured
    - GET requests with a bounded timeout, no retries
    - Row-by-row decoding of the states array
    - Result-size guard on area queries
    """

    def __init__(
        self,
        base_url: str = 'https://opensky-network.org/api',
        token_cache: Optional[TokenCache] = None,
        guard: Optional[QueryGuard] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.token_cache = token_cache
        self.guard = guard or QueryGuard()
        self.timeout = timeout
        self.session = session or requests.Session()

        if token_cache:
            logger.info('OpenSky client initialized with authentication')
        else:
            logger.warning('OpenSky client running without authentication (lower rate limits)')

    @classmethod
    def from_config(cls) -> 'FlightQueryClient':
        """Create client from application configuration."""
        opensky = config.opensky
        session = requests.Session()

        token_cache = None
        if opensky.is_authenticated:
            token_cache = TokenCache(
                client_id=opensky.client_id,
                client_secret=opensky.client_secret,
                auth_url=opensky.auth_url,
                timeout=opensky.timeout_seconds,
                session=session,
            )

        return cls(
            base_url=opensky.base_url,
            token_cache=token_cache,
            guard=QueryGuard(config.guard.max_area_results),
            timeout=opensky.timeout_seconds,
            session=session,
        )

    def get_active_flights(self) -> List[FlightState]:
        """Fetch every aircraft currently known to OpenSky."""
        logger.info('Fetching active flights from OpenSky Network API')
        return self._get_states()

    def get_flight_by_icao(self, icao24: str) -> Optional[FlightState]:
        """Fetch the current state of a single aircraft, or None if not seen."""
        logger.info(f'Fetching flight {icao24} from OpenSky Network API')
        states = self._get_states({'icao24': icao24})
        return states[0] if states else None

    def get_flights_by_area(
        self,
        south: float,
        north: float,
        east: float,
        west: float,
    ) -> List[FlightState]:
        """
        Fetch all aircraft inside a bounding box.

        Raises ResultTooLarge when the box holds more aircraft than the
        configured guard allows.
        """
        bbox = BoundingBox(south=south, north=north, east=east, west=west)
        if bbox.is_inverted:
            # Sent as-is; OpenSky decides what an inverted box means
            logger.warning(f'Bounding box has inverted bounds: {bbox}')

        logger.info(f'Fetching flights in area {bbox.to_params()} from OpenSky Network API')
        states = self._get_states(bbox.to_params())
        return self.guard.check(states)

    def _auth_headers(self) -> Dict[str, str]:
        """Bearer header if a token can be obtained, otherwise no headers."""
        if self.token_cache is None:
            return {}
        try:
            token = self.token_cache.get_token()
        except AuthFailure as e:
            logger.warning(f'Failed to obtain access token, continuing with unauthenticated request: {e}')
            return {}
        return {'Authorization': f'Bearer {token}'}

    def _get_states(self, params: Optional[Dict[str, Any]] = None) -> List[FlightState]:
        """
        GET /states/all and decode the response.

        Raises:
            UpstreamUnavailable on network errors or non-2xx status
            UpstreamResponseInvalid if the body is not the expected JSON
        """
        url = f'{self.base_url}/states/all'
        headers = self._auth_headers()

        logger.debug(f'Fetching states: {url} params={params}')

        try:
            response = self.session.get(
                url,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            logger.error('OpenSky API timeout')
            raise UpstreamUnavailable('OpenSky Network request timed out') from e
        except requests.exceptions.HTTPError as e:
            if e.response.status_code == 429:
                logger.warning('OpenSky rate limit exceeded')
            elif e.response.status_code == 401 and headers:
                # Token refused before its expiry; fetch a new one next time
                logger.warning('OpenSky rejected the access token')
                self.token_cache.invalidate()
            else:
                logger.error(f'OpenSky API error: {e.response.status_code}')
            raise UpstreamUnavailable(
                f'OpenSky Network returned HTTP {e.response.status_code}'
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(f'OpenSky request failed: {e}')
            raise UpstreamUnavailable('Failed to fetch flights from OpenSky Network') from e

        if not 200 <= response.status_code < 300:
            logger.error(f'OpenSky API error: {response.status_code}')
            raise UpstreamUnavailable(f'OpenSky Network returned HTTP {response.status_code}')

        try:
            data = response.json()
        except ValueError as e:
            logger.error('JSON parsing error while processing OpenSky response')
            raise UpstreamResponseInvalid('Failed to parse OpenSky Network response') from e

        if not isinstance(data, dict):
            raise UpstreamResponseInvalid('OpenSky Network response is not a JSON object')

        states_raw = data.get('states')
        if states_raw is None:
            logger.warning('No states found in OpenSky API response')
            return []
        if not isinstance(states_raw, list):
            raise UpstreamResponseInvalid('OpenSky Network response has a malformed states field')

        states, rejected = decode_rows(states_raw)
        if rejected:
            logger.debug(f'Dropped {rejected} malformed state vectors')

        logger.info(f'Parsed {len(states)} flights from {len(states_raw)} state vectors')

        return states


# Singleton instance
flight_client = FlightQueryClient.from_config()
