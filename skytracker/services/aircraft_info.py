"""
Aircraft information service - FlightDB lookups by ICAO24 address.

FlightDB publishes registration, type and operator details for a
transponder address as an HTML page. This service passes that page
through unchanged; interpreting it is left to the caller.
"""

import logging
import time
from typing import Callable, Dict, Iterable, Optional

import requests

from skytracker.config import config
from skytracker.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)


class AircraftInfoService:
    """Fetch aircraft detail pages from FlightDB."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        lookup_delay: Optional[float] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.base_url = (base_url or config.flightdb.base_url).rstrip('/')
        self.timeout = timeout or config.flightdb.timeout_seconds
        self.lookup_delay = config.flightdb.lookup_delay_seconds if lookup_delay is None else lookup_delay
        self.session = session or requests.Session()
        self._sleep = sleep

    def get_aircraft_info(self, icao: str) -> str:
        """
        Get the FlightDB page for one ICAO24 address.

        Raises UpstreamUnavailable on network errors or non-2xx status.
        """
        logger.info(f'Fetching aircraft info for ICAO {icao} from FlightDB')

        try:
            response = self.session.get(
                f'{self.base_url}/aircraft.php',
                params={'modes': icao},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f'FlightDB lookup failed for {icao}: {e}')
            raise UpstreamUnavailable(f'Error fetching aircraft info: {e}') from e

        if not 200 <= response.status_code < 300:
            logger.error(f'FlightDB lookup for {icao} returned HTTP {response.status_code}')
            raise UpstreamUnavailable(f'Error fetching aircraft info: HTTP {response.status_code}')

        return response.text

    def get_multiple_aircraft_info(self, icao_codes: Iterable[str]) -> Dict[str, str]:
        """
        Look up several ICAO24 addresses one after another.

        Waits lookup_delay seconds between requests. A failed lookup is
        recorded as an 'Error: ...' string and does not stop the batch.
        """
        codes = list(icao_codes)
        logger.info(f'Fetching aircraft info for {len(codes)} ICAO codes from FlightDB')

        results = {}
        for i, icao in enumerate(codes):
            if i and self.lookup_delay:
                self._sleep(self.lookup_delay)
            try:
                results[icao] = self.get_aircraft_info(icao)
            except UpstreamUnavailable as e:
                results[icao] = f'Error: {e}'

        logger.info(f'Processed {len(results)} aircraft lookups')
        return results


# Singleton instance
aircraft_info_service = AircraftInfoService()
