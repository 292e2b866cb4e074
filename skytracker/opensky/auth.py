"""
OAuth2 client-credentials token cache for the OpenSky Network API.

OpenSky issues short-lived bearer tokens from a Keycloak realm. A single
TokenCache is shared by every request thread; it keeps one credential and
refreshes it under a lock so that concurrent callers hitting an empty or
expired cache trigger exactly one token request between them.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

import requests

from skytracker.errors import AuthFailure

logger = logging.getLogger(__name__)

# Tokens are renewed this many seconds before the issuer says they expire
EXPIRY_BUFFER_SECONDS = 300


@dataclass(frozen=True)
class Credential:
    """Cached access token and the moment (Unix seconds) it stops being served."""
    token: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


class TokenCache:
    """
    Thread-safe holder of the current OpenSky access token.

    Only get_token() and invalidate() are public; the credential itself
    never leaves the cache.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        auth_url: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.auth_url = auth_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self._clock = clock

        self._credential: Optional[Credential] = None
        self._lock = threading.Lock()

    def get_token(self) -> str:
        """
        Return a valid access token, fetching a new one if needed.

        Raises AuthFailure if a new token was needed and could not be
        obtained. A previously cached token is kept in that case.
        """
        with self._lock:
            credential = self._credential
            if credential is not None and credential.is_valid(self._clock()):
                logger.debug('Using cached access token')
                return credential.token

            credential = self._request_token()
            self._credential = credential
            return credential.token

    def invalidate(self) -> None:
        """Drop the cached token so the next call fetches a fresh one."""
        with self._lock:
            self._credential = None

    def _request_token(self) -> Credential:
        """POST the client credentials and build a Credential from the reply."""
        logger.info('Requesting new access token from OpenSky Network')

        try:
            response = self.session.post(
                self.auth_url,
                data={
                    'grant_type': 'client_credentials',
                    'client_id': self.client_id,
                    'client_secret': self.client_secret,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            logger.error(f'Token endpoint returned HTTP {e.response.status_code}')
            raise AuthFailure('Failed to obtain access token from OpenSky Network') from e
        except requests.exceptions.RequestException as e:
            logger.error(f'Token request failed: {e}')
            raise AuthFailure('Failed to obtain access token from OpenSky Network') from e

        if not 200 <= response.status_code < 300:
            logger.error(f'Token endpoint returned HTTP {response.status_code}')
            raise AuthFailure('Failed to obtain access token from OpenSky Network')

        try:
            payload = response.json()
        except ValueError as e:
            logger.error('Token response is not valid JSON')
            raise AuthFailure('Failed to parse token response from OpenSky Network') from e

        if not isinstance(payload, dict) or not payload.get('access_token'):
            raise AuthFailure('Invalid token response from OpenSky Network')

        issued_at = self._clock()
        expires_at = issued_at + _lifetime_seconds(payload.get('expires_in')) - EXPIRY_BUFFER_SECONDS

        logger.info(f'Obtained access token, valid for {expires_at - issued_at:.0f}s')

        return Credential(token=str(payload['access_token']), expires_at=expires_at)


def _lifetime_seconds(value) -> int:
    """Declared token lifetime; anything unusable counts as already expired."""
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
