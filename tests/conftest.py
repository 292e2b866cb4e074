import threading

import pytest
import requests

from skytracker.app import create_app

_MISSING = object()


class FakeResponse:
    """Stand-in for requests.Response."""

    def __init__(self, status_code=200, json_data=_MISSING, text=''):
        self.status_code = status_code
        self._json_data = json_data
        self.text = text

    def json(self):
        if self._json_data is _MISSING:
            raise ValueError('Response does not contain valid JSON')
        return self._json_data

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f'HTTP {self.status_code}', response=self)


class FakeSession:
    """
    Stand-in for requests.Session.

    Each call is recorded and answered by `handler`, which receives the
    method, url and keyword arguments and returns a FakeResponse or raises.
    """

    def __init__(self, handler):
        self.handler = handler
        self.calls = []
        self._lock = threading.Lock()

    def _call(self, method, url, **kwargs):
        with self._lock:
            self.calls.append((method, url, kwargs))
        return self.handler(method, url, **kwargs)

    def get(self, url, **kwargs):
        return self._call('GET', url, **kwargs)

    def post(self, url, **kwargs):
        return self._call('POST', url, **kwargs)

    def calls_to(self, method):
        return [c for c in self.calls if c[0] == method]


def make_row(icao24='abc123', length=17):
    """Build a plausible state vector with the given number of columns."""
    row = [
        icao24, 'UAL123  ', 'United States', 1690000000, 1690000005,
        -122.4, 37.6, 10668.0, False, 230.5, 90.0, 0.0, None,
        10700.0, '1200', False, 0, 3,
    ]
    return (row + [None] * max(0, length - len(row)))[:length]


@pytest.fixture
def app():
    app = create_app()
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
