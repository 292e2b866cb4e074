import pytest
import requests

from conftest import FakeResponse, FakeSession
from skytracker.errors import UpstreamUnavailable
from skytracker.services.aircraft_info import AircraftInfoService


def make_service(session, sleeps=None):
    return AircraftInfoService(
        base_url='https://flightdb.example.test/',
        timeout=5.0,
        lookup_delay=0.2,
        session=session,
        sleep=(sleeps.append if sleeps is not None else lambda s: None),
    )


def test_get_aircraft_info_returns_page_body():
    session = FakeSession(lambda method, url, **kwargs: FakeResponse(200, text='<html>D-AIZZ</html>'))

    content = make_service(session).get_aircraft_info('3c6444')

    assert content == '<html>D-AIZZ</html>'
    [(method, url, kwargs)] = session.calls
    assert url == 'https://flightdb.example.test/aircraft.php'
    assert kwargs['params'] == {'modes': '3c6444'}
    assert kwargs['timeout'] == 5.0


def test_get_aircraft_info_raises_on_http_error():
    session = FakeSession(lambda method, url, **kwargs: FakeResponse(500))

    with pytest.raises(UpstreamUnavailable):
        make_service(session).get_aircraft_info('3c6444')


def test_multiple_lookups_continue_past_failures():
    def handler(method, url, **kwargs):
        if kwargs['params']['modes'] == 'bad000':
            raise requests.exceptions.ConnectionError('connection reset')
        return FakeResponse(200, text=f"page {kwargs['params']['modes']}")

    sleeps = []
    results = make_service(FakeSession(handler), sleeps).get_multiple_aircraft_info(
        ['aaa111', 'bad000', 'ccc333']
    )

    assert results['aaa111'] == 'page aaa111'
    assert results['ccc333'] == 'page ccc333'
    assert results['bad000'].startswith('Error: ')
    assert list(results) == ['aaa111', 'bad000', 'ccc333']
    # Delay only between requests, not before the first
    assert sleeps == [0.2, 0.2]


def test_multiple_lookups_with_no_codes():
    session = FakeSession(lambda method, url, **kwargs: FakeResponse(200, text=''))

    assert make_service(session).get_multiple_aircraft_info([]) == {}
    assert session.calls == []


def test_get_aircraft_info_raises_on_redirect_status():
    session = FakeSession(lambda method, url, **kwargs: FakeResponse(302, text='moved'))

    with pytest.raises(UpstreamUnavailable):
        make_service(session).get_aircraft_info('3c6444')
