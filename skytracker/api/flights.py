"""
Flight data API endpoints.

Provides endpoints for:
- GET /api/flights - All active flights known to OpenSky
- GET /api/flights/<icao24> - Current state of a single aircraft
- GET /api/flights/area - Flights inside a bounding box

Upstream failures and oversized results are turned into JSON error
responses by the handlers registered in skytracker.app.
"""

import logging
import time
from datetime import datetime, timezone
from typing import List

from flask import Blueprint, jsonify, request

from skytracker.opensky.client import flight_client
from skytracker.opensky.state_decoder import FlightState

logger = logging.getLogger(__name__)

flights_bp = Blueprint('flights', __name__, url_prefix='/api/flights')

AREA_BOUNDS = ('south', 'north', 'east', 'west')


def _flight_list_response(flights: List[FlightState], start_time: float):
    query_time_ms = (time.perf_counter() - start_time) * 1000

    return jsonify({
        'flights': [f.to_dict() for f in flights],
        'count': len(flights),
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'query_time_ms': round(query_time_ms, 2),
    })


@flights_bp.route('', methods=['GET'])
def list_active_flights():
    """
    List all active flights.

    Not subject to the area result limit; the full OpenSky snapshot can
    run to several thousand aircraft.
    """
    start_time = time.perf_counter()
    flights = flight_client.get_active_flights()
    return _flight_list_response(flights, start_time)


@flights_bp.route('/area', methods=['GET'])
def list_flights_in_area():
    """
    List flights within a bounding box.

    Query parameters (all required, decimal degrees):
    - south: lower latitude bound
    - north: upper latitude bound
    - east: upper longitude bound
    - west: lower longitude bound
    """
    start_time = time.perf_counter()

    bounds = {}
    for name in AREA_BOUNDS:
        value = request.args.get(name, type=float)
        if value is None:
            return jsonify({'error': f'{name} is required and must be a number'}), 400
        bounds[name] = value

    flights = flight_client.get_flights_by_area(**bounds)
    return _flight_list_response(flights, start_time)


@flights_bp.route('/<icao24>', methods=['GET'])
def get_flight(icao24: str):
    """Get the current state of a single aircraft by ICAO24 address."""
    start_time = time.perf_counter()
    icao24 = icao24.strip().lower()

    flight = flight_client.get_flight_by_icao(icao24)
    if flight is None:
        return jsonify({'error': 'Flight not found'}), 404

    result = flight.to_dict()
    result['query_time_ms'] = round((time.perf_counter() - start_time) * 1000, 2)
    return jsonify(result)
