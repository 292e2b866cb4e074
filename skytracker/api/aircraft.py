"""
Aircraft lookup API endpoints.

Provides endpoints for:
- GET /api/aircraft/<icao> - FlightDB page for one aircraft (HTML passthrough)
- GET /api/aircraft?icao=a,b,c - FlightDB pages for several aircraft
"""

import logging

from flask import Blueprint, jsonify, request

from skytracker.services.aircraft_info import aircraft_info_service

logger = logging.getLogger(__name__)

aircraft_bp = Blueprint('aircraft', __name__, url_prefix='/api/aircraft')


@aircraft_bp.route('', methods=['GET'])
def lookup_multiple_aircraft():
    """
    Look up several aircraft at once.

    Query parameters:
    - icao: comma-separated ICAO24 addresses

    Failed lookups appear in the result as 'Error: ...' strings.
    """
    codes = [c.strip().lower() for c in request.args.get('icao', '').split(',') if c.strip()]
    if not codes:
        return jsonify({'error': 'icao parameter required'}), 400

    results = aircraft_info_service.get_multiple_aircraft_info(codes)
    return jsonify({
        'aircraft': results,
        'count': len(results),
    })


@aircraft_bp.route('/<icao>', methods=['GET'])
def lookup_aircraft(icao: str):
    """Return the FlightDB page for one aircraft as-is."""
    content = aircraft_info_service.get_aircraft_info(icao.strip().lower())
    return content, 200, {'Content-Type': 'text/html; charset=utf-8'}
