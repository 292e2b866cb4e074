import pytest

from conftest import make_row
from skytracker.errors import DecodeError
from skytracker.opensky.state_decoder import FlightState, decode, decode_rows, stringify


def test_decode_reference_row():
    row = [
        "abc123", "UAL123 ", "USA", 1690000000, 1690000005, 7.5, 47.3, 10000,
        False, 230.5, 90, 0, None, None, None, False, 0,
    ]

    state = decode(row)

    assert state == FlightState(
        icao24='abc123',
        callsign='UAL123',
        origin_country='USA',
        time_position=1690000000,
        last_contact=1690000005,
        longitude=7.5,
        latitude=47.3,
        baro_altitude=10000.0,
        on_ground=False,
        velocity=230.5,
        true_track=90.0,
        vertical_rate=0.0,
        geo_altitude=None,
        squawk=None,
        spi=False,
        position_source=0,
        category=None,
    )


@pytest.mark.parametrize('length', [0, 1, 12, 16])
def test_short_rows_are_rejected(length):
    with pytest.raises(DecodeError):
        decode(make_row(length=length))


@pytest.mark.parametrize('row', [None, 'abc123', {'icao24': 'abc123'}, 42])
def test_non_array_rows_are_rejected(row):
    with pytest.raises(DecodeError):
        decode(row)


def test_category_only_read_from_extended_rows():
    assert decode(make_row(length=17)).category is None
    assert decode(make_row(length=18)).category == 3


def test_null_icao24_becomes_empty_string():
    row = make_row()
    row[0] = None

    assert decode(row).icao24 == ''


def test_icao24_is_stringified_not_normalized():
    row = make_row()
    row[0] = 4840
    assert decode(row).icao24 == '4840'

    row[0] = 'ABC123'
    assert decode(row).icao24 == 'ABC123'


def test_callsign_is_trimmed_and_null_stays_null():
    row = make_row()
    row[1] = '  KLM1023 '
    assert decode(row).callsign == 'KLM1023'

    row[1] = None
    assert decode(row).callsign is None


@pytest.mark.parametrize('value, expected', [
    (True, True),
    ('true', True),
    (False, False),
    ('True', False),
    ('TRUE', False),
    (1, False),
    (None, False),
])
def test_on_ground_only_true_for_literal_true(value, expected):
    row = make_row()
    row[8] = value

    state = decode(row)

    assert state.on_ground is expected
    assert state.on_ground == (stringify(value) == 'true')


def test_spi_follows_literal_true_rule():
    row = make_row()
    row[15] = 'true'
    assert decode(row).spi is True

    row[15] = 'yes'
    assert decode(row).spi is False


def test_numeric_values_arriving_as_strings():
    row = make_row()
    row[3] = '1690000000'
    row[5] = '-122.25'
    row[9] = ' 230.5 '
    row[16] = '2'

    state = decode(row)

    assert state.time_position == 1690000000
    assert state.longitude == -122.25
    assert state.velocity == 230.5
    assert state.position_source == 2


def test_unparsable_values_fall_back_per_field():
    row = make_row(length=18)
    row[3] = 'soon'
    row[4] = 'never'
    row[6] = '47,3'
    row[7] = '1_000'
    row[13] = 'NaN'
    row[16] = 'mlat'
    row[17] = 'heavy'

    state = decode(row)

    assert state.time_position is None
    assert state.last_contact == 0
    assert state.latitude is None
    assert state.baro_altitude is None
    assert state.geo_altitude is None
    assert state.position_source == 0
    assert state.category is None
    # Untouched fields still decode
    assert state.icao24 == 'abc123'
    assert state.velocity == 230.5


def test_fractional_timestamp_is_not_an_integer():
    row = make_row()
    row[3] = 1690000000.5

    assert decode(row).time_position is None


def test_exponent_notation_parses_as_float():
    row = make_row()
    row[7] = '1.0668e4'

    assert decode(row).baro_altitude == 10668.0


def test_sensors_column_is_ignored():
    row = make_row()
    row[12] = [1234, 5678]

    assert decode(row) == decode(make_row())


def test_decode_is_idempotent():
    row = make_row(length=18)

    assert decode(row) == decode(row)


def test_stringify_renders_wire_text():
    assert stringify(None) is None
    assert stringify('x') == 'x'
    assert stringify(True) == 'true'
    assert stringify(False) == 'false'
    assert stringify(7.5) == '7.5'
    assert stringify(10000) == '10000'
    assert stringify([1, 2]) == '[1,2]'


def test_decode_rows_drops_bad_rows_and_keeps_order():
    rows = [
        make_row('aaa111'),
        make_row('bbb222', length=5),
        None,
        make_row('ccc333', length=18),
    ]

    states, rejected = decode_rows(rows)

    assert [s.icao24 for s in states] == ['aaa111', 'ccc333']
    assert rejected == 2


def test_to_dict_uses_snake_case_fields():
    data = decode(make_row()).to_dict()

    assert data['icao24'] == 'abc123'
    assert data['origin_country'] == 'United States'
    assert data['on_ground'] is False
    assert 'category' in data
