from firwatch.domain import BAGHDAD_LATITUDE, FL240_M, Sector
from firwatch.models.air_traffic import AircraftState
from firwatch.services.classifier import (
    altitude_for_filter,
    classify_sector,
    filter_to_fir,
    in_fir,
)


def test_altitude_prefers_barometric_over_geometric():
    state = AircraftState(icao24="a1", baro_altitude=9000.0, geo_altitude=9100.0)

    assert altitude_for_filter(state) == 9000.0


def test_altitude_falls_back_to_geometric():
    state = AircraftState(icao24="a1", baro_altitude=None, geo_altitude=9100.0)

    assert altitude_for_filter(state) == 9100.0


def test_altitude_unknown_when_both_missing():
    assert altitude_for_filter(AircraftState(icao24="a1")) is None


def test_zero_barometric_altitude_is_not_treated_as_missing():
    state = AircraftState(icao24="a1", baro_altitude=0.0, geo_altitude=FL240_M + 10)

    assert altitude_for_filter(state) == 0.0


def test_sector_split_is_strictly_greater_than_reference():
    assert classify_sector(BAGHDAD_LATITUDE + 0.0001, BAGHDAD_LATITUDE) is Sector.NORTH
    assert classify_sector(BAGHDAD_LATITUDE, BAGHDAD_LATITUDE) is Sector.SOUTH
    assert classify_sector(30.0, BAGHDAD_LATITUDE) is Sector.SOUTH


def test_fir_box_is_inclusive_on_every_edge():
    for lat, lon in [(28.0, 38.0), (37.0, 49.0), (28.0, 49.0), (37.0, 38.0)]:
        assert in_fir(AircraftState(latitude=lat, longitude=lon))


def test_fir_box_rejects_outside_and_missing_positions():
    assert not in_fir(AircraftState(latitude=27.99, longitude=44.0))
    assert not in_fir(AircraftState(latitude=33.0, longitude=49.01))
    assert not in_fir(AircraftState(latitude=None, longitude=44.0))
    assert not in_fir(AircraftState(latitude=33.0, longitude=None))


def test_filter_to_fir_keeps_order_of_remaining_records():
    states = [
        AircraftState(icao24="in1", latitude=33.0, longitude=44.0),
        AircraftState(icao24="out", latitude=40.0, longitude=44.0),
        AircraftState(icao24="in2", latitude=30.0, longitude=47.0),
    ]

    assert [s.icao24 for s in filter_to_fir(states)] == ["in1", "in2"]
