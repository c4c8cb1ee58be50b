from firwatch.domain import BAGHDAD_LATITUDE, Sector
from firwatch.models.air_traffic import AircraftState
from firwatch.services.markers import MarkerRegistry


def _state(icao24, lat=34.0, lon=44.0, **kwargs):
    return AircraftState(icao24=icao24, latitude=lat, longitude=lon, **kwargs)


def test_reconcile_adds_updates_and_removes():
    registry = MarkerRegistry()
    registry.reconcile([_state("aaa"), _state("bbb")], BAGHDAD_LATITUDE)
    original = registry.get("aaa")

    result = registry.reconcile(
        [_state("aaa", lat=30.0), _state("ccc")], BAGHDAD_LATITUDE
    )

    assert result.added == ["ccc"]
    assert result.updated == ["aaa"]
    assert result.removed == ["bbb"]
    assert "bbb" not in registry
    assert len(registry) == 2
    # retained aircraft keep their marker object
    assert registry.get("aaa") is original
    assert original.latitude == 30.0
    assert original.sector is Sector.SOUTH


def test_empty_snapshot_removes_every_marker():
    registry = MarkerRegistry()
    registry.reconcile([_state("aaa"), _state("bbb")], BAGHDAD_LATITUDE)

    result = registry.reconcile([], BAGHDAD_LATITUDE)

    assert sorted(result.removed) == ["aaa", "bbb"]
    assert len(registry) == 0


def test_records_without_position_or_identifier_get_no_marker():
    registry = MarkerRegistry()

    registry.reconcile(
        [
            AircraftState(icao24="nopos", latitude=None, longitude=44.0),
            AircraftState(icao24=None, latitude=33.0, longitude=44.0),
            _state("ok"),
        ],
        BAGHDAD_LATITUDE,
    )

    assert [m.icao24 for m in registry.markers()] == ["ok"]


def test_popup_uses_callsign_altitude_and_velocity():
    registry = MarkerRegistry()
    registry.reconcile(
        [
            _state("abc123", callsign="IAW123", baro_altitude=10972.8, velocity=230.5),
            _state("def456", lat=31.0),
        ],
        BAGHDAD_LATITUDE,
    )

    assert registry.get("abc123").popup == "IAW123 | Alt: 10973 m | Vel: 230.5 m/s | North"
    assert registry.get("def456").popup == "def456 | Alt: 0 m | Vel: N/A | South"
