"""Record factories and a fake upstream for exercising the feeds offline."""

from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from starwatch.core.config import Settings
from starwatch.models.mission import BoosterUse, Mission
from starwatch.models.satellite import HealthStatus, SatelliteStatus, TrackedObject

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

CELESTRAK = "celestrak.test/gp.php"
SPACEX = "spacex.test/v4"
LL2 = "ll2.test/2.2.0"


def make_settings(**overrides) -> Settings:
    values = dict(
        SPACEX_API_URL="https://spacex.test/v4",
        CELESTRAK_GP_URL="https://celestrak.test/gp.php?GROUP=starlink&FORMAT=json",
        LL2_API_URL="https://ll2.test/2.2.0",
    )
    values.update(overrides)
    return Settings(**values)


def celestrak_record(norad_id: int, name: Optional[str] = None, **overrides) -> Dict[str, Any]:
    record = {
        "OBJECT_NAME": name or f"STARLINK-{norad_id}",
        "OBJECT_ID": "2019-074A",
        "NORAD_CAT_ID": norad_id,
        "EPOCH": "2026-10-18T06:12:00.000000",
        "MEAN_MOTION": 15.06,
        "ECCENTRICITY": 0.0001,
        "INCLINATION": 53.05,
        "BSTAR": 0.00005,
        "PERIOD": 95.6,
        "APOAPSIS": 551.0,
        "PERIAPSIS": 549.0,
        "OBJECT_TYPE": "PAYLOAD",
        "RCS_SIZE": "LARGE",
        "LAUNCH_DATE": "2019-11-11",
        "SITE": "AFETR",
        "DECAY_DATE": None,
        "DECAYED": 0,
    }
    record.update(overrides)
    return record


def spacex_record(
    norad_id: int,
    name: Optional[str] = None,
    version: Optional[str] = "v1.0",
    position: Optional[Dict[str, Any]] = None,
    **space_track,
) -> Dict[str, Any]:
    st = {
        "OBJECT_NAME": name or f"STARLINK-{norad_id}",
        "NORAD_CAT_ID": norad_id,
        "LAUNCH_DATE": "2019-11-11",
        "DECAY_DATE": None,
        "DECAYED": 0,
        "EPOCH": "2022-01-01T00:00:00",
        "MEAN_MOTION": 15.0,
        "ECCENTRICITY": 0.0002,
        "INCLINATION": 53.0,
        "BSTAR": 0.0002,
        "PERIOD": 95.0,
        "APOAPSIS": 540.0,
        "PERIAPSIS": 530.0,
        "OBJECT_TYPE": "PAYLOAD",
        "RCS_SIZE": "LARGE",
        "SITE": "AFETR",
    }
    st.update(space_track)
    record = {
        "id": f"sx-{norad_id}",
        "version": version,
        "launch": "5eb87d39ffd86e000604b37d",
        "latitude": None,
        "longitude": None,
        "height_km": None,
        "velocity_kms": None,
        "spaceTrack": st,
    }
    record.update(position or {})
    return record


def make_satellite(norad_id: int, **overrides) -> TrackedObject:
    values: Dict[str, Any] = dict(
        id=f"ct-{norad_id}",
        name=f"STARLINK-{norad_id}",
        norad_id=norad_id,
        version="v1.0",
        status=SatelliteStatus.ACTIVE,
        launch_date="2020-01-07",
        object_id="2020-001A",
        health_score=100,
        health_status=HealthStatus.NOMINAL,
        age_in_days=100,
    )
    values.update(overrides)
    return TrackedObject(**values)


def make_mission(mission_id: str, date_utc: str, serials=(), locality: str = "Cape Canaveral", **overrides) -> Mission:
    values: Dict[str, Any] = dict(
        id=mission_id,
        name=f"Starlink {mission_id}",
        date_utc=date_utc,
        date_local=date_utc,
        launchpad_locality=locality,
        cores=[BoosterUse(serial=s) for s in serials],
        starlink_count=60,
    )
    values.update(overrides)
    return Mission(**values)


def spacex_tables(launches=None, cores=None, rockets=None, launchpads=None, payloads=None) -> Dict[str, Any]:
    """Route map for the five SpaceX mission tables."""
    return {
        f"{SPACEX}/launches": launches or [],
        f"{SPACEX}/cores": cores or [],
        f"{SPACEX}/rockets": rockets or [],
        f"{SPACEX}/launchpads": launchpads or [],
        f"{SPACEX}/payloads": payloads or [],
    }


class FakeUpstream:
    """
    MockTransport handler keyed by "host/path".

    A route maps to a JSON body, an httpx.Response, or a callable taking the
    request. Unknown routes answer 404. Every request is counted.
    """

    def __init__(self, routes: Optional[Dict[str, Any]] = None):
        self.routes: Dict[str, Any] = dict(routes or {})
        self.calls: Counter = Counter()
        self.requests = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        key = f"{request.url.host}{request.url.path}"
        self.calls[key] += 1
        self.requests.append(request)
        if key not in self.routes:
            return httpx.Response(404, json={"error": "not found"})
        body = self.routes[key]
        if callable(body):
            return body(request)
        if isinstance(body, httpx.Response):
            return body
        return httpx.Response(200, json=body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))


def connection_refused(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def status(code: int):
    """Route answering every request with a fresh, empty response of the given status."""
    def respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(code)
    return respond
