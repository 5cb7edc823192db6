import asyncio
import logging
from datetime import timedelta

import pytest

from helpers import (
    CELESTRAK,
    LL2,
    NOW,
    SPACEX,
    FakeUpstream,
    celestrak_record,
    connection_refused,
    make_settings,
    spacex_record,
    spacex_tables,
    status,
)
from starwatch.exceptions import TrackedObjectNotFound, UpstreamUnavailable
from starwatch.services.cache import TTLCache
from starwatch.services.data_service import DataService


def catalog_routes():
    return {
        CELESTRAK: [
            celestrak_record(44713, LAUNCH_DATE="2019-11-11"),
            celestrak_record(44714, name="ONEWEB-0001"),
            celestrak_record(56000, LAUNCH_DATE="2023-03-03"),
        ],
        f"{SPACEX}/starlink": [
            spacex_record(44713, position={"height_km": 552.0}),
            spacex_record(45000, version=None, LAUNCH_DATE="2020-01-29", position={"height_km": 548.0}),
        ],
    }


def mission_routes():
    return spacex_tables(
        launches=[{
            "id": "L1", "flight_number": 80, "name": "Starlink-4 (v1.0)",
            "date_utc": "2020-01-29T14:07:00.000Z", "date_local": "2020-01-29T09:07:00-05:00",
            "success": True, "rocket": "R1", "launchpad": "P1",
            "cores": [{"core": "C1", "flight": 4, "reused": True, "landing_success": True, "landing_type": "ASDS"}],
            "payloads": ["PL1"], "links": {},
        }],
        cores=[{"id": "C1", "serial": "B1049"}],
        rockets=[{"id": "R1", "name": "Falcon 9"}],
        launchpads=[{"id": "P1", "name": "SLC 40", "locality": "Cape Canaveral"}],
        payloads=[{"id": "PL1", "name": "Starlink-4", "type": "Satellite"}],
    )


def ll2_history():
    return {"results": [{
        "id": "ll2-1", "name": "Starlink Group 6-41", "net": "2024-03-04T22:56:00Z",
        "status": {"id": 3}, "pad": {"name": "SLC-40", "location": {"name": "Cape Canaveral, FL, USA"}},
        "rocket": {"launcher_stage": [{"launcher": {"serial_number": "B1067", "flights": 18}}]},
    }]}


def all_routes():
    routes = {**catalog_routes(), **mission_routes()}
    routes[f"{LL2}/launch/"] = ll2_history()
    return routes


def run_with(upstream, scenario, settings=None):
    settings = settings or make_settings()

    async def main():
        async with upstream.client() as client:
            service = DataService(settings, client, TTLCache(settings.cache_ttls), now=lambda: NOW)
            return await scenario(service)

    return asyncio.run(main())


def test_satellites_are_reconciled_from_both_feeds():
    upstream = FakeUpstream(catalog_routes())

    satellites = run_with(upstream, lambda s: s.get_tracked_objects())

    by_id = {s.norad_id: s for s in satellites}
    assert set(by_id) == {44713, 56000, 45000}
    assert by_id[44713].height_km == 552.0
    assert by_id[56000].version == "v2.0-mini"
    assert by_id[45000].version == "v1.0"


def test_two_reads_within_ttl_fetch_once():
    upstream = FakeUpstream(catalog_routes())

    async def scenario(service):
        return await service.get_tracked_objects(), await service.get_tracked_objects()

    first, second = run_with(upstream, scenario)

    assert [s.model_dump_json() for s in first] == [s.model_dump_json() for s in second]
    assert upstream.calls[CELESTRAK] == 1
    assert upstream.calls[f"{SPACEX}/starlink"] == 1


def test_one_failed_feed_degrades_gracefully():
    routes = catalog_routes()
    routes[CELESTRAK] = status(503)
    upstream = FakeUpstream(routes)

    satellites = run_with(upstream, lambda s: s.get_tracked_objects())

    assert {s.norad_id for s in satellites} == {44713, 45000}
    assert all(s.id.startswith("sx-") for s in satellites)


def test_malformed_feed_counts_as_failed():
    routes = catalog_routes()
    routes[f"{SPACEX}/starlink"] = {"unexpected": "object"}
    upstream = FakeUpstream(routes)

    satellites = run_with(upstream, lambda s: s.get_tracked_objects())

    assert {s.norad_id for s in satellites} == {44713, 56000}


def test_both_feeds_failing_raises_and_is_not_cached():
    upstream = FakeUpstream({CELESTRAK: connection_refused, f"{SPACEX}/starlink": status(500)})

    async def scenario(service):
        for _ in range(2):
            with pytest.raises(UpstreamUnavailable):
                await service.get_tracked_objects()

    run_with(upstream, scenario)
    assert upstream.calls[CELESTRAK] == 2


def test_malformed_record_does_not_fail_the_refresh():
    routes = catalog_routes()
    routes[CELESTRAK] = routes[CELESTRAK] + [celestrak_record(44999, OBJECT_ID=2019, EPOCH=1700000000)]
    routes[f"{SPACEX}/starlink"] = routes[f"{SPACEX}/starlink"] + [spacex_record(45001, version=2)]
    upstream = FakeUpstream(routes)

    satellites = run_with(upstream, lambda s: s.get_tracked_objects())

    by_id = {s.norad_id: s for s in satellites}
    assert {44713, 56000, 45000, 44999, 45001} <= set(by_id)
    assert by_id[44999].object_id == "2019"
    assert by_id[45001].version == "2"


def test_legitimately_empty_feeds_give_empty_list():
    upstream = FakeUpstream({CELESTRAK: [], f"{SPACEX}/starlink": []})
    assert run_with(upstream, lambda s: s.get_tracked_objects()) == []


def test_single_satellite_lookup():
    upstream = FakeUpstream(catalog_routes())

    async def scenario(service):
        found = await service.get_tracked_object(56000)
        with pytest.raises(TrackedObjectNotFound) as excinfo:
            await service.get_tracked_object(44714)
        return found, excinfo.value

    found, missing = run_with(upstream, scenario)

    assert found.norad_id == 56000
    assert missing.norad_id == 44714
    assert upstream.calls[CELESTRAK] == 1


def test_missions_merge_spacex_and_launch_library():
    upstream = FakeUpstream(all_routes())

    missions = run_with(upstream, lambda s: s.get_missions())

    assert [m.id for m in missions] == ["ll2-1", "L1"]
    assert missions[1].cores[0].serial == "B1049"


def test_any_failed_mission_table_fails_the_refresh():
    routes = all_routes()
    routes[f"{SPACEX}/rockets"] = status(502)
    upstream = FakeUpstream(routes)

    async def scenario(service):
        with pytest.raises(UpstreamUnavailable) as excinfo:
            await service.get_missions()
        return excinfo.value

    error = run_with(upstream, scenario)
    assert error.details == {"failed_tables": ["spacex/rockets"]}


def test_launch_library_failure_is_swallowed(caplog):
    routes = all_routes()
    routes[f"{LL2}/launch/"] = connection_refused
    upstream = FakeUpstream(routes)

    with caplog.at_level(logging.WARNING, logger="starwatch"):
        missions = run_with(upstream, lambda s: s.get_missions())

    assert [m.id for m in missions] == ["L1"]
    assert [r.levelno for r in caplog.records if r.name.startswith("starwatch")] == [logging.WARNING]


def test_launch_library_calls_use_supplementary_timeout():
    upstream = FakeUpstream(all_routes())
    run_with(upstream, lambda s: s.get_missions(), settings=make_settings(SUPPLEMENTARY_TIMEOUT_SECONDS=10))

    ll2_request, = [r for r in upstream.requests if r.url.host == "ll2.test"]
    assert ll2_request.extensions["timeout"]["read"] == 10
    assert ll2_request.url.params["search"] == "starlink"


def test_stats_and_fun_facts_share_one_fetch_cycle():
    upstream = FakeUpstream(all_routes())

    async def scenario(service):
        facts = await service.get_fun_facts()
        stats = await service.get_constellation_stats()
        return facts, stats

    facts, stats = run_with(upstream, scenario)

    assert len(facts) == 8
    assert stats.total_satellites == 3
    assert stats.total_launches == 2
    assert stats.unique_boosters == 2
    assert stats.avg_altitude_km == 550
    for key in (CELESTRAK, f"{SPACEX}/starlink", f"{SPACEX}/launches", f"{LL2}/launch/"):
        assert upstream.calls[key] == 1


def test_stats_fail_when_missions_fail():
    routes = all_routes()
    routes[f"{SPACEX}/payloads"] = connection_refused
    upstream = FakeUpstream(routes)

    async def scenario(service):
        with pytest.raises(UpstreamUnavailable):
            await service.get_constellation_stats()

    run_with(upstream, scenario)


def test_live_launch_data():
    net = (NOW + timedelta(hours=2)).isoformat().replace("+00:00", "Z")
    upcoming = {"results": [{
        "id": "up-1", "name": "Falcon 9 Block 5 | Starlink Group 10-5", "net": net,
        "status": {"id": 1, "abbrev": "Go", "description": "Current T-0 confirmed by official sources."},
        "rocket": {"configuration": {"name": "Falcon 9"},
                   "launcher_stage": [{"launcher": {"serial_number": "B1077", "flights": 12}}]},
        "pad": {"name": "SLC-40", "location": {"name": "Cape Canaveral, FL, USA"}},
        "mission": {"description": "Batch of v2 Mini satellites."},
        "vidURLs": [{"url": "https://x.test/live", "title": "Webcast", "source": "x.com", "live": True}],
        "webcast_live": False,
    }]}
    previous = {"results": [
        {"id": "prev-1", "name": "Starlink Group 10-4", "net": "2026-10-17T01:00:00Z",
         "status": {"id": 3, "abbrev": "Success"}, "vidURLs": []},
    ]}
    upstream = FakeUpstream({f"{LL2}/launch/upcoming/": upcoming, f"{LL2}/launch/previous/": previous})

    live = run_with(upstream, lambda s: s.get_live_launch_data())

    assert live.next_launch.id == "up-1"
    assert live.next_launch.status == "Go"
    assert live.next_launch.booster.serial == "B1077"
    assert live.next_launch.webcasts[0].live is True
    assert live.countdown_seconds == 7200
    assert live.is_live_now is False
    assert [p.id for p in live.recent_past_launches] == ["prev-1"]


def test_live_launch_data_with_nothing_scheduled():
    upstream = FakeUpstream({f"{LL2}/launch/upcoming/": {"results": []}, f"{LL2}/launch/previous/": status(500)})

    live = run_with(upstream, lambda s: s.get_live_launch_data())

    assert live.next_launch is None
    assert live.countdown_seconds is None
    assert live.recent_past_launches == []


def test_live_launch_data_fails_when_schedule_feed_is_down():
    upstream = FakeUpstream()

    async def scenario(service):
        with pytest.raises(UpstreamUnavailable):
            await service.get_live_launch_data()

    run_with(upstream, scenario)
