"""
Mission History Merge

Builds the constellation's launch history from the SpaceX API tables, then
tops it up with Launch Library 2 launches the SpaceX API never reported.
A LL2 launch is skipped when the SpaceX history already has a launch on the
same UTC date.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from starwatch.models.mission import BoosterUse, Mission, MissionLinks
from starwatch.services import launch_library
from starwatch.services.feeds import Record, to_int
from starwatch.services.spacex_api import MissionTables

logger = logging.getLogger(__name__)

BRAND = "starlink"
UNKNOWN_SERIAL = "Unknown"

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def estimate_starlink_count(mission_name: str) -> int:
    """Typical deployment size by mission family, for launches without payload data."""
    name = mission_name.lower()
    if "v2" in name:
        return 21
    if "group 6" in name or "group 7" in name:
        return 23
    return 52


def date_key(timestamp: str) -> str:
    return (timestamp or "")[:10]


def _is_starlink_payload(payload: Optional[Record]) -> bool:
    if not payload:
        return False
    return BRAND in (payload.get("name") or "").lower() or BRAND in (payload.get("type") or "").lower()


def _by_id(records: List[Record]) -> Dict[str, Record]:
    return {r["id"]: r for r in records if r.get("id")}


def build_spacex_missions(tables: MissionTables) -> List[Mission]:
    cores = _by_id(tables.cores)
    rockets = _by_id(tables.rockets)
    launchpads = _by_id(tables.launchpads)
    payloads = _by_id(tables.payloads)

    missions = []
    for launch in tables.launches:
        name = launch.get("name") or ""
        launch_payloads = [payloads.get(pid) for pid in launch.get("payloads") or []]
        if BRAND not in name.lower() and not any(_is_starlink_payload(p) for p in launch_payloads):
            continue

        rocket = rockets.get(launch.get("rocket")) or {}
        launchpad = launchpads.get(launch.get("launchpad")) or {}
        links = launch.get("links") or {}

        boosters = []
        for core in launch.get("cores") or []:
            core_id = core.get("core")
            if not core_id:
                continue
            boosters.append(BoosterUse(
                serial=(cores.get(core_id) or {}).get("serial") or UNKNOWN_SERIAL,
                flight=to_int(core.get("flight")) or 1,
                reused=bool(core.get("reused")),
                landing_success=core.get("landing_success"),
                landing_type=core.get("landing_type"),
            ))

        starlink_payloads = [p for p in launch_payloads if p and BRAND in (p.get("name") or "").lower()]

        missions.append(Mission(
            id=launch.get("id") or "",
            flight_number=to_int(launch.get("flight_number")) or 0,
            name=name,
            date_utc=launch.get("date_utc") or "",
            date_local=launch.get("date_local") or "",
            success=launch.get("success"),
            details=launch.get("details"),
            rocket_id=launch.get("rocket") or "",
            rocket_name=rocket.get("name") or "Falcon 9",
            launchpad_id=launch.get("launchpad") or "",
            launchpad_name=launchpad.get("full_name") or launchpad.get("name") or "Unknown",
            launchpad_locality=launchpad.get("locality") or "Unknown",
            cores=boosters,
            starlink_count=len(starlink_payloads) or estimate_starlink_count(name),
            links=MissionLinks(
                webcast=links.get("webcast"),
                article=links.get("article"),
                wikipedia=links.get("wikipedia"),
                patch=(links.get("patch") or {}).get("small"),
            ),
        ))
    return missions


def ll2_to_mission(launch: Record) -> Mission:
    net = launch["net"]
    rocket_config = (launch.get("rocket") or {}).get("configuration") or {}
    pad = launch.get("pad") or {}
    name = launch.get("name") or ""

    return Mission(
        id=str(launch.get("id") or f"ll2-{date_key(net)}"),
        flight_number=0,
        name=name,
        date_utc=net,
        date_local=net,
        success=launch_library.map_outcome(launch),
        details=(launch.get("mission") or {}).get("description"),
        rocket_name=rocket_config.get("name") or "Falcon 9",
        launchpad_name=pad.get("name") or "Unknown",
        launchpad_locality=(pad.get("location") or {}).get("name") or "Unknown",
        cores=launch_library.extract_boosters(launch),
        starlink_count=estimate_starlink_count(name),
        links=MissionLinks(
            webcast=launch_library.first_webcast_url(launch),
            wikipedia=launch.get("wiki_url"),
            patch=launch.get("image"),
        ),
    )


def merge_missions(primary: List[Mission], supplementary: List[Record]) -> List[Mission]:
    """
    Append LL2 launches on dates the primary history does not cover, then
    sort newest first.
    """
    existing_dates = {date_key(m.date_utc) for m in primary}
    merged = list(primary)

    added = 0
    for launch in supplementary:
        net = launch.get("net")
        if not net:
            continue
        if date_key(net) in existing_dates:
            continue
        if BRAND not in (launch.get("name") or "").lower():
            continue
        merged.append(ll2_to_mission(launch))
        added += 1

    if added:
        logger.info(f"Added {added} launches from Launch Library 2")

    merged.sort(key=lambda m: launch_library.parse_net(m.date_utc) or _OLDEST, reverse=True)
    return merged
