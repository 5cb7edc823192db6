"""
SpaceX v4 API client.

Two uses:
- /starlink: per-satellite operator records (version tag, launch id, position
  snapshot and an embedded Space-Track element set).
- /launches, /cores, /rockets, /launchpads, /payloads: the mission history
  tables, fetched together as one batch.
"""

import asyncio
import httpx
import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from starwatch.core.config import Settings
from starwatch.exceptions import UpstreamUnavailable
from starwatch.services.feeds import FeedResult, Record, fetch_json, to_int

logger = logging.getLogger(__name__)

SOURCE = "spacex"

MISSION_TABLES = ("launches", "cores", "rockets", "launchpads", "payloads")


@dataclass(frozen=True)
class MissionTables:
    launches: List[Record]
    cores: List[Record]
    rockets: List[Record]
    launchpads: List[Record]
    payloads: List[Record]


async def fetch_starlink(client: httpx.AsyncClient, settings: Settings) -> FeedResult:
    return await fetch_json(client, f"{SOURCE}/starlink", f"{settings.SPACEX_API_URL}/starlink")


def index_by_norad(records: List[Record]) -> Dict[int, Record]:
    """Map the embedded spaceTrack NORAD_CAT_ID -> operator record."""
    indexed: Dict[int, Record] = {}
    for sat in records:
        space_track = sat.get("spaceTrack")
        if not isinstance(space_track, dict):
            continue
        norad_id = to_int(space_track.get("NORAD_CAT_ID"))
        if not norad_id:
            continue
        indexed[norad_id] = sat
    return indexed


async def fetch_mission_tables(client: httpx.AsyncClient, settings: Settings) -> MissionTables:
    """
    Fetch all five mission tables in parallel.

    All five are needed to build a mission; if any one fails the whole batch
    is unusable and UpstreamUnavailable is raised.
    """
    results = await asyncio.gather(*(
        fetch_json(client, f"{SOURCE}/{table}", f"{settings.SPACEX_API_URL}/{table}")
        for table in MISSION_TABLES
    ))

    failed = [r.source for r in results if not r.ok]
    if failed:
        logger.error(f"Mission refresh aborted, SpaceX tables unavailable: {', '.join(failed)}")
        raise UpstreamUnavailable(SOURCE, {"failed_tables": failed})

    tables: Dict[str, Any] = {table: result.records for table, result in zip(MISSION_TABLES, results)}
    return MissionTables(**tables)
