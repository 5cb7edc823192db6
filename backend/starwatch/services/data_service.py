"""
StarWatch Data Service

The public read operations. Each one is fronted by the TTL cache; on a miss
it fetches its upstream feeds concurrently and rebuilds the collection from
scratch.

Usage:
    async with httpx.AsyncClient() as client:
        service = DataService(settings, client, TTLCache(settings.cache_ttls))
        satellites = await service.get_tracked_objects()
"""

import asyncio
import httpx
from datetime import datetime, timezone
from typing import Callable, List, Optional

from starwatch.core.config import Settings
from starwatch.exceptions import TrackedObjectNotFound, UpstreamUnavailable
from starwatch.models.live import LiveLaunchData
from starwatch.models.mission import Mission
from starwatch.models.satellite import TrackedObject
from starwatch.models.stats import ConstellationStats, FunFact
from starwatch.services import aggregator, celestrak, launch_library, missions, spacex_api
from starwatch.services.cache import TTLCache
from starwatch.services.reconciler import reconcile

SATELLITES_KEY = "satellites"
MISSIONS_KEY = "missions"
STATS_KEY = "stats"
FUN_FACTS_KEY = "fun_facts"
LIVE_KEY = "live"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DataService:
    def __init__(
        self,
        settings: Settings,
        client: httpx.AsyncClient,
        cache: TTLCache,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.settings = settings
        self.client = client
        self.cache = cache
        self.now = now

    # ── Satellites ──────────────────────────────────────────────────────

    async def get_tracked_objects(self) -> List[TrackedObject]:
        return await self.cache.get_or_compute(SATELLITES_KEY, self._build_tracked_objects)

    async def get_tracked_object(self, norad_id: int) -> TrackedObject:
        for sat in await self.get_tracked_objects():
            if sat.norad_id == norad_id:
                return sat
        raise TrackedObjectNotFound(norad_id)

    async def _build_tracked_objects(self) -> List[TrackedObject]:
        elements, operator = await asyncio.gather(
            celestrak.fetch_gp_elements(self.client, self.settings),
            spacex_api.fetch_starlink(self.client, self.settings),
        )

        if not elements.ok and not operator.ok:
            raise UpstreamUnavailable(
                "satellites",
                {celestrak.SOURCE: elements.error, operator.source: operator.error},
            )

        return reconcile(
            elements.records,
            operator.records,
            brand_marker=self.settings.BRAND_MARKER,
            now=self.now(),
        )

    # ── Missions ────────────────────────────────────────────────────────

    async def get_missions(self) -> List[Mission]:
        return await self.cache.get_or_compute(MISSIONS_KEY, self._build_missions)

    async def _build_missions(self) -> List[Mission]:
        tables = await spacex_api.fetch_mission_tables(self.client, self.settings)
        primary = missions.build_spacex_missions(tables)

        # Best-effort: a failed history fetch just leaves the SpaceX list as is
        history = await launch_library.fetch_starlink_history(self.client, self.settings)

        return missions.merge_missions(primary, history.records)

    # ── Roll-ups ────────────────────────────────────────────────────────

    async def get_constellation_stats(self) -> ConstellationStats:
        return await self.cache.get_or_compute(STATS_KEY, self._build_stats)

    async def _build_stats(self) -> ConstellationStats:
        satellites, mission_list = await asyncio.gather(
            self.get_tracked_objects(),
            self.get_missions(),
        )
        return aggregator.compute_stats(satellites, mission_list)

    async def get_fun_facts(self) -> List[FunFact]:
        return await self.cache.get_or_compute(FUN_FACTS_KEY, self._build_fun_facts)

    async def _build_fun_facts(self) -> List[FunFact]:
        satellites, mission_list, stats = await asyncio.gather(
            self.get_tracked_objects(),
            self.get_missions(),
            self.get_constellation_stats(),
        )
        return aggregator.compute_fun_facts(satellites, mission_list, stats)

    # ── Live launch panel ───────────────────────────────────────────────

    async def get_live_launch_data(self) -> LiveLaunchData:
        return await self.cache.get_or_compute(LIVE_KEY, self._build_live_launch_data)

    async def _build_live_launch_data(self) -> LiveLaunchData:
        upcoming, previous = await asyncio.gather(
            launch_library.fetch_upcoming(self.client, self.settings),
            launch_library.fetch_previous(self.client, self.settings),
        )
        if not upcoming.ok and not previous.ok:
            raise UpstreamUnavailable(
                "live",
                {upcoming.source: upcoming.error, previous.source: previous.error},
            )

        next_launch: Optional[dict] = upcoming.records[0] if upcoming.records else None
        return LiveLaunchData(
            next_launch=launch_library.to_next_launch(next_launch) if next_launch else None,
            recent_past_launches=[launch_library.to_past_launch(launch) for launch in previous.records],
            is_live_now=launch_library.is_live(next_launch) if next_launch else False,
            countdown_seconds=launch_library.countdown_seconds(next_launch, self.now()) if next_launch else None,
        )
