"""
Launch Library 2 (The Space Devs) client.

LL2 is untrusted for latency, so every call here carries the supplementary
timeout. It backs two things:
- launch history that fills in missions the SpaceX API no longer reports;
- the upcoming/previous schedule behind the live launch panel.
"""

import httpx
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from starwatch.core.config import Settings
from starwatch.models.live import LiveBooster, NextLaunch, PastLaunch, WebcastLink
from starwatch.models.mission import BoosterUse
from starwatch.services.feeds import FeedResult, Record, fetch_json, ll2_results, to_int

logger = logging.getLogger(__name__)

SOURCE = "ll2"

# LL2 status ids
STATUS_SUCCESS = 3
STATUS_FAILURE = 4


async def fetch_starlink_history(client: httpx.AsyncClient, settings: Settings, limit: int = 100) -> FeedResult:
    return await fetch_json(
        client,
        f"{SOURCE}/history",
        f"{settings.LL2_API_URL}/launch/",
        params={"search": "starlink", "limit": limit, "ordering": "-net", "format": "json"},
        timeout=settings.SUPPLEMENTARY_TIMEOUT_SECONDS,
        extract=ll2_results,
        log_level=logging.WARNING,
    )


async def fetch_upcoming(client: httpx.AsyncClient, settings: Settings, limit: int = 5) -> FeedResult:
    return await fetch_json(
        client,
        f"{SOURCE}/upcoming",
        f"{settings.LL2_API_URL}/launch/upcoming/",
        params={"search": "starlink", "limit": limit, "mode": "detailed"},
        timeout=settings.SUPPLEMENTARY_TIMEOUT_SECONDS,
        extract=ll2_results,
        log_level=logging.WARNING,
    )


async def fetch_previous(client: httpx.AsyncClient, settings: Settings, limit: int = 5) -> FeedResult:
    return await fetch_json(
        client,
        f"{SOURCE}/previous",
        f"{settings.LL2_API_URL}/launch/previous/",
        params={"search": "starlink", "limit": limit, "mode": "detailed"},
        timeout=settings.SUPPLEMENTARY_TIMEOUT_SECONDS,
        extract=ll2_results,
        log_level=logging.WARNING,
    )


def map_outcome(launch: Record) -> Optional[bool]:
    """LL2 status -> mission outcome; anything but success/failure is pending."""
    status_id = (launch.get("status") or {}).get("id")
    if status_id == STATUS_SUCCESS:
        return True
    if status_id == STATUS_FAILURE:
        return False
    return None


def extract_boosters(launch: Record) -> List[BoosterUse]:
    boosters = []
    for stage in (launch.get("rocket") or {}).get("launcher_stage") or []:
        launcher = stage.get("launcher") or {}
        serial = launcher.get("serial_number")
        if not serial:
            continue
        flights = to_int(launcher.get("flights")) or 1
        landing = stage.get("landing") or {}
        boosters.append(BoosterUse(
            serial=serial,
            flight=flights,
            reused=flights > 1,
            landing_success=landing.get("success"),
            landing_type=(landing.get("type") or {}).get("abbrev"),
        ))
    return boosters


def extract_webcasts(launch: Record) -> List[WebcastLink]:
    webcasts = []
    for vid in launch.get("vidURLs") or []:
        url = vid.get("url")
        if not url:
            continue
        webcasts.append(WebcastLink(
            url=url,
            title=vid.get("title") or "",
            source=vid.get("source") or "",
            live=bool(vid.get("live")),
        ))
    return webcasts


def first_webcast_url(launch: Record) -> Optional[str]:
    webcasts = extract_webcasts(launch)
    return webcasts[0].url if webcasts else None


def parse_net(value: Optional[str]) -> Optional[datetime]:
    """Parse an LL2/SpaceX ISO timestamp ("...Z" or with offset) into an aware datetime."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _status_abbrev(launch: Record) -> str:
    status = launch.get("status") or {}
    return status.get("abbrev") or status.get("name") or "TBD"


def to_next_launch(launch: Record) -> NextLaunch:
    status = launch.get("status") or {}
    rocket_config = (launch.get("rocket") or {}).get("configuration") or {}
    pad = launch.get("pad") or {}
    mission = launch.get("mission") or {}

    booster = None
    boosters = extract_boosters(launch)
    if boosters:
        booster = LiveBooster(serial=boosters[0].serial, flights=boosters[0].flight)

    return NextLaunch(
        id=str(launch.get("id") or ""),
        name=launch.get("name") or "",
        net=launch.get("net") or "",
        status=_status_abbrev(launch),
        status_description=status.get("description") or "",
        rocket_name=rocket_config.get("name") or "Falcon 9",
        pad_name=pad.get("name") or "Unknown",
        pad_location=(pad.get("location") or {}).get("name") or "Unknown",
        mission_description=mission.get("description"),
        image=launch.get("image"),
        webcasts=extract_webcasts(launch),
        booster=booster,
    )


def to_past_launch(launch: Record) -> PastLaunch:
    return PastLaunch(
        id=str(launch.get("id") or ""),
        name=launch.get("name") or "",
        net=launch.get("net") or "",
        status=_status_abbrev(launch),
        webcasts=extract_webcasts(launch),
        image=launch.get("image"),
    )


def is_live(launch: Record) -> bool:
    if launch.get("webcast_live"):
        return True
    return _status_abbrev(launch) == "In Flight"


def countdown_seconds(launch: Dict[str, Any], now: datetime) -> Optional[int]:
    net = parse_net(launch.get("net"))
    if net is None:
        return None
    return max(0, int((net - now).total_seconds()))
