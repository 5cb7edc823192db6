"""
Constellation Reconciler

Merges the two per-satellite feeds into one TrackedObject per NORAD id:
- CelesTrak GP (orbital elements, freshest) wins every field it carries.
- The SpaceX operator record fills the gaps from its embedded Space-Track
  element set, and is the only source of version tags and position snapshots.
- Fields missing from both fall back to fixed defaults.

When the operator feed has no version tag, the generation is inferred from
the launch date, then the international designator year, then the NORAD id
range.
"""

import logging
from datetime import date, datetime, timezone
from typing import Dict, Iterable, List, Optional

from pydantic import ValidationError

from starwatch.models.satellite import SatelliteStatus, TrackedObject
from starwatch.services import celestrak, spacex_api
from starwatch.services.feeds import Record, to_float, to_int, to_str
from starwatch.services.health import score

logger = logging.getLogger(__name__)

V2_MINI = "v2.0-mini"
V1_5 = "v1.5"
V1_0 = "v1.0"
PROTOTYPE = "prototype"
UNKNOWN_VERSION = "unknown"

ZERO_DATE = "0000-00-00"
MIN_DESIGNATOR_YEAR = 2018

# Last-resort NORAD id ranges, newest generation first
NORAD_VERSION_RANGES = ((58000, V2_MINI), (48000, V1_5), (44000, V1_0))

NUMERIC_DEFAULTS = {
    "INCLINATION": 0.0,
    "ECCENTRICITY": 0.0,
    "PERIOD": 0.0,
    "APOAPSIS": 0.0,
    "PERIAPSIS": 550.0,
    "MEAN_MOTION": 0.0,
    "BSTAR": 0.0,
}


def parse_launch_date(raw: Optional[str]) -> Optional[date]:
    if not raw or raw == ZERO_DATE:
        return None
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        return None


def age_in_days(launch: Optional[date], now: datetime) -> int:
    if launch is None:
        return 0
    launched_at = datetime(launch.year, launch.month, launch.day, tzinfo=timezone.utc)
    # timedelta.days floors, matching floor((now - launch) / 1 day)
    return (now - launched_at).days


def designator_year(object_id: Optional[str]) -> Optional[int]:
    """Launch year from an international designator ("2023-042A"), if plausible."""
    prefix = (object_id or "")[:4]
    if len(prefix) != 4 or not prefix.isdigit():
        return None
    year = int(prefix)
    return year if year >= MIN_DESIGNATOR_YEAR else None


def version_from_launch_date(launch: date) -> str:
    month_index = launch.month - 1
    if launch.year >= 2024 or (launch.year == 2023 and month_index >= 1):
        return V2_MINI
    if launch.year >= 2022 or (launch.year == 2021 and month_index >= 8):
        return V1_5
    if launch.year >= 2019:
        return V1_0
    return PROTOTYPE


def version_from_year(year: int) -> str:
    # Year resolution of the launch-date breakpoints (Feb 2023, Sep 2021)
    if year >= 2023:
        return V2_MINI
    if year >= 2021:
        return V1_5
    if year >= 2019:
        return V1_0
    return PROTOTYPE


def version_from_norad_id(norad_id: int) -> str:
    for threshold, version in NORAD_VERSION_RANGES:
        if norad_id >= threshold:
            return version
    return UNKNOWN_VERSION


def infer_version(launch: Optional[date], object_id: Optional[str], norad_id: int) -> str:
    if launch is not None:
        return version_from_launch_date(launch)
    year = designator_year(object_id)
    if year is not None:
        return version_from_year(year)
    return version_from_norad_id(norad_id)


def _first_number(key: str, *sources: Record) -> float:
    for source in sources:
        value = to_float(source.get(key))
        if value is not None:
            return value
    return NUMERIC_DEFAULTS[key]


def _first_present(key: str, default: str, *sources: Record) -> str:
    for source in sources:
        value = to_str(source.get(key))
        if value is not None:
            return value
    return default


def _first_truthy(key: str, *sources: Record) -> Optional[str]:
    for source in sources:
        value = to_str(source.get(key))
        if value:
            return value
    return None


def merge_record(
    norad_id: int,
    ct: Optional[Record],
    sx: Optional[Record],
    now: datetime,
    brand_marker: str,
) -> Optional[TrackedObject]:
    """
    Build the TrackedObject for one NORAD id, or None when it should be
    dropped (no source at all, or not a constellation object).
    """
    st: Record = (sx or {}).get("spaceTrack") or {}
    if ct is None and not st:
        return None

    ct = ct or {}
    sx = sx or {}
    sources = (ct, st)

    name = _first_truthy("OBJECT_NAME", *sources) or f"UNKNOWN-{norad_id}"
    if brand_marker.upper() not in name.upper():
        return None

    launch = parse_launch_date(_first_truthy("LAUNCH_DATE", *sources))
    age = age_in_days(launch, now)

    decay_date = _first_truthy("DECAY_DATE", *sources)
    decayed = to_int(ct.get("DECAYED")) == 1 or to_int(st.get("DECAYED")) == 1 or decay_date is not None

    bstar = _first_number("BSTAR", *sources)
    eccentricity = _first_number("ECCENTRICITY", *sources)
    periapsis = _first_number("PERIAPSIS", *sources)
    health_score, health_status = score(bstar, eccentricity, periapsis, decayed, age)

    object_id = to_str(ct.get("OBJECT_ID")) or ""
    version = to_str(sx.get("version")) or UNKNOWN_VERSION
    if version == UNKNOWN_VERSION:
        version = infer_version(launch, object_id, norad_id)

    return TrackedObject(
        id=to_str(sx.get("id")) or f"ct-{norad_id}",
        name=name,
        norad_id=norad_id,
        version=version,
        status=SatelliteStatus.DECAYED if decayed else SatelliteStatus.ACTIVE,
        latitude=to_float(sx.get("latitude")),
        longitude=to_float(sx.get("longitude")),
        height_km=to_float(sx.get("height_km")),
        velocity_kms=to_float(sx.get("velocity_kms")),
        inclination=_first_number("INCLINATION", *sources),
        eccentricity=eccentricity,
        period=_first_number("PERIOD", *sources),
        apoapsis=_first_number("APOAPSIS", *sources),
        periapsis=periapsis,
        mean_motion=_first_number("MEAN_MOTION", *sources),
        bstar=bstar,
        epoch=_first_present("EPOCH", "", *sources),
        launch_date=launch.isoformat() if launch else None,
        decay_date=decay_date,
        object_type=_first_present("OBJECT_TYPE", "PAYLOAD", *sources),
        rcs_size=_first_present("RCS_SIZE", "MEDIUM", *sources),
        site=_first_present("SITE", "AFETR", *sources),
        object_id=object_id,
        launch_id=to_str(sx.get("launch")) or None,
        health_score=health_score,
        health_status=health_status,
        age_in_days=age,
    )


def _union_in_order(*key_sets: Iterable[int]) -> List[int]:
    seen: Dict[int, None] = {}
    for keys in key_sets:
        for key in keys:
            seen.setdefault(key, None)
    return list(seen)


def reconcile(
    elements_records: List[Record],
    operator_records: List[Record],
    brand_marker: str = "STARLINK",
    now: Optional[datetime] = None,
) -> List[TrackedObject]:
    """
    Merge both feeds into TrackedObjects, one per NORAD id.

    Either list may be empty, whether the feed failed or really had nothing;
    the merge just works from whatever is there.
    """
    now = now or datetime.now(timezone.utc)
    ct_by_norad = celestrak.index_by_norad(elements_records)
    sx_by_norad = spacex_api.index_by_norad(operator_records)

    satellites = []
    dropped = 0
    for norad_id in _union_in_order(ct_by_norad, sx_by_norad):
        try:
            sat = merge_record(norad_id, ct_by_norad.get(norad_id), sx_by_norad.get(norad_id), now, brand_marker)
        except (ValidationError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Dropping malformed record for NORAD {norad_id}: {e}")
            sat = None
        if sat is None:
            dropped += 1
            continue
        satellites.append(sat)

    logger.info(
        f"Reconciled {len(satellites)} satellites "
        f"({len(ct_by_norad)} CelesTrak, {len(sx_by_norad)} SpaceX, {dropped} dropped)"
    )
    return satellites
