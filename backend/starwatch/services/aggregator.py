"""
Constellation roll-ups: summary statistics and the fun-facts panel.

Everything here is a pure function of the reconciled satellites and the
merged mission history.
"""

import math
from typing import Dict, Iterable, List, Optional, Tuple

from starwatch.models.mission import Mission
from starwatch.models.satellite import SatelliteStatus, TrackedObject
from starwatch.models.stats import ConstellationStats, FunFact, FunFactIcon, MostFlownBooster
from starwatch.services.missions import UNKNOWN_SERIAL
from starwatch.services.reconciler import designator_year

DEFAULT_ALTITUDE_KM = 550
NOT_AVAILABLE = "N/A"

# Approximate per-satellite mass by generation (kg)
MASS_V2_KG = 800
MASS_V1_5_KG = 300
MASS_DEFAULT_KG = 260


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _count(counter: Dict[str, int], key: str) -> None:
    counter[key] = counter.get(key, 0) + 1


def launch_year(sat: TrackedObject) -> Optional[str]:
    if sat.launch_date:
        return sat.launch_date[:4]
    year = designator_year(sat.object_id)
    return str(year) if year is not None else None


def average_altitude(satellites: Iterable[TrackedObject]) -> int:
    heights = [
        s.height_km for s in satellites
        if s.status == SatelliteStatus.ACTIVE and s.height_km is not None
    ]
    if not heights:
        return DEFAULT_ALTITUDE_KM
    return round_half_up(sum(heights) / len(heights))


def average_age(satellites: Iterable[TrackedObject]) -> int:
    ages = [s.age_in_days for s in satellites if s.age_in_days > 0]
    if not ages:
        return 0
    return round_half_up(sum(ages) / len(ages))


def booster_flights(missions: Iterable[Mission]) -> Dict[str, int]:
    """Missions flown per known booster serial, in first-seen order."""
    flights: Dict[str, int] = {}
    for mission in missions:
        for core in mission.cores:
            if core.serial and core.serial != UNKNOWN_SERIAL:
                _count(flights, core.serial)
    return flights


def most_flown_booster(flights: Dict[str, int]) -> Optional[MostFlownBooster]:
    # Strict ">" keeps the first-seen serial on ties
    best: Optional[Tuple[str, int]] = None
    for serial, count in flights.items():
        if best is None or count > best[1]:
            best = (serial, count)
    if best is None:
        return None
    return MostFlownBooster(serial=best[0], flights=best[1])


def compute_stats(satellites: List[TrackedObject], missions: List[Mission]) -> ConstellationStats:
    by_version: Dict[str, int] = {}
    by_health_status: Dict[str, int] = {}
    satellites_by_year: Dict[str, int] = {}

    for sat in satellites:
        _count(by_version, sat.version or "unknown")
        _count(by_health_status, sat.health_status.value)
        year = launch_year(sat)
        if year:
            _count(satellites_by_year, year)

    launches_by_year: Dict[str, int] = {}
    for mission in missions:
        _count(launches_by_year, mission.date_utc[:4])

    flights = booster_flights(missions)

    return ConstellationStats(
        total_satellites=len(satellites),
        active_satellites=sum(1 for s in satellites if s.status == SatelliteStatus.ACTIVE),
        decayed_satellites=sum(1 for s in satellites if s.status == SatelliteStatus.DECAYED),
        avg_altitude_km=average_altitude(satellites),
        avg_age_days=average_age(satellites),
        by_version=by_version,
        by_health_status=by_health_status,
        total_launches=len(missions),
        total_starlink_launches=len(missions),
        unique_boosters=len(flights),
        most_flown_booster=most_flown_booster(flights),
        launches_by_year=launches_by_year,
        satellites_by_year=satellites_by_year,
    )


def satellite_mass_kg(version: str) -> int:
    if "2" in version:
        return MASS_V2_KG
    if "1.5" in version:
        return MASS_V1_5_KG
    return MASS_DEFAULT_KG


def busiest_launch_site(missions: Iterable[Mission]) -> Optional[Tuple[str, int]]:
    counts: Dict[str, int] = {}
    for mission in missions:
        _count(counts, mission.launchpad_locality)
    best: Optional[Tuple[str, int]] = None
    for locality, count in counts.items():
        if best is None or count > best[1]:
            best = (locality, count)
    return best


def compute_fun_facts(
    satellites: List[TrackedObject],
    missions: List[Mission],
    stats: ConstellationStats,
) -> List[FunFact]:
    active = [s for s in satellites if s.status == SatelliteStatus.ACTIVE]

    oldest: Optional[TrackedObject] = None
    for sat in active:
        if sat.age_in_days > (oldest.age_in_days if oldest else 0):
            oldest = sat

    highest: Optional[TrackedObject] = None
    for sat in active:
        if (sat.height_km or 0) > ((highest.height_km or 0) if highest else 0):
            highest = sat

    top_site = busiest_launch_site(missions)
    total_mass_kg = sum(satellite_mass_kg(s.version or "") for s in satellites)
    booster = stats.most_flown_booster

    return [
        FunFact(
            label="Total Mass in Orbit",
            value=f"{round_half_up(total_mass_kg / 1000)} tonnes",
            description="Estimated total mass of all Starlink satellites currently tracked",
            icon=FunFactIcon.SCALE,
        ),
        FunFact(
            label="Oldest Active Satellite",
            value=f"{oldest.age_in_days // 365}y {oldest.age_in_days % 365}d" if oldest else NOT_AVAILABLE,
            description=f"{oldest.name} launched {oldest.launch_date}" if oldest else "",
            icon=FunFactIcon.CLOCK,
        ),
        FunFact(
            label="Highest Altitude",
            value=f"{round_half_up(highest.height_km)} km" if highest else NOT_AVAILABLE,
            description=f"{highest.name} orbiting at peak altitude" if highest else "",
            icon=FunFactIcon.MOUNTAIN,
        ),
        FunFact(
            label="Busiest Launch Site",
            value=top_site[0] if top_site else NOT_AVAILABLE,
            description=f"{top_site[1]} Starlink launches from this location" if top_site else "",
            icon=FunFactIcon.ROCKET,
        ),
        FunFact(
            label="Most Flown Booster",
            value=booster.serial if booster else NOT_AVAILABLE,
            description=f"{booster.flights} Starlink missions on this booster" if booster else "",
            icon=FunFactIcon.REPEAT,
        ),
        FunFact(
            label="Orbital Speed",
            value="~7.5 km/s",
            description="Each Starlink satellite travels at approximately 27,000 km/h",
            icon=FunFactIcon.ZAP,
        ),
        FunFact(
            label="Coverage Area",
            value="~60 countries",
            description="Starlink provides internet coverage across six continents",
            icon=FunFactIcon.GLOBE,
        ),
        FunFact(
            label="Unique Boosters Used",
            value=f"{stats.unique_boosters}",
            description="Different Falcon 9 first stages used for Starlink missions",
            icon=FunFactIcon.LAYERS,
        ),
    ]
