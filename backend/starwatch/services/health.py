"""
Satellite Health Scoring

Derives a 0-100 health score and a four-state classification from a handful
of orbital parameters. Each penalty category is evaluated from the raw
element values on its own, so the categories are independent of each other.

Not a decay model: these are fixed step thresholds, not a prediction.
"""

from typing import Tuple

from starwatch.models.satellite import HealthStatus

# (threshold, penalty), checked from most to least severe; first match wins
BSTAR_PENALTIES = ((0.01, 40), (0.001, 20), (0.0001, 10))
ECCENTRICITY_PENALTIES = ((0.01, 20), (0.005, 10), (0.001, 5))
PERIAPSIS_PENALTIES_KM = ((200, 40), (350, 25), (500, 10))  # penalised when below
AGE_PENALTIES_DAYS = ((1825, 10), (1095, 5))  # > 5 years, > 3 years

NOMINAL_MIN_SCORE = 75
DEGRADED_MIN_SCORE = 50


def _penalty_above(value: float, steps) -> int:
    for threshold, penalty in steps:
        if value > threshold:
            return penalty
    return 0


def _penalty_below(value: float, steps) -> int:
    for threshold, penalty in steps:
        if value < threshold:
            return penalty
    return 0


def compute_health_score(
    bstar: float,
    eccentricity: float,
    periapsis_km: float,
    is_decayed: bool,
    age_in_days: float,
) -> int:
    if is_decayed:
        return 0

    score = 100
    # Higher drag = faster decay
    score -= _penalty_above(abs(bstar), BSTAR_PENALTIES)
    # Operational shells are near-circular
    score -= _penalty_above(eccentricity, ECCENTRICITY_PENALTIES)
    # Operational altitude is ~550 km
    score -= _penalty_below(periapsis_km, PERIAPSIS_PENALTIES_KM)
    score -= _penalty_above(age_in_days, AGE_PENALTIES_DAYS)

    return max(0, min(100, score))


def classify_health(score: int, is_decayed: bool) -> HealthStatus:
    if is_decayed:
        return HealthStatus.DECAYED
    if score >= NOMINAL_MIN_SCORE:
        return HealthStatus.NOMINAL
    if score >= DEGRADED_MIN_SCORE:
        return HealthStatus.DEGRADED
    return HealthStatus.CRITICAL


def score(
    bstar: float,
    eccentricity: float,
    periapsis_km: float,
    is_decayed: bool,
    age_in_days: float,
) -> Tuple[int, HealthStatus]:
    """Score and classify in one call."""
    value = compute_health_score(bstar, eccentricity, periapsis_km, is_decayed, age_in_days)
    return value, classify_health(value, is_decayed)
