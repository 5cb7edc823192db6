from pydantic import BaseModel, ConfigDict
from typing import Optional
import enum


class SatelliteStatus(str, enum.Enum):
    ACTIVE = "active"
    DECAYED = "decayed"
    UNKNOWN = "unknown"


class HealthStatus(str, enum.Enum):
    NOMINAL = "nominal"
    DEGRADED = "degraded"
    CRITICAL = "critical"
    DECAYED = "decayed"


class TrackedObject(BaseModel):
    """One reconciled constellation satellite, keyed by NORAD catalog number."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    norad_id: int
    version: str
    status: SatelliteStatus

    # Last-known position snapshot (operator feed only)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    height_km: Optional[float] = None
    velocity_kms: Optional[float] = None

    inclination: float = 0.0
    eccentricity: float = 0.0
    period: float = 0.0
    apoapsis: float = 0.0
    periapsis: float = 550.0
    mean_motion: float = 0.0
    bstar: float = 0.0
    epoch: str = ""

    launch_date: Optional[str] = None
    decay_date: Optional[str] = None
    object_type: str = "PAYLOAD"
    rcs_size: str = "MEDIUM"
    site: str = "AFETR"
    object_id: str = ""
    launch_id: Optional[str] = None

    health_score: int
    health_status: HealthStatus
    age_in_days: int = 0
