from pydantic import BaseModel, ConfigDict
from typing import Dict, Optional
import enum


class MostFlownBooster(BaseModel):
    model_config = ConfigDict(frozen=True)

    serial: str
    flights: int


class ConstellationStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_satellites: int
    active_satellites: int
    decayed_satellites: int
    avg_altitude_km: int
    avg_age_days: int
    by_version: Dict[str, int]
    by_health_status: Dict[str, int]
    total_launches: int
    total_starlink_launches: int
    unique_boosters: int
    most_flown_booster: Optional[MostFlownBooster] = None
    launches_by_year: Dict[str, int]
    satellites_by_year: Dict[str, int]


class FunFactIcon(str, enum.Enum):
    SCALE = "scale"
    CLOCK = "clock"
    MOUNTAIN = "mountain"
    ROCKET = "rocket"
    REPEAT = "repeat"
    ZAP = "zap"
    GLOBE = "globe"
    LAYERS = "layers"


class FunFact(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: str
    description: str
    icon: FunFactIcon
