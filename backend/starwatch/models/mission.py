from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class BoosterUse(BaseModel):
    """One first-stage core flown on one mission."""

    model_config = ConfigDict(frozen=True)

    serial: str = "Unknown"
    flight: int = 1
    reused: bool = False
    landing_success: Optional[bool] = None
    landing_type: Optional[str] = None


class MissionLinks(BaseModel):
    model_config = ConfigDict(frozen=True)

    webcast: Optional[str] = None
    article: Optional[str] = None
    wikipedia: Optional[str] = None
    patch: Optional[str] = None


class Mission(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    flight_number: int = 0
    name: str
    date_utc: str
    date_local: str
    success: Optional[bool] = None  # None while pending
    details: Optional[str] = None
    rocket_id: str = ""
    rocket_name: str = "Falcon 9"
    launchpad_id: str = ""
    launchpad_name: str = "Unknown"
    launchpad_locality: str = "Unknown"
    cores: List[BoosterUse] = []
    starlink_count: int = 0
    links: MissionLinks = MissionLinks()
