from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class WebcastLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    title: str = ""
    source: str = ""
    live: bool = False


class LiveBooster(BaseModel):
    model_config = ConfigDict(frozen=True)

    serial: str
    flights: int


class NextLaunch(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    net: str  # "No Earlier Than", ISO timestamp
    status: str
    status_description: str = ""
    rocket_name: str = "Falcon 9"
    pad_name: str = "Unknown"
    pad_location: str = "Unknown"
    mission_description: Optional[str] = None
    image: Optional[str] = None
    webcasts: List[WebcastLink] = []
    booster: Optional[LiveBooster] = None


class PastLaunch(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    net: str
    status: str
    webcasts: List[WebcastLink] = []
    image: Optional[str] = None


class LiveLaunchData(BaseModel):
    model_config = ConfigDict(frozen=True)

    next_launch: Optional[NextLaunch] = None
    recent_past_launches: List[PastLaunch] = []
    is_live_now: bool = False
    countdown_seconds: Optional[int] = None
