from pydantic_settings import BaseSettings
from typing import Dict, List, Optional


class Settings(BaseSettings):
    PROJECT_NAME: str = "StarWatch"
    API_V1_STR: str = "/api/v1"

    SPACEX_API_URL: str = "https://api.spacexdata.com/v4"
    CELESTRAK_GP_URL: str = "https://celestrak.org/NORAD/elements/gp.php?GROUP=starlink&FORMAT=json"
    LL2_API_URL: str = "https://ll.thespacedevs.com/2.2.0"

    # Catalog entries sharing the feed but not carrying this marker are dropped
    BRAND_MARKER: str = "STARLINK"

    HTTP_TIMEOUT_SECONDS: float = 30.0
    SUPPLEMENTARY_TIMEOUT_SECONDS: float = 10.0
    USER_AGENT: str = "StarWatch/1.0"

    CACHE_TTL_SECONDS: float = 600
    SATELLITES_TTL_SECONDS: Optional[float] = None
    MISSIONS_TTL_SECONDS: Optional[float] = None
    STATS_TTL_SECONDS: Optional[float] = None
    FUN_FACTS_TTL_SECONDS: Optional[float] = None
    LIVE_TTL_SECONDS: float = 120

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    @property
    def cache_ttls(self) -> Dict[str, float]:
        """Per-key TTLs; keys without an override use CACHE_TTL_SECONDS."""
        overrides = {
            "satellites": self.SATELLITES_TTL_SECONDS,
            "missions": self.MISSIONS_TTL_SECONDS,
            "stats": self.STATS_TTL_SECONDS,
            "fun_facts": self.FUN_FACTS_TTL_SECONDS,
        }
        ttls = {key: value if value is not None else self.CACHE_TTL_SECONDS for key, value in overrides.items()}
        ttls["live"] = self.LIVE_TTL_SECONDS
        return ttls

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
