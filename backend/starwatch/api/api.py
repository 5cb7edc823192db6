from fastapi import APIRouter
from starwatch.api.endpoints import satellites, launches, stats, fun_facts, live

api_router = APIRouter()

api_router.include_router(satellites.router, prefix="/satellites", tags=["satellites"])
api_router.include_router(launches.router, prefix="/launches", tags=["launches"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
api_router.include_router(fun_facts.router, prefix="/fun-facts", tags=["fun-facts"])
api_router.include_router(live.router, prefix="/live", tags=["live"])
