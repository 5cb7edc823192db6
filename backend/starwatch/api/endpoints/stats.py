from fastapi import APIRouter, Depends, HTTPException
import logging

from starwatch.api.deps import get_data_service
from starwatch.exceptions import StarWatchError
from starwatch.models.stats import ConstellationStats
from starwatch.services.data_service import DataService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=ConstellationStats)
async def read_stats(service: DataService = Depends(get_data_service)):
    """Constellation-wide statistics computed from the reconciled catalog."""
    try:
        return await service.get_constellation_stats()
    except StarWatchError as e:
        logger.error(f"Error fetching stats: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch stats")
