from fastapi import APIRouter, Depends, HTTPException
import logging

from starwatch.api.deps import get_data_service
from starwatch.exceptions import StarWatchError
from starwatch.models.live import LiveLaunchData
from starwatch.services.data_service import DataService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=LiveLaunchData)
async def read_live_launch_data(service: DataService = Depends(get_data_service)):
    """
    Next scheduled Starlink launch with countdown and webcasts,
    plus recent launches with replay links. Cached for 2 minutes.
    """
    try:
        return await service.get_live_launch_data()
    except StarWatchError as e:
        logger.error(f"Error fetching live data: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch live launch data")
