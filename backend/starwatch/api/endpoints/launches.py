from fastapi import APIRouter, Depends, HTTPException
from typing import List
import logging

from starwatch.api.deps import get_data_service
from starwatch.exceptions import StarWatchError
from starwatch.models.mission import Mission
from starwatch.services.data_service import DataService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=List[Mission])
async def read_launches(service: DataService = Depends(get_data_service)):
    """
    Starlink launch history, newest first.
    SpaceX API history supplemented with Launch Library 2 (cached).
    """
    try:
        return await service.get_missions()
    except StarWatchError as e:
        logger.error(f"Error fetching launches: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch launch data")
