from fastapi import APIRouter, Depends, HTTPException
from typing import List
import logging

from starwatch.api.deps import get_data_service
from starwatch.exceptions import StarWatchError, TrackedObjectNotFound
from starwatch.models.satellite import TrackedObject
from starwatch.services.data_service import DataService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=List[TrackedObject])
async def read_satellites(service: DataService = Depends(get_data_service)):
    """All reconciled constellation satellites with health scores."""
    try:
        return await service.get_tracked_objects()
    except StarWatchError as e:
        logger.error(f"Error fetching satellites: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch satellite data")


@router.get("/{norad_id}", response_model=TrackedObject)
async def read_satellite(norad_id: int, service: DataService = Depends(get_data_service)):
    try:
        return await service.get_tracked_object(norad_id)
    except TrackedObjectNotFound:
        raise HTTPException(status_code=404, detail="Satellite not found")
    except StarWatchError as e:
        logger.error(f"Error fetching satellite {norad_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch satellite")
