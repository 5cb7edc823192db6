from fastapi import APIRouter, Depends, HTTPException
from typing import List
import logging

from starwatch.api.deps import get_data_service
from starwatch.exceptions import StarWatchError
from starwatch.models.stats import FunFact
from starwatch.services.data_service import DataService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=List[FunFact])
async def read_fun_facts(service: DataService = Depends(get_data_service)):
    try:
        return await service.get_fun_facts()
    except StarWatchError as e:
        logger.error(f"Error fetching fun facts: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch fun facts")
