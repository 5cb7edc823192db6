"""
CelesTrak GP client.

Pulls the constellation's general-perturbations element sets in OMM JSON form.
This is the fresher of the two per-object feeds and wins every field it has.
"""

import httpx
from typing import Dict, List

from starwatch.core.config import Settings
from starwatch.services.feeds import FeedResult, Record, fetch_json, to_int

SOURCE = "celestrak"


async def fetch_gp_elements(client: httpx.AsyncClient, settings: Settings) -> FeedResult:
    return await fetch_json(client, SOURCE, settings.CELESTRAK_GP_URL)


def index_by_norad(records: List[Record]) -> Dict[int, Record]:
    """Map NORAD_CAT_ID -> OMM record. Records without a usable id are skipped."""
    indexed: Dict[int, Record] = {}
    for omm in records:
        norad_id = to_int(omm.get("NORAD_CAT_ID"))
        if norad_id is None:
            continue
        indexed[norad_id] = omm
    return indexed
