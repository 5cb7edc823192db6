"""
Shared fetch helper for upstream feeds.

Every adapter goes through fetch_json(), which never raises: a network error,
a non-2xx status, an undecodable body or a payload of the wrong shape all come
back as a failed FeedResult with no records. Callers that only care about the
data read `.records` and treat a failed feed exactly like an empty one.
"""

import httpx
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


@dataclass(frozen=True)
class FeedResult:
    source: str
    records: List[Record] = field(default_factory=list)
    ok: bool = True
    error: Optional[str] = None

    @classmethod
    def failed(cls, source: str, error: str) -> "FeedResult":
        return cls(source=source, records=[], ok=False, error=error)


def _as_list(payload: Any) -> List[Record]:
    if not isinstance(payload, list):
        raise ValueError(f"expected a JSON array, got {type(payload).__name__}")
    return [item for item in payload if isinstance(item, dict)]


def ll2_results(payload: Any) -> List[Record]:
    """Launch Library 2 wraps its records in a paginated {"results": [...]} envelope."""
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
    return _as_list(payload.get("results", []))


async def fetch_json(
    client: httpx.AsyncClient,
    source: str,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    timeout: Optional[float] = None,
    extract: Callable[[Any], List[Record]] = _as_list,
    log_level: int = logging.ERROR,
) -> FeedResult:
    kwargs: Dict[str, Any] = {"params": params}
    if timeout is not None:
        kwargs["timeout"] = timeout

    try:
        resp = await client.get(url, **kwargs)
        resp.raise_for_status()
        records = extract(resp.json())
    except (httpx.HTTPError, ValueError) as e:
        logger.log(log_level, f"Failed to fetch {source} from {url}: {e}")
        return FeedResult.failed(source, str(e))

    logger.info(f"Fetched {len(records)} records from {source}")
    return FeedResult(source=source, records=records)


def to_float(val) -> Optional[float]:
    """Safely convert a feed value to float; None when missing or not numeric."""
    if val is None or isinstance(val, bool):
        return None
    try:
        return float(val)
    except (ValueError, TypeError):
        return None


def to_int(val) -> Optional[int]:
    if val is None or isinstance(val, bool):
        return None
    try:
        return int(val)
    except (ValueError, TypeError):
        return None


def to_str(val) -> Optional[str]:
    """Feed value as a string; numbers are stringified, containers count as missing."""
    if val is None or isinstance(val, (bool, dict, list)):
        return None
    return str(val)
