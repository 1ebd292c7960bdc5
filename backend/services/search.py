from abc import ABC, abstractmethod
from typing import Any, Dict, List
import httpx
from config import logger, settings, SEARCH_CONFIG, RATE_LIMITS_PER_SECOND
from exceptions import SearchUnavailable
from models.search_results import SearchDocument
from utils.rate_limiter import get_rate_limiter

_tavily_limiter = get_rate_limiter("TAVILY", RATE_LIMITS_PER_SECOND.TAVILY)


class SearchProvider(ABC):
    """Single-shot web search used to resolve the model's getResult calls."""

    @abstractmethod
    async def search(self, query: str, max_results: int = SEARCH_CONFIG.MAX_RESULTS) -> List[SearchDocument]:
        ...


async def _post_search(api_key: str, body: Dict[str, Any]) -> Dict[str, Any]:
    await _tavily_limiter.acquire()

    headers = {"Content-Type": "application/json", "Authorization": f"Bearer {api_key}"}
    try:
        async with httpx.AsyncClient(timeout=SEARCH_CONFIG.REQUEST_TIMEOUT) as client:
            r = await client.post(settings.TAVILY_ENDPOINT, headers=headers, json=body)
            r.raise_for_status()
            return r.json()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.error("Tavily HTTP error %s: %s", status, e.response.text)
        if status == 429:
            raise SearchUnavailable("rate limited by upstream", recoverable=True)
        raise SearchUnavailable(f"HTTP {status}", recoverable=status >= 500)
    except httpx.RequestError as e:
        logger.error("Tavily request error: %s", str(e))
        raise SearchUnavailable(f"Request failed: {str(e)}", recoverable=True)
    except ValueError as e:
        logger.error("Tavily returned a non-JSON body: %s", str(e))
        raise SearchUnavailable("malformed upstream payload", recoverable=True)


class TavilySearchProvider(SearchProvider):

    def __init__(self, search_depth: str = SEARCH_CONFIG.SEARCH_DEPTH):
        self.search_depth = search_depth

    async def search(self, query: str, max_results: int = SEARCH_CONFIG.MAX_RESULTS) -> List[SearchDocument]:
        if not settings.TAVILY_API_KEY:
            logger.critical("TAVILY_API_KEY not configured.")
            raise SearchUnavailable("API key not configured", recoverable=False)

        body = {
            "query": query,
            "max_results": max_results,
            "search_depth": self.search_depth,
        }
        payload = await _post_search(settings.TAVILY_API_KEY, body)
        return self._parse_results(payload, max_results)

    @staticmethod
    def _parse_results(payload: Any, max_results: int) -> List[SearchDocument]:
        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            logger.error("Tavily payload has no results list: %s", str(payload)[:200])
            raise SearchUnavailable("malformed upstream payload", recoverable=True)

        out: List[SearchDocument] = []
        for item in results:
            if not isinstance(item, dict) or not item.get("url"):
                logger.warning("Dropping search result without URL: %s", str(item)[:200])
                continue
            doc: SearchDocument = {"url": str(item["url"])}
            if item.get("title"):
                doc["title"] = str(item["title"])
            if item.get("content"):
                doc["snippet"] = str(item["content"])
            out.append(doc)
            if len(out) >= max_results:
                break
        return out
