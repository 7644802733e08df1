"""HTTP client for the result endpoints.

Used by hosts that run the board engine away from the server. Any non-2xx
response or transport failure is raised, never reported as success.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from memory_game.errors import StorageUnavailable, ValidationError
from memory_game.services.games.board import GameResult

logger = logging.getLogger(__name__)


class HttpResultsClient:
    def __init__(
        self,
        base_url: str,
        matches_offset: int = 0,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.matches_offset = matches_offset
        self.timeout = timeout
        self.session = session or requests.Session()

    def save(self, result: GameResult) -> Dict[str, Any]:
        return self._request('POST', '/api/results', json=result.to_payload(self.matches_offset))

    def recent(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        params = {'limit': limit} if limit is not None else None
        return self._request('GET', '/api/results', params=params)

    def leaderboard(self) -> List[Dict[str, Any]]:
        return self._request('GET', '/api/leaderboard')

    def _request(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.warning("[http-error] %s %s failed: %s", method, url, exc)
            raise StorageUnavailable(f"Could not reach {url}: {exc}") from exc

        if 200 <= response.status_code < 300:
            return response.json()

        message = _error_message(response)
        logger.warning("[http-error] %s %s -> %s %s", method, url, response.status_code, message)
        if response.status_code == 400:
            raise ValidationError(message)
        raise StorageUnavailable(message)


def _error_message(response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get('error'):
        return str(body['error'])
    return f"HTTP {response.status_code}"
