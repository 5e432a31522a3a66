import json
import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from src.turf.domain.errors import (
    TerritoryApiError,
    TerritoryNetworkError,
    TerritoryNotFoundError,
)

logger = logging.getLogger(__name__)


class TerritoryApiClient:
    """
    HTTP client for the field-operations REST API.
    Retries idempotent reads with backoff; mutations are sent exactly once.
    """

    def __init__(
            self,
            base_url: str,
            token: Optional[str] = None,
            max_retries: int = 3,
            timeout: float = 10.0,
            session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or self._create_session(max_retries)

    def _create_session(self, max_retries: int) -> requests.Session:
        session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=0.5,  # 0.5s, 1s, 2s...
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["GET"]
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def get(self, path: str) -> Any:
        return self._request("GET", path)

    def post(self, path: str, data: Dict[str, Any]) -> Any:
        return self._request("POST", path, data)

    def put(self, path: str, data: Dict[str, Any]) -> Any:
        return self._request("PUT", path, data)

    def delete(self, path: str) -> Any:
        return self._request("DELETE", path)

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, path: str, data: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"

        try:
            response = self.session.request(
                method,
                url,
                json=data,
                headers=self._headers(),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Territory API network error on {method} {path}: {e}")
            raise TerritoryNetworkError(f"Request failed: {str(e)}") from e

        if response.status_code >= 400:
            self._handle_api_error(method, path, response)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as e:
            logger.error(f"Territory API invalid JSON on {method} {path}: {e}")
            raise TerritoryNetworkError("Invalid JSON response") from e

    def _handle_api_error(self, method: str, path: str, response: requests.Response):
        try:
            body = response.json()
        except ValueError:
            body = {}
        message = body.get("message", response.reason or "Unknown error") if isinstance(body, dict) else str(body)

        logger.warning(f"Territory API error {response.status_code} on {method} {path}: {message}")

        if response.status_code == 404:
            raise TerritoryNotFoundError(response.status_code, message, path)

        raise TerritoryApiError(response.status_code, message, path)
