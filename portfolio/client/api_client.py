"""
HTTP client for the portfolio REST API.

Wraps a ``requests.Session`` carrying the bearer token and turns every
non-2xx response into an ``ApiError`` holding the server's error code and
message, so callers can show them as-is.
"""

import logging
from typing import Any, Dict, List

import requests

from portfolio.core.config import get_api_token, get_api_url
from portfolio.domain.entities import Domain, Sale
from portfolio.schemas.dtos import domain_from_dict, sale_from_dict

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class ApiError(Exception):
    """A request that failed at the transport level or with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.status_code} {self.code or 'ERROR'}: {self.message}"


class ApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = (base_url or get_api_url()).rstrip("/")
        self.token = token if token is not None else get_api_token()
        self.timeout = timeout
        self.session = session or requests.Session()

    # ---- transport ----

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, path: str, payload: Any = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                json=payload,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error(
                "API request failed",
                extra={"context": {"method": method, "url": url, "error": str(exc)}},
            )
            raise ApiError(f"Could not reach {self.base_url}: {exc}") from exc

        if response.status_code >= 400:
            raise self._error_from(response)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _error_from(response: requests.Response) -> ApiError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        return ApiError(
            body.get("message") or response.reason or "Request failed",
            status_code=response.status_code,
            code=body.get("error"),
        )

    # ---- auth ----

    def login(self, username: str, password: str) -> Dict[str, Any]:
        """Log in and keep the returned token for later requests."""
        data = self._request(
            "POST", "/auth/login", {"username": username, "password": password}
        )
        self.token = data["token"]
        return data["user"]

    def verify(self) -> Dict[str, Any]:
        return self._request("GET", "/auth/verify")

    def logout(self) -> None:
        self._request("POST", "/auth/logout")
        self.token = None

    # ---- domains ----

    def list_domains(self) -> List[Domain]:
        return [domain_from_dict(item) for item in self._request("GET", "/domains")]

    def create_domain(self, payload: Dict[str, Any]) -> Domain:
        return domain_from_dict(self._request("POST", "/domains", payload))

    def update_domain(self, domain_id: int, payload: Dict[str, Any]) -> Domain:
        return domain_from_dict(self._request("PUT", f"/domains/{domain_id}", payload))

    def delete_domain(self, domain_id: int) -> None:
        self._request("DELETE", f"/domains/{domain_id}")

    def bulk_delete(self, ids: List[int]) -> Dict[str, Any]:
        return self._request("POST", "/domains/bulk-delete", {"ids": list(ids)})

    def bulk_update(self, ids: List[int], changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._request(
            "POST", "/domains/bulk-update", {"ids": list(ids), "changes": changes}
        )

    # ---- evaluations, sales, settings, stats ----

    def list_evaluations(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/evaluations")

    def create_evaluation(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/evaluations", payload)

    def delete_evaluation(self, evaluation_id: int) -> None:
        self._request("DELETE", f"/evaluations/{evaluation_id}")

    def list_sales(self) -> List[Sale]:
        return [sale_from_dict(item) for item in self._request("GET", "/sales")]

    def get_settings(self) -> Dict[str, List[str]]:
        return self._request("GET", "/settings")

    def update_settings(self, document: Dict[str, List[str]]) -> Dict[str, List[str]]:
        return self._request("PUT", "/settings", document)

    def get_stats(self) -> Dict[str, Any]:
        return self._request("GET", "/stats")

    def close(self) -> None:
        self.session.close()
