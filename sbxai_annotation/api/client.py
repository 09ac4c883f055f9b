"""
HTTP transport for the REST service.

Wraps a ``requests.Session``: joins paths onto the base URL, attaches the
bearer token from the injected :class:`AuthSession`, encodes multipart forms
and maps failures onto the package error taxonomy.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

import requests

from ..errors import ApiError, AuthError, NetworkError
from ..utils.cancel import CancelToken
from .auth_session import AuthSession
from .endpoints import Endpoints

logger = logging.getLogger(__name__)

FileTuple = Tuple[str, Tuple[str, Any, str]]


def _error_detail(response: requests.Response) -> Optional[str]:
    try:
        payload = response.json()
    except ValueError:
        return response.text or None
    if isinstance(payload, dict):
        detail = payload.get("detail") or payload.get("message")
        return str(detail) if detail is not None else None
    return None


def multipart_fields(form: Dict[str, Any]) -> list:
    """
    Encode plain form fields as multipart parts.

    ``requests`` only switches to multipart when ``files`` is given, so each
    field becomes a part without a filename.
    """
    return [(key, (None, str(value))) for key, value in form.items() if value is not None]


class ApiClient:
    def __init__(
        self,
        base_url: str,
        auth: Optional[AuthSession] = None,
        http: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.auth = auth if auth is not None else AuthSession()
        self.http = http if http is not None else requests.Session()
        self.timeout = float(timeout) if timeout is not None else None
        self.endpoints = Endpoints()

    @classmethod
    def from_config(cls, cfg, auth: Optional[AuthSession] = None, http=None):
        return cls(cfg.api.base_url, auth=auth, http=http, timeout=cfg.api.timeout)

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        form: Optional[Dict[str, Any]] = None,
        files: Optional[Iterable[FileTuple]] = None,
        authenticated: bool = True,
        cancel: Optional[CancelToken] = None,
    ) -> Any:
        """
        Perform one request and return the decoded JSON body (or ``None``).

        Raises:
            NetworkError: the request could not complete
            AuthError: the server answered 401
            ApiError: any other non-success status
            Cancelled: ``cancel`` fired before the request or its response
        """
        if cancel is not None:
            cancel.raise_if_cancelled()

        headers = {}
        if authenticated:
            headers.update(self.auth.headers())

        parts = None
        if form is not None or files is not None:
            parts = multipart_fields(form or {}) + list(files or [])

        url = self.url(path)
        logger.debug("%s %s", method, url)
        try:
            response = self.http.request(
                method,
                url,
                params={k: v for k, v in (params or {}).items() if v is not None} or None,
                json=json,
                files=parts,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise NetworkError(f"{method} {url} failed: {exc}") from exc

        if cancel is not None:
            cancel.raise_if_cancelled()

        if response.status_code == 401:
            raise AuthError(f"{method} {url} was rejected", detail=_error_detail(response))
        if not response.ok:
            detail = _error_detail(response)
            raise ApiError(
                f"{method} {url} returned {response.status_code}",
                response.status_code,
                detail,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                f"{method} {url} returned a non-JSON body", response.status_code
            ) from exc

    def get(self, path: str, **kwargs) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> Any:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs) -> Any:
        return self.request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request("DELETE", path, **kwargs)

    def close(self):
        self.http.close()
