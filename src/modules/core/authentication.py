"""Static API-key authentication backend for Django REST Framework.

Every DRF endpoint requires the shared secret configured in
``settings.API_KEY`` to be sent in the ``settings.API_KEY_HEADER`` header
(``X-API-KEY`` by default).  Health check and documentation views are
exempt: the health check is a plain Django view and the schema views are
served with ``SERVE_AUTHENTICATION = []``.

Security decisions
------------------
* **Fail closed**: a missing or mismatching key returns 401.
* Keys are compared with ``hmac.compare_digest`` (constant time).
* The key is read once when the backend is instantiated and never mutated.
* An empty ``API_KEY`` disables the gate (local development only).
"""

from __future__ import annotations

import hmac

import structlog
from django.conf import settings
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

logger = structlog.get_logger(__name__)


class ApiClient:
    """Lightweight principal for requests that passed the API-key gate.

    There is no local Django ``User``; DRF only needs
    ``is_authenticated`` to satisfy ``IsAuthenticated``.
    """

    is_authenticated = True
    is_active = True

    def __init__(self, name: str = "api-key-client") -> None:
        self.name = name

    def __str__(self) -> str:  # pragma: no cover
        return self.name


class ApiKeyAuthentication(BaseAuthentication):
    """DRF authentication class that validates a static API-key header."""

    keyword = "ApiKey"

    def __init__(self, api_key: str | None = None, header: str | None = None) -> None:
        self.api_key: str = settings.API_KEY if api_key is None else api_key
        self.header: str = settings.API_KEY_HEADER if header is None else header

    # ------------------------------------------------------------------
    # Public API (DRF contract)
    # ------------------------------------------------------------------

    def authenticate(self, request):
        """Return ``(ApiClient, key)`` or raise ``AuthenticationFailed``."""
        if not self.api_key:
            return (ApiClient(name="anonymous"), None)

        provided = request.headers.get(self.header)
        if not provided:
            logger.warning("api_key_missing", header=self.header)
            raise AuthenticationFailed(f"Missing {self.header} header.")

        if not hmac.compare_digest(provided.encode(), self.api_key.encode()):
            logger.warning("api_key_rejected", header=self.header)
            raise AuthenticationFailed("Invalid API key.")

        return (ApiClient(), provided)

    def authenticate_header(self, request):
        """Value for the ``WWW-Authenticate`` response header on 401."""
        return f'{self.keyword} header="{self.header}"'
