"""
Async client for the suggestions API.

Used by delivery surfaces (browser companion, CLI, other services) to
analyze prompt text remotely, with a debounce policy for keystroke-driven
callers and local application of the returned suggestions.
"""
import asyncio
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

import httpx

from app.config import settings
from app.schemas.auth import ValidateTokenResponse
from app.schemas.subscription import SubscriptionCheckResponse
from app.schemas.suggestion import AnalyzeResponse, Platform, Suggestion, Tier
from app.services.suggestion_engine import apply, apply_all, detect_platform, generate
from app.utils.debounce import Debouncer
from app.utils.logger import get_logger

logger = get_logger("suggestions_client")


class SuggestionsAPIError(Exception):
    """Error returned by, or raised while calling, the suggestions API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UnauthorizedError(SuggestionsAPIError):
    """Missing or invalid credential; the user should be asked to sign in."""


class BadRequestError(SuggestionsAPIError):
    """The request was rejected as invalid (e.g. empty text)."""


class SuggestionsClient:
    """
    Client for a running prompt enhancer service.

    The base URL is always explicit; settings only supply defaults for the
    timeout, debounce window and minimum text length.

    Usage:
        async with SuggestionsClient("https://enhancer.example.com", token) as client:
            result = await client.analyze("fix this thing", "chatgpt")
            improved = client.apply_all("fix this thing", result.suggestions)
    """

    def __init__(
        self,
        base_url: str,
        auth_token: Optional[str] = None,
        timeout: Optional[float] = None,
        min_length: Optional[int] = None,
        debounce_delay: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize client.

        Args:
            base_url: Service root URL
            auth_token: Bearer token from the auth provider
            timeout: Request timeout in seconds (defaults to CLIENT_TIMEOUT_SECONDS)
            min_length: Texts shorter than this are not analyzed (defaults to MIN_ANALYZE_LENGTH)
            debounce_delay: Quiet period in seconds (defaults to ANALYZE_DEBOUNCE_MS)
            http_client: Pre-built httpx client, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token
        self.min_length = settings.MIN_ANALYZE_LENGTH if min_length is None else min_length
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.CLIENT_TIMEOUT_SECONDS
        )
        self.debouncer = Debouncer(delay=debounce_delay)

    async def __aenter__(self) -> "SuggestionsClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        self.debouncer.cancel()
        if self._owns_client:
            await self._client.aclose()

    def _headers(self) -> Dict[str, str]:
        if not self.auth_token:
            raise UnauthorizedError("Sign in to get prompt suggestions", status_code=401)
        return {"Authorization": f"Bearer {self.auth_token}"}

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await self._client.post(path, json=payload, headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning(f"Suggestions API unreachable", path=path, error=str(e))
            raise SuggestionsAPIError(f"Suggestions API unreachable: {e}") from e

        if response.status_code == 200:
            return response.json()

        message = _error_message(response)
        if response.status_code == 401:
            raise UnauthorizedError(message, status_code=401)
        if response.status_code == 400:
            raise BadRequestError(message, status_code=400)

        logger.error(f"Suggestions API error", path=path, status_code=response.status_code, error=message)
        raise SuggestionsAPIError(message, status_code=response.status_code)

    def should_analyze(self, text: Optional[str]) -> bool:
        """Whether text is long enough to be worth a round trip."""
        return bool(text) and len(text) >= self.min_length

    async def analyze(
        self,
        text: str,
        platform: Union[Platform, str] = Platform.UNKNOWN,
        hostname: Optional[str] = None
    ) -> AnalyzeResponse:
        """
        Analyze text on the server.

        When hostname is given, the platform is detected from the chat
        site's host and the platform argument is ignored.

        Raises:
            UnauthorizedError: Missing or rejected credential
            BadRequestError: Empty text
            SuggestionsAPIError: Any other failure
        """
        data = await self._post(
            "/suggestions/analyze",
            {"text": text, "platform": _resolve_platform(platform, hostname).value}
        )
        return AnalyzeResponse.model_validate(data)

    async def analyze_with_fallback(
        self,
        text: str,
        platform: Union[Platform, str] = Platform.UNKNOWN,
        hostname: Optional[str] = None
    ) -> AnalyzeResponse:
        """
        Analyze remotely, degrading to local free-tier suggestions when the
        service fails for reasons other than authentication or validation.
        """
        try:
            return await self.analyze(text, platform, hostname)
        except (UnauthorizedError, BadRequestError):
            raise
        except SuggestionsAPIError as e:
            logger.warning(f"Falling back to local suggestions", error=str(e))
            resolved = _resolve_platform(platform, hostname)
            return AnalyzeResponse(
                suggestions=generate(
                    text,
                    resolved,
                    Tier.FREE,
                    upsell_mode=settings.SUGGESTION_UPSELL_MODE,
                    caps=settings.suggestion_caps
                ),
                has_subscription=False,
                platform=resolved
            )

    def schedule_analysis(
        self,
        text: str,
        platform: Union[Platform, str] = Platform.UNKNOWN,
        hostname: Optional[str] = None
    ) -> Optional[asyncio.Task]:
        """
        Debounced analysis for keystroke-driven callers.

        Returns:
            Task resolving to the AnalyzeResponse, or None when the text is
            too short (any pending analysis is cancelled in that case)
        """
        if not self.should_analyze(text):
            self.debouncer.cancel()
            return None
        return self.debouncer.submit(self.analyze_with_fallback, text, platform, hostname)

    async def validate_token(self) -> ValidateTokenResponse:
        """Check the configured token against the service."""
        data = await self._post("/auth/validate", {})
        return ValidateTokenResponse.model_validate(data)

    async def check_subscription(self, user_id: UUID) -> SubscriptionCheckResponse:
        """Fetch the subscription status of the signed-in user."""
        data = await self._post("/subscription/check", {"userId": str(user_id)})
        return SubscriptionCheckResponse.model_validate(data)

    @staticmethod
    def apply(current_text: str, suggestion: Suggestion) -> str:
        return apply(current_text, suggestion)

    @staticmethod
    def apply_all(current_text: str, suggestions: List[Suggestion]) -> str:
        return apply_all(current_text, suggestions)


def _resolve_platform(platform: Union[Platform, str, None], hostname: Optional[str]) -> Platform:
    if hostname:
        return detect_platform(hostname)
    return Platform.parse(platform)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {response.status_code}"
