"""HTTP transport for the PlacetoPay APIs."""

import inspect
import json
import re
from typing import Any, Literal

import httpx
import structlog

from placetopay.config import ClientConfig, DEFAULT_IDEMPOTENCY_HEADER
from placetopay.core.retry import DEFAULT_RETRY_POLICY, with_retry
from placetopay.models.exceptions import (
    HttpError,
    InvalidResponseError,
    NetworkError,
)

logger = structlog.get_logger(__name__)

ResponseType = Literal["json", "text"]

AUTH_ERROR_DESCRIPTIONS = {
    100: "missing credentials (UsernameToken)",
    101: "login does not exist or does not belong to this environment",
    102: "tranKey does not match login/secretKey",
    103: "seed out of range (tolerance +/-5 minutes)",
}

_AUTH_CODE_IN_MESSAGE = re.compile(r"10[0-3]")
_RAW_BODY_LOG_LIMIT = 1000


class HttpClient:
    """
    POST-only JSON client with timeout, retries and error classification.

    Each logical call runs through ``with_retry``; every attempt is a single
    POST to ``base_url + path``. Non-2xx answers raise HttpError (message
    enriched for auth rejections 100-103 and common statuses), unparsable
    bodies raise InvalidResponseError, transport failures raise NetworkError.
    """

    def __init__(self, config: ClientConfig, base_url: str | None = None):
        self.base_url = (base_url or config.base_url).rstrip("/")
        self.timeout_ms = config.timeout_ms
        self.retry_policy = config.retry_policy or DEFAULT_RETRY_POLICY
        self.extra_headers = dict(config.extra_headers or {})
        self.idempotency_header = config.idempotency_header or DEFAULT_IDEMPOTENCY_HEADER
        self.debug_auth = config.debug_auth
        self.on_request = config.on_request
        self.on_response = config.on_response
        self.http_client = httpx.AsyncClient(
            timeout=self.timeout_ms / 1000,
            transport=config.transport,
        )

        logger.info(
            "placetopay_http_client_initialized",
            base_url=self.base_url,
            timeout_ms=self.timeout_ms,
            max_attempts=self.retry_policy.max_attempts,
        )

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self.http_client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def post(
        self,
        path: str,
        body: Any,
        headers: dict[str, str] | None = None,
        idempotency_key: str | None = None,
        response_type: ResponseType = "json",
    ) -> Any:
        """
        POST ``body`` as JSON to ``path`` with retries.

        Args:
            path: Path appended to the base URL (e.g. "/api/session")
            body: JSON-serializable body
            headers: Per-call headers (override defaults and extra headers)
            idempotency_key: Sent in the configured idempotency header
            response_type: "json" parses the body; "text" returns it raw

        Returns:
            Parsed JSON (empty dict for an empty body) or raw text.

        Raises:
            HttpError: Non-2xx status (after retries for transient statuses)
            InvalidResponseError: Body is not JSON when JSON was expected
            NetworkError: DNS, connection or timeout failure
        """
        call_headers = dict(headers or {})
        if idempotency_key:
            call_headers[self.idempotency_header] = idempotency_key

        async def attempt_once(attempt: int) -> Any:
            return await self._post_once(path, body, attempt, call_headers, response_type)

        return await with_retry(attempt_once, self.retry_policy, logger)

    async def _post_once(
        self,
        path: str,
        body: Any,
        attempt: int,
        headers: dict[str, str],
        response_type: ResponseType,
    ) -> Any:
        url = f"{self.base_url}{path}"
        request_headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            **self.extra_headers,
            **headers,
        }

        if self.on_request:
            await _call_hook(
                self.on_request,
                {"url": url, "body": body, "headers": request_headers, "attempt": attempt},
            )
        self._log_debug_auth(url, body)

        try:
            response = await self.http_client.post(
                url,
                content=json.dumps(body),
                headers=request_headers,
            )
        except httpx.TimeoutException as e:
            logger.error("placetopay_timeout", url=url, attempt=attempt, error=str(e))
            raise NetworkError(
                f"Network error calling PlacetoPay: timeout after {self.timeout_ms}ms"
            ) from e
        except httpx.RequestError as e:
            logger.error("placetopay_network_error", url=url, attempt=attempt, error=str(e))
            raise NetworkError(f"Network error calling PlacetoPay: {e}") from e

        raw_text = response.text
        if response_type == "text" and response.is_success:
            payload: Any = raw_text
        else:
            try:
                payload = json.loads(raw_text) if raw_text else {}
            except ValueError as e:
                logger.error(
                    "placetopay_invalid_response",
                    url=url,
                    status=response.status_code,
                    attempt=attempt,
                    raw_body=raw_text[:_RAW_BODY_LOG_LIMIT],
                )
                raise InvalidResponseError(
                    "Invalid response (not JSON)", response.status_code, raw_text
                ) from e

        if self.on_response:
            await _call_hook(
                self.on_response,
                {
                    "url": url,
                    "status": response.status_code,
                    "body": payload,
                    "raw_body": raw_text,
                    "attempt": attempt,
                },
            )

        if not response.is_success:
            logger.error(
                "placetopay_http_error",
                url=url,
                status=response.status_code,
                attempt=attempt,
                raw_body=raw_text[:_RAW_BODY_LOG_LIMIT],
                **extract_ids(payload),
            )
            message = (
                describe_auth_error(response.status_code, payload, self.base_url, path)
                or describe_http_error(response.status_code, payload, self.base_url, path)
                or f"PlacetoPay responded HTTP {response.status_code}{status_message(payload)}"
            )
            raise HttpError(message, response.status_code, payload)

        return payload

    def _log_debug_auth(self, url: str, body: Any) -> None:
        if not self.debug_auth:
            return

        auth = body.get("auth") if isinstance(body, dict) else None
        if not isinstance(auth, dict):
            logger.debug("placetopay_debug_auth_missing", url=url)
            return

        logger.debug(
            "placetopay_debug_auth",
            url=url,
            seed=auth.get("seed"),
            nonce=auth.get("nonce"),
        )


async def _call_hook(hook, context: dict[str, Any]) -> None:
    result = hook(context)
    if inspect.isawaitable(result):
        await result


def _status_block(body: Any) -> dict[str, Any]:
    if isinstance(body, dict) and isinstance(body.get("status"), dict):
        return body["status"]
    return {}


def status_message(body: Any) -> str:
    message = _status_block(body).get("message")
    if not message and isinstance(body, dict):
        message = body.get("message")
    return f": {message}" if message else ""


def extract_ids(body: Any) -> dict[str, Any]:
    """Pull requestId/reference out of an error body for log correlation."""
    if not isinstance(body, dict):
        return {}

    request_id = body.get("requestId") or _status_block(body).get("requestId")
    reference = body.get("reference")
    if reference is None:
        request = body.get("request")
        payment = request.get("payment") if isinstance(request, dict) else None
        if isinstance(payment, dict):
            reference = payment.get("reference")

    ids = {}
    if request_id is not None:
        ids["request_id"] = request_id
    if reference is not None:
        ids["reference"] = reference
    return ids


def extract_auth_code(body: Any) -> int | None:
    """
    Find an authentication rejection code (100-103) in an error body.

    The code in ``status.message`` takes precedence over ``status.reason``.
    """
    status = _status_block(body)
    candidates: list[int] = []

    message = status.get("message")
    if isinstance(message, str):
        match = _AUTH_CODE_IN_MESSAGE.search(message)
        if match:
            candidates.append(int(match.group(0)))

    reason = status.get("reason")
    if isinstance(reason, bool):
        reason = None
    if isinstance(reason, int):
        candidates.append(reason)
    elif isinstance(reason, str) and reason.strip().lstrip("-").isdigit():
        candidates.append(int(reason))

    for code in candidates:
        if code in AUTH_ERROR_DESCRIPTIONS:
            return code
    return None


def describe_auth_error(status_code: int, body: Any, base_url: str, path: str) -> str | None:
    if status_code != 401:
        return None

    code = extract_auth_code(body)
    if code is None:
        return None

    return (
        f"PlacetoPay rejected authentication (auth code {code}): "
        f"{AUTH_ERROR_DESCRIPTIONS[code]}. host: {base_url}{path}"
    )


def describe_http_error(status_code: int, body: Any, base_url: str, path: str) -> str | None:
    if status_code == 404:
        return (
            f"PlacetoPay responded HTTP 404 (not found). Check baseUrl ({base_url}) "
            f"and path {path} against the right host (checkout vs gateway)."
            f"{status_message(body)}"
        )
    if status_code >= 500:
        return f"PlacetoPay responded HTTP {status_code} (server error).{status_message(body)}"
    if status_code == 400:
        return f"PlacetoPay responded HTTP 400 (bad request).{status_message(body)}"
    return None
