"""OAuth engine: PKCE and device authorization flows, refresh and access.

Purpose
-------
Obtain, persist and refresh OAuth tokens for the vendors listed in
``OAUTH_PROVIDERS`` and hand out a bearer credential per request. Anthropic
uses the authorization-code flow with PKCE; GitHub Copilot uses the device
flow followed by a secondary token exchange on every access.

Concurrency
-----------
Every network call, storage access and polling wait is awaited. The engine
does not serialize storage access; concurrent ``get_access_token`` calls on
an expired token may each refresh.

Logging
-------
Events go to ``providers.oauth``. Token values, device codes and verifiers
are never logged.

Testing
-------
The HTTP client, clock and sleep function are injectable so flows run
against ``httpx.MockTransport`` with a fake clock and no real waiting.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

import httpx

from ...base.errors import ErrorCode, OAuthErrorType, ProviderError, wrap_exception
from ...base.http import get_httpx_client
from ...base.logging import LogContext, get_logger, log_event
from ...config.defaults import (
    OAUTH_DEFAULT_POLL_INTERVAL_SECONDS,
    OAUTH_DEVICE_POLL_DEADLINE_SECONDS,
    OAUTH_REFRESH_MARGIN_SECONDS,
    OAUTH_SLOW_DOWN_INCREMENT_SECONDS,
)
from .config import OAuthConfig
from .copilot import exchange_copilot_token
from .device import DeviceAuthorization, DeviceFlowState
from .pkce import AuthorizationRequest, build_authorization_url, generate_code_verifier
from .providers import OAuthProviderConfig, get_oauth_provider
from .token import OAuthToken
from .token_errors import oauth_error, parse_token_error, refresh_error_type

_DEVICE_GRANT = "urn:ietf:params:oauth:grant-type:device_code"
_JSON_ACCEPT = {"Accept": "application/json"}


def _json_body(response: httpx.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


class OAuthEngine:
    """Drive OAuth flows for one provider.

    Parameters
    ----------
    config:
        Provider key, storage and client overrides.
    http_client:
        Optional ``httpx.AsyncClient``; defaults to the pooled ``oauth`` client.
    clock:
        Returns the current unix time in seconds.
    sleep:
        Awaitable sleep used between device polls.

    Raises
    ------
    ProviderError
        ``invalid_client`` when ``config.provider`` has no OAuth entry.
    """

    def __init__(
        self,
        config: OAuthConfig,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.config = config
        self.provider_config: OAuthProviderConfig = get_oauth_provider(config.provider)
        self._http_client = http_client
        self._clock = clock
        self._sleep = sleep
        self._logger = get_logger("providers.oauth")

    # ----- Basic info -----
    @property
    def provider(self) -> str:
        return self.config.provider

    @property
    def client_id(self) -> str:
        return self.config.client_id or self.provider_config.default_client_id

    @property
    def scopes(self) -> List[str]:
        return list(self.config.scopes or self.provider_config.default_scopes)

    def _http(self) -> httpx.AsyncClient:
        return self._http_client if self._http_client is not None else get_httpx_client(None, "oauth")

    def _ctx(self, operation: str) -> LogContext:
        return LogContext(provider=self.provider, operation=operation)

    def _with_secret(self, body: Dict[str, Any]) -> Dict[str, Any]:
        if self.config.client_secret:
            body["client_secret"] = self.config.client_secret
        return body

    async def _request(self, method: str, url: str, operation: str, **kwargs: Any) -> httpx.Response:
        """Send one request, converting transport failures into ``ProviderError``."""
        try:
            return await self._http().request(method, url, **kwargs)
        except httpx.TransportError as exc:
            error = wrap_exception(exc, provider=self.provider, operation=operation)
            log_event(self._logger, "oauth.error", self._ctx(operation), level=logging.ERROR, error_code=error.code)
            raise error from exc

    def _request_failed(self, response: httpx.Response, what: str) -> ProviderError:
        return ProviderError(
            code=ErrorCode.REQUEST_FAILED,
            message=f"{what} failed: {response.status_code}",
            provider=self.provider,
            http_status=response.status_code,
        )

    # ----- Flow initiation -----
    async def initiate_auth(self) -> Union[AuthorizationRequest, DeviceAuthorization]:
        """Start the provider's flow.

        Returns an ``AuthorizationRequest`` (PKCE) whose URL the user opens,
        or a ``DeviceAuthorization`` whose user code the user enters.
        """
        cfg = self.provider_config
        if cfg.flow == "pkce":
            verifier = generate_code_verifier()
            url = build_authorization_url(
                cfg.auth_url,
                client_id=self.client_id,
                redirect_uri=cfg.redirect_uri or "",
                scopes=self.scopes,
                code_verifier=verifier,
            )
            log_event(self._logger, "oauth.initiate", self._ctx("authorize"), flow="pkce")
            return AuthorizationRequest(url=url, code_verifier=verifier)

        response = await self._request(
            "POST",
            cfg.auth_url,
            "device authorization",
            data={"client_id": self.client_id, "scope": " ".join(self.scopes)},
            headers=_JSON_ACCEPT,
        )
        if response.status_code >= 400:
            raise self._request_failed(response, "Device authorization")
        device = DeviceAuthorization.from_response(response.json())
        log_event(
            self._logger,
            "oauth.initiate",
            self._ctx("authorize"),
            flow="device",
            verification_url=device.verification_url,
            interval=device.interval,
            expires_in=device.expires_in,
        )
        return device

    # ----- Code exchange -----
    async def complete_auth(self, code: str, code_verifier: Optional[str] = None) -> OAuthToken:
        """Exchange an authorization code for tokens and persist them.

        ``code`` may carry the state as ``"<code>#<state>"`` (the form the
        Anthropic callback page displays).
        """
        cfg = self.provider_config
        auth_code, _, state = code.partition("#")
        if cfg.flow == "pkce":
            body: Dict[str, Any] = {
                "code": auth_code,
                "grant_type": "authorization_code",
                "client_id": self.client_id,
                "redirect_uri": cfg.redirect_uri,
                "code_verifier": code_verifier,
            }
            if state:
                body["state"] = state
            response = await self._request("POST", cfg.token_url, "code exchange", json=self._with_secret(body))
        else:
            body = {"grant_type": "authorization_code", "client_id": self.client_id, "code": auth_code}
            response = await self._request(
                "POST", cfg.token_url, "code exchange", data=self._with_secret(body), headers=_JSON_ACCEPT
            )
        payload = _json_body(response)
        if response.status_code >= 400 or "access_token" not in payload:
            error_type, description = parse_token_error(payload)
            log_event(
                self._logger,
                "oauth.exchange.error",
                self._ctx("exchange"),
                level=logging.ERROR,
                error_code=error_type,
                http_status=response.status_code,
            )
            raise oauth_error(
                self.provider,
                error_type,
                f"Token exchange failed: {description or error_type}",
                http_status=response.status_code,
                description=description,
            )
        token = OAuthToken.from_token_response(payload, now=self._clock(), fallback_scopes=self.scopes)
        await self.config.token_storage.store_tokens(self.provider, token)
        log_event(self._logger, "oauth.exchange.success", self._ctx("exchange"), expires_at=token.expires_at)
        return token

    # ----- Device flow -----
    async def check_device_code_status(self, device_code: str) -> OAuthToken:
        """Poll the token endpoint once.

        Returns the token when the user has approved; otherwise raises a
        ``ProviderError`` whose code is the vendor's OAuth error type
        (``authorization_pending``, ``slow_down``, ``access_denied``, ...).
        """
        cfg = self.provider_config
        body = {"client_id": self.client_id, "device_code": device_code, "grant_type": _DEVICE_GRANT}
        if cfg.device_poll_json:
            headers = {"Accept": "application/json", "Content-Type": "application/json"}
            if cfg.user_agent:
                headers["User-Agent"] = cfg.user_agent
            response = await self._request("POST", cfg.token_url, "device poll", json=body, headers=headers)
        else:
            response = await self._request("POST", cfg.token_url, "device poll", data=body, headers=_JSON_ACCEPT)
        if response.status_code >= 400:
            raise self._request_failed(response, "Device code check")
        payload = _json_body(response)
        if payload.get("access_token"):
            return OAuthToken.from_token_response(payload, now=self._clock(), fallback_scopes=self.scopes)
        error_type, description = parse_token_error(payload)
        raise oauth_error(self.provider, error_type, description or error_type, description=description)

    async def poll_for_device_auth(
        self, device_code: str, interval: int = OAUTH_DEFAULT_POLL_INTERVAL_SECONDS
    ) -> OAuthToken:
        """Poll until the user approves, fails, or the 15-minute deadline passes.

        ``slow_down`` waits ``interval + 5`` seconds for that attempt only.
        The approved token is persisted before it is returned.

        Raises:
            ProviderError: the vendor's terminal OAuth error, or
                ``expired_token`` once the deadline passes.
        """
        ctx = self._ctx("device_poll")
        deadline = self._clock() + OAUTH_DEVICE_POLL_DEADLINE_SECONDS
        attempt = 0
        while self._clock() < deadline:
            attempt += 1
            try:
                token = await self.check_device_code_status(device_code)
            except ProviderError as exc:
                if exc.code == OAuthErrorType.AUTHORIZATION_PENDING.value:
                    log_event(self._logger, "oauth.device.poll", ctx, level=logging.DEBUG, attempt=attempt, state=DeviceFlowState.PENDING.value)
                    await self._sleep(interval)
                    continue
                if exc.code == OAuthErrorType.SLOW_DOWN.value:
                    log_event(self._logger, "oauth.device.poll", ctx, level=logging.DEBUG, attempt=attempt, state=DeviceFlowState.PENDING.value, slow_down=True)
                    await self._sleep(interval + OAUTH_SLOW_DOWN_INCREMENT_SECONDS)
                    continue
                log_event(self._logger, "oauth.device.poll", ctx, level=logging.WARNING, attempt=attempt, state=DeviceFlowState.FAILED.value, error_code=exc.code)
                raise
            await self.config.token_storage.store_tokens(self.provider, token)
            log_event(self._logger, "oauth.device.poll", ctx, attempt=attempt, state=DeviceFlowState.SUCCESS.value)
            return token
        log_event(self._logger, "oauth.device.poll", ctx, level=logging.WARNING, attempt=attempt, state=DeviceFlowState.EXPIRED.value)
        raise oauth_error(self.provider, OAuthErrorType.EXPIRED_TOKEN.value, "Device authorization timed out")

    # ----- Access -----
    async def get_access_token(self) -> str:
        """Return a bearer value usable right now.

        For Copilot this is a freshly exchanged API token; for other vendors
        the stored access token, refreshed first when it is within
        ``OAUTH_REFRESH_MARGIN_SECONDS`` of expiry.

        Raises:
            ProviderError: ``access_denied`` without stored tokens,
                ``token_expired`` when the token cannot be refreshed, or the
                refresh failure.
        """
        token = await self.config.token_storage.get_tokens(self.provider)
        if token is None:
            raise oauth_error(self.provider, OAuthErrorType.ACCESS_DENIED.value, "No OAuth tokens found")
        secondary_url = self.provider_config.secondary_token_url
        if secondary_url:
            try:
                return await exchange_copilot_token(self._http(), secondary_url, token.access_token)
            except httpx.TransportError as exc:
                raise wrap_exception(exc, provider=self.provider, operation="copilot token exchange") from exc
        if token.is_valid(self._clock(), OAUTH_REFRESH_MARGIN_SECONDS):
            return token.access_token
        if self.config.auto_refresh and token.refresh_token:
            refreshed = await self.refresh_token(token)
            return refreshed.access_token
        raise oauth_error(self.provider, OAuthErrorType.TOKEN_EXPIRED.value, "OAuth token expired")

    async def refresh_token(self, token: Optional[OAuthToken] = None) -> OAuthToken:
        """Refresh ``token`` (default: the stored one) and persist the result."""
        if token is None:
            token = await self.config.token_storage.get_tokens(self.provider)
        if token is None or not token.refresh_token:
            raise oauth_error(self.provider, OAuthErrorType.TOKEN_EXPIRED.value, "No refresh token available")
        cfg = self.provider_config
        ctx = self._ctx("refresh")
        log_event(self._logger, "oauth.refresh.start", ctx)
        body = self._with_secret(
            {"grant_type": "refresh_token", "client_id": self.client_id, "refresh_token": token.refresh_token}
        )
        if cfg.flow == "pkce":
            response = await self._request("POST", cfg.token_url, "token refresh", json=body)
        else:
            response = await self._request("POST", cfg.token_url, "token refresh", data=body, headers=_JSON_ACCEPT)
        payload = _json_body(response)
        if response.status_code >= 400 or not payload.get("access_token"):
            error_type = refresh_error_type(payload)
            log_event(
                self._logger,
                "oauth.refresh.error",
                ctx,
                level=logging.ERROR,
                error_code=error_type,
                http_status=response.status_code,
            )
            raise oauth_error(
                self.provider,
                error_type,
                f"Token refresh failed: {response.status_code}",
                http_status=response.status_code,
                description=payload.get("error_description"),
            )
        refreshed = OAuthToken.from_token_response(
            payload,
            now=self._clock(),
            fallback_scopes=token.scopes or self.scopes,
            fallback_refresh_token=token.refresh_token,
        )
        await self.config.token_storage.store_tokens(self.provider, refreshed)
        log_event(self._logger, "oauth.refresh.success", ctx, expires_at=refreshed.expires_at)
        return refreshed

    # ----- Storage -----
    async def has_tokens(self) -> bool:
        return await self.config.token_storage.has_tokens(self.provider)

    async def revoke(self) -> None:
        """Forget the stored tokens; the vendor is not contacted."""
        await self.config.token_storage.remove_tokens(self.provider)
        log_event(self._logger, "oauth.revoke", self._ctx("revoke"))


__all__ = ["OAuthEngine"]
