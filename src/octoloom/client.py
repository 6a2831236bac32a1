"""Asynchronous GitHub API client.

This module provides the GitHubClient class. Every call follows the same
chain: build the request, attach credentials, send it, record rate-limit
headers, check the status, parse the body as JSON and return an ApiResponse,
or raise a typed error. Nothing is retried, cached or throttled; callers see
failures immediately.
"""

import ssl
from collections.abc import AsyncIterator, Mapping
from datetime import UTC, datetime as dt
from email.utils import parsedate_to_datetime
from http import HTTPStatus
from typing import Any, Self

import certifi
import httpx
from pydantic import BaseModel

from .auth import AuthStrategy, BasicAuth, NoAuth, OAuthAppAuth, TokenAuth
from .config import GitHubSettings, get_settings
from .constants import (
    API_VERSION_HEADER,
    MAX_PER_PAGE,
    RATE_LIMIT,
    RATE_LIMIT_REMAINING_HEADER,
)
from .exceptions import (
    APIError,
    AuthenticationError,
    AuthError,
    ClientError,
    EmptyResponseError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    OctoloomError,
    OctoloomRequestError,
    ParseError,
    RateLimitError,
    ServerError,
    TimeoutError,
    UnprocessableEntityError,
    ValidationError,
)
from .log_config import logger
from .models import ApiResponse, ErrorBody, RateLimit, RateLimitOverview
from .pagination import next_page_url
from .resources import IssuesClient, ReposClient, SearchClient, UsersClient
from .types import RequestData

_STATUS_ERRORS: dict[int, type[ClientError]] = {
    HTTPStatus.UNAUTHORIZED: AuthenticationError,
    HTTPStatus.FORBIDDEN: ForbiddenError,
    HTTPStatus.NOT_FOUND: NotFoundError,
    HTTPStatus.UNPROCESSABLE_ENTITY: UnprocessableEntityError,
}
_MAX_ERROR_TEXT = 500


class GitHubClient:
    """Asynchronous client for the GitHub REST API.

    Authentication Strategy Resolution:
    - If `auth_strategy` is explicitly provided, it is used.
    - Otherwise a `token` argument, then `username`/`password` arguments,
      then the PAT, Basic and OAuth app credentials from `settings`
      (loaded from ``GITHUB_*`` environment variables or a .env file).
    - With no credentials at all, requests are anonymous.

    Typical usage:
    ```python
    async with GitHubClient() as gh:
        user = await gh.users.get("octocat")
        async for issue in gh.issues.iterate("octocat", "Hello-World"):
            print(issue.title)
    ```

    Attributes:
        rate_limit: The rate-limit window reported by the most recent response,
            or None before the first response.
        users, repos, issues, search: Resource clients.
        _settings: The resolved settings for this client instance.
        _auth_strategy: Authentication strategy instance.
        _http_client: The underlying httpx.AsyncClient.
        _should_close_client: True if this instance owns `_http_client`.
    """

    def __init__(
        self,
        settings: GitHubSettings | None = None,
        auth_strategy: AuthStrategy | None = None,
        *,
        token: str | None = None,
        username: str | None = None,
        password: str | None = None,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the GitHubClient.

        Args:
            settings: Optional settings. If None, global settings are loaded via
                `octoloom.config.get_settings()`.
            auth_strategy: Optional explicit authentication strategy.
            token: Personal access token; takes precedence over `settings.pat`.
            username: Basic auth username; used together with `password`.
            password: Basic auth password or personal access token.
            base_url: API root; defaults to `settings.base_url`.
            http_client: Optional pre-configured httpx.AsyncClient. It is not
                closed by `aclose()`.
        """
        self._settings: GitHubSettings = settings or get_settings()
        self._base_url: str = (base_url or self._settings.base_url).rstrip("/")

        self._auth_strategy: AuthStrategy = auth_strategy or self._resolve_auth(
            token=token, username=username, password=password
        )
        logger.info(
            f"Using authentication strategy: {type(self._auth_strategy).__name__}"
        )

        self._should_close_client = http_client is None
        self._http_client = http_client or self._create_default_http_client()

        self.rate_limit: RateLimit | None = None

        self._users = UsersClient(api_client=self)
        self._repos = ReposClient(api_client=self)
        self._issues = IssuesClient(api_client=self)
        self._search = SearchClient(api_client=self)

        logger.debug(f"GitHubClient initialized for {self._base_url}")

    def _resolve_auth(
        self,
        *,
        token: str | None,
        username: str | None,
        password: str | None,
    ) -> AuthStrategy:
        """Pick an auth strategy from explicit arguments, then settings."""
        if token:
            logger.info("Using token authentication (token passed directly).")
            return TokenAuth(token=token)
        if username or password:
            logger.info("Using Basic authentication (credentials passed directly).")
            return BasicAuth(username=username, password=password)

        settings = self._settings
        if settings.pat:
            logger.info("Using token authentication from settings.")
            return TokenAuth(token=settings.pat)
        if settings.username and settings.password:
            logger.info("Using Basic authentication from settings.")
            return BasicAuth(username=settings.username, password=settings.password)
        if settings.client_id and settings.client_secret:
            logger.info("Using OAuth app authentication from settings.")
            return OAuthAppAuth(
                client_id=settings.client_id, client_secret=settings.client_secret
            )
        logger.info("No authentication credentials found, using NoAuth.")
        return NoAuth()

    def _create_default_http_client(self) -> httpx.AsyncClient:
        """Create a default httpx.AsyncClient with configured settings.

        Returns:
            httpx.AsyncClient: Client verifying TLS against the certifi bundle.
        """
        try:
            verify_ssl: ssl.SSLContext | bool = ssl.create_default_context(
                cafile=certifi.where()
            )
            logger.debug("Using certifi SSL context.")
        except (OSError, ssl.SSLError):
            verify_ssl = True
            logger.warning(
                "certifi bundle failed to load. Using default SSL verification."
            )

        return httpx.AsyncClient(
            timeout=self._settings.request_timeout,
            verify=verify_ssl,
            headers={"User-Agent": self._settings.user_agent},
            follow_redirects=True,
        )

    @property
    def users(self) -> UsersClient:
        return self._users

    @property
    def repos(self) -> ReposClient:
        return self._repos

    @property
    def issues(self) -> IssuesClient:
        return self._issues

    @property
    def search(self) -> SearchClient:
        return self._search

    def _build_url(self, path: str) -> str:
        """Join `path` onto the base URL. Absolute URLs are returned unchanged."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self._base_url}/{path.lstrip('/')}"

    def _build_headers(self, accept: str | None) -> dict[str, str]:
        return {
            "Accept": accept or self._settings.media_type,
            API_VERSION_HEADER: self._settings.api_version,
            "User-Agent": self._settings.user_agent,
        }

    def _run_pre_request_hooks(self, request_data: RequestData) -> None:
        if not self._settings.pre_request_hooks:
            return
        hook_params: dict[str, Any] | None = (
            dict(request_data.params) if request_data.params is not None else None
        )
        hook_headers = httpx.Headers(request_data.headers)
        logger.debug(
            f"Executing {len(self._settings.pre_request_hooks)} pre-request hooks "
            f"for {request_data.method} {request_data.url}"
        )
        for hook in self._settings.pre_request_hooks:
            try:
                hook(request_data.method, request_data.url, hook_params, hook_headers)
            except Exception as e:
                logger.error(
                    f"Error executing pre-request hook {getattr(hook, '__name__', str(hook))}: {e}"
                )
        request_data.params = hook_params
        request_data.headers = dict(hook_headers.items())

    def _run_post_request_hooks(
        self, response: httpx.Response, api_response: ApiResponse
    ) -> None:
        for hook in self._settings.post_request_hooks:
            try:
                hook(response, api_response)
            except Exception as e:
                logger.error(
                    f"Error executing post-request hook {getattr(hook, '__name__', str(hook))}: {e}"
                )

    def _record_rate_limit(self, response: httpx.Response) -> None:
        snapshot = RateLimit.from_headers(response.headers)
        if snapshot is not None:
            self.rate_limit = snapshot
            logger.debug(
                f"Rate limit ({snapshot.resource or 'core'}): "
                f"{snapshot.remaining}/{snapshot.limit}, resets at {snapshot.reset.isoformat()}"
            )

    @staticmethod
    def _parse_retry_after(response: httpx.Response) -> float | None:
        """Read `Retry-After` as seconds; it may be an integer or an HTTP date."""
        header = response.headers.get("Retry-After")
        if not header:
            return None
        if header.isdigit():
            return float(header)
        try:
            retry_dt = parsedate_to_datetime(header)
        except (TypeError, ValueError):
            logger.warning(f"Could not parse Retry-After header '{header}'")
            return None
        if retry_dt.tzinfo is None:
            retry_dt = retry_dt.replace(tzinfo=UTC)
        return max(0.0, (retry_dt - dt.now(UTC)).total_seconds())

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Raise the APIError subclass matching an error response.

        GitHub's JSON error body supplies the message; otherwise the raw body
        text or the reason phrase is used.

        Raises:
            APIError: A 3xx the HTTP client did not follow.
            RateLimitError: 429, or 403 with no requests remaining.
            ClientError: Other 4xx (or a more specific subclass).
            ServerError: 5xx.
        """
        status = response.status_code
        if status < HTTPStatus.MULTIPLE_CHOICES:
            return

        error_body = ErrorBody()
        try:
            payload = response.json()
            if isinstance(payload, dict):
                error_body = ErrorBody.model_validate(payload)
        except ValueError:
            text = response.text.strip()
            if text:
                error_body = ErrorBody(message=text[:_MAX_ERROR_TEXT])

        api_message = error_body.message or response.reason_phrase or None
        lines = [f"GitHub API request failed [{status}]"]
        if api_message:
            lines.append(api_message)
        if error_body.documentation_url:
            lines.append(f"<{error_body.documentation_url}>")
        message = "\n".join(lines)

        common: dict[str, Any] = {
            "status_code": status,
            "api_message": api_message,
            "documentation_url": error_body.documentation_url,
            "errors": error_body.errors,
            "response": response,
            "request": response.request,
        }

        if status < HTTPStatus.BAD_REQUEST:
            logger.error(f"Redirect {status} was not followed: {response.request.url}")
            raise APIError(message, **common)

        exhausted = response.headers.get(RATE_LIMIT_REMAINING_HEADER) == "0"
        if status == HTTPStatus.TOO_MANY_REQUESTS or (
            status == HTTPStatus.FORBIDDEN and exhausted
        ):
            snapshot = RateLimit.from_headers(response.headers)
            logger.warning(f"Rate limit exceeded for {response.request.url}")
            raise RateLimitError(
                message,
                reset_at=snapshot.reset if snapshot else None,
                retry_after=self._parse_retry_after(response),
                **common,
            )

        logger.error(f"Request failed with status {status}: {response.request.url}")
        if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            raise ServerError(message, **common)
        raise _STATUS_ERRORS.get(status, ClientError)(message, **common)

    def _parse_content(
        self,
        response: httpx.Response,
        expected_model: type[BaseModel] | None,
    ) -> Any:
        """Decode a successful response body.

        Raises:
            EmptyResponseError: If the body is empty (other than for 204).
            ParseError: If the body is not JSON or does not fit `expected_model`.
        """
        if response.status_code == HTTPStatus.NO_CONTENT:
            return None
        if not response.content.strip():
            raise EmptyResponseError(
                "API returned an empty body", response=response
            )

        content_type = response.headers.get("Content-Type", "")
        if "json" not in content_type.lower():
            raise ParseError(
                f"API did not return JSON (Content-Type: {content_type or 'missing'})",
                response=response,
            )
        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(
                f"Could not decode JSON body: {e}", response=response
            ) from e

        if expected_model is None:
            return data
        try:
            if isinstance(data, list):
                return [expected_model.model_validate(item) for item in data]
            return expected_model.model_validate(data)
        except ValueError as e:
            raise ParseError(
                f"Response did not match {expected_model.__name__}: {e}",
                response=response,
            ) from e

    async def _send(self, request_data: RequestData) -> httpx.Response:
        """Authenticate and send one request, translating transport errors."""
        request = request_data.build_request(self._http_client)
        try:
            await self._auth_strategy.async_authenticate(request)
        except OctoloomError:
            raise
        except Exception as e:
            logger.error(f"Authentication failed before request: {e}")
            raise AuthError(f"Could not authenticate request: {e}") from e

        logger.debug(f"Sending request: {request.method} {request.url}")
        try:
            response = await self._http_client.send(request)
        except httpx.TimeoutException as e:
            logger.error(f"Request timed out: {request.url}")
            raise TimeoutError("Request timed out", request=request) from e
        except httpx.NetworkError as e:
            logger.error(f"Network error occurred for {request.url}: {e}")
            raise NetworkError(
                f"Network error for {request.url}: {e}", request=request
            ) from e
        except httpx.RequestError as e:
            logger.error(f"HTTP request error for {request.url}: {e}")
            raise OctoloomRequestError(
                f"HTTP request error for {request.url}: {e}", request=request
            ) from e

        logger.debug(f"Received response: {response.status_code} for {request.url}")
        return response

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any | None = None,
        accept: str | None = None,
        expected_model: type[BaseModel] | None = None,
    ) -> ApiResponse:
        """Perform one request against the GitHub API.

        Args:
            method: HTTP method (GET, POST, PATCH, PUT, DELETE).
            path: Path relative to the base URL, or an absolute URL.
            params: Query parameters.
            json: JSON request body.
            accept: Media type for the Accept header, overriding the default.
            expected_model: Optional Pydantic model to validate the body into.
                A JSON array is validated item by item.

        Returns:
            ApiResponse: The decoded content together with status and headers.

        Raises:
            APIError: For 4xx/5xx responses (see `_raise_for_status`).
            ParseError: If the body is empty, not JSON, or does not fit the model.
            TimeoutError, NetworkError, OctoloomRequestError: Transport failures.
        """
        request_data = RequestData(
            method=method.upper(),
            url=self._build_url(path),
            params=params,
            json_data=json,
            headers=self._build_headers(accept),
        )
        self._run_pre_request_hooks(request_data)

        response = await self._send(request_data)
        self._record_rate_limit(response)
        self._raise_for_status(response)

        api_response = ApiResponse(
            content=self._parse_content(response, expected_model),
            path=path,
            status_code=response.status_code,
            headers=dict(response.headers.items()),
            response=response,
        )
        self._run_post_request_hooks(response, api_response)
        return api_response

    async def get(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("POST", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("PATCH", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("DELETE", path, **kwargs)

    async def get_json(self, path: str, **kwargs: Any) -> Any:
        """GET `path` and return only the decoded content."""
        return (await self.request("GET", path, **kwargs)).content

    async def paginate(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        per_page: int | None = None,
        max_pages: int | None = None,
        expected_model: type[BaseModel] | None = None,
    ) -> AsyncIterator[Any]:
        """Iterate over every item of a paginated listing.

        Pages are followed through the ``rel="next"`` Link header. A page that
        is a JSON array yields its elements; a search result object yields its
        ``items``.

        Args:
            path: Listing path or absolute URL.
            params: Query parameters for the first page. Later pages reuse the
                query GitHub encodes into the next link.
            per_page: Page size, 1 to 100. Defaults to `settings.per_page`.
            max_pages: Stop after this many pages.
            expected_model: Optional Pydantic model for each item.

        Raises:
            ValidationError: If `per_page` or `max_pages` is out of range.
            ParseError: If a page is neither an array nor has an ``items`` list.
        """
        page_size = per_page if per_page is not None else self._settings.per_page
        if not 1 <= page_size <= MAX_PER_PAGE:
            raise ValidationError(f"per_page must be between 1 and {MAX_PER_PAGE}")
        if max_pages is not None and max_pages < 1:
            raise ValidationError("max_pages must be at least 1")

        first_params: dict[str, Any] = dict(params or {})
        first_params["per_page"] = page_size

        url: str | None = path
        page_params: dict[str, Any] | None = first_params
        pages = 0
        while url:
            logger.debug(f"Fetching page {pages + 1} of {path}")
            api_response = await self.request("GET", url, params=page_params)
            pages += 1

            content = api_response.content
            if isinstance(content, dict) and isinstance(content.get("items"), list):
                items = content["items"]
            elif isinstance(content, list):
                items = content
            else:
                raise ParseError(
                    f"Expected a JSON array or search result from {url}, "
                    f"got {type(content).__name__}",
                    response=api_response.response,
                )

            for item in items:
                if expected_model is None:
                    yield item
                    continue
                try:
                    yield expected_model.model_validate(item)
                except ValueError as e:
                    raise ParseError(
                        f"Item did not match {expected_model.__name__}: {e}",
                        response=api_response.response,
                    ) from e

            if max_pages is not None and pages >= max_pages:
                logger.debug(f"Reached max_pages={max_pages} for {path}")
                break
            assert api_response.response is not None
            url = next_page_url(api_response.response)
            page_params = None

    async def get_rate_limit(self) -> RateLimitOverview:
        """Fetch the current rate-limit status for every resource bucket.

        Querying ``/rate_limit`` does not count against the primary limit. The
        client does not wait for a reset; `RateLimit.seconds_until_reset()`
        tells a caller how long to wait if it wants to.
        """
        api_response = await self.request(
            "GET", RATE_LIMIT, expected_model=RateLimitOverview
        )
        return api_response.content

    async def aclose(self) -> None:
        """Close the underlying HTTP client (if owned) and the auth strategy."""
        if self._should_close_client and not self._http_client.is_closed:
            await self._http_client.aclose()
            logger.debug(f"GitHubClient internal HTTP client closed. Client ID: {id(self)}.")
        await self._auth_strategy.async_close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        await self.aclose()

