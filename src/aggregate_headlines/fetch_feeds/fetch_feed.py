"""Feed retrieval through a pluggable transport."""

import asyncio
import inspect
import logging
from concurrent.futures import Executor
from typing import Awaitable, Callable, Union

import httpx
import requests

from aggregate_headlines.models import Source

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_USER_AGENT = "aggregate-headlines/1.0 (RSS reader)"
FEED_ACCEPT = "application/rss+xml, application/atom+xml, application/xml, text/xml"

HTTPX_CLIENT = "httpx"
REQUESTS_CLIENT = "requests"

# (url, timeout_seconds) -> body. Either a coroutine function or a blocking
# callable; failures must raise.
Transport = Callable[[str, float], Union[str, bytes, Awaitable[Union[str, bytes]]]]


class FetchError(Exception):
    """A feed could not be retrieved.

    kind is one of "status", "network" or "timeout"; status carries the HTTP
    code for "status" failures.
    """

    def __init__(self, kind: str, message: str, status: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.status = status

    def __repr__(self) -> str:
        return f"FetchError(kind={self.kind!r}, status={self.status!r}, message={str(self)!r})"


async def httpx_transport(
    url: str,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    user_agent: str = DEFAULT_USER_AGENT,
) -> bytes:
    """Default transport: a non-blocking GET with httpx."""
    try:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            headers={"User-Agent": user_agent, "Accept": FEED_ACCEPT},
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.TimeoutException as e:
        raise FetchError("timeout", f"Timed out fetching {url}") from e
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        raise FetchError("status", f"HTTP {status} for {url}", status=status) from e
    except httpx.HTTPError as e:
        raise FetchError("network", f"Request failed for {url}: {e}") from e
    return response.content


def requests_transport(
    url: str,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    user_agent: str = DEFAULT_USER_AGENT,
) -> bytes:
    """Blocking GET with requests."""
    try:
        response = requests.get(
            url,
            timeout=timeout,
            headers={"User-Agent": user_agent, "Accept": FEED_ACCEPT},
        )
        response.raise_for_status()
    except requests.Timeout as e:
        raise FetchError("timeout", f"Timed out fetching {url}") from e
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise FetchError("status", f"HTTP {status} for {url}", status=status) from e
    except requests.RequestException as e:
        raise FetchError("network", f"Request failed for {url}: {e}") from e
    return response.content


def make_transport(client: str = HTTPX_CLIENT, user_agent: str = DEFAULT_USER_AGENT) -> Transport:
    """Build the transport named by client ("httpx" or "requests")."""
    if client == HTTPX_CLIENT:

        async def transport(url: str, timeout: float) -> bytes:
            return await httpx_transport(url, timeout=timeout, user_agent=user_agent)

    elif client == REQUESTS_CLIENT:

        def transport(url: str, timeout: float) -> bytes:
            return requests_transport(url, timeout=timeout, user_agent=user_agent)

    else:
        raise ValueError(f"Unknown fetch client: {client!r}")

    return transport


def is_async_transport(transport: Transport) -> bool:
    return inspect.iscoroutinefunction(transport)


async def fetch_feed(
    source: Source,
    prior_delay: float = 0.0,
    transport: Transport | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    executor: Executor | None = None,
) -> Union[str, bytes]:
    """Fetch the raw feed document for a source.

    Waits prior_delay seconds first so dispatched sources do not all hit the
    network at once. Coroutine transports are awaited directly; blocking ones
    run on executor, which callers fetching many sources at once should size
    to the source count so no fetch waits for a free worker. The call is cut
    off after timeout seconds. Every failure surfaces as FetchError.
    """
    if prior_delay > 0:
        await asyncio.sleep(prior_delay)

    transport = transport or httpx_transport
    logger.debug("Fetching %s (%s)", source.id, source.url)

    if is_async_transport(transport):
        pending = transport(source.url, timeout)
    else:
        loop = asyncio.get_running_loop()
        pending = loop.run_in_executor(executor, transport, source.url, timeout)

    try:
        body = await asyncio.wait_for(pending, timeout=timeout)
    except FetchError:
        raise
    except asyncio.TimeoutError as e:
        raise FetchError("timeout", f"Timed out after {timeout}s fetching {source.url}") from e
    except Exception as e:
        raise FetchError("network", f"Transport failed for {source.url}: {e}") from e

    if not isinstance(body, (str, bytes)):
        raise FetchError("network", f"Malformed response for {source.url}: {type(body).__name__}")

    return body
