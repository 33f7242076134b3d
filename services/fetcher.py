"""
Page Fetch Service

Fetches the HTML for a recipe URL with a bounded time, redirect and size
budget. Transport failures are classified into typed faults so the caller can
tell "could not reach the site" apart from "the site answered with an error".
Nothing is retried.
"""

import errno
import logging
import socket
import ssl
import time
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urljoin

import requests

from constants import (
    FAULT_CONNECTION_REFUSED,
    FAULT_CONNECTION_RESET,
    FAULT_DNS_FAILURE,
    FAULT_HOST_UNREACHABLE,
    FAULT_TIMEOUT,
    FAULT_TLS_ERROR,
    IMPORT_ACCEPT,
    IMPORT_MAX_REDIRECTS,
    IMPORT_MAX_RESPONSE_SIZE,
    IMPORT_TIMEOUT,
    IMPORT_USER_AGENT,
)

logger = logging.getLogger(__name__)


class ImportFault(Exception):
    """Base class for failures fetching a page to import."""

    def __init__(self, message, url=None):
        super().__init__(message)
        self.url = url


class NetworkFault(ImportFault):
    """The origin could not be reached (or could not be trusted)."""

    def __init__(self, reason, url=None, detail=None):
        self.reason = reason
        message = f"Network fault ({reason})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, url)


class OriginHttpFault(ImportFault):
    """The origin answered with a non-success HTTP status."""

    def __init__(self, status, url=None):
        self.status = status
        super().__init__(f"Origin returned HTTP {status}", url)


class UnknownFetchFault(ImportFault):
    """Any fetch failure that does not fit the other kinds."""
    pass


@dataclass(frozen=True)
class FetchedPage:
    """Raw page body plus the URL it was finally served from."""
    url: str
    content: bytes
    status_code: int
    encoding: Optional[str] = None


# ============================================
# FAULT CLASSIFICATION
# ============================================

# Message fragments used when the exception chain carries no typed cause
_MESSAGE_HINTS = (
    (FAULT_TLS_ERROR, ('certificate', 'ssl', 'tls')),
    (FAULT_DNS_FAILURE, ('name or service not known', 'nodename nor servname',
                         'getaddrinfo failed', 'failed to resolve',
                         'temporary failure in name resolution')),
    (FAULT_CONNECTION_REFUSED, ('connection refused', 'actively refused')),
    (FAULT_CONNECTION_RESET, ('connection reset', 'connection aborted',
                              'remote end closed connection')),
    (FAULT_HOST_UNREACHABLE, ('no route to host', 'host is unreachable',
                              'network is unreachable')),
    (FAULT_TIMEOUT, ('timed out', 'timeout')),
)

_UNREACHABLE_ERRNOS = {errno.EHOSTUNREACH, errno.ENETUNREACH}


def _iter_causes(exc):
    """Walk an exception and everything it wraps, outermost first."""
    seen = set()
    pending = [exc]
    while pending:
        current = pending.pop(0)
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))
        yield current

        reason = getattr(current, 'reason', None)
        if isinstance(reason, BaseException):
            pending.append(reason)
        pending.extend(arg for arg in current.args if isinstance(arg, BaseException))
        pending.append(current.__cause__)
        pending.append(current.__context__)


def _reason_for_cause(cause):
    # ssl errors are OSErrors too, so they go first
    if isinstance(cause, ssl.SSLError):
        return FAULT_TLS_ERROR
    if isinstance(cause, socket.gaierror):
        return FAULT_DNS_FAILURE
    if isinstance(cause, ConnectionRefusedError):
        return FAULT_CONNECTION_REFUSED
    if isinstance(cause, (ConnectionResetError, ConnectionAbortedError)):
        return FAULT_CONNECTION_RESET
    if isinstance(cause, TimeoutError):
        return FAULT_TIMEOUT
    if isinstance(cause, OSError) and cause.errno in _UNREACHABLE_ERRNOS:
        return FAULT_HOST_UNREACHABLE
    return None


def classify_request_error(exc, url=None):
    """
    Map a requests exception onto an ImportFault.

    Returns a NetworkFault with a specific reason where one can be found,
    otherwise an UnknownFetchFault.
    """
    if isinstance(exc, requests.exceptions.SSLError):
        return NetworkFault(FAULT_TLS_ERROR, url, str(exc))
    if isinstance(exc, requests.exceptions.Timeout):
        return NetworkFault(FAULT_TIMEOUT, url, str(exc))
    if isinstance(exc, requests.exceptions.TooManyRedirects):
        return UnknownFetchFault(f"Too many redirects: {exc}", url)

    for cause in _iter_causes(exc):
        reason = _reason_for_cause(cause)
        if reason:
            return NetworkFault(reason, url, str(exc))

    if isinstance(exc, requests.exceptions.ConnectionError):
        message = str(exc).lower()
        for reason, hints in _MESSAGE_HINTS:
            if any(hint in message for hint in hints):
                return NetworkFault(reason, url, str(exc))

    return UnknownFetchFault(f"Could not fetch URL: {exc}", url)


# ============================================
# FETCH
# ============================================

def _declared_encoding(response):
    """Charset from the Content-Type header, only when it names one."""
    content_type = response.headers.get('content-type', '')
    if 'charset=' not in content_type.lower():
        return None
    return response.encoding


def _read_body(response, url, max_size, deadline):
    """Read a streamed body, enforcing the size ceiling and total timeout."""
    content_length = response.headers.get('content-length')
    if content_length and content_length.isdigit() and int(content_length) > max_size:
        raise UnknownFetchFault(f"Response too large: {content_length} bytes (max {max_size})", url)

    chunks = []
    size = 0
    try:
        for chunk in response.iter_content(chunk_size=8192):
            chunks.append(chunk)
            size += len(chunk)
            if size > max_size:
                raise UnknownFetchFault(f"Response exceeded maximum size of {max_size} bytes", url)
            if time.monotonic() > deadline:
                raise NetworkFault(FAULT_TIMEOUT, url, "total fetch time exceeded")
    except requests.RequestException as e:
        raise classify_request_error(e, url) from e

    return b''.join(chunks)


def redirect_guard_hook(check):
    """
    Build a requests response hook that calls check(target_url) for each
    redirect before it is followed.
    """
    def hook(response, *args, **kwargs):
        if response.is_redirect:
            target = urljoin(response.url, response.headers['location'])
            logger.debug("Checking redirect %s -> %s", response.url, target)
            check(target)
        return response

    return hook


def fetch_page(url, session=None, timeout=IMPORT_TIMEOUT, max_redirects=IMPORT_MAX_REDIRECTS,
               max_size=IMPORT_MAX_RESPONSE_SIZE, user_agent=IMPORT_USER_AGENT,
               redirect_check=None):
    """
    Fetch a page for import.

    Args:
        url: Absolute http(s) URL (validated by the caller)
        session: Optional requests.Session; a fresh one is used otherwise
        timeout: Total time budget in seconds (default 15)
        max_redirects: Maximum redirect hops (default 5)
        max_size: Maximum body size in bytes (default 10MB)
        user_agent: User-Agent header value
        redirect_check: Optional callable run on every redirect target; what it
            raises is propagated unchanged

    Returns:
        FetchedPage

    Raises:
        NetworkFault: The origin could not be reached
        OriginHttpFault: The origin answered with a non-2xx status
        UnknownFetchFault: Any other fetch failure
    """
    owns_session = session is None
    if owns_session:
        session = requests.Session()
    session.max_redirects = max_redirects

    headers = {
        'User-Agent': user_agent,
        'Accept': IMPORT_ACCEPT,
    }
    hooks = {'response': [redirect_guard_hook(redirect_check)]} if redirect_check else None
    deadline = time.monotonic() + timeout

    logger.info("Fetching recipe page %s", url)
    try:
        try:
            response = session.get(url, headers=headers, timeout=timeout,
                                   allow_redirects=True, stream=True, hooks=hooks)
        except requests.RequestException as e:
            fault = classify_request_error(e, url)
            logger.warning("Fetch failed for %s: %s", url, fault)
            raise fault from e

        try:
            if not 200 <= response.status_code < 300:
                logger.warning("Origin returned HTTP %s for %s", response.status_code, url)
                raise OriginHttpFault(response.status_code, url)

            try:
                content = _read_body(response, url, max_size, deadline)
            except ImportFault as fault:
                logger.warning("Fetch failed for %s: %s", url, fault)
                raise

            return FetchedPage(
                url=response.url or url,
                content=content,
                status_code=response.status_code,
                encoding=_declared_encoding(response),
            )
        finally:
            response.close()
    finally:
        if owns_session:
            session.close()
