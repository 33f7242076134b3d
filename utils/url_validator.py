"""
Import URL Validation Module

Checks a user-supplied URL before it is handed to the importer. The importer
itself assumes an absolute http(s) URL; this is where that gets enforced,
along with an optional guard against fetching internal addresses.
"""

import ipaddress
import socket
from urllib.parse import urlparse


class InvalidInput(Exception):
    """Raised when a URL may not be imported."""
    pass


LOCALHOST_ALIASES = {
    'localhost', 'localhost.localdomain',
    '127.0.0.1', '::1', '0.0.0.0',
}


def is_private_ip(ip_str):
    """Check if an IP address is private, loopback, or otherwise internal."""
    try:
        ip = ipaddress.ip_address(ip_str)
    except ValueError:
        return True  # Invalid IP, treat as unsafe

    return (
        ip.is_private or
        ip.is_loopback or
        ip.is_reserved or
        ip.is_link_local or
        ip.is_multicast or
        ip.is_unspecified
    )


def _check_public_host(hostname):
    if hostname.lower() in LOCALHOST_ALIASES:
        raise InvalidInput("Cannot import from localhost")

    # IP address directly in URL
    try:
        ipaddress.ip_address(hostname)
    except ValueError:
        pass
    else:
        if is_private_ip(hostname):
            raise InvalidInput(f"Cannot import from private/internal IP: {hostname}")
        return

    try:
        resolved = socket.getaddrinfo(hostname, None, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except socket.gaierror:
        # Unresolvable hosts are left to the fetch, which reports them as a DNS fault
        return

    for family, socktype, proto, canonname, sockaddr in resolved:
        if is_private_ip(sockaddr[0]):
            raise InvalidInput(f"Hostname resolves to private/internal IP: {sockaddr[0]}")


def validate_import_url(url, block_private=True):
    """
    Validate a URL for import.

    Checks:
    - URL is present and well formed
    - Scheme is http or https only
    - A hostname is present
    - Optionally, the host is not localhost or a private address

    Returns:
        The stripped URL

    Raises:
        InvalidInput: With a message suitable for the user
    """
    if not url or not isinstance(url, str) or not url.strip():
        raise InvalidInput("URL required")

    url = url.strip()
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError:
        raise InvalidInput("Invalid URL")

    if parsed.scheme.lower() not in ('http', 'https'):
        raise InvalidInput("Only HTTP/HTTPS URLs allowed")

    if not hostname:
        raise InvalidInput("Invalid URL")

    if block_private:
        _check_public_host(hostname)

    return url
