"""
Client address helpers for the login rate limiter and the admin audit trail.
"""

import ipaddress
from typing import Optional

from fastapi import Request

# Only a reverse proxy on this host may set X-Real-IP
TRUSTED_PROXIES = frozenset({ipaddress.ip_address("127.0.0.1"), ipaddress.ip_address("::1")})


def _parse(ip: Optional[str]):
    try:
        return ipaddress.ip_address(ip or "")
    except ValueError:
        return None


def get_client_ip(request: Request) -> str:
    """Peer address, or X-Real-IP when the peer is a trusted local proxy."""
    peer = request.client.host if request.client else "unknown"

    if _parse(peer) in TRUSTED_PROXIES:
        forwarded = (request.headers.get("X-Real-IP") or "").strip()
        if forwarded:
            return forwarded

    return peer


def normalize_ip_for_rate_limit(ip: str) -> str:
    """
    Map equivalent addresses to one rate-limit bucket.

    ::1 counts as 127.0.0.1 and IPv4-mapped IPv6 addresses as their IPv4
    form. Values that are not addresses (e.g. "unknown") pass through.
    """
    addr = _parse(ip)
    if addr is None:
        return ip

    if isinstance(addr, ipaddress.IPv6Address):
        if addr.ipv4_mapped:
            return str(addr.ipv4_mapped)
        if addr.is_loopback:
            return "127.0.0.1"

    return str(addr)
