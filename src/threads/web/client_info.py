"""Device, IP and location of the client, derived from request headers."""

import re
from urllib.parse import unquote

from fastapi import Request
from user_agents import parse as parse_user_agent

from threads.core.modules.session.models import ClientInfo

COUNTRY_CODE_RE = re.compile(r"^[A-Z]{2}$")
UNKNOWN = "Other"  # ua-parser placeholder for unrecognized parts

# Geolocation headers set by the hosting edge (Vercel)
CITY_HEADER = "x-vercel-ip-city"
REGION_HEADER = "x-vercel-ip-country-region"
COUNTRY_HEADER = "x-vercel-ip-country"


def _join(*parts: str | None) -> str:
    return " ".join(part for part in parts if part and part != UNKNOWN)


def describe_device(user_agent: str) -> str:
    """Summarize a user agent as "Vendor Model · OS version · Browser version"."""
    ua = parse_user_agent(user_agent)
    summary = [
        _join(ua.device.brand, ua.device.model),
        _join(ua.os.family, ua.os.version_string),
        _join(ua.browser.family, ua.browser.version_string),
    ]
    return " · ".join(part for part in summary if part) or "Unknown Device"


def country_flag(country: str) -> str | None:
    """Regional indicator emoji for an ISO 3166 alpha-2 code."""
    if not COUNTRY_CODE_RE.fullmatch(country):
        return None
    return "".join(chr(127397 + ord(char)) for char in country)


def describe_location(city: str | None, region: str | None, country: str | None) -> str | None:
    parts = [part for part in (city, region, country) if part]
    if not parts:
        return None
    flag = country_flag(country) if country else None
    return f"{', '.join(parts)} {flag or '🌎'}"


def client_ip(request: Request) -> str | None:
    if real_ip := request.headers.get("x-real-ip"):
        return real_ip
    if forwarded := request.headers.get("x-forwarded-for"):
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


def get_client_info(request: Request) -> ClientInfo:
    """Compute the client context once per request."""
    headers = request.headers
    city = headers.get(CITY_HEADER)
    return ClientInfo(
        device=describe_device(headers.get("user-agent", "")),
        ip=client_ip(request),
        location=describe_location(unquote(city) if city else None, headers.get(REGION_HEADER), headers.get(COUNTRY_HEADER)),
    )
