"""Display-culture resolution.

Resolution order:
1. ``lang`` query parameter (zh/cn/chinese -> zh, anything else -> en),
   remembered in a ``lang`` cookie for a year
2. ``lang`` cookie (zh -> zh, anything else -> en)
3. Client IP: public addresses in a coarse table of Chinese-registered
   prefixes -> zh

The decision is stored on ``request.state.context`` and echoed in the
``X-Culture`` response header.
"""

from __future__ import annotations

import ipaddress
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger("recipebook.locale")

LANG_PARAM = "lang"
LANG_COOKIE = "lang"
CULTURE_HEADER = "X-Culture"
COOKIE_MAX_AGE = 365 * 24 * 60 * 60

CHINESE_QUERY_VALUES = {"zh", "cn", "chinese"}

# Coarse first-octet prefixes of address space registered in China.
# Not a GeoIP database; good enough to pick a default language.
CHINA_IP_PREFIXES = (
    "1.0.", "1.1.", "1.2.", "1.3.", "1.4.", "1.5.", "1.6.", "1.7.", "1.8.",
    "14.", "27.", "36.", "39.", "42.", "49.", "58.", "59.", "60.", "61.",
    "101.", "103.", "106.", "110.", "111.", "112.", "113.", "114.", "115.",
    "116.", "117.", "118.", "119.", "120.", "121.", "122.", "123.", "124.",
    "125.", "139.", "140.", "144.", "150.", "153.", "157.", "159.", "163.",
    "166.", "167.", "171.", "175.", "180.", "182.", "183.", "202.", "203.",
    "210.", "211.", "218.", "219.", "220.", "221.", "222.", "223.",
)

PRIVATE_PREFIXES = ("127.", "10.", "192.168.", "172.16.")


@dataclass(frozen=True)
class CultureDecision:
    culture: str
    source: str  # "query", "cookie", "ip" or "default"
    persist_cookie: bool = False


@dataclass(frozen=True)
class RequestContext:
    """Per-request values handed to handlers via ``get_request_context``."""
    culture: str = "en"
    client_ip: Optional[str] = None

    @property
    def is_chinese(self) -> bool:
        return self.culture == "zh"


def is_private_ip(ip: str) -> bool:
    if ip == "::1" or ip.startswith(PRIVATE_PREFIXES):
        return True
    try:
        addr = ipaddress.ip_address(ip)
    except ValueError:
        return False
    return addr.is_private or addr.is_loopback


def is_chinese_ip(ip: Optional[str]) -> bool:
    if not ip:
        return False
    ip = ip.strip()
    if is_private_ip(ip):
        return False
    return ip.startswith(CHINA_IP_PREFIXES)


def resolve_culture(
    query_lang: Optional[str],
    cookie_lang: Optional[str],
    client_ip: Optional[str],
) -> CultureDecision:
    if query_lang is not None:
        culture = "zh" if query_lang.strip().lower() in CHINESE_QUERY_VALUES else "en"
        return CultureDecision(culture=culture, source="query", persist_cookie=True)

    if cookie_lang is not None:
        culture = "zh" if cookie_lang.strip().lower() == "zh" else "en"
        return CultureDecision(culture=culture, source="cookie")

    if is_chinese_ip(client_ip):
        return CultureDecision(culture="zh", source="ip")

    return CultureDecision(culture="en", source="default")


def get_client_ip(request: Request) -> Optional[str]:
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    cf_ip = request.headers.get("CF-Connecting-IP")
    if cf_ip:
        return cf_ip.strip()

    return request.client.host if request.client else None


class LocaleMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        client_ip = get_client_ip(request)
        decision = resolve_culture(
            request.query_params.get(LANG_PARAM),
            request.cookies.get(LANG_COOKIE),
            client_ip,
        )
        if decision.source == "ip":
            logger.info(f"Chinese IP detected: {client_ip}")

        request.state.context = RequestContext(culture=decision.culture, client_ip=client_ip)

        response = await call_next(request)

        if decision.persist_cookie:
            response.set_cookie(
                LANG_COOKIE,
                decision.culture,
                max_age=COOKIE_MAX_AGE,
                samesite="lax",
            )
        response.headers[CULTURE_HEADER] = decision.culture
        return response


def get_request_context(request: Request) -> RequestContext:
    return getattr(request.state, "context", None) or RequestContext()
