"""HTTP probe for resolved QR image references."""

import logging
from dataclasses import dataclass

import httpx

from . import config

log = logging.getLogger("clientdb.probe")


@dataclass
class ProbeResult:
    url: str
    ok: bool = False
    status_code: int | None = None
    content_type: str | None = None
    content_length: int | None = None
    error: str | None = None


async def probe_url(url: str, client: httpx.AsyncClient | None = None,
                    timeout: float | None = None) -> ProbeResult:
    """GET a reference and report whether it is fetchable. Never raises."""
    if not url.startswith(("http://", "https://")):
        return ProbeResult(url, error="not an HTTP address")

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout or config.HTTP_TIMEOUT,
                                         follow_redirects=True) as c:
                resp = await c.get(url)
        else:
            resp = await client.get(url)
    except httpx.HTTPError as e:
        log.warning("Probe failed for %s: %s", url, e)
        return ProbeResult(url, error=str(e) or type(e).__name__)

    length = resp.headers.get("content-length")
    result = ProbeResult(
        url,
        ok=resp.is_success,
        status_code=resp.status_code,
        content_type=resp.headers.get("content-type"),
        content_length=int(length) if length and length.isdigit() else len(resp.content),
    )
    if not result.ok:
        result.error = f"HTTP {resp.status_code}"
    return result
