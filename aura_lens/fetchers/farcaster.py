import logging
import os
from typing import Any, Optional

import httpx

from aura_lens.models import FarcasterStats
from aura_lens.utils.retry import http_call_with_retry

_log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.neynar.com/v2/farcaster"
LONG_CAST_CHARS = 200


class FarcasterFetchError(Exception):
    """Base error for anything that goes wrong while pulling stats from Neynar."""


class MissingCredentialsError(FarcasterFetchError):
    pass


class FarcasterAPIError(FarcasterFetchError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _api_key() -> str:
    key = os.getenv("NEYNAR_API_KEY")
    if not key:
        raise MissingCredentialsError("Missing NEYNAR_API_KEY")
    return key


def _base_url() -> str:
    return os.getenv("NEYNAR_BASE_URL", DEFAULT_BASE_URL).rstrip("/")


def _get_json(client: httpx.Client, path: str, params: dict[str, Any]) -> dict[str, Any]:
    _log.info("GET %s %s", path, params)
    try:
        response = http_call_with_retry(client.get, path, params=params)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise FarcasterAPIError(
            f"Neynar returned {exc.response.status_code} for {path}",
            status_code=exc.response.status_code,
        ) from exc
    except httpx.HTTPError as exc:
        raise FarcasterAPIError(f"Connection to Neynar failed: {exc}") from exc

    try:
        data = response.json()
    except ValueError as exc:
        raise FarcasterAPIError(
            f"Neynar returned invalid JSON for {path}", status_code=response.status_code
        ) from exc
    if not isinstance(data, dict):
        raise FarcasterAPIError(
            f"Neynar returned unexpected {type(data).__name__} for {path}", status_code=response.status_code
        )
    return data


def _count_reactions(cast: dict[str, Any]) -> int:
    reactions = cast.get("reactions") or {}
    likes = reactions.get("likes_count")
    if likes is None:
        likes = len(reactions.get("likes") or [])
    recasts = reactions.get("recasts_count")
    if recasts is None:
        recasts = len(reactions.get("recasts") or [])
    return likes + recasts


def _has_media(cast: dict[str, Any]) -> bool:
    for embed in cast.get("embeds") or []:
        content_type = (embed.get("metadata") or {}).get("content_type") or ""
        if content_type.startswith(("image/", "video/")):
            return True
    return False


def summarize_casts(casts: list[dict[str, Any]]) -> dict[str, Any]:
    """Reduce a Neynar user feed to the counts the aura engine needs.

    A cast with a parent_hash is a reply. Long casts are over 200 chars;
    media casts carry at least one image or video embed.
    """
    replies = sum(1 for c in casts if c.get("parent_hash"))
    reactions = sum(_count_reactions(c) for c in casts)
    long_casts = sum(1 for c in casts if len(c.get("text") or "") > LONG_CAST_CHARS)
    media_casts = sum(1 for c in casts if _has_media(c))
    total = len(casts)
    return {
        "casts": total,
        "replies": replies,
        "reactions_received": reactions,
        "long_cast_ratio": long_casts / total if total else 0.0,
        "media_cast_ratio": media_casts / total if total else 0.0,
    }


def fetch_farcaster_stats(
    fid: int,
    cast_limit: int = 30,
    *,
    client: Optional[httpx.Client] = None,
) -> FarcasterStats:
    """Fetch follower count and the latest `cast_limit` casts for a Farcaster fid.

    Raises MissingCredentialsError when NEYNAR_API_KEY is unset and
    FarcasterAPIError on HTTP or transport failures. Pass `client` to reuse a
    connection pool (or a mock transport in tests); its base_url and headers
    are used as-is.
    """
    if fid <= 0:
        raise ValueError(f"fid must be positive, got {fid}")

    owns_client = client is None
    if client is None:
        client = httpx.Client(base_url=_base_url(), headers={"api_key": _api_key()}, timeout=15)

    try:
        user_json = _get_json(client, "/user/bulk", {"fids": fid})
        users = user_json.get("users") or []
        feed_json = _get_json(client, "/feed/user", {"fid": fid, "limit": cast_limit})
        casts = feed_json.get("casts") or []
    finally:
        if owns_client:
            client.close()

    if not isinstance(users, list) or not isinstance(casts, list):
        raise FarcasterAPIError("Neynar response is missing the users or casts list")
    user = users[0] if users and isinstance(users[0], dict) else {}
    casts = [c for c in casts if isinstance(c, dict)]

    summary = summarize_casts(casts)
    return FarcasterStats(followers=user.get("follower_count") or 0, **summary)
