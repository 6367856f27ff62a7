"""Tests for the aura HTTP endpoints."""
import os
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from aura_lens.api.server import app
from aura_lens.fetchers.farcaster import FarcasterAPIError, MissingCredentialsError
from aura_lens.models import FarcasterStats

pytestmark = pytest.mark.asyncio

STATS = FarcasterStats(casts=10, replies=2, reactions_received=5, followers=20)


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


async def test_health_reports_neynar_config(client):
    with patch.dict(os.environ, {"NEYNAR_API_KEY": "k"}):
        r = await client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "neynar_configured": True}


async def test_score_accepts_camel_case_body(client):
    r = await client.post("/api/aura", json={
        "casts": 200, "replies": 50, "reactionsReceived": 500, "followers": 5000, "baseTxCount": 0,
    })
    assert r.status_code == 200
    body = r.json()
    assert body["type"] == "INFLUENCER"
    assert body["score"] == 85
    assert body["emoji"] == "📣"
    assert body["breakdown"]["activity"] == 100


async def test_score_empty_profile_is_lurker(client):
    r = await client.post("/api/aura", json={"casts": 0, "replies": 0, "reactions_received": 0, "followers": 0})
    assert r.status_code == 200
    assert r.json()["type"] == "LURKER"
    assert r.json()["score"] == 10


async def test_score_missing_field_is_422(client):
    r = await client.post("/api/aura", json={"casts": 1, "replies": 0})
    assert r.status_code == 422


async def test_fid_lookup_scores_fetched_stats(client):
    with patch("aura_lens.api.server.fetch_farcaster_stats", return_value=STATS) as fetch:
        r = await client.get("/api/aura/3", params={"base_tx_count": 60})
    assert r.status_code == 200
    fetch.assert_called_once_with(3, cast_limit=30)
    body = r.json()
    assert body["fid"] == 3
    assert body["stats"]["followers"] == 20
    assert body["aura"]["type"] == "DEGEN"


async def test_fid_lookup_without_key_is_503(client):
    with patch("aura_lens.api.server.fetch_farcaster_stats", side_effect=MissingCredentialsError("Missing NEYNAR_API_KEY")):
        r = await client.get("/api/aura/3")
    assert r.status_code == 503
    assert "NEYNAR_API_KEY" in r.json()["detail"]["fix"]


async def test_fid_lookup_upstream_failure_is_502(client):
    with patch("aura_lens.api.server.fetch_farcaster_stats", side_effect=FarcasterAPIError("Neynar returned 404", status_code=404)):
        r = await client.get("/api/aura/3")
    assert r.status_code == 502
    assert r.json()["detail"]["error"] == "Neynar returned 404"


async def test_fid_must_be_positive(client):
    r = await client.get("/api/aura/0")
    assert r.status_code == 422


async def test_score_huge_counts_saturates(client):
    body = '{"casts": 5, "replies": ' + "9" * 400 + ', "reactionsReceived": 3, "followers": 10}'
    r = await client.post("/api/aura", content=body, headers={"content-type": "application/json"})
    assert r.status_code == 200
    assert r.json()["breakdown"]["activity"] == 100
