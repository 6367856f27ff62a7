"""FastAPI server exposing the aura engine and the Neynar-backed fid lookup."""
import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, HTTPException, Path, Query
from fastapi.middleware.cors import CORSMiddleware

from aura_lens.analyzers.aura_engine import compute_aura
from aura_lens.fetchers.farcaster import (
    FarcasterAPIError,
    MissingCredentialsError,
    fetch_farcaster_stats,
)
from aura_lens.models import AuraInputs, AuraResult

_log = logging.getLogger(__name__)

app = FastAPI(title="aura-lens API")

_DEFAULT_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"
CORS_ORIGINS = [o.strip() for o in os.getenv("AURA_CORS_ORIGINS", _DEFAULT_ORIGINS).split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def _log_config() -> None:
    _log.info("neynar key %s, cors origins=%s",
              "set" if os.getenv("NEYNAR_API_KEY") else "missing", CORS_ORIGINS)


@app.get("/api/health")
def health():
    """Liveness plus whether fid lookups can work."""
    return {"status": "ok", "neynar_configured": bool(os.getenv("NEYNAR_API_KEY"))}


@app.post("/api/aura", response_model=AuraResult)
def score(inputs: AuraInputs):
    """Score caller-supplied stats. Always succeeds for well-formed numbers."""
    return compute_aura(inputs)


@app.get("/api/aura/{fid}")
def score_fid(
    fid: int = Path(gt=0),
    casts_limit: int = Query(30, ge=1, le=150),
    base_tx_count: Optional[int] = None,
):
    """Fetch stats for a fid from Neynar, then score them.

    Plain `def` so the blocking httpx call runs in the threadpool.
    """
    try:
        stats = fetch_farcaster_stats(fid, cast_limit=casts_limit)
    except MissingCredentialsError as exc:
        raise HTTPException(
            status_code=503,
            detail={"error": str(exc), "fix": "Set NEYNAR_API_KEY in your .env file"},
        )
    except FarcasterAPIError as exc:
        _log.warning("neynar lookup failed for fid=%s: %s", fid, exc)
        fix = "Check the fid exists" if exc.status_code == 404 else "Retry later or check NEYNAR_BASE_URL"
        raise HTTPException(status_code=502, detail={"error": str(exc), "fix": fix})

    aura = compute_aura(stats.to_inputs(base_tx_count))
    return {"fid": fid, "stats": stats.model_dump(), "aura": aura.model_dump(mode="json")}
