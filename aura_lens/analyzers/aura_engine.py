"""Deterministic, rule-based aura engine (no LLM).

Feed it basic Farcaster stats and get back an aura type, a 0..100 score and
the per-dimension breakdown behind it. Pure function of its inputs: no I/O,
no state between calls.
"""
import logging
from typing import NamedTuple

from aura_lens.models import AuraBreakdown, AuraInputs, AuraResult, AuraType
from aura_lens.utils.scale import clamp, clamp01, log_score, round_half_up, to_float

_log = logging.getLogger(__name__)

# Where each dimension tops out at 100 (raw units per observation window).
ACTIVITY_CAP = 120   # weighted actions
IMPACT_CAP = 250     # reactions received
SOCIAL_CAP = 2000    # followers
ONCHAIN_CAP = 40     # Base transactions

REPLY_WEIGHT = 1.2
LONG_CAST_THRESHOLD = 0.35

SCORE_WEIGHTS = {
    "activity": 0.35,
    "impact": 0.30,
    "social": 0.20,
    "style": 0.10,
    "onchain": 0.05,
}

# Evaluation order doubles as the tie-break: earlier wins on equal affinity.
_CANDIDATES = (
    AuraType.BUILDER,
    AuraType.CREATOR,
    AuraType.INFLUENCER,
    AuraType.THINKER,
    AuraType.DEGEN,
)


class AuraMeta(NamedTuple):
    emoji: str
    label: str
    description: str


AURA_META: dict[AuraType, AuraMeta] = {
    AuraType.BUILDER: AuraMeta("🛠", "Builder Aura", "You ship more than you talk. Keep building."),
    AuraType.CREATOR: AuraMeta("🎨", "Creator Aura", "Taste + output. You make the timeline prettier."),
    AuraType.INFLUENCER: AuraMeta("📣", "Influencer Aura", "You move attention. The feed follows your signal."),
    AuraType.THINKER: AuraMeta("🧠", "Thinker Aura", "Depth merchant. Your replies add real brainpower."),
    AuraType.DEGEN: AuraMeta("🎰", "Degen Aura", "Onchain instincts. You're early, often, and unbothered."),
    AuraType.LURKER: AuraMeta("👀", "Lurker Aura", "Silent watcher. Your aura is mysterious (and powerful)."),
}


def _count(n: int | None) -> int:
    return max(0, n or 0)


def aura_meta(aura_type: AuraType) -> AuraMeta:
    return AURA_META[aura_type]


def compute_breakdown(inputs: AuraInputs) -> AuraBreakdown:
    """Normalize raw stats onto five comparable 0..100 dimensions."""
    casts = _count(inputs.casts)
    replies = _count(inputs.replies)

    activity = log_score(to_float(casts) + to_float(replies) * REPLY_WEIGHT, ACTIVITY_CAP)
    impact = log_score(_count(inputs.reactions_received), IMPACT_CAP)
    social = log_score(_count(inputs.followers), SOCIAL_CAP)
    onchain = log_score(_count(inputs.base_tx_count), ONCHAIN_CAP)

    # No style data means a low style score, not an error.
    long_ratio = clamp01(inputs.long_cast_ratio)
    media_ratio = clamp01(inputs.media_cast_ratio)
    style = round_half_up(clamp(long_ratio * 55 + media_ratio * 45, 0, 100))

    return AuraBreakdown(activity=activity, impact=impact, social=social, style=style, onchain=onchain)


def compute_affinities(inputs: AuraInputs, breakdown: AuraBreakdown) -> dict[AuraType, float]:
    """Unclamped per-archetype affinities, used only to compare against each other."""
    b = breakdown
    reply_heavy = _count(inputs.replies) > _count(inputs.casts)
    long_form = clamp01(inputs.long_cast_ratio) > LONG_CAST_THRESHOLD
    return {
        AuraType.BUILDER: b.activity * 0.6 + b.impact * 0.2 + (10 if reply_heavy else 0),
        AuraType.CREATOR: b.style * 0.75 + b.impact * 0.15 + b.activity * 0.1,
        AuraType.INFLUENCER: b.social * 0.45 + b.impact * 0.45 + b.activity * 0.1,
        AuraType.THINKER: b.style * 0.55 + b.activity * 0.35 + (10 if long_form else 0),
        AuraType.DEGEN: b.onchain * 0.65 + b.activity * 0.2 + b.impact * 0.15,
    }


def is_lurker(inputs: AuraInputs, breakdown: AuraBreakdown) -> bool:
    """Near-zero footprint, or low across activity, impact and social."""
    if _count(inputs.casts) + _count(inputs.replies) <= 2:
        return True
    return breakdown.activity <= 12 and breakdown.impact <= 12 and breakdown.social <= 12


def pick_aura_type(inputs: AuraInputs, breakdown: AuraBreakdown) -> AuraType:
    if is_lurker(inputs, breakdown):
        return AuraType.LURKER

    affinities = compute_affinities(inputs, breakdown)
    best = _CANDIDATES[0]
    for candidate in _CANDIDATES[1:]:
        if affinities[candidate] > affinities[best]:
            best = candidate
    return best


def final_score(aura_type: AuraType, breakdown: AuraBreakdown) -> int:
    weighted = sum(getattr(breakdown, dim) * w for dim, w in SCORE_WEIGHTS.items())
    if aura_type is AuraType.LURKER:
        # Lurkers land in 10..60.
        return round_half_up(clamp(weighted * 0.7 + 10, 0, 60))
    return round_half_up(clamp(weighted, 0, 100))


def compute_aura(inputs: AuraInputs) -> AuraResult:
    breakdown = compute_breakdown(inputs)
    aura_type = pick_aura_type(inputs, breakdown)
    meta = aura_meta(aura_type)
    score = final_score(aura_type, breakdown)
    _log.debug("aura=%s score=%d breakdown=%s", aura_type.value, score, breakdown.model_dump())
    return AuraResult(
        type=aura_type,
        score=score,
        emoji=meta.emoji,
        label=meta.label,
        description=meta.description,
        breakdown=breakdown,
    )
