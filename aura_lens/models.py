from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AuraType(str, Enum):
    BUILDER = "BUILDER"
    CREATOR = "CREATOR"
    INFLUENCER = "INFLUENCER"
    THINKER = "THINKER"
    DEGEN = "DEGEN"
    LURKER = "LURKER"


class AuraInputs(BaseModel):
    """Raw Farcaster stats for one observation window (30 days works well).

    Values are not range-checked here; the engine floors counts at 0 and
    clamps ratios into [0, 1].
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    casts: int
    replies: int
    reactions_received: int = Field(alias="reactionsReceived")
    followers: int
    long_cast_ratio: Optional[float] = Field(default=None, alias="longCastRatio")    # casts > 200 chars
    media_cast_ratio: Optional[float] = Field(default=None, alias="mediaCastRatio")  # casts with image/video
    base_tx_count: Optional[int] = Field(default=None, alias="baseTxCount")


class AuraBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    activity: int  # 0..100
    impact: int
    social: int
    style: int
    onchain: int


class AuraResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: AuraType
    score: int  # 0..100
    emoji: str
    label: str
    description: str
    breakdown: AuraBreakdown


class FarcasterStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    casts: int
    replies: int
    reactions_received: int
    followers: int
    long_cast_ratio: float = 0.0
    media_cast_ratio: float = 0.0

    def to_inputs(self, base_tx_count: Optional[int] = None) -> AuraInputs:
        return AuraInputs(
            casts=self.casts,
            replies=self.replies,
            reactions_received=self.reactions_received,
            followers=self.followers,
            long_cast_ratio=self.long_cast_ratio,
            media_cast_ratio=self.media_cast_ratio,
            base_tx_count=base_tx_count,
        )
