from aura_lens.utils.retry import http_call_with_retry
from aura_lens.utils.scale import clamp, clamp01, log_score, round_half_up, to_float

__all__ = ["http_call_with_retry", "clamp", "clamp01", "log_score", "round_half_up", "to_float"]
