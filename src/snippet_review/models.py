from dataclasses import dataclass


@dataclass
class ResolverMetrics:
    """Track cache and model-call counters for the review service."""

    total_requests: int = 0
    invalid_requests: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    code_requests: int = 0
    conversation_requests: int = 0
    model_calls: int = 0
    total_model_time_ms: float = 0.0
    safety_blocks: int = 0
    failures: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate over valid requests."""
        lookups = self.cache_hits + self.cache_misses
        if lookups == 0:
            return 0.0
        return self.cache_hits / lookups

    @property
    def avg_model_time_ms(self) -> float:
        """Calculate average model call latency."""
        if self.model_calls == 0:
            return 0.0
        return self.total_model_time_ms / self.model_calls

    def record_model_call(self, duration_ms: float) -> None:
        """Record a model API call."""
        self.model_calls += 1
        self.total_model_time_ms += duration_ms

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "total_requests": self.total_requests,
            "invalid_requests": self.invalid_requests,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "hit_rate": self.hit_rate,
            "code_requests": self.code_requests,
            "conversation_requests": self.conversation_requests,
            "model_calls": self.model_calls,
            "avg_model_time_ms": self.avg_model_time_ms,
            "safety_blocks": self.safety_blocks,
            "failures": self.failures,
        }
