"""Prometheus metrics for content generation."""

from prometheus_client import Counter, Histogram

# Generation gateway metrics
generation_latency_ms = Histogram(
    "generation_latency_ms",
    "Upstream generation latency in milliseconds",
    ["operation", "outcome"],
    buckets=[100, 250, 500, 1000, 2000, 4000, 8000, 16000, 32000],
)

generation_errors_total = Counter(
    "generation_errors_total",
    "Total upstream generation errors",
    ["operation", "reason"],
)

suggestion_fallbacks_total = Counter(
    "suggestion_fallbacks_total",
    "Times the default suggestion list was served",
    ["reason"],
)


class PrometheusGenerationMetrics:
    """Prometheus-based generation metrics implementation."""

    def record_latency(self, operation: str, outcome: str, latency_ms: float) -> None:
        """Record upstream call latency."""
        generation_latency_ms.labels(operation=operation, outcome=outcome).observe(latency_ms)

    def inc_error(self, operation: str, reason: str) -> None:
        """Increment error counter."""
        generation_errors_total.labels(operation=operation, reason=reason).inc()

    def inc_fallback(self, reason: str) -> None:
        """Increment default-suggestion fallback counter."""
        suggestion_fallbacks_total.labels(reason=reason).inc()
