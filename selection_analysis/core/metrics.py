from prometheus_client import Counter, Gauge, Histogram, CollectorRegistry, generate_latest
from prometheus_client.multiprocess import MultiProcessCollector
import os


registry = CollectorRegistry()
if os.getenv('prometheus_multiproc_dir'):
    MultiProcessCollector(registry)


selection_analyses_total = Counter(
    'selection_analyses_total',
    'Total selection analyses',
    ['outcome'],
    registry=registry
)

selection_analysis_duration_seconds = Histogram(
    'selection_analysis_duration_seconds',
    'Selection analysis computation time in seconds',
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
    registry=registry
)

factor_score = Histogram(
    'selection_factor_score',
    'Distribution of factor scores',
    ['factor'],
    buckets=[0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.85, 0.9, 1.0],
    registry=registry
)

cache_hits_total = Counter(
    'cache_hits_total',
    'Total cache hits',
    ['cache_type'],
    registry=registry
)

cache_misses_total = Counter(
    'cache_misses_total',
    'Total cache misses',
    ['cache_type'],
    registry=registry
)

cache_entries = Gauge(
    'cache_entries',
    'Entries currently held in the cache',
    ['cache_type'],
    registry=registry
)


def track_analysis(outcome: str, duration: float | None = None):
    selection_analyses_total.labels(outcome=outcome).inc()
    if duration is not None:
        selection_analysis_duration_seconds.observe(duration)


def track_factor_score(factor: str, score: float):
    factor_score.labels(factor=factor).observe(score)


def track_cache_hit(cache_type: str):
    cache_hits_total.labels(cache_type=cache_type).inc()


def track_cache_miss(cache_type: str):
    cache_misses_total.labels(cache_type=cache_type).inc()


def set_cache_size(cache_type: str, size: int):
    cache_entries.labels(cache_type=cache_type).set(size)


def export_metrics() -> bytes:
    """Render the registry in the Prometheus text exposition format."""
    return generate_latest(registry)
