"""Cross-cutting infrastructure: structured logging, metrics and caching."""
