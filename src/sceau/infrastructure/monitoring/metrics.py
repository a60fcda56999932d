"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Histogram

# ============================================================
# HTTP Metrics
# ============================================================

http_requests_total = Counter(
    "sceau_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "sceau_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_errors_total = Counter(
    "sceau_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "error_type"],
)

# ============================================================
# Auth Protocol Metrics
# ============================================================

challenges_issued_total = Counter(
    "sceau_challenges_issued_total",
    "Total sign-in challenges issued",
    ["network"],
)

verifications_total = Counter(
    "sceau_verifications_total",
    "Total signature verifications by outcome (success or error code)",
    ["network", "outcome"],
)

verification_duration_seconds = Histogram(
    "sceau_verification_duration_seconds",
    "Signature verification duration in seconds",
    ["network"],
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25),
)

token_decodes_total = Counter(
    "sceau_token_decodes_total",
    "Total session token decodes by outcome (success or error code)",
    ["outcome"],
)

# ============================================================
# Dependency Metrics
# ============================================================

address_validation_requests_total = Counter(
    "sceau_address_validation_requests_total",
    "Delegated address validation requests by outcome",
    ["outcome"],
)
