from prometheus_client import Counter, Histogram

# Labels stay low-cardinality: never bucket names or keys.
OPERATIONS = Counter(
    "r2_operations_total",
    "Total object store operations",
    ["operation", "outcome"],
)

LATENCY = Histogram(
    "r2_operation_duration_seconds",
    "Object store operation latency in seconds",
    ["operation"],
)


def record_operation(operation: str, outcome: str, duration: float) -> None:
    OPERATIONS.labels(operation=operation, outcome=outcome).inc()
    LATENCY.labels(operation=operation).observe(duration)
