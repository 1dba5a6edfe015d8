"""Prometheus metrics for the Jobly API."""

from prometheus_client import Counter, Histogram

jobly_db_query_latency_seconds = Histogram(
    "jobly_db_query_latency_seconds",
    "Database query latency in seconds",
    ["query_name"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)

jobly_db_query_failures_total = Counter(
    "jobly_db_query_failures_total",
    "Total failed database queries",
    ["query_name"],
)

jobly_resource_mutations_total = Counter(
    "jobly_resource_mutations_total",
    "Total committed resource mutations",
    ["resource", "action"],  # resource: company | job; action: create | update | delete
)
