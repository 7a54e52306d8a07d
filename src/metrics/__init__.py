"""Metrics module for AnyCoder service."""

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
)

# Counter to track REST API calls
# This will be used to count how many times each API endpoint is called
# and the status code of the response
rest_api_calls_total = Counter(
    "ac_rest_api_calls_total", "REST API calls counter", ["path", "status_code"]
)

# Histogram to measure response durations
# This will be used to track how long it takes to handle requests
response_duration_seconds = Histogram(
    "ac_response_duration_seconds", "Response durations", ["path"]
)

# Metric that indicates what provider + model combinations are configured and
# in which order they are tried
provider_model_configuration = Gauge(
    "ac_provider_model_configuration",
    "Provider/model combinations defined in configuration",
    ["provider", "model"],
)

# Every attempt made by the provider router, outcome is either "success" or
# name of the error class
provider_attempts_total = Counter(
    "ac_provider_attempts_total",
    "Provider attempts counter",
    ["provider", "model", "outcome"],
)

# Results produced by the offline fallback
degraded_results_total = Counter(
    "ac_degraded_results_total", "Results produced without any live provider"
)

# Generation requests served from the generation cache
generation_cache_hits_total = Counter(
    "ac_generation_cache_hits_total", "Generation requests sharing result"
)

# Generation time, cached results not included
generation_duration_seconds = Histogram(
    "ac_generation_duration_seconds", "Generation durations"
)
