"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter


color_resolutions_total = Counter(
    "color_resolutions_total",
    "Total number of product colour resolutions, by resolver tier.",
    ["tier"],
)

request_errors_total = Counter(
    "storefront_request_errors_total",
    "Failed backend requests, by HTTP status (0 for transport errors).",
    ["status"],
)
