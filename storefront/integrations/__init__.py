"""Integration check helpers."""

from .checks import (
    IntegrationCheckResult,
    check_storefront_api,
    run_all_checks,
)

__all__ = [
    "IntegrationCheckResult",
    "check_storefront_api",
    "run_all_checks",
]
