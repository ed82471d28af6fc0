"""Exit codes shared by CLI commands."""

SYSTEM_EXIT_CODE = 1
VALIDATION_EXIT_CODE = 2
FETCH_EXIT_CODE = 3
DECODE_EXIT_CODE = 4

DEFAULT_SUMMARY_MAX = 100
DEFAULT_CHART_MAX = 10

__all__ = [
    "SYSTEM_EXIT_CODE",
    "VALIDATION_EXIT_CODE",
    "FETCH_EXIT_CODE",
    "DECODE_EXIT_CODE",
    "DEFAULT_SUMMARY_MAX",
    "DEFAULT_CHART_MAX",
]
