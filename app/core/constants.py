# app/core/constants.py
from __future__ import annotations

"""
Core application constants.

These values centralize literals that are shared between layers:
- Pagination defaults.
- The filter sentinel accepted by the list endpoint.
- Common HTTP header names.
"""

# Pagination defaults
DEFAULT_PAGE: int = 1

# Query value meaning "no constraint on this field"
FILTER_ALL: str = "all"

# Common HTTP header names
HEADER_REQUEST_ID: str = "X-Request-ID"
HEADER_PROCESS_TIME: str = "X-Process-Time"
