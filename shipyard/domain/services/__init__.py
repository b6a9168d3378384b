"""
Domain Services Package

Architectural Intent:
- Stateless domain logic shared by the executors
"""

from shipyard.domain.services.connectivity_poller import (
    ConnectivityPoller,
    CONTROL_PORT,
    MAX_POLLS,
    POLL_INTERVAL,
)

__all__ = ["ConnectivityPoller", "CONTROL_PORT", "MAX_POLLS", "POLL_INTERVAL"]
