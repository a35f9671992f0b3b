"""
Call Status Enum.

Lifecycle status values for API call ledger entries.
"""
from enum import Enum


class CallStatus(str, Enum):
    """Call ledger entry status values."""

    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"
    TIMEOUT = "timeout"
    RETRY = "retry"
