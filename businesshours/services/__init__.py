"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .batch import BatchResult, BatchService, RecordFailure, parse_timestamp

__all__ = ["BatchResult", "BatchService", "RecordFailure", "parse_timestamp"]
