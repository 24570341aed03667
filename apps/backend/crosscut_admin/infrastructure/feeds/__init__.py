from .in_memory_audit_feed import InMemoryAuditFeed
from .json_file_audit_feed import (
    AuditEntryPayload,
    JsonFileAuditFeed,
    parse_audit_entries,
    trim_sub_microseconds,
)

__all__ = [
    "InMemoryAuditFeed",
    "AuditEntryPayload",
    "JsonFileAuditFeed",
    "parse_audit_entries",
    "trim_sub_microseconds",
]
