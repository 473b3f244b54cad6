from __future__ import annotations

from enum import Enum


class LocationCategory(str, Enum):
    """Kind of work site; decides which transport fee applies."""

    OFFICE = "office"
    CLIENT = "client"


class ShiftStatus(str, Enum):
    """Review state of a planned shift."""

    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


class StorageBackend(str, Enum):
    MEMORY = "memory"
    MYSQL = "mysql"
