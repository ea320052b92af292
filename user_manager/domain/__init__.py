"""Domain models for account administration."""

from __future__ import annotations

from .models import (
    OPERATION_ORDER,
    USAGE_ORDER,
    Account,
    HomeArchive,
    NewAccount,
    Operation,
    order_operations,
)


__all__ = [
    "OPERATION_ORDER",
    "USAGE_ORDER",
    "Account",
    "HomeArchive",
    "NewAccount",
    "Operation",
    "order_operations",
]
