from enum import Enum


class StoreMode(str, Enum):
    """Which record store backs the process. Chosen once at startup."""

    DURABLE = "durable"
    FALLBACK = "fallback"
