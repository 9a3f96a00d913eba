"""Core enumeration modules for lazycomb."""

__all__ = [
    "accumulate",
    "combinations",
    "combinations_with_replacement",
    "config",
    "exceptions",
    "lazy_buffer",
    "multi_product",
    "output",
    "powerset",
    "size_hint",
]
