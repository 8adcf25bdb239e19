# acme/pricing/errors.py
from __future__ import annotations


class InvalidArgument(ValueError):
    """Raised when a pricing component receives input that violates its contract."""
