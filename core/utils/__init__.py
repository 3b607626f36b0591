"""
Core Utilities Package

This package contains utility functions and helpers used throughout the application.

Modules:
    - amounts: Native token detection and Decimal balance normalization
"""

from core.utils.amounts import is_native_token_address, normalize_balance

__all__ = ["is_native_token_address", "normalize_balance"]
