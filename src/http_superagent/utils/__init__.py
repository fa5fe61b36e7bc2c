"""Utility modules for http-superagent."""

from .sanitizer import (
    mask_sensitive_data,
    mask_url,
    mask_headers,
    add_sensitive_keys,
    remove_sensitive_keys,
)

__all__ = [
    'mask_sensitive_data',
    'mask_url',
    'mask_headers',
    'add_sensitive_keys',
    'remove_sensitive_keys',
]
