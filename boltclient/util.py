#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
"""
Various helper functions that are used across the library.
"""
import re

from dbus_fast import Variant


def camel_to_snake(name: str) -> str:
    """
    Returns a snake_case_name from a CamelCaseName
    """
    s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', name)
    return re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1).lower()


def unwrap_variants(obj):
    """
    Recursively unwrap dbus_fast Variants
    """
    if isinstance(obj, Variant):
        return unwrap_variants(obj.value)
    if isinstance(obj, dict):
        return {k: unwrap_variants(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return type(obj)(unwrap_variants(item) for item in obj)
    return obj
