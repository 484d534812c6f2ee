"""
Discover rotation candidates from process configuration.
"""
import os
from typing import Mapping, Optional


def get_env_keys(base_env_name: str, environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """
    Return values of every entry whose name starts with `base_env_name`.

    Enumeration order of the configuration source is kept and empty values
    are dropped. An empty list is a normal result; callers decide whether
    that is fatal.
    """
    source = os.environ if environ is None else environ
    return [
        value
        for name, value in source.items()
        if name.startswith(base_env_name) and value
    ]


def cursor_key_for(base_env_name: str) -> str:
    """Name under which the cursor for a prefix is stored."""
    return f"envCache_{base_env_name}"
