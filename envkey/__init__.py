"""
Round-robin rotation over environment values (API keys) sharing a name prefix.

    from envkey import get_next_env_key

    result = get_next_env_key("OPENAI_API_KEY_", storage="MEMORY")
    if result.key:
        ...
"""
from .models import EnvKeyResult, StorageType
from .services import KeyRotator, get_next_env_key

__all__ = [
    "EnvKeyResult",
    "StorageType",
    "KeyRotator",
    "get_next_env_key",
]
