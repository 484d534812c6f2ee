"""
Errors raised inside the rotation pipeline.

None of these cross `get_next_env_key()`; the boundary turns them into an
`EnvKeyResult` whose message starts with "Error: ".
"""


class EnvKeyError(Exception):
    """Base class for rotation failures."""


class NoCandidatesError(EnvKeyError, ValueError):
    def __init__(self, base_env_name: str):
        super().__init__(f"No environment variables found with base name {base_env_name}.")
        self.base_env_name = base_env_name


class MissingRemoteCredentialsError(EnvKeyError, RuntimeError):
    def __init__(self):
        super().__init__(
            "DB_USERNAME, DB_PASSWORD, and DB_NAME environment variables "
            "must be set for database storage."
        )


class RemoteConnectionError(EnvKeyError, ConnectionError):
    """Raised once the connection retry budget is spent."""

    def __init__(self, attempts: int, last_error: Exception):
        super().__init__(f"Could not connect to MongoDB after {attempts} attempt(s): {last_error}")
        self.attempts = attempts
        self.last_error = last_error
