"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have defaults. Override what you need::

        config = AppConfig(port=8080, debug=True)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False  # single worker with auto-reload
    workers: int = 1

    # Logging
    log_level: str = "info"

    # Request pipeline: run the JSON body reader before any other middleware
    parse_json_body: bool = True
