"""
Registry Configuration

Environment-based settings for the schema server and the validators it builds.

Environment variables (a .env file in the working directory is honoured):
- SCHEMA_REGISTRY_HOST: Bind address (default: 0.0.0.0)
- SCHEMA_REGISTRY_PORT: Bind port (default: 8000)
- SCHEMA_REGISTRY_SCHEMA_DIR: Directory of hosted schemas (default: bundled schemas)
- SCHEMA_REGISTRY_PUBLIC_URL: Base URL used in the schema catalog
  (default: http://localhost:<port>)
- SCHEMA_REGISTRY_FETCH_TIMEOUT: Seconds before add_from_url gives up (unset = never)
- SCHEMA_REGISTRY_COERCE_TYPES: "false" disables type coercion
- SCHEMA_REGISTRY_USE_DEFAULTS: "false" disables default injection
- SCHEMA_REGISTRY_ALL_ERRORS: "false" stops at the first violation
- SCHEMA_REGISTRY_LOG_LEVEL: Logging level (default: INFO)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from schema_registry.validation import ValidatorOptions

# Schemas shipped with the package
BUNDLED_SCHEMA_DIR = Path(__file__).parent / "schemas"


@dataclass
class RegistrySettings:
    """
    Configuration for the schema server and registry.

    Attributes:
        host: Bind address for the HTTP server
        port: Bind port for the HTTP server
        schema_dir: Directory served under /schemas and preloaded for /validate
        public_url: Base URL advertised in the schema catalog
        fetch_timeout: Timeout in seconds for remote schema fetches (None = no timeout)
        coerce_types: Coerce scalar values toward declared types
        use_defaults: Inject schema defaults into missing properties
        all_errors: Collect every violation rather than the first
        log_level: Root logging level name
    """
    host: str = "0.0.0.0"
    port: int = 8000
    schema_dir: Path = field(default_factory=lambda: BUNDLED_SCHEMA_DIR)
    public_url: str | None = None
    fetch_timeout: float | None = None
    coerce_types: bool = True
    use_defaults: bool = True
    all_errors: bool = True
    log_level: str = "INFO"

    @property
    def base_url(self) -> str:
        """Public base URL without trailing slash."""
        return (self.public_url or f"http://localhost:{self.port}").rstrip("/")

    def validator_options(self) -> ValidatorOptions:
        return ValidatorOptions(
            coerce_types=self.coerce_types,
            use_defaults=self.use_defaults,
            all_errors=self.all_errors,
        )


def _env_flag(name: str, default: bool = True) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in ("false", "0", "no", "off")


def settings_from_env() -> RegistrySettings:
    """Create RegistrySettings from environment variables (see module docstring)."""
    load_dotenv()

    timeout = os.getenv("SCHEMA_REGISTRY_FETCH_TIMEOUT")
    schema_dir = os.getenv("SCHEMA_REGISTRY_SCHEMA_DIR")

    return RegistrySettings(
        host=os.getenv("SCHEMA_REGISTRY_HOST", "0.0.0.0"),
        port=int(os.getenv("SCHEMA_REGISTRY_PORT", "8000")),
        schema_dir=Path(schema_dir) if schema_dir else BUNDLED_SCHEMA_DIR,
        public_url=os.getenv("SCHEMA_REGISTRY_PUBLIC_URL"),
        fetch_timeout=float(timeout) if timeout else None,
        coerce_types=_env_flag("SCHEMA_REGISTRY_COERCE_TYPES"),
        use_defaults=_env_flag("SCHEMA_REGISTRY_USE_DEFAULTS"),
        all_errors=_env_flag("SCHEMA_REGISTRY_ALL_ERRORS"),
        log_level=os.getenv("SCHEMA_REGISTRY_LOG_LEVEL", "INFO").upper(),
    )
