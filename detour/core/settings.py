from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from detour.core.rule_sets import RULE_SETS
from detour.utils.logging_setup import parse_log_level

ENV_PREFIX = "PERMANENTDETOUR_"

# Domain at which Primo instances are hosted
PRIMO_DOMAIN = "primo.exlibrisgroup.com"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8877

REDIRECT_STATUS_CODES = {
    "permanent": 301,
    "temporary": 302,
}


def parse_address(address: str) -> tuple[str, int]:
    """
    Split a "host:port" listen address; an empty host means all interfaces.

    IPv6 hosts are written in brackets, which are removed.

    Example:
        >>> parse_address(":8877")
        ('0.0.0.0', 8877)
        >>> parse_address("[::1]:8877")
        ('::1', 8877)
    """
    host, sep, port = address.rpartition(":")
    if not sep:
        raise ValueError(f"Address '{address}' must be in host:port form")
    try:
        port_number = int(port)
    except ValueError:
        raise ValueError(f"Address '{address}' has an invalid port") from None
    if not 0 <= port_number <= 65535:
        raise ValueError(f"Address '{address}' has an out of range port")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host or DEFAULT_HOST, port_number


class Settings(BaseSettings):
    """Application settings.

    Every field can be set with a PERMANENTDETOUR_ prefixed environment
    variable (or in .env); command-line flags take precedence.

    Required:
      - VID: the Primo view ID appended to every redirect
      - PRIMO: subdomain of the target Primo instance, or PRIMO_BASE_URL

    Optional:
      - ADDRESS: listen address in host:port form; overrides HOST and PORT
      - MAPPING_FILES: JSON list of mapping file paths
      - RULE_SET: legacy platform whose URLs are translated (default "sierra")
      - REDIRECT_POLICY: "permanent" (301, default) or "temporary" (302)
      - LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default INFO)
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    address: Optional[str] = None
    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)

    # Target Primo instance
    primo: Optional[str] = Field(
        default=None,
        description="The subdomain of the target Primo instance, ?????.primo.exlibrisgroup.com",
    )
    primo_base_url: Optional[str] = Field(
        default=None,
        description="Full base URL of the Primo instance; overrides primo",
    )
    vid: str = Field(min_length=1, description="VID parameter for Primo")

    rule_set: str = "sierra"
    redirect_policy: Literal["permanent", "temporary"] = "permanent"

    mapping_files: list[Path] = Field(default_factory=list)

    log_level: str = "INFO"

    @field_validator("address")
    @classmethod
    def _valid_address(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            parse_address(value)
        return value

    @field_validator("rule_set")
    @classmethod
    def _known_rule_set(cls, value: str) -> str:
        if value not in RULE_SETS:
            raise ValueError(
                f"Unknown rule set '{value}', expected one of: {', '.join(sorted(RULE_SETS))}"
            )
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        parse_log_level(value)
        return value.upper()

    @model_validator(mode="after")
    def _require_destination(self) -> "Settings":
        if not self.primo and not self.primo_base_url:
            raise ValueError("A primo subdomain is required.")
        return self

    @property
    def listen_address(self) -> tuple[str, int]:
        if self.address:
            return parse_address(self.address)
        return self.host, self.port

    @property
    def destination_base_url(self) -> str:
        if self.primo_base_url:
            return self.primo_base_url.rstrip("/")
        return f"https://{self.primo}.{PRIMO_DOMAIN}"

    @property
    def redirect_status_code(self) -> int:
        return REDIRECT_STATUS_CODES[self.redirect_policy]


def get_settings(**overrides) -> Settings:
    """Resolve settings from the environment; non-None overrides win."""
    return Settings(**{k: v for k, v in overrides.items() if v is not None})
