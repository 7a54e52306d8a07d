"""Model with service configuration."""

from pathlib import Path
from typing import Optional

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    Field,
    FilePath,
    PositiveFloat,
    PositiveInt,
    SecretStr,
    constr,
    model_validator,
)
from typing_extensions import Literal, Self

import constants
from utils import checks


class ConfigurationBase(BaseModel):
    """Base class for all configuration models that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid")


class TLSConfiguration(ConfigurationBase):
    """TLS configuration."""

    tls_certificate_path: Optional[FilePath] = None
    tls_key_path: Optional[FilePath] = None
    tls_key_password: Optional[FilePath] = None

    @model_validator(mode="after")
    def check_tls_configuration(self) -> Self:
        """Check that certificate and key are configured together."""
        if (self.tls_certificate_path is None) != (self.tls_key_path is None):
            raise ValueError(
                "TLS certificate and TLS key must be configured together"
            )
        return self


class CORSConfiguration(ConfigurationBase):
    """CORS configuration."""

    allow_origins: list[str] = [
        "*"
    ]  # not AnyHttpUrl: we need to support "*" that is not valid URL
    allow_credentials: bool = False
    allow_methods: list[str] = ["*"]
    allow_headers: list[str] = ["*"]

    @model_validator(mode="after")
    def check_cors_configuration(self) -> Self:
        """Check CORS configuration."""
        # credentials can not be combined with wildcard origins
        # see https://fastapi.tiangolo.com/tutorial/cors/
        if self.allow_credentials and "*" in self.allow_origins:
            raise ValueError(
                "Invalid CORS configuration: allow_credentials can not be set to true when "
                "allow origins contains '*' wildcard."
                "Use explicit origins or disable credential."
            )
        return self


class ServiceConfiguration(ConfigurationBase):
    """Service configuration."""

    host: str = "localhost"
    port: PositiveInt = 8080
    workers: PositiveInt = 1
    color_log: bool = True
    access_log: bool = True
    tls_config: TLSConfiguration = Field(default_factory=TLSConfiguration)
    cors: CORSConfiguration = Field(default_factory=CORSConfiguration)

    @model_validator(mode="after")
    def check_service_configuration(self) -> Self:
        """Check service configuration."""
        if self.port > 65535:
            raise ValueError("Port value should be less than 65536")
        return self


class ProviderConfiguration(ConfigurationBase):
    """One upstream OpenAI compatible chat completion provider.

    Attributes:
        id: Unique provider identification.
        url: Full URL of the chat completions endpoint.
        api_key: Key used when the request itself does not carry one.
        auth_required: Whether the provider refuses anonymous calls.
        models: Models served by this provider, in preference order. An empty
            list means the provider accepts any model requested.
        priority: Lower value is tried first, ties keep configuration order.
        extra_headers: Additional HTTP headers sent with every call.
    """

    id: constr(min_length=1)  # type:ignore
    url: AnyHttpUrl
    api_key: Optional[SecretStr] = None
    auth_required: bool = False
    models: list[str] = Field(default_factory=list)
    priority: int = 0
    extra_headers: dict[str, str] = Field(default_factory=dict)

    def serves(self, model_id: str) -> bool:
        """Check if the provider accepts given model."""
        return not self.models or model_id in self.models


class RouterConfiguration(ConfigurationBase):
    """Provider router configuration."""

    attempt_timeout: PositiveFloat = constants.DEFAULT_ATTEMPT_TIMEOUT
    max_attempts: Optional[PositiveInt] = None
    max_tokens: PositiveInt = constants.DEFAULT_MAX_TOKENS
    temperature: float = Field(default=constants.DEFAULT_TEMPERATURE, ge=0.0, le=2.0)


class WebsiteConfiguration(ConfigurationBase):
    """Website fetching configuration."""

    enabled: bool = True
    timeout: PositiveFloat = constants.DEFAULT_WEBSITE_TIMEOUT
    max_chars: PositiveInt = constants.DEFAULT_MAX_WEBSITE_CHARS
    user_agent: str = constants.WEBSITE_USER_AGENT


class SearchConfiguration(ConfigurationBase):
    """Web search configuration.

    The search endpoint receives JSON body with `query` and `max_results`
    attributes and is expected to return `results` list with `title`, `url`
    and `content` attributes.
    """

    url: Optional[AnyHttpUrl] = None
    api_key: Optional[SecretStr] = None
    timeout: PositiveFloat = constants.DEFAULT_SEARCH_TIMEOUT
    max_results: PositiveInt = constants.DEFAULT_SEARCH_RESULTS

    @property
    def enabled(self) -> bool:
        """Check if search endpoint is configured."""
        return self.url is not None


class ContextConfiguration(ConfigurationBase):
    """Supplementary context gathering configuration."""

    timeout: PositiveFloat = constants.DEFAULT_CONTEXT_TIMEOUT
    max_reference_chars: PositiveInt = constants.DEFAULT_MAX_REFERENCE_CHARS
    website: WebsiteConfiguration = Field(default_factory=WebsiteConfiguration)
    search: SearchConfiguration = Field(default_factory=SearchConfiguration)


class GenerationCacheConfiguration(ConfigurationBase):
    """Configuration of cache deduplicating identical generation requests."""

    retention_seconds: PositiveFloat = constants.DEFAULT_CACHE_RETENTION_SECONDS
    max_entries: PositiveInt = constants.DEFAULT_CACHE_MAX_ENTRIES


class SQLiteDatabaseConfiguration(ConfigurationBase):
    """SQLite database configuration."""

    db_path: str


class FileStorageConfiguration(ConfigurationBase):
    """JSON file storage configuration."""

    path: str

    @model_validator(mode="after")
    def check_file_storage_configuration(self) -> Self:
        """Check that the directory for storage file can be used."""
        checks.directory_check(
            Path(self.path).parent,
            desc="Check directory to store history",
            must_exists=False,
            must_be_writable=True,
        )
        return self


class HistoryConfiguration(ConfigurationBase):
    """Generation history configuration."""

    max_entries: PositiveInt = constants.DEFAULT_HISTORY_MAX_ENTRIES
    storage: Literal["noop", "file", "sqlite"] = constants.HISTORY_STORAGE_NOOP
    file: Optional[FileStorageConfiguration] = None
    sqlite: Optional[SQLiteDatabaseConfiguration] = None

    @model_validator(mode="after")
    def check_history_configuration(self) -> Self:
        """Check that selected storage is configured."""
        match self.storage:
            case constants.HISTORY_STORAGE_FILE:
                if self.file is None:
                    raise ValueError("File storage is selected, but not configured")
                if self.sqlite is not None:
                    raise ValueError("Only file storage config must be provided")
            case constants.HISTORY_STORAGE_SQLITE:
                if self.sqlite is None:
                    raise ValueError("SQLite storage is selected, but not configured")
                if self.file is not None:
                    raise ValueError("Only SQLite storage config must be provided")
            case constants.HISTORY_STORAGE_NOOP:
                if any([self.file, self.sqlite]):
                    raise ValueError(
                        "History storage type must be set when backend configuration is provided"
                    )
        return self


class Customization(ConfigurationBase):
    """Service customization."""

    system_prompt_path: Optional[FilePath] = None
    system_prompt: Optional[str] = None

    @model_validator(mode="after")
    def check_customization_model(self) -> Self:
        """Load system prompt from file when configured."""
        if self.system_prompt_path is not None:
            checks.file_check(self.system_prompt_path, "system prompt")
            self.system_prompt = checks.get_attribute_from_file(
                dict(self), "system_prompt_path"
            )
        return self


class Configuration(ConfigurationBase):
    """Global service configuration."""

    name: str
    service: ServiceConfiguration = Field(default_factory=ServiceConfiguration)
    providers: list[ProviderConfiguration] = Field(default_factory=list)
    router: RouterConfiguration = Field(default_factory=RouterConfiguration)
    context: ContextConfiguration = Field(default_factory=ContextConfiguration)
    generation_cache: GenerationCacheConfiguration = Field(
        default_factory=GenerationCacheConfiguration
    )
    history: HistoryConfiguration = Field(default_factory=HistoryConfiguration)
    customization: Optional[Customization] = None

    @model_validator(mode="after")
    def check_providers(self) -> Self:
        """Check that provider identifications are unique."""
        ids = [provider.id for provider in self.providers]
        if len(ids) != len(set(ids)):
            raise ValueError("Provider identifications must be unique")
        return self

    def dump(self, filename: str = "configuration.json") -> None:
        """Dump actual configuration into JSON file."""
        with open(filename, "w", encoding="utf-8") as fout:
            fout.write(self.model_dump_json(indent=4))
