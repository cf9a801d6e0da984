import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from guidelint_syntax import GuidelintError
from guidelint_linter import LinterEngine, RuleRegistry, RuleSettings, Severity, registry

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = ".guidelint.toml"


class ConfigError(GuidelintError):
    """Raised when the configuration file is missing, malformed or names unknown rules"""


class RuleConfig(BaseModel):
    """One `[tool.guidelint.rules.<id>]` table; keys other than these are rule options"""

    model_config = ConfigDict(extra="allow")

    enabled: bool = True
    severity: Severity | None = None

    @field_validator("severity", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class GuidelintSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    select: list[str] = ["ALL"]
    ignore: list[str] = []
    exclude: list[str] = []
    jobs: int | None = Field(default=None, ge=1)
    rules: dict[str, RuleConfig] = {}


class LintConfig:
    """Handles loading and validation of guidelint configuration"""

    def __init__(self, config_path: Path | None = None, rule_registry: RuleRegistry | None = None):
        self.registry = rule_registry or registry
        self.select: list[str] = ["ALL"]
        self.ignore: list[str] = []
        self.exclude: list[str] = []
        self.jobs: int | None = None
        self.rule_settings: dict[str, RuleSettings] = {}

        if config_path is not None:
            if not config_path.is_file():
                raise ConfigError(f"Config file not found: {config_path}")
            self._load_from_file(config_path)
        else:
            for candidate in (DEFAULT_CONFIG_NAME, "pyproject.toml"):
                if Path(candidate).is_file():
                    self._load_from_file(Path(candidate))
                    break

    def _load_from_file(self, path: Path):
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"{path}: invalid TOML: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"{path}: cannot read config: {exc}") from exc

        section = data.get("tool", {}).get("guidelint", {})
        try:
            settings = GuidelintSettings.model_validate(section)
        except ValidationError as exc:
            raise ConfigError(f"{path}: invalid [tool.guidelint] section:\n{exc}") from exc

        self.select = settings.select
        self.ignore = settings.ignore
        self.exclude = settings.exclude
        self.jobs = settings.jobs
        for key, rule_config in settings.rules.items():
            self._add_rule_settings(path, key, rule_config)
        logger.debug("Loaded configuration from %s", path)

    def _add_rule_settings(self, path: Path, key: str, rule_config: RuleConfig):
        try:
            rule = self.registry.get(key)
        except KeyError:
            raise ConfigError(f"{path}: unknown rule '{key}'") from None
        try:
            options = rule.options.model_validate(rule_config.model_extra or {})
        except ValidationError as exc:
            raise ConfigError(f"{path}: invalid options for rule '{rule.rule_id}':\n{exc}") from exc
        self.rule_settings[rule.rule_id] = RuleSettings(
            enabled=rule_config.enabled,
            severity=rule_config.severity,
            options=options,
        )

    def create_engine(self) -> LinterEngine:
        """Build an engine with the selected rules and their validated settings"""
        return LinterEngine(
            registry=self.registry,
            settings=self.rule_settings,
            select=self.select,
            ignore=self.ignore,
        )
