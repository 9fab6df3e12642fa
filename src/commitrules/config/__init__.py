"""Configuration loading, schema, and defaults."""

from commitrules.config.loader import load_config
from commitrules.config.schema import CommitRulesConfig
from commitrules.rules.models import ConfigurationError

__all__ = [
    "CommitRulesConfig",
    "ConfigurationError",
    "load_config",
]
