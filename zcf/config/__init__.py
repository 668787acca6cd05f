from __future__ import annotations

from .exceptions import (
    ConfigError,
    ConfigParseError,
    ConfigEditError,
    ConfigValidationError,
    ConfigMigrationError,
    ConfigIOError,
)
from .migration import MigrationResult
from .storage import WriteResult
from .store import (
    ZcfConfigStore,
    get_default_store,
    set_default_store,
    migrate_zcf_config_if_needed,
    read_zcf_config,
    read_zcf_config_async,
    get_zcf_config,
    get_zcf_config_async,
    write_zcf_config,
    save_zcf_config,
    update_zcf_config,
    update_toml_config,
    read_default_toml_config,
)

__all__ = [
    "ZcfConfigStore",
    "MigrationResult",
    "WriteResult",
    "ConfigError",
    "ConfigParseError",
    "ConfigEditError",
    "ConfigValidationError",
    "ConfigMigrationError",
    "ConfigIOError",
    "get_default_store",
    "set_default_store",
    "migrate_zcf_config_if_needed",
    "read_zcf_config",
    "read_zcf_config_async",
    "get_zcf_config",
    "get_zcf_config_async",
    "write_zcf_config",
    "save_zcf_config",
    "update_zcf_config",
    "update_toml_config",
    "read_default_toml_config",
]
