"""Service settings with the command-line defaults and database DSN assembly."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping


@dataclass
class DatabaseConfig:
    host: str = "localhost"
    port: str = "5432"
    sslmode: str = "disable"
    dbname: str = "name"
    user: str = ""
    password: str = ""
    connection_string: str = ""


@dataclass
class MetricsConfig:
    port: int = 9909


@dataclass
class APIConfig:
    port: str = "3001"
    dev_cors: bool = False
    dev_cors_host: str = ""


@dataclass
class AddressesConfig:
    bond: str = ""
    exclude_transfers: list[str] = field(default_factory=list)


@dataclass
class Settings:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    metrics: MetricsConfig = field(default_factory=MetricsConfig)
    api: APIConfig = field(default_factory=APIConfig)
    addresses: AddressesConfig = field(default_factory=AddressesConfig)


def build_connection_string(database: DatabaseConfig) -> str:
    """Return the explicit connection string, or one built from the parts."""
    if database.connection_string:
        return database.connection_string
    return (
        f"host={database.host} port={database.port} sslmode={database.sslmode} "
        f"dbname={database.dbname} user={database.user} password={database.password}"
    )


_TRUE = {"1", "t", "true"}
_FALSE = {"", "0", "f", "false"}


def _as_str(key: str, value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(f"{key}: expected a string, got {type(value).__name__}")


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip() or "0", 0)
        except ValueError:
            raise ValueError(f"{key}: cannot parse {value!r} as an integer") from None
    raise ValueError(f"{key}: expected an integer, got {type(value).__name__}")


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ValueError(f"{key}: cannot parse {value!r} as a boolean")
    raise ValueError(f"{key}: expected a boolean, got {type(value).__name__}")


def _as_str_list(key: str, value: Any) -> list[str]:
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        return [_as_str(key, item) for item in value]
    raise ValueError(f"{key}: expected a list of strings, got {type(value).__name__}")


def _section(data: Mapping[str, Any], name: str) -> dict[str, Any]:
    raw = data.get(name)
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"{name}: expected a mapping, got {type(raw).__name__}")
    return {str(k).lower(): v for k, v in raw.items()}


def load_settings(data: Mapping[str, Any] | None = None) -> Settings:
    """Build settings from nested configuration data, keys matched case-insensitively."""
    top = {str(k).lower(): v for k, v in (data or {}).items()}
    db = _section(top, "db")
    metrics = _section(top, "metrics")
    api = _section(top, "api")
    addresses = _section(top, "addresses")

    database = DatabaseConfig()
    for attr, key in (
        ("host", "host"),
        ("port", "port"),
        ("sslmode", "sslmode"),
        ("dbname", "dbname"),
        ("user", "user"),
        ("password", "password"),
        ("connection_string", "connection-string"),
    ):
        if key in db:
            setattr(database, attr, _as_str(f"db.{key}", db[key]))
    database = replace(database, connection_string=build_connection_string(database))

    metrics_config = MetricsConfig()
    if "port" in metrics:
        metrics_config.port = _as_int("metrics.port", metrics["port"])

    api_config = APIConfig()
    if "port" in api:
        api_config.port = _as_str("api.port", api["port"])
    if "dev-cors" in api:
        api_config.dev_cors = _as_bool("api.dev-cors", api["dev-cors"])
    if "dev-cors-host" in api:
        api_config.dev_cors_host = _as_str("api.dev-cors-host", api["dev-cors-host"])

    addresses_config = AddressesConfig()
    if "bond" in addresses:
        addresses_config.bond = _as_str("addresses.bond", addresses["bond"])
    if "exclude-transfers" in addresses:
        addresses_config.exclude_transfers = _as_str_list(
            "addresses.exclude-transfers", addresses["exclude-transfers"]
        )

    return Settings(
        database=database,
        metrics=metrics_config,
        api=api_config,
        addresses=addresses_config,
    )