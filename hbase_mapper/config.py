# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - HBaseConfig (dataclass)
#     host: str              (default "localhost")
#     port: int              (default 9090, the Thrift server)
#     table_prefix: str|None (default None)
#     timeout_ms: int|None   (default None, no socket timeout)
#     transport: str         (default "buffered")
#     protocol: str          (default "binary")
#     pool_size: int         (default 4)
#
# - SchemaConfig (dataclass)
#     schema_name: str              (default "HBase")
#     row_key_name: str             (default "_id")
#     default_row_key_type: ColumnType (default STRING)
#     max_rows: int                 (default -1, unlimited scans)
#
# - AppConfig (dataclass)
#     hbase: HBaseConfig
#     schema: SchemaConfig
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Forget the singleton (tests).
#
# - create_connection_pool(hbase_config) -> happybase.ConnectionPool
#
# USAGE:
# ------
#   from hbase_mapper.config import get_config
#   config = get_config()
#   print(config.hbase.host)
#   print(config.schema.row_key_name)
#
# ==============================================

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import happybase
from dotenv import load_dotenv

from hbase_mapper.schema.column import DEFAULT_ROW_KEY_NAME
from hbase_mapper.schema.column_type import ColumnType


@dataclass
class HBaseConfig:
    """HBase Thrift server configuration."""
    host: str = "localhost"
    port: int = 9090
    table_prefix: Optional[str] = None
    timeout_ms: Optional[int] = None
    transport: str = "buffered"
    protocol: str = "binary"
    pool_size: int = 4


@dataclass
class SchemaConfig:
    """How HBase tables are exposed as relational tables."""
    schema_name: str = "HBase"
    row_key_name: str = DEFAULT_ROW_KEY_NAME
    default_row_key_type: ColumnType = ColumnType.STRING
    max_rows: int = -1


@dataclass
class AppConfig:
    """Main application configuration."""
    hbase: HBaseConfig = field(default_factory=HBaseConfig)
    schema: SchemaConfig = field(default_factory=SchemaConfig)


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _optional_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value else None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    hbase_config = HBaseConfig(
        host=os.getenv("HBASE_HOST", "localhost"),
        port=int(os.getenv("HBASE_PORT", "9090")),
        table_prefix=os.getenv("HBASE_TABLE_PREFIX") or None,
        timeout_ms=_optional_int(os.getenv("HBASE_TIMEOUT_MS")),
        transport=os.getenv("HBASE_TRANSPORT", "buffered"),
        protocol=os.getenv("HBASE_PROTOCOL", "binary"),
        pool_size=int(os.getenv("HBASE_POOL_SIZE", "4"))
    )

    schema_config = SchemaConfig(
        schema_name=os.getenv("HBASE_SCHEMA_NAME", "HBase"),
        row_key_name=os.getenv("HBASE_ROW_KEY_NAME", DEFAULT_ROW_KEY_NAME),
        default_row_key_type=ColumnType.parse(os.getenv("HBASE_DEFAULT_ROW_KEY_TYPE", "STRING")),
        max_rows=int(os.getenv("HBASE_MAX_ROWS", "-1"))
    )

    _config_instance = AppConfig(hbase=hbase_config, schema=schema_config)
    return _config_instance


def reset_config() -> None:
    global _config_instance
    _config_instance = None


def create_connection_pool(hbase_config: HBaseConfig) -> happybase.ConnectionPool:
    # happybase opens the first connection right away, so a bad host fails here
    return happybase.ConnectionPool(
        size=hbase_config.pool_size,
        host=hbase_config.host,
        port=hbase_config.port,
        table_prefix=hbase_config.table_prefix,
        timeout=hbase_config.timeout_ms,
        transport=hbase_config.transport,
        protocol=hbase_config.protocol
    )
