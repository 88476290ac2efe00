"""Configuration management using pydantic-settings"""

import logging
from pathlib import Path

import toml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment and config.toml"""

    model_config = SettingsConfigDict(
        toml_file='config.toml',
        env_prefix='TRANSMISSION_BRIDGE_',
        case_sensitive=False,
        extra='ignore',
    )

    # Daemon endpoint
    scheme: str = Field(default='http', description='RPC endpoint scheme: http or https')
    host: str = Field(default='127.0.0.1', description='Transmission RPC host')
    port: int = Field(default=9091, description='Transmission RPC port')
    rpc_path: str = Field(default='/transmission/rpc', description='Transmission RPC path')

    # Authentication
    username: str = Field(default='', description='Transmission RPC username (empty disables basic auth)')
    password: str = Field(default='', description='Transmission RPC password')

    # HTTP settings
    timeout: float = Field(default=30.0, description='Request timeout in seconds')
    connect_timeout: float = Field(default=1.0, description='Connect timeout in seconds')
    max_redirects: int = Field(default=2, description='Maximum number of redirects to follow')

    # Daemon information, negotiated with session-get when left unset
    version: str | None = Field(default=None, description='Transmission version, e.g. "2.94 (d8e60ee44f)"')
    kbytes: int | None = Field(default=None, description='Bytes per kilo-unit reported by the daemon: 1000 or 1024')

    # Logging settings
    log_prefix: str = Field(default='transmission_bridge', description='Log prefix for logger names')
    log_level: int = Field(default=logging.INFO, description='Logging level')

    @field_validator('rpc_path', mode='before')
    @classmethod
    def normalize_rpc_path(cls, v: str) -> str:
        """Make sure the RPC path starts with a slash"""
        v = str(v).strip()
        return v if v.startswith('/') else f'/{v}'

    @field_validator('log_level', mode='before')
    @classmethod
    def parse_log_level(cls, v: str | int) -> int:
        """Parse log level from string or int"""
        if isinstance(v, str):
            if v.isdigit():
                return int(v)
            return getattr(logging, v.upper(), logging.INFO)
        return v

    @classmethod
    def from_toml(cls, config_path: str | Path = 'config.toml') -> 'Settings':
        """Load settings from TOML file"""
        config_path = Path(config_path)
        if not config_path.is_absolute():
            # Look for config.toml in project root
            project_root = Path(__file__).parent.parent.parent
            config_path = project_root / config_path

        if config_path.exists():
            config_data = toml.load(config_path)
            return cls(**config_data)
        # If no config file, try to load from environment
        return cls()


# Global settings instance
settings = Settings.from_toml()
