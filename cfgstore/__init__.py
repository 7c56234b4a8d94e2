"""
cfgstore - 基于 JSON 文件的通用配置持久化

用法:
    from dataclasses import dataclass
    from cfgstore import init_config, load_config, save_config

    @dataclass
    class AppConfig:
        api_key: str = ''

        @classmethod
        def default(cls):
            return cls(api_key='abc123')

    init_config('configs/app.json', AppConfig)
    config = load_config('configs/app.json', AppConfig)
"""

__version__ = "1.0.0"

from .domain.errors import (
    ConfigStoreError,
    ConfigIOError,
    ConfigNotFoundError,
    ConfigAlreadyExistsError,
    ConfigDecodeError,
    ConfigEncodeError,
)
from .domain.interfaces import Defaultable
from .infrastructure.persistence import (
    ConfigStore,
    LockedConfigStore,
    instantiate,
    load_config,
    save_config,
    init_config,
)
from .application.services import ConfigBootstrapService, bootstrap_config

__all__ = [
    'Defaultable',
    'ConfigStore',
    'LockedConfigStore',
    'ConfigBootstrapService',
    'instantiate',
    'load_config',
    'save_config',
    'init_config',
    'bootstrap_config',
    'ConfigStoreError',
    'ConfigIOError',
    'ConfigNotFoundError',
    'ConfigAlreadyExistsError',
    'ConfigDecodeError',
    'ConfigEncodeError',
]
