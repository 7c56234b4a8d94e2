"""
持久化基础设施模块

提供配置实例化、加载、保存和首次初始化功能。
"""
from .config_store import (
    ConfigStore,
    init_config,
    instantiate,
    load_config,
    save_config,
)
from .locked_store import LockedConfigStore

__all__ = [
    'ConfigStore',
    'LockedConfigStore',
    'instantiate',
    'load_config',
    'save_config',
    'init_config',
]
