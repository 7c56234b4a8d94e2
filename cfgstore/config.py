"""
cfgstore 设置中心

集中管理存储行为参数（缩进、文件权限、原子写入等）。
支持从环境变量读取设置。

用法:
    from cfgstore.config import store_settings

    # 访问设置
    indent = store_settings.indent
    atomic = store_settings.atomic_save
"""

import os
from dataclasses import dataclass


@dataclass
class StoreSettings:
    """
    存储设置

    控制配置文件的编码和写入行为。
    """
    indent: int = 2                 # JSON 缩进空格数
    encoding: str = 'utf-8'         # 文件编码
    file_mode: int = 0o644          # 新建文件权限（受 umask 影响）
    dir_mode: int = 0o777           # 新建目录权限（受 umask 影响）
    ensure_ascii: bool = False      # 是否转义非 ASCII 字符
    atomic_save: bool = False       # 是否先写临时文件再替换


def _get_env_int(key: str, default: int) -> int:
    """从环境变量获取整数设置"""
    value = os.environ.get(key)
    if value:
        try:
            return int(value)
        except ValueError:
            pass
    return default


def _get_env_bool(key: str, default: bool) -> bool:
    """从环境变量获取布尔设置"""
    value = os.environ.get(key)
    if value:
        lowered = value.strip().lower()
        if lowered in ('1', 'true', 'yes', 'on'):
            return True
        if lowered in ('0', 'false', 'no', 'off'):
            return False
    return default


def _settings_from_env() -> StoreSettings:
    return StoreSettings(
        indent=_get_env_int('CFGSTORE_INDENT', 2),
        atomic_save=_get_env_bool('CFGSTORE_ATOMIC_SAVE', False),
    )


# ============================================================
# 全局设置实例
# ============================================================

store_settings = _settings_from_env()


def reload_settings() -> StoreSettings:
    """
    重新加载设置

    从环境变量重新读取设置。

    Returns:
        新的设置实例
    """
    global store_settings
    store_settings = _settings_from_env()
    return store_settings
