"""
配置持久化适配器 - 基础设施层

负责配置的实例化、加载、保存和首次初始化。
所有错误直接抛给调用方，本模块不记录日志、不重试。
"""

import dataclasses
import os
import uuid
from typing import Optional, Type, TypeVar, Union

from cfgstore import config
from cfgstore.config import StoreSettings
from cfgstore.domain.errors import (
    ConfigAlreadyExistsError,
    ConfigDecodeError,
    io_error_from,
)
from cfgstore.domain.interfaces import Defaultable, resolve_type
from . import json_codec


T = TypeVar('T', bound=Defaultable)


class ConfigStore:
    """配置存储管理器"""

    def __init__(self, settings: Optional[StoreSettings] = None):
        if settings is None:
            settings = config.store_settings
        self.settings = settings

    def instantiate(self, target: Union[Type[T], T]) -> T:
        """
        生成默认配置（不访问文件系统）

        Args:
            target: 配置类或配置实例

        Returns:
            新的默认实例
        """
        return resolve_type(target).default()

    def load(self, path: str, target: Union[Type[T], T]) -> T:
        """
        加载配置

        target 为实例时，文件中出现的字段就地覆盖到该实例上
        （frozen dataclass 除外，只通过返回值提供结果）。
        解码全部成功后才会修改 target。

        Args:
            path: 配置文件路径
            target: 配置类或配置实例

        Returns:
            加载得到的配置
        """
        config_type = resolve_type(target)
        base = None if isinstance(target, type) else target

        try:
            with open(path, 'r', encoding=self.settings.encoding) as f:
                text = f.read()
        except UnicodeDecodeError as e:
            raise ConfigDecodeError(f"{path}: not valid {self.settings.encoding} text") from e
        except OSError as e:
            raise io_error_from(e, path) from e

        loaded = json_codec.loads(config_type, text, base)

        if base is None:
            return loaded
        params = getattr(config_type, '__dataclass_params__', None)
        if params is not None and params.frozen:
            return loaded
        for f in dataclasses.fields(config_type):
            if f.init:
                setattr(base, f.name, getattr(loaded, f.name))
        return base

    def save(self, path: str, value: Defaultable) -> None:
        """
        保存配置，完全替换已有内容

        不会创建缺失的父目录。

        Args:
            path: 配置文件路径
            value: 配置实例
        """
        text = json_codec.dumps(
            value,
            indent=self.settings.indent,
            ensure_ascii=self.settings.ensure_ascii,
        )
        data = text.encode(self.settings.encoding)

        if self.settings.atomic_save:
            self._write_atomic(path, data)
        else:
            self._write(path, data, os.O_WRONLY | os.O_CREAT | os.O_TRUNC)

    def initialize_if_absent(self, path: str, target: Union[Type[T], T]) -> None:
        """
        首次运行初始化：文件不存在时创建父目录并写入默认配置

        Args:
            path: 配置文件路径
            target: 配置类或配置实例

        Raises:
            ConfigAlreadyExistsError: 文件已存在（不做任何修改）
            ConfigIOError: 存在性检查或目录创建失败
        """
        try:
            os.stat(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise io_error_from(e, path) from e
        else:
            raise ConfigAlreadyExistsError(f"configuration file {path} already exists")

        parent = os.path.dirname(path)
        if parent:
            try:
                os.makedirs(parent, mode=self.settings.dir_mode, exist_ok=True)
            except OSError as e:
                raise io_error_from(e, parent) from e

        self.save(path, self.instantiate(target))

    # ============================================================
    # 写入
    # ============================================================

    def _write(self, path: str, data: bytes, flags: int) -> None:
        try:
            fd = os.open(path, flags, self.settings.file_mode)
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
        except OSError as e:
            raise io_error_from(e, path) from e

    def _write_atomic(self, path: str, data: bytes) -> None:
        directory, name = os.path.split(path)
        tmp_path = os.path.join(directory, f".{name}.{uuid.uuid4().hex}.tmp")
        try:
            self._write(tmp_path, data, os.O_WRONLY | os.O_CREAT | os.O_EXCL)
            try:
                os.replace(tmp_path, path)
            except OSError as e:
                raise io_error_from(e, path) from e
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


# ============================================================
# 便捷函数（使用全局设置）
# ============================================================

def instantiate(target: Union[Type[T], T]) -> T:
    """生成默认配置"""
    return ConfigStore().instantiate(target)


def load_config(path: str, target: Union[Type[T], T]) -> T:
    """从文件加载配置"""
    return ConfigStore().load(path, target)


def save_config(path: str, value: Defaultable) -> None:
    """保存配置到文件"""
    ConfigStore().save(path, value)


def init_config(path: str, target: Union[Type[T], T]) -> None:
    """配置文件不存在时写入默认配置"""
    ConfigStore().initialize_if_absent(path, target)
