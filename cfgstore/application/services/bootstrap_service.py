"""
配置引导服务

应用启动时调用：配置文件不存在则写入默认配置，随后加载并返回。
"文件已存在"视为正常情况，其余错误记录日志后继续抛出。
"""

from typing import Optional, Type, TypeVar, Union

from cfgstore.domain.errors import ConfigAlreadyExistsError, ConfigStoreError
from cfgstore.domain.interfaces import Defaultable
from cfgstore.infrastructure.persistence import ConfigStore
from cfgstore.utils.logger import StoreLogger, get_logger


T = TypeVar('T', bound=Defaultable)


class ConfigBootstrapService:
    """
    配置引导服务

    职责:
    - 首次运行时创建默认配置文件
    - 后续运行直接加载已有配置
    """

    def __init__(self, store=None, logger: Optional[StoreLogger] = None):
        """
        Args:
            store: ConfigStore 或 LockedConfigStore，默认新建 ConfigStore
            logger: 日志器
        """
        self.store = store or ConfigStore()
        self.logger = logger or get_logger(__name__)

    def ensure(self, path: str, target: Union[Type[T], T]) -> T:
        """
        确保配置文件存在并加载

        Args:
            path: 配置文件路径
            target: 配置类或配置实例

        Returns:
            加载得到的配置
        """
        try:
            self.store.initialize_if_absent(path, target)
            self.logger.success(f"已创建默认配置: {path}")
        except ConfigAlreadyExistsError:
            self.logger.info(f"使用已有配置: {path}")
        except ConfigStoreError as e:
            self.logger.error(f"初始化配置失败 {path}: {e}")
            raise

        try:
            return self.store.load(path, target)
        except ConfigStoreError as e:
            self.logger.error(f"加载配置失败 {path}: {e}")
            raise


def bootstrap_config(path: str, target: Union[Type[T], T]) -> T:
    """
    便捷函数：确保配置存在并加载

    Args:
        path: 配置文件路径
        target: 配置类或配置实例

    Returns:
        加载得到的配置
    """
    return ConfigBootstrapService().ensure(path, target)
