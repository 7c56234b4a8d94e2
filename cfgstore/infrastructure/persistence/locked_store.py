"""
带锁的配置存储 - 基础设施层

在 ConfigStore 之上按文件路径串行化读写，
用于同一进程内多线程共享配置文件的场景。
不提供跨进程保证。
"""

import os
import threading
import weakref
from typing import Optional, Type, TypeVar, Union

from cfgstore.domain.interfaces import Defaultable
from .config_store import ConfigStore


T = TypeVar('T', bound=Defaultable)


class LockedConfigStore:
    """
    按路径加锁的配置存储

    接口与 ConfigStore 一致，每个规范化后的绝对路径对应一把 RLock。
    注册表只持有弱引用，没有调用方持有的锁会被回收。
    """

    def __init__(self, store: Optional[ConfigStore] = None):
        self.store = store or ConfigStore()
        self._locks: "weakref.WeakValueDictionary[str, threading.RLock]" = weakref.WeakValueDictionary()
        self._registry_lock = threading.Lock()

    def lock_for(self, path: str) -> threading.RLock:
        """获取路径对应的锁（不存在则创建）"""
        key = os.path.normcase(os.path.abspath(path))
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock

    def instantiate(self, target: Union[Type[T], T]) -> T:
        return self.store.instantiate(target)

    def load(self, path: str, target: Union[Type[T], T]) -> T:
        with self.lock_for(path):
            return self.store.load(path, target)

    def save(self, path: str, value: Defaultable) -> None:
        with self.lock_for(path):
            self.store.save(path, value)

    def initialize_if_absent(self, path: str, target: Union[Type[T], T]) -> None:
        with self.lock_for(path):
            self.store.initialize_if_absent(path, target)
