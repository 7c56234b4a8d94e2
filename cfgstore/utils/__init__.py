"""
Utils 模块初始化文件
"""

from .logger import StoreLogger, get_logger

__all__ = [
    'StoreLogger',
    'get_logger',
]
