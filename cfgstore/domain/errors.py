"""
配置存储错误类型

所有错误均继承 ConfigStoreError，同时继承对应的内置异常，
调用方可按任一类型捕获。
"""


class ConfigStoreError(Exception):
    """配置存储错误基类"""


class ConfigIOError(ConfigStoreError, OSError):
    """
    文件系统错误

    目录创建、读取、写入或权限失败。
    构造参数与 OSError 相同: (errno, strerror, filename)。
    """


class ConfigNotFoundError(ConfigIOError, FileNotFoundError):
    """配置文件不存在"""


class ConfigAlreadyExistsError(ConfigStoreError, FileExistsError):
    """配置文件已存在（初始化时）"""


class ConfigDecodeError(ConfigStoreError, ValueError):
    """存储内容不是目标类型的合法 JSON 编码"""


class ConfigEncodeError(ConfigStoreError, TypeError):
    """配置值无法序列化为 JSON"""


def io_error_from(exc: OSError, path: str) -> ConfigIOError:
    """
    将 OSError 转换为对应的配置错误

    Args:
        exc: 原始异常
        path: 出错的文件路径

    Returns:
        ConfigNotFoundError 或 ConfigIOError
    """
    error_cls = ConfigNotFoundError if isinstance(exc, FileNotFoundError) else ConfigIOError
    return error_cls(exc.errno, exc.strerror or str(exc), exc.filename or path)
