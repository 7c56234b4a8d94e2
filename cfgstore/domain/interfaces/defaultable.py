"""
可默认化能力接口

定义配置类型必须具备的能力：生成自身的默认实例。
"""

from typing import Protocol, Type, TypeVar, Union, runtime_checkable


T = TypeVar('T', bound='Defaultable')


@runtime_checkable
class Defaultable(Protocol):
    """
    可默认化接口

    职责:
    - 生成该类型完整填充的默认实例
    - 作为 ConfigStore 所有操作的类型约束

    实现方式（通常为 dataclass）:
        @dataclass
        class AppConfig:
            database_url: str = ''

            @classmethod
            def default(cls) -> 'AppConfig':
                return cls(database_url='postgres://localhost:5432')
    """

    @classmethod
    def default(cls):
        """返回默认实例"""
        ...


def resolve_type(target: Union[Type[T], T]) -> Type[T]:
    """
    解析目标配置类型

    Args:
        target: 配置类或配置实例

    Returns:
        配置类
    """
    config_type = target if isinstance(target, type) else type(target)
    if not callable(getattr(config_type, 'default', None)):
        raise TypeError(f"{config_type.__name__} does not provide default()")
    return config_type
