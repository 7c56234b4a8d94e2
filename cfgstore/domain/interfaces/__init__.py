# Domain Interfaces

"""
领域接口 - 抽象契约定义

使用 Python Protocol (Structural Subtyping) 定义接口，
配置类型无需继承即可满足约束。
"""

from .defaultable import Defaultable, resolve_type

__all__ = [
    'Defaultable',
    'resolve_type',
]
