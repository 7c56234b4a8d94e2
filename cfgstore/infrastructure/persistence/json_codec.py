"""
JSON 编解码器 - 基础设施层

负责 dataclass 配置值与 JSON 文本之间的转换。

解码规则:
- 按字段类型注解逐层校验，类型不符抛出 ConfigDecodeError
- 文件中缺失的字段保留基准值（默认实例或调用方传入的实例）
- 文件中多余的键被忽略
- 字段的 JSON 键名可通过 field(metadata={'json': 'name'}) 指定
- 枚举字段以其 value 存储，加载时按枚举类型还原
- 定长 Tuple[X, Y] 按位置校验，Tuple[X, ...] 按元素校验
"""

import dataclasses
import enum
import json
import sys
import types
from typing import (
    Any, Dict, ForwardRef, Optional, Type, TypeVar, Union, get_args, get_origin, get_type_hints,
)

from cfgstore.domain.errors import ConfigDecodeError, ConfigEncodeError


T = TypeVar('T')

JSON_KEY = 'json'

_UNION_TYPES = (Union, types.UnionType) if hasattr(types, 'UnionType') else (Union,)


def json_key(f: dataclasses.Field) -> str:
    """获取字段对应的 JSON 键名"""
    return f.metadata.get(JSON_KEY, f.name)


def _is_dataclass_type(tp: Any) -> bool:
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def _init_fields(cls: type):
    return [f for f in dataclasses.fields(cls) if f.init]


# ============================================================
# 编码
# ============================================================

def encode(value: Any) -> Any:
    """
    将配置值转换为可 JSON 序列化的结构

    Args:
        value: dataclass 实例或其字段值

    Returns:
        dict / list / 基础类型
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {json_key(f): encode(getattr(value, f.name)) for f in _init_fields(type(value))}
    if isinstance(value, enum.Enum):
        return encode(value.value)
    if isinstance(value, (list, tuple)):
        return [encode(item) for item in value]
    if isinstance(value, dict):
        encoded = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise ConfigEncodeError(f"dict key {key!r} is not a string")
            encoded[key] = encode(item)
        return encoded
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    raise ConfigEncodeError(f"value of type {type(value).__name__} is not JSON serializable")


def dumps(value: Any, indent: Optional[int] = 2, ensure_ascii: bool = False) -> str:
    """
    序列化配置值为 JSON 文本

    Args:
        value: dataclass 配置实例
        indent: 缩进空格数
        ensure_ascii: 是否转义非 ASCII 字符

    Returns:
        JSON 文本
    """
    if not (dataclasses.is_dataclass(value) and not isinstance(value, type)):
        raise ConfigEncodeError(
            f"configuration value must be a dataclass instance, got {type(value).__name__}"
        )
    try:
        return json.dumps(encode(value), indent=indent, ensure_ascii=ensure_ascii)
    except (TypeError, ValueError) as e:
        raise ConfigEncodeError(str(e)) from e


# ============================================================
# 解码
# ============================================================

def _type_name(tp: Any) -> str:
    return getattr(tp, '__name__', None) or str(tp)


def _mismatch(where: str, tp: Any, data: Any) -> ConfigDecodeError:
    return ConfigDecodeError(
        f"{where}: expected {_type_name(tp)}, got {type(data).__name__}"
    )


def _decode_value(tp: Any, data: Any, current: Any, where: str) -> Any:
    if tp is Any:
        return data

    if isinstance(tp, (str, ForwardRef)):
        raise ConfigDecodeError(f"{where}: cannot resolve type annotation {tp!r}")

    origin = get_origin(tp)

    if origin in _UNION_TYPES:
        args = get_args(tp)
        if data is None:
            if type(None) in args:
                return None
            raise _mismatch(where, tp, data)
        errors = []
        for arg in args:
            if arg is type(None):
                continue
            try:
                return _decode_value(arg, data, current, where)
            except ConfigDecodeError as e:
                errors.append(str(e))
        raise ConfigDecodeError('; '.join(errors) or f"{where}: no matching type")

    if data is None:
        raise _mismatch(where, tp, data)

    if origin in (list, tuple) or tp in (list, tuple):
        if not isinstance(data, list):
            raise _mismatch(where, tp, data)
        args = get_args(tp)
        if (origin or tp) is tuple and args and args[-1] is not Ellipsis:
            if len(data) != len(args):
                raise ConfigDecodeError(
                    f"{where}: expected {len(args)} items, got {len(data)}"
                )
            return tuple(
                _decode_value(item_tp, item, None, f"{where}[{i}]")
                for i, (item_tp, item) in enumerate(zip(args, data))
            )
        item_tp = args[0] if args else Any
        items = [_decode_value(item_tp, item, None, f"{where}[{i}]") for i, item in enumerate(data)]
        return tuple(items) if (origin or tp) is tuple else items

    if origin is dict or tp is dict:
        if not isinstance(data, dict):
            raise _mismatch(where, tp, data)
        args = get_args(tp)
        value_tp = args[1] if len(args) == 2 else Any
        return {
            key: _decode_value(value_tp, item, None, f"{where}.{key}")
            for key, item in data.items()
        }

    if _is_dataclass_type(tp):
        return _decode_dataclass(tp, data, current, where)

    if isinstance(tp, type) and issubclass(tp, enum.Enum):
        if isinstance(data, bool):
            raise _mismatch(where, tp, data)
        try:
            return tp(data)
        except ValueError as e:
            raise ConfigDecodeError(f"{where}: {data!r} is not a valid {tp.__name__}") from e

    if tp is bool:
        if not isinstance(data, bool):
            raise _mismatch(where, tp, data)
        return data

    if tp is int:
        if isinstance(data, bool) or not isinstance(data, int):
            raise _mismatch(where, tp, data)
        return data

    if tp is float:
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            raise _mismatch(where, tp, data)
        return float(data)

    if tp is str:
        if not isinstance(data, str):
            raise _mismatch(where, tp, data)
        return data

    if isinstance(tp, type) and not isinstance(data, tp):
        raise _mismatch(where, tp, data)
    return data


def _field_types(cls: type) -> Dict[str, Any]:
    try:
        return get_type_hints(cls)
    except (NameError, TypeError):
        # 局部类或前向引用无法整体解析时，逐字段处理
        return {f.name: f.type for f in dataclasses.fields(cls)}


def _resolve_annotation(cls: type, annotation: str, existing: Any, where: str) -> Any:
    """
    解析字符串形式的字段注解

    依次尝试: 类所在模块的全局命名空间、当前字段值的类型。

    Raises:
        ConfigDecodeError: 无法解析
    """
    module = sys.modules.get(cls.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    try:
        return eval(annotation, globalns, {cls.__name__: cls})
    except (NameError, AttributeError, SyntaxError, TypeError):
        pass
    if existing is not None and type(existing).__name__ == annotation.strip('\'"'):
        return type(existing)
    raise ConfigDecodeError(f"{where}: cannot resolve type annotation {annotation!r}")


def _decode_dataclass(cls: Type[T], data: Any, current: Optional[T], where: str) -> T:
    if not isinstance(data, dict):
        raise _mismatch(where, cls, data)

    hints = _field_types(cls)

    if current is None and callable(getattr(cls, 'default', None)):
        current = cls.default()

    values: Dict[str, Any] = {}
    for f in _init_fields(cls):
        key = json_key(f)
        if key not in data:
            continue
        existing = getattr(current, f.name, None) if current is not None else None
        field_where = f"{where}.{key}"
        tp = hints.get(f.name, Any)
        if isinstance(tp, str):
            tp = _resolve_annotation(cls, tp, existing, field_where)
        values[f.name] = _decode_value(tp, data[key], existing, field_where)

    try:
        if current is not None:
            return dataclasses.replace(current, **values)
        return cls(**values)
    except (TypeError, ValueError) as e:
        raise ConfigDecodeError(f"{where}: {e}") from e


def decode(cls: Type[T], data: Any, base: Optional[T] = None) -> T:
    """
    将 JSON 结构解码为配置值

    Args:
        cls: 目标 dataclass 类型
        data: json.loads 的结果
        base: 基准实例，缺失字段从此取值（默认使用 cls.default()）

    Returns:
        新的配置实例（base 本身不会被修改）
    """
    if not _is_dataclass_type(cls):
        raise ConfigDecodeError(f"target type {_type_name(cls)} is not a dataclass")
    return _decode_dataclass(cls, data, base, cls.__name__)


def loads(cls: Type[T], text: str, base: Optional[T] = None) -> T:
    """
    解析 JSON 文本为配置值

    Args:
        cls: 目标 dataclass 类型
        text: JSON 文本
        base: 基准实例

    Returns:
        新的配置实例
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigDecodeError(f"invalid JSON: {e}") from e
    return decode(cls, data, base)
