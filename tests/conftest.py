"""
Pytest 配置文件

提供测试所需的 fixtures 和共享配置。
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pytest

# 确保项目根目录在 Python 路径中
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


DEFAULT_STRING = "field1"
DEFAULT_INT = 1
DEFAULT_DB_URL = "postgres://localhost:5432"
DEFAULT_API_KEY = "abc123"


# ============================================================
# 示例配置类型
# ============================================================

@dataclass
class MockConfig:
    """两字段配置，JSON 键名为小写"""
    field1: str = field(default="", metadata={'json': 'field1'})
    field2: int = field(default=0, metadata={'json': 'field2'})

    @classmethod
    def default(cls) -> 'MockConfig':
        return cls(field1=DEFAULT_STRING, field2=DEFAULT_INT)


@dataclass
class MockAppConfig:
    """键名与字段名相同的应用配置"""
    DatabaseUrl: str = ""
    ApiKey: str = ""

    @classmethod
    def default(cls) -> 'MockAppConfig':
        return cls(DatabaseUrl=DEFAULT_DB_URL, ApiKey=DEFAULT_API_KEY)


@dataclass
class RetryPolicy:
    attempts: int = 3
    backoff: float = 0.5


@dataclass
class ServiceConfig:
    """嵌套配置"""
    name: str = "service"
    hosts: List[str] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    proxy: Optional[str] = None
    debug: bool = False

    @classmethod
    def default(cls) -> 'ServiceConfig':
        return cls(
            name="orders",
            hosts=["10.0.0.1", "10.0.0.2"],
            labels={"env": "dev"},
            retry=RetryPolicy(attempts=5, backoff=1.5),
        )


@dataclass(frozen=True)
class FrozenConfig:
    """不可变配置"""
    level: str = "info"
    port: int = 8080

    @classmethod
    def default(cls) -> 'FrozenConfig':
        return cls()


# ============================================================
# Fixtures
# ============================================================

@pytest.fixture
def mock_config_cls():
    return MockConfig


@pytest.fixture
def app_config_cls():
    return MockAppConfig


@pytest.fixture
def service_config_cls():
    return ServiceConfig


@pytest.fixture
def frozen_config_cls():
    return FrozenConfig


@pytest.fixture
def config_path(tmp_path):
    """临时目录中尚不存在的配置文件路径"""
    return str(tmp_path / "config.json")


@pytest.fixture
def store():
    """使用默认设置的 ConfigStore"""
    from cfgstore.config import StoreSettings
    from cfgstore.infrastructure.persistence import ConfigStore
    return ConfigStore(StoreSettings())

