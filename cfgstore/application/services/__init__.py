# Application Services

"""
应用服务 - 业务用例实现
"""

from .bootstrap_service import ConfigBootstrapService, bootstrap_config

__all__ = [
    'ConfigBootstrapService',
    'bootstrap_config',
]
