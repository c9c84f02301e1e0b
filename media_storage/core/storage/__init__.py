"""
存储服务模块
提供统一的存储服务访问接口，支持多种存储适配器
"""

from typing import Any, Mapping, Optional

from media_storage.core.config import get_provider_options, settings
from media_storage.core.storage.adapters.google_cloud_storage import GoogleCloudStorageAdapter
from media_storage.core.storage.base_storage import BaseStorage
from media_storage.core.storage.exceptions import *
from media_storage.core.storage.factory import (
    create_adapter,
    list_available_adapters,
    register_adapter,
)
from media_storage.core.storage.models import *
from media_storage.core.storage.options import ProviderOptions, resolve_options

# 自动注册 Google Cloud Storage 适配器
register_adapter(GoogleCloudStorageAdapter.ADAPTER_NAME, GoogleCloudStorageAdapter)


def get_storage_service(
    adapter_name: Optional[str] = None,
    options: Optional[Mapping[str, Any]] = None,
    **kwargs: Any
) -> BaseStorage:
    """
    获取存储服务实例

    Args:
        adapter_name: 适配器名称（如 'google_cloud_storage'），不指定则自动检测
        options: 提供者原始配置，不指定则从环境变量读取
        **kwargs: 透传给适配器构造函数的参数

    Returns:
        BaseStorage: 存储服务实例

    Raises:
        ConfigurationError: 当没有可用的存储服务时抛出

    Example:
        >>> storage = get_storage_service()
        >>> storage = get_storage_service('google_cloud_storage', {'bucketName': 'media'})
    """
    if options is None:
        if not settings.gcs_enabled:
            raise ConfigurationError(
                "没有可用的存储服务。请配置 GCS_BUCKET_NAME 或直接传入配置"
            )
        options = get_provider_options(settings)

    return create_adapter(adapter_name or GoogleCloudStorageAdapter.ADAPTER_NAME, options, **kwargs)


# 简称别名
GCSStorage = GoogleCloudStorageAdapter


__all__ = [
    # 工厂函数
    'get_storage_service',
    'create_adapter',
    'list_available_adapters',
    'register_adapter',
    # 配置
    'ProviderOptions',
    'resolve_options',
    # 抽象接口
    'BaseStorage',
    # 适配器类
    'GoogleCloudStorageAdapter',
    'GCSStorage',
]
