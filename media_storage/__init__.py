"""
Google Cloud Storage 媒体上传提供者

宿主媒体系统通过 init(options) 获取提供者实例，
使用 upload / upload_stream / delete / get_signed_url / is_private 五个接口。
"""

from typing import Any, Mapping, Optional, Union

from media_storage.core.storage import (
    BaseStorage,
    GoogleCloudStorageAdapter,
    ProviderOptions,
    get_storage_service,
)
from media_storage.core.storage.exceptions import (
    BucketNotFoundError,
    ConfigurationError,
    CredentialsIncompleteError,
    CredentialsRequiredError,
    EnvironmentPermissionError,
    MissingPayloadError,
    StaleReferenceError,
    StorageError,
    UploadError,
    URLError,
)
from media_storage.core.storage.models import MediaFile, ServiceAccount, SignedUrlResult

__version__ = "1.0.0"


def init(
    options: Union[Mapping[str, Any], ProviderOptions, None],
    client: Optional[Any] = None,
) -> GoogleCloudStorageAdapter:
    """
    宿主插件入口

    Args:
        options: 提供者配置
        client: 可选的存储客户端

    Returns:
        GoogleCloudStorageAdapter: 提供者实例

    Raises:
        ConfigurationError: 配置无效时抛出
    """
    return GoogleCloudStorageAdapter(options, client=client)


__all__ = [
    'init',
    'get_storage_service',
    'BaseStorage',
    'GoogleCloudStorageAdapter',
    'ProviderOptions',
    'MediaFile',
    'ServiceAccount',
    'SignedUrlResult',
    'StorageError',
    'ConfigurationError',
    'BucketNotFoundError',
    'UploadError',
    'MissingPayloadError',
    'StaleReferenceError',
    'URLError',
    'CredentialsRequiredError',
    'CredentialsIncompleteError',
    'EnvironmentPermissionError',
]
