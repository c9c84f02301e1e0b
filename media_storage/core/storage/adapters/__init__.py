"""
存储适配器模块
提供各种对象存储服务的适配器实现
"""

from media_storage.core.storage.adapters.google_cloud_storage import GoogleCloudStorageAdapter

# 简称别名
GCSStorage = GoogleCloudStorageAdapter

__all__ = [
    'GoogleCloudStorageAdapter',
    'GCSStorage',
]
