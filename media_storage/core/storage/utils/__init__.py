"""
存储工具模块
提供存储相关的工具函数
"""

from media_storage.core.storage.utils.compression import should_gzip
from media_storage.core.storage.utils.environment import is_cloud_environment
from media_storage.core.storage.utils.paths import (
    default_generate_upload_file_name,
    derive_object_key,
    derive_stored_object_key,
    normalize_base_path,
)

__all__ = [
    'should_gzip',
    'is_cloud_environment',
    'default_generate_upload_file_name',
    'derive_object_key',
    'derive_stored_object_key',
    'normalize_base_path',
]
