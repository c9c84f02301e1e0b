"""
测试专用的 mock 工具和辅助函数
提供常用的 mock 对象，供所有测试使用
"""

from typing import Any
from unittest.mock import MagicMock

from media_storage.core.storage.models import MediaFile

# google-auth 在只有访问令牌的凭据上签名时的报错
SIGNING_CREDENTIALS_MESSAGE = (
    "you need a private key to sign credentials.the credentials you are currently "
    "using <class 'google.auth.compute_engine.credentials.Credentials'> just contains a token."
)


class MockBuilder:
    """Mock对象构建器 - 用于创建常用的mock对象"""

    @staticmethod
    def create_mock_gcs_client(
        bucket_exists: bool = True,
        blob_exists: bool = False,
        signed_url: str = "https://storage.googleapis.com/media-bucket/signed?X-Goog-Signature=abc"
    ) -> MagicMock:
        """
        创建GCS客户端的mock对象

        client.bucket() 始终返回同一个 bucket，bucket.blob() 始终返回同一个 blob，
        测试可通过 client.bucket.return_value.blob.return_value 取到 blob。
        """
        blob = MagicMock()
        blob.exists.return_value = blob_exists
        blob.generate_signed_url.return_value = signed_url
        blob.upload_from_string.return_value = None
        blob.upload_from_file.return_value = None
        blob.delete.return_value = None

        bucket = MagicMock()
        bucket.exists.return_value = bucket_exists
        bucket.blob.return_value = blob

        client = MagicMock()
        client.bucket.return_value = bucket
        return client

    @staticmethod
    def create_media_file(**overrides: Any) -> MediaFile:
        """创建测试文件描述"""
        data = {
            "name": "photo.png",
            "hash": "abc123",
            "ext": ".png",
            "mime": "image/png",
            "size": 1.0,
            "sizeInBytes": 1024,
            "buffer": b"\x89PNG test content",
        }
        data.update(overrides)
        return MediaFile.model_validate(data)
