"""
存储抽象基类
定义宿主媒体系统依赖的统一存储接口
"""

from abc import ABC, abstractmethod

from media_storage.core.storage.models import MediaFile, SignedUrlResult


class BaseStorage(ABC):
    """存储抽象基类"""

    @abstractmethod
    async def upload(self, file: MediaFile) -> None:
        """
        上传内存中的文件数据

        成功后回写 file.url 和 file.mime。

        Args:
            file: 文件描述，需要包含 buffer

        Raises:
            StorageError: 上传失败时抛出
        """

    @abstractmethod
    async def upload_stream(self, file: MediaFile) -> None:
        """
        以流的方式上传文件

        Args:
            file: 文件描述，需要包含 stream

        Raises:
            StorageError: 上传失败时抛出
        """

    @abstractmethod
    async def delete(self, file: MediaFile) -> None:
        """
        删除已上传的文件

        Args:
            file: 文件描述

        Raises:
            StorageError: 删除失败时抛出
        """

    @abstractmethod
    def is_private(self) -> bool:
        """存储是否为私有，私有时宿主需要通过签名URL访问"""

    @abstractmethod
    async def get_signed_url(self, file: MediaFile) -> SignedUrlResult:
        """
        生成限时只读访问URL

        Args:
            file: 文件描述

        Returns:
            SignedUrlResult: 签名URL

        Raises:
            StorageError: 生成URL失败时抛出
        """
