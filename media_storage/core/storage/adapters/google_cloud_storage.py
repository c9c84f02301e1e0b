"""
Google Cloud Storage 存储适配器
实现BaseStorage接口，为宿主媒体系统提供上传、删除与签名URL服务

上传采用先删除再写入的覆盖方式，两步之间不是原子操作：
同一对象键的并发上传以远端最后一次写入为准，
删除成功而写入失败时该对象键会暂时不存在。
"""

import asyncio
import inspect
from functools import partial
from typing import Any, Callable, Dict, Mapping, Optional, TypeVar, Union

from google.api_core.exceptions import NotFound
from google.cloud import storage
from google.oauth2 import service_account

from media_storage.core.log_messages import LogMessages
from media_storage.core.log_utils import get_logger
from media_storage.core.storage.base_storage import BaseStorage
from media_storage.core.storage.exceptions import (
    BucketNotFoundError,
    ConfigurationError,
    CredentialsIncompleteError,
    CredentialsRequiredError,
    EnvironmentPermissionError,
    MissingPayloadError,
    StaleReferenceError,
)
from media_storage.core.storage.models import (
    FileAttributes,
    MediaFile,
    PreparedUpload,
    SignedUrlResult,
)
from media_storage.core.storage.options import (
    ProviderOptions,
    resolve_expiration,
    resolve_options,
)
from media_storage.core.storage.utils.compression import gzip_bytes, gzip_stream, should_gzip
from media_storage.core.storage.utils.environment import is_cloud_environment
from media_storage.core.storage.utils.paths import derive_stored_object_key

logger = get_logger(__name__)

T = TypeVar('T')

# google-auth 与旧版客户端在缺少签名私钥时的报错
SIGNING_FAILURE_MARKERS = (
    'you need a private key to sign credentials',
    'cannot sign data without',
)

# 元数据键 -> Blob 属性
BLOB_PROPERTIES = {
    'cacheControl': 'cache_control',
    'cache_control': 'cache_control',
    'contentDisposition': 'content_disposition',
    'content_disposition': 'content_disposition',
    'contentLanguage': 'content_language',
    'content_language': 'content_language',
    'contentEncoding': 'content_encoding',
    'content_encoding': 'content_encoding',
}


def is_signing_credentials_error(error: Exception) -> bool:
    """判断是否为缺少签名凭据导致的失败"""
    message = str(error).lower()
    return any(marker in message for marker in SIGNING_FAILURE_MARKERS)


def is_not_found_error(error: Exception) -> bool:
    """判断是否为远端 404"""
    return isinstance(error, NotFound) or getattr(error, 'code', None) == 404


def apply_blob_attributes(blob: Any, attributes: FileAttributes, compressed: bool) -> None:
    """
    将写入属性设置到 Blob 上

    contentDisposition、cacheControl 等映射为 Blob 属性，
    其余键作为自定义元数据写入。
    """
    custom: Dict[str, str] = {}
    for key, value in (attributes.metadata or {}).items():
        if key == 'metadata' and isinstance(value, Mapping):
            custom.update({str(k): str(v) for k, v in value.items()})
        elif key in BLOB_PROPERTIES:
            setattr(blob, BLOB_PROPERTIES[key], value)
        elif value is not None:
            custom[str(key)] = str(value)

    if custom:
        blob.metadata = custom
    if compressed:
        blob.content_encoding = 'gzip'


class GoogleCloudStorageAdapter(BaseStorage):
    """
    Google Cloud Storage 存储适配器

    使用 google-cloud-storage SDK 提供对象存储服务，支持：
    - 内存数据与流式上传（覆盖已存在对象）
    - 删除已上传对象
    - 私有对象的 v4 签名URL，并根据运行环境对凭据缺失做分类处理
    """

    # 适配器名称，用于工厂模式注册
    ADAPTER_NAME: str = "google_cloud_storage"

    def __init__(
        self,
        options: Union[Mapping[str, Any], ProviderOptions, None],
        client: Optional[Any] = None,
        environment_detector: Callable[[], bool] = is_cloud_environment,
    ) -> None:
        """
        初始化GCS存储客户端

        Args:
            options: 提供者配置
            client: 可选的存储客户端，未提供时根据服务账号或默认凭据创建
            environment_detector: 云环境检测函数

        Raises:
            ConfigurationError: 配置不完整或无法创建客户端时抛出
        """
        self.options = resolve_options(options)
        self._base_path = self.options.normalized_base_path
        self._base_url = self.options.resolved_base_url
        self._environment_detector = environment_detector
        self._client = client if client is not None else self._create_client()

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def base_url(self) -> str:
        return self._base_url

    def _create_client(self) -> storage.Client:
        """
        创建GCS客户端

        Raises:
            ConfigurationError: 凭据无效或缺少默认凭据时抛出
        """
        account = self.options.service_account
        try:
            if account is None:
                return storage.Client()

            credentials = service_account.Credentials.from_service_account_info(
                account.model_dump()
            )
            return storage.Client(project=account.project_id, credentials=credentials)
        except Exception as e:
            raise ConfigurationError(
                "创建 Google Cloud Storage 客户端失败: {}".format(str(e))
            ) from e

    async def _run_in_executor(self, func: Callable[..., T], **kwargs) -> T:
        """
        在线程池中运行同步函数

        Args:
            func: 同步函数
            **kwargs: 函数关键字参数

        Returns:
            函数执行结果
        """
        loop = asyncio.get_event_loop()
        bound_func = partial(func, **kwargs)
        return await loop.run_in_executor(None, bound_func)

    def _bucket(self) -> Any:
        return self._client.bucket(self.options.bucket_name)

    async def prepare_upload_file(self, file: MediaFile) -> PreparedUpload:
        """
        上传前的准备：推导对象键、检查存储桶与对象是否存在、计算写入属性

        Args:
            file: 文件描述

        Returns:
            PreparedUpload: 准备结果

        Raises:
            BucketNotFoundError: 存储桶不存在时抛出
        """
        object_key = self.options.generate_upload_file_name(self._base_path, file)
        if inspect.isawaitable(object_key):
            object_key = await object_key

        bucket = self._bucket()
        if not self.options.skip_check_bucket:
            bucket_exists = await self._run_in_executor(bucket.exists)
            if not bucket_exists:
                raise BucketNotFoundError(self.options.bucket_name)

        blob = bucket.blob(object_key)
        exists = await self._run_in_executor(blob.exists)

        attributes = FileAttributes(
            content_type=self.options.get_content_type(file),
            gzip=self.options.gzip,
            metadata=self.options.metadata(file),
            public=None if self.options.uniform else self.options.public_files,
        )

        return PreparedUpload(
            attributes=attributes,
            blob=blob,
            object_key=object_key,
            exists=exists,
        )

    async def _replace_existing(self, prepared: PreparedUpload) -> None:
        """删除目标位置已存在的对象，对象已被并发删除时忽略"""
        logger.info(LogMessages.FILE_REPLACE_EXISTING, object_key=prepared.object_key)
        try:
            await self._run_in_executor(prepared.blob.delete)
        except NotFound:
            logger.debug(LogMessages.FILE_DELETE_NOT_FOUND, object_key=prepared.object_key)

    def _apply_upload_result(self, file: MediaFile, prepared: PreparedUpload) -> None:
        file.url = "{}/{}".format(self._base_url, prepared.object_key)
        file.mime = prepared.attributes.content_type

    async def upload(self, file: MediaFile) -> None:
        """
        上传内存中的文件数据

        Raises:
            MissingPayloadError: 文件描述缺少 buffer 时抛出
            BucketNotFoundError: 存储桶不存在时抛出
        """
        try:
            # 空 bytes 视为零字节文件，照常上传
            if file.buffer is None:
                raise MissingPayloadError('buffer', details={'hash': file.hash})

            prepared = await self.prepare_upload_file(file)
            logger.debug(LogMessages.FILE_UPLOAD_START, object_key=prepared.object_key)
            if prepared.exists:
                await self._replace_existing(prepared)

            attributes = prepared.attributes
            compressed = should_gzip(attributes.gzip, attributes.content_type)
            payload = gzip_bytes(file.buffer) if compressed else file.buffer
            apply_blob_attributes(prepared.blob, attributes, compressed)

            await self._run_in_executor(
                prepared.blob.upload_from_string,
                data=payload,
                content_type=attributes.content_type,
                predefined_acl=attributes.predefined_acl,
            )
            self._apply_upload_result(file, prepared)
            logger.info(LogMessages.FILE_UPLOAD_SUCCESS, object_key=prepared.object_key)

        except Exception as e:
            logger.error(LogMessages.FILE_UPLOAD_FAILED, exception=e, error=str(e))
            raise

    async def upload_stream(self, file: MediaFile) -> None:
        """
        以流的方式上传文件

        流交给 SDK 的可续传上传，读取中途失败时不会生成完成的对象。

        Raises:
            MissingPayloadError: 文件描述缺少 stream 时抛出
            BucketNotFoundError: 存储桶不存在时抛出
        """
        try:
            if file.stream is None:
                raise MissingPayloadError('stream', details={'hash': file.hash})

            prepared = await self.prepare_upload_file(file)
            logger.debug(LogMessages.FILE_UPLOAD_START, object_key=prepared.object_key)
            if prepared.exists:
                await self._replace_existing(prepared)

            attributes = prepared.attributes
            compressed = should_gzip(attributes.gzip, attributes.content_type)
            apply_blob_attributes(prepared.blob, attributes, compressed)

            source = file.stream
            if compressed:
                source = await self._run_in_executor(gzip_stream, source=file.stream)
            try:
                await self._run_in_executor(
                    prepared.blob.upload_from_file,
                    file_obj=source,
                    content_type=attributes.content_type,
                    predefined_acl=attributes.predefined_acl,
                )
            finally:
                if source is not file.stream:
                    source.close()

            self._apply_upload_result(file, prepared)
            logger.info(LogMessages.FILE_UPLOAD_SUCCESS, object_key=prepared.object_key)

        except Exception as e:
            logger.error(LogMessages.FILE_UPLOAD_FAILED, exception=e, error=str(e))
            raise

    async def delete(self, file: MediaFile) -> None:
        """
        删除已上传的文件

        url 为空表示文件从未上传完成，直接返回。

        Raises:
            StaleReferenceError: 远端对象已不存在时抛出
        """
        if not file.url:
            logger.debug(LogMessages.FILE_DELETE_SKIPPED, hash=file.hash)
            return

        object_key = derive_stored_object_key(self._base_path, file)
        blob = self._bucket().blob(object_key)

        try:
            await self._run_in_executor(blob.delete)
        except Exception as e:
            if is_not_found_error(e):
                logger.warning(LogMessages.FILE_DELETE_NOT_FOUND, object_key=object_key)
                raise StaleReferenceError(object_key) from e
            raise

        logger.info(LogMessages.FILE_DELETE_SUCCESS, object_key=object_key)

    def is_private(self) -> bool:
        return not self.options.public_files

    async def get_signed_url(self, file: MediaFile) -> SignedUrlResult:
        """
        生成 v4 只读签名URL

        在有默认凭据的 GCP 环境中可直接签名；缺少签名凭据时，
        公开存储退化为直接URL，其余情况抛出带修复建议的异常。

        Returns:
            SignedUrlResult: 签名URL

        Raises:
            CredentialsRequiredError: 非云环境、未配置服务账号且存储为私有
            EnvironmentPermissionError: 云环境中运行身份缺少签名权限
            CredentialsIncompleteError: 已配置服务账号但凭据不完整
        """
        object_key = derive_stored_object_key(self._base_path, file)
        blob = self._bucket().blob(object_key)

        try:
            url = await self._run_in_executor(
                blob.generate_signed_url,
                version='v4',
                method='GET',
                expiration=resolve_expiration(self.options.expires),
            )
        except Exception as e:
            if not is_signing_credentials_error(e):
                raise
            return self._handle_signing_failure(file, object_key, e)

        logger.debug(LogMessages.SIGNED_URL_SUCCESS, object_key=object_key)
        return SignedUrlResult(url=url)

    def _handle_signing_failure(
        self,
        file: MediaFile,
        object_key: str,
        error: Exception
    ) -> SignedUrlResult:
        """按运行环境与凭据配置对签名失败分类"""
        in_cloud = self.detect_gcp_environment()
        account = self.options.service_account

        if not in_cloud and (account is None or not account.client_email):
            if not self.options.public_files:
                raise CredentialsRequiredError(details={'object_key': object_key}) from error
            logger.warning(LogMessages.SIGNED_URL_FALLBACK, object_key=object_key)
            return SignedUrlResult(url=file.url)

        if in_cloud:
            raise EnvironmentPermissionError(str(error), details={'object_key': object_key}) from error

        raise CredentialsIncompleteError(str(error), details={'object_key': object_key}) from error

    def detect_gcp_environment(self) -> bool:
        """检测是否运行在 GCP 环境中"""
        return self._environment_detector()


__all__ = [
    'GoogleCloudStorageAdapter',
    'apply_blob_attributes',
    'is_not_found_error',
    'is_signing_credentials_error',
]
