"""
存储服务异常定义
定义存储模块中使用的所有异常类型
"""

from typing import Any, Dict, Optional


class StorageError(Exception):
    """
    存储操作基础异常

    所有存储相关异常的基类。

    Attributes:
        message: 错误消息
        code: 错误码
        details: 错误详情
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigurationError(StorageError):
    """存储配置错误，初始化阶段快速失败，不重试"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="CONFIG_ERROR", details=details)


class BucketNotFoundError(StorageError):
    """目标存储桶不存在"""

    def __init__(self, bucket_name: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            '获取存储桶 "{}" 时出错，请检查该存储桶是否存在于 Google Cloud Platform'.format(bucket_name),
            code="BUCKET_NOT_FOUND",
            details=details
        )
        self.bucket_name = bucket_name


class UploadError(StorageError):
    """文件上传错误"""

    def __init__(
        self,
        message: str,
        code: str = "UPLOAD_ERROR",
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message, code=code, details=details)


class MissingPayloadError(UploadError):
    """上传时文件描述缺少数据（buffer/stream）"""

    def __init__(self, field_name: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            "文件描述缺少 '{}' 数据，无法上传".format(field_name),
            code="MISSING_PAYLOAD",
            details=details
        )
        self.field_name = field_name


class StaleReferenceError(StorageError):
    """删除目标在远端已不存在"""

    def __init__(self, object_key: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            "远端文件不存在（{}），可能需要手动清理".format(object_key),
            code="STALE_REFERENCE",
            details=details
        )
        self.object_key = object_key


class URLError(StorageError):
    """签名URL生成错误"""

    def __init__(
        self,
        message: str,
        code: str = "URL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message, code=code, details=details)


class CredentialsRequiredError(URLError):
    """非云环境且未配置服务账号，私有存储无法签名"""

    def __init__(self, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            "缺少服务账号凭据，无法生成签名URL。可选择：\n"
            "1. 在配置中提供包含 client_email 和 private_key 的 serviceAccount；\n"
            "2. 将 publicFiles 设置为 true，直接使用公开URL代替签名URL。",
            code="CREDENTIALS_REQUIRED",
            details=details
        )


class EnvironmentPermissionError(URLError):
    """云环境中的运行身份缺少签名权限"""

    def __init__(self, reason: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            "在 GCP 环境中生成签名URL失败: {}\n"
            "运行时服务账号可能缺少URL签名所需权限，"
            '请确认其具有 "Storage Object Admin" 或 "Storage Admin" 角色。'.format(reason),
            code="ENVIRONMENT_PERMISSION",
            details=details
        )


class CredentialsIncompleteError(URLError):
    """已配置服务账号但凭据不完整"""

    def __init__(self, reason: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            "生成签名URL失败: {}\n"
            "服务账号凭据可能不完整，请确认 serviceAccount 同时包含 "
            "client_email 和 private_key 字段。".format(reason),
            code="CREDENTIALS_INCOMPLETE",
            details=details
        )


__all__ = [
    'StorageError',
    'ConfigurationError',
    'BucketNotFoundError',
    'UploadError',
    'MissingPayloadError',
    'StaleReferenceError',
    'URLError',
    'CredentialsRequiredError',
    'EnvironmentPermissionError',
    'CredentialsIncompleteError',
]
