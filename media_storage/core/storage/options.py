"""
Google Cloud Storage 提供者配置
校验并规范化用户提供的配置，补齐默认值与可注入的策略函数
"""

import json
import unicodedata
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from media_storage.core.storage.exceptions import ConfigurationError
from media_storage.core.storage.models import MediaFile, ServiceAccount
from media_storage.core.storage.utils.paths import (
    default_generate_upload_file_name,
    normalize_base_path,
)

DEFAULT_BASE_URL = "https://storage.googleapis.com/{bucket-name}"
BUCKET_NAME_PLACEHOLDER = "{bucket-name}"

DEFAULT_CACHE_MAX_AGE = 3600
DEFAULT_EXPIRES_MS = 15 * 60 * 1000
MAX_EXPIRES_MS = 7 * 24 * 60 * 60 * 1000

SERVICE_ACCOUNT_PARSE_ERROR = (
    '解析 "Service Account JSON" 出错，请确认完整复制粘贴了整个 JSON 文件'
)


def default_get_content_type(file: MediaFile) -> str:
    return file.mime


def to_ascii_file_name(name: str) -> str:
    """NFKD 规范化后去掉组合变音符号"""
    normalized = unicodedata.normalize('NFKD', name)
    return ''.join(ch for ch in normalized if not '\u0300' <= ch <= '\u036f')


@dataclass(frozen=True)
class DefaultMetadata:
    """
    默认对象元数据策略

    在配置解析时绑定 cache_max_age，之后只读。
    """
    cache_max_age: int

    def __call__(self, file: MediaFile) -> Dict[str, str]:
        return {
            'contentDisposition': 'inline; filename="{}"'.format(to_ascii_file_name(file.name)),
            'cacheControl': 'public, max-age={}'.format(self.cache_max_age),
        }


class ProviderOptions(BaseModel):
    """
    已解析的提供者配置

    解析后不可变，camelCase 与 snake_case 字段名均可传入。
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    service_account: Optional[ServiceAccount] = Field(default=None, description="服务账号凭据")
    bucket_name: str = Field(..., min_length=1, description="存储桶名称")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="访问URL模板")
    base_path: str = Field(default="", description="对象键前缀")
    public_files: bool = Field(default=True, description="是否公开读取")
    uniform: bool = Field(default=False, description="是否启用统一存储桶级访问控制")
    skip_check_bucket: bool = Field(default=False, description="写入前是否跳过存储桶检查")
    gzip: Union[bool, Literal["auto"]] = Field(default="auto", description="压缩策略")
    cache_max_age: int = Field(default=DEFAULT_CACHE_MAX_AGE, ge=0, description="缓存时间（秒）")
    expires: Union[int, datetime] = Field(
        default=DEFAULT_EXPIRES_MS,
        description="签名URL过期时间：绝对时间或毫秒时长"
    )

    metadata: Optional[Callable[[MediaFile], Dict[str, Any]]] = None
    get_content_type: Callable[[MediaFile], str] = default_get_content_type
    generate_upload_file_name: Callable[..., Any] = default_generate_upload_file_name

    @field_validator("service_account", mode="before")
    @classmethod
    def parse_service_account(cls, value: Any) -> Any:
        """服务账号可以是 JSON 字符串"""
        if isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                raise PydanticCustomError("service_account_json", SERVICE_ACCOUNT_PARSE_ERROR)
        return value

    @field_validator("expires", mode="before")
    @classmethod
    def check_expires_duration(cls, value: Any) -> Any:
        """数值视为毫秒时长，最多 7 天"""
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value.strip())
        if isinstance(value, bool):
            raise PydanticCustomError("expires_type", '属性 "expires" 必须是时间或毫秒数')
        if isinstance(value, (int, float)):
            if not 0 <= value <= MAX_EXPIRES_MS:
                raise PydanticCustomError(
                    "expires_range",
                    '属性 "expires" 必须在 0 到 {max_ms} 毫秒（7 天）之间',
                    {"max_ms": MAX_EXPIRES_MS},
                )
            return int(value)
        return value

    @property
    def normalized_base_path(self) -> str:
        return normalize_base_path(self.base_path)

    @property
    def resolved_base_url(self) -> str:
        return self.base_url.replace(BUCKET_NAME_PLACEHOLDER, self.bucket_name)


def _format_validation_error(error: ValidationError) -> str:
    """取第一条校验错误，转换为面向字段的提示"""
    issue = error.errors()[0]
    loc = issue.get("loc", ())
    field = loc[0] if loc else ""

    if field in ("bucketName", "bucket_name"):
        if issue["type"] == "missing":
            return '缺少必填属性 "bucketName"'
        if issue["type"] == "string_too_short":
            return '属性 "bucketName" 不能为空'
        return '属性 "bucketName" 必须是字符串'

    if field in ("serviceAccount", "service_account") and len(loc) > 1:
        name = loc[1]
        if issue["type"] == "missing":
            return '解析 "Service Account JSON" 出错，JSON 文件缺少 "{}" 字段'.format(name)
        return '解析 "Service Account JSON" 出错，属性 "{}" 必须是字符串'.format(name)

    return issue["msg"]


def resolve_options(raw: Union[Mapping[str, Any], ProviderOptions, None]) -> ProviderOptions:
    """
    解析提供者配置

    Args:
        raw: 用户配置（camelCase 或 snake_case），或已解析的配置

    Returns:
        ProviderOptions: 补齐默认值的配置

    Raises:
        ConfigurationError: 配置缺失或类型错误时抛出
    """
    if isinstance(raw, ProviderOptions):
        options = raw
    else:
        try:
            options = ProviderOptions.model_validate(dict(raw or {}))
        except ValidationError as e:
            raise ConfigurationError(
                _format_validation_error(e),
                details={'errors': e.errors(include_url=False, include_context=False, include_input=False)}
            ) from e

    if options.metadata is None:
        options = options.model_copy(update={'metadata': DefaultMetadata(options.cache_max_age)})

    return options


def resolve_expiration(
    expires: Union[int, datetime],
    now: Optional[datetime] = None
) -> datetime:
    """
    计算签名URL的绝对过期时间

    数值时长在每次签名时基于当前时间重新计算。
    """
    if isinstance(expires, datetime):
        return expires
    current = now or datetime.now(timezone.utc)
    return current + timedelta(milliseconds=expires)


__all__ = [
    'DEFAULT_BASE_URL',
    'DEFAULT_CACHE_MAX_AGE',
    'DEFAULT_EXPIRES_MS',
    'MAX_EXPIRES_MS',
    'DefaultMetadata',
    'ProviderOptions',
    'default_get_content_type',
    'resolve_options',
    'resolve_expiration',
    'to_ascii_file_name',
]
