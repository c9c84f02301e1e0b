"""
存储服务数据模型
定义存储操作中使用的所有数据结构
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"


class MediaFile(BaseModel):
    """
    媒体文件描述

    由宿主媒体管理系统创建并在单次调用内持有，上传成功后只回写 url 和 mime。
    宿主传入的 camelCase 字段（如 sizeInBytes、previewUrl）可直接校验。
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="ignore",
    )

    name: str = Field(..., description="显示名称")
    hash: str = Field(..., description="文件稳定标识")
    ext: Optional[str] = Field(default=None, description="扩展名（含前导点）")
    mime: str = Field(default="", description="内容类型")
    size: float = Field(default=0, description="文件大小（KB）")
    size_in_bytes: Optional[int] = Field(default=None, description="文件大小（字节）")
    url: str = Field(default="", description="上传后的访问URL")
    path: Optional[str] = Field(default=None, description="子目录提示，首字符会被去掉")

    alternative_text: Optional[str] = None
    caption: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    formats: Optional[Dict[str, Any]] = None
    preview_url: Optional[str] = None
    provider: Optional[str] = None
    provider_metadata: Optional[Dict[str, Any]] = Field(default=None, alias="provider_metadata")

    stream: Optional[Any] = Field(default=None, exclude=True, description="可读二进制流")
    buffer: Optional[bytes] = Field(default=None, exclude=True, description="内存中的文件数据")


class ServiceAccount(BaseModel):
    """服务账号凭据，JSON 文件中多余的字段会被忽略"""

    model_config = ConfigDict(extra="ignore", frozen=True)

    project_id: str
    client_email: str
    private_key: str
    token_uri: str = DEFAULT_TOKEN_URI


@dataclass(frozen=True)
class FileAttributes:
    """
    写入对象时应用的属性

    Attributes:
        content_type: 内容类型
        gzip: 压缩策略，布尔值或 "auto"
        metadata: 对象元数据（contentDisposition、cacheControl 等）
        public: 对象可见性，统一访问控制时为 None
    """
    content_type: str
    gzip: Union[bool, str]
    metadata: Dict[str, Any]
    public: Optional[bool] = None

    @property
    def predefined_acl(self) -> Optional[str]:
        return "publicRead" if self.public else None


@dataclass(frozen=True)
class PreparedUpload:
    """
    上传前的准备结果

    Attributes:
        attributes: 写入属性
        blob: 目标对象句柄
        object_key: 对象键
        exists: 目标位置是否已有对象
    """
    attributes: FileAttributes
    blob: Any
    object_key: str
    exists: bool


@dataclass(frozen=True)
class SignedUrlResult:
    """签名URL结果"""
    url: str


__all__ = [
    'MediaFile',
    'ServiceAccount',
    'FileAttributes',
    'PreparedUpload',
    'SignedUrlResult',
]
