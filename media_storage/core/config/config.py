"""
应用配置管理模块
统一管理环境变量驱动的配置信息
"""

from functools import lru_cache
from typing import Any, Dict, Optional

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用配置类 - 统一管理所有配置信息"""

    # ==================== 基础配置 ====================
    app_debug: bool = False

    # ==================== GCS存储配置 ====================
    # 布尔值保留字符串形式，由提供者配置解析统一处理
    gcs_bucket_name: str = ""
    gcs_base_url: Optional[str] = None
    gcs_base_path: Optional[str] = None
    gcs_public_files: Optional[str] = None
    gcs_uniform: Optional[str] = None
    gcs_skip_check_bucket: Optional[str] = None
    gcs_gzip: Optional[str] = None
    gcs_cache_max_age: Optional[int] = None
    gcs_expires: Optional[str] = None
    gcs_service_account: Optional[str] = None  # 服务账号 JSON 字符串

    # ==================== 日志配置 ====================
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # ==================== 计算属性 ====================
    @property
    def gcs_enabled(self) -> bool:
        """检查GCS是否启用"""
        return bool(self.gcs_bucket_name)

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# 环境变量名 -> 提供者配置字段
_PROVIDER_OPTION_FIELDS = {
    "gcs_bucket_name": "bucketName",
    "gcs_base_url": "baseUrl",
    "gcs_base_path": "basePath",
    "gcs_public_files": "publicFiles",
    "gcs_uniform": "uniform",
    "gcs_skip_check_bucket": "skipCheckBucket",
    "gcs_gzip": "gzip",
    "gcs_cache_max_age": "cacheMaxAge",
    "gcs_expires": "expires",
    "gcs_service_account": "serviceAccount",
}


def get_provider_options(config: Optional[Settings] = None) -> Dict[str, Any]:
    """
    从环境配置构建提供者原始配置

    未设置的字段不会出现在结果中，交由提供者配置解析补齐默认值。

    Args:
        config: 配置实例，默认使用全局配置

    Returns:
        Dict[str, Any]: camelCase 原始配置
    """
    config = config or get_settings()
    options: Dict[str, Any] = {}
    for attr, option_name in _PROVIDER_OPTION_FIELDS.items():
        value = getattr(config, attr)
        if value is None or value == "":
            continue
        options[option_name] = value
    return options


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """获取应用配置实例"""
    return Settings()


# 全局配置实例
settings = get_settings()
