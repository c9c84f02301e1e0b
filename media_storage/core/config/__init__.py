"""
配置模块
包含应用所有配置信息和工具
"""

from media_storage.core.config.config import get_provider_options, get_settings, settings

__all__ = ["settings", "get_settings", "get_provider_options"]
