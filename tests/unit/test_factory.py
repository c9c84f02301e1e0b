"""
存储适配器工厂单元测试
"""

from unittest.mock import MagicMock, patch

import pytest

import media_storage
from media_storage.core.config.config import Settings
from media_storage.core.storage import factory, get_storage_service
from media_storage.core.storage.adapters.google_cloud_storage import GoogleCloudStorageAdapter
from media_storage.core.storage.exceptions import ConfigurationError


class BrokenAdapter:
    """构造时抛出非配置异常的适配器"""

    def __init__(self, options, **kwargs):
        raise RuntimeError("boom")


@pytest.fixture
def broken_adapter():
    factory.register_adapter("broken", BrokenAdapter)
    yield "broken"
    factory._adapter_registry.pop("broken", None)


@pytest.mark.unit
@pytest.mark.storage
class TestAdapterRegistry:
    """适配器注册表测试"""

    def test_gcs_adapter_registered(self):
        """测试导入时自动注册 GCS 适配器"""
        assert "google_cloud_storage" in factory.list_available_adapters()
        assert factory.get_adapter_class("google_cloud_storage") is GoogleCloudStorageAdapter

    def test_unknown_adapter(self):
        """测试获取不存在的适配器"""
        with pytest.raises(ConfigurationError, match="google_cloud_storage"):
            factory.get_adapter_class("unknown")

    def test_create_adapter(self, gcs_client):
        """测试创建适配器并透传参数"""
        adapter = factory.create_adapter("google_cloud_storage", {"bucketName": "media"}, client=gcs_client)

        assert isinstance(adapter, GoogleCloudStorageAdapter)
        assert adapter.options.bucket_name == "media"

    def test_create_adapter_invalid_options(self, gcs_client):
        """测试配置错误原样抛出"""
        with pytest.raises(ConfigurationError, match="bucketName"):
            factory.create_adapter("google_cloud_storage", {}, client=gcs_client)

    def test_create_adapter_wraps_other_errors(self, broken_adapter):
        """测试其他构造异常被包装为配置错误"""
        with pytest.raises(ConfigurationError, match="broken") as exc_info:
            factory.create_adapter(broken_adapter, {"bucketName": "media"})

        assert isinstance(exc_info.value.__cause__, RuntimeError)


@pytest.mark.unit
@pytest.mark.storage
class TestGetStorageService:
    """存储服务入口测试"""

    def test_with_explicit_options(self, gcs_client):
        """测试直接传入配置"""
        service = get_storage_service(options={"bucketName": "media"}, client=gcs_client)

        assert isinstance(service, GoogleCloudStorageAdapter)

    def test_from_settings(self, gcs_client):
        """测试从环境配置构建"""
        config = Settings(_env_file=None, gcs_bucket_name="env-bucket", gcs_public_files="false")

        with patch("media_storage.core.storage.settings", config):
            service = get_storage_service(client=gcs_client)

        assert service.options.bucket_name == "env-bucket"
        assert service.is_private() is True

    def test_not_configured(self):
        """测试未配置存储桶"""
        with patch("media_storage.core.storage.settings", MagicMock(gcs_enabled=False)):
            with pytest.raises(ConfigurationError, match="GCS_BUCKET_NAME"):
                get_storage_service()

    def test_init_entry(self, gcs_client):
        """测试宿主插件入口"""
        provider = media_storage.init({"bucketName": "media", "publicFiles": False}, client=gcs_client)

        assert isinstance(provider, GoogleCloudStorageAdapter)
        assert provider.is_private() is True

    def test_init_invalid_options(self, gcs_client):
        """测试插件入口快速失败"""
        with pytest.raises(media_storage.ConfigurationError):
            media_storage.init({"publicFiles": True}, client=gcs_client)
