"""
测试配置和fixtures
为所有测试提供共享的配置和fixtures

单元测试不访问网络，GCS 客户端一律使用 MagicMock
"""

import pytest

from media_storage.core.storage.adapters.google_cloud_storage import GoogleCloudStorageAdapter
from media_storage.core.storage.utils.environment import GCP_ENV_VARS, METADATA_ENV_VARS
from tests.utils.mock_utils import MockBuilder


@pytest.fixture(scope="function")
def clean_environment(monkeypatch):
    """清除所有云环境变量，避免本机环境影响检测结果"""
    for name in GCP_ENV_VARS + METADATA_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture(scope="function")
def gcs_client():
    """GCS客户端mock"""
    return MockBuilder.create_mock_gcs_client()


@pytest.fixture(scope="function")
def media_file():
    """默认测试文件描述"""
    return MockBuilder.create_media_file()


@pytest.fixture(scope="function")
def make_adapter(gcs_client):
    """按需创建适配器，默认非云环境"""
    def _make(options=None, in_cloud=False, client=None):
        return GoogleCloudStorageAdapter(
            options or {"bucketName": "media-bucket"},
            client=client or gcs_client,
            environment_detector=lambda: in_cloud,
        )
    return _make


# 测试标记配置
def pytest_configure(config):
    """配置pytest标记"""
    config.addinivalue_line("markers", "unit: 单元测试")
    config.addinivalue_line("markers", "storage: 存储适配器测试")
    config.addinivalue_line("markers", "config: 配置解析测试")
    config.addinivalue_line("markers", "logging: 日志测试")
    config.addinivalue_line("markers", "imports: 模块导入测试")
