"""
对象键推导单元测试
"""

import pytest

from media_storage.core.storage.utils.paths import (
    default_generate_upload_file_name,
    derive_object_key,
    derive_stored_object_key,
    normalize_base_path,
)
from tests.utils.mock_utils import MockBuilder


@pytest.mark.unit
@pytest.mark.storage
class TestNormalizeBasePath:
    """前缀规范化测试"""

    @pytest.mark.parametrize("raw, expected", [
        ("", ""),
        ("/", ""),
        ("uploads", "uploads/"),
        ("uploads/", "uploads/"),
        ("/a/b/", "a/b/"),
        ("//a//", "a/"),
    ])
    def test_normalize(self, raw, expected):
        """测试各种前缀形式"""
        assert normalize_base_path(raw) == expected

    def test_idempotent(self):
        """测试重复规范化结果不变"""
        once = normalize_base_path("/media/2024/")
        assert normalize_base_path(once) == once


@pytest.mark.unit
@pytest.mark.storage
class TestDeriveObjectKey:
    """对象键推导测试"""

    def test_hash_used_as_directory(self):
        """测试未提供 path 时使用 hash 作为目录"""
        file = MockBuilder.create_media_file(hash="abc123", ext=".PNG")

        assert derive_object_key("", file) == "abc123/abc123.png"

    def test_path_drops_first_character(self):
        """测试 path 去掉首字符后作为目录"""
        file = MockBuilder.create_media_file(hash="abc123", ext=".png", path="/avatars")

        assert derive_object_key("media/", file) == "media/avatars/abc123.png"

    def test_slugified_file_name(self):
        """测试上传路径对文件名做 slugify"""
        file = MockBuilder.create_media_file(hash="My File_ABC", ext=".JPG")

        assert default_generate_upload_file_name("", file) == "My File_ABC/my-file_abc.jpg"

    def test_stored_key_keeps_raw_name(self):
        """测试删除与签名使用原始文件名"""
        file = MockBuilder.create_media_file(hash="My File_ABC", ext=".JPG")

        assert derive_stored_object_key("", file) == "My File_ABC/My File_ABC.jpg"

    def test_host_hash_keys_agree(self):
        """测试 "名称_后缀" 形式的 hash 上传键与删除键一致"""
        file = MockBuilder.create_media_file(hash="photo_3f2a9c", ext=".png")

        assert default_generate_upload_file_name("p/", file) == "p/photo_3f2a9c/photo_3f2a9c.png"
        assert derive_stored_object_key("p/", file) == default_generate_upload_file_name("p/", file)

    def test_non_ascii_name_slugified(self):
        """测试非 ASCII 与空格在上传键中被转换"""
        file = MockBuilder.create_media_file(hash="Crème brûlée_9a1", ext=".png")

        assert default_generate_upload_file_name("", file) == "Crème brûlée_9a1/creme-brulee_9a1.png"

    def test_missing_extension(self):
        """测试没有扩展名"""
        file = MockBuilder.create_media_file(hash="readme", ext=None)

        assert derive_object_key("", file) == "readme/readme"

    def test_deterministic(self):
        """测试相同输入得到相同结果"""
        file = MockBuilder.create_media_file(hash="Report 2024", ext=".PDF", path="/docs")

        assert derive_object_key("x/", file) == derive_object_key("x/", file)
