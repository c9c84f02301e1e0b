"""
对象键推导
上传、删除、签名三个操作共用的确定性路径算法

注意：默认上传路径会对文件名做 slugify，而删除和签名只能根据
base_path、hash、path、ext 重新推导对象键，使用的是未 slugify 的原始文件名。
slugify 保留下划线，宿主常见的 "名称_后缀" 形式 hash 两者一致；
hash 含大写字母、空格或非 ASCII 字符时两者会得到不同的键。为兼容已上传的对象，
这里保留该差异；如果部署方自定义了 generate_upload_file_name，
需要保证它与 derive_stored_object_key 的结果一致。
"""

import posixpath

from slugify import slugify

from media_storage.core.storage.models import MediaFile

# 小写字母、数字、连字符与下划线之外的字符替换为分隔符
SLUG_DISALLOWED_PATTERN = r"[^-a-z0-9_]+"


def normalize_base_path(base_path: str) -> str:
    """
    规范化对象键前缀

    结果不以分隔符开头，非空时以且仅以一个分隔符结尾。
    "a/b" 与 "/a/b/" 都得到 "a/b/"，空字符串保持为空。
    """
    stripped = (base_path or "").strip("/")
    if not stripped:
        return ""
    return "{}/".format(stripped)


def derive_object_key(base_path: str, file: MediaFile, slugify_name: bool = True) -> str:
    """
    计算文件的对象键

    Args:
        base_path: 已规范化的前缀
        file: 文件描述
        slugify_name: 是否对文件名做 slugify

    Returns:
        str: base_path + 目录段 + "/" + 文件名 + 小写扩展名
    """
    dir_segment = file.path[1:] if file.path else file.hash
    name = posixpath.basename(file.hash)
    if slugify_name:
        name = slugify(name, regex_pattern=SLUG_DISALLOWED_PATTERN)
    extension = file.ext.lower() if file.ext else ""
    return "{}{}/{}{}".format(base_path, dir_segment, name, extension)


def default_generate_upload_file_name(base_path: str, file: MediaFile) -> str:
    """默认上传对象键（slugify 文件名）"""
    return derive_object_key(base_path, file)


def derive_stored_object_key(base_path: str, file: MediaFile) -> str:
    """删除和签名时重新推导的对象键（原始文件名）"""
    return derive_object_key(base_path, file, slugify_name=False)


__all__ = [
    'SLUG_DISALLOWED_PATTERN',
    'normalize_base_path',
    'derive_object_key',
    'default_generate_upload_file_name',
    'derive_stored_object_key',
]
