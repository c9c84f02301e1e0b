"""
压缩策略
决定写入对象前是否进行 gzip 压缩
"""

import gzip
import shutil
import tempfile
from typing import BinaryIO, Union

# 超过该大小的流压缩结果落盘
SPOOL_MAX_SIZE = 8 * 1024 * 1024

COMPRESSIBLE_TYPES = frozenset({
    'application/javascript',
    'application/json',
    'application/ld+json',
    'application/manifest+json',
    'application/rtf',
    'application/wasm',
    'application/x-javascript',
    'application/x-www-form-urlencoded',
    'application/xml',
    'image/bmp',
    'image/svg+xml',
    'image/x-icon',
})


def is_compressible(content_type: str) -> bool:
    """判断内容类型是否值得压缩"""
    if not content_type:
        return False

    mime = content_type.split(';', 1)[0].strip().lower()
    if mime.startswith('text/'):
        return True
    if mime.endswith(('+json', '+xml', '+text')):
        return True
    return mime in COMPRESSIBLE_TYPES


def should_gzip(option: Union[bool, str], content_type: str) -> bool:
    """
    根据配置决定是否压缩

    Args:
        option: True / False / "auto"
        content_type: 内容类型

    Returns:
        bool: 是否压缩
    """
    if option == 'auto':
        return is_compressible(content_type)
    return bool(option)


def gzip_bytes(data: bytes) -> bytes:
    """压缩内存数据"""
    return gzip.compress(data)


def gzip_stream(source: BinaryIO) -> BinaryIO:
    """
    将流压缩到临时文件

    Returns:
        BinaryIO: 指针已回到开头的临时文件，由调用方关闭
    """
    spool = tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_SIZE)
    with gzip.GzipFile(fileobj=spool, mode='wb') as compressed:
        shutil.copyfileobj(source, compressed)
    spool.seek(0)
    return spool


__all__ = ['is_compressible', 'should_gzip', 'gzip_bytes', 'gzip_stream']
