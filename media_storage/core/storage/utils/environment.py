"""
运行环境检测
根据进程环境变量判断是否运行在 Google Cloud 计算环境中
"""

import os
from typing import Mapping, Optional

# App Engine / Cloud Run / Cloud Functions 等运行时注入的变量
GCP_ENV_VARS = (
    'GOOGLE_CLOUD_PROJECT',
    'GCLOUD_PROJECT',
    'GAE_APPLICATION',
    'GAE_SERVICE',
    'K_SERVICE',
    'FUNCTION_NAME',
    'FUNCTION_TARGET',
)

# 元数据服务器可用的标志（GCE / GKE）
METADATA_ENV_VARS = (
    'GCE_METADATA_HOST',
    'KUBERNETES_SERVICE_HOST',
)


def is_cloud_environment(environ: Optional[Mapping[str, str]] = None) -> bool:
    """
    判断当前是否处于 GCP 环境

    每次调用都重新读取环境变量，不做缓存。

    Args:
        environ: 环境变量映射，默认读取 os.environ

    Returns:
        bool: 任一识别变量非空时返回 True
    """
    env = os.environ if environ is None else environ

    if any(env.get(name) for name in GCP_ENV_VARS):
        return True

    return any(env.get(name) for name in METADATA_ENV_VARS)


__all__ = ['GCP_ENV_VARS', 'METADATA_ENV_VARS', 'is_cloud_environment']
