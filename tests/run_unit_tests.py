#!/usr/bin/env python3
"""
单元测试运行脚本
专门用于运行单元测试，设置独立的环境配置
"""

import os
import sys
import subprocess


def main():
    """主函数"""
    env = os.environ.copy()
    env["APP_DEBUG"] = "true"
    env["LOG_LEVEL"] = "ERROR"

    # 单元测试不依赖真实的存储桶配置
    env.pop("GCS_BUCKET_NAME", None)
    env.pop("GCS_SERVICE_ACCOUNT", None)

    cmd = [
        sys.executable, "-m", "pytest",
        "tests/unit/",
        "-m", "unit",
        "-v",
        "--tb=short"
    ]

    # 添加额外的参数
    if len(sys.argv) > 1:
        cmd.extend(sys.argv[1:])

    result = subprocess.run(cmd, env=env, cwd=os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

    sys.exit(result.returncode)


if __name__ == "__main__":
    main()
