"""
日志消息模板模块
统一管理所有存储日志消息模板，便于维护和国际化
"""

from typing import Dict, Any


class LogMessages:
    """日志消息模板类"""

    # ==================== 适配器相关 ====================
    ADAPTER_REGISTERED = "已注册存储适配器: {adapter}"
    ADAPTER_CREATE_FAILED = "创建存储适配器失败: {adapter}"

    # ==================== 文件上传相关 ====================
    FILE_UPLOAD_START = "开始上传文件到 Google Cloud Storage: {object_key}"
    FILE_UPLOAD_SUCCESS = "文件上传成功: {object_key}"
    FILE_UPLOAD_FAILED = "上传文件到 Google Cloud Storage 出错: {error}"
    FILE_REPLACE_EXISTING = "目标位置已存在对象，先删除再写入: {object_key}"

    # ==================== 文件删除相关 ====================
    FILE_DELETE_SKIPPED = "文件未完成上传，跳过删除: {hash}"
    FILE_DELETE_SUCCESS = "文件删除成功: {object_key}"
    FILE_DELETE_NOT_FOUND = "远端文件不存在，可能需要手动清理: {object_key}"

    # ==================== 签名URL相关 ====================
    SIGNED_URL_SUCCESS = "成功生成签名URL: {object_key}"
    SIGNED_URL_FALLBACK = (
        "缺少服务账号凭据，无法生成签名URL，改为返回直接URL（仅适用于公开文件）: {object_key}"
    )

    @classmethod
    def format_message(cls, message_template: str, **kwargs: Any) -> str:
        """格式化日志消息模板"""
        return message_template.format(**kwargs)

    @classmethod
    def get_structured_data(cls, **kwargs: Any) -> Dict[str, Any]:
        """获取结构化日志数据"""
        return kwargs


# 全局实例
log_messages = LogMessages()
