"""
统一异常定义模块
提供每日名言问答系统的异常类和错误处理机制
"""

from typing import Optional, Dict, Any, List


class QuizSystemError(Exception):
    """问答系统基础异常类"""

    status_code: int = 500

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ConfigurationError(QuizSystemError):
    """配置相关错误"""
    pass


class ClientInputError(QuizSystemError):
    """客户端输入错误（缺少请求头或请求体无效）"""

    status_code = 400

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None,
                 issues: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message, error_code, context)
        self.issues = issues


class NotFoundError(QuizSystemError):
    """名言或提交不存在"""

    status_code = 404


class ConflictError(QuizSystemError):
    """当日已提交或已跳过"""

    status_code = 409


class InternalError(QuizSystemError):
    """内部错误"""

    status_code = 500


# 错误代码常量
class ErrorCodes:
    """错误代码常量"""

    # 配置错误
    CONFIG_NOT_FOUND = "CONFIG_001"
    CONFIG_INVALID_FORMAT = "CONFIG_002"
    CONFIG_LOAD_ERROR = "CONFIG_003"

    # 输入错误
    INPUT_MISSING_DEVICE_ID = "INPUT_001"
    INPUT_INVALID_BODY = "INPUT_002"

    # 资源不存在
    QUOTE_NOT_FOUND = "NOT_FOUND_001"
    SUBMISSION_NOT_FOUND = "NOT_FOUND_002"

    # 冲突
    DAY_ALREADY_LOCKED = "CONFLICT_001"

    # 内部错误
    DUPLICATE_SUBMISSION_ID = "INTERNAL_001"


def create_error_response(error: QuizSystemError) -> Dict[str, Any]:
    """创建标准化的错误响应"""
    if isinstance(error, InternalError):
        # 内部细节不暴露给调用方
        return {"message": "Internal error"}

    response: Dict[str, Any] = {"message": error.message}
    issues = getattr(error, "issues", None)
    if issues is not None:
        response["issues"] = issues
    return response

