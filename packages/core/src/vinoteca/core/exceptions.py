"""Vinoteca 业务异常体系

订单创建与任务创建流水线在第一个失败的校验步骤处停止，
向调用方抛出下列异常之一（不累积多个错误）。
"""


class VinotecaError(Exception):
    """核心包基础异常"""

    def __init__(self, message: str, recoverable: bool = False) -> None:
        """
        Args:
            message: 面向调用方的可读错误描述
            recoverable: 调用方修正输入后是否可重试
        """
        super().__init__(message)
        self.message = message
        self.recoverable = recoverable


class ValidationError(VinotecaError):
    """输入缺失/非法或违反业务规则（HTTP 400）"""

    def __init__(self, message: str) -> None:
        super().__init__(message, recoverable=True)


class NotFoundError(VinotecaError):
    """引用的实体不存在（HTTP 404）"""

    def __init__(self, message: str) -> None:
        super().__init__(message, recoverable=True)
