"""
统一异常体系。

所有引擎异常继承 BaseAppException，包含：
- type:        错误类型标识（validation_error / block / input_error）
- code:        错误码（REASON_REQUIRED / INVALID_TRANSITION / INVALID_DATE / ...）
- message:     人类可读的描述
- detail:      可选的附加信息（dict / list / None）
- http_status: 宿主服务渲染时使用的 HTTP 状态码

全部是本地、同步、可恢复的错误。"没有重复患者"、"没有相互作用"
是合法的空结果，不走异常。
"""


class BaseAppException(Exception):
    """所有引擎异常的基类。"""

    type = 'error'
    code = 'UNKNOWN_ERROR'
    http_status = 500

    def __init__(self, message, code=None, detail=None, http_status=None):
        self.message = message
        if code is not None:
            self.code = code
        if http_status is not None:
            self.http_status = http_status
        self.detail = detail
        super().__init__(message)


class ValidationError(BaseAppException):
    """缺少必填 reason、reason 不在分类表内、未知 action。400。"""

    type = 'validation_error'
    code = 'VALIDATION_ERROR'
    http_status = 400


class InvalidTransitionError(BaseAppException):
    """
    在不允许的源状态上执行了受控动作。409。

    current_status / action 同时放在属性和 detail 上，
    调用方可以直接读属性，exception_handler 直接输出 detail。
    """

    type = 'block'
    code = 'INVALID_TRANSITION'
    http_status = 409

    def __init__(self, current_status, action, message=None):
        self.current_status = current_status
        self.action = action
        status_value = getattr(current_status, 'value', current_status)
        action_value = getattr(action, 'value', action)
        super().__init__(
            message=message or f"Cannot {action_value} a prescription with status {status_value}.",
            detail={'current_status': status_value, 'action': action_value},
        )


class InputError(BaseAppException):
    """输入数据本身不合法：日期格式错误、refills 为负数等。400。"""

    type = 'input_error'
    code = 'INPUT_ERROR'
    http_status = 400
