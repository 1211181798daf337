"""
DRF EXCEPTION_HANDLER：把引擎异常渲染成统一的 JSON 错误体。

宿主服务在 settings.REST_FRAMEWORK['EXCEPTION_HANDLER'] 指向这里即可：

{
    "type":    "validation_error" | "block" | "input_error" | "config_error",
    "code":    "REASON_REQUIRED",
    "message": "A reason is required to hold a prescription.",
    "detail":  { ... }  // 没有附加信息时省略
}
"""

import logging

from django.core.exceptions import ImproperlyConfigured
from django.http import JsonResponse
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.views import exception_handler as drf_default_handler

from .exceptions import BaseAppException, InvalidTransitionError

logger = logging.getLogger(__name__)


def _error_response(error_type, code, message, status, detail=None):
    payload = {'type': error_type, 'code': code, 'message': message}
    if detail is not None:
        payload['detail'] = detail
    return JsonResponse(payload, status=status)


def unified_exception_handler(exc, context):
    """
    按顺序匹配：
    1. 引擎异常（BaseAppException 子类）
    2. DRF 请求体校验失败
    3. RXSAFETY_* 配置错误（例如权重合计不是 100）
    其余返回 DRF 默认处理的结果（可能是 None，交给 Django 500）。
    """
    if isinstance(exc, BaseAppException):
        # 状态冲突常见于并发编辑，单独用 info 级别
        log = logger.info if isinstance(exc, InvalidTransitionError) else logger.warning
        log("[ExceptionHandler] %s %s: %s", exc.type, exc.code, exc.message)
        return _error_response(exc.type, exc.code, exc.message, exc.http_status, exc.detail)

    if isinstance(exc, DRFValidationError):
        return _error_response(
            'validation_error', 'VALIDATION_ERROR', 'Request validation failed', 400, exc.detail,
        )

    if isinstance(exc, ImproperlyConfigured) and 'RXSAFETY_' in str(exc):
        logger.error("[ExceptionHandler] engine misconfigured: %s", exc)
        return _error_response('config_error', 'IMPROPERLY_CONFIGURED', str(exc), 500)

    return drf_default_handler(exc, context)
