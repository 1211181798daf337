"""
引擎配置：从 Django settings 读取，缺省用内置默认值。

宿主服务在 settings.py 里覆盖即可，代码零改动：
  RXSAFETY_DUPLICATE_WEIGHTS        重复患者综合评分权重（合计必须为 100）
  RXSAFETY_DUPLICATE_MIN_SCORE      find_duplicates 的默认下限
  RXSAFETY_REFILL_DUE_WINDOW_DAYS   "即将到期需续药" 的天数窗口

Django settings 未配置时（纯库调用）直接返回默认值。
"""

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

DEFAULT_DUPLICATE_WEIGHTS = {
    'name': 60,            # 姓名相似度（0-100）按此比例缩放
    'fiscal_code': 20,     # 税号完全一致
    'date_of_birth': 12,   # 生日完全一致
    'phone': 8,            # 电话号码数字完全一致
}
DEFAULT_DUPLICATE_MIN_SCORE = 60
DEFAULT_REFILL_DUE_WINDOW_DAYS = 7


def _setting(name: str, default):
    if not settings.configured:
        return default
    return getattr(settings, name, default)


def get_duplicate_weights() -> dict[str, int]:
    """
    Raises:
        ImproperlyConfigured: 缺少权重项、出现负数，或合计不等于 100
    """
    weights = dict(_setting('RXSAFETY_DUPLICATE_WEIGHTS', DEFAULT_DUPLICATE_WEIGHTS))

    missing = set(DEFAULT_DUPLICATE_WEIGHTS) - set(weights)
    if missing:
        raise ImproperlyConfigured(
            f"RXSAFETY_DUPLICATE_WEIGHTS is missing keys: {sorted(missing)}"
        )
    if any(w < 0 for w in weights.values()):
        raise ImproperlyConfigured("RXSAFETY_DUPLICATE_WEIGHTS must not contain negative weights")
    if sum(weights[k] for k in DEFAULT_DUPLICATE_WEIGHTS) != 100:
        raise ImproperlyConfigured(
            f"RXSAFETY_DUPLICATE_WEIGHTS must sum to 100, got {weights!r}"
        )
    return weights


def get_duplicate_min_score() -> int:
    return int(_setting('RXSAFETY_DUPLICATE_MIN_SCORE', DEFAULT_DUPLICATE_MIN_SCORE))


def get_refill_due_window_days() -> int:
    """
    Raises:
        ImproperlyConfigured: 不是整数或为负数
    """
    raw = _setting('RXSAFETY_REFILL_DUE_WINDOW_DAYS', DEFAULT_REFILL_DUE_WINDOW_DAYS)
    try:
        days = int(raw)
    except (TypeError, ValueError):
        raise ImproperlyConfigured(
            f"RXSAFETY_REFILL_DUE_WINDOW_DAYS must be an integer, got {raw!r}"
        )
    if days < 0:
        raise ImproperlyConfigured(
            f"RXSAFETY_REFILL_DUE_WINDOW_DAYS must not be negative, got {days}"
        )
    return days
