"""
派生状态：根据处方 / 患者快照和显式传入的 now 计算布尔标记。

所有函数都要求调用方传 now（date 或 datetime），从不读系统时钟，
同样的输入永远得到同样的结果。比较只看日期部分。
now 在读取处方任何字段之前先校验，格式不对一律 InputError。
"""

from typing import Optional

from . import conf
from .exceptions import InputError
from .types import DateLike, Prescription, PrescriptionStatus, RefillStatus, as_date

# refill_due 的窗口固定为 7 天；RXSAFETY_REFILL_DUE_WINDOW_DAYS 只影响 is_ending_soon / refill_status
REFILL_DUE_WINDOW_DAYS = 7


def _days_until_end(prescription: Prescription, today) -> Optional[int]:
    if prescription.status != PrescriptionStatus.ACTIVE or prescription.end_date is None:
        return None
    return (prescription.end_date - today).days


def is_expired(prescription: Prescription, now: DateLike) -> bool:
    """ACTIVE 且 end_date 严格早于 now。"""
    days = _days_until_end(prescription, as_date(now))
    return days is not None and days < 0


def is_ending_soon(prescription: Prescription, now: DateLike) -> bool:
    """ACTIVE 且 end_date 落在 [now, now + window] 内（未过期），window 可配置。"""
    days = _days_until_end(prescription, as_date(now))
    return days is not None and 0 <= days <= conf.get_refill_due_window_days()


def refill_due(prescription: Prescription, now: DateLike) -> bool:
    """
    还有 refill 可用，且 end_date 落在 [now, now + 7 天] 内。

    与 is_expired 互斥：过期的处方不再算 refill-due。
    """
    days = _days_until_end(prescription, as_date(now))
    return (
        days is not None
        and 0 <= days <= REFILL_DUE_WINDOW_DAYS
        and prescription.refills > 0
    )


def refill_status(prescription: Prescription, now: DateLike) -> Optional[RefillStatus]:
    """
    列表 / 卡片上的续药提示：
      - CAN_REFILL     已过期或即将到期，且还有 refill
      - EXPIRED        已过期，且没有 refill（需要 renew）
      - NEEDS_RENEWAL  即将到期，且没有 refill
      - None           不适用（非 ACTIVE、没有 end_date、离到期还远）
    """
    today = as_date(now)
    if _days_until_end(prescription, today) is None:
        return None

    has_refills = prescription.refills > 0
    if is_expired(prescription, today):
        return RefillStatus.CAN_REFILL if has_refills else RefillStatus.EXPIRED
    if is_ending_soon(prescription, today):
        return RefillStatus.CAN_REFILL if has_refills else RefillStatus.NEEDS_RENEWAL
    return None


def can_refill(prescription: Prescription) -> bool:
    return prescription.status == PrescriptionStatus.ACTIVE and prescription.refills > 0


def age(date_of_birth: DateLike, now: DateLike) -> int:
    """
    周岁：年份差，若 now 的月 / 日还没到生日则减一。

    Raises:
        InputError: date_of_birth 缺失、类型不对，或晚于 now
    """
    if date_of_birth is None:
        raise InputError(
            message='date_of_birth is required to compute age.',
            code='MISSING_FIELD',
            detail={'field': 'date_of_birth'},
        )
    dob = as_date(date_of_birth, 'date_of_birth')
    today = as_date(now)
    if dob > today:
        raise InputError(
            message=f"date_of_birth {dob.isoformat()} is after {today.isoformat()}.",
            code='DOB_IN_FUTURE',
            detail={'date_of_birth': dob.isoformat(), 'now': today.isoformat()},
        )

    years = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        years -= 1
    return years
