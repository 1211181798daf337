"""
生命周期对外接口。

每个函数都是一次原子调用：校验 → 返回新 Prescription（或抛类型化异常）。
结果只是本地的乐观提议，调用方负责提交给远端更新接口；
远端若拒绝，以远端为准。
"""

from typing import Optional

from ..types import DateLike, Prescription, TransitionAction, TransitionRequest
from .factory import get_transition
from .renewal import renew


def apply_transition(prescription: Prescription, request: TransitionRequest) -> Prescription:
    """按 request.action 分发；renew 返回的是一张新处方。"""
    if request.action in (TransitionAction.RENEW, TransitionAction.RENEW.value):
        return renew(prescription, now=request.requested_at)
    return get_transition(request.action).apply(prescription, request)


def discontinue(
    prescription: Prescription,
    reason,
    *,
    now: DateLike,
    other_text: Optional[str] = None,
) -> Prescription:
    return apply_transition(prescription, TransitionRequest(
        action=TransitionAction.DISCONTINUE,
        requested_at=now,
        reason=reason,
        other_text=other_text,
    ))


def cancel(
    prescription: Prescription,
    reason=None,
    *,
    now: DateLike,
    other_text: Optional[str] = None,
) -> Prescription:
    return apply_transition(prescription, TransitionRequest(
        action=TransitionAction.CANCEL,
        requested_at=now,
        reason=reason,
        other_text=other_text,
    ))


def hold(
    prescription: Prescription,
    reason,
    *,
    now: DateLike,
    other_text: Optional[str] = None,
) -> Prescription:
    return apply_transition(prescription, TransitionRequest(
        action=TransitionAction.HOLD,
        requested_at=now,
        reason=reason,
        other_text=other_text,
    ))


def resume(prescription: Prescription, *, now: DateLike) -> Prescription:
    return apply_transition(prescription, TransitionRequest(
        action=TransitionAction.RESUME,
        requested_at=now,
    ))
