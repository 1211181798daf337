"""
BaseTransition: 所有生命周期动作的抽象基类。

每个新动作只需：
1. 继承 BaseTransition，声明 action / reason_taxonomy / reason_required
2. 实现 changes()
3. 在 factory.py 的 _build_registry() 注册一行

源状态 / 目标状态统一写在 TRANSITION_TABLE，allowed_actions() 和各动作共用。
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from enum import Enum
from typing import Optional

from ..derived import is_expired
from ..exceptions import InvalidTransitionError
from ..types import (
    TERMINAL_STATUSES,
    Prescription,
    PrescriptionStatus,
    StatusChange,
    TransitionAction,
    TransitionRequest,
)
from .reasons import resolve_reason

logger = logging.getLogger(__name__)

# ── 状态转换表 ───────────────────────────────────────────────────────────────
# action: (允许的源状态, 目标状态)
# complete 由系统 / 时间驱动，不在本引擎内。
TRANSITION_TABLE: dict[TransitionAction, tuple[frozenset, PrescriptionStatus]] = {
    TransitionAction.DISCONTINUE: (
        frozenset({PrescriptionStatus.ACTIVE, PrescriptionStatus.ON_HOLD}),
        PrescriptionStatus.DISCONTINUED,
    ),
    TransitionAction.CANCEL: (
        frozenset({PrescriptionStatus.ACTIVE}),
        PrescriptionStatus.CANCELLED,
    ),
    TransitionAction.HOLD: (
        frozenset({PrescriptionStatus.ACTIVE}),
        PrescriptionStatus.ON_HOLD,
    ),
    TransitionAction.RESUME: (
        frozenset({PrescriptionStatus.ON_HOLD}),
        PrescriptionStatus.ACTIVE,
    ),
    # renew 生成新处方，原处方状态不变
    TransitionAction.RENEW: (
        TERMINAL_STATUSES,
        PrescriptionStatus.ACTIVE,
    ),
}


def allowed_actions(prescription: Prescription) -> list[TransitionAction]:
    """当前状态下可以执行的动作，按 TransitionAction 定义顺序。"""
    return [
        action for action in TransitionAction
        if prescription.status in TRANSITION_TABLE[action][0]
    ]


def can_discontinue(status: PrescriptionStatus) -> bool:
    return PrescriptionStatus(status) in TRANSITION_TABLE[TransitionAction.DISCONTINUE][0]


def ensure_source_status(prescription: Prescription, action: TransitionAction) -> None:
    """
    Raises:
        InvalidTransitionError: prescription.status 不是 action 允许的源状态
    """
    sources, _ = TRANSITION_TABLE[action]
    if prescription.status not in sources:
        logger.warning(
            "[Lifecycle] rejected %s on prescription %s (status=%s)",
            action.value, prescription.id, prescription.status.value,
        )
        raise InvalidTransitionError(current_status=prescription.status, action=action)


class BaseTransition(ABC):
    """
    单次原子调用：check_source → resolve_reason → changes → 新 Prescription

    子类必须实现 changes()；
    reason 的解析由 reason_taxonomy / reason_required 声明驱动。
    """

    action: TransitionAction
    reason_taxonomy: Optional[type[Enum]] = None
    reason_required: bool = False

    @property
    def source_statuses(self) -> frozenset:
        return TRANSITION_TABLE[self.action][0]

    @property
    def target_status(self) -> PrescriptionStatus:
        return TRANSITION_TABLE[self.action][1]

    # ── 必须实现 ───────────────────────────────────────────────────────────

    @abstractmethod
    def changes(self, prescription: Prescription, reason: Optional[str]) -> dict:
        """
        返回要写入新 Prescription 的字段（status 之外的部分），
        例如 {'discontinuation_reason': reason}。
        """

    # ── 提供默认实现，子类可 override ──────────────────────────────────────

    def resolve_reason(self, request: TransitionRequest) -> Optional[str]:
        if self.reason_taxonomy is None:
            return None
        return resolve_reason(
            self.reason_taxonomy,
            request.reason,
            other_text=request.other_text,
            required=self.reason_required,
            action=self.action.value,
        )

    # ── 对外统一入口 ───────────────────────────────────────────────────────

    def apply(self, prescription: Prescription, request: TransitionRequest) -> Prescription:
        """
        校验并返回转换后的新 Prescription，原对象不变。

        Raises:
            InvalidTransitionError: 源状态不允许
            ValidationError:        reason 缺失或不在分类表里
        """
        ensure_source_status(prescription, self.action)
        reason = self.resolve_reason(request)

        entry = StatusChange(
            action=self.action,
            from_status=prescription.status,
            to_status=self.target_status,
            at=request.requested_at,
            reason=reason,
            expired=is_expired(prescription, request.requested_at),
        )
        updated = replace(
            prescription,
            status=self.target_status,
            status_history=prescription.status_history + (entry,),
            **self.changes(prescription, reason),
        )

        logger.info(
            "[Lifecycle] %s prescription %s: %s -> %s",
            self.action.value, prescription.id,
            prescription.status.value, updated.status.value,
        )
        return updated
