"""
具体动作实现。

新增动作：在此文件添加一个类，然后在 factory.py 注册即可。

已注册动作：
  discontinue: DiscontinueTransition  (ACTIVE / ON_HOLD → DISCONTINUED，reason 必填)
  cancel: CancelTransition  (ACTIVE → CANCELLED，reason 可选)
  hold: HoldTransition  (ACTIVE → ON_HOLD，reason 必填)
  resume: ResumeTransition  (ON_HOLD → ACTIVE，无 reason)

renew 不改原处方，而是生成新处方，见 renewal.py。
"""

from typing import Optional

from ..types import Prescription, TransitionAction
from .base import BaseTransition
from .reasons import CancelReason, DiscontinueReason, HoldReason


class DiscontinueTransition(BaseTransition):
    action = TransitionAction.DISCONTINUE
    reason_taxonomy = DiscontinueReason
    reason_required = True

    def changes(self, prescription: Prescription, reason: Optional[str]) -> dict:
        return {'discontinuation_reason': reason}


class CancelTransition(BaseTransition):
    action = TransitionAction.CANCEL
    reason_taxonomy = CancelReason
    reason_required = False

    def changes(self, prescription: Prescription, reason: Optional[str]) -> dict:
        return {'cancellation_reason': reason}


class HoldTransition(BaseTransition):
    action = TransitionAction.HOLD
    reason_taxonomy = HoldReason
    reason_required = True

    def changes(self, prescription: Prescription, reason: Optional[str]) -> dict:
        return {'hold_reason': reason}


# ── ResumeTransition ───────────────────────────────────────────────────────
#
# 恢复后清空 hold_reason：ACTIVE 的处方不应再带暂停原因。
# 暂停原因仍保留在 status_history 里那条 hold 记录上，审计可查。

class ResumeTransition(BaseTransition):
    action = TransitionAction.RESUME

    def changes(self, prescription: Prescription, reason: Optional[str]) -> dict:
        return {'hold_reason': None}
