"""
rxsafety: 处方 / 患者的临床安全决策引擎。

四块纯逻辑：
  similarity  重复患者检测
  severity    药物相互作用严重程度排序 / 汇总
  derived     派生状态（过期、需续药、年龄）
  lifecycle   处方生命周期状态机
"""

from .exceptions import InputError, InvalidTransitionError, ValidationError
from .types import (
    DrugInteractionWarning,
    DuplicateTier,
    PatientData,
    Prescription,
    PrescriptionStatus,
    RefillStatus,
    Severity,
    StatusChange,
    TransitionAction,
    TransitionRequest,
)

__all__ = [
    'DrugInteractionWarning',
    'DuplicateTier',
    'InputError',
    'InvalidTransitionError',
    'PatientData',
    'Prescription',
    'PrescriptionStatus',
    'RefillStatus',
    'Severity',
    'StatusChange',
    'TransitionAction',
    'TransitionRequest',
    'ValidationError',
]
