"""
各动作的 reason 分类表（封闭枚举）。

选 "other" 时，调用方提供的自由文本 trim 后作为最终 reason：
  - discontinue / hold：trim 后不能为空，否则 ValidationError
  - cancel：可以为空（reason 完全可选）
非 "other" 的 code 原样存 code 值，显示文案交给展示层翻译。
"""

from enum import Enum
from typing import Optional

from ..exceptions import ValidationError


class DiscontinueReason(str, Enum):
    SIDE_EFFECTS = 'side_effects'
    ALLERGIC_REACTION = 'allergic_reaction'
    INEFFECTIVE = 'ineffective'
    PATIENT_REQUEST = 'patient_request'
    THERAPY_COMPLETED = 'therapy_completed'
    CHANGED_MEDICATION = 'changed_medication'
    DRUG_INTERACTION = 'drug_interaction'
    OTHER = 'other'


class HoldReason(str, Enum):
    AWAITING_LAB_RESULTS = 'awaiting_lab_results'
    PENDING_CONSULTATION = 'pending_consultation'
    ADVERSE_REACTION_MONITORING = 'adverse_reaction_monitoring'
    SURGERY_PREPARATION = 'surgery_preparation'
    PATIENT_HOSPITALIZED = 'patient_hospitalized'
    DOSE_ADJUSTMENT_NEEDED = 'dose_adjustment_needed'
    SUPPLY_ISSUE = 'supply_issue'
    OTHER = 'other'


class CancelReason(str, Enum):
    DUPLICATE_ORDER = 'duplicate_order'
    WRONG_MEDICATION = 'wrong_medication'
    WRONG_DOSAGE = 'wrong_dosage'
    WRONG_PATIENT = 'wrong_patient'
    PATIENT_DECLINED = 'patient_declined'
    INSURANCE_ISSUE = 'insurance_issue'
    OUT_OF_STOCK = 'out_of_stock'
    OTHER = 'other'


OTHER = 'other'


def resolve_reason(
    taxonomy: type[Enum],
    reason,
    other_text: Optional[str] = None,
    required: bool = False,
    action: str = '',
) -> Optional[str]:
    """
    把 (reason code, other_text) 解析成最终要存的 reason 字符串。

    Returns:
        存储用的 reason；reason 可选且未提供时返回 None

    Raises:
        ValidationError: 必填却为空（REASON_REQUIRED），或 code 不在分类表里（UNKNOWN_REASON）
    """
    if reason is not None and not isinstance(reason, (str, Enum)):
        raise ValidationError(
            message=f"Unknown {action} reason: {reason!r}.",
            code='UNKNOWN_REASON',
            detail={'action': action, 'known_reasons': [m.value for m in taxonomy]},
        )
    code = reason.value if isinstance(reason, Enum) else (reason or '').strip()

    if not code:
        if required:
            raise ValidationError(
                message=f"A reason is required to {action} a prescription.",
                code='REASON_REQUIRED',
                detail={'action': action},
            )
        return None

    try:
        member = taxonomy(code)
    except ValueError:
        raise ValidationError(
            message=f"Unknown {action} reason: {code!r}.",
            code='UNKNOWN_REASON',
            detail={'action': action, 'known_reasons': [m.value for m in taxonomy]},
        )

    if member.value != OTHER:
        return member.value

    text = (other_text or '').strip()
    if text:
        return text
    if required:
        raise ValidationError(
            message=f"Please describe the reason to {action} this prescription.",
            code='REASON_REQUIRED',
            detail={'action': action, 'reason': OTHER},
        )
    return None
