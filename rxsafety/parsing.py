"""
原始快照 dict → 标准值类型。

数据层给的是 JSON（日期是字符串），引擎只认识 rxsafety.types 里的结构。
这里负责把两者对上，格式不对一律抛 InputError。
"""

from datetime import date, datetime
from typing import Any, Optional

from .exceptions import InputError
from .types import (
    DrugInteractionWarning,
    MedicationForm,
    PatientData,
    Prescription,
    PrescriptionStatus,
    RouteOfAdministration,
)


def parse_date(value: Any, field_name: str = 'date') -> Optional[date]:
    """
    支持的格式：
      - date / datetime 对象（datetime 截成 date）
      - "YYYY-MM-DD"
      - ISO 8601 datetime，例如 "2026-01-15T08:30:00Z"
      - "YYYYMMDD"（无连字符）
    None / 空字符串 → None。
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    raw = str(value).strip()
    if not raw:
        return None

    if len(raw) == 8 and raw.isdigit():
        raw = f"{raw[:4]}-{raw[4:6]}-{raw[6:]}"

    try:
        if len(raw) == 10:
            return date.fromisoformat(raw)
        if raw.endswith('Z'):
            raw = raw[:-1] + '+00:00'
        return datetime.fromisoformat(raw).date()
    except ValueError:
        raise InputError(
            message=f"{field_name} is not a valid date: {value!r}.",
            code='INVALID_DATE',
            detail={'field': field_name, 'value': str(value)},
        )


def _text(raw: dict, key: str) -> Optional[str]:
    val = raw.get(key)
    if val is None:
        return None
    val = str(val).strip()
    return val or None


def _required_text(raw: dict, key: str) -> str:
    val = _text(raw, key)
    if val is None:
        raise InputError(
            message=f"{key} is required.",
            code='MISSING_FIELD',
            detail={'field': key},
        )
    return val


def _enum_or_none(enum_cls, value):
    if value in (None, ''):
        return None
    try:
        return enum_cls(str(value).strip().upper())
    except ValueError:
        raise InputError(
            message=f"Unknown {enum_cls.__name__}: {value!r}.",
            code='INVALID_ENUM',
            detail={'known_values': [m.value for m in enum_cls]},
        )


def _int_field(raw: dict, key: str, default=None):
    value = raw.get(key)
    if value in (None, ''):
        return default
    try:
        # 负数 refills 留给 Prescription.__post_init__ 统一报 NEGATIVE_REFILLS
        return int(value)
    except (TypeError, ValueError):
        raise InputError(
            message=f"{key} must be an integer, got {value!r}.",
            code=f"INVALID_{key.upper()}",
            detail={key: repr(value)},
        )


def warning_from_dict(raw: dict) -> DrugInteractionWarning:
    return DrugInteractionWarning(
        medication_name=_required_text(raw, 'medication_name'),
        severity=raw.get('severity'),
        description=_text(raw, 'description'),
    )


def patient_from_dict(raw: dict) -> PatientData:
    return PatientData(
        id=str(raw.get('id') or ''),
        first_name=(raw.get('first_name') or '').strip(),
        last_name=(raw.get('last_name') or '').strip(),
        middle_name=_text(raw, 'middle_name'),
        date_of_birth=parse_date(raw.get('date_of_birth'), 'date_of_birth'),
        fiscal_code=_text(raw, 'fiscal_code'),
        phone=_text(raw, 'phone') or _text(raw, 'phone_primary'),
        email=_text(raw, 'email'),
        medical_record_number=_text(raw, 'medical_record_number'),
    )


def prescription_from_dict(raw: dict) -> Prescription:
    """
    数据层 DTO → Prescription。

    status 缺省为 ACTIVE（intake 新建的处方）。
    status_history 不从外部读入：历史只由引擎内的转换追加。
    """
    return Prescription(
        id=_required_text(raw, 'id'),
        patient_id=_required_text(raw, 'patient_id'),
        provider_id=_required_text(raw, 'provider_id'),
        medication_name=_required_text(raw, 'medication_name'),
        generic_name=_text(raw, 'generic_name'),
        dosage=_required_text(raw, 'dosage'),
        form=_enum_or_none(MedicationForm, raw.get('form')),
        route=_enum_or_none(RouteOfAdministration, raw.get('route')),
        frequency=_required_text(raw, 'frequency'),
        duration=_text(raw, 'duration'),
        quantity=_int_field(raw, 'quantity'),
        refills=_int_field(raw, 'refills', default=0),
        instructions=_text(raw, 'instructions'),
        pharmacy_notes=_text(raw, 'pharmacy_notes'),
        prescribed_date=parse_date(raw.get('prescribed_date'), 'prescribed_date'),
        start_date=parse_date(raw.get('start_date'), 'start_date'),
        end_date=parse_date(raw.get('end_date'), 'end_date'),
        status=(raw.get('status') or PrescriptionStatus.ACTIVE.value),
        discontinuation_reason=_text(raw, 'discontinuation_reason'),
        hold_reason=_text(raw, 'hold_reason'),
        cancellation_reason=_text(raw, 'cancellation_reason'),
        interaction_warnings=tuple(
            warning_from_dict(w) for w in (raw.get('interaction_warnings') or [])
        ),
        renewed_from=_text(raw, 'renewed_from'),
    )
