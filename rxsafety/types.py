"""
引擎的标准值类型。

所有状态、严重程度都是封闭枚举，排序 / 映射表只在这里定义一次，
similarity / severity / derived / lifecycle 共用，不在各处重复 case 列表。

Prescription 是 frozen dataclass：生命周期转换永远返回新对象
（dataclasses.replace），不原地修改。
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from .exceptions import InputError

DateLike = Union[date, datetime]


class PrescriptionStatus(str, Enum):
    ACTIVE = 'ACTIVE'
    ON_HOLD = 'ON_HOLD'
    COMPLETED = 'COMPLETED'
    DISCONTINUED = 'DISCONTINUED'
    CANCELLED = 'CANCELLED'

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({
    PrescriptionStatus.COMPLETED,
    PrescriptionStatus.DISCONTINUED,
    PrescriptionStatus.CANCELLED,
})


class TransitionAction(str, Enum):
    DISCONTINUE = 'discontinue'
    CANCEL = 'cancel'
    HOLD = 'hold'
    RESUME = 'resume'
    RENEW = 'renew'


class Severity(str, Enum):
    """药物相互作用严重程度。排序见 SEVERITY_ORDER，运行时不可变。"""

    UNKNOWN = 'unknown'
    MINOR = 'minor'
    MODERATE = 'moderate'
    MAJOR = 'major'
    CONTRAINDICATED = 'contraindicated'

    @property
    def rank(self) -> int:
        return SEVERITY_RANK[self]

    @classmethod
    def parse(cls, value) -> 'Severity':
        """字符串 → Severity，大小写不敏感；无法识别的一律归为 UNKNOWN。"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or '').strip().lower())
        except ValueError:
            return cls.UNKNOWN


# 升序：unknown < minor < moderate < major < contraindicated
SEVERITY_ORDER = (
    Severity.UNKNOWN,
    Severity.MINOR,
    Severity.MODERATE,
    Severity.MAJOR,
    Severity.CONTRAINDICATED,
)
SEVERITY_RANK = {severity: rank for rank, severity in enumerate(SEVERITY_ORDER)}


class DuplicateTier(str, Enum):
    LOW = 'LOW'
    MEDIUM = 'MEDIUM'
    HIGH = 'HIGH'


class RefillStatus(str, Enum):
    CAN_REFILL = 'can_refill'
    NEEDS_RENEWAL = 'needs_renewal'
    EXPIRED = 'expired'


class MedicationForm(str, Enum):
    TABLET = 'TABLET'
    CAPSULE = 'CAPSULE'
    LIQUID = 'LIQUID'
    SYRUP = 'SYRUP'
    SUSPENSION = 'SUSPENSION'
    INJECTION = 'INJECTION'
    TOPICAL = 'TOPICAL'
    CREAM = 'CREAM'
    OINTMENT = 'OINTMENT'
    GEL = 'GEL'
    PATCH = 'PATCH'
    INHALER = 'INHALER'
    DROPS = 'DROPS'
    SUPPOSITORY = 'SUPPOSITORY'
    OTHER = 'OTHER'


class RouteOfAdministration(str, Enum):
    ORAL = 'ORAL'
    TOPICAL = 'TOPICAL'
    INTRAVENOUS = 'INTRAVENOUS'
    INTRAMUSCULAR = 'INTRAMUSCULAR'
    SUBCUTANEOUS = 'SUBCUTANEOUS'
    SUBLINGUAL = 'SUBLINGUAL'
    RECTAL = 'RECTAL'
    INHALATION = 'INHALATION'
    OPHTHALMIC = 'OPHTHALMIC'
    OTIC = 'OTIC'
    NASAL = 'NASAL'
    TRANSDERMAL = 'TRANSDERMAL'
    OTHER = 'OTHER'


def as_date(value: DateLike, field_name: str = 'now') -> date:
    """显式时间参数（now / requested_at）→ date。datetime 截成 date。"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise InputError(
        message=f"{field_name} must be a date or datetime, got {value!r}.",
        code='INVALID_DATE',
        detail={'field': field_name, 'value': repr(value)},
    )


def _check_date(field_name: str, value, required: bool = False) -> Optional[date]:
    """日期字段只接受 date / datetime；datetime 截成 date。字符串请先走 parsing。"""
    if value is None:
        if required:
            raise InputError(
                message=f"{field_name} is required.",
                code='MISSING_FIELD',
                detail={'field': field_name},
            )
        return None
    return as_date(value, field_name)


@dataclass(frozen=True)
class PatientData:
    """只读患者快照，由外部数据层提供。"""

    id: str
    first_name: str
    last_name: str
    middle_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    fiscal_code: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    medical_record_number: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'date_of_birth', _check_date('date_of_birth', self.date_of_birth))

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return ' '.join(' '.join(p.split()) for p in parts if p and p.strip())


@dataclass(frozen=True)
class DrugInteractionWarning:
    medication_name: str
    severity: Severity = Severity.UNKNOWN
    description: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'severity', Severity.parse(self.severity))


@dataclass(frozen=True)
class StatusChange:
    """一次生命周期转换的审计记录。"""

    action: TransitionAction
    from_status: PrescriptionStatus
    to_status: PrescriptionStatus
    at: DateLike
    reason: Optional[str] = None
    expired: bool = False   # 转换发生时处方是否已过 end_date


@dataclass(frozen=True)
class TransitionRequest:
    """
    调用方提交的转换请求。

    reason      分类表里的 code（"side_effects" / "other" / ...）
    other_text  reason == "other" 时的自由文本
    requested_at 由调用方提供，引擎从不读系统时钟；构造时即校验类型，
                 原值（date 或 datetime）原样写入 StatusChange.at
    """

    action: Union[TransitionAction, str]
    requested_at: DateLike
    reason: Optional[str] = None
    other_text: Optional[str] = None

    def __post_init__(self):
        as_date(self.requested_at, 'requested_at')


@dataclass(frozen=True)
class Prescription:
    id: str
    patient_id: str
    provider_id: str
    medication_name: str
    dosage: str
    frequency: str
    prescribed_date: date
    refills: int = 0
    status: PrescriptionStatus = PrescriptionStatus.ACTIVE
    generic_name: Optional[str] = None
    form: Optional[MedicationForm] = None
    route: Optional[RouteOfAdministration] = None
    duration: Optional[str] = None
    quantity: Optional[int] = None
    instructions: Optional[str] = None
    pharmacy_notes: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    discontinuation_reason: Optional[str] = None
    hold_reason: Optional[str] = None
    cancellation_reason: Optional[str] = None
    interaction_warnings: tuple = ()
    status_history: tuple = field(default=(), repr=False)
    renewed_from: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.refills, bool) or not isinstance(self.refills, int):
            raise InputError(
                message=f"refills must be an integer, got {self.refills!r}.",
                code='INVALID_REFILLS',
                detail={'refills': repr(self.refills)},
            )
        if self.refills < 0:
            raise InputError(
                message=f"refills must be >= 0, got {self.refills}.",
                code='NEGATIVE_REFILLS',
                detail={'refills': self.refills},
            )

        try:
            status = PrescriptionStatus(self.status)
        except ValueError:
            raise InputError(
                message=f"Unknown prescription status: {self.status!r}.",
                code='INVALID_STATUS',
                detail={'known_statuses': [s.value for s in PrescriptionStatus]},
            )
        object.__setattr__(self, 'status', status)

        object.__setattr__(self, 'prescribed_date',
                           _check_date('prescribed_date', self.prescribed_date, required=True))
        object.__setattr__(self, 'start_date', _check_date('start_date', self.start_date))
        object.__setattr__(self, 'end_date', _check_date('end_date', self.end_date))
        object.__setattr__(self, 'interaction_warnings', tuple(self.interaction_warnings or ()))
        object.__setattr__(self, 'status_history', tuple(self.status_history or ()))
