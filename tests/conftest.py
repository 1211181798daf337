"""
Shared fixtures for all tests.

factory-boy factories live here so every test module can import them.
引擎的值类型都是 frozen dataclass，所以用 factory.Factory（不是 DjangoModelFactory）。
"""
import pytest
from datetime import date, datetime, timezone

import factory
from rxsafety.types import (
    DrugInteractionWarning,
    PatientData,
    Prescription,
    PrescriptionStatus,
    Severity,
)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

class PatientFactory(factory.Factory):
    class Meta:
        model = PatientData

    id = factory.Sequence(lambda n: f'patient-{n:04d}')
    medical_record_number = factory.Sequence(lambda n: f'MRN-{100000 + n}')
    first_name = 'John'
    last_name = 'Doe'
    date_of_birth = date(1990, 1, 15)


class WarningFactory(factory.Factory):
    class Meta:
        model = DrugInteractionWarning

    medication_name = 'Warfarin'
    severity = Severity.MODERATE
    description = 'Increased bleeding risk.'


class PrescriptionFactory(factory.Factory):
    class Meta:
        model = Prescription

    id = factory.Sequence(lambda n: f'rx-{n:04d}')
    patient_id = 'patient-0001'
    provider_id = 'provider-0001'
    medication_name = 'Amoxicillin'
    generic_name = 'amoxicillin'
    dosage = '500mg'
    frequency = 'three times daily'
    duration = '10 days'
    quantity = 30
    refills = 2
    prescribed_date = date(2026, 3, 1)
    start_date = date(2026, 3, 1)
    status = PrescriptionStatus.ACTIVE


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def today():
    """固定的参考日期，所有派生状态测试都基于它。"""
    return date(2026, 3, 10)


@pytest.fixture
def now():
    """生命周期转换用的时间戳。"""
    return datetime(2026, 3, 10, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def active_rx():
    return PrescriptionFactory()


@pytest.fixture
def on_hold_rx():
    return PrescriptionFactory(status=PrescriptionStatus.ON_HOLD, hold_reason='supply_issue')
