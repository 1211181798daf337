"""
Unit tests for serializers.py: 输出格式。
"""
import pytest
from datetime import timedelta

from rxsafety.lifecycle import hold, renew
from rxsafety.serializers import (
    serialize_duplicate_matches,
    serialize_interaction_summary,
    serialize_prescription,
    serialize_transition_request,
)
from rxsafety.severity import summarize_interactions
from rxsafety.similarity import find_duplicates
from rxsafety.types import PrescriptionStatus, Severity
from tests.conftest import PatientFactory, PrescriptionFactory, WarningFactory


class TestSerializePrescription:

    def test_basic_fields(self, active_rx):
        data = serialize_prescription(active_rx)

        assert data['id'] == active_rx.id
        assert data['status'] == 'ACTIVE'
        assert data['prescribed_date'] == '2026-03-01'
        assert data['end_date'] is None
        assert data['form'] is None
        assert data['status_history'] == []
        assert 'derived' not in data

    def test_derived_with_now(self, today):
        rx = PrescriptionFactory(end_date=today + timedelta(days=2), refills=1)
        data = serialize_prescription(rx, now=today)

        assert data['derived'] == {
            'expired': False,
            'refill_due': True,
            'refill_status': 'can_refill',
        }

    def test_history_and_warnings(self, active_rx, now):
        rx = PrescriptionFactory(interaction_warnings=[WarningFactory(severity=Severity.MAJOR)])
        held = hold(rx, 'supply_issue', now=now)
        data = serialize_prescription(held)

        assert data['interaction_warnings'][0]['severity'] == 'major'
        assert data['status_history'] == [{
            'action': 'hold',
            'from_status': 'ACTIVE',
            'to_status': 'ON_HOLD',
            'reason': 'supply_issue',
            'at': now.isoformat(),
            'expired': False,
        }]

    def test_renewed_prescription(self, now):
        source = PrescriptionFactory(status=PrescriptionStatus.CANCELLED)
        data = serialize_prescription(renew(source, now=now, new_id='rx-new'))

        assert data['id'] == 'rx-new'
        assert data['renewed_from'] == source.id
        assert data['start_date'] == '2026-03-10'


class TestSerializeTransitionRequest:

    def test_hold_request_body(self, active_rx, now):
        held = hold(active_rx, 'other', now=now, other_text='Patient travelling')
        body = serialize_transition_request(active_rx, held)

        assert body == {
            'prescription_id': active_rx.id,
            'expected_status': 'ACTIVE',
            'status': 'ON_HOLD',
            'discontinuation_reason': None,
            'hold_reason': 'Patient travelling',
            'cancellation_reason': None,
            'action': 'hold',
            'requested_at': now.isoformat(),
        }


class TestSerializeDuplicateMatches:

    def test_empty(self):
        assert serialize_duplicate_matches([]) == {'count': 0, 'warnings': []}

    def test_warning_shape(self):
        existing = PatientFactory(medical_record_number='MRN-777')
        matches = find_duplicates(PatientFactory(id=''), [existing])
        data = serialize_duplicate_matches(matches)

        assert data['count'] == 1
        warning = data['warnings'][0]
        assert warning['code'] == 'POSSIBLE_DUPLICATE_PATIENT'
        assert warning['patient_id'] == existing.id
        assert warning['medical_record_number'] == 'MRN-777'
        assert warning['score'] == 72
        assert warning['tier'] == 'MEDIUM'
        assert warning['reasons'] == ['NAME_MATCH', 'DATE_OF_BIRTH_MATCH']
        assert 'MRN-777' in warning['message']


class TestSerializeInteractionSummary:

    def test_counts(self):
        summary = summarize_interactions([
            WarningFactory(severity=Severity.CONTRAINDICATED),
            WarningFactory(severity=Severity.MAJOR),
            WarningFactory(severity=Severity.MINOR),
        ])
        data = serialize_interaction_summary(summary)

        assert data == {
            'total': 3,
            'contraindicated_count': 1,
            'major_count': 2,
            'moderate_count': 0,
            'minor_count': 1,
            'unknown_count': 0,
            'highest_severity': 'contraindicated',
        }

    def test_no_interactions(self):
        data = serialize_interaction_summary(summarize_interactions([]))

        assert data['total'] == 0
        assert data['highest_severity'] is None
