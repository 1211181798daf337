"""
Response serializers: 引擎值对象 → JSON-able dict。

只负责「输出格式化」，不做任何解析或校验（解析见 parsing.py）。
调用方拿这些 dict 去调远端更新接口，或直接返回给前端。
"""

from .derived import is_expired, refill_due, refill_status


def _iso(value):
    return value.isoformat() if value is not None else None


def _enum(value):
    return value.value if value is not None else None


def serialize_warning(warning):
    return {
        'medication_name': warning.medication_name,
        'severity': warning.severity.value,
        'description': warning.description,
    }


def serialize_status_change(entry):
    return {
        'action': entry.action.value,
        'from_status': entry.from_status.value,
        'to_status': entry.to_status.value,
        'reason': entry.reason,
        'at': _iso(entry.at),
        'expired': entry.expired,
    }


def serialize_prescription(prescription, now=None):
    """
    Serialize prescription; 传了 now 时附带派生状态（expired / refill_due / refill_status）。
    """
    response = {
        'id': prescription.id,
        'patient_id': prescription.patient_id,
        'provider_id': prescription.provider_id,
        'medication_name': prescription.medication_name,
        'generic_name': prescription.generic_name,
        'dosage': prescription.dosage,
        'form': _enum(prescription.form),
        'route': _enum(prescription.route),
        'frequency': prescription.frequency,
        'duration': prescription.duration,
        'quantity': prescription.quantity,
        'refills': prescription.refills,
        'instructions': prescription.instructions,
        'pharmacy_notes': prescription.pharmacy_notes,
        'prescribed_date': _iso(prescription.prescribed_date),
        'start_date': _iso(prescription.start_date),
        'end_date': _iso(prescription.end_date),
        'status': prescription.status.value,
        'discontinuation_reason': prescription.discontinuation_reason,
        'hold_reason': prescription.hold_reason,
        'cancellation_reason': prescription.cancellation_reason,
        'interaction_warnings': [serialize_warning(w) for w in prescription.interaction_warnings],
        'status_history': [serialize_status_change(e) for e in prescription.status_history],
        'renewed_from': prescription.renewed_from,
    }

    if now is not None:
        status = refill_status(prescription, now)
        response['derived'] = {
            'expired': is_expired(prescription, now),
            'refill_due': refill_due(prescription, now),
            'refill_status': _enum(status),
        }

    return response


def serialize_transition_request(before, after):
    """
    本地转换结果 → 远端更新接口的请求体。

    只发生变化的状态字段 + 最新一条审计记录；renew 的新处方请用
    serialize_prescription() 整体提交。
    """
    last = after.status_history[-1] if after.status_history else None
    body = {
        'prescription_id': before.id,
        'expected_status': before.status.value,   # 远端据此做并发冲突检测
        'status': after.status.value,
        'discontinuation_reason': after.discontinuation_reason,
        'hold_reason': after.hold_reason,
        'cancellation_reason': after.cancellation_reason,
    }
    if last is not None:
        body['action'] = last.action.value
        body['requested_at'] = _iso(last.at)
    return body


def serialize_duplicate_matches(matches):
    """
    Serialize find_duplicates() 结果，格式与其他业务警告一致：
    每条 {'code', 'message', ...}，没有匹配时 warnings 为空列表。
    """
    warnings = [
        {
            'code': 'POSSIBLE_DUPLICATE_PATIENT',
            'message': (
                f"Existing patient {match.patient.medical_record_number or match.patient.id} "
                f"matches with score {match.score} ({match.tier.value})."
            ),
            'patient_id': match.patient.id,
            'medical_record_number': match.patient.medical_record_number,
            'score': match.score,
            'tier': match.tier.value,
            'reasons': list(match.reasons),
        }
        for match in matches
    ]
    return {
        'count': len(warnings),
        'warnings': warnings,
    }


def serialize_interaction_summary(summary):
    return {
        'total': summary.total,
        'contraindicated_count': summary.counts_for('contraindicated'),
        'major_count': summary.major_count,
        'moderate_count': summary.counts_for('moderate'),
        'minor_count': summary.counts_for('minor'),
        'unknown_count': summary.counts_for('unknown'),
        'highest_severity': _enum(summary.highest),
    }
