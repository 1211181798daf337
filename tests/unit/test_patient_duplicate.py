"""
Unit tests for find_duplicates().

覆盖路径：
1. 全新患者 → 空列表（不是错误）
2. 姓名 + DOB + 税号一致 → HIGH，reason 列出命中项
3. 只有姓名相似 → 低于默认下限，被过滤
4. 按分数降序；同分按 last_name / first_name / id 排序
5. min_score 参数覆盖默认值
6. 自己不和自己匹配
"""
import pytest
from datetime import date

from rxsafety.similarity import find_duplicates
from rxsafety.types import DuplicateTier
from tests.conftest import PatientFactory


class TestFindDuplicates:

    # ---------------------------------------------------------------
    # Case 1: 没有任何已有患者相似 → 空列表
    # ---------------------------------------------------------------
    def test_no_duplicates_returns_empty_list(self):
        candidate = PatientFactory(first_name='Brand', last_name='New', date_of_birth=date(2001, 12, 25))
        existing = [PatientFactory(first_name='Anna', last_name='Verdi', date_of_birth=date(1970, 1, 1))]

        assert find_duplicates(candidate, existing) == []

    def test_empty_existing_list(self):
        assert find_duplicates(PatientFactory(), []) == []

    # ---------------------------------------------------------------
    # Case 2: 强匹配 → HIGH
    # ---------------------------------------------------------------
    def test_strong_match_is_high(self):
        candidate = PatientFactory(id='', fiscal_code='DOEJHN90A15F205X')
        existing = PatientFactory(fiscal_code='DOEJHN90A15F205X')

        matches = find_duplicates(candidate, [existing])

        assert len(matches) == 1
        assert matches[0].patient is existing
        assert matches[0].score == 92
        assert matches[0].tier == DuplicateTier.HIGH
        assert matches[0].reasons == ('FISCAL_CODE_MATCH', 'NAME_MATCH', 'DATE_OF_BIRTH_MATCH')

    # ---------------------------------------------------------------
    # Case 3: 只有姓名相似（53 分）→ 被默认下限 60 过滤
    # ---------------------------------------------------------------
    def test_weak_match_filtered(self):
        candidate = PatientFactory(id='', first_name='John', date_of_birth=None)
        existing = PatientFactory(first_name='Jon', date_of_birth=None)

        assert find_duplicates(candidate, [existing]) == []

    # ---------------------------------------------------------------
    # Case 4: 排序
    # ---------------------------------------------------------------
    def test_ranked_by_score_desc(self):
        candidate = PatientFactory(id='', first_name='John', last_name='Doe', fiscal_code='FC1')
        exact = PatientFactory(first_name='John', last_name='Doe', fiscal_code='FC1')
        similar = PatientFactory(first_name='Jon', last_name='Doe')

        matches = find_duplicates(candidate, [similar, exact])

        assert [m.patient for m in matches] == [exact, similar]
        assert matches[0].score > matches[1].score

    def test_ties_broken_deterministically(self):
        candidate = PatientFactory(id='', first_name='John', last_name='Doe')
        b = PatientFactory(id='patient-b')
        a = PatientFactory(id='patient-a')

        first = find_duplicates(candidate, [b, a])
        second = find_duplicates(candidate, [a, b])

        assert [m.patient.id for m in first] == ['patient-a', 'patient-b']
        assert [m.patient.id for m in second] == ['patient-a', 'patient-b']

    # ---------------------------------------------------------------
    # Case 5: min_score
    # ---------------------------------------------------------------
    def test_min_score_override(self):
        candidate = PatientFactory(id='', first_name='John', date_of_birth=None)
        existing = PatientFactory(first_name='Jon', date_of_birth=None)

        matches = find_duplicates(candidate, [existing], min_score=0)

        assert len(matches) == 1
        assert matches[0].tier == DuplicateTier.LOW

    def test_min_score_from_settings(self, settings):
        settings.RXSAFETY_DUPLICATE_MIN_SCORE = 95
        candidate = PatientFactory(id='')
        existing = PatientFactory()   # 姓名 + DOB = 72

        assert find_duplicates(candidate, [existing]) == []

    # ---------------------------------------------------------------
    # Case 6: 同一个患者不算重复
    # ---------------------------------------------------------------
    def test_skips_same_patient_id(self):
        patient = PatientFactory()
        assert find_duplicates(patient, [patient]) == []
