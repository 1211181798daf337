"""
重复患者检测。

compare() 是纯字符串相似度（0-100，基于编辑距离）。
score_duplicate_candidate() 在姓名相似度上叠加精确匹配加分：

    score = round(compare(全名A, 全名B) * W_name / 100)
          + W_fiscal_code   （税号一致，忽略大小写和空格）
          + W_date_of_birth （生日一致）
          + W_phone         （电话只比较数字）

默认权重 60 / 20 / 12 / 8，合计 100，所以分数始终在 [0, 100]。
两边任一方缺少某字段时该项不加分。

分级 LOW (<60) / MEDIUM (60-79) / HIGH (>=80) 只是提示，
永远不阻止调用方继续创建患者。
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from . import conf
from .types import DuplicateTier, PatientData

logger = logging.getLogger(__name__)

HIGH_THRESHOLD = 80
MEDIUM_THRESHOLD = 60

_NON_DIGITS_RE = re.compile(r"\D")


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def edit_distance(a: str, b: str) -> int:
    """Levenshtein 距离，插入 / 删除 / 替换代价均为 1，比较前统一小写。"""
    s1 = (a or '').lower()
    s2 = (b or '').lower()
    if s1 == s2:
        return 0
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)

    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        current = [i]
        for j, c2 in enumerate(s2, start=1):
            if c1 == c2:
                current.append(previous[j - 1])
            else:
                current.append(min(
                    previous[j - 1] + 1,   # 替换
                    current[j - 1] + 1,    # 插入
                    previous[j] + 1,       # 删除
                ))
        previous = current
    return previous[-1]


def compare(a: str, b: str) -> int:
    s1 = (a or '').lower()
    s2 = (b or '').lower()
    if s1 == s2:
        return 100

    max_len = max(len(s1), len(s2))
    distance = edit_distance(s1, s2)
    return _round_half_up((max_len - distance) / max_len * 100)


def classify(score: int) -> DuplicateTier:
    if score >= HIGH_THRESHOLD:
        return DuplicateTier.HIGH
    if score >= MEDIUM_THRESHOLD:
        return DuplicateTier.MEDIUM
    return DuplicateTier.LOW


def _normalize_code(value: Optional[str]) -> str:
    return ''.join((value or '').split()).upper()


def _normalize_phone(value: Optional[str]) -> str:
    return _NON_DIGITS_RE.sub('', value or '')


def _field_matches(candidate: PatientData, existing: PatientData) -> dict[str, bool]:
    fiscal_a = _normalize_code(candidate.fiscal_code)
    phone_a = _normalize_phone(candidate.phone)
    return {
        'fiscal_code': bool(fiscal_a) and fiscal_a == _normalize_code(existing.fiscal_code),
        'date_of_birth': (
            candidate.date_of_birth is not None
            and candidate.date_of_birth == existing.date_of_birth
        ),
        'phone': bool(phone_a) and phone_a == _normalize_phone(existing.phone),
    }


def score_duplicate_candidate(candidate: PatientData, existing: PatientData) -> int:
    weights = conf.get_duplicate_weights()
    name_similarity = compare(candidate.full_name, existing.full_name)

    score = _round_half_up(name_similarity * weights['name'] / 100)
    for key, matched in _field_matches(candidate, existing).items():
        if matched:
            score += weights[key]
    return score


def match_reasons(candidate: PatientData, existing: PatientData) -> list[str]:
    """返回命中项的 reason code 列表，供警告弹窗逐条展示。"""
    reasons = []
    matches = _field_matches(candidate, existing)
    if matches['fiscal_code']:
        reasons.append('FISCAL_CODE_MATCH')

    name_similarity = compare(candidate.full_name, existing.full_name)
    if name_similarity == 100:
        reasons.append('NAME_MATCH')
    elif name_similarity >= MEDIUM_THRESHOLD:
        reasons.append('NAME_SIMILAR')

    if matches['date_of_birth']:
        reasons.append('DATE_OF_BIRTH_MATCH')
    if matches['phone']:
        reasons.append('PHONE_MATCH')
    return reasons


@dataclass(frozen=True)
class DuplicateMatch:
    patient: PatientData
    score: int
    tier: DuplicateTier
    reasons: tuple = ()


def find_duplicates(
    candidate: PatientData,
    existing_patients: Iterable[PatientData],
    min_score: Optional[int] = None,
) -> list[DuplicateMatch]:
    """
    对所有已有患者打分，返回 score >= min_score 的匹配，按分数降序。

    同分时按 (last_name, first_name, id) 排序，保证结果可复现。
    没有匹配 → 空列表，不是错误。
    """
    if min_score is None:
        min_score = conf.get_duplicate_min_score()

    matches = []
    for existing in existing_patients:
        if candidate.id and existing.id == candidate.id:
            continue
        score = score_duplicate_candidate(candidate, existing)
        if score < min_score:
            continue
        matches.append(DuplicateMatch(
            patient=existing,
            score=score,
            tier=classify(score),
            reasons=tuple(match_reasons(candidate, existing)),
        ))

    matches.sort(key=lambda m: (
        -m.score,
        m.patient.last_name.lower(),
        m.patient.first_name.lower(),
        m.patient.id,
    ))

    # 日志里不写姓名等身份信息
    if matches:
        logger.info(
            "[Duplicate] %d potential duplicate(s), best score=%d (%s)",
            len(matches), matches[0].score, matches[0].tier.value,
        )
    else:
        logger.debug("[Duplicate] no potential duplicates above min_score=%d", min_score)
    return matches
