"""
药物相互作用严重程度的排序与汇总。

引擎不计算相互作用本身（那是术语库的事），只对已给出的警告记录排序、
筛选和取最严重值。排序统一使用 types.SEVERITY_ORDER。
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from .exceptions import InputError
from .types import SEVERITY_ORDER, DrugInteractionWarning, Severity


def highest_severity(warnings: Iterable[DrugInteractionWarning]) -> Severity:
    """
    返回最严重的 severity，与输入顺序无关。

    空列表代表"没有相互作用"，调用方必须先判断，不能传进来。

    Raises:
        InputError: warnings 为空
    """
    warnings = list(warnings)
    if not warnings:
        raise InputError(
            message='highest_severity() requires at least one warning; handle "no interactions" before calling.',
            code='EMPTY_WARNING_LIST',
        )
    return max((w.severity for w in warnings), key=lambda s: s.rank)


def sort_by_severity(warnings: Iterable[DrugInteractionWarning]) -> list[DrugInteractionWarning]:
    """最严重的排最前；同级保持原顺序。"""
    return sorted(warnings, key=lambda w: w.severity.rank, reverse=True)


def filter_min_severity(
    warnings: Iterable[DrugInteractionWarning],
    min_severity,
) -> list[DrugInteractionWarning]:
    """只保留 severity >= min_severity 的警告。min_severity 可以是字符串。"""
    threshold = Severity.parse(min_severity).rank
    return [w for w in warnings if w.severity.rank >= threshold]


@dataclass(frozen=True)
class InteractionSummary:
    total: int
    counts: dict
    highest: Optional[Severity] = None

    @property
    def has_interactions(self) -> bool:
        return self.total > 0

    def counts_for(self, severity) -> int:
        return self.counts[Severity.parse(severity)]

    @property
    def major_count(self) -> int:
        """major + contraindicated，与相互作用检查接口的 major_count 口径一致。"""
        return self.counts[Severity.MAJOR] + self.counts[Severity.CONTRAINDICATED]


def summarize_interactions(warnings: Iterable[DrugInteractionWarning]) -> InteractionSummary:
    """
    按 severity 计数。空列表是合法输入：total=0，highest=None。
    """
    warnings = list(warnings)
    counts = {severity: 0 for severity in SEVERITY_ORDER}
    for w in warnings:
        counts[w.severity] += 1

    return InteractionSummary(
        total=len(warnings),
        counts=counts,
        highest=highest_severity(warnings) if warnings else None,
    )
