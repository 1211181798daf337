"""
renew: 终态处方（COMPLETED / DISCONTINUED / CANCELLED）唯一的"向前"路径。

不修改原处方，而是生成一张新的 ACTIVE 处方：
  - 复制临床字段：药名、通用名、剂量、剂型、途径、频次、疗程、数量、用药说明、药房备注
  - prescribed_date / start_date 重置为 now，end_date 清空由调用方重新设置
  - refills 沿用原处方的 refill 数
  - 不复制状态历史、停药 / 暂停 / 取消原因、相互作用警告
"""

import logging
import uuid
from typing import Optional

from ..types import DateLike, Prescription, PrescriptionStatus, TransitionAction, as_date
from .base import ensure_source_status

logger = logging.getLogger(__name__)


def renew(
    source: Prescription,
    *,
    now: DateLike,
    new_id: Optional[str] = None,
) -> Prescription:
    """
    Raises:
        InputError:             now 不是 date / datetime
        InvalidTransitionError: source 仍是 ACTIVE / ON_HOLD（必须先停药、完成或取消）
    """
    today = as_date(now)
    ensure_source_status(source, TransitionAction.RENEW)

    renewed = Prescription(
        id=new_id or str(uuid.uuid4()),
        patient_id=source.patient_id,
        provider_id=source.provider_id,
        medication_name=source.medication_name,
        generic_name=source.generic_name,
        dosage=source.dosage,
        form=source.form,
        route=source.route,
        frequency=source.frequency,
        duration=source.duration,
        quantity=source.quantity,
        refills=source.refills,
        instructions=source.instructions,
        pharmacy_notes=source.pharmacy_notes,
        prescribed_date=today,
        start_date=today,
        end_date=None,
        status=PrescriptionStatus.ACTIVE,
        renewed_from=source.id,
    )

    logger.info(
        "[Lifecycle] renewed prescription %s (status=%s) as %s",
        source.id, source.status.value, renewed.id,
    )
    return renewed
