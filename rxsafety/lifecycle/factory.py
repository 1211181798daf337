"""
工厂函数：根据 action 字符串返回对应的 Transition 实例。

新增动作只需：
  1. 在 transitions.py 新建 Transition 类
  2. 在此处 _build_registry() 加一行
  不需要修改任何调用方代码。
"""

from ..exceptions import ValidationError
from ..types import TransitionAction
from .base import BaseTransition


def _build_registry() -> dict[TransitionAction, type[BaseTransition]]:
    # 延迟导入，避免循环依赖
    from .transitions import (
        CancelTransition,
        DiscontinueTransition,
        HoldTransition,
        ResumeTransition,
    )

    return {
        TransitionAction.DISCONTINUE: DiscontinueTransition,
        TransitionAction.CANCEL:      CancelTransition,
        TransitionAction.HOLD:        HoldTransition,
        TransitionAction.RESUME:      ResumeTransition,
    }


def get_transition(action) -> BaseTransition:
    """
    根据 action 返回已实例化的 Transition。

    Args:
        action: TransitionAction 或其字符串值，例如 "hold"

    Raises:
        ValidationError: 未知 action（renew 也不在这里，它生成新处方，走 renew()）
    """
    registry = _build_registry()
    try:
        transition_cls = registry.get(TransitionAction(action))
    except ValueError:
        transition_cls = None

    if transition_cls is None:
        raise ValidationError(
            message=f"Unknown lifecycle action: {action!r}.",
            code='UNKNOWN_ACTION',
            detail={'known_actions': [a.value for a in registry]},
        )

    return transition_cls()
