from .base import TRANSITION_TABLE, allowed_actions, can_discontinue
from .factory import get_transition
from .reasons import CancelReason, DiscontinueReason, HoldReason
from .renewal import renew
from .services import apply_transition, cancel, discontinue, hold, resume

__all__ = [
    'TRANSITION_TABLE',
    'CancelReason',
    'DiscontinueReason',
    'HoldReason',
    'allowed_actions',
    'apply_transition',
    'can_discontinue',
    'cancel',
    'discontinue',
    'get_transition',
    'hold',
    'renew',
    'resume',
]
