"""
速成查字 - 仓颉 / 速成输入法拆码与打字练习

查字拆码、输入历史、打字进度计算
"""

__version__ = "0.1.0"

from sucheng.engine import (
    LearnerEngine,
    create_engine,
    EngineConfig,
    Scheme,
    Decomposition,
    decompose,
    merge_history,
    TypingState,
    CharState,
    advance,
    compute_progress,
    create_initial_state,
    reset_state,
)

__all__ = [
    "__version__",
    "LearnerEngine",
    "create_engine",
    "EngineConfig",
    "Scheme",
    "Decomposition",
    "decompose",
    "merge_history",
    "TypingState",
    "CharState",
    "advance",
    "compute_progress",
    "create_initial_state",
    "reset_state",
]
