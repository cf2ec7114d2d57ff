from .config import EngineConfig, Scheme, Decomposition, LookupOutput
from .core import LearnerEngine
from .text import is_chinese_char, filter_han, count_han
from .mapping import KEY_TO_QUICK_UNIT, parse_line_mapping, load_mapping, load_default_mapping
from .decompose import decompose, decompose_text
from .history import HISTORY_LIMIT, merge_history
from .practice import (
    TypingState,
    TypingProgress,
    CharState,
    create_initial_state,
    reset_state,
    advance,
    compute_progress,
)
from .stats import calculate_cpm, calculate_accuracy, shuffle, summarize, SessionSummary
from .logging import setup_logging, get_logger, get_api_logger, get_engine_logger


def create_engine(config: EngineConfig = None, mapping_path: str = None) -> LearnerEngine:
    """
    创建引擎

    Args:
        config: 引擎配置
        mapping_path: 字码表路径（可选，默认使用内置精简表）

    Returns:
        LearnerEngine 实例
    """
    config = config or EngineConfig()
    if mapping_path:
        config.mapping_path = mapping_path
    return LearnerEngine(config)


__all__ = [
    # 引擎
    'LearnerEngine',
    'create_engine',
    'EngineConfig',
    'Scheme',
    'Decomposition',
    'LookupOutput',
    # 字码表 / 拆码
    'KEY_TO_QUICK_UNIT',
    'parse_line_mapping',
    'load_mapping',
    'load_default_mapping',
    'decompose',
    'decompose_text',
    'is_chinese_char',
    'filter_han',
    'count_han',
    # 历史
    'HISTORY_LIMIT',
    'merge_history',
    # 打字练习
    'TypingState',
    'TypingProgress',
    'CharState',
    'create_initial_state',
    'reset_state',
    'advance',
    'compute_progress',
    'calculate_cpm',
    'calculate_accuracy',
    'shuffle',
    'summarize',
    'SessionSummary',
    # 日志
    'setup_logging',
    'get_logger',
    'get_api_logger',
    'get_engine_logger',
]
