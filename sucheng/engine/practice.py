"""
打字练习进度引擎

每次输入事件都从完整的输入框内容重新计算进度，从不改写输入框。
输入法组字过程中输入框里会混有拼音字母等非汉字，这些字符一律忽略。
"""

import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Optional

from .text import filter_han, is_chinese_char

Clock = Callable[[], int]


def now_ms() -> int:
    """当前时间（毫秒）"""
    return int(time.time() * 1000)


@dataclass
class TypingState:
    """一次练习的状态，每次输入后整体替换"""
    user_input: str = ""
    completed_chars: int = 0
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    is_completed: bool = False
    total_errors: int = 0
    last_error_char: str = ""


def create_initial_state() -> TypingState:
    return TypingState()


def reset_state() -> TypingState:
    """重新开始（或换下一段文本）"""
    return create_initial_state()


def _common_prefix_len(a: str, b: str) -> int:
    n = 0
    for x, y in zip(a, b):
        if x != y:
            break
        n += 1
    return n


def advance(state: TypingState, target_text: str, now: Optional[Clock] = None) -> TypingState:
    """
    根据当前输入框内容计算新的练习状态

    Args:
        state: 上一个状态，user_input 已更新为输入框当前内容
        target_text: 练习文本（汉字加标点，标点不需要输入）
        now: 时钟，返回毫秒时间戳；测试时注入

    Returns:
        新的 TypingState，不修改传入的 state
    """
    if not state.user_input:
        return state

    timestamp = (now or now_ms)()

    start_time = state.start_time
    is_completed = state.is_completed
    end_time = state.end_time
    if start_time is None and state.completed_chars == 0:
        start_time = timestamp
        is_completed = False

    typed = filter_han(state.user_input)
    han_target = filter_han(target_text)
    matched = _common_prefix_len(typed, han_target)

    total_errors = state.total_errors
    last_error_char = state.last_error_char
    if len(typed) > matched:
        offending = typed[matched]
        if offending != last_error_char:
            total_errors += 1
            last_error_char = offending
    else:
        last_error_char = ""

    if matched == len(han_target):
        # 已完成的状态重复计算时保留原结束时间
        if not (is_completed and end_time is not None):
            end_time = timestamp
        is_completed = True
    else:
        is_completed = False
        end_time = None

    return replace(
        state,
        completed_chars=matched,
        start_time=start_time,
        end_time=end_time,
        is_completed=is_completed,
        total_errors=total_errors,
        last_error_char=last_error_char,
    )


class CharState(str, Enum):
    """练习文本中每个字的显示状态"""
    COMPLETED = "completed"
    CURRENT = "current"
    PENDING = "pending"
    NEUTRAL = "neutral"     # 标点，不参与进度


@dataclass(frozen=True)
class TypingProgress:
    """供界面显示的进度快照"""
    target_text: str
    han_indices: FrozenSet[int]
    han_target: str
    ordinal_by_index: Dict[int, int]
    matched: int

    @property
    def is_complete(self) -> bool:
        return self.matched == len(self.han_target)

    def char_state(self, index: int) -> CharState:
        ordinal = self.ordinal_by_index.get(index)
        if ordinal is None:
            return CharState.NEUTRAL
        if ordinal < self.matched:
            return CharState.COMPLETED
        if ordinal == self.matched:
            return CharState.CURRENT
        return CharState.PENDING

    def char_states(self) -> List[CharState]:
        return [self.char_state(i) for i in range(len(self.target_text))]


def compute_progress(target_text: str, user_input: str) -> TypingProgress:
    """
    计算显示用的进度

    按汉字序号而不是字符本身判断状态，所以重复出现的字
    （如「靜靜」）只有已经打到的那一个会标记为完成
    """
    ordinal_by_index = {}
    for index, ch in enumerate(target_text):
        if is_chinese_char(ch):
            ordinal_by_index[index] = len(ordinal_by_index)

    han_target = ''.join(target_text[i] for i in ordinal_by_index)
    matched = _common_prefix_len(filter_han(user_input), han_target)

    return TypingProgress(
        target_text=target_text,
        han_indices=frozenset(ordinal_by_index),
        han_target=han_target,
        ordinal_by_index=ordinal_by_index,
        matched=matched,
    )
