"""练习统计：速度、准确率"""

import random
from dataclasses import dataclass
from typing import List, Optional

from .practice import Clock, TypingState, now_ms
from .text import count_han


def _round_half_up(x: float) -> int:
    return int(x + 0.5)


def calculate_cpm(
    completed_chars: int,
    start_time: Optional[int],
    end_time: Optional[int] = None,
    now: Optional[Clock] = None,
) -> int:
    """每分钟字数；未开始或尚未打对任何字时为 0"""
    if not completed_chars or not start_time:
        return 0
    finished = end_time if end_time is not None else (now or now_ms)()
    minutes = (finished - start_time) / 60000
    if minutes <= 0:
        return 0
    return _round_half_up(completed_chars / minutes)


def calculate_accuracy(completed_chars: int, total_errors: int) -> int:
    """准确率百分比"""
    if total_errors == 0 or completed_chars == 0:
        return 100
    return _round_half_up(completed_chars / (completed_chars + total_errors) * 100)


def shuffle(items: List, rng: Optional[random.Random] = None) -> List:
    """原地打乱，返回同一个列表"""
    (rng or random).shuffle(items)
    return items


@dataclass
class SessionSummary:
    """完成后显示的统计"""
    cpm: int
    accuracy: int
    elapsed_seconds: float
    char_count: int


def summarize(state: TypingState, target_text: str, now: Optional[Clock] = None) -> SessionSummary:
    elapsed = 0.0
    if state.start_time is not None:
        finished = state.end_time if state.end_time is not None else (now or now_ms)()
        elapsed = max(0.0, (finished - state.start_time) / 1000)

    return SessionSummary(
        cpm=calculate_cpm(state.completed_chars, state.start_time, state.end_time, now),
        accuracy=calculate_accuracy(state.completed_chars, state.total_errors),
        elapsed_seconds=round(elapsed, 1),
        char_count=count_han(target_text),
    )
