"""
打字练习进度引擎测试
"""

import os
import sys
from dataclasses import replace

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sucheng.engine.practice import (
    TypingState,
    CharState,
    create_initial_state,
    reset_state,
    advance,
    compute_progress,
)

TARGET = '測試文本'


def clock(value):
    return lambda: value


def typed(state, text):
    return replace(state, user_input=text)


class TestInitialState:
    """初始状态"""

    def test_initial_state(self):
        state = create_initial_state()
        assert state == TypingState(
            user_input='',
            completed_chars=0,
            start_time=None,
            end_time=None,
            is_completed=False,
            total_errors=0,
            last_error_char='',
        )

    def test_reset(self):
        assert reset_state() == create_initial_state()


class TestAdvance:
    """advance 基本行为"""

    def test_empty_input_unchanged(self):
        state = TypingState(user_input='', start_time=1000)
        assert advance(state, TARGET, clock(2000)) is state

    def test_empty_input_does_not_start_timing(self):
        state = create_initial_state()
        result = advance(state, TARGET, clock(2000))
        assert result.start_time is None

    def test_starts_timing_on_first_input(self):
        result = advance(typed(create_initial_state(), '測'), TARGET, clock(1234))
        assert result.start_time == 1234
        assert result.is_completed is False
        assert result.completed_chars == 1

    def test_starts_timing_even_when_input_is_wrong(self):
        result = advance(typed(create_initial_state(), 'c'), TARGET, clock(50))
        assert result.start_time == 50
        assert result.completed_chars == 0

    def test_keeps_existing_start_time(self):
        state = TypingState(user_input='測', start_time=1000)
        result = advance(state, TARGET, clock(9000))
        assert result.start_time == 1000

    def test_does_not_mutate_argument(self):
        state = typed(create_initial_state(), '測試')
        snapshot = replace(state)
        advance(state, TARGET, clock(1))
        assert state == snapshot

    def test_user_input_preserved(self):
        result = advance(typed(create_initial_state(), '測試wen'), TARGET, clock(1))
        assert result.user_input == '測試wen'

    def test_ime_composition_ignored(self):
        """组字中的拼音字母不影响进度，也不算错"""
        result = advance(typed(create_initial_state(), '測ce'), TARGET, clock(1))
        assert result.completed_chars == 1
        assert result.total_errors == 0
        assert result.last_error_char == ''

    def test_progress_retreats_on_delete(self):
        state = advance(typed(create_initial_state(), '測試文'), TARGET, clock(1))
        assert state.completed_chars == 3
        state = advance(typed(state, '測'), TARGET, clock(2))
        assert state.completed_chars == 1

    def test_prefix_lengths(self):
        state = create_initial_state()
        for n in range(1, len(TARGET)):
            state = advance(typed(state, TARGET[:n]), TARGET, clock(n))
            assert state.completed_chars == n

    def test_punctuation_not_required(self):
        target = '靜靜，了一個'
        state = advance(typed(create_initial_state(), '靜靜了一個'), target, clock(10))
        assert state.completed_chars == 5
        assert state.is_completed is True

    def test_typed_punctuation_ignored(self):
        target = '靜靜，了一個'
        state = advance(typed(create_initial_state(), '靜靜，了'), target, clock(10))
        assert state.completed_chars == 3
        assert state.total_errors == 0


class TestCompletion:
    """完成判定"""

    def test_single_char_target(self):
        result = advance(typed(create_initial_state(), '測'), '測', clock(500))
        assert result.completed_chars == 1
        assert result.is_completed is True
        assert result.end_time == 500

    def test_completes_on_last_char(self):
        state = TypingState(user_input='測試文本', completed_chars=3, start_time=100)
        result = advance(state, TARGET, clock(900))
        assert result.completed_chars == 4
        assert result.is_completed is True
        assert result.end_time == 900

    def test_end_time_kept_on_reevaluation(self):
        state = advance(typed(create_initial_state(), '測'), '測', clock(500))
        again = advance(state, '測', clock(9000))
        assert again.end_time == 500
        assert again.is_completed is True

    def test_deleting_after_completion_clears_completion(self):
        state = advance(typed(create_initial_state(), TARGET), TARGET, clock(500))
        assert state.is_completed is True
        state = advance(typed(state, '測試'), TARGET, clock(600))
        assert state.is_completed is False
        assert state.end_time is None
        assert state.completed_chars == 2

    def test_target_without_han_completes_immediately(self):
        result = advance(typed(create_initial_state(), 'a'), '，。', clock(7))
        assert result.completed_chars == 0
        assert result.is_completed is True
        assert result.end_time == 7


class TestErrors:
    """错误计数"""

    def test_counts_wrong_char(self):
        result = advance(typed(create_initial_state(), '測文'), TARGET, clock(1))
        assert result.completed_chars == 1
        assert result.total_errors == 1
        assert result.last_error_char == '文'

    def test_no_double_count(self):
        state = advance(typed(create_initial_state(), '測文'), TARGET, clock(1))
        state = advance(state, TARGET, clock(2))
        state = advance(typed(state, '測文ab'), TARGET, clock(3))
        assert state.total_errors == 1

    def test_preset_last_error_not_recounted(self):
        state = TypingState(user_input='錯', total_errors=1, last_error_char='錯', start_time=1)
        result = advance(state, TARGET, clock(2))
        assert result.total_errors == 1
        assert result.last_error_char == '錯'

    def test_different_wrong_char_counts_again(self):
        state = advance(typed(create_initial_state(), '測文'), TARGET, clock(1))
        state = advance(typed(state, '測本'), TARGET, clock(2))
        assert state.total_errors == 2
        assert state.last_error_char == '本'

    def test_correction_clears_last_error(self):
        state = advance(typed(create_initial_state(), '測文'), TARGET, clock(1))
        state = advance(typed(state, '測'), TARGET, clock(2))
        assert state.last_error_char == ''
        assert state.total_errors == 1
        # 同一个错字再次出现，算新的错误
        state = advance(typed(state, '測文'), TARGET, clock(3))
        assert state.total_errors == 2

    def test_latin_only_is_not_an_error(self):
        result = advance(typed(create_initial_state(), 'x'), TARGET, clock(1))
        assert result.total_errors == 0
        assert result.completed_chars == 0

    def test_idempotent_reevaluation(self):
        for text in ['測', '測文', '測試文本', '錯', '測試x']:
            first = advance(typed(create_initial_state(), text), TARGET, clock(1))
            second = advance(first, TARGET, clock(2))
            assert second.completed_chars == first.completed_chars
            assert second.total_errors == first.total_errors
            assert second.is_completed == first.is_completed


class TestComputeProgress:
    """显示用进度"""

    def test_duplicate_chars_first_typed(self):
        progress = compute_progress('靜靜，了一個', '靜')
        assert progress.char_state(0) == CharState.COMPLETED
        assert progress.char_state(1) == CharState.CURRENT
        assert progress.char_state(2) == CharState.NEUTRAL
        assert progress.char_state(3) == CharState.PENDING

    def test_duplicate_chars_both_typed(self):
        progress = compute_progress('靜靜，了一個', '靜靜')
        assert progress.char_states() == [
            CharState.COMPLETED,
            CharState.COMPLETED,
            CharState.NEUTRAL,
            CharState.CURRENT,
            CharState.PENDING,
            CharState.PENDING,
        ]

    def test_index_maps(self):
        progress = compute_progress('靜靜，了一個', '')
        assert progress.han_target == '靜靜了一個'
        assert progress.han_indices == frozenset({0, 1, 3, 4, 5})
        assert progress.ordinal_by_index == {0: 0, 1: 1, 3: 2, 4: 3, 5: 4}
        assert progress.matched == 0
        assert progress.char_state(0) == CharState.CURRENT

    def test_comma_always_neutral(self):
        for user_input in ['', '靜', '靜靜', '靜靜了一個']:
            assert compute_progress('靜靜，了一個', user_input).char_state(2) == CharState.NEUTRAL

    def test_complete(self):
        progress = compute_progress('靜靜，了一個', '靜靜了一個')
        assert progress.is_complete
        assert CharState.CURRENT not in progress.char_states()

    def test_state_values(self):
        assert CharState.COMPLETED.value == 'completed'
        assert CharState.NEUTRAL == 'neutral'
