import time
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from .cache import LRUCache
from .config import EngineConfig, LookupOutput, Scheme
from .decompose import decompose_text
from .history import merge_history
from .logging import get_engine_logger, setup_logging
from .mapping import load_default_mapping, load_mapping
from .practice import Clock, TypingProgress, TypingState, advance, compute_progress

logger = get_engine_logger()


class LearnerEngine:
    """
    速成查字引擎

    - 字码表在创建时加载一次，之后只读
    - 查字：逐字拆码 + 维护输入历史
    - 打字练习：委托给 practice.advance
    """

    def __init__(self, config: EngineConfig = None, mapping: Optional[Mapping[str, str]] = None):
        self.config = config or EngineConfig()
        setup_logging('sucheng.engine', level=self.config.log_level, log_to_file=self.config.log_to_file)
        if self.config.scheme not in Scheme.ALL:
            raise ValueError(f"未知输入法方案: {self.config.scheme!r}")

        if mapping is not None:
            self.mapping = mapping if isinstance(mapping, MappingProxyType) else MappingProxyType(dict(mapping))
        elif self.config.mapping_path:
            self.mapping = load_mapping(self.config.mapping_path)
        else:
            self.mapping = load_default_mapping()

        self.cache = LRUCache(self.config.cache_size)
        self.history: List[str] = []

        # 统计
        self.stats = {'lookups': 0, 'cache_hits': 0, 'total_ms': 0.0, 'practice_events': 0}

        self._log_status()

    def _log_status(self):
        logger.info("速成查字引擎已就绪")
        logger.info(f"  字码表: {len(self.mapping)} 字 | 默认方案: {self.config.scheme}")

    def lookup(self, text: str, scheme: str = None, remember: bool = True) -> LookupOutput:
        """查字主入口"""
        start = time.perf_counter()
        scheme = scheme or self.config.scheme
        self.stats['lookups'] += 1

        cache_key = f"{scheme}|{text}"
        results = self.cache.get(cache_key)
        if results is not None:
            self.stats['cache_hits'] += 1
        else:
            results = decompose_text(self.mapping, scheme, text)
            self.cache.put(cache_key, results)

        if remember:
            self.remember(text)

        elapsed = (time.perf_counter() - start) * 1000
        self.stats['total_ms'] += elapsed
        logger.debug(f"查字: '{text}' [{scheme}] -> {[r.parts for r in results]} | {elapsed:.2f}ms")

        return LookupOutput(text=text, scheme=scheme, results=list(results), history=list(self.history))

    def remember(self, entry: str) -> List[str]:
        """合并一条输入到历史"""
        self.history = merge_history(entry, self.history, limit=self.config.history_limit)
        return list(self.history)

    def practice(self, state: TypingState, target_text: str, now: Optional[Clock] = None) -> TypingState:
        self.stats['practice_events'] += 1
        new_state = advance(state, target_text, now)
        if new_state.is_completed and not state.is_completed:
            logger.info(f"练习完成: {new_state.completed_chars} 字, 错误 {new_state.total_errors} 次")
        return new_state

    def progress(self, target_text: str, user_input: str) -> TypingProgress:
        return compute_progress(target_text, user_input)

    def get_stats(self) -> Dict:
        """获取统计"""
        total = self.stats['lookups'] or 1
        return {
            'total_lookups': self.stats['lookups'],
            'cache_hit_rate': self.stats['cache_hits'] / total,
            'avg_latency_ms': self.stats['total_ms'] / total,
            'practice_events': self.stats['practice_events'],
            'history_size': len(self.history),
        }
