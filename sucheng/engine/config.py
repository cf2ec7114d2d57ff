from dataclasses import dataclass, field
from typing import List, Optional


class Scheme:
    """输入法方案"""
    QUICK = "quick"       # 速成：只取首尾两码
    CANGJIE = "cangjie"   # 仓颉：完整字码

    ALL = (QUICK, CANGJIE)


@dataclass
class EngineConfig:
    """引擎配置"""
    scheme: str = Scheme.QUICK
    history_limit: int = 10
    mapping_path: Optional[str] = None   # None 表示使用内置字码表
    log_level: str = "INFO"
    log_to_file: bool = False
    cache_size: int = 512


@dataclass(frozen=True)
class Decomposition:
    """单字拆码结果（会被缓存，不可修改）"""
    char: str
    parts: str = ""


@dataclass
class LookupOutput:
    """查字输出"""
    text: str = ""
    scheme: str = Scheme.QUICK
    results: List[Decomposition] = field(default_factory=list)
    history: List[str] = field(default_factory=list)
