"""
字码表模块

加载「字 → 仓颉键位」映射，以及键位到字根的固定对照表
"""

import os
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import orjson

from .logging import get_engine_logger, log_execution_time

logger = get_engine_logger()

# 内置精简字码表
DEFAULT_MAPPING_PATH = Path(__file__).parent.parent / 'data' / 'cj_small.txt'

# 键盘字母 → 仓颉字根
KEY_TO_QUICK_UNIT: Mapping[str, str] = MappingProxyType({
    'a': '日', 'b': '月', 'c': '金', 'd': '木', 'e': '水',
    'f': '火', 'g': '土', 'h': '竹', 'i': '戈', 'j': '十',
    'k': '大', 'l': '中', 'm': '一', 'n': '弓', 'o': '人',
    'p': '心', 'q': '手', 'r': '口', 's': '尸', 't': '廿',
    'u': '山', 'v': '女', 'w': '田', 'x': '難', 'y': '卜',
    'z': '重',
})


def parse_line_mapping(content: str) -> Mapping[str, str]:
    """
    解析按行分隔的字码表

    格式: "字 字码"，每行一条；空行和没有空格的行会被跳过
    """
    mapping = {}
    for line_num, line in enumerate(content.strip().splitlines(), 1):
        if not line.strip():
            continue

        space_index = line.find(' ')
        if space_index == -1:
            logger.debug(f"第 {line_num} 行格式不正确，已跳过: {line!r}")
            continue

        char = line[:space_index]
        code = line[space_index + 1:].strip()
        mapping[char] = code

    return MappingProxyType(mapping)


@log_execution_time(logger)
def load_mapping(path) -> Mapping[str, str]:
    """
    从文件加载字码表

    支持 .txt（按行）和 .json（对象）两种格式；文件不存在时返回空表
    """
    path = str(path)
    if not os.path.exists(path):
        logger.warning(f"字码表不存在: {path}")
        return MappingProxyType({})

    if path.endswith('.json'):
        with open(path, 'rb') as f:
            data = orjson.loads(f.read())
        mapping = MappingProxyType({str(k): str(v) for k, v in data.items()})
    else:
        with open(path, 'r', encoding='utf-8') as f:
            mapping = parse_line_mapping(f.read())

    logger.info(f"已加载字码表: {path} ({len(mapping)} 字)")
    return mapping


def load_default_mapping() -> Mapping[str, str]:
    """加载内置字码表"""
    return load_mapping(DEFAULT_MAPPING_PATH)
