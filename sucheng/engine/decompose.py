"""
拆码模块

把单个汉字转换成指定输入法方案下的字根序列
"""

from typing import List, Mapping

from .config import Scheme, Decomposition
from .mapping import KEY_TO_QUICK_UNIT
from .text import is_chinese_char


def keys_to_units(keys: str, key_table: Mapping[str, str] = KEY_TO_QUICK_UNIT) -> str:
    """键位字母 → 字根，对照表之外的字母直接丢弃"""
    return ''.join(key_table.get(k.lower(), '') for k in keys)


def quick_units(units: str) -> str:
    """速成只保留首尾两码，不足两码原样返回"""
    if len(units) < 2:
        return units
    return units[0] + units[-1]


def decompose(
    mapping: Mapping[str, str],
    scheme: str,
    char: str,
    key_table: Mapping[str, str] = KEY_TO_QUICK_UNIT,
) -> Decomposition:
    """
    单字拆码

    Args:
        mapping: 字 → 键位字母
        scheme: Scheme.QUICK / Scheme.CANGJIE
        char: 要拆的字
        key_table: 键位 → 字根对照表

    Returns:
        Decomposition；字码表中没有的字返回空字根
    """
    if scheme not in Scheme.ALL:
        raise ValueError(f"未知输入法方案: {scheme!r}")

    units = keys_to_units(mapping.get(char, ''), key_table)
    parts = quick_units(units) if scheme == Scheme.QUICK else units
    return Decomposition(char=char, parts=parts)


def decompose_text(mapping: Mapping[str, str], scheme: str, text: str) -> List[Decomposition]:
    """逐字拆码，非汉字跳过"""
    return [decompose(mapping, scheme, ch) for ch in text if is_chinese_char(ch)]
