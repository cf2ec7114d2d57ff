"""汉字判定工具"""

# CJK 统一表意文字（含扩展 A）与 CJK 兼容表意文字
HAN_RANGES = (
    (0x3400, 0x9FFF),
    (0xF900, 0xFAFF),
)


def is_chinese_char(ch: str) -> bool:
    """判断单个字符是否为汉字"""
    if len(ch) != 1:
        return False
    code = ord(ch)
    return any(lo <= code <= hi for lo, hi in HAN_RANGES)


def filter_han(text: str) -> str:
    """只保留汉字"""
    return ''.join(ch for ch in text if is_chinese_char(ch))


def count_han(text: str) -> int:
    return sum(1 for ch in text if is_chinese_char(ch))
