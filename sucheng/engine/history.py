"""查字输入历史"""

from typing import List, Sequence

HISTORY_LIMIT = 10


def merge_history(new_entry: str, history: Sequence[str], limit: int = HISTORY_LIMIT) -> List[str]:
    """
    合并一条新输入到历史记录（最新的在前）

    - 空输入：不变
    - 新内容且以最新一条开头（继续往后打字）：原地替换最新一条
    - 新内容但不是延伸：插到最前
    - 已存在，或只是最新一条删掉几个字的结果：不变

    结果最多保留 limit 条，丢弃最旧的
    """
    history = list(history)
    if not new_entry:
        return history

    latest = history[0] if history else None

    is_new_distinct = new_entry not in history and (latest is None or new_entry not in latest)
    is_extending = latest is not None and new_entry.startswith(latest)

    if is_new_distinct and is_extending:
        merged = [new_entry] + history[1:]
    elif is_new_distinct:
        merged = [new_entry] + history
    else:
        merged = history

    return merged[:limit]
