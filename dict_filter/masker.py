"""
基于快照的检测与屏蔽

所有函数都是纯函数：只读取传入的 Snapshot，不会失败。
"""
from collections.abc import Iterable

from dict_filter.automaton import MatchSpan
from dict_filter.normalizer import fold
from dict_filter.snapshot import Snapshot

DEFAULT_PLACEHOLDER = "*"


def check_placeholder(placeholder: str) -> str:
    if len(placeholder) != 1:
        raise ValueError(f"placeholder must be exactly one character, got {placeholder!r}")
    return placeholder


def exists(snapshot: Snapshot, text: str) -> bool:
    """判断文本中是否存在词典词"""
    if not text or not snapshot.word_count:
        return False
    return snapshot.automaton.exists(fold(text))


def find(snapshot: Snapshot, text: str) -> list[MatchSpan]:
    """
    查找文本中的所有词典词
    Args:
        snapshot: 词典快照
        text: 待检测文本
    Returns:
        list[MatchSpan]: 按结束位置排序的命中，允许重叠
    """
    if not text or not snapshot.word_count:
        return []
    return snapshot.automaton.spans(fold(text))


def mask_spans(text: str, spans: Iterable[MatchSpan], placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    """Replace every character covered by any span with ``placeholder``."""
    chars = list(text)
    masked = False
    for span in spans:
        chars[span.start:span.end] = placeholder * (span.end - span.start)
        masked = True
    return "".join(chars) if masked else text


def filter_text(snapshot: Snapshot, text: str, placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    """
    屏蔽文本中的词典词，每个字符替换为一个占位符，总长度不变
    Args:
        snapshot: 词典快照
        text: 待处理文本
        placeholder: 单个占位字符
    Returns:
        str: 屏蔽后的文本；无命中时返回原文本
    """
    spans = find(snapshot, text)
    if not spans:
        return text
    return mask_spans(text, spans, placeholder)
