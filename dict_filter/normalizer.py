"""
词条规范化

把词典文件中的一行转换为可比较的词条：去除首尾空白、跳过空行和注释行、统一大小写。
大小写折叠按字符逐个进行，保证折叠前后长度一致，扫描得到的偏移量可以直接用于原文。
"""


def fold_char(ch: str) -> str:
    """
    单字符大小写折叠，结果始终是一个字符
    Args:
        ch: 单个字符
    Returns:
        str: 折叠后的字符；无法一对一折叠时原样返回
    """
    folded = ch.casefold()
    if len(folded) == 1:
        return folded
    # 'ß' -> 'ss' 之类的多字符映射，退回 lower()
    lowered = ch.lower()
    if len(lowered) == 1:
        return lowered
    return ch


def fold(text: str) -> str:
    """Case-fold ``text`` without changing its length."""
    if text.isascii():
        return text.lower()
    return "".join(map(fold_char, text))


def normalize(raw_line: str, comment_prefix: str = "#") -> str | None:
    """
    规范化词典中的一行
    Args:
        raw_line: 原始行
        comment_prefix: 注释标记，为空字符串时不识别注释
    Returns:
        str | None: 规范化后的词条；空行、注释行返回 None
    """
    line = raw_line.strip().lstrip("\ufeff").strip()
    if not line:
        return None
    if comment_prefix and line.startswith(comment_prefix):
        return None
    return fold(line)
