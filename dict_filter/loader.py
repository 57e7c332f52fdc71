"""
词典加载

按 glob 模式查找词典文件，逐行规范化后去重，构建自动机并生成新的 Snapshot。
单个文件读取失败只记录告警，不会中断整体加载。
"""
import glob
import re
import time
from collections.abc import Iterable, Iterator
from pathlib import Path

from loguru import logger

from dict_filter.automaton import build
from dict_filter.errors import LoadError, PartialSourceWarning
from dict_filter.normalizer import normalize
from dict_filter.snapshot import Snapshot

DEFAULT_BACKEND = "pyahocorasick"


def resolve_sources(pattern: str) -> list[Path]:
    """
    把 glob 模式解析为词典文件列表
    Args:
        pattern: glob 模式，支持 ~ 和 **
    Returns:
        list[Path]: 排序、去重后的普通文件
    Raises:
        LoadError: 模式为空或无法解析
    """
    if not pattern or not pattern.strip():
        raise LoadError("dictionary glob pattern is empty")
    if "\x00" in pattern:
        raise LoadError(f"invalid dictionary glob pattern: {pattern!r}")

    expanded = str(Path(pattern).expanduser())
    try:
        matches = glob.glob(expanded, recursive=True)
    except (OSError, ValueError, re.error) as e:
        raise LoadError(f"invalid dictionary glob pattern {pattern!r}: {e}") from e

    return sorted({Path(m) for m in matches if Path(m).is_file()})


def iter_words(path: Path, encoding: str = "utf-8", comment_prefix: str = "#") -> Iterator[str]:
    """逐行读取词典文件，产出规范化后的词条（跳过空行、注释行）"""
    with path.open("r", encoding=encoding) as f:
        for line in f:
            word = normalize(line, comment_prefix)
            if word is not None:
                yield word


def load_words(words: Iterable[str], backend: str = DEFAULT_BACKEND, comment_prefix: str = "#") -> Snapshot:
    """Build a snapshot from in-memory raw words."""
    normalized = {w for w in (normalize(raw, comment_prefix) for raw in words) if w is not None}
    automaton = build(normalized, backend)
    return Snapshot(automaton=automaton, word_count=automaton.word_count)


def load(
    pattern: str,
    *,
    require_files: bool = False,
    comment_prefix: str = "#",
    encoding: str = "utf-8",
    backend: str = DEFAULT_BACKEND,
) -> Snapshot:
    """
    加载词典并构建快照（不负责发布）
    Args:
        pattern: 词典文件 glob 模式
        require_files: 为 True 时未匹配到任何文件视为错误
        comment_prefix: 注释行标记
        encoding: 词典文件编码
        backend: 自动机实现
    Returns:
        Snapshot: 新快照
    Raises:
        LoadError: glob 非法，或 require_files=True 且没有匹配到文件
    """
    begin = time.perf_counter()
    sources = resolve_sources(pattern)
    if not sources:
        if require_files:
            raise LoadError(f"no dictionary files match {pattern!r}")
        logger.warning("no dictionary files match {!r}, loading an empty dictionary", pattern)

    words: set[str] = set()
    loaded: list[Path] = []
    warnings: list[PartialSourceWarning] = []
    for path in sources:
        try:
            # 整个文件读完再合并，读到一半失败的文件不贡献任何词条
            file_words = set(iter_words(path, encoding, comment_prefix))
        except (OSError, UnicodeDecodeError) as e:
            warning = PartialSourceWarning(path, str(e))
            warnings.append(warning)
            logger.warning("skipping dictionary file {}: {}", path, e)
            continue
        logger.debug("read {} words from {}", len(file_words), path)
        words |= file_words
        loaded.append(path)

    automaton = build(words, backend)
    logger.info(
        "dictionary built: {} words from {} file(s), backend={}, took {:.3f}s",
        automaton.word_count, len(loaded), backend, time.perf_counter() - begin,
    )
    return Snapshot(
        automaton=automaton,
        word_count=automaton.word_count,
        sources=tuple(loaded),
        warnings=tuple(warnings),
    )
