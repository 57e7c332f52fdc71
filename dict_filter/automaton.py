"""
AC自动机（Aho-Corasick）多模式匹配

提供两种实现，对外契约一致：
- Automaton: 纯 Python 实现，节点存放在按下标索引的数组中，失败指针为下标
- PyAhoAutomaton: 基于 pyahocorasick.Automaton 的 C 扩展实现，适合大词典

两者都接收已经规范化（大小写折叠）的文本，支持存在性查询和全部命中查询。
"""
from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

import ahocorasick

from dict_filter.errors import UnknownBackendError


class ScanMode(str, Enum):
    EXISTS = "exists"
    SPANS = "spans"


@dataclass(frozen=True)
class MatchSpan:
    """One dictionary word located in the text; ``end`` is exclusive."""
    start: int
    end: int
    word: str


class _BaseAutomaton:
    backend = ""
    word_count = 0

    def _iter_matches(self, text: str) -> Iterator[tuple[int, int]]:
        """Yield ``(end, length)`` for every match, in end-offset order."""
        raise NotImplementedError

    def scan(self, text: str, mode: ScanMode = ScanMode.SPANS) -> bool | list[MatchSpan]:
        """
        单次从左到右扫描文本
        Args:
            text: 已规范化的文本
            mode: EXISTS 命中即返回 True；SPANS 返回全部命中（允许重叠、嵌套）
        Returns:
            bool | list[MatchSpan]
        """
        if mode is ScanMode.EXISTS:
            for _ in self._iter_matches(text):
                return True
            return False
        return [
            MatchSpan(end - length, end, text[end - length:end])
            for end, length in self._iter_matches(text)
        ]

    def exists(self, text: str) -> bool:
        return self.scan(text, ScanMode.EXISTS)  # type: ignore[return-value]

    def spans(self, text: str) -> list[MatchSpan]:
        return self.scan(text, ScanMode.SPANS)  # type: ignore[return-value]


class Automaton(_BaseAutomaton):
    """
    纯 Python AC 自动机

    节点 i 的信息分别存放在 _children[i]、_fail[i]、_outputs[i]、_terminal[i] 中。
    _outputs[i] 为以该节点结尾的所有词的长度（含沿失败指针继承的后缀词），从长到短。
    构建完成后不再修改。
    """

    backend = "python"

    def __init__(self, words: Iterable[str] = ()):
        self._children: list[dict[str, int]] = [{}]
        self._fail: list[int] = [0]
        self._outputs: list[tuple[int, ...]] = [()]
        self._terminal: list[bool] = [False]
        self.word_count = 0

        for word in words:
            self._insert(word)
        self._link()

    @property
    def node_count(self) -> int:
        return len(self._children)

    def _insert(self, word: str) -> None:
        if not word:
            return
        state = 0
        for ch in word:
            nxt = self._children[state].get(ch)
            if nxt is None:
                nxt = len(self._children)
                self._children[state][ch] = nxt
                self._children.append({})
                self._fail.append(0)
                self._outputs.append(())
                self._terminal.append(False)
            state = nxt
        if not self._terminal[state]:
            self._terminal[state] = True
            self._outputs[state] = (len(word),)
            self.word_count += 1

    def _link(self) -> None:
        # BFS 保证处理某节点时，所有更浅节点的失败指针和输出集合均已就绪
        children, fail, outputs = self._children, self._fail, self._outputs
        queue: deque[int] = deque(children[0].values())

        while queue:
            r = queue.popleft()
            for ch, s in children[r].items():
                queue.append(s)
                f = fail[r]
                while f and ch not in children[f]:
                    f = fail[f]
                fail[s] = children[f].get(ch, 0)
                if outputs[fail[s]]:
                    outputs[s] = outputs[s] + outputs[fail[s]]

    def _iter_matches(self, text: str) -> Iterator[tuple[int, int]]:
        children, fail, outputs = self._children, self._fail, self._outputs
        state = 0
        for i, ch in enumerate(text):
            while state and ch not in children[state]:
                state = fail[state]
            state = children[state].get(ch, 0)
            if outputs[state]:
                for length in outputs[state]:
                    yield i + 1, length


class PyAhoAutomaton(_BaseAutomaton):
    """基于 pyahocorasick.Automaton 的实现，value 存放词长"""

    backend = "pyahocorasick"

    def __init__(self, words: Iterable[str] = ()):
        self._automaton = ahocorasick.Automaton()
        for word in words:
            if word:
                self._automaton.add_word(word, len(word))
        self.word_count = len(self._automaton)
        # 空词典不能 make_automaton 后迭代，扫描时直接跳过
        if self.word_count:
            self._automaton.make_automaton()

    @property
    def node_count(self) -> int:
        return self._automaton.get_stats()["nodes_count"]

    def _iter_matches(self, text: str) -> Iterator[tuple[int, int]]:
        if not self.word_count or not text:
            return
        for end, length in self._automaton.iter(text):
            yield end + 1, length


BACKENDS: dict[str, type[_BaseAutomaton]] = {
    Automaton.backend: Automaton,
    PyAhoAutomaton.backend: PyAhoAutomaton,
}


def build(words: Iterable[str], backend: str = "python") -> Automaton | PyAhoAutomaton:
    """
    由词条集合构建自动机
    Args:
        words: 已规范化的词条
        backend: "python" 或 "pyahocorasick"
    Returns:
        构建完成、不可变的自动机
    """
    try:
        cls = BACKENDS[backend]
    except KeyError:
        raise UnknownBackendError(backend) from None
    return cls(words)  # type: ignore[call-arg,return-value]
