"""
词典快照

Snapshot 是一次构建结果（自动机 + 元数据），构建后不可变。
SnapshotHandle 持有唯一的“当前快照”引用：读取无锁，发布时整体替换引用；
重新加载通过 writer() 串行化。
"""
import datetime as dt
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from pathlib import Path

from dict_filter.automaton import Automaton, PyAhoAutomaton, build
from dict_filter.errors import PartialSourceWarning


@dataclass(frozen=True)
class Snapshot:
    automaton: Automaton | PyAhoAutomaton
    word_count: int
    built_at: dt.datetime = field(default_factory=lambda: dt.datetime.now(dt.timezone.utc))
    sources: tuple[Path, ...] = ()
    warnings: tuple[PartialSourceWarning, ...] = ()
    version: int = 0

    @classmethod
    def empty(cls, backend: str = "python") -> "Snapshot":
        """A snapshot whose automaton matches nothing."""
        return cls(automaton=build((), backend), word_count=0)

    @property
    def backend(self) -> str:
        return self.automaton.backend


class SnapshotHandle:
    """Process-wide holder of the current snapshot.

    Readers call :meth:`current` once per lookup and keep that reference for
    the whole call. Only one writer at a time may build and publish.
    """

    def __init__(self, snapshot: Snapshot | None = None, backend: str = "python"):
        self._current = snapshot if snapshot is not None else Snapshot.empty(backend)
        self._version = self._current.version
        self._write_lock = threading.Lock()

    def current(self) -> Snapshot:
        return self._current

    def publish(self, snapshot: Snapshot) -> Snapshot:
        """
        发布新快照，版本号单调递增
        Args:
            snapshot: 新构建的快照
        Returns:
            Snapshot: 实际发布的快照（带新版本号）
        """
        self._version += 1
        published = replace(snapshot, version=self._version)
        # 单次属性赋值，读者要么看到旧快照，要么看到新快照
        self._current = published
        return published

    @contextmanager
    def writer(self) -> Iterator["SnapshotHandle"]:
        with self._write_lock:
            yield self
