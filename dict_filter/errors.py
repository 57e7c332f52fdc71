"""Exception types raised by the dictionary filter."""
from pathlib import Path


class DictFilterError(Exception):
    """Base class for dictionary filter errors."""


class LoadError(DictFilterError):
    """词典加载失败（glob 非法，或要求至少一个文件但未匹配到）"""


class UnknownBackendError(DictFilterError, ValueError):
    def __init__(self, backend: str):
        super().__init__(f"unknown automaton backend: {backend!r}")
        self.backend = backend


class PartialSourceWarning(UserWarning):
    """
    单个词典文件无法读取时记录的告警，不会中断加载
    """

    def __init__(self, path: str | Path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = Path(path)
        self.reason = reason

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PartialSourceWarning):
            return NotImplemented
        return (self.path, self.reason) == (other.path, other.reason)

    def __hash__(self) -> int:
        return hash((self.path, self.reason))
