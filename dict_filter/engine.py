"""
词典过滤引擎

对外的三个入口：exists / filter / reload。每次查询只读取一次当前快照，
整个调用期间都使用这份快照；reload 失败时保留原快照。
"""
from loguru import logger

from dict_filter import loader, masker
from dict_filter.automaton import MatchSpan
from dict_filter.config import FilterConfig
from dict_filter.errors import LoadError
from dict_filter.snapshot import Snapshot, SnapshotHandle


class FilterEngine:
    def __init__(self, config: FilterConfig | None = None, snapshot: Snapshot | None = None):
        self.config = config or FilterConfig()
        self._handle = SnapshotHandle(snapshot, self.config.backend)

    @classmethod
    def from_words(cls, words, config: FilterConfig | None = None) -> "FilterEngine":
        """Engine preloaded from an in-memory word list."""
        config = config or FilterConfig()
        engine = cls(config)
        engine._handle.publish(loader.load_words(words, config.backend, config.comment_prefix))
        return engine

    @property
    def snapshot(self) -> Snapshot:
        return self._handle.current()

    def exists(self, text: str) -> bool:
        return masker.exists(self._handle.current(), text)

    def validate(self, text: str) -> bool:
        """True when ``text`` contains no dictionary word."""
        return not self.exists(text)

    def find(self, text: str) -> list[MatchSpan]:
        return masker.find(self._handle.current(), text)

    def filter(self, text: str) -> str:
        return masker.filter_text(self._handle.current(), text, self.config.placeholder)

    def reload(self, pattern: str | None = None) -> int:
        """
        重新加载词典并原子发布
        Args:
            pattern: 词典 glob 模式，为 None 时使用配置中的 dict_path
        Returns:
            int: 新词典的词条数
        Raises:
            LoadError: 加载失败，此时原快照继续生效
        """
        if pattern is None:
            pattern = self.config.dict_path
        with self._handle.writer() as handle:
            try:
                snapshot = loader.load(
                    pattern,
                    require_files=self.config.require_files,
                    comment_prefix=self.config.comment_prefix,
                    encoding=self.config.encoding,
                    backend=self.config.backend,
                )
            except LoadError as e:
                logger.error("reload failed, keeping dictionary v{}: {}", handle.current().version, e)
                raise
            published = handle.publish(snapshot)
        logger.info("dictionary v{} published: {} words", published.version, published.word_count)
        return published.word_count

    def stats(self) -> dict:
        snapshot = self._handle.current()
        return {
            "word_count": snapshot.word_count,
            "built_at": snapshot.built_at.isoformat(),
            "version": snapshot.version,
            "backend": snapshot.backend,
            "sources": [str(p) for p in snapshot.sources],
            "warnings": [str(w) for w in snapshot.warnings],
        }
