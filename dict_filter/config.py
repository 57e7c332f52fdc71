"""Configuration read from environment variables (and ``.env``)."""
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from dict_filter.automaton import BACKENDS
from dict_filter.errors import UnknownBackendError
from dict_filter.loader import DEFAULT_BACKEND
from dict_filter.masker import DEFAULT_PLACEHOLDER, check_placeholder

_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class FilterConfig:
    dict_path: str = "data/*.txt"
    placeholder: str = DEFAULT_PLACEHOLDER
    comment_prefix: str = "#"
    encoding: str = "utf-8"
    require_files: bool = False
    backend: str = DEFAULT_BACKEND
    log_level: str = "INFO"
    log_dir: str | None = None

    def __post_init__(self):
        check_placeholder(self.placeholder)
        if self.backend not in BACKENDS:
            raise UnknownBackendError(self.backend)

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> "FilterConfig":
        """从环境变量读取配置，先加载 .env（不覆盖已有变量）"""
        load_dotenv(dotenv_path)
        return cls(
            dict_path=os.getenv("DICT_PATH", cls.dict_path),
            placeholder=os.getenv("DICT_PLACEHOLDER", cls.placeholder),
            comment_prefix=os.getenv("DICT_COMMENT_PREFIX", cls.comment_prefix),
            encoding=os.getenv("DICT_ENCODING", cls.encoding),
            require_files=os.getenv("DICT_REQUIRE_FILES", "0").strip().lower() in _TRUE,
            backend=os.getenv("DICT_BACKEND", cls.backend),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            log_dir=os.getenv("LOG_DIR") or None,
        )
