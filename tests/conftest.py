from pathlib import Path

import pytest
from dotenv import load_dotenv

BACKENDS = ["python", "pyahocorasick"]


@pytest.fixture(scope="session", autouse=True)
def load_env():
    load_dotenv()


@pytest.fixture(params=BACKENDS)
def backend(request) -> str:
    return request.param


@pytest.fixture
def dict_dir(tmp_path: Path) -> Path:
    """两个词典文件，含重复词、注释行和空行"""
    d = tmp_path / "dict"
    d.mkdir()
    (d / "a.txt").write_text("# 注释\nBad\n\n敏感\nabc\n", encoding="utf-8")
    (d / "b.txt").write_text("  bad  \nworse\n", encoding="utf-8")
    return d
