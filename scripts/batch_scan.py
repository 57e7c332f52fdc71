"""
批量扫描文本文件，提取词典词命中及上下文

逐行读取输入文件（每行一条文本），检测词典词并输出 TSV：
行号、命中词、起止位置、上下文。可选输出屏蔽后的文本文件。

Usage:
    python scripts/batch_scan.py --in posts.txt --dict "data/*.txt" --out data/tsv/batch_scan.tsv
"""

import argparse
import sys
from collections.abc import Iterator
from pathlib import Path

from loguru import logger
from tqdm import tqdm

from dict_filter.config import FilterConfig
from dict_filter.engine import FilterEngine
from dict_filter.errors import LoadError
from dict_filter.log import setup_logger


def count_lines(path: Path) -> int:
    """统计行数，用于进度条"""
    with path.open("rb") as f:
        return sum(1 for _ in f)


def extract_context(text: str, start: int, end: int, width: int = 20) -> str:
    """提取命中前后 width 个字符的上下文，空白统一为单个空格"""
    context = text[max(0, start - width):min(len(text), end + width)]
    return " ".join(context.split())


def process_text(text: str, engine: FilterEngine) -> Iterator[tuple[str, int, int, str]]:
    """处理单条文本，返回 (命中词, 起始, 结束, 上下文)"""
    for span in engine.find(text):
        yield span.word, span.start, span.end, extract_context(text, span.start, span.end)


class SimpleOutputFile:
    """简单输出文件管理器"""

    def __init__(self, file_path: Path):
        self.file_path = file_path
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        self.file = file_path.open("w", encoding="utf-8")
        self.file.write("line\thit_word\tstart\tend\tcontext\n")

    def write_match(self, lineno: int, word: str, start: int, end: int, context: str) -> None:
        self.file.write(f"{lineno}\t{word}\t{start}\t{end}\t{context}\n")

    def close(self) -> None:
        if self.file:
            self.file.close()


def scan_file(
    in_path: Path,
    engine: FilterEngine,
    output_file: SimpleOutputFile,
    masked_path: Path | None = None,
    encoding: str = "utf-8",
) -> tuple[int, int]:
    """扫描主流程，返回 (扫描行数, 命中次数)"""
    total = count_lines(in_path)
    scanned_count = 0
    hit_count = 0
    masked = masked_path.open("w", encoding="utf-8") if masked_path else None

    try:
        with in_path.open("r", encoding=encoding, errors="replace") as f:
            for lineno, line in enumerate(
                tqdm(f, desc="扫描进度", total=total, unit="行", unit_scale=True),
                start=1,
            ):
                text = line.rstrip("\n")
                scanned_count += 1
                for word, start, end, context in process_text(text, engine):
                    output_file.write_match(lineno, word, start, end, context)
                    hit_count += 1
                if masked:
                    masked.write(engine.filter(text) + "\n")

                if scanned_count % 1000 == 0:
                    tqdm.write(f"已扫描: {scanned_count}/{total} | 命中: {hit_count}")
    finally:
        if masked:
            masked.close()

    return scanned_count, hit_count


def main() -> None:
    parser = argparse.ArgumentParser(description="批量扫描文本文件中的词典词")
    parser.add_argument("--in", dest="in_path", required=True, help="输入文本文件，每行一条")
    parser.add_argument("--dict", dest="dict_path", help="词典 glob 模式，默认读取 DICT_PATH")
    parser.add_argument("--out", default="data/tsv/batch_scan.tsv", help="输出文件路径")
    parser.add_argument("--masked", help="屏蔽后文本的输出路径（可选）")
    args = parser.parse_args()

    config = FilterConfig.from_env()
    setup_logger(config.log_level, config.log_dir)
    engine = FilterEngine(config)

    try:
        engine.reload(args.dict_path)
        output_file = SimpleOutputFile(Path(args.out))
        try:
            scanned_count, hit_count = scan_file(
                Path(args.in_path), engine, output_file,
                Path(args.masked) if args.masked else None,
            )
        finally:
            output_file.close()
    except (LoadError, OSError) as e:
        logger.error("batch scan failed: {}", e)
        sys.exit(1)

    print("\n扫描完成！")
    print(f"总扫描行数: {scanned_count}")
    print(f"总命中次数: {hit_count}")
    print(f"输出文件: {args.out}")


if __name__ == "__main__":
    main()
