from pathlib import Path

from dict_filter.engine import FilterEngine
from scripts.batch_scan import SimpleOutputFile, extract_context, process_text, scan_file


def test_extract_context():
    text = "a" * 30 + "BAD" + "\n\tb" * 3
    assert extract_context(text, 30, 33, width=4) == "aaaaBAD b"


def test_process_text():
    engine = FilterEngine.from_words(["bad"])
    hits = list(process_text("not Bad at all", engine))
    assert hits == [("bad", 4, 7, "not Bad at all")]


def test_scan_file(tmp_path: Path):
    src = tmp_path / "posts.txt"
    src.write_text("clean line\nbad and worse\nnothing\n", encoding="utf-8")
    engine = FilterEngine.from_words(["bad", "worse"])

    out = SimpleOutputFile(tmp_path / "tsv" / "hits.tsv")
    try:
        scanned, hits = scan_file(src, engine, out, tmp_path / "masked.txt")
    finally:
        out.close()

    assert (scanned, hits) == (3, 2)
    rows = (tmp_path / "tsv" / "hits.tsv").read_text(encoding="utf-8").splitlines()
    assert rows[0] == "line\thit_word\tstart\tend\tcontext"
    assert rows[1] == "2\tbad\t0\t3\tbad and worse"
    assert rows[2] == "2\tworse\t8\t13\tbad and worse"
    assert (tmp_path / "masked.txt").read_text(encoding="utf-8").splitlines() == [
        "clean line", "*** and *****", "nothing",
    ]
