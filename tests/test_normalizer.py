import pytest

from dict_filter.normalizer import fold, normalize


@pytest.mark.parametrize("raw, expected", [
    ("  Bad \n", "bad"),
    ("敏感词", "敏感词"),
    ("\ufeffHello", "hello"),
    ("大BOSS", "大boss"),
])
def test_normalize(raw, expected):
    assert normalize(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "\n", "# comment", "   # indented comment"])
def test_rejected_lines(raw):
    assert normalize(raw) is None


def test_custom_comment_prefix():
    assert normalize("; note", comment_prefix=";") is None
    assert normalize("#tag", comment_prefix=";") == "#tag"
    assert normalize("#tag", comment_prefix="") == "#tag"


def test_fold_keeps_length():
    # ß 和 İ 的完整 casefold 会变成两个字符
    for text in ["Straße", "İstanbul", "ÀÉÎ", "ﬁne", "mixed 大Boss"]:
        assert len(fold(text)) == len(text)
    assert fold("STRASSE") == "strasse"
    assert fold("ÀÉÎ") == "àéî"
