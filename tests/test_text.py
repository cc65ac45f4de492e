from responder.text import normalize, strip_annotation, trim


def test_trim_only_surrounding_whitespace():
    assert trim("  \tgood  bye\r\n") == "good  bye"
    assert trim("   ") == ""


def test_normalize_lowercases_without_touching_spacing():
    assert normalize("  Say  GoodBye ") == "  say  goodbye "


def test_strip_annotation_keeps_text_after_last_bracket():
    assert strip_annotation("[source1] pricing") == "pricing"
    assert strip_annotation("[a] [b] Hours ") == "Hours"
    assert strip_annotation("  plain keyword  ") == "plain keyword"
    assert strip_annotation("[tag only]") == ""
