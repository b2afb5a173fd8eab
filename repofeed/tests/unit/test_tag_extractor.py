from repofeed.utils.tag_extractor import extract_tags


def test_detects_fix():
    assert "fix" in extract_tags("Fix bug in login")


def test_detects_feature_and_fix_in_rule_order():
    tags = extract_tags("feat: add dark mode, fix typo")
    assert tags == ["fix", "feature"]
    assert len(tags) <= 3


def test_caps_at_three_tags():
    tags = extract_tags("fix feature docs refactor tests chore")
    assert tags == ["fix", "feature", "docs"]


def test_is_case_insensitive():
    assert extract_tags("SECURITY patch and PERFORMANCE work") == [
        "performance",
        "security",
    ]


def test_matches_whole_words_only():
    assert extract_tags("prefix suffix debugger") == []


def test_suppresses_duplicates_within_a_category():
    assert extract_tags("fixes a bug, fixed another bug") == ["fix"]


def test_empty_text_has_no_tags():
    assert extract_tags("") == []
