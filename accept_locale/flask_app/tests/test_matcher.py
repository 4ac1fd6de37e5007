import sys
import threading
from pathlib import Path

import pytest

# Ensure repository root is importable when pytest changes working dir
ROOT = Path(__file__).resolve().parents[3]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from accept_locale.flask_app.services.matcher import PatternError, compile_rules, lookup


RULES = {
    "ja": ["ja"],
    "en": ["en", "en-*"],
    "zh": ["zh"],
}
ALIASES = {"ja": ".ja", "zh": ".zh"}


@pytest.fixture
def matcher():
    return compile_rules(RULES, ALIASES, default="ja")


def test_lookup_skips_unknown_tags_and_returns_alias(matcher):
    assert matcher.lookup("ar-DZ,zh;q=0.8,ja;q=0.6,en-US;q=0.4,en;q=0.2") == ".zh"


def test_lookup_returns_rule_name_without_alias(matcher):
    assert matcher.lookup("en,zh;q=0.8,ja;q=0.6,en-US;q=0.4,ar-DZ;q=0.2") == "en"
    assert matcher.lookup("ar-DZ,en-US;q=0.8,ja;q=0.6,zh;q=0.4,en;q=0.2") == "en"


def test_lookup_falls_back_to_default(matcher):
    assert matcher.lookup("ar-DZ,ar-JO;q=0.8,id;q=0.6,ug;q=0.4,ky;q=0.2") == "ja"
    assert matcher.lookup("") == "ja"
    assert matcher.lookup(None) == "ja"


def test_priority_is_positional_not_quality(matcher):
    # ja has the higher q value but appears later
    assert matcher.lookup("ar-DZ,zh;q=0.1,ja;q=0.9") == ".zh"
    assert matcher.lookup("ar-DZ,ja;q=0.1,zh;q=0.9") == ".ja"


def test_wildcard_requires_hyphen_segment():
    matcher = compile_rules({"en": ["en-*"]}, default="xx")
    assert matcher.lookup("en-US") == "en"
    assert matcher.lookup("en-GB") == "en"
    assert matcher.lookup("en") == "xx"
    assert matcher.lookup("fr-FR") == "xx"


def test_literal_pattern_is_anchored_and_case_sensitive():
    matcher = compile_rules({"ja": ["ja"]}, default="en")
    assert matcher.lookup("ja") == "ja"
    assert matcher.lookup("jam") == "en"
    assert matcher.lookup("xja") == "en"
    assert matcher.lookup("JA") == "en"
    assert matcher.lookup("ja\n") == "en"


def test_spaces_and_tabs_around_entries_are_ignored(matcher):
    assert matcher.lookup("fr, en-US;q=0.5") == "en"
    assert matcher.lookup("fr,\tzh ;q=0.5") == ".zh"


def test_other_whitespace_is_not_trimmed(matcher):
    assert matcher.lookup("fr,ja\n") == "ja"
    assert matcher.lookup("fr,\nzh\r") == "ja"


def test_no_rules_short_circuits_to_default():
    for rules in (None, {}):
        matcher = compile_rules(rules, ALIASES, default="ja")
        assert matcher.lookup("zh,en") == "ja"
        assert matcher.languages == ()


def test_rules_are_consulted_in_insertion_order():
    first = compile_rules({"a": ["x-*"], "b": ["x-y"]}, default="d")
    second = compile_rules({"b": ["x-y"], "a": ["x-*"]}, default="d")
    assert first.lookup("x-y") == "a"
    assert second.lookup("x-y") == "b"
    assert first.languages == ("a", "b")


def test_malformed_pattern_raises_pattern_error():
    rules = dict(RULES, en=["en", "d(^-^o"])
    with pytest.raises(PatternError) as excinfo:
        compile_rules(rules, ALIASES, default="ja")
    assert excinfo.value.language == "en"
    assert excinfo.value.pattern == "d(^-^o"
    assert isinstance(excinfo.value, ValueError)


def test_compiled_matcher_is_immutable(matcher):
    with pytest.raises(AttributeError):
        matcher.default = "en"
    with pytest.raises(TypeError):
        matcher.aliases["en"] = ".en"


def test_alias_table_is_copied_at_compile_time():
    aliases = {"en": ".en"}
    matcher = compile_rules({"en": ["en"]}, aliases, default="ja")
    aliases["en"] = ".changed"
    assert matcher.lookup("en") == ".en"


def test_module_level_lookup(matcher):
    assert lookup(matcher, "en-AU") == "en"


def test_concurrent_lookups_agree(matcher):
    results = []

    def worker():
        for _ in range(200):
            results.append(matcher.lookup("ar-DZ,en-US;q=0.8"))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert set(results) == {"en"}
    assert len(results) == 1600
