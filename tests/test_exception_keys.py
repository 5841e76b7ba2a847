from viewchecker.controls.exception_keys import (
    DEFAULT_EXCLUSION_REASON,
    exception_key,
    exception_section,
    excluded_keys,
    exclusion_reason,
    first_non_empty,
    group_by_section,
    item_key,
)
from viewchecker.models.category_item import CategoryItem
from viewchecker.models.exception_request import ExceptionRequest
from viewchecker.models.section import OTHER_SECTION, Section


def test_first_non_empty():
    assert first_non_empty(None, "", "b", "c") == "b"
    assert first_non_empty(None, "") == ""


def test_exception_key_prefers_item_key():
    assert exception_key(ExceptionRequest(item_key="a", item_name="b")) == "a"
    assert exception_key(ExceptionRequest(item_key="", item_name="b")) == "b"
    assert exception_key(ExceptionRequest()) == ""


def test_exception_section_fallbacks():
    assert exception_section(ExceptionRequest(section="컴포넌트", category="x")) == "컴포넌트"
    assert exception_section(ExceptionRequest(category="기본 패턴")) == "기본 패턴"
    assert exception_section(ExceptionRequest()) == OTHER_SECTION


def test_item_key_fallbacks():
    assert item_key(CategoryItem(key="색상", name="Color", score=1)) == "색상"
    assert item_key(CategoryItem(key="", name="Color", score=1)) == "Color"
    assert item_key(CategoryItem(key="", name="", score=1, english_name="Login")) == "Login"
    assert item_key(CategoryItem(key="", name="", score=1)) == ""


def test_group_by_section_keeps_first_seen_order():
    exceptions = [
        ExceptionRequest(item_key="a", section="컴포넌트"),
        ExceptionRequest(item_key="b"),
        ExceptionRequest(item_key="c", section="컴포넌트"),
        ExceptionRequest(item_key="d", category="디자인 스타일"),
    ]

    grouped = group_by_section(exceptions)

    assert list(grouped) == ["컴포넌트", OTHER_SECTION, "디자인 스타일"]
    assert [e.item_key for e in grouped["컴포넌트"]] == ["a", "c"]


def test_excluded_keys_drop_empty_keys():
    exceptions = [ExceptionRequest(item_key="a"), ExceptionRequest(reason="no key")]
    assert excluded_keys(exceptions) == ["a"]


def test_exclusion_reason():
    exceptions = [
        ExceptionRequest(item_key="a", reason=""),
        ExceptionRequest(item_key="b", reason="second"),
    ]
    assert exclusion_reason(exceptions, "b") == "second"
    assert exclusion_reason(exceptions, "a") == DEFAULT_EXCLUSION_REASON
    assert exclusion_reason(exceptions, "zzz") == DEFAULT_EXCLUSION_REASON


def test_section_aliases():
    assert Section.from_label("디자인 스타일") is Section.DESIGN_STYLES
    assert Section.from_label("design-styles") is Section.DESIGN_STYLES
    assert Section.from_label("servicePatterns") is Section.SERVICE_PATTERNS
    assert Section.from_label(" 컴포넌트 ") is Section.COMPONENTS
    assert Section.from_label(OTHER_SECTION) is None
    assert Section.from_label("unknown") is None
    assert Section.from_label(None) is None
