from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from viewchecker.models.coerce import as_int, as_list, as_mapping, is_number


@dataclass(frozen=True)
class ElementTally:
    """How many elements of a kind exist and how many of them pass a check."""
    count: int = 0
    compliant: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "ElementTally":
        if not isinstance(data, Mapping):
            return cls()
        return cls(count=as_int(data.get("count")), compliant=as_int(data.get("compliant")))


@dataclass(frozen=True)
class PageSignals:
    """
    Computed DOM/style facts collected from a loaded page.
    Rule evaluators only ever see this value, never the browser.
    """
    color_count: int = 0
    font_family_count: int = 0
    border_radius_count: int = 0
    box_shadow_count: int = 0
    has_viewport_meta: bool = False
    has_horizontal_overflow: bool = False
    supports_contrast_mode: bool = False
    has_lang: bool = False
    button_heights: Tuple[float, ...] = ()
    icons: ElementTally = field(default_factory=ElementTally)
    links: ElementTally = field(default_factory=ElementTally)
    components: Dict[str, ElementTally] = field(default_factory=dict)
    landmarks: Tuple[str, ...] = ()
    has_skip_link: bool = False
    h1_count: int = 0
    heading_levels: Tuple[int, ...] = ()
    focusable_count: int = 0
    positive_tabindex_count: int = 0
    stateful_controls: ElementTally = field(default_factory=ElementTally)
    live_region_count: int = 0
    form_count: int = 0
    required_fields: ElementTally = field(default_factory=ElementTally)
    password_fields: ElementTally = field(default_factory=ElementTally)
    search_fields: ElementTally = field(default_factory=ElementTally)
    long_list_count: int = 0
    has_pagination: bool = False
    dialogs: ElementTally = field(default_factory=ElementTally)

    def component(self, component_type: str) -> ElementTally:
        return self.components.get(component_type, ElementTally())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PageSignals":
        """Parses the camelCase payload of the in-page collector script."""
        components = as_mapping(data.get("components"))
        return cls(
            color_count=as_int(data.get("colorCount")),
            font_family_count=as_int(data.get("fontFamilyCount")),
            border_radius_count=as_int(data.get("borderRadiusCount")),
            box_shadow_count=as_int(data.get("boxShadowCount")),
            has_viewport_meta=bool(data.get("hasViewportMeta")),
            has_horizontal_overflow=bool(data.get("hasHorizontalOverflow")),
            supports_contrast_mode=bool(data.get("supportsContrastMode")),
            has_lang=bool(data.get("hasLang")),
            button_heights=tuple(float(h) for h in as_list(data.get("buttonHeights")) if is_number(h)),
            icons=ElementTally.from_dict(data.get("icons")),
            links=ElementTally.from_dict(data.get("links")),
            components={
                str(name): ElementTally.from_dict(tally) for name, tally in components.items()
            },
            landmarks=tuple(str(l) for l in as_list(data.get("landmarks"))),
            has_skip_link=bool(data.get("hasSkipLink")),
            h1_count=as_int(data.get("h1Count")),
            heading_levels=tuple(as_int(l) for l in as_list(data.get("headingLevels"))),
            focusable_count=as_int(data.get("focusableCount")),
            positive_tabindex_count=as_int(data.get("positiveTabindexCount")),
            stateful_controls=ElementTally.from_dict(data.get("statefulControls")),
            live_region_count=as_int(data.get("liveRegionCount")),
            form_count=as_int(data.get("formCount")),
            required_fields=ElementTally.from_dict(data.get("requiredFields")),
            password_fields=ElementTally.from_dict(data.get("passwordFields")),
            search_fields=ElementTally.from_dict(data.get("searchFields")),
            long_list_count=as_int(data.get("longListCount")),
            has_pagination=bool(data.get("hasPagination")),
            dialogs=ElementTally.from_dict(data.get("dialogs")),
        )


@dataclass(frozen=True)
class RuleOutcome:
    score: int
    issues: Tuple[str, ...] = ()

