"""
In-page signal collector.

Everything the rule evaluators need is gathered by one `page.evaluate`
call and parsed into a PageSignals value; rules never touch the browser.
"""
import logging

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from viewchecker.adapters.browser import AnalysisError
from viewchecker.models.page_signals import PageSignals
from viewchecker.scoring.thresholds import LONG_LIST_ITEMS, MIN_BUTTON_HEIGHT_PX

logger = logging.getLogger("viewchecker.signals")

# Elements inspected for computed styles; larger pages are sampled.
STYLE_SAMPLE_LIMIT = 3000

COLLECT_SIGNALS_JS = r"""
({ styleSampleLimit, minButtonHeight, longListItems }) => {
  const all = Array.from(document.querySelectorAll('body *')).slice(0, styleSampleLimit);
  const colors = new Set();
  const fonts = new Set();
  const radii = new Set();
  const shadows = new Set();

  for (const el of all) {
    const s = window.getComputedStyle(el);
    for (const c of [s.color, s.backgroundColor]) {
      if (c && c !== 'transparent' && c !== 'rgba(0, 0, 0, 0)') colors.add(c);
    }
    const family = (s.fontFamily || '').split(',')[0].trim().replace(/["']/g, '').toLowerCase();
    if (family) fonts.add(family);
    if (s.borderRadius && s.borderRadius !== '0px') radii.add(s.borderRadius);
    if (s.boxShadow && s.boxShadow !== 'none') shadows.add(s.boxShadow);
  }

  const text = (el) => (el.textContent || '').trim();

  const labelled = (el) => {
    if (el.getAttribute('aria-label') || el.getAttribute('aria-labelledby') || el.getAttribute('title')) return true;
    if (el.id && document.querySelector(`label[for="${CSS.escape(el.id)}"]`)) return true;
    return !!el.closest('label');
  };

  const labelText = (el) => {
    const byFor = el.id ? document.querySelector(`label[for="${CSS.escape(el.id)}"]`) : null;
    const label = byFor || el.closest('label');
    return label ? text(label) : '';
  };

  const tally = (selector, check) => {
    const els = Array.from(document.querySelectorAll(selector));
    return { count: els.length, compliant: els.filter(check).length };
  };

  const linkHasText = (a) =>
    !!(text(a) || a.getAttribute('aria-label') || a.getAttribute('title') ||
       Array.from(a.querySelectorAll('img[alt]')).some((img) => img.alt.trim()));

  const buttonSelector = 'button, [role="button"], input[type="button"], input[type="submit"]';
  const buttonHeights = Array.from(document.querySelectorAll(buttonSelector))
    .map((b) => b.getBoundingClientRect().height);

  let supportsContrastMode = false;
  for (const sheet of Array.from(document.styleSheets)) {
    let rules;
    try { rules = sheet.cssRules; } catch (e) { continue; }
    for (const rule of Array.from(rules || [])) {
      const cond = rule.conditionText || (rule.media && rule.media.mediaText) || '';
      if (/prefers-contrast|forced-colors/.test(cond)) { supportsContrastMode = true; break; }
    }
    if (supportsContrastMode) break;
  }

  const landmarks = [];
  const landmarkSelectors = {
    header: 'header, [role="banner"]',
    main: 'main, [role="main"]',
    footer: 'footer, [role="contentinfo"]',
    nav: 'nav, [role="navigation"]',
  };
  for (const [name, sel] of Object.entries(landmarkSelectors)) {
    if (document.querySelector(sel)) landmarks.push(name);
  }

  const firstLinks = Array.from(document.querySelectorAll('a[href^="#"]')).slice(0, 5);
  const hasSkipLink = firstLinks.some((a) => /본문|skip|content/i.test(text(a)));

  const headings = Array.from(document.querySelectorAll('h1, h2, h3, h4, h5, h6'));

  const tabindexed = Array.from(document.querySelectorAll('[tabindex]'));

  const longLists = Array.from(document.querySelectorAll('ul, ol'))
    .filter((list) => list.querySelectorAll(':scope > li').length > longListItems);

  return {
    colorCount: colors.size,
    fontFamilyCount: fonts.size,
    borderRadiusCount: radii.size,
    boxShadowCount: shadows.size,
    hasViewportMeta: !!document.querySelector('meta[name="viewport"]'),
    hasHorizontalOverflow: document.documentElement.scrollWidth > window.innerWidth + 1,
    supportsContrastMode,
    hasLang: !!document.documentElement.getAttribute('lang'),
    buttonHeights,
    icons: tally('svg, [class*="icon"], i[class*="fa-"]', (el) =>
      el.getAttribute('aria-hidden') === 'true' || !!el.getAttribute('aria-label') ||
      !!el.getAttribute('title') || !!el.querySelector('title')),
    links: tally('a[href]', linkHasText),
    components: {
      button: { count: buttonHeights.length, compliant: buttonHeights.filter((h) => h >= minButtonHeight).length },
      input: tally('input:not([type="hidden"]):not([type="button"]):not([type="submit"]):not([type="checkbox"]):not([type="radio"]), textarea', labelled),
      select: tally('select', labelled),
      checkbox: tally('input[type="checkbox"]', labelled),
      radio: tally('input[type="radio"]', labelled),
      link: tally('a[href]', linkHasText),
      card: tally('[class*="card"]', (el) => !!el.querySelector('h1, h2, h3, h4, h5, h6')),
      table: tally('table', (el) => !!el.querySelector('th, caption')),
    },
    landmarks,
    hasSkipLink,
    h1Count: document.querySelectorAll('h1').length,
    headingLevels: headings.map((h) => Number(h.tagName.substring(1))),
    focusableCount: document.querySelectorAll('a[href], button, input, select, textarea, [tabindex]').length,
    positiveTabindexCount: tabindexed.filter((el) => parseInt(el.getAttribute('tabindex'), 10) > 0).length,
    statefulControls: tally('[aria-controls], [data-toggle], [data-bs-toggle]', (el) => el.hasAttribute('aria-expanded')),
    liveRegionCount: document.querySelectorAll('[aria-live], [role="alert"], [role="status"]').length,
    formCount: document.forms.length,
    requiredFields: tally('[required], [aria-required="true"]', (el) =>
      el.getAttribute('aria-required') === 'true' || /\*|필수/.test(labelText(el))),
    passwordFields: tally('input[type="password"]', (el) => el.hasAttribute('autocomplete')),
    searchFields: tally('input[type="search"], [role="search"] input, input[name="q"], input[name*="search"]', labelled),
    longListCount: longLists.length,
    hasPagination: !!document.querySelector('[class*="pagination"], [class*="paging"], nav[aria-label*="page" i], nav[aria-label*="페이지"]'),
    dialogs: tally('dialog, [role="dialog"], [role="alertdialog"]', (el) =>
      !!(el.getAttribute('aria-label') || el.getAttribute('aria-labelledby'))),
  };
}
"""


def collect_page_signals(page: Page) -> PageSignals:
    try:
        raw = page.evaluate(
            COLLECT_SIGNALS_JS,
            {
                "styleSampleLimit": STYLE_SAMPLE_LIMIT,
                "minButtonHeight": MIN_BUTTON_HEIGHT_PX,
                "longListItems": LONG_LIST_ITEMS,
            },
        )
    except PlaywrightError as e:
        raise AnalysisError(f"Signal collection failed: {e}") from e

    if not isinstance(raw, dict):
        logger.warning("Signal collector returned no data; using empty signals")
        return PageSignals()

    return PageSignals.from_dict(raw)
