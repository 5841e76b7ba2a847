# Scoring thresholds shared by the rule evaluators and the report builders.
# Externalized so they can be tuned without touching rule logic.

# An item at or above this score is reported as compliant.
COMPLIANT_SCORE = 80

# Score given to an item whose evaluator crashed.
FAILED_RULE_SCORE = 50

# KRDS minimum touch-target height for buttons, in CSS pixels.
MIN_BUTTON_HEIGHT_PX = 44

# Distinct colour count regarded as a coherent palette.
COLOR_PALETTE_MIN = 10
COLOR_PALETTE_MAX = 30

# Distinct font-family declarations regarded as a coherent type system.
FONT_FAMILY_MIN = 1
FONT_FAMILY_MAX = 3

# Lists longer than this are expected to be paginated.
LONG_LIST_ITEMS = 20
