"""Global configuration: constants and default settings."""

import re

# Decimal places applied to every derived layer value and assembly total
ROUND_DECIMALS = 3

# Building element areas are entered in m2 and kept to 2 decimals
AREA_DECIMALS = 2

# Label of the synthetic catch-all taxonomy node
UNCATEGORIZED_LABEL = "Uncategorized"

# Full height of the contribution chart; bars grow from the centre line,
# so the largest magnitude spans half of it.
CHART_HEIGHT = 200.0

# Leading dotted-numeric code of a taxonomy label, e.g. "2.5.1 External walls"
NUMERIC_PREFIX_PATTERN = re.compile(r"^\d+(?:\.\d+)*")

# Name prefix given to duplicated build-ups
COPY_PREFIX = "Copy of "

# Top-level NRM groups used when seeding project building elements
DEFAULT_ELEMENT_ROOTS = ("1 Sub-structure", "2 Super structure", "3 Finishes")
