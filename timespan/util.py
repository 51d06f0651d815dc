"""Constants shared across timespan.

Placeholder tokens and separators define the text grammar of spans.
These are used throughout the API for consistent parsing and display.
"""

import re

# Template placeholders
START = "{start}"
END = "{end}"

# Default text form: "<start> - <end>"
DISPLAY_TEMPLATE = f"{START} - {END}"
SEPARATOR = re.compile(r"\s+-\s+")
LOOSE_SEPARATOR = re.compile(r"\s*-\s*")

# Generic capture group substituted for each placeholder
CAPTURE = "(.*)"

DEFAULT_TZ = "UTC"

# Microseconds in a day, used for wall-clock arithmetic on times
DAY_MICROSECONDS = 86_400_000_000
