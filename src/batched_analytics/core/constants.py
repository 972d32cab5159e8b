"""Shared constants for analytics events."""

# Stands in for the user's metrics id on events that must stay anonymous
ANONYMOUS_ID = "0x0000000000000000"

BACKGROUND_PAGE_PATH = "/background-process"
BACKGROUND_PAGE_TITLE = "Background Process"

# Milliseconds between unconditional flushes. Kept under the 10s default of
# hosted analytics clients.
DEFAULT_FLUSH_INTERVAL_MS = 5000

ENVIRONMENT_BACKGROUND = "background"
