"""Constants shared by the parser, fetcher and store."""

USER_AGENT = "leg2json/0.1 (Australian federal legislation ingestion)"
DEFAULT_ACCEPT = "text/html, application/xhtml+xml, application/xml, */*"

API_BASE = "https://api.prod.legislation.gov.au/v1"
WWW_BASE = "https://www.legislation.gov.au"

# Politeness towards the register
MIN_DELAY_SECONDS = 0.5
MAX_RETRIES = 3
REQUEST_TIMEOUT = 60

# The register returns its Angular app instead of EPUB XHTML for some versions
SHELL_SIGNATURE = '<!DOCTYPE html><html lang="en"'
MIN_BODY_CHARS = 1000

MAX_CONTENT_CHARS = 8000
MAX_DEFINITION_CHARS = 4000
MIN_FRAGMENT_CHARS = 2
MIN_FALLBACK_CHARS = 10
MIN_PROVISION_CHARS = 5

DB_ENV_VAR = "AUSTRALIAN_LAW_DB_PATH"
