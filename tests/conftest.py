"""Root pytest configuration for all tests."""

import logging

# atlassian-python-api logs failed lookups at ERROR; tests exercise 404s on purpose.
logging.getLogger("atlassian").setLevel(logging.WARNING)
