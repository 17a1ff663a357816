"""Test configuration and fixtures."""

import os

# Must be set before Settings is first instantiated
os.environ.setdefault("ENVIRONMENT", "test")

import logfire  # noqa: E402

# Spans and logs stay local during tests
logfire.configure(send_to_logfire=False, console=False)
