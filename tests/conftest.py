"""Test configuration and fixtures for user-records."""

from tests.fixtures import *  # noqa: F401,F403
