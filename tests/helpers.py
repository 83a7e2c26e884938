"""Shared constants for the test suite."""

# Base URL every mocked backend route is registered under
BASE_URL = "http://backend.test/api/v1"
