"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- Mock settings/configuration
- Sample email data
- Temporary files
"""

import os
from typing import Generator

import pytest

from eml_reader.config import Settings, get_settings
from .fixtures.emails import SAMPLE_EMAILS


@pytest.fixture
def mock_settings() -> Settings:
    """
    Create mock settings for testing with safe defaults.

    Returns:
        Settings instance with test configuration
    """
    return Settings(
        default_charset="UTF-8",
        default_encoding="quoted-printable",
        max_multipart_depth=8,
        log_level="DEBUG",
        log_json=False,  # Easier to read in tests
    )


@pytest.fixture
def sample_eml_bytes() -> bytes:
    """
    Get simple plain text email bytes for basic tests.

    Returns:
        bytes of a simple single-part .eml file
    """
    return SAMPLE_EMAILS["simple_plain_text"]


@pytest.fixture
def multipart_alternative_eml() -> bytes:
    """
    Get multipart email with both HTML and plain text.

    Returns:
        bytes of multipart/alternative email
    """
    return SAMPLE_EMAILS["multipart_alternative"]


@pytest.fixture
def inline_and_attachment_eml() -> bytes:
    """
    Get multipart/mixed email with one inline image and one attached PDF.

    Returns:
        bytes of multipart/mixed email
    """
    return SAMPLE_EMAILS["inline_and_attachment"]


@pytest.fixture
def nested_multipart_eml() -> bytes:
    """
    Get multipart/mixed email wrapping a multipart/alternative body and an attachment.

    Returns:
        bytes of nested multipart email
    """
    return SAMPLE_EMAILS["nested_multipart"]


@pytest.fixture
def malformed_eml() -> bytes:
    """
    Get malformed email for error handling tests.

    Returns:
        bytes of invalid RFC 822 data
    """
    return SAMPLE_EMAILS["malformed"]


@pytest.fixture
def tmp_eml_file(tmp_path) -> Generator[str, None, None]:
    """
    Create temporary .eml file for file-based tests.

    Args:
        tmp_path: pytest's temporary directory fixture

    Yields:
        Path to temporary .eml file
    """
    eml_path = tmp_path / "test_email.eml"
    eml_path.write_bytes(SAMPLE_EMAILS["nested_multipart"])
    yield str(eml_path)
    # Cleanup is automatic with tmp_path


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables and cached settings around each test.

    This prevents test pollution from env var changes.
    """
    original_env = os.environ.copy()
    get_settings.cache_clear()
    yield
    os.environ.clear()
    os.environ.update(original_env)
    get_settings.cache_clear()


def pytest_configure(config):
    """
    Configure pytest with custom markers and settings.
    """
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
