# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Pytest configuration and fixtures."""

import pytest

from genro_elem import reset_default_scope


@pytest.fixture(autouse=True)
def fresh_default_scope():
    """Start every test with a new default document.

    Elements built in one test never share a document (or raw store)
    with elements of another.
    """
    reset_default_scope()
    yield
    reset_default_scope()
