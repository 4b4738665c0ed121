# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exceptions raised by genro_elem.

Every exception derives from ElemException and from the builtin that
matches its meaning, so callers can catch either.
"""

from __future__ import annotations


class ElemException(Exception):
    """Base exception for genro_elem."""
    pass


class ElemUsageError(ElemException, ValueError):
    """An operation was called on an element that cannot support it."""
    pass


class ElemChildError(ElemException, TypeError):
    """A child passed to append() has an unsupported shape."""
    pass


class ElemHierarchyError(ElemException, ValueError):
    """Appending would make a node its own ancestor."""
    pass
