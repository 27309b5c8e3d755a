"""Errors raised by the tree database."""

from __future__ import annotations

import enum


class ErrorCode(enum.IntEnum):
    """Error codes reported by the tree database."""

    GENERIC_ERROR = -1


class TreeDBError(Exception):
    """Raised when a tree database operation fails."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.GENERIC_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.code = ErrorCode(code)

    def __str__(self) -> str:
        return self.message