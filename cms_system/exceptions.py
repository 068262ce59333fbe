"""
Custom Exception Classes for the CMS system core

Errors raised while loading extensions or maintaining the script queue.
Each carries a message, an HTTP status code and a details dict so the
global exception handler can render a consistent error response.
"""

from typing import Any

from fastapi import status


class CMSError(Exception):
    """Base exception class for all CMS-related exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Extension Exceptions
# ============================================================================


class ExtensionLoadError(CMSError):
    """Raised when an extension cannot be resolved, parsed or its requirements are unmet"""

    def __init__(self, name: str, reason: str | None = None):
        self.name = name
        self.reason = reason
        message = f"Unable to load extension '{name}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message=message, details={"extension": name, "reason": reason})


# ============================================================================
# Script Registry Exceptions
# ============================================================================


class ScriptNotRegisteredError(CMSError):
    """Raised when queueing a script name that has no registered descriptor"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            message=f"Script '{name}' is not registered",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"script": name},
        )


class InvalidDependencyError(CMSError):
    """Raised when a script declares itself as a dependency"""

    def __init__(self, name: str, dependency: str):
        super().__init__(
            message=f"Script '{name}' cannot depend on '{dependency}'",
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            details={"script": name, "dependency": dependency},
        )
