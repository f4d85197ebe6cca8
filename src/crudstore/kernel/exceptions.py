# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Exception hierarchy for crudstore.

All library exceptions inherit from CrudStoreException, so callers can catch
one base type or target a specific failure.

Categories:
- CompileException: the load options could not be turned into a query
- InfrastructureException: the HTTP round-trip failed
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Base Exception
# =============================================================================


class CrudStoreException(Exception):
    """Base exception for all crudstore errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "UNKNOWN_OPERATOR").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Compile Exceptions
# =============================================================================


class CompileException(CrudStoreException):
    """Load options could not be compiled into a request query."""


class UnknownOperatorException(CompileException):
    """A filter operator is not present in the operator table."""

    def __init__(self, operator: Any) -> None:
        super().__init__(
            f"Unknown filter operator: {operator!r}",
            code="UNKNOWN_OPERATOR",
            context={"operator": operator},
        )
        self.operator = operator


class InvalidQueryException(CompileException):
    """A query parameter value is not acceptable to the query grammar."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="INVALID_QUERY", context=context)


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(CrudStoreException):
    """The request to the backend could not be completed."""


class TransportException(InfrastructureException):
    """The network call itself failed (connection refused, DNS, timeout).

    The underlying transport error is chained as ``__cause__``.
    """

    def __init__(self, method: str, url: str, reason: str) -> None:
        super().__init__(
            f"Network error {method} {url}: {reason}",
            code="TRANSPORT_ERROR",
            context={"method": method, "url": url},
        )


class HttpStatusException(InfrastructureException):
    """The backend answered with a non-success status code.

    ``payload`` holds the decoded JSON error body, or ``None`` when the body
    was not JSON (the reason phrase is used as the message instead).
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        payload: Any = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message, code=f"HTTP_{status_code}", context=context)
        self.status_code = status_code
        self.payload = payload


class ResponseFormatException(InfrastructureException):
    """A successful response carried a body that could not be understood."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="RESPONSE_FORMAT", context=context)
