"""
Schemas
File: errors.py

Purpose: Standard error taxonomy for checkpoint and proof assembly.
Defines both Pydantic models for structured error reporting
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the pipeline."""

    # Digest & Data Errors
    MALFORMED_DIGEST = "MALFORMED_DIGEST"
    MISSING_NODE = "MISSING_NODE"

    # Caller Input Errors
    INVALID_HEIGHT = "INVALID_HEIGHT"
    INVALID_VERIFICATION_TARGET = "INVALID_VERIFICATION_TARGET"

    # Transport Errors
    INDEXER_TIMEOUT = "INDEXER_TIMEOUT"
    TRANSPORT_FAILURE = "TRANSPORT_FAILURE"

    # Proof Errors
    INVALID_PROOF = "INVALID_PROOF"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class MMRProofError(BaseModel):
    """
    Error model for structured error reporting.

    Used by the CLI to emit failures as JSON next to (or instead of)
    a report, without losing the error code or its context.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.MISSING_NODE],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Offending position, height or response fragment",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MMRProofException(Exception):
    """
    Base exception for all checkpoint and proof errors.

    Carries structured error information and can be converted
    to an MMRProofError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "MMRPROOF_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MMRProofError:
        """Convert this exception to an MMRProofError model."""
        return MMRProofError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class MalformedDigestError(MMRProofException):
    """Raised when a digest is not 0x-prefixed hex of exactly 32 bytes."""

    def __init__(
        self,
        message: str,
        value: str | None = None,
        position: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if value is not None:
            full_details["value"] = value[:80]
        if position is not None:
            full_details["position"] = position
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_DIGEST,
            details=full_details,
            retryable=False,
        )
        self.position = position


class MissingNodeError(MMRProofException):
    """Raised when the indexer response lacks a requested position."""

    def __init__(
        self,
        position: int,
        missing: list[int] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["position"] = position
        if missing:
            full_details["missing"] = list(missing)
        super().__init__(
            message=f"Indexer returned no node for position {position}",
            code=ErrorCodes.MISSING_NODE,
            details=full_details,
            retryable=True,
        )
        self.position = position


class InvalidHeightError(MMRProofException):
    """Raised when a checkpoint height is unusable."""

    def __init__(
        self,
        message: str,
        height: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if height is not None:
            full_details["height"] = height
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_HEIGHT,
            details=full_details,
            retryable=False,
        )
        self.height = height


class InvalidVerificationTargetError(MMRProofException):
    """Raised when the leaf to prove is not covered by the tree size."""

    def __init__(
        self,
        message: str,
        target_height: int | None = None,
        block_height: int | None = None,
        mmr_size: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if target_height is not None:
            full_details["target_height"] = target_height
        if block_height is not None:
            full_details["block_height"] = block_height
        if mmr_size is not None:
            full_details["mmr_size"] = mmr_size
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_VERIFICATION_TARGET,
            details=full_details,
            retryable=False,
        )
        self.target_height = target_height


class IndexerTimeoutError(MMRProofException):
    """Raised when a batched lookup does not complete within the timeout."""

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if timeout is not None:
            full_details["timeout"] = timeout
        super().__init__(
            message=message,
            code=ErrorCodes.INDEXER_TIMEOUT,
            details=full_details,
            retryable=True,
        )


class TransportError(MMRProofException):
    """Raised when the indexer request fails or its response is unusable."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if status_code is not None:
            full_details["status_code"] = status_code
        super().__init__(
            message=message,
            code=ErrorCodes.TRANSPORT_FAILURE,
            details=full_details,
            retryable=True,
        )


class InvalidProofError(MMRProofException):
    """Raised when a proof is structurally inconsistent with the tree size."""

    def __init__(
        self,
        message: str,
        mmr_size: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if mmr_size is not None:
            full_details["mmr_size"] = mmr_size
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_PROOF,
            details=full_details,
            retryable=False,
        )
