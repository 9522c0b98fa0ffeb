"""
Schemas

Error taxonomy shared by every module. The report models live in
`mmrproof.schemas.report` and are imported from there directly, since
they depend on the digest codec which itself raises these errors.
"""

from .errors import (
    ErrorCodes,
    MMRProofError,
    MMRProofException,
    MalformedDigestError,
    MissingNodeError,
    InvalidHeightError,
    InvalidVerificationTargetError,
    IndexerTimeoutError,
    TransportError,
    InvalidProofError,
)

__all__ = [
    "ErrorCodes",
    "MMRProofError",
    "MMRProofException",
    "MalformedDigestError",
    "MissingNodeError",
    "InvalidHeightError",
    "InvalidVerificationTargetError",
    "IndexerTimeoutError",
    "TransportError",
    "InvalidProofError",
]
