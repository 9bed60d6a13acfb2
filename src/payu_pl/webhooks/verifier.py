"""PayU Webhook Signature Verification.

Verifies the ``OpenPayU-Signature`` header sent with every PayU notification:

    OpenPayU-Signature: sender=checkout;signature=<hex>;algorithm=SHA256;content=DOCUMENT

Security Features:
- HMAC-SHA1/256/384/512 over the raw body bytes, keyed with the second key
- Constant-time comparison to prevent timing attacks
- Malformed headers and unknown algorithms reported as results, not exceptions

MD5 is not an HMAC on the PayU side. Integrations disagree on whether the
digest covers ``body + key`` or ``key + body``, so both orders are accepted.
This keeps older shops working but means two signing conventions verify
instead of one.

Usage:
    from payu_pl.webhooks import SignatureVerifier

    result = SignatureVerifier().verify(
        secret="second-key",
        body=request_body,
        header_value=request.headers.get("OpenPayU-Signature"),
    )
    if not result:
        print(result.error)
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass, field
from enum import Enum

DEFAULT_ALGORITHM = "SHA256"

# Algorithm tokens PayU documents, mapped to hashlib names.
HMAC_ALGORITHMS = {
    "sha": "sha1",
    "sha1": "sha1",
    "sha256": "sha256",
    "sha384": "sha384",
    "sha512": "sha512",
}


class VerificationStatus(Enum):
    """Status of webhook signature verification."""

    VERIFIED = "verified"
    MISSING_SIGNATURE = "missing_signature"
    MALFORMED_HEADER = "malformed_header"
    UNSUPPORTED_ALGORITHM = "unsupported_algorithm"
    SIGNATURE_MISMATCH = "signature_mismatch"


@dataclass
class VerificationResult:
    """Result of webhook signature verification."""

    valid: bool
    """Whether the signature is valid."""

    status: VerificationStatus
    """Detailed verification status."""

    error: str | None = None
    """Error message if verification failed."""

    algorithm: str | None = None
    """Lower-cased algorithm token taken from the header."""

    received: str | None = None
    """Signature sent by PayU."""

    expected: tuple[str, ...] = field(default_factory=tuple)
    """Signature(s) computed locally."""

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.valid


class UnsupportedAlgorithmError(ValueError):
    """The digest primitive does not know the requested algorithm."""


def parse_signature_header(header_value: str) -> dict[str, str]:
    """Parse ``key=value;key=value`` into a dict.

    Segments without ``=`` are dropped. Values may contain ``=``; only the
    first one separates key from value.
    """
    parts: dict[str, str] = {}
    for segment in header_value.split(";"):
        key, sep, value = segment.partition("=")
        if not sep:
            continue
        parts[key.strip()] = value.strip()
    return parts


def constant_time_compare(expected: str, received: str) -> bool:
    """Compare two signatures without leaking where they differ.

    A length mismatch returns early; only the byte comparison of
    equal-length values runs in constant time.
    """
    a = expected.encode("utf-8")
    b = received.encode("utf-8")
    if len(a) != len(b):
        return False
    return hmac.compare_digest(a, b)


def compute_hmac(secret: str, body: bytes, algorithm: str) -> str:
    """HMAC ``body`` with ``secret`` using any digest hashlib supports.

    Raises:
        UnsupportedAlgorithmError: If hashlib rejects the digest name.
    """
    digest = HMAC_ALGORITHMS.get(algorithm.lower(), algorithm.lower())
    try:
        return hmac.new(secret.encode("utf-8"), body, digest).hexdigest()
    except (ValueError, TypeError) as e:
        raise UnsupportedAlgorithmError(f"Unsupported signature algorithm: {algorithm}") from e


def md5_signatures(secret: str, body: bytes) -> tuple[str, str]:
    """Return ``(MD5(body + key), MD5(key + body))`` as hex."""
    key = secret.encode("utf-8")
    return (
        hashlib.md5(body + key).hexdigest(),
        hashlib.md5(key + body).hexdigest(),
    )


def compute_signature(secret: str, body: bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Compute the canonical signature PayU would send for ``body``.

    For MD5 this is the ``body + key`` order.
    """
    if algorithm.lower() == "md5":
        return md5_signatures(secret, body)[0]
    return compute_hmac(secret, body, algorithm)


def build_signature_header(secret: str, body: bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Build an ``OpenPayU-Signature`` header value for ``body``."""
    signature = compute_signature(secret, body, algorithm)
    return f"signature={signature};algorithm={algorithm.upper()}"


class SignatureVerifier:
    """Stateless verifier for ``OpenPayU-Signature`` headers.

    Instances hold no data, so one verifier may be shared between
    concurrent requests.
    """

    def verify(self, secret: str, body: bytes, header_value: str | None) -> VerificationResult:
        """Verify ``body`` against the signature header.

        Args:
            secret: The PayU second key.
            body: Raw request body bytes, exactly as received.
            header_value: Value of the ``OpenPayU-Signature`` header.

        Returns:
            VerificationResult with status and details. Expected failures
            (missing header, bad format, unknown algorithm, mismatch) are
            reported in the result and never raised.
        """
        if not header_value:
            return VerificationResult(
                valid=False,
                status=VerificationStatus.MISSING_SIGNATURE,
                error="Missing OpenPayU signature header",
            )

        parts = parse_signature_header(header_value)
        received = parts.get("signature")
        algorithm = (parts.get("algorithm") or DEFAULT_ALGORITHM).lower()

        if not received:
            return VerificationResult(
                valid=False,
                status=VerificationStatus.MALFORMED_HEADER,
                error="Malformed OpenPayU signature header: signature not found",
                algorithm=algorithm,
            )

        if algorithm == "md5":
            expected = md5_signatures(secret, body)
        else:
            try:
                expected = (compute_hmac(secret, body, algorithm),)
            except UnsupportedAlgorithmError as e:
                return VerificationResult(
                    valid=False,
                    status=VerificationStatus.UNSUPPORTED_ALGORITHM,
                    error=str(e),
                    algorithm=algorithm,
                    received=received,
                )

        # Evaluate every candidate so timing does not reveal which order matched.
        matches = [constant_time_compare(candidate, received) for candidate in expected]

        if any(matches):
            return VerificationResult(
                valid=True,
                status=VerificationStatus.VERIFIED,
                algorithm=algorithm,
                received=received,
                expected=expected,
            )

        return VerificationResult(
            valid=False,
            status=VerificationStatus.SIGNATURE_MISMATCH,
            error=f"Signature verification failed for algorithm {algorithm}",
            algorithm=algorithm,
            received=received,
            expected=expected,
        )
