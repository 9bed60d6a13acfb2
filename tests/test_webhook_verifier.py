"""Tests for webhook signature verification."""

from __future__ import annotations

import hashlib
import hmac

import pytest

from payu_pl.webhooks.verifier import (
    SignatureVerifier,
    VerificationStatus,
    build_signature_header,
    compute_signature,
    constant_time_compare,
    parse_signature_header,
)

SECRET = "test_secret_key"
BODY = (
    b'{"order":{"orderId":"WZHF5FFDRJ140731GUEST000P01","status":"COMPLETED",'
    b'"totalAmount":"21000","currencyCode":"PLN"}}'
)


def hmac_hex(digest: str, secret: str = SECRET, body: bytes = BODY) -> str:
    return hmac.new(secret.encode(), body, digest).hexdigest()


@pytest.fixture
def verifier() -> SignatureVerifier:
    return SignatureVerifier()


class TestParseSignatureHeader:
    """Tests for parse_signature_header."""

    def test_parses_key_value_segments(self):
        """Test full PayU header format."""
        parts = parse_signature_header("sender=checkout;signature=abc;algorithm=MD5;content=DOCUMENT")
        assert parts == {
            "sender": "checkout",
            "signature": "abc",
            "algorithm": "MD5",
            "content": "DOCUMENT",
        }

    def test_splits_on_first_equals_only(self):
        """Test that values may contain '='."""
        assert parse_signature_header("signature=ab==")["signature"] == "ab=="

    def test_drops_segments_without_equals(self):
        """Test malformed segments are ignored, not fatal."""
        assert parse_signature_header("garbage;signature=abc;;") == {"signature": "abc"}


class TestHmacAlgorithms:
    """Tests for the HMAC family."""

    @pytest.mark.parametrize(
        ("token", "digest"),
        [
            ("SHA", "sha1"),
            ("SHA1", "sha1"),
            ("SHA256", "sha256"),
            ("SHA384", "sha384"),
            ("SHA512", "sha512"),
        ],
    )
    def test_documented_algorithms(self, verifier, token, digest):
        """Test each documented token verifies its HMAC."""
        header = f"signature={hmac_hex(digest)};algorithm={token}"
        result = verifier.verify(SECRET, BODY, header)
        assert result.valid is True
        assert result.status == VerificationStatus.VERIFIED
        assert result.algorithm == token.lower()

    def test_algorithm_is_case_insensitive(self, verifier):
        """Test lower/mixed case tokens."""
        header = f"signature={hmac_hex('sha256')};algorithm=Sha256"
        assert verifier.verify(SECRET, BODY, header)

    def test_defaults_to_sha256(self, verifier):
        """Test header without algorithm segment."""
        result = verifier.verify(SECRET, BODY, f"signature={hmac_hex('sha256')}")
        assert result.valid is True
        assert result.algorithm == "sha256"

    def test_other_hashlib_digest_names(self, verifier):
        """Test tokens outside the documented list fall through to hashlib."""
        header = f"signature={hmac_hex('sha224')};algorithm=SHA224"
        assert verifier.verify(SECRET, BODY, header)

    def test_body_mutation_fails(self, verifier):
        """Test a single changed byte in the body is rejected."""
        header = f"signature={hmac_hex('sha256')};algorithm=SHA256"
        mutated = BODY.replace(b"21000", b"21001")
        result = verifier.verify(SECRET, mutated, header)
        assert result.valid is False
        assert result.status == VerificationStatus.SIGNATURE_MISMATCH

    def test_secret_mutation_fails(self, verifier):
        """Test a single changed byte in the secret is rejected."""
        header = f"signature={hmac_hex('sha256')};algorithm=SHA256"
        assert not verifier.verify("test_secret_kez", BODY, header)

    def test_non_utf8_body(self, verifier):
        """Test raw bytes that are not valid UTF-8."""
        body = b"\xff\xfe\x00binary"
        header = f"signature={hmac_hex('sha256', body=body)}"
        assert verifier.verify(SECRET, body, header)

    def test_empty_secret_is_usable(self, verifier):
        """Test the verifier itself does not reject an empty key."""
        header = f"signature={hmac_hex('sha256', secret='')}"
        assert verifier.verify("", BODY, header)


class TestMd5:
    """Tests for MD5 dual-order acceptance."""

    def test_body_plus_key(self, verifier):
        """Test MD5(body + key)."""
        signature = hashlib.md5(b"x" + b"k").hexdigest()
        assert verifier.verify("k", b"x", f"signature={signature};algorithm=MD5")

    def test_key_plus_body(self, verifier):
        """Test MD5(key + body)."""
        signature = hashlib.md5(b"k" + b"x").hexdigest()
        assert verifier.verify("k", b"x", f"signature={signature};algorithm=MD5")

    def test_other_value_fails(self, verifier):
        """Test unrelated MD5 values are rejected."""
        signature = hashlib.md5(b"x").hexdigest()
        result = verifier.verify("k", b"x", f"signature={signature};algorithm=md5")
        assert result.valid is False
        assert result.error == "Signature verification failed for algorithm md5"

    def test_reports_both_candidates(self, verifier):
        """Test both computed orders are exposed for diagnostics."""
        result = verifier.verify("k", b"x", "signature=nope;algorithm=MD5")
        assert set(result.expected) == {
            hashlib.md5(b"xk").hexdigest(),
            hashlib.md5(b"kx").hexdigest(),
        }


class TestFailures:
    """Tests for failure classification."""

    @pytest.mark.parametrize("header", [None, ""])
    def test_missing_header(self, verifier, header):
        """Test absent or empty header."""
        result = verifier.verify(SECRET, BODY, header)
        assert result.status == VerificationStatus.MISSING_SIGNATURE
        assert result.error == "Missing OpenPayU signature header"

    @pytest.mark.parametrize("header", ["algorithm=SHA256", "sender=checkout", "signature=;algorithm=SHA256"])
    def test_malformed_header(self, verifier, header):
        """Test header without a signature value."""
        result = verifier.verify(SECRET, BODY, header)
        assert result.status == VerificationStatus.MALFORMED_HEADER
        assert not result

    def test_unsupported_algorithm(self, verifier):
        """Test an algorithm hashlib does not know."""
        result = verifier.verify(SECRET, BODY, "signature=abc;algorithm=ROT13")
        assert result.status == VerificationStatus.UNSUPPORTED_ALGORITHM
        assert "rot13" in result.error

    def test_mismatch_names_algorithm(self, verifier):
        """Test mismatch message."""
        result = verifier.verify(SECRET, BODY, "signature=invalid_signature;algorithm=SHA256")
        assert result.status == VerificationStatus.SIGNATURE_MISMATCH
        assert "Signature verification failed" in result.error
        assert "sha256" in result.error


class TestConstantTimeCompare:
    """Tests for constant_time_compare."""

    def test_equal(self):
        assert constant_time_compare("abc123", "abc123") is True

    def test_length_mismatch(self):
        assert constant_time_compare("abc", "abcd") is False

    def test_symmetric(self):
        """Test swapping arguments never changes the verdict."""
        pairs = [("abc", "abc"), ("abc", "abd"), ("abc", "ab"), ("", ""), ("ä", "a")]
        for a, b in pairs:
            assert constant_time_compare(a, b) == constant_time_compare(b, a)


class TestSigningHelpers:
    """Tests for compute_signature and build_signature_header."""

    def test_compute_sha256(self):
        assert compute_signature(SECRET, BODY) == hmac_hex("sha256")

    def test_compute_md5_uses_body_then_key(self):
        assert compute_signature("k", b"x", "MD5") == hashlib.md5(b"xk").hexdigest()

    def test_build_header_round_trips(self):
        """Test a built header verifies."""
        header = build_signature_header(SECRET, BODY, "sha512")
        assert header.endswith(";algorithm=SHA512")
        assert SignatureVerifier().verify(SECRET, BODY, header)
