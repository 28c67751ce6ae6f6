"""Tests for the error taxonomy"""

import pytest

from catapult_client.runtime.errors import (
    CatapultError,
    ErrorCode,
    InvalidNameError,
    InvalidStatementError,
    MalformedPayloadError,
    NoApplicableBindingError,
    ResolutionError,
    UnknownReceiptTypeError,
    UnresolvedAliasNotFoundError,
)


class TestErrorTaxonomy:
    @pytest.mark.parametrize("error_cls, code", [
        (InvalidNameError, ErrorCode.INVALID_NAME),
        (MalformedPayloadError, ErrorCode.MALFORMED_PAYLOAD),
        (UnknownReceiptTypeError, ErrorCode.UNKNOWN_RECEIPT_TYPE),
        (InvalidStatementError, ErrorCode.INVALID_STATEMENT),
        (UnresolvedAliasNotFoundError, ErrorCode.ALIAS_NOT_FOUND),
        (NoApplicableBindingError, ErrorCode.NO_APPLICABLE_BINDING),
    ])
    def test_codes(self, error_cls, code):
        error = error_cls("boom")
        assert isinstance(error, CatapultError)
        assert error.code == code
        assert error.message == "boom"

    def test_resolution_errors_share_a_base(self):
        assert issubclass(UnresolvedAliasNotFoundError, ResolutionError)
        assert issubclass(NoApplicableBindingError, ResolutionError)
        assert not issubclass(MalformedPayloadError, ResolutionError)

    def test_codec_errors_are_not_value_errors(self):
        """pydantic must not swallow them into a ValidationError"""
        assert not issubclass(InvalidNameError, ValueError)
        assert not issubclass(MalformedPayloadError, ValueError)


class TestErrorRendering:
    def test_str_includes_details_and_cause(self):
        cause = ValueError("inner")
        error = MalformedPayloadError("Bad size", details={"offset": 4}, cause=cause)
        text = str(error)
        assert text.startswith("[MALFORMED_PAYLOAD] Bad size")
        assert "{'offset': 4}" in text
        assert "Caused by: inner" in text

    def test_plain_str(self):
        assert str(InvalidNameError("Bad name")) == "[INVALID_NAME] Bad name"

    def test_to_dict(self):
        error = NoApplicableBindingError("Too early", details={"source": (0, 0)})
        assert error.to_dict() == {
            "code": ErrorCode.NO_APPLICABLE_BINDING.value,
            "message": "Too early",
            "details": {"source": (0, 0)},
        }
        assert "details" not in CatapultError("x").to_dict()
