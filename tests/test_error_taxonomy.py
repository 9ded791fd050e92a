import pytest

from helpbridge.error_codes import (
    ErrorCode,
    HttpError,
    MissingEndpoint,
    NoConnectivity,
    SubmissionError,
    SubmissionFailed,
    SubmissionResult,
    Timeout,
    TransportError,
)


def test_variants_compare_by_payload() -> None:
    assert HttpError(500) == HttpError(500)
    assert HttpError(500) != HttpError(404)
    assert TransportError("boom") == TransportError("boom")
    assert TransportError("boom") != TransportError("other")
    assert NoConnectivity() == NoConnectivity()
    assert NoConnectivity() != Timeout()
    assert len({Timeout(), Timeout(), HttpError(404)}) == 2


@pytest.mark.parametrize(
    "error, code",
    [
        (MissingEndpoint(), ErrorCode.MISSING_ENDPOINT),
        (TransportError("x"), ErrorCode.TRANSPORT),
        (HttpError(503), ErrorCode.HTTP),
        (NoConnectivity(), ErrorCode.NO_CONNECTIVITY),
        (Timeout(), ErrorCode.TIMEOUT),
        (SubmissionFailed(), ErrorCode.SUBMISSION_FAILED),
    ],
)
def test_every_variant_is_a_submission_error(error: SubmissionError, code: str) -> None:
    assert isinstance(error, SubmissionError)
    assert error.error_code == code
    assert str(error)


def test_http_error_keeps_status() -> None:
    error = HttpError(404)
    assert error.status_code == 404
    assert "404" in str(error)
    assert repr(error) == "HttpError(404)"


def test_result_raise_for_error() -> None:
    SubmissionResult.success().raise_for_error()

    result = SubmissionResult.failure(Timeout())
    assert result.ok is False
    with pytest.raises(Timeout):
        result.raise_for_error()
