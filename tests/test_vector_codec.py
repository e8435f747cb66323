# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-11
# Description: test_vector_codec.py
# -----------------------------------------------------------------------------
import numpy as np
import pytest

from codec.VectorCodec import VectorCodec
from core.errors import MalformedVectorError


@pytest.fixture
def codec() -> VectorCodec:
    return VectorCodec()


def test_decode_bracketed_vector(codec):
    vec = codec.decode("[0.5,-1.25,3]")
    assert isinstance(vec, np.ndarray)
    assert vec.tolist() == [0.5, -1.25, 3.0]


def test_decode_tolerates_whitespace(codec):
    assert codec.decode("  [ 1.0, 2.0 ,3e-2 ]\n").tolist() == [1.0, 2.0, 0.03]


def test_round_trip_preserves_values(codec):
    original = [0.1, -0.000123456789, 1e-12, 12345.678, -1.0, 0.0]
    decoded = codec.decode(codec.encode(original))
    np.testing.assert_allclose(decoded, original, rtol=0, atol=0)


def test_encode_numpy_input(codec):
    assert codec.encode(np.array([1.0, 0.5], dtype=np.float32)) == "[1.0,0.5]"


@pytest.mark.parametrize(
    "raw",
    [
        "[1,a,3]",
        "[]",
        "[   ]",
        "",
        "1,2,3",
        "[1,2,3",
        "[1,,2]",
        "[nan,1]",
        "[1,inf]",
    ],
)
def test_decode_rejects_malformed(codec, raw):
    with pytest.raises(MalformedVectorError):
        codec.decode(raw)


def test_decode_rejects_non_string(codec):
    with pytest.raises(MalformedVectorError):
        codec.decode(None)  # type: ignore[arg-type]


def test_malformed_error_keeps_raw_value(codec):
    with pytest.raises(MalformedVectorError) as exc:
        codec.decode("[1,a,3]")
    assert exc.value.raw == "[1,a,3]"
    assert "Token 1" in str(exc.value)
