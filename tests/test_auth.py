import pytest

from lendtrack.core import auth

def test_bearer_token_parsing():
    assert auth.bearer_token("Bearer abc123") == "abc123"
    assert auth.bearer_token("Bearer   abc123  ") == "abc123"
    assert auth.bearer_token("Bearer ") is None
    assert auth.bearer_token("bearer abc123") is None
    assert auth.bearer_token("Token abc123") is None
    assert auth.bearer_token(None) is None

@pytest.mark.parametrize("header, expected", [
    ("Bearer s3cret", True),
    ("Bearer s3cret2", False),
    ("Bearer S3CRET", False),
    ("s3cret", False),
    (None, False),
])
def test_verify_bearer_token(header, expected):
    assert auth.verify_bearer_token(header, "s3cret") is expected
