from brane.utils import token_crypto


def test_generated_values_have_configured_length():
    assert len(token_crypto.generate_token()) == token_crypto.TOKEN_LENGTH
    assert len(token_crypto.generate_secret()) == token_crypto.SECRET_LENGTH
    assert token_crypto.generate_token() != token_crypto.generate_token()


def test_encode_and_decode():
    raw = token_crypto.random_bytes(24)
    encoded = token_crypto.encode(raw)
    assert "+" not in encoded and "/" not in encoded
    assert token_crypto.decode(encoded) == raw


def test_decode_rejects_malformed_input():
    assert token_crypto.decode("") is None
    assert token_crypto.decode("not base64!!") is None
    assert token_crypto.decode("abc") is None
    assert token_crypto.decode("ünïcode") is None


def test_digest_is_stable_hex():
    raw = b"some bytes"
    assert token_crypto.digest(raw) == token_crypto.digest(raw)
    assert len(token_crypto.digest(raw)) == 64
    assert token_crypto.digests_match(token_crypto.digest(raw), token_crypto.digest(raw))
    assert not token_crypto.digests_match(token_crypto.digest(raw), token_crypto.digest(b"other"))


def test_hash_and_verify_password():
    encoded = token_crypto.hash_password("s3cr3t-Value")
    assert encoded.startswith("$argon2id$")
    assert token_crypto.verify_password("s3cr3t-Value", encoded) is True
    assert token_crypto.verify_password("wrong", encoded) is False
    assert token_crypto.verify_password("", encoded) is False


def test_password_hashes_are_salted():
    assert token_crypto.hash_password("same") != token_crypto.hash_password("same")


def test_verify_without_hash_is_a_plain_mismatch():
    assert token_crypto.verify_password("anything", None) is False
    assert token_crypto.verify_password("brane-dummy-password", None) is False
    assert token_crypto.verify_password("anything", "not-a-hash") is False
