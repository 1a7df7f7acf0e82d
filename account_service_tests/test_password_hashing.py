from account_service.auth import PasswordHasher

hasher = PasswordHasher(rounds=1000)


def test_hash_is_not_plaintext_and_verifies():
    hashed = hasher.hash("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert hashed.startswith("$pbkdf2-sha256$1000$")
    assert hasher.verify("s3cret-pass", hashed) is True


def test_same_password_hashes_differently():
    first = hasher.hash("same-password")
    second = hasher.hash("same-password")
    assert first != second
    assert hasher.verify("same-password", first)
    assert hasher.verify("same-password", second)


def test_mismatch_is_false_not_error():
    hashed = hasher.hash("right-password")
    assert hasher.verify("wrong-password", hashed) is False


def test_malformed_or_empty_hash_is_false():
    assert hasher.verify("anything", "not-a-real-hash") is False
    assert hasher.verify("anything", "") is False
    assert hasher.verify("", hasher.hash("x" * 8)) is False


def test_rounds_are_tunable():
    strong = PasswordHasher(rounds=5000)
    assert strong.hash("pw123456").startswith("$pbkdf2-sha256$5000$")


def test_dummy_verify_runs():
    hasher.dummy_verify()
