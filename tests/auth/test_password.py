from bloodbank.auth.password import hash_password, verify_password


def test_hash_password_is_salted_per_call() -> None:
    first = hash_password('secret123', rounds=4)
    second = hash_password('secret123', rounds=4)

    assert first != second
    assert verify_password('secret123', first)
    assert verify_password('secret123', second)


def test_hash_password_never_returns_plaintext() -> None:
    digest = hash_password('secret123', rounds=4)

    assert 'secret123' not in digest
    assert digest.startswith('$2')


def test_hash_password_uses_requested_cost() -> None:
    digest = hash_password('secret123', rounds=5)

    assert digest.split('$')[2] == '05'


def test_verify_password_rejects_wrong_password() -> None:
    digest = hash_password('secret123', rounds=4)

    assert verify_password('wrong', digest) is False


def test_verify_password_returns_false_for_malformed_digest() -> None:
    assert verify_password('secret123', 'not-a-bcrypt-digest') is False
