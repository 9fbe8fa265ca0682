"""Unit tests for portal.core.security: password policy, bcrypt hashing, session ids."""

import unittest

from portal.core.security import (
    _dummy_hash,
    burn_password_check,
    generate_session_token,
    hash_password,
    hash_session_token,
    normalize_email,
    password_policy_error,
    verify_password,
    warm_password_checks,
)


class TestPasswordPolicy(unittest.TestCase):
    """password_policy_error returns None for acceptable passwords, a reason otherwise."""

    def test_accepts_letter_number_special(self) -> None:
        self.assertIsNone(password_policy_error("Str0ng!Pass"))

    def test_rejects_short(self) -> None:
        self.assertIn("8-128", password_policy_error("S0!a"))

    def test_rejects_too_long(self) -> None:
        self.assertIsNotNone(password_policy_error("a1!" * 50))

    def test_rejects_more_than_72_utf8_bytes(self) -> None:
        self.assertIsNone(password_policy_error("a" * 70 + "1!"))
        problem = password_policy_error("a" * 70 + "1!" + "é")
        self.assertEqual(problem, "Password must be at most 72 bytes when UTF-8 encoded.")

    def test_rejects_missing_digit(self) -> None:
        self.assertEqual(password_policy_error("NoDigits!!"), "Password must include a number.")

    def test_rejects_missing_letter(self) -> None:
        self.assertEqual(password_policy_error("12345678!"), "Password must include a letter.")

    def test_rejects_missing_special(self) -> None:
        self.assertEqual(
            password_policy_error("Letters123"),
            "Password must include a special character.",
        )


class TestPasswordHashing(unittest.TestCase):
    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("Str0ng!Pass", rounds=4)
        self.assertNotIn("Str0ng!Pass", hashed)
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("Str0ng!Pass", hashed))
        self.assertFalse(verify_password("Wr0ng!Pass", hashed))

    def test_same_password_gets_different_salts(self) -> None:
        self.assertNotEqual(hash_password("Str0ng!Pass", rounds=4), hash_password("Str0ng!Pass", rounds=4))

    def test_verify_rejects_malformed_hash(self) -> None:
        self.assertFalse(verify_password("Str0ng!Pass", "not-a-bcrypt-hash"))

    def test_extra_bytes_past_72_do_not_match_a_shorter_password(self) -> None:
        hashed = hash_password("a" * 72, rounds=4)
        self.assertTrue(verify_password("a" * 72, hashed))
        self.assertFalse(verify_password("a" * 72 + "1!", hashed))

    def test_hash_refuses_passwords_bcrypt_would_truncate(self) -> None:
        with self.assertRaises(ValueError):
            hash_password("a" * 72 + "1!", rounds=4)

    def test_warm_password_checks_builds_the_dummy_hash(self) -> None:
        _dummy_hash.cache_clear()
        warm_password_checks()
        self.assertEqual(_dummy_hash.cache_info().currsize, 1)
        burn_password_check("anything")
        self.assertEqual(_dummy_hash.cache_info().misses, 1)

    def test_burn_password_check_returns_none(self) -> None:
        self.assertIsNone(burn_password_check("anything"))


class TestSessionTokens(unittest.TestCase):
    def test_tokens_are_unique_and_long(self) -> None:
        tokens = {generate_session_token() for _ in range(50)}
        self.assertEqual(len(tokens), 50)
        for token in tokens:
            self.assertGreaterEqual(len(token), 43)

    def test_hash_is_stable_sha256_hex(self) -> None:
        digest = hash_session_token("abc")
        self.assertEqual(digest, hash_session_token("abc"))
        self.assertEqual(len(digest), 64)
        self.assertNotEqual(digest, "abc")

    def test_normalize_email(self) -> None:
        self.assertEqual(normalize_email("  Alice@Example.COM "), "alice@example.com")


if __name__ == "__main__":
    unittest.main()
