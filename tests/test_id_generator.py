"""
Tests for random ID generation.
"""
from tinyapp.services.id_generator import (
    ALPHABET,
    generate_random_string,
    generate_token,
    generate_unique_id,
)


class TestGenerateRandomString:
    """Test the plain random generator"""

    def test_alphabet_has_62_characters(self):
        """Test the alphabet is a-z, A-Z, 0-9 with no duplicates"""
        assert len(ALPHABET) == 62
        assert len(set(ALPHABET)) == 62
        assert ALPHABET.isalnum()

    def test_generates_exact_length(self):
        """Test that every requested length is honored"""
        for length in (1, 6, 8, 32):
            assert len(generate_random_string(length)) == length

    def test_zero_length(self):
        assert generate_random_string(0) == ""

    def test_only_alphanumeric_characters(self):
        """Test output stays inside the 62-character alphabet"""
        for _ in range(200):
            code = generate_random_string(6)
            assert set(code) <= set(ALPHABET)

    def test_output_varies(self):
        """Test that repeated calls don't return one fixed value"""
        codes = {generate_random_string(6) for _ in range(50)}
        assert len(codes) > 1


class TestGenerateToken:
    """Test the secrets-backed generator used for visitor tokens"""

    def test_length_and_alphabet(self):
        token = generate_token(8)
        assert len(token) == 8
        assert set(token) <= set(ALPHABET)


class TestGenerateUniqueId:
    """Test the collision-checked loop"""

    def test_returns_first_free_candidate(self):
        """Test that taken candidates are skipped until a free one comes up"""
        candidates = iter(["aaaaaa", "bbbbbb", "cccccc"])
        taken = {"aaaaaa", "bbbbbb"}

        result = generate_unique_id(
            6,
            is_taken=lambda key: key in taken,
            generator=lambda length: next(candidates)
        )

        assert result == "cccccc"

    def test_no_retry_when_free(self):
        """Test a free first candidate is used immediately"""
        calls = []

        def generator(length):
            calls.append(length)
            return "x" * length

        result = generate_unique_id(6, is_taken=lambda key: False, generator=generator)

        assert result == "xxxxxx"
        assert calls == [6]

    def test_default_generator(self):
        """Test the default generator produces an unused key of the right length"""
        existing = {"abc123"}
        result = generate_unique_id(6, is_taken=existing.__contains__)
        assert len(result) == 6
        assert result not in existing
