"""Tests for short code generation."""

import pytest
from shortener.common.validators import is_valid_short_code
from shortener.shortcode import ShortCodeGenerator


class TestShortCodeGenerator:
    """Test short code generation."""

    def test_generate_default_length(self):
        """Codes have the configured length."""
        generator = ShortCodeGenerator()

        code = generator.generate()
        assert len(code) == 7
        assert is_valid_short_code(code)[0]

    def test_generate_custom_length(self):
        """Test random code with custom length."""
        generator = ShortCodeGenerator(default_length=6)

        code = generator.generate(length=10)
        assert len(code) == 10
        assert is_valid_short_code(code)[0]

    def test_generate_is_random(self):
        """Many codes are almost never equal."""
        generator = ShortCodeGenerator()

        codes = {generator.generate() for _ in range(1000)}
        assert len(codes) > 990

    def test_invalid_length(self):
        with pytest.raises(ValueError):
            ShortCodeGenerator(default_length=0)

    def test_codes_use_base62_only(self):
        """Generated codes pass the short code check used by the routes."""
        generator = ShortCodeGenerator(default_length=32)

        for _ in range(200):
            code = generator.generate()
            assert is_valid_short_code(code)[0]
            assert set(code) <= set(ShortCodeGenerator.BASE62_CHARS)
