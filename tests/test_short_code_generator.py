"""
Tests for short code generation.
"""
import threading

import pytest

from shortlinks.exceptions import GenerationExhaustedError
from shortlinks.services.short_code_generator import ShortCodeGenerator


class TestShortCodeGenerator:
    """Test the random generator and its outstanding-code set"""

    def test_generates_correct_length(self, generator):
        """Test that codes have the requested length"""
        for length in (1, 6, 8, 12):
            assert len(generator.generate(length)) == length

    def test_uses_base62_alphabet(self, generator):
        """Test that codes only contain alphanumeric characters"""
        code = generator.generate(32)
        assert code.isalnum()
        assert all(c in ShortCodeGenerator.BASE62_CHARS for c in code)

    def test_generated_code_is_in_use(self, generator):
        code = generator.generate(8)
        assert generator.is_in_use(code)
        assert not generator.is_in_use("never-issued")

    def test_release_frees_code(self, generator):
        code = generator.generate(8)
        generator.release(code)
        assert not generator.is_in_use(code)
        assert generator.outstanding_count == 0

    def test_release_unknown_code_is_noop(self, generator):
        generator.release("unknown")
        assert generator.outstanding_count == 0

    def test_codes_are_unique(self, generator):
        """Test that 1000 codes drawn from a small keyspace never repeat"""
        codes = {generator.generate(3) for _ in range(1000)}
        assert len(codes) == 1000
        assert generator.outstanding_count == 1000

    def test_exhausted_keyspace_raises(self):
        """Test that a saturated keyspace fails instead of looping forever"""
        generator = ShortCodeGenerator(alphabet="a", max_attempts=100)

        assert generator.generate(1) == "a"
        with pytest.raises(GenerationExhaustedError) as exc_info:
            generator.generate(1)

        assert exc_info.value.attempts == 100
        assert exc_info.value.length == 1

    def test_released_code_can_be_reissued(self):
        generator = ShortCodeGenerator(alphabet="a")
        code = generator.generate(1)
        generator.release(code)
        assert generator.generate(1) == code

    def test_rejects_invalid_arguments(self, generator):
        with pytest.raises(ValueError):
            generator.generate(0)
        with pytest.raises(ValueError):
            ShortCodeGenerator(alphabet="")
        with pytest.raises(ValueError):
            ShortCodeGenerator(max_attempts=0)

    def test_concurrent_generation_stays_unique(self):
        """Test uniqueness when many threads generate at once"""
        generator = ShortCodeGenerator()
        results = []
        lock = threading.Lock()

        def worker():
            local = [generator.generate(4) for _ in range(200)]
            with lock:
                results.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 1600
        assert len(set(results)) == 1600
        assert generator.outstanding_count == 1600
