"""
Tests for settings validation and cached dependencies.
"""
import pytest
from pydantic import ValidationError

from slugstore_app.config import Settings
from slugstore_app.dependencies import get_prober


class TestSettings:

    @pytest.mark.parametrize("attempts", [0, -3])
    def test_max_slug_attempts_must_be_positive(self, attempts):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_slug_attempts=attempts)

    def test_max_slug_attempts_defaults_to_unbounded(self):
        assert Settings(_env_file=None).max_slug_attempts is None
        assert Settings(_env_file=None, max_slug_attempts=5).max_slug_attempts == 5


class TestReachabilityDependency:

    @pytest.fixture(autouse=True)
    def reset_cache(self):
        get_prober.cache_clear()
        yield
        get_prober.cache_clear()

    def test_reachability_check_is_shared_between_requests(self):
        first = get_prober()
        second = get_prober()

        assert first is second
        assert first.session is second.session
