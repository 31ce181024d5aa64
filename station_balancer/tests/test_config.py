"""
Tests for environment-driven configuration.
"""

import pytest
from station_balancer.config import (
    DEFAULT_MAX_ITERATIONS,
    get_cors_origins,
    get_default_max_iterations,
)


class TestMaxIterations:
    """Test BALANCER_MAX_ITERATIONS handling."""

    def test_unset_uses_default(self, monkeypatch):
        monkeypatch.delenv("BALANCER_MAX_ITERATIONS", raising=False)
        assert get_default_max_iterations() == DEFAULT_MAX_ITERATIONS == 10

    def test_reads_env(self, monkeypatch):
        monkeypatch.setenv("BALANCER_MAX_ITERATIONS", " 25 ")
        assert get_default_max_iterations() == 25

    @pytest.mark.parametrize("raw", ["0", "-3", "many"])
    def test_invalid_values_raise(self, monkeypatch, raw):
        monkeypatch.setenv("BALANCER_MAX_ITERATIONS", raw)
        with pytest.raises(RuntimeError, match="BALANCER_MAX_ITERATIONS"):
            get_default_max_iterations()


class TestCorsOrigins:
    """Test BACKEND_CORS_ORIGINS handling."""

    def test_default_allows_all(self, monkeypatch):
        monkeypatch.delenv("BACKEND_CORS_ORIGINS", raising=False)
        assert get_cors_origins() == ["*"]

    def test_comma_separated(self, monkeypatch):
        monkeypatch.setenv("BACKEND_CORS_ORIGINS", "http://localhost:3000, https://lab.example.org,")
        assert get_cors_origins() == ["http://localhost:3000", "https://lab.example.org"]
