"""Tests for configuration module."""

import pytest
from datetime import timedelta
from unittest.mock import patch
from mcpserve import config
from mcpserve.config import ServerConfig
from mcpserve.errors import CapabilityKind


class TestServerConfig:
    """Test ServerConfig."""

    def test_defaults(self):
        """Test default timeouts and body limit."""
        cfg = ServerConfig()
        assert cfg.tool_timeout == 30.0
        assert cfg.resource_timeout == 30.0
        assert cfg.prompt_timeout == 30.0
        assert cfg.max_body_size == 10 * 1024 * 1024

    def test_builders_return_copies(self):
        """Test with_* helpers leave the original untouched."""
        base = ServerConfig()
        cfg = (
            base.with_tool_timeout(5)
            .with_resource_timeout(6)
            .with_prompt_timeout(7)
            .with_max_body_size(1024)
        )
        assert (cfg.tool_timeout, cfg.resource_timeout, cfg.prompt_timeout) == (5, 6, 7)
        assert cfg.max_body_size == 1024
        assert base.tool_timeout == 30.0

    def test_timedelta_accepted(self):
        """Test timeouts given as timedelta are stored in seconds."""
        cfg = ServerConfig(tool_timeout=timedelta(milliseconds=1500))
        assert cfg.tool_timeout == 1.5

    @pytest.mark.parametrize("field", ["tool_timeout", "resource_timeout", "prompt_timeout"])
    def test_non_positive_timeout(self, field):
        """Test zero and negative timeouts are rejected."""
        with pytest.raises(ValueError, match=field):
            ServerConfig(**{field: 0})
        with pytest.raises(ValueError):
            ServerConfig(**{field: -1})

    def test_non_positive_body_size(self):
        """Test a zero body limit is rejected."""
        with pytest.raises(ValueError, match="max_body_size"):
            ServerConfig(max_body_size=0)

    def test_timeout_for(self):
        """Test per-kind deadline lookup."""
        cfg = ServerConfig(tool_timeout=1, resource_timeout=2, prompt_timeout=3)
        assert cfg.timeout_for(CapabilityKind.TOOL) == 1
        assert cfg.timeout_for(CapabilityKind.RESOURCE) == 2
        assert cfg.timeout_for(CapabilityKind.PROMPT) == 3


class TestFromEnv:
    """Test ServerConfig.from_env."""

    def test_empty_environment(self):
        """Test unset variables keep defaults."""
        assert ServerConfig.from_env({}) == ServerConfig()

    def test_reads_all_keys(self):
        """Test every variable is read."""
        cfg = ServerConfig.from_env({
            "MCPSERVE_TOOL_TIMEOUT": "1.5",
            "MCPSERVE_RESOURCE_TIMEOUT": "2",
            "MCPSERVE_PROMPT_TIMEOUT": " 3 ",
            "MCPSERVE_MAX_BODY_SIZE": "2048",
        })
        assert cfg == ServerConfig(
            tool_timeout=1.5, resource_timeout=2, prompt_timeout=3, max_body_size=2048
        )

    def test_custom_prefix(self):
        """Test a custom variable prefix."""
        cfg = ServerConfig.from_env({"APP_TOOL_TIMEOUT": "9"}, prefix="APP_")
        assert cfg.tool_timeout == 9.0

    def test_invalid_value(self):
        """Test unparsable values name the offending key."""
        with pytest.raises(ValueError, match="MCPSERVE_MAX_BODY_SIZE"):
            ServerConfig.from_env({"MCPSERVE_MAX_BODY_SIZE": "ten megs"})

    @patch.dict("os.environ", {"MCPSERVE_TOOL_TIMEOUT": "4"}, clear=True)
    def test_process_environment(self):
        """Test os.environ is the default source."""
        assert ServerConfig.from_env().tool_timeout == 4.0


class TestAccessors:
    """Test the get accessor."""

    def test_get(self):
        """Test reading present and missing keys."""
        env = {"KEY": "value"}
        assert config.get("KEY", env) == "value"
        assert config.get("MISSING", env) is None

    @patch.dict("os.environ", {"KEY": "from-process"}, clear=True)
    def test_get_defaults_to_process_environment(self):
        """Test os.environ is read when no mapping is given."""
        assert config.get("KEY") == "from-process"
