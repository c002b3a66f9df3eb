"""Tests for identifier validation."""

import pytest
from mcpserve.validation import (
    validate_prompt_name,
    validate_resource_uri,
    validate_tool_name,
)


class TestToolName:
    """Test validate_tool_name."""

    @pytest.mark.parametrize("name", [
        "getUser",
        "DATA_EXPORT_v2",
        "admin.tools.list",
        "a",
        "with-hyphen",
        "a" * 128,
    ])
    def test_valid_names(self, name):
        """Test names made of the allowed characters."""
        assert validate_tool_name(name) is None

    def test_empty_name(self):
        """Test empty name has its own message."""
        assert validate_tool_name("") == "Tool name cannot be empty"

    def test_too_long(self):
        """Test names over 128 characters."""
        error = validate_tool_name("a" * 129)
        assert "exceeds maximum length of 128 characters" in error

    @pytest.mark.parametrize("name,char", [
        ("invalid name", " "),
        ("invalid,name", ","),
        ("invalid@name", "@"),
        ("tab\tname", "\t"),
        ("slash/name", "/"),
    ])
    def test_invalid_characters(self, name, char):
        """Test the offending character and the name are reported."""
        error = validate_tool_name(name)
        assert error is not None
        assert f"'{name}'" in error
        assert f"invalid character '{char}'" in error

    @pytest.mark.parametrize("name", ["tëst", "测试", "naïve", "café", "emoji😀"])
    def test_unicode_rejected(self, name):
        """Test that any non-ASCII character is rejected."""
        assert validate_tool_name(name) is not None

    def test_non_string(self):
        """Test non-string input yields an error instead of raising."""
        assert validate_tool_name(None) == "Tool name must be a string"
        assert validate_tool_name(42) is not None

    def test_deterministic(self):
        """Test validation gives the same answer every time."""
        for name in ["ok_name", "bad name", "", "x" * 200]:
            assert validate_tool_name(name) == validate_tool_name(name)


class TestPromptName:
    """Test validate_prompt_name."""

    def test_same_rules_as_tools(self):
        """Test prompt names follow tool name rules."""
        assert validate_prompt_name("summarize_text") is None
        assert validate_prompt_name("CODE_GEN_v1") is None
        assert validate_prompt_name("admin.prompts.list") is None
        assert validate_prompt_name("invalid name") is not None
        assert validate_prompt_name("invalid,name") is not None
        assert validate_prompt_name("a" * 129) is not None

    def test_messages_name_prompt(self):
        """Test messages refer to prompts."""
        assert validate_prompt_name("") == "Prompt name cannot be empty"


class TestResourceUri:
    """Test validate_resource_uri."""

    @pytest.mark.parametrize("uri", [
        "file:///path/to/file",
        "http://example.com/data",
        "https://api.example.com/resource",
        "test://resource",
        "custom+scheme://path",
        "a.b-c://x",
        "data://ünïcode/path",
    ])
    def test_valid_uris(self, uri):
        """Test well-formed URIs."""
        assert validate_resource_uri(uri) is None

    def test_empty(self):
        """Test empty URI."""
        assert validate_resource_uri("") == "Resource URI cannot be empty"

    def test_missing_separator(self):
        """Test URI without scheme separator."""
        assert "missing scheme" in validate_resource_uri("invalid-uri")

    def test_empty_scheme(self):
        """Test URI with empty scheme."""
        assert "empty scheme" in validate_resource_uri("://path")

    def test_invalid_scheme(self):
        """Test scheme with a forbidden character."""
        error = validate_resource_uri("invalid@scheme://path")
        assert "invalid scheme 'invalid@scheme'" in error

    def test_non_ascii_scheme(self):
        """Test scheme characters must be ASCII."""
        assert validate_resource_uri("schémé://path") is not None

    def test_empty_path(self):
        """Test URI with nothing after the separator."""
        assert "empty path" in validate_resource_uri("file://")

    def test_too_long(self):
        """Test URIs over 2048 characters."""
        error = validate_resource_uri("a" * 2049)
        assert "exceeds maximum length of 2048 characters" in error

    def test_length_counts_code_points(self):
        """Test multi-byte characters count once each."""
        prefix = "test://"
        uri = prefix + "é" * (2048 - len(prefix))
        assert len(uri.encode("utf-8")) > 2048
        assert validate_resource_uri(uri) is None
        assert validate_resource_uri(uri + "é") is not None

    def test_distinct_messages(self):
        """Test each violation has its own message."""
        errors = {
            validate_resource_uri(uri)
            for uri in ["", "a" * 2049, "no-separator", "://x", "b@d://x", "ok://"]
        }
        assert len(errors) == 6
