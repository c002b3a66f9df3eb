"""Tests for resource capabilities."""

import json
import pytest
from mcpserve.resources import FunctionResource, Resource
from mcpserve.testing import invoke_resource


class StaticResource(Resource):
    name = "motd"
    description = "Message of the day"

    async def read(self):
        return "Have a nice day"


class TestResource:
    """Test the Resource base class."""

    def test_defaults(self):
        """Test default MIME type."""
        assert StaticResource().mime_type == "text/plain"

    def test_to_dict(self):
        """Test listing entry."""
        assert StaticResource().to_dict("text://motd") == {
            "uri": "text://motd",
            "name": "motd",
            "description": "Message of the day",
            "mimeType": "text/plain",
        }

    @pytest.mark.asyncio
    async def test_invoke_resource(self):
        """Test reading a resource directly."""
        assert await invoke_resource(StaticResource()) == "Have a nice day"


class TestFunctionResource:
    """Test FunctionResource class."""

    def test_basic_resource_creation(self):
        """Test creating a basic resource."""
        def get_data() -> str:
            """Get some data."""
            return "data"

        resource = FunctionResource(get_data)
        assert resource.name == "get_data"
        assert resource.description == "Get some data."
        assert resource.mime_type == "text/plain"

    def test_custom_options(self):
        """Test resource with custom name, description and MIME type."""
        resource = FunctionResource.from_function(
            lambda: "{}",
            name="settings",
            description="App settings",
            mime_type="application/json",
        )
        assert resource.name == "settings"
        assert resource.description == "App settings"
        assert resource.mime_type == "application/json"

    @pytest.mark.asyncio
    async def test_read_string(self):
        """Test string content is returned unchanged."""
        resource = FunctionResource(lambda: "plain text")
        assert await resource.read() == "plain text"

    @pytest.mark.asyncio
    async def test_read_dict(self):
        """Test dict content is returned as JSON text."""
        def config() -> dict:
            return {"version": "1.0", "debug": False}

        text = await FunctionResource(config).read()
        assert json.loads(text) == {"version": "1.0", "debug": False}

    @pytest.mark.asyncio
    async def test_read_async(self):
        """Test coroutine functions are awaited."""
        async def status() -> str:
            return "up"

        assert await FunctionResource(status).read() == "up"

    @pytest.mark.asyncio
    async def test_read_other_types(self):
        """Test other values are converted with str()."""
        assert await FunctionResource(lambda: 42).read() == "42"

    @pytest.mark.asyncio
    async def test_read_propagates_errors(self):
        """Test exceptions from the function reach the caller."""
        def broken():
            raise IOError("file not found")

        with pytest.raises(IOError, match="file not found"):
            await FunctionResource(broken).read()

    def test_repr(self):
        """Test string representation."""
        def data():
            pass

        assert repr(FunctionResource(data, mime_type="text/csv")) == (
            "FunctionResource(name='data', mime_type='text/csv')"
        )
