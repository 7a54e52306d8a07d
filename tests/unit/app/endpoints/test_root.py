"""Unit tests for the / endpoint handler."""

from app.endpoints.root import root_endpoint_handler


def test_root_endpoint() -> None:
    """Test the root endpoint handler."""
    response = root_endpoint_handler()
    assert response is not None
    assert response.status_code == 200
    assert "AnyCoder service" in response.body.decode()
