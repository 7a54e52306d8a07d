"""Unit tests."""

from configuration import configuration  # noqa: F401

config_dict = {
    "name": "test",
    "service": {
        "host": "localhost",
        "port": 8080,
        "workers": 1,
        "color_log": True,
        "access_log": True,
    },
    "providers": [
        {
            "id": "primary",
            "url": "http://primary.example.com/v1/chat/completions",
            "api_key": "primary-key",
            "auth_required": True,
            "models": ["Qwen/Qwen3-Coder-480B-A35B-Instruct"],
        },
    ],
    "history": {
        "max_entries": 50,
        "storage": "noop",
    },
    "customization": None,
}

# NOTE: configuration must be initialized before importing endpoints, the
# FastAPI application reads it during import time
configuration.init_from_dict(config_dict)
