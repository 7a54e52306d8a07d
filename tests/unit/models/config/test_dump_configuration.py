"""Unit tests checking ability to dump configuration."""

import json

from models.config import (
    Configuration,
    CORSConfiguration,
    HistoryConfiguration,
    ProviderConfiguration,
    RouterConfiguration,
    ServiceConfiguration,
    SQLiteDatabaseConfiguration,
)


def test_dump_configuration(tmp_path) -> None:
    """
    Test that the Configuration object can be serialized to a JSON file and
    that the resulting file contains all expected sections and values.

    API keys are never written in plain text.
    """
    cfg = Configuration(
        name="test_name",
        service=ServiceConfiguration(
            cors=CORSConfiguration(
                allow_origins=["foo_origin", "bar_origin"],
                allow_credentials=False,
            ),
        ),
        providers=[
            ProviderConfiguration(
                id="huggingface",
                url="https://router.huggingface.co/v1/chat/completions",
                api_key="hf_secret",
                auth_required=True,
                models=["Qwen/Qwen3-Coder-480B-A35B-Instruct"],
            )
        ],
        router=RouterConfiguration(attempt_timeout=20, max_attempts=2),
        history=HistoryConfiguration(
            storage="sqlite",
            sqlite=SQLiteDatabaseConfiguration(db_path=str(tmp_path / "h.db")),
        ),
    )
    assert cfg is not None
    dump_file = tmp_path / "test.json"
    cfg.dump(dump_file)

    with open(dump_file, "r", encoding="utf-8") as fin:
        content = json.load(fin)
        # content should be loaded
        assert content is not None

        # all sections must exists
        for section in (
            "name",
            "service",
            "providers",
            "router",
            "context",
            "generation_cache",
            "history",
            "customization",
        ):
            assert section in content

        assert content["name"] == "test_name"
        assert content["service"]["cors"]["allow_origins"] == [
            "foo_origin",
            "bar_origin",
        ]
        assert content["providers"][0]["id"] == "huggingface"
        assert content["providers"][0]["api_key"] == "**********"
        assert content["router"]["attempt_timeout"] == 20.0
        assert content["router"]["max_attempts"] == 2
        assert content["history"]["storage"] == "sqlite"
        assert content["customization"] is None

    assert "hf_secret" not in dump_file.read_text(encoding="utf-8")
