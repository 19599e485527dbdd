import json
from datetime import datetime, timedelta, timezone

from supbot.registry.types import Index, Plugin, PluginInfo, Version


def _index():
    return Index(
        version="1.0.0",
        updated_at=datetime(2024, 3, 1, 12, 30, 15, 250000, tzinfo=timezone.utc),
        plugins={
            "test-plugin": Plugin(
                name="test-plugin",
                description="A test plugin",
                author="Test Author",
                home_url="https://example.com/plugin",
                category="test",
                tags=["test", "example"],
                latest="1.0.0",
                versions={
                    "1.0.0": Version(
                        version="1.0.0",
                        release_date=datetime(2024, 2, 1, tzinfo=timezone.utc),
                        sha256="abcd1234",
                        size=1024,
                    )
                },
            )
        },
    )


def test_index_json_round_trip():
    index = _index()
    restored = Index.from_dict(json.loads(json.dumps(index.to_dict())))
    assert restored == index


def test_version_round_trip_with_min_version():
    v = Version(version="2.0.0", sha256="ff", size=7, min_sup_version="0.5.0")
    assert Version.from_dict(v.to_dict()) == v
    assert v.to_dict()["min_sup_version"] == "0.5.0"


def test_min_version_omitted_when_empty():
    assert "min_sup_version" not in Version(version="1").to_dict()


def test_zero_time_format():
    assert Version().to_dict()["release_date"] == "0001-01-01T00:00:00Z"


def test_fraction_trimmed():
    data = _index().to_dict()
    assert data["updated_at"].endswith(":15.25Z")


def test_offset_kept():
    tz = timezone(timedelta(hours=2))
    v = Version(release_date=datetime(2024, 1, 1, 10, 0, tzinfo=tz))
    text = v.to_dict()["release_date"]
    assert text.endswith("+02:00")
    assert Version.from_dict({"release_date": text}).release_date == v.release_date


def test_parse_nanoseconds():
    v = Version.from_dict({"release_date": "2024-05-06T07:08:09.123456789Z"})
    assert v.release_date == datetime(2024, 5, 6, 7, 8, 9, 123456, tzinfo=timezone.utc)


def test_plugin_missing_fields_default():
    p = Plugin.from_dict({"name": "x", "tags": None, "versions": None})
    assert p.name == "x"
    assert p.tags == []
    assert p.versions == {}
    assert p.latest == ""


def test_index_keys_match_json_names():
    data = _index().to_dict()
    assert set(data) == {"version", "updated_at", "plugins"}
    assert set(data["plugins"]["test-plugin"]) == {
        "name", "description", "author", "home_url",
        "category", "tags", "versions", "latest",
    }


def test_plugin_info_defaults():
    info = PluginInfo(name="echo", version="0.1.0")
    assert info.installed is False
    assert info.available is False
    assert info.tags == []