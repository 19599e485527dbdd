import json

import pytest

from supbot.sdk.runtime import (
    Host,
    HostError,
    PluginContext,
    PluginRunner,
    Storage,
)
from supbot.sdk.types import Input, MessageInfo, Output, Plugin, error, new_help_output, success


class SamplePlugin(Plugin):
    def name(self):
        return "test-plugin"

    def topics(self):
        return ["test", "echo", "greet"]

    def handle_message(self, request):
        message = request.message.strip().lower()
        if message.startswith("echo "):
            return success("Echo: " + message[len("echo "):])
        if message in ("hello", "hi"):
            return success(f"Hello {request.info.push_name}! Nice to meet you.")
        if message == "error":
            return error("This is a test error")
        if message == "info":
            kind = "group message" if request.info.is_group else "direct message"
            return success(
                f"Message ID: {request.info.id}, From: {request.info.push_name} "
                f"({request.sender}), Type: {kind}"
            )
        return success("I received your message: " + request.message)

    def get_help(self):
        return new_help_output(
            "test-plugin",
            "A test plugin for integration testing",
            "Send 'hello', 'echo <text>', 'error', 'info', or 'help'",
            ["hello - Get a greeting", "echo hello world - Echo back 'hello world'"],
            "testing",
        )

    def get_required_env_vars(self):
        return ["TEST_ENV_VAR"]

    def version(self):
        return "1.0.0"


class FakeHost(Host):
    def __init__(self, files=None, dirs=None, send_code=0):
        self.files = files or {}
        self.dirs = dirs or {}
        self.send_code = send_code
        self.sent = []
        self.cache = {}
        self.store = {}

    def read_file(self, path):
        return self.files.get(path, b"")

    def send_image(self, payload):
        self.sent.append(json.loads(payload))
        return self.send_code

    def list_directory(self, path):
        if path not in self.dirs:
            return json.dumps({"success": False, "error": "not a directory"}).encode()
        return json.dumps({"success": True, "files": self.dirs[path]}).encode()

    def _lookup(self, table, key, missing):
        if key not in table:
            return json.dumps({"success": False, "error": missing}).encode()
        return json.dumps({"success": True, "data": table[key]}).encode()

    def get_cache(self, key):
        return self._lookup(self.cache, key, "cache not found")

    def set_cache(self, payload):
        item = json.loads(payload)
        self.cache[item["key"]] = item["value"]
        return 0

    def get_store(self, key):
        return self._lookup(self.store, key, "key not found")

    def set_store(self, payload):
        item = json.loads(payload)
        self.store[item["key"]] = item["value"]
        return 0


class FailingHost(FakeHost):
    def set_store(self, payload):
        return 3

    def set_cache(self, payload):
        return 4

    def get_store(self, key):
        return b""


@pytest.fixture
def runner():
    return PluginRunner(SamplePlugin())


def test_get_name(runner):
    assert runner.call("get_name") == (0, b"test-plugin")


def test_get_version(runner):
    assert runner.call("get_version").output == b"1.0.0"


def test_get_topics(runner):
    assert json.loads(runner.call("get_topics").output) == ["test", "echo", "greet"]


def test_get_help(runner):
    data = json.loads(runner.call("get_help").output)
    assert data["name"] == "test-plugin"
    assert data["category"] == "testing"
    assert len(data["examples"]) > 0


def test_get_required_env_vars(runner):
    assert json.loads(runner.call("get_required_env_vars").output) == ["TEST_ENV_VAR"]


def _request(message, msg_id, timestamp, is_group):
    return Input(
        message=message,
        sender="test@example.com",
        info=MessageInfo(id=msg_id, timestamp=timestamp, push_name="Test User", is_group=is_group),
    )


@pytest.mark.parametrize(
    "request_input, expect_success, expected_reply, reply_contains",
    [
        (_request("hello", "msg-123", 1640995200, False), True, "", "Hello Test User"),
        (_request("echo world", "msg-124", 1640995201, False), True, "Echo: world", ""),
        (_request("error", "msg-125", 1640995202, False), False, "", ""),
        (_request("info", "msg-126", 1640995203, True), True, "", "Message ID: msg-126"),
    ],
)
def test_handle_message(runner, request_input, expect_success, expected_reply, reply_contains):
    code, output = runner.call("handle_message", json.dumps(request_input.to_dict()))
    result = Output.from_dict(json.loads(output))
    assert code == 0
    assert result.success is expect_success
    if expected_reply:
        assert result.reply == expected_reply
    assert reply_contains in result.reply


def test_handle_message_invalid_json(runner):
    code, output = runner.handle_message(b"{not json")
    result = json.loads(output)
    assert code == 1
    assert result["success"] is False
    assert result["error"].startswith("Failed to parse input:")


def test_unregistered_plugin():
    empty = PluginRunner(None)
    code, output = empty.handle_message(b"{}")
    assert code == 1
    assert json.loads(output)["success"] is False
    assert empty.get_name().code == 1
    assert "error" in json.loads(empty.get_topics().output)


def test_unknown_function(runner):
    with pytest.raises(ValueError):
        runner.call("no_such_function")


def test_storage_round_trip():
    storage = PluginContext(FakeHost()).storage()
    storage.set("alpha", b"42")
    assert storage.get("alpha") == b"42"


def test_storage_missing_key():
    with pytest.raises(HostError, match="store get failed: key not found"):
        Storage(FakeHost()).get("missing")


def test_storage_empty_response():
    with pytest.raises(HostError, match="failed to get store value for key k"):
        Storage(FailingHost()).get("k")


def test_storage_set_failure():
    with pytest.raises(HostError, match="error code: 3"):
        Storage(FailingHost()).set("k", "v")


def test_cache_round_trip_and_miss():
    context = PluginContext(FakeHost())
    context.set_cache("greeting", "hola")
    assert context.get_cache("greeting") == b"hola"
    with pytest.raises(HostError, match="cache get failed: cache not found"):
        context.get_cache("other")


def test_cache_set_failure():
    with pytest.raises(HostError, match="error code: 4"):
        PluginContext(FailingHost()).set_cache("k", b"v")


def test_read_file():
    context = PluginContext(FakeHost(files={"a.txt": b"content"}))
    assert context.read_file("a.txt") == b"content"
    with pytest.raises(HostError, match="failed to read file b.txt"):
        context.read_file("b.txt")


def test_send_image_payload():
    host = FakeHost()
    PluginContext(host).send_image("test@example.com", "pics/cat.png")
    assert host.sent == [{"recipient": "test@example.com", "image_path": "pics/cat.png"}]


def test_send_image_failure():
    with pytest.raises(HostError, match="error code: 2"):
        PluginContext(FakeHost(send_code=2)).send_image("test@example.com", "x.png")


def test_list_directory():
    context = PluginContext(FakeHost(dirs={".": ["a.png", "sub"]}))
    assert context.list_directory(".") == ["a.png", "sub"]
    with pytest.raises(HostError, match="directory listing failed: not a directory"):
        context.list_directory("a.png")