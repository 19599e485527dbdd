import json

from supbot.plugins.hello import HelloPlugin
from supbot.sdk.runtime import PluginRunner
from supbot.sdk.types import Input, MessageInfo


def _request(message, push_name="Test User"):
    return Input(
        message=message,
        sender="test@example.com",
        info=MessageInfo(id="1", timestamp=1234567890, push_name=push_name),
    )


def test_empty_message_greets():
    out = HelloPlugin().handle_message(_request(""))
    assert out.success
    assert out.reply == "Hello Test User! How can I help you?"


def test_message_is_repeated():
    out = HelloPlugin().handle_message(_request("test"))
    assert out.success
    assert out.reply == "Hello Test User! You said: test"


def test_whitespace_is_not_empty():
    out = HelloPlugin().handle_message(_request(" ", push_name="Ann"))
    assert out.reply == "Hello Ann! You said:  "


def test_metadata():
    plugin = HelloPlugin()
    assert plugin.name() == "hello"
    assert plugin.topics() == ["hello"]
    assert plugin.version() == "0.1.0"
    assert plugin.get_required_env_vars() == []
    help_out = plugin.get_help()
    assert help_out.description == "A simple hello world plugin"
    assert help_out.usage == ".sup hello [message]"
    assert help_out.examples == [".sup hello", ".sup hello world"]
    assert help_out.category == "examples"


def test_runner_round_trip():
    runner = PluginRunner(HelloPlugin())
    result = runner.call("handle_message", json.dumps(_request("test").to_dict()))
    assert result.code == 0
    assert json.loads(result.output) == {
        "success": True,
        "reply": "Hello Test User! You said: test",
    }
    assert runner.call("get_version").output == b"0.1.0"