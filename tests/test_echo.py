import pytest

from supbot.plugins.echo import EchoPlugin, reverse
from supbot.sdk.types import Input, MessageInfo

NAME = "Test User"
SENDER = "test@example.com"


def _request(message, is_group=False):
    return Input(
        message=message,
        sender=SENDER,
        info=MessageInfo(id="msg-1", timestamp=1234567890, push_name=NAME, is_group=is_group),
    )


@pytest.fixture
def plugin():
    return EchoPlugin()


def test_reverse_round_trip():
    for text in ["", "a", "héllo wörld", "🎲 dice"]:
        assert reverse(reverse(text)) == text
        assert len(reverse(text)) == len(text)
    assert reverse("abc") == "cba"


@pytest.mark.parametrize("message", ["", "   ", "\t\n"])
def test_empty_message(plugin, message):
    out = plugin.handle_message(_request(message))
    assert not out.success
    assert out.error == "Please provide a message to echo. Usage: .sup echo <message>"


@pytest.mark.parametrize("message", ["reverse", "REVERSE", "  Reverse  "])
def test_reverse_command(plugin, message):
    out = plugin.handle_message(_request(message))
    assert out.success
    assert out.reply == f"🔄 {reverse(NAME)}"


def test_upper_command(plugin):
    assert plugin.handle_message(_request("upper")).reply == "📢 TEST USER"


def test_lower_command(plugin):
    assert plugin.handle_message(_request("Lower")).reply == "🔇 test user"


def test_default_echo_private(plugin):
    out = plugin.handle_message(_request("  hello world  "))
    assert out.success
    assert out.reply == f"🔊 Echo from {NAME}: hello world"


def test_default_echo_group(plugin):
    out = plugin.handle_message(_request("hello world", is_group=True))
    assert out.reply == f"📢 Echo from {NAME}: hello world"


@pytest.mark.parametrize(
    "is_group, chat_type", [(False, "private chat"), (True, "group chat")]
)
def test_info_command(plugin, is_group, chat_type):
    out = plugin.handle_message(_request("info", is_group=is_group))
    lines = out.reply.split("\n")
    assert lines[0] == "ℹ️ Message Info:"
    assert lines[1:] == [
        f"👤 Sender: {NAME}",
        f"💬 Chat Type: {chat_type}",
        "🆔 Message ID: msg-1",
        "⏰ Timestamp: 1234567890",
        f"📧 JID: {SENDER}",
    ]


def test_metadata(plugin):
    assert plugin.name() == "echo"
    assert plugin.topics() == ["echo"]
    assert plugin.version() == "0.1.0"
    assert plugin.get_required_env_vars() == []
    help_out = plugin.get_help()
    assert help_out.usage == ".sup echo <message|command>"
    assert help_out.examples[0] == ".sup echo hello world"
    assert help_out.category == "utility"