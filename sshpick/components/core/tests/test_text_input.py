from sshpick.components.core.text_input import MemoryField


def test_unfocused_field_ignores_keys():
    field = MemoryField("Username")
    assert field.handle_key("a", "a") is False
    assert field.value() == ""


def test_typing_and_backspace():
    field = MemoryField()
    field.focus()
    for ch in "abc":
        assert field.handle_key(ch, ch)
    assert field.handle_key("backspace")
    assert field.value() == "ab"


def test_non_printable_keys_are_not_handled():
    field = MemoryField()
    field.focus()
    assert field.handle_key("ctrl+x") is False
    assert field.handle_key("tab", "\t") is False
    assert field.value() == ""


def test_set_value_keeps_placeholder():
    field = MemoryField("Port (default 22)")
    field.set_value("2222")
    field.set_value("")
    assert field.value() == ""
    assert field.placeholder == "Port (default 22)"
