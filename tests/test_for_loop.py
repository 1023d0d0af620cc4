import pytest

from stencilkit.errors import TemplateError
from stencilkit.for_loop import ForLoop, ForLoopKind, ForLoopState


def test_that_iterating_on_string_yields_grapheme_clusters():
    text = "a\u0310e\u0301o\u0308\u0332"
    string_loop = ForLoop.from_string("whatever", text)
    assert string_loop.current_value() == text[0:2]
    string_loop.increment()
    assert string_loop.current_value() == text[2:4]
    string_loop.increment()
    assert string_loop.current_value() == text[4:]


def test_string_len_counts_code_points():
    text = "a\u0310e\u0301o\u0308\u0332"
    assert len(ForLoop.from_string("c", text)) == 7


def test_array_loop_values_and_len():
    loop = ForLoop.from_array("item", [1, "two", [3]])
    assert len(loop) == 3
    assert loop.kind is ForLoopKind.VALUE
    assert not loop.is_key_value()
    assert loop.current_value() == 1
    loop.increment()
    assert loop.current_value() == "two"
    loop.increment()
    assert loop.current_value() == [3]


def test_array_loop_has_no_key():
    loop = ForLoop.from_array("item", [1])
    with pytest.raises(TemplateError):
        loop.current_key()
    assert loop.is_key("item") is False


def test_object_loop_yields_sorted_pairs():
    loop = ForLoop.from_object("k", "v", {"b": 2, "a": 1, "c": 3})
    assert loop.is_key_value()
    assert len(loop) == 3
    assert (loop.current_key(), loop.current_value()) == ("a", 1)
    loop.increment()
    assert (loop.current_key(), loop.current_value()) == ("b", 2)
    loop.increment()
    assert (loop.current_key(), loop.current_value()) == ("c", 3)


def test_is_key():
    loop = ForLoop.from_object("k", "v", {"a": 1})
    assert loop.is_key("k") is True
    assert loop.is_key("v") is False


def test_state_transitions():
    loop = ForLoop.from_array("i", [1, 2])
    assert loop.state is ForLoopState.NORMAL
    loop.continue_loop()
    assert loop.state is ForLoopState.CONTINUE
    loop.increment()
    assert loop.state is ForLoopState.NORMAL
    assert loop.current == 1
    loop.break_loop()
    assert loop.state is ForLoopState.BREAK


@pytest.mark.parametrize(
    "factory",
    [
        lambda: ForLoop.from_array("i", "text"),
        lambda: ForLoop.from_string("i", [1]),
        lambda: ForLoop.from_object("k", "v", [1]),
    ],
)
def test_wrong_container_type_raises(factory):
    with pytest.raises(TemplateError):
        factory()


def test_out_of_range_raises():
    loop = ForLoop.from_array("i", [])
    with pytest.raises(IndexError):
        loop.current_value()