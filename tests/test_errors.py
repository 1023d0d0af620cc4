import pytest

from stencilkit import errors


def test_generic_message():
    err = errors.TemplateError("something broke")
    assert str(err) == "something broke"
    assert err.source is None


def test_error_chain_keeps_source():
    cause = ValueError("inner")
    err = errors.TemplateError("outer", cause)
    assert err.source is cause
    assert err.__cause__ is cause


def test_circular_extend_message():
    err = errors.CircularExtendError("a", ["b", "a"])
    assert str(err) == (
        "Circular extend detected for template 'a'. Inheritance chain: `[\"b\", \"a\"]`"
    )
    assert err.inheritance_chain == ["b", "a"]


def test_missing_parent_message():
    err = errors.MissingParentError("child", "base")
    assert str(err) == (
        "Template 'child' is inheriting from 'base', which doesn't exist or isn't loaded."
    )


@pytest.mark.parametrize(
    "cls, expected",
    [
        (errors.TemplateNotFoundError, "Template 'x' not found"),
        (errors.FilterNotFoundError, "Filter 'x' not found"),
        (errors.TestNotFoundError, "Test 'x' not found"),
        (errors.FunctionNotFoundError, "Function 'x' not found"),
        (errors.InvalidMacroDefinitionError, "Invalid macro definition: `x`"),
    ],
)
def test_not_found_messages(cls, expected):
    assert str(cls("x")) == expected


@pytest.mark.parametrize(
    "cls, expected",
    [
        (errors.CallFunctionError, "Function call 'x' failed"),
        (errors.CallFilterError, "Filter call 'x' failed"),
        (errors.CallTestError, "Test call 'x' failed"),
    ],
)
def test_call_errors_wrap_source(cls, expected):
    cause = RuntimeError("boom")
    err = cls("x", cause)
    assert str(err) == expected
    assert err.source is cause


def test_output_error():
    cause = BrokenPipeError("pipe")
    err = errors.OutputError(cause)
    assert str(err) == "Io error while writing rendered value to output: BrokenPipeError"
    assert err.source is cause


def test_utf8_conversion_error():
    err = errors.Utf8ConversionError("converting rendered buffer to string")
    assert str(err) == (
        "UTF-8 conversion error occured while rendering template: "
        "converting rendered buffer to string"
    )


def test_json_error_uses_inner_message():
    inner = ValueError("bad json")
    assert str(errors.JsonError(inner)) == "bad json"


def test_all_errors_are_template_errors():
    err = errors.FilterNotFoundError("upper")
    with pytest.raises(errors.TemplateError) as info:
        raise err
    assert info.value is err
    assert str(info.value) == "Filter 'upper' not found"