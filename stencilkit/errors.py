"""Exceptions raised while loading, parsing and rendering templates."""

from __future__ import annotations

import json


def _debug_list(items: list[str]) -> str:
    return "[" + ", ".join(json.dumps(item, ensure_ascii=False) for item in items) + "]"


class TemplateError(Exception):
    """Base error for everything the template engine reports.

    Used directly for generic errors; an optional ``source`` becomes the
    exception's cause.
    """

    def __init__(self, message: str, source: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = str(message)
        if source is not None:
            self.__cause__ = source

    @property
    def source(self) -> BaseException | None:
        """The underlying error, if any."""
        return self.__cause__

    def __str__(self) -> str:
        return self.message


class CircularExtendError(TemplateError):
    """A loop was found while walking up the inheritance chain."""

    def __init__(self, tpl: str, inheritance_chain: list[str]) -> None:
        self.tpl = str(tpl)
        self.inheritance_chain = list(inheritance_chain)
        super().__init__(
            f"Circular extend detected for template '{self.tpl}'. "
            f"Inheritance chain: `{_debug_list(self.inheritance_chain)}`"
        )


class MissingParentError(TemplateError):
    """A template extends a template that is not loaded."""

    def __init__(self, current: str, parent: str) -> None:
        self.current = str(current)
        self.parent = str(parent)
        super().__init__(
            f"Template '{self.current}' is inheriting from '{self.parent}', "
            "which doesn't exist or isn't loaded."
        )


class TemplateNotFoundError(TemplateError):
    """A template could not be found."""

    def __init__(self, name: str) -> None:
        self.name = str(name)
        super().__init__(f"Template '{self.name}' not found")


class FilterNotFoundError(TemplateError):
    """A filter could not be found."""

    def __init__(self, name: str) -> None:
        self.name = str(name)
        super().__init__(f"Filter '{self.name}' not found")


class TestNotFoundError(TemplateError):
    """A test could not be found."""

    __test__ = False

    def __init__(self, name: str) -> None:
        self.name = str(name)
        super().__init__(f"Test '{self.name}' not found")


class FunctionNotFoundError(TemplateError):
    """A global function could not be found."""

    def __init__(self, name: str) -> None:
        self.name = str(name)
        super().__init__(f"Function '{self.name}' not found")


class InvalidMacroDefinitionError(TemplateError):
    """A macro was defined somewhere it is not allowed."""

    def __init__(self, info: str) -> None:
        self.info = str(info)
        super().__init__(f"Invalid macro definition: `{self.info}`")


class JsonError(TemplateError):
    """Serializing or deserializing JSON data failed."""

    def __init__(self, error: BaseException) -> None:
        self.error = error
        super().__init__(str(error))


class CallFunctionError(TemplateError):
    """A global function raised an error."""

    def __init__(self, name: str, source: BaseException | None = None) -> None:
        self.name = str(name)
        super().__init__(f"Function call '{self.name}' failed", source)


class CallFilterError(TemplateError):
    """A filter raised an error."""

    def __init__(self, name: str, source: BaseException | None = None) -> None:
        self.name = str(name)
        super().__init__(f"Filter call '{self.name}' failed", source)


class CallTestError(TemplateError):
    """A test raised an error."""

    def __init__(self, name: str, source: BaseException | None = None) -> None:
        self.name = str(name)
        super().__init__(f"Test call '{self.name}' failed", source)


class OutputError(TemplateError):
    """Writing rendered output failed."""

    def __init__(self, error: OSError) -> None:
        self.error = error
        self.kind = type(error).__name__
        super().__init__(
            f"Io error while writing rendered value to output: {self.kind}", error
        )


class Utf8ConversionError(TemplateError):
    """Rendered bytes could not be decoded as UTF-8."""

    def __init__(self, context: str, source: BaseException | None = None) -> None:
        self.context = str(context)
        super().__init__(
            "UTF-8 conversion error occured while rendering template: " + self.context,
            source,
        )