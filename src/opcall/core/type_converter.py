"""Conversion of raw command-line text into typed values.

Command-line arguments always arrive as strings.  The
:class:`TypeConverter` turns each one into the type its
:class:`~opcall.core.models.Parameter` declares:

* ``integer`` / ``number`` / ``boolean``: trimmed scalar literals.
* ``binary``: a :class:`~opcall.core.models.FileReference`, never read.
* ``*Array``: comma separated items, each converted on its own.
* ``object``: ``key.path=value`` clauses separated by semicolons.
* anything else: the raw text, unchanged.

Separators can be escaped with a backslash (``a\\,b`` is the single item
``a,b``).  Every function here is pure; failures raise
:class:`~opcall.exceptions.ConversionError`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from opcall.core.models import FileReference, Parameter, ParameterType, TypedValue
from opcall.exceptions import ConversionError

_ESCAPE = "\\"

_ARRAY_SEPARATOR = ","
_ASSIGNMENT_SEPARATOR = ";"
_KEY_VALUE_SEPARATOR = "="
_KEY_PATH_SEPARATOR = "."


# ---------------------------------------------------------------------------
# Escape-aware splitting
# ---------------------------------------------------------------------------

def split_escaped(text: str, separator: str, maxsplit: int = -1) -> list[str]:
    """Split *text* on every unescaped *separator*.

    A backslash makes the following character literal and is itself
    dropped; two backslashes yield one literal backslash.  When
    *maxsplit* is non-negative, at most that many splits happen and
    later separators are kept as text.

    A trailing empty item is not returned, so ``""`` splits into ``[]``
    and ``"a,"`` into ``["a"]``.

    >>> split_escaped("a\\\\,b,c", ",")
    ['a,b', 'c']
    """
    result: list[str] = []
    item: list[str] = []
    escaping = False
    for char in text:
        if escaping:
            escaping = False
            item.append(char)
        elif char == _ESCAPE:
            escaping = True
        elif char == separator and maxsplit != len(result):
            result.append("".join(item))
            item = []
        else:
            item.append(char)
    if item:
        result.append("".join(item))
    return result


# ---------------------------------------------------------------------------
# Converter
# ---------------------------------------------------------------------------

class TypeConverter:
    """Stateless converter from raw argument text to typed values.

    Usage::

        converter = TypeConverter()
        converter.convert("1,2,3", Parameter("ids", "integerArray"))
        # -> [1, 2, 3]
    """

    def convert(self, value: str, parameter: Parameter) -> TypedValue:
        """Convert *value* to the type declared by *parameter*.

        Raises
        ------
        ConversionError
            If *value* is not a valid literal of the declared type, or an
            object key is assigned twice.
        """
        declared_type = (
            parameter.type.value
            if isinstance(parameter.type, ParameterType)
            else parameter.type
        )
        converter = self._CONVERTERS.get(declared_type)
        if converter is None:
            return value
        return converter(self, value, parameter)

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    @staticmethod
    def _scalar_error(value: str, parameter: Parameter, type_name: str) -> ConversionError:
        return ConversionError(
            f"Cannot convert '{parameter.name}' value '{value}' to {type_name}",
            parameter_name=parameter.name,
            value=value,
        )

    def _convert_to_integer(self, value: str, parameter: Parameter) -> int:
        trimmed = value.strip()
        digits = trimmed[1:] if trimmed[:1] in ("+", "-") else trimmed
        if not (digits.isascii() and digits.isdigit()):
            raise self._scalar_error(value, parameter, "integer")
        return int(trimmed)

    def _convert_to_number(self, value: str, parameter: Parameter) -> float:
        trimmed = value.strip()
        # float() accepts digit-group underscores; plain literals do not.
        if not trimmed.isascii() or "_" in trimmed:
            raise self._scalar_error(value, parameter, "number")
        try:
            return float(trimmed)
        except ValueError as exc:
            raise self._scalar_error(value, parameter, "number") from exc

    def _convert_to_boolean(self, value: str, parameter: Parameter) -> bool:
        trimmed = value.strip().lower()
        if trimmed == "true":
            return True
        if trimmed == "false":
            return False
        raise self._scalar_error(value, parameter, "boolean")

    def _convert_to_binary(self, value: str, parameter: Parameter) -> FileReference:
        return FileReference(value)

    # ------------------------------------------------------------------
    # Arrays
    # ------------------------------------------------------------------

    def _convert_items(
        self,
        value: str,
        parameter: Parameter,
        type_name: str,
        convert_item: Callable[[str, Parameter], Any],
    ) -> list[Any]:
        """Convert every comma-separated item or fail as a whole."""
        result: list[Any] = []
        for item in split_escaped(value, _ARRAY_SEPARATOR):
            try:
                result.append(convert_item(item, parameter))
            except ConversionError as exc:
                raise ConversionError(
                    f"Cannot convert '{parameter.name}' values '{value}' to {type_name} array",
                    parameter_name=parameter.name,
                    value=value,
                ) from exc
        return result

    def _convert_to_string_array(self, value: str, parameter: Parameter) -> list[str]:
        return split_escaped(value, _ARRAY_SEPARATOR)

    def _convert_to_integer_array(self, value: str, parameter: Parameter) -> list[int]:
        return self._convert_items(value, parameter, "integer", self._convert_to_integer)

    def _convert_to_number_array(self, value: str, parameter: Parameter) -> list[float]:
        return self._convert_items(value, parameter, "number", self._convert_to_number)

    def _convert_to_boolean_array(self, value: str, parameter: Parameter) -> list[bool]:
        return self._convert_items(value, parameter, "boolean", self._convert_to_boolean)

    def _convert_to_object_array(
        self, value: str, parameter: Parameter
    ) -> list[dict[str, TypedValue]]:
        return self._convert_items(value, parameter, "object", self._convert_to_object)

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def _convert_to_object(self, value: str, parameter: Parameter) -> dict[str, TypedValue]:
        """Build a nested mapping from ``a.b=1;a.c=2`` style clauses."""
        obj: dict[str, TypedValue] = {}
        for assignment in split_escaped(value, _ASSIGNMENT_SEPARATOR):
            key_value = split_escaped(assignment, _KEY_VALUE_SEPARATOR, maxsplit=1)
            key_path = key_value[0] if key_value else ""
            clause_value = key_value[1] if len(key_value) > 1 else ""
            keys = split_escaped(key_path, _KEY_PATH_SEPARATOR)
            self._assign(obj, keys, clause_value, parameter)
        return obj

    def _assign(
        self,
        obj: dict[str, TypedValue],
        keys: list[str],
        value: str,
        parameter: Parameter,
    ) -> None:
        """Assign *value* at *keys* inside *obj*, walking the schema alongside.

        Only the terminal key may not be assigned twice; intermediate
        keys are shared between clauses.
        """
        current = obj
        current_parameter: Parameter | None = parameter
        for index, key in enumerate(keys):
            current_parameter = (
                current_parameter.find(key) if current_parameter is not None else None
            )
            if index == len(keys) - 1:
                if key in current:
                    raise self._duplicate_key_error(value, parameter, key)
                current[key] = self._try_convert(value, current_parameter)
                return

            nested = current.setdefault(key, {})
            if not isinstance(nested, dict):
                raise self._duplicate_key_error(value, parameter, key)
            current = nested

    @staticmethod
    def _duplicate_key_error(value: str, parameter: Parameter, key: str) -> ConversionError:
        return ConversionError(
            f"Cannot convert '{parameter.name}' value because object key '{key}' "
            "is already defined",
            parameter_name=parameter.name,
            value=value,
        )

    def _try_convert(self, value: str, parameter: Parameter | None) -> TypedValue:
        """Convert against *parameter* when the schema knows the key."""
        if parameter is None:
            return value
        return self.convert(value, parameter)

    # Unlisted declared types convert as raw text.
    _CONVERTERS: dict[str, Callable[[TypeConverter, str, Parameter], Any]] = {
        ParameterType.INTEGER.value: _convert_to_integer,
        ParameterType.NUMBER.value: _convert_to_number,
        ParameterType.BOOLEAN.value: _convert_to_boolean,
        ParameterType.BINARY.value: _convert_to_binary,
        ParameterType.OBJECT.value: _convert_to_object,
        ParameterType.STRING_ARRAY.value: _convert_to_string_array,
        ParameterType.INTEGER_ARRAY.value: _convert_to_integer_array,
        ParameterType.NUMBER_ARRAY.value: _convert_to_number_array,
        ParameterType.BOOLEAN_ARRAY.value: _convert_to_boolean_array,
        ParameterType.OBJECT_ARRAY.value: _convert_to_object_array,
    }
