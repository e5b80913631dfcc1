"""FHIR primitive types shared by all generated modules.

Each name is a pydantic-ready alias used in the generated TypedDict
annotations. Values are checked strictly: JSON strings never coerce into
numbers or booleans, and numbers never coerce into strings.
"""

# pylint: disable=invalid-name,redefined-builtin

from __future__ import annotations

from typing import Annotated

from pydantic import Field, Strict, StrictBool, StrictFloat, StrictInt, StringConstraints

_YEAR = r"([0-9]([0-9]([0-9][1-9]|[1-9]0)|[1-9]00)|[1-9]000)"
_MONTH = r"(0[1-9]|1[0-2])"
_DAY = r"(0[1-9]|[1-2][0-9]|3[0-1])"
_TIME = r"([01][0-9]|2[0-3]):[0-5][0-9]:([0-5][0-9]|60)(\.[0-9]+)?"
_ZONE = r"(Z|(\+|-)((0[0-9]|1[0-3]):[0-5][0-9]|14:00))"

INT32_MIN = -2_147_483_648
INT32_MAX = 2_147_483_647


def _matching(pattern: str) -> StringConstraints:
    """Strict string constraint matching the whole value against a FHIR value regex."""
    return StringConstraints(strict=True, pattern=f"^(?:{pattern})$")


boolean = StrictBool
integer = Annotated[int, Strict(), Field(ge=INT32_MIN, le=INT32_MAX)]
integer64 = Annotated[str, _matching(r"[0]|[-+]?[1-9][0-9]*")]
decimal = StrictInt | StrictFloat
unsignedInt = Annotated[int, Strict(), Field(ge=0, le=INT32_MAX)]
positiveInt = Annotated[int, Strict(), Field(ge=1, le=INT32_MAX)]

string = Annotated[str, _matching(r"[ \r\n\t\S]+")]
markdown = Annotated[str, _matching(r"\s*(\S|\s)*")]
xhtml = Annotated[str, Strict()]
uri = Annotated[str, _matching(r"\S*")]
url = Annotated[str, _matching(r"\S*")]
canonical = Annotated[str, _matching(r"\S*")]
code = Annotated[str, _matching(r"[^\s]+( [^\s]+)*")]
id = Annotated[str, _matching(r"[A-Za-z0-9\-\.]{1,64}")]
oid = Annotated[str, _matching(r"urn:oid:[0-2](\.(0|[1-9][0-9]*))+")]
uuid = Annotated[
    str,
    _matching(r"urn:uuid:[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"),
]
base64Binary = Annotated[str, _matching(r"(\s*([0-9a-zA-Z\+/=]){4}\s*)+")]

date = Annotated[str, _matching(rf"{_YEAR}(-{_MONTH}(-{_DAY})?)?")]
dateTime = Annotated[str, _matching(rf"{_YEAR}(-{_MONTH}(-{_DAY}(T{_TIME}{_ZONE})?)?)?")]
instant = Annotated[str, _matching(rf"{_YEAR}-{_MONTH}-{_DAY}T{_TIME}{_ZONE}")]
time = Annotated[str, _matching(_TIME)]
