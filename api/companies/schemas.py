"""
Pydantic schemas for company endpoints.

Name and city are trimmed, length-checked on the trimmed value, then
HTML-escaped. The id is length-checked as submitted.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints

COMPANY_ID_MAX_LENGTH = 6
COMPANY_TEXT_MAX_LENGTH = 25

_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        '"': "&quot;",
        "'": "&#x27;",
        "<": "&lt;",
        ">": "&gt;",
        "/": "&#x2F;",
        "\\": "&#x5C;",
        "`": "&#96;",
    }
)


def escape_html(value: str) -> str:
    return value.translate(_HTML_ESCAPES)


CompanyId = Annotated[
    str,
    StringConstraints(strict=True, min_length=1, max_length=COMPANY_ID_MAX_LENGTH),
]

CompanyText = Annotated[
    str,
    StringConstraints(
        strict=True,
        strip_whitespace=True,
        min_length=1,
        max_length=COMPANY_TEXT_MAX_LENGTH,
    ),
    AfterValidator(escape_html),
]


class _CompanyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateCompanyRequest(_CompanyRequest):
    company_id: CompanyId = Field(..., alias="companyId")
    company_name: CompanyText = Field(..., alias="companyName")
    company_city: CompanyText = Field(..., alias="companyCity")


class UpsertCompanyRequest(_CompanyRequest):
    company_name: CompanyText = Field(..., alias="companyName")
    company_city: CompanyText = Field(..., alias="companyCity")


class PatchCompanyRequest(_CompanyRequest):
    # Both optional here; "at least one" is checked by the service.
    company_name: CompanyText | None = Field(default=None, alias="companyName")
    company_city: CompanyText | None = Field(default=None, alias="companyCity")


class CompanyOut(BaseModel):
    id: str
    name: str
    city: str


class CompanyListResponse(BaseModel):
    companyList: list[CompanyOut]


class MessageResponse(BaseModel):
    message: str
