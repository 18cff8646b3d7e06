"""Shared list-response schemas."""

from pydantic import BaseModel, Field

from loanflow.application.dto import Page


class PaginationSchema(BaseModel):
    page: int = Field(..., ge=1, examples=[1])
    limit: int = Field(..., ge=1, examples=[10])
    total: int = Field(..., ge=0, examples=[42])
    pages: int = Field(..., ge=0, examples=[5])

    @classmethod
    def from_page(cls, page: Page) -> "PaginationSchema":
        return cls(page=page.page, limit=page.limit, total=page.total, pages=page.pages)


class MessageSchema(BaseModel):
    message: str
