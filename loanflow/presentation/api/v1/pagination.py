"""Query-string pagination shared by list endpoints."""

from typing import Annotated

from fastapi import Depends, Query

from loanflow.application.dto import Page, PageRequest
from loanflow.core.config import settings
from loanflow.presentation.schemas import PaginationSchema


def get_page_request(
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    limit: Annotated[
        int,
        Query(ge=1, le=settings.max_page_size, description="Items per page"),
    ] = settings.default_page_size,
) -> PageRequest:
    return PageRequest(page=page, limit=limit)


PageParams = Annotated[PageRequest, Depends(get_page_request)]


def pagination_of(page: Page) -> PaginationSchema:
    return PaginationSchema.from_page(page)
