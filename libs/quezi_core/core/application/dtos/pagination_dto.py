from pydantic import BaseModel, Field

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class PaginationParamsDTO(BaseModel):
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)


class RankingParamsDTO(BaseModel):
    """Rankings (mais bem avaliados, mais populares) usam só `limit`."""
    limit: int = Field(default=10, ge=1, le=50)
