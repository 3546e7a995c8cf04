import uuid

from pydantic import BaseModel, Field, field_validator, model_validator

COMMENT_MAX_LENGTH = 1000


def _check_rating(value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError("Nota deve ser um número inteiro")
    if not 1 <= value <= 5:
        raise ValueError("Nota deve estar entre 1 e 5")
    return value


class CreateReviewDTO(BaseModel):
    appointment_id: uuid.UUID
    rating: int
    comment: str | None = Field(default=None, max_length=COMMENT_MAX_LENGTH)

    @field_validator("rating", mode="before")
    @classmethod
    def check_rating(cls, v):
        return _check_rating(v)


class UpdateReviewDTO(BaseModel):
    rating: int | None = None
    comment: str | None = Field(default=None, max_length=COMMENT_MAX_LENGTH)

    @field_validator("rating", mode="before")
    @classmethod
    def check_rating(cls, v):
        return None if v is None else _check_rating(v)

    @model_validator(mode="after")
    def not_empty(self):
        if self.rating is None and self.comment is None:
            raise ValueError("Informe a nota ou o comentário")
        return self


class ReviewFilterDTO(BaseModel):
    professional_id: uuid.UUID | None = None
    reviewer_id: uuid.UUID | None = None
    min_rating: int | None = Field(default=None, ge=1, le=5)
    max_rating: int | None = Field(default=None, ge=1, le=5)

    @model_validator(mode="after")
    def rating_range(self):
        if self.min_rating and self.max_rating and self.min_rating > self.max_rating:
            raise ValueError("Nota mínima não pode ser maior que a máxima")
        return self
