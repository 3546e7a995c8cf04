import uuid
from dataclasses import dataclass

from quezi_core.core.application.cqrs import CommandDTO, Requester
from quezi_core.core.application.dtos.review_dto import CreateReviewDTO, UpdateReviewDTO


@dataclass(frozen=True)
class CreateReviewCommand(CommandDTO):
    payload: CreateReviewDTO
    requester: Requester


@dataclass(frozen=True)
class UpdateReviewCommand(CommandDTO):
    review_id: uuid.UUID
    payload: UpdateReviewDTO
    requester: Requester


@dataclass(frozen=True)
class DeleteReviewCommand(CommandDTO):
    review_id: uuid.UUID
    requester: Requester
