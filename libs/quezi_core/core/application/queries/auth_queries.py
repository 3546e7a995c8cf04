from dataclasses import dataclass


@dataclass(frozen=True)
class VerifyResetTokenQuery:
    token: str
