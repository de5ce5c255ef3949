"""The acting user, as vouched for by the auth collaborator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    CUSTOMER = "customer"
    DELIVERY = "delivery"
    ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    id: str
    role: Role

    @staticmethod
    def customer(user_id: str) -> Principal:
        return Principal(id=user_id, role=Role.CUSTOMER)

    @staticmethod
    def delivery(user_id: str) -> Principal:
        return Principal(id=user_id, role=Role.DELIVERY)

    @staticmethod
    def admin(user_id: str) -> Principal:
        return Principal(id=user_id, role=Role.ADMIN)
