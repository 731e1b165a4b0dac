from __future__ import annotations

from datetime import date as calendar_date
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    def flipped(self) -> "SortDirection":
        return SortDirection.ASC if self is SortDirection.DESC else SortDirection.DESC


class OrderStatus(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    PREPAYMENT = "prepayment"


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class RestaurantRef(WireModel):
    id: int
    name: str = ""


class User(WireModel):
    id: int
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    role: str | None = None
    status: str | None = None
    created_at: str | None = Field(default=None, alias="createdAt")
    email: str | None = None
    phonenumber: int | str | None = None
    is_super_user: bool = Field(default=False, alias="isSuperUser")
    valid_until: str | None = Field(default=None, alias="validUntil")
    restaurants: List[RestaurantRef] = Field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def find_restaurant(self, restaurant_id: int) -> RestaurantRef | None:
        return next((item for item in self.restaurants if item.id == restaurant_id), None)


class Restaurant(WireModel):
    id: int
    name: str
    slug: str | None = None
    address: str | None = None
    phonenumber: int | str | None = None
    description: str | None = None
    image: str | None = None
    created_at: str | None = Field(default=None, alias="createdAt")
    user: User | None = None

    @property
    def admin_name(self) -> str:
        return self.user.full_name if self.user else ""


class Order(WireModel):
    id: int
    full_name: str = Field(default="", alias="fullName")
    phonenumber: int | str | None = None
    date: str
    order_type_name: str | None = Field(default=None, alias="orderTypeName")
    chair_count: int | None = Field(default=None, alias="chairCount")
    price: float | None = None
    discount: float = 0
    total_payment: float | None = Field(default=None, alias="totalPayment")
    status: str | None = None
    offsite: bool = False
    note: str | None = None
    comment: str | None = None
    restaurant_id: int | None = Field(default=None, alias="restaurantId")

    @property
    def order_date(self) -> calendar_date:
        return calendar_date.fromisoformat(self.date[:10])


class LoginResponse(WireModel):
    token: str
    user: User
