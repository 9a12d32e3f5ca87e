"""Category Service Types — validated, authorized inputs for category procedures."""

from dataclasses import dataclass

from taskboard.core.domain_types import AccountId, UserId, CategoryId


@dataclass(frozen=True)
class CategoryCreateRequest:
    id_account: AccountId
    id_user: UserId
    name: str
    color: str
    description: str
    id_category_parent: CategoryId | None


@dataclass(frozen=True)
class CategoryListRequest:
    id_account: AccountId
    id_user: UserId
    status: int | None
    include_archived: bool


@dataclass(frozen=True)
class CategoryGetRequest:
    id_account: AccountId
    id_category: CategoryId


@dataclass(frozen=True)
class CategoryUpdateRequest:
    id_account: AccountId
    id_category: CategoryId
    name: str
    color: str
    description: str
    id_category_parent: CategoryId | None
    order: int


@dataclass(frozen=True)
class CategoryDeleteRequest:
    id_account: AccountId
    id_category: CategoryId
    id_category_target: CategoryId | None
    delete_tasks: bool


@dataclass(frozen=True)
class CategoryArchiveRequest:
    id_account: AccountId
    id_category: CategoryId
    archive: bool


@dataclass(frozen=True)
class CategoryOrder:
    id_category: CategoryId
    order: int


@dataclass(frozen=True)
class CategoryReorderRequest:
    id_account: AccountId
    order_data: list[CategoryOrder]
