"""RPC handlers for the products microservice.

Each Celery task name is the method pattern callers address.  Payloads
are validated into DTOs, handed to ``ProductService`` and answered with
the envelope produced by ``rpc_handler``.
"""

from __future__ import annotations

from typing import Any, Dict

from celery import shared_task

from modules.core.pagination import PaginationDTO
from modules.products.dtos import (
    CreateProductDTO,
    ProductIdDTO,
    ProductOutputDTO,
    ProductPageDTO,
    UpdateProductDTO,
    ValidateProductsDTO,
)
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService
from shared.infrastructure.rpc import rpc_handler


def _service() -> ProductService:
    return ProductService(repository=ProductDjangoRepository())


def _render(product) -> Dict[str, Any]:
    return ProductOutputDTO.from_entity(product).model_dump(mode="json")


@shared_task(name="create_product", bind=True)
@rpc_handler
def create_product(payload: Dict[str, Any]) -> Dict[str, Any]:
    dto = CreateProductDTO.model_validate(payload)
    return _render(_service().create(dto))


@shared_task(name="find_all_products", bind=True)
@rpc_handler
def find_all_products(payload: Dict[str, Any]) -> Dict[str, Any]:
    pagination = PaginationDTO.model_validate(payload)
    result = _service().find_all(pagination)
    return ProductPageDTO.from_result(result).model_dump(mode="json", by_alias=True)


@shared_task(name="find_one_product", bind=True)
@rpc_handler
def find_one_product(payload: Dict[str, Any]) -> Dict[str, Any]:
    dto = ProductIdDTO.model_validate(payload)
    return _render(_service().find_one(dto.id))


@shared_task(name="update_product", bind=True)
@rpc_handler
def update_product(payload: Dict[str, Any]) -> Dict[str, Any]:
    dto = UpdateProductDTO.model_validate(payload)
    return _render(_service().update(dto.id, dto))


@shared_task(name="remove_product", bind=True)
@rpc_handler
def remove_product(payload: Dict[str, Any]) -> Dict[str, Any]:
    dto = ProductIdDTO.model_validate(payload)
    return _render(_service().remove(dto.id))


@shared_task(name="validate_products", bind=True)
@rpc_handler
def validate_products(payload: Dict[str, Any]):
    dto = ValidateProductsDTO.model_validate(payload)
    return [_render(p) for p in _service().validate_products(dto.ids)]
