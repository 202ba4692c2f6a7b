"""Product HTTP gateway.

Tunnels each route to the products RPC surface through ``RpcClient``.
Views never talk to the service or the ORM: a failed call is raised as
``RpcException`` and rendered by ``modules.core.exceptions``.
"""

from __future__ import annotations

from typing import Any

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from shared.infrastructure.rpc import RpcClient

PAGINATION_PARAMS = ("page", "limit")


def _body(request: Request) -> Any:
    data = request.data
    if hasattr(data, "dict"):
        return data.dict()
    return data


class ProductViewSet(ViewSet):
    """ViewSet exposing the product RPC patterns over HTTP."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._client = RpcClient()

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/?page=&limit="""
        payload = {
            key: request.query_params[key]
            for key in PAGINATION_PARAMS
            if key in request.query_params
        }
        page = self._client.send("find_all_products", payload).unwrap()
        return Response(page)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        product = self._client.send("find_one_product", {"id": pk}).unwrap()
        return Response(product)

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        product = self._client.send("create_product", _body(request)).unwrap()
        return Response(product, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        body = _body(request)
        payload = {**body, "id": pk} if isinstance(body, dict) else body
        product = self._client.send("update_product", payload).unwrap()
        return Response(product)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/ (soft delete, returns the retired row)"""
        product = self._client.send("remove_product", {"id": pk}).unwrap()
        return Response(product)

    @action(detail=False, methods=["post"], url_path="validate")
    def validate(self, request: Request) -> Response:
        """POST /api/v1/products/validate/ with ``{"ids": [...]}``"""
        products = self._client.send("validate_products", _body(request)).unwrap()
        return Response(products)
