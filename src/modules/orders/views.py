"""Order API views.

Exposes submission, the order queues, receipts, printing, the dashboard
and history clearing.  Domain exceptions are caught and translated into
HTTP status codes; the view never swallows generic exceptions.
"""

from __future__ import annotations

import structlog
from django.conf import settings
from django.http import HttpResponse
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.orders.constants import HistoryScope, OrderStatus
from modules.orders.dtos import SubmitOrderDTO
from modules.orders.exceptions import (
    AlreadyPrinted,
    InvalidOrderStatus,
    OrderNotFound,
    OrderValidationError,
)
from modules.orders.lifecycle import OrderLifecycleService
from modules.orders.models import Order
from modules.orders.reports import DashboardService
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import OrderSerializer
from modules.orders.services import OrderService
from modules.products.exceptions import OutOfStock, ProductNotFound
from modules.products.ledger import InventoryLedger
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.receipts.exceptions import PrinterError, UnknownReceiptFormat
from modules.receipts.printers import FilePrinter
from modules.receipts.services import ReceiptFormat, ReceiptService
from shared.domain.exceptions import StorageError

logger = structlog.get_logger(__name__)

RECEIPT_CONTENT_TYPES = {
    ReceiptFormat.HTML: "text/html; charset=utf-8",
    ReceiptFormat.ESCPOS: "application/octet-stream",
}


def _error(exc: Exception, code: int) -> Response:
    return Response({"detail": str(exc)}, status=code)


def _not_found() -> Response:
    return Response({"detail": "Order not found."}, status=status.HTTP_404_NOT_FOUND)


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        order_repository = OrderDjangoRepository()
        self._service = OrderService(
            order_repository=order_repository,
            ledger=InventoryLedger(ProductDjangoRepository()),
        )
        self._lifecycle = OrderLifecycleService(order_repository)
        self._receipts = ReceiptService(order_repository)
        self._dashboard = DashboardService(order_repository)

    # ------------------------------------------------------------------
    # Submit
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        try:
            dto = SubmitOrderDTO.from_payload(request.data)
            order = self._service.submit_order(dto)
        except OrderValidationError as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)
        except ProductNotFound as exc:
            return Response(
                {"detail": str(exc), "product_id": exc.product_id},
                status=status.HTTP_404_NOT_FOUND,
            )
        except OutOfStock as exc:
            return Response(
                {
                    "detail": str(exc),
                    "product_id": exc.product_id,
                    "requested": exc.requested,
                    "available": exc.available,
                },
                status=status.HTTP_409_CONFLICT,
            )
        except StorageError as exc:
            return _error(exc, status.HTTP_503_SERVICE_UNAVAILABLE)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/?status=PENDING|PRINTED (default PENDING)"""
        requested = request.query_params.get("status", OrderStatus.PENDING).upper()
        if requested not in OrderStatus.values:
            return Response(
                {"detail": f"Unknown status '{requested}'."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        orders = self._service.list_orders(requested)
        return Response(OrderSerializer(orders, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(int(pk))
        except (TypeError, ValueError, OrderNotFound):
            return _not_found()
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Receipts and printing
    # ------------------------------------------------------------------

    @action(detail=True, methods=["get"])
    def receipt(self, request: Request, pk: str | None = None) -> HttpResponse:
        """GET /api/v1/orders/{pk}/receipt/?variant=html|escpos

        ``variant`` rather than ``format``: DRF reserves the latter for
        renderer negotiation.
        """
        variant = request.query_params.get("variant", ReceiptFormat.HTML).lower()
        try:
            payload = self._receipts.render(int(pk), variant)
        except (TypeError, ValueError, OrderNotFound):
            return _not_found()
        except UnknownReceiptFormat as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        response = HttpResponse(payload, content_type=RECEIPT_CONTENT_TYPES[variant])
        if variant == ReceiptFormat.ESCPOS:
            response["Content-Disposition"] = f'attachment; filename="pedido-{pk}.bin"'
        return response

    @action(detail=True, methods=["post"], url_path="print")
    def print_receipt(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/print/

        Sends the ESC/POS receipt to the configured printer and marks the
        order PRINTED.
        """
        printer = FilePrinter(settings.RECEIPT_PRINTER_PATH)
        try:
            order = self._lifecycle.print_order(int(pk), printer)
        except (TypeError, ValueError, OrderNotFound):
            return _not_found()
        except AlreadyPrinted as exc:
            return _error(exc, status.HTTP_409_CONFLICT)
        except PrinterError as exc:
            return _error(exc, status.HTTP_502_BAD_GATEWAY)
        except StorageError as exc:
            return _error(exc, status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["post"], url_path="mark-printed")
    def mark_printed(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/mark-printed/

        Used after the browser print dialog; nothing is sent to the printer.
        """
        try:
            order = self._lifecycle.mark_printed(int(pk))
        except (TypeError, ValueError, OrderNotFound):
            return _not_found()
        except AlreadyPrinted as exc:
            return _error(exc, status.HTTP_409_CONFLICT)
        except InvalidOrderStatus as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)
        except StorageError as exc:
            return _error(exc, status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Dashboard / History
    # ------------------------------------------------------------------

    @action(detail=False, methods=["get"])
    def dashboard(self, request: Request) -> Response:
        """GET /api/v1/orders/dashboard/"""
        return Response(self._dashboard.summary().model_dump(mode="json"))

    @action(detail=False, methods=["delete"])
    def history(self, request: Request) -> Response:
        """DELETE /api/v1/orders/history/?scope=all|today (default all)"""
        scope = request.query_params.get("scope", HistoryScope.ALL).upper()
        if scope not in HistoryScope.values:
            return Response(
                {"detail": f"Unknown scope '{scope}'."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        try:
            deleted = self._lifecycle.clear_history(scope)
        except StorageError as exc:
            return _error(exc, status.HTTP_503_SERVICE_UNAVAILABLE)
        logger.info("order.history_cleared_via_api", scope=scope, deleted=deleted)
        return Response({"deleted": deleted})
