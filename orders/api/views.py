"""Orders API views.

Thin wrappers around `orders.services` (order management), `orders.lifecycle`
(status transitions) and `orders.registry` (executor responses). Views parse
input with serializers, call exactly one service function and render the
result; domain errors raised by the services carry their own status codes.
"""

from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.pagination import StandardPagination
from orders import lifecycle, registry, services
from .permissions import IsAdminStaff, IsClientUser, IsExecutorUser
from .serializers import (
    ExecutorOrderListSerializer,
    OrderDetailSerializer,
    OrderListSerializer,
    OrderResponseSerializer,
    OrderWriteSerializer,
    ResponseWriteSerializer,
    RevisionRequestSerializer,
    SelectExecutorSerializer,
)


# ----------------------------- helpers (module-level) -----------------------------

def _order_payload(request, order, code=status.HTTP_200_OK):
    """Render an order with the description gated for the requesting user."""
    access = services.description_access(request.user, order)
    return Response(OrderDetailSerializer(order, context={"access": access}).data, status=code)


def _validated(serializer_class, request, partial=False):
    serializer = serializer_class(data=request.data, partial=partial)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


# --------------------------------------- orders ---------------------------------------

class OrderListCreateAPIView(generics.ListAPIView):
    """GET: marketplace feed of public NEW orders (filters via query params).
    POST: create a new order (client-only).
    """

    serializer_class = OrderListSerializer
    pagination_class = StandardPagination

    def get_permissions(self):
        """Client-only on POST, otherwise just authenticated."""
        if self.request.method == "POST":
            return [IsAuthenticated(), IsClientUser()]
        return [IsAuthenticated()]

    def get_queryset(self):
        return services.feed(self.request.query_params)

    def post(self, request):
        order = services.create_order(request.user, **_validated(OrderWriteSerializer, request))
        return _order_payload(request, order, status.HTTP_201_CREATED)


class OrderDetailAPIView(APIView):
    """GET: order detail. PATCH: edit a NEW order (owner). DELETE: soft delete (staff)."""

    def get_permissions(self):
        if self.request.method == "DELETE":
            return [IsAuthenticated(), IsAdminStaff()]
        return [IsAuthenticated()]

    def get(self, request, pk: int):
        return _order_payload(request, services.get_order(request.user, pk))

    def patch(self, request, pk: int):
        data = _validated(OrderWriteSerializer, request, partial=True)
        return _order_payload(request, services.update_order(request.user, pk, **data))

    def delete(self, request, pk: int):
        services.admin_delete_order(request.user, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MyClientOrdersAPIView(generics.ListAPIView):
    """Orders posted by the authenticated client (`?status=` filter)."""

    serializer_class = OrderListSerializer
    pagination_class = StandardPagination
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return services.my_orders_as_client(self.request.user, self.request.query_params.get("status"))


class MyExecutorOrdersAPIView(generics.ListAPIView):
    """Orders the authenticated executor responded to (`?status=` filter)."""

    serializer_class = ExecutorOrderListSerializer
    pagination_class = StandardPagination
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return services.my_orders_as_executor(self.request.user, self.request.query_params.get("status"))


# ------------------------------------- transitions -------------------------------------

class SelectExecutorAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, pk: int):
        data = _validated(SelectExecutorSerializer, request)
        order = lifecycle.select_executor(
            request.user,
            pk,
            data["response_id"],
            agreed_price=data.get("agreed_price"),
            agreed_deadline=data.get("agreed_deadline"),
        )
        return _order_payload(request, order)


class SubmitForReviewAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, pk: int):
        return _order_payload(request, lifecycle.submit_for_review(request.user, pk))


class ApproveWorkAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, pk: int):
        return _order_payload(request, lifecycle.approve_work(request.user, pk))


class RequestRevisionAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, pk: int):
        data = _validated(RevisionRequestSerializer, request)
        return _order_payload(request, lifecycle.request_revision(request.user, pk, data["reason"]))


class CancelOrderAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, pk: int):
        return _order_payload(request, lifecycle.cancel_order(request.user, pk))


# -------------------------------------- responses --------------------------------------

class OrderResponsesAPIView(APIView):
    """GET: responses on an order (its client only). POST: respond (executor-only)."""

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated(), IsExecutorUser()]
        return [IsAuthenticated()]

    def get(self, request, pk: int):
        responses = registry.list_order_responses(request.user, pk)
        return Response(OrderResponseSerializer(responses, many=True).data)

    def post(self, request, pk: int):
        data = _validated(ResponseWriteSerializer, request)
        response = registry.create_response(
            request.user,
            pk,
            data.get("cover_letter"),
            proposed_price=data.get("proposed_price"),
            proposed_days=data.get("proposed_days"),
        )
        return Response(OrderResponseSerializer(response).data, status=status.HTTP_201_CREATED)


class ResponseDetailAPIView(APIView):
    """PATCH/DELETE an own response while the order is still open."""

    permission_classes = [IsAuthenticated]

    def patch(self, request, pk: int):
        data = _validated(ResponseWriteSerializer, request, partial=True)
        response = registry.update_response(request.user, pk, **data)
        return Response(OrderResponseSerializer(response).data)

    def delete(self, request, pk: int):
        registry.delete_response(request.user, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MyResponsesAPIView(generics.ListAPIView):
    serializer_class = OrderResponseSerializer
    pagination_class = StandardPagination
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return registry.list_my_responses(self.request.user)
