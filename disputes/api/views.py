"""Disputes API views.

Participant endpoints (open, view, evidence) and the admin arbitration
endpoints. Admin writes use PUT. All rules live in `disputes.services`.
"""

from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.pagination import StandardPagination
from disputes import services
from .permissions import IsDisputeAdmin
from .serializers import (
    AdminDisputeSerializer,
    AdminNotesSerializer,
    DisputeEvidenceSerializer,
    DisputeMessageSerializer,
    DisputeSerializer,
    EvidenceInputSerializer,
    OpenDisputeSerializer,
    ResolveDisputeSerializer,
)


def _validated(serializer_class, request):
    serializer = serializer_class(data=request.data)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


# ------------------------------ participants ------------------------------

class OpenDisputeAPIView(APIView):
    """POST /api/orders/{pk}/dispute/ -> open a dispute on the order."""

    permission_classes = [IsAuthenticated]

    def post(self, request, pk: int):
        data = _validated(OpenDisputeSerializer, request)
        dispute = services.open_dispute(request.user, pk, data["reason"])
        return Response(DisputeSerializer(dispute).data, status=status.HTTP_201_CREATED)


class OrderDisputeAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, order_id: int):
        return Response(DisputeSerializer(services.get_dispute_for_order(request.user, order_id)).data)


class DisputeDetailAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, pk: int):
        return Response(DisputeSerializer(services.get_dispute(request.user, pk)).data)


class DisputeEvidenceAPIView(APIView):
    """GET: evidence in upload order. POST: add an evidence item."""

    permission_classes = [IsAuthenticated]

    def get(self, request, pk: int):
        evidence = services.list_evidence(request.user, pk)
        return Response(DisputeEvidenceSerializer(evidence, many=True).data)

    def post(self, request, pk: int):
        data = _validated(EvidenceInputSerializer, request)
        evidence = services.add_evidence(
            request.user,
            pk,
            data["file_url"],
            data["file_name"],
            file_type=data.get("file_type"),
            file_size=data.get("file_size"),
            description=data.get("description") or "",
        )
        return Response(DisputeEvidenceSerializer(evidence).data, status=status.HTTP_201_CREATED)


# ------------------------------ admin ------------------------------

class AdminDisputeListAPIView(generics.ListAPIView):
    """GET /api/admin/disputes/?status=open|under_review|resolved"""

    serializer_class = AdminDisputeSerializer
    pagination_class = StandardPagination
    permission_classes = [IsAuthenticated, IsDisputeAdmin]

    def get_queryset(self):
        return services.list_disputes(self.request.user, self.request.query_params.get("status"))


class AdminActiveDisputeListAPIView(generics.ListAPIView):
    serializer_class = AdminDisputeSerializer
    pagination_class = StandardPagination
    permission_classes = [IsAuthenticated, IsDisputeAdmin]

    def get_queryset(self):
        return services.list_active_disputes(self.request.user)


class AdminDisputeDetailAPIView(APIView):
    permission_classes = [IsAuthenticated, IsDisputeAdmin]

    def get(self, request, pk: int):
        return Response(AdminDisputeSerializer(services.get_dispute(request.user, pk)).data)


class TakeDisputeAPIView(APIView):
    permission_classes = [IsAuthenticated, IsDisputeAdmin]

    def put(self, request, pk: int):
        return Response(AdminDisputeSerializer(services.take_dispute(request.user, pk)).data)


class AdminNotesAPIView(APIView):
    permission_classes = [IsAuthenticated, IsDisputeAdmin]

    def put(self, request, pk: int):
        data = _validated(AdminNotesSerializer, request)
        return Response(AdminDisputeSerializer(services.add_admin_notes(request.user, pk, data["notes"])).data)


class ResolveDisputeAPIView(APIView):
    permission_classes = [IsAuthenticated, IsDisputeAdmin]

    def put(self, request, pk: int):
        data = _validated(ResolveDisputeSerializer, request)
        dispute = services.resolve_dispute(
            request.user,
            pk,
            data["favor_client"],
            resolution_notes=data.get("resolution_notes", ""),
            admin_notes=data.get("admin_notes"),
        )
        return Response(AdminDisputeSerializer(dispute).data)


class DisputeMessagesAPIView(APIView):
    permission_classes = [IsAuthenticated, IsDisputeAdmin]

    def get(self, request, pk: int):
        messages = services.list_dispute_messages(request.user, pk)
        return Response(DisputeMessageSerializer(messages, many=True).data)
