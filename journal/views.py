import logging

from django.conf import settings
from django.db import transaction
from django.db.models import F
from django.utils import timezone
from django.utils.dateparse import parse_date
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .analysis_client import AnalysisServiceClient
from .exceptions import AnalysisError, InvalidArgument
from .models import Analysis, Dream, User
from .orchestrator import AnalysisOrchestrator
from .serializers import AnalysisSerializer, DreamExportSerializer, DreamSerializer

logger = logging.getLogger(__name__)


def get_analysis_client() -> AnalysisServiceClient:
    return AnalysisServiceClient(settings.ANALYSIS_SERVICE_URL, timeout=settings.ANALYSIS_SERVICE_TIMEOUT)


def get_user_dream(request, id):
    try:
        return Dream.objects.get(id=id, user=request.user)
    except Dream.DoesNotExist:
        return None


@api_view(['GET', 'POST'])
def dream_list(request):
    """List the user's dreams (newest first) or record a new one."""
    if request.method == 'POST':
        serializer = DreamSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        with transaction.atomic():
            serializer.save(user=request.user)
            User.objects.filter(pk=request.user.pk).update(total_dreams=F('total_dreams') + 1)
        return Response(serializer.data, status=status.HTTP_201_CREATED)

    dreams = Dream.objects.filter(user=request.user).order_by('-date')

    day = request.query_params.get('date')
    if day:
        parsed = parse_date(day)
        if parsed is None:
            return Response({"detail": "date must be YYYY-MM-DD."}, status=status.HTTP_400_BAD_REQUEST)
        dreams = dreams.filter(date__date=parsed)

    serializer = DreamSerializer(dreams, many=True)
    return Response(serializer.data)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
def dream_detail(request, id):
    dream = get_user_dream(request, id)
    if dream is None:
        return Response({"detail": "Not found."}, status=status.HTTP_404_NOT_FOUND)

    if request.method == 'GET':
        return Response(DreamSerializer(dream).data)

    if request.method == 'DELETE':
        with transaction.atomic():
            dream.delete()
            User.objects.filter(pk=request.user.pk, total_dreams__gt=0).update(total_dreams=F('total_dreams') - 1)
        return Response(status=status.HTTP_204_NO_CONTENT)

    partial = request.method == 'PATCH'
    serializer = DreamSerializer(dream, data=request.data, partial=partial)
    if serializer.is_valid():
        serializer.save()
        return Response(serializer.data)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET'])
def get_analysis(request, id):
    try:
        analysis = Analysis.objects.get(id=id, user=request.user)
    except Analysis.DoesNotExist:
        return Response({"detail": "Not found."}, status=status.HTTP_404_NOT_FOUND)
    return Response(AnalysisSerializer(analysis).data)


@api_view(['POST'])
@permission_classes([AllowAny])
def analyze_dream(request):
    """
    Analyze one of the caller's dreams.

    Body: {"dreamId", "uid"}. Returns {"analysisId", "insights", "modelUsed"},
    or {"kind", "message"} with the matching status on failure.
    """
    if not isinstance(request.data, dict):
        error = InvalidArgument()
        return Response(error.as_dict(), status=error.status_code)

    orchestrator = AnalysisOrchestrator(get_analysis_client())
    try:
        result = orchestrator.analyze(
            request.user,
            request.data.get('dreamId'),
            request.data.get('uid'),
        )
    except AnalysisError as e:
        return Response(e.as_dict(), status=e.status_code)
    return Response(result, status=status.HTTP_201_CREATED)


@api_view(['GET'])
def get_stats(request):
    user = User.objects.get(pk=request.user.pk)
    dates = list(Dream.objects.filter(user=user).order_by('date').values_list('date', flat=True))

    average = 0
    if dates:
        weeks = (dates[-1] - dates[0]).total_seconds() / 86400 / 7
        average = round(len(dates) / weeks, 1) if weeks > 0 else len(dates)

    rate = round(user.analyses_used / user.total_dreams * 100) if user.total_dreams > 0 else 0

    return Response({
        **user.stats,
        "averageDreamsPerWeek": average,
        "analysisRate": rate,
    })


@api_view(['GET'])
def export_dreams(request):
    """Download every dream the user has recorded as a JSON file."""
    now = timezone.now()
    dreams = Dream.objects.filter(user=request.user).order_by('-date')
    data = {
        "user": {
            "displayName": request.user.get_full_name() or request.user.username,
            "email": request.user.email,
            "exportDate": now.isoformat(),
        },
        "dreams": DreamExportSerializer(dreams, many=True).data,
    }
    filename = f"lunarly-dreams-{now:%Y-%m-%d}.json"
    logger.info("Exporting %d dreams for user %s", len(data["dreams"]), request.user.pk)
    return Response(data, headers={"Content-Disposition": f'attachment; filename="{filename}"'})
