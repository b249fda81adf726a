"""
Profile endpoints.

The setup screen creates the profile right after registration and the
profile screen edits it later.  Both go through the same upsert: the
first write must carry the required identity fields, later writes may
be partial.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from wellness.serializers.profile import ProfileSerializer
from wellness.services import appointments, messages, quizzes
from wellness.services.profiles import get_profile, serialize_profile, upsert_profile


@api_view(['GET', 'PUT', 'POST'])
@permission_classes([IsAuthenticated])
def profile_view(request):
    user = request.user
    profile = get_profile(user)
    if request.method == 'GET':
        return Response({'ok': True, 'data': serialize_profile(profile)})
    s = ProfileSerializer(data=request.data, partial=profile is not None and bool(profile.first_name))
    s.is_valid(raise_exception=True)
    profile = upsert_profile(user, dict(s.validated_data))
    return Response({'ok': True, 'data': serialize_profile(profile)})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profile_overview(request):
    """Everything the profile screen shows in one round trip."""
    user = request.user
    return Response({
        'ok': True,
        'profile': serialize_profile(get_profile(user)),
        'quizResults': quizzes.list_results(user),
        'messages': messages.list_sent_by(user),
        'appointments': appointments.list_for_user(user, newest_first=True),
    })
