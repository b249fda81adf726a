"""
Authentication views and helper functions.

This module defines the register/login endpoints used by the mobile
client together with JWT refresh and logout.  Keeping these views apart
from the authentication class (see ``wellness.authentication``)
prevents circular imports when Django REST framework initialises
authentication classes.
"""
from __future__ import annotations

import logging

from django.contrib.auth import authenticate
from django.db import IntegrityError, transaction
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken

from wellness.permissions import ADMIN_ROLES
from wellness.serializers.auth import DUPLICATE_EMAIL_MESSAGE, LoginSerializer, LogoutSerializer, RegisterSerializer
from wellness.services.audit import log_action
from wellness.services.profiles import needs_profile_setup

from .models import User

logger = logging.getLogger(__name__)


def get_user_role(user: User | None) -> str | None:
    """Return the administrative role of ``user`` or ``None`` for employees."""
    if user is None or not getattr(user, 'is_authenticated', False):
        return None
    role = getattr(user, 'role', None)
    return role if role in ADMIN_ROLES else None


def _session_payload(user: User) -> dict:
    token_obj, _ = Token.objects.get_or_create(user=user)
    refresh = RefreshToken.for_user(user)
    return {
        'ok': True,
        'token': token_obj.key,
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
        'role': user.role,
        'isAdmin': get_user_role(user) is not None,
        'needsProfileSetup': needs_profile_setup(user),
        'user': {
            'id': user.id,
            'email': user.email,
            'role': user.role,
        },
    }


# ---------------------------------------------------------------------
# Email/password registration
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([ScopedRateThrottle])
def register_view(request):
    """Create an employee account and sign it in.

    Accepts ``email``, ``password`` and ``confirmPassword``.  The role is
    always ``employee``; admin roles are granted from the Django admin.
    """
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    try:
        with transaction.atomic():
            user = User.objects.create_user(email=vd['email'], password=vd['password'], role='employee')
    except IntegrityError:
        # a concurrent sign-up took the address after validation
        raise ValidationError({'email': [DUPLICATE_EMAIL_MESSAGE]})
    log_action(user=user, action='register', object_type='user', object_id=user.id,
               detail={'ip': request.META.get('REMOTE_ADDR')})
    return Response(_session_payload(user), status=201)

register_view.cls.throttle_scope = 'register'


# ---------------------------------------------------------------------
# Email/password login (no role bypass)
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([ScopedRateThrottle])
def login_view(request):
    """
    Login with email and password only; any ``role`` in the body is ignored.
    The response tells the client whether the profile setup is still due.
    """
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    email = s.validated_data['email']
    password = s.validated_data['password']

    user = authenticate(request, username=email, password=password)
    if not user:
        log_action(user=None, action='login', object_type='user', object_id=None,
                   detail={'result': 'fail', 'email': email, 'ip': request.META.get('REMOTE_ADDR')})
        return Response({'ok': False, 'detail': 'Invalid email or password'}, status=400)

    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})
    return Response(_session_payload(user), status=200)

login_view.cls.throttle_scope = 'login'


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me_view(request):
    """Return the current user together with its admin role, if any."""
    user = request.user
    return Response({
        'ok': True,
        'user': {'id': user.id, 'email': user.email, 'role': user.role},
        'adminRole': get_user_role(user),
        'needsProfileSetup': needs_profile_setup(user),
    })


# ---------------------------------------------------------------------
# JWT: refresh & logout
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def jwt_refresh_view(request):
    """Return a new access token from refresh token."""
    view = TokenRefreshView.as_view()
    resp = view(request._request)
    if isinstance(resp, Response):
        data = dict(resp.data)
        if 'access' in data and 'jwt_access' not in data:
            data['jwt_access'] = data.pop('access')
        return Response(data, status=resp.status_code)
    return resp


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def jwt_logout_view(request):
    """Blacklist the given refresh token, or every outstanding one of the user."""
    s = LogoutSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    refresh = s.validated_data.get('refresh')
    count = 0
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
        except TokenError as e:
            return Response({'ok': False, 'detail': str(e)}, status=400)
        count = 1
    else:
        for token in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=token)
            count += int(created)
    Token.objects.filter(user=request.user).delete()
    logger.info("user %s logged out, %d refresh tokens blacklisted", request.user.id, count)
    return Response({'ok': True, 'blacklisted': count})
