import logging

from django.conf import settings
from django.contrib.auth import authenticate, get_user_model
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken

from .serializers import ProfileUpdateSerializer, SigninSerializer, SignupSerializer, UserSerializer

User = get_user_model()
logger = logging.getLogger(__name__)


# -----------------------------
# HELPER: JWT TOKEN GENERATOR
# -----------------------------
def get_tokens_for_user(user):
    """
    Generate JWT tokens and embed the role in the payload
    """
    refresh = RefreshToken.for_user(user)
    refresh['role'] = user.role
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


def _auth_payload(user, message):
    tokens = get_tokens_for_user(user)
    return {
        "success": True,
        "message": message,
        "token": tokens['access'],
        "refresh": tokens['refresh'],
        "user": UserSerializer(user).data,
    }


# -----------------------------
# SIGNUP API
# -----------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def signup(request):
    """
    Registers an account and returns JWT tokens
    """
    email = str(request.data.get('email') or '').strip()
    if email and User.objects.filter(email__iexact=email).exists():
        return Response(
            {"success": False, "message": "Email already exists"},
            status=status.HTTP_400_BAD_REQUEST
        )

    serializer = SignupSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()
    user.record_signin()

    logger.info("Account %s created", user.pk)
    return Response(_auth_payload(user, "User registered successfully"), status=status.HTTP_201_CREATED)


# -----------------------------
# SIGNIN API
# -----------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def signin(request):
    """
    JWT sign-in with account lock after repeated failed attempts
    """
    serializer = SigninSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    email = serializer.validated_data['email'].strip().lower()
    password = serializer.validated_data['password']

    user = User.objects.filter(email__iexact=email).first()
    if not user:
        raise AuthenticationFailed("Invalid email or password")

    if user.is_locked:
        raise AuthenticationFailed("Account locked due to multiple failed attempts")

    user_auth = authenticate(request, username=email, password=password)
    if user_auth is None:
        user.failed_attempts += 1
        if user.failed_attempts >= settings.MAX_FAILED_SIGNIN_ATTEMPTS:
            user.is_locked = True
            logger.warning("Account %s locked after %s failed sign-ins", user.pk, user.failed_attempts)
        user.save(update_fields=['failed_attempts', 'is_locked'])
        raise AuthenticationFailed("Invalid email or password")

    user_auth.record_signin()
    return Response(_auth_payload(user_auth, "Sign in successful"))


# -----------------------------
# CURRENT USER
# -----------------------------
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    return Response({"success": True, "user": UserSerializer(request.user).data})


# -----------------------------
# PROFILE
# -----------------------------
@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def profile(request):
    if request.method == 'GET':
        return Response({"success": True, "user": UserSerializer(request.user).data})

    serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()

    return Response({
        "success": True,
        "message": "Profile updated successfully",
        "user": UserSerializer(user).data,
    })
