import logging

from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework import status
from rest_framework_simplejwt.tokens import RefreshToken

from core.responses import api_success
from users.serializers import UserSerializer
from .serializers import SignupSerializer, LoginSerializer

logger = logging.getLogger("synergazing.auth")


class SignupView(APIView):
    # allow unauthenticated
    permission_classes = []
    authentication_classes = []

    def post(self, request):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"User signed up: user={user.id}")
        return api_success(
            {"id": user.id, "username": user.username},
            "User created successfully",
            status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    # allow unauthenticated
    permission_classes = []
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']
        refresh = RefreshToken.for_user(user)
        return api_success(
            {
                "access": str(refresh.access_token),
                "refresh": str(refresh),
            },
            "Login successful",
        )


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return api_success(UserSerializer(request.user).data, "Authenticated user")
