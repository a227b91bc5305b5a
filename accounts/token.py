# accounts/token.py
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer


class StationTokenObtainPairSerializer(TokenObtainPairSerializer):
    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        # custom claims
        token['email'] = user.email
        token['role'] = getattr(user, "role", None)
        if getattr(user, "station_id", None):
            token['station_id'] = user.station_id
        return token
