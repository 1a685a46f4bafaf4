from __future__ import annotations

import jwt

from focusflow.application.dto.auth import AccessTokenPayload
from focusflow.application.ports.token_port import TokenPort


class JwtTokenService(TokenPort):
    """Validates access tokens issued by the auth provider (HS256, shared secret)."""

    def __init__(self, *, jwt_secret: str, audience: str):
        self._jwt_secret = jwt_secret
        self._audience = audience

    def decode_access_token(self, *, token: str) -> AccessTokenPayload:
        try:
            payload = jwt.decode(
                token,
                self._jwt_secret,
                algorithms=["HS256"],
                audience=self._audience,
            )
        except jwt.PyJWTError as exc:
            raise ValueError("Invalid access token.") from exc

        user_id = payload.get("sub")
        if not user_id or not isinstance(user_id, str):
            raise ValueError("Invalid token subject.")

        email = payload.get("email")
        if not isinstance(email, str):
            email = ""

        return AccessTokenPayload(user_id=user_id, email=email)
