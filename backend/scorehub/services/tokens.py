from datetime import datetime, timedelta, timezone

import jwt

from scorehub.errors import Unauthorized

JWT_ALGORITHM = 'HS256'


class TokenIssuer:
    """Signs and verifies self-contained bearer tokens.

    A token carries ``player_id`` plus the ``iat``/``exp`` timestamps, so any
    holder of the secret can verify it without touching the database.
    """

    def __init__(self, secret: str, expires_in: int = 3600, algorithm: str = JWT_ALGORITHM):
        if not secret:
            raise ValueError('token secret must be configured')
        self.secret = secret
        self.expires_in = int(expires_in)
        self.algorithm = algorithm

    def issue(self, player_id: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'player_id': player_id,
            'iat': now,
            'exp': now + timedelta(seconds=self.expires_in),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Return the token's ``player_id``; raise Unauthorized if invalid or expired."""
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={'require': ['exp', 'player_id']},
            )
        except jwt.ExpiredSignatureError as exc:
            raise Unauthorized('Token expired') from exc
        except jwt.InvalidTokenError as exc:
            raise Unauthorized('Invalid token') from exc
        player_id = payload.get('player_id')
        if not isinstance(player_id, str) or not player_id:
            raise Unauthorized('Invalid token')
        return player_id
