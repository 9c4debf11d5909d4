import logging
from typing import Optional

from sqlalchemy import exists, insert, literal, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import aliased

from scorehub.errors import BadRequest, Conflict, NotFound, Unauthorized
from scorehub.models import User, UserAchievement, generate_player_id
from scorehub.services.tokens import TokenIssuer

LEADERBOARD_SIZE = 10


class AccountService:
    """Registration, credentials, scores and achievements for players.

    Dependencies are injected by the app factory:

    - ``session``: a SQLAlchemy session (``db.session`` in the app)
    - ``hasher``: a Flask-Bcrypt ``Bcrypt`` instance
    - ``tokens``: a :class:`TokenIssuer`

    The service keeps no state of its own between calls. Score and
    achievement mutations are single statements so concurrent callers for the
    same login cannot lose updates or duplicate entries.
    """

    def __init__(self, session, hasher, tokens: TokenIssuer, logger=None):
        self.session = session
        self.hasher = hasher
        self.tokens = tokens
        self.logger = logger or logging.getLogger(__name__)

    def register(self, login: str, password: str) -> str:
        try:
            password_hash = self.hasher.generate_password_hash(password).decode('utf-8')
        except ValueError as exc:
            # Flask-Bcrypt refuses empty passwords
            raise BadRequest('Missing login or password') from exc
        user = User(login=login, password=password_hash, player_id=generate_player_id(), score=0)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as exc:
            # login or player_id collision, or an empty login; callers see the same error
            self.session.rollback()
            self.logger.info(f"[register-conflict] login={login!r}")
            raise Conflict('User already exists') from exc
        self.logger.info(f"[register] login={login!r} player_id={user.player_id}")
        return user.player_id

    def is_login_available(self, login: Optional[str]) -> bool:
        if login is None:
            return True
        found = self.session.execute(
            select(User.id).where(User.login == login).limit(1)
        ).first()
        return found is None

    def authenticate(self, login: str, password: str) -> dict:
        user = self._find_by_login(login)
        if not user or not self.hasher.check_password_hash(user.password, password):
            self.logger.info(f"[login-failed] login={login!r}")
            raise Unauthorized('Invalid credentials')
        token = self.tokens.issue(user.player_id)
        self.logger.info(f"[login] login={login!r} player_id={user.player_id}")
        return {'token': token, 'player_id': user.player_id}

    def user_for_token(self, token: str) -> Optional[User]:
        """Resolve a bearer token to its User; raises Unauthorized for a bad token."""
        player_id = self.tokens.verify(token)
        return self._find_by_player_id(player_id)

    def get_user_data(self, login: Optional[str] = None, player_id: Optional[str] = None) -> dict:
        user = None
        if login:
            user = self._find_by_login(login)
        elif player_id:
            user = self._find_by_player_id(player_id)
        if not user:
            raise NotFound('User not found')
        return user.to_dict()

    def leaderboard(self) -> list:
        rows = self.session.execute(
            select(User.login, User.score)
            .order_by(User.score.desc(), User.id)
            .limit(LEADERBOARD_SIZE)
        ).all()
        return [{'login': row.login, 'score': row.score} for row in rows]

    def update_score(self, login: str, score_delta: int) -> None:
        # A zero delta modifies nothing and is reported like a missing user
        if not score_delta:
            raise NotFound('User not found')
        result = self.session.execute(
            update(User)
            .where(User.login == login)
            .values(score=User.score + score_delta)
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        if result.rowcount == 0:
            raise NotFound('User not found')
        self.logger.info(f"[score] login={login!r} delta={score_delta}")

    def unlock_achievement(self, login: str, achievement_id: str) -> None:
        unlocked = aliased(UserAchievement)
        already_unlocked = exists().where(
            unlocked.user_id == User.id,
            unlocked.achievement_id == achievement_id,
        ).correlate(User)
        owner = select(User.id, literal(achievement_id)).where(User.login == login, ~already_unlocked)
        stmt = insert(UserAchievement.__table__).from_select(['user_id', 'achievement_id'], owner)
        try:
            result = self.session.execute(stmt)
            self.session.commit()
        except IntegrityError as exc:
            # a concurrent unlock of the same id won the race
            self.session.rollback()
            raise NotFound('User not found or achievement already unlocked') from exc
        if result.rowcount == 0:
            raise NotFound('User not found or achievement already unlocked')
        self.logger.info(f"[achievement] login={login!r} achievement_id={achievement_id!r}")

    def _find_by_login(self, login: Optional[str]) -> Optional[User]:
        if not login:
            return None
        return self.session.execute(
            select(User).where(User.login == login)
        ).scalar_one_or_none()

    def _find_by_player_id(self, player_id: Optional[str]) -> Optional[User]:
        if not player_id:
            return None
        return self.session.execute(
            select(User).where(User.player_id == player_id)
        ).scalar_one_or_none()
