from scorehub import db
from flask_login import UserMixin
import secrets


def generate_player_id():
    """Generate a fresh external player id (12 random bytes, hex-encoded)."""
    return secrets.token_hex(12)


class User(UserMixin, db.Model):
    __tablename__ = 'users'
    __table_args__ = (
        db.CheckConstraint("login <> ''", name='ck_users_login_not_empty'),
    )
    id = db.Column(db.Integer, primary_key=True)
    login = db.Column(db.String(128), unique=True, nullable=False, index=True)
    password = db.Column(db.String(128), nullable=False)  # bcrypt hash, never plaintext
    player_id = db.Column(db.String(24), unique=True, nullable=False, index=True, default=generate_player_id)
    score = db.Column(db.Integer, nullable=False, default=0, server_default='0')
    achievement_links = db.relationship(
        'UserAchievement',
        back_populates='user',
        order_by='UserAchievement.id',
        cascade='all, delete-orphan',
    )

    @property
    def achievements(self):
        return [link.achievement_id for link in self.achievement_links]

    def get_id(self):
        # Flask-Login identity is the external player id, not the row id
        return self.player_id

    def to_dict(self):
        return {
            'login': self.login,
            'score': self.score,
            'achievements': self.achievements,
        }


class UserAchievement(db.Model):
    """One unlocked achievement id in a user's set.

    ``achievement_id`` deliberately has no foreign key: a user may hold ids
    that are absent from the catalog.
    """
    __tablename__ = 'user_achievements'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'achievement_id', name='uq_user_achievement'),
    )
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    achievement_id = db.Column(db.String(64), nullable=False)
    user = db.relationship('User', back_populates='achievement_links')


class Achievement(db.Model):
    __tablename__ = 'achievements'
    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    description = db.Column(db.Text, nullable=False)
    points = db.Column(db.Integer, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'points': self.points,
        }
