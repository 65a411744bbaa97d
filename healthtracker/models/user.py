from healthtracker.app import db
from flask import current_app
import bcrypt

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72

class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password_hash = db.Column('password', db.String(128), nullable=False)
    first_name = db.Column(db.String(50), nullable=False)
    last_name = db.Column(db.String(50), nullable=False)

    # Relationships
    health_records = db.relationship('HealthRecord', backref='user', lazy=True,
                                     order_by='HealthRecord.id')

    def __init__(self, username, password, **kwargs):
        self.username = username
        self.set_password(password)
        for key, value in kwargs.items():
            setattr(self, key, value)

    def set_password(self, password):
        salt = bcrypt.gensalt(rounds=current_app.config.get('BCRYPT_LOG_ROUNDS', 12))
        self.password_hash = bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

    def check_password(self, password):
        encoded = password.encode('utf-8')
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False
        return bcrypt.checkpw(encoded, self.password_hash.encode('utf-8'))

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'first_name': self.first_name,
            'last_name': self.last_name,
        }

    def __repr__(self):
        return f'<User {self.id} {self.username!r}>'
