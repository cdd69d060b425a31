import secrets
from datetime import date as date_type
from datetime import datetime, timedelta

from werkzeug.security import check_password_hash, generate_password_hash

from learning_log import database


def clean_tags(tags):
    """Strip each tag and drop the blank ones, keeping the original order."""
    return [tag.strip() for tag in tags or [] if tag and tag.strip()]


class Entry(database.Model):
    """
    Class that represents a learning log entry.

    The following attributes of an entry are stored in this table:
        * title - short title of the entry (surrounding whitespace removed)
        * content - text of the entry
        * tags - ordered list of tags
        * date - day that the entry is about
        * image - optional image reference (for example, a data URL)
        * user_id - ID of the user that owns this entry (None when authentication is disabled)
        * created_on - date and time (in UTC) when the entry was created
        * last_edited_on - date and time (in UTC) when the entry was last edited
    """
    __tablename__ = 'entries'

    id = database.Column(database.Integer, primary_key=True)
    title = database.Column(database.String, nullable=False)
    content = database.Column(database.Text, nullable=False)
    tags = database.Column(database.JSON, nullable=False, default=list)
    date = database.Column(database.Date, nullable=False, index=True)
    image = database.Column(database.Text, nullable=True)
    user_id = database.Column(database.Integer, database.ForeignKey('users.id'), nullable=True)
    created_on = database.Column(database.DateTime)
    last_edited_on = database.Column(database.DateTime)

    def __init__(self, title: str, content: str, tags=None, date: date_type = None, image: str = None, user_id: int = None):
        """Create a new learning log entry."""
        self.title = title.strip()
        self.content = content
        self.tags = clean_tags(tags)
        self.date = date or date_type.today()
        self.image = image
        self.user_id = user_id
        self.created_on = datetime.utcnow()
        self.last_edited_on = datetime.utcnow()

    def update(self, title: str, content: str, tags=None, date: date_type = None, image: str = None):
        """Update the entry."""
        self.title = title.strip()
        self.content = content
        if tags is not None:
            self.tags = clean_tags(tags)
        self.date = date or self.date
        self.image = image
        self.last_edited_on = datetime.utcnow()

    def __repr__(self):
        return f"<Entry: {self.title}>"


class User(database.Model):
    """
    Class that represents a user of the application.

    The following attributes of a user are stored in this table:
        * username - display name of the user
        * email - email address of the user
        * hashed password - hashed password (using werkzeug.security)
        * authentication token - authentication token unique to the user
        * authentication token expiration - expiration date and time of
                                            the authentication token
        * registered_on - date and time (in UTC) when the user registered

    REMEMBER: Never store the plaintext password in a database!
    """
    __tablename__ = 'users'

    id = database.Column(database.Integer, primary_key=True)
    username = database.Column(database.String, nullable=False)
    email = database.Column(database.String, unique=True, nullable=False)
    password_hashed = database.Column(database.String(256), nullable=False)
    entries = database.relationship('Entry', backref='user', lazy='dynamic')
    auth_token = database.Column(database.String(64), index=True)
    auth_token_expiration = database.Column(database.DateTime)
    registered_on = database.Column(database.DateTime)

    def __init__(self, username: str, email: str, password_plaintext: str):
        """Create a new User object."""
        self.username = username
        self.email = email
        self.password_hashed = self._generate_password_hash(password_plaintext)
        self.auth_token = None
        self.auth_token_expiration = None
        self.registered_on = datetime.utcnow()

    def is_password_correct(self, password_plaintext: str):
        return check_password_hash(self.password_hashed, password_plaintext)

    @staticmethod
    def _generate_password_hash(password_plaintext):
        return generate_password_hash(password_plaintext)

    def generate_auth_token(self, lifetime_minutes: int = 60):
        self.auth_token = secrets.token_urlsafe()
        self.auth_token_expiration = datetime.utcnow() + timedelta(minutes=lifetime_minutes)
        return self.auth_token

    @staticmethod
    def verify_auth_token(auth_token):
        if not auth_token:
            return None
        user = User.query.filter_by(auth_token=auth_token).first()
        if user and user.auth_token_expiration > datetime.utcnow():
            return user

    def revoke_auth_token(self):
        self.auth_token_expiration = datetime.utcnow()

    def __repr__(self):
        return f'<User: {self.email}>'
