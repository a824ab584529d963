from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from extensions import db
from errors import Conflict, InvalidCredentials
from models import User

TOKEN_SALT = "api-session-token"


def authenticate(email, password):
    """Return the user for valid credentials, else raise InvalidCredentials."""
    if not email or not password:
        raise InvalidCredentials()

    user = User.query.filter_by(email=email.strip().lower()).first()
    if not user or not user.password_hash:
        raise InvalidCredentials()
    if not user.check_password(password):
        raise InvalidCredentials()
    return user


def register(payload):
    email = payload.email.strip().lower()
    if User.query.filter_by(email=email).first():
        raise Conflict("Email is already registered")

    user = User(name=payload.name, email=email, provider="credentials")
    user.set_password(payload.password)
    db.session.add(user)
    db.session.commit()
    return user


def user_from_oauth(userinfo, provider="google"):
    """Find or create the account behind an OAuth identity.

    OAuth accounts carry no password hash, so they can never sign in through
    the credential path.
    """
    email = (userinfo.get("email") or "").strip().lower()
    if not email:
        raise InvalidCredentials("Could not retrieve email from provider")

    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(
            name=userinfo.get("name") or email.split("@", 1)[0],
            email=email,
            avatar=userinfo.get("picture"),
            provider=provider,
        )
        db.session.add(user)
        db.session.commit()
    return user


def _serializer(secret_key):
    return URLSafeTimedSerializer(secret_key, salt=TOKEN_SALT)


def issue_token(user, secret_key):
    return _serializer(secret_key).dumps({"uid": user.id})


def load_token(token, secret_key, max_age):
    """Resolve a bearer token to a user, or None when invalid or expired."""
    try:
        data = _serializer(secret_key).loads(token, max_age=max_age)
    except (SignatureExpired, BadSignature):
        return None
    if not isinstance(data, dict) or "uid" not in data:
        return None
    return db.session.get(User, data["uid"])
