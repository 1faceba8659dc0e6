# utils/auth.py
import jwt
import bcrypt
from datetime import datetime, timedelta, timezone
from functools import wraps
from flask import request, jsonify, current_app
import logging

from models import User, Account

logger = logging.getLogger(__name__)

JWT_ALGORITHM = 'HS256'


def hash_password(password):
    """Hash a password using bcrypt"""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def check_password(password, hashed):
    """Verify a password against a hash"""
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def generate_token(user_id):
    """Generate a JWT session token for a user"""
    expiration = datetime.now(timezone.utc) + timedelta(hours=current_app.config['TOKEN_EXPIRATION_HOURS'])
    return jwt.encode(
        {
            'sub': str(user_id),
            'exp': expiration
        },
        current_app.config['SECRET_KEY'],
        algorithm=JWT_ALGORITHM
    )


def decode_token(token):
    """Return the user id carried by token; raises jwt.InvalidTokenError."""
    data = jwt.decode(token, current_app.config['SECRET_KEY'], algorithms=[JWT_ALGORITHM])
    user_id = data.get('sub')
    if not user_id:
        raise jwt.InvalidTokenError("Token has no subject")
    return user_id


def get_request_token():
    """Session token from the Authorization header, else the session cookie."""
    auth_header = request.headers.get('Authorization', '')
    if auth_header.startswith('Bearer '):
        token = auth_header.split(' ', 1)[1].strip()
        if token:
            return token
    return request.cookies.get(current_app.config['AUTH_COOKIE_NAME'])


def token_required(f):
    """Decorator to protect routes with a session; passes the user id first."""
    @wraps(f)
    def decorated(*args, **kwargs):
        token = get_request_token()
        if not token:
            logger.info(f"Unauthenticated request to {request.path}")
            return jsonify({'error': 'Unauthorized'}), 401

        try:
            current_user_id = decode_token(token)
        except jwt.ExpiredSignatureError:
            logger.info("Session token has expired.")
            return jsonify({'error': 'Unauthorized'}), 401
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid session token: {e}")
            return jsonify({'error': 'Unauthorized'}), 401

        return f(current_user_id, *args, **kwargs)

    return decorated


def link_provider_account(db, provider, provider_account_id, email=None, username=None):
    """
    Resolve the user behind an identity-provider login.

    An already linked account returns its user. Otherwise the account is
    linked to the user registered with the same email, or to a new
    password-less user, so both sign-in paths share one id space.
    """
    account = db.query(Account).filter_by(
        provider=provider,
        provider_account_id=provider_account_id
    ).first()
    if account:
        return account.user

    user = db.query(User).filter_by(email=email).first() if email else None
    if user is None:
        user = User(email=email, username=username)
        db.add(user)
        db.flush()
        logger.info(f"Created user {user.id} for {provider} account {provider_account_id}")

    db.add(Account(user_id=user.id, provider=provider, provider_account_id=provider_account_id))
    db.flush()
    return user


def sync_provider_users(db, provider=None):
    """
    Create a default user for every provider account whose user row is missing.

    The recreated user keeps the account's user_id and is named
    ``<Provider>User_<first 6 chars of the account id>``. Returns the
    number of users created.
    """
    query = db.query(Account).outerjoin(User, Account.user_id == User.id).filter(User.id.is_(None))
    if provider:
        query = query.filter(Account.provider == provider)

    created = 0
    for account in query.all():
        username = f"{account.provider.capitalize()}User_{account.id[:6]}"
        db.add(User(id=account.user_id, username=username))
        created += 1
        logger.info(f"Created user {account.user_id} for {account.provider} account {account.id}")

    db.flush()
    return created


def import_provider_accounts(db, provider, records):
    """
    Link each exported provider login to a user.

    records are dicts with ``provider_account_id`` and optionally ``email``
    and ``username``. Returns the list of user ids, one per record.
    """
    user_ids = []
    for record in records:
        account_id = str(record.get('provider_account_id') or '').strip()
        if not account_id:
            raise ValueError(f"Provider record without provider_account_id: {record!r}")
        user = link_provider_account(
            db,
            provider,
            account_id,
            email=record.get('email') or None,
            username=record.get('username') or None,
        )
        user_ids.append(user.id)
    return user_ids
