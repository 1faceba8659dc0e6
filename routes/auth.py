# routes/auth.py
from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import IntegrityError
import logging

from database import get_db_session
from models import User
from schemas.user_schemas import SignupRequest, LoginRequest, UserRead
from utils.auth import hash_password, check_password, generate_token, token_required

auth_bp = Blueprint('auth', __name__)
logger = logging.getLogger(__name__)


def _user_json(user):
    return UserRead.model_validate(user).model_dump(mode='json', by_alias=True)


def _signup_error(message):
    return jsonify({'error': message}), 400


@auth_bp.route('/signup', methods=['POST'])
def signup():
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data.get('email') or not data.get('password'):
        return _signup_error('Email & password required')

    try:
        payload = SignupRequest.model_validate(data)
    except ValueError:
        return _signup_error('Invalid signup details')

    email = payload.email.strip()
    try:
        with get_db_session() as db:
            if db.query(User).filter_by(email=email).first():
                return _signup_error('User already exists.')

            user = User(
                username=payload.username,
                email=email,
                password=hash_password(payload.password)
            )
            db.add(user)
            db.flush()
            response_data = {'user': _user_json(user)}

        logger.info(f"Registered user {response_data['user']['id']}")
        return jsonify(response_data), 201

    except IntegrityError:
        # Lost a race with a concurrent signup for the same email
        return _signup_error('User already exists.')
    except Exception as e:
        logger.error(f"Registration error: {str(e)}", exc_info=True)
        return jsonify({'error': 'Something went wrong'}), 500


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True)
    try:
        payload = LoginRequest.model_validate(data if isinstance(data, dict) else {})
    except ValueError:
        return jsonify({'error': 'Email and password are required.'}), 400

    try:
        with get_db_session() as db:
            user = db.query(User).filter_by(email=payload.email.strip()).first()

            if not user:
                return jsonify({'error': 'No account found with that email address.'}), 401
            if not user.uses_credentials:
                return jsonify({'error': 'This account does not support password login. Try Google sign-in.'}), 401
            if not check_password(payload.password, user.password):
                return jsonify({'error': 'Incorrect password. Please try again.'}), 401

            user_data = _user_json(user)
            token = generate_token(user.id)

    except Exception as e:
        logger.error(f"Login error: {str(e)}", exc_info=True)
        return jsonify({'error': 'Something went wrong'}), 500

    response = jsonify({'token': token, 'user': user_data})
    response.set_cookie(
        current_app.config['AUTH_COOKIE_NAME'],
        token,
        max_age=current_app.config['TOKEN_EXPIRATION_HOURS'] * 3600,
        httponly=True,
        secure=current_app.config['AUTH_COOKIE_SECURE'],
        samesite='Lax'
    )
    return response, 200


@auth_bp.route('/logout', methods=['POST'])
def logout():
    response = jsonify({'message': 'Logged out successfully'})
    response.delete_cookie(current_app.config['AUTH_COOKIE_NAME'])
    return response, 200


@auth_bp.route('/session', methods=['GET'])
@token_required
def get_session(current_user_id):
    try:
        with get_db_session() as db:
            user = db.get(User, current_user_id)
            if not user:
                return jsonify({'error': 'Unauthorized'}), 401
            return jsonify({'user': _user_json(user)}), 200
    except Exception as e:
        logger.error(f"Session lookup error: {str(e)}", exc_info=True)
        return jsonify({'error': 'Something went wrong'}), 500
