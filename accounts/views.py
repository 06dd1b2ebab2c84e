import logging

from django.contrib.auth import authenticate, get_user_model, login, logout
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import IntegrityError, transaction
from django.shortcuts import redirect, render
from django.views.decorators.csrf import ensure_csrf_cookie

from fasttracker.api import Conflict, InvalidRequest, Unauthorized, api_endpoint, read_json, success

logger = logging.getLogger(__name__)

User = get_user_model()


def serialize_user(user):
    return {
        'id': user.id,
        'email': user.email,
        'name': user.first_name,
    }


@ensure_csrf_cookie
def signin_page(request):
    if request.user.is_authenticated:
        return redirect('home')
    return render(request, 'accounts/signin.html')


@ensure_csrf_cookie
def signup_page(request):
    if request.user.is_authenticated:
        return redirect('home')
    return render(request, 'accounts/signup.html')


def _read_email(data):
    email = str(data.get('email') or '').strip().lower()
    if not email:
        raise InvalidRequest('Email is required')
    try:
        validate_email(email)
    except ValidationError:
        raise InvalidRequest('Invalid email address')
    return email


@api_endpoint(["POST"], login_required=False)
def signup(request):
    """
    Create an account and sign it in.

    Expects JSON data:
        - name: string (required)
        - email: string, used as the username (required)
        - password: string, at least 8 characters (required)
    """
    data = read_json(request)
    name = str(data.get('name') or '').strip()
    if not name:
        raise InvalidRequest('Name is required')
    if len(name) > 150:
        raise InvalidRequest('Name must be at most 150 characters')
    email = _read_email(data)
    password = data.get('password') or ''
    if not isinstance(password, str) or not password:
        raise InvalidRequest('Password is required')

    candidate = User(username=email, email=email, first_name=name)
    try:
        validate_password(password, user=candidate)
    except ValidationError as e:
        raise InvalidRequest(' '.join(e.messages))

    if User.objects.filter(username=email).exists():
        raise Conflict('An account with this email already exists')
    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=email, email=email, password=password, first_name=name
            )
    except IntegrityError:
        raise Conflict('An account with this email already exists')

    login(request, user, backend='django.contrib.auth.backends.ModelBackend')
    logger.info(f"Created account {user.pk}")
    return success(serialize_user(user), status=201)


@api_endpoint(["POST"], login_required=False)
def signin(request):
    """
    Sign in with email and password.

    Expects JSON data:
        - email: string
        - password: string
    """
    data = read_json(request)
    email = str(data.get('email') or '').strip().lower()
    password = data.get('password') or ''
    if not email or not password:
        raise InvalidRequest('Email and password are required')

    user = authenticate(request, username=email, password=password)
    if user is None:
        raise Unauthorized('Invalid email or password')

    login(request, user)
    logger.info(f"User {user.pk} signed in")
    return success(serialize_user(user))


@api_endpoint(["POST"], login_required=False)
def signout(request):
    if request.user.is_authenticated:
        logger.info(f"User {request.user.pk} signed out")
    logout(request)
    return success(None)
