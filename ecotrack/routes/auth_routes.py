import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ecotrack import repositories
from ecotrack.auth import jwt_handler
from ecotrack.auth.dependencies import TOKEN_COOKIE, AuthContext, get_auth_context
from ecotrack.auth.passwords import hash_password, verify_password
from ecotrack.core.config import Settings, get_settings
from ecotrack.database import get_db
from ecotrack.services import uploads
from ecotrack.templating import render

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'error': message})


def issue_token_response(settings: Settings, message: str, role: str, claims: dict | None = None) -> PlainTextResponse:
    token = jwt_handler.create_session_token(settings, role, claims)
    response = PlainTextResponse(message)
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite='lax',
    )
    return response


@router.post('/register')
def register(
    username: str | None = Form(None),
    email: str | None = Form(None),
    password: str | None = Form(None),
    avatar: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if not email or not username or not password or avatar is None or not avatar.filename:
        return _error(status.HTTP_400_BAD_REQUEST, 'Missing required fields: email, password, or avatar file.')

    try:
        if repositories.get_user_by_email(db, email) is not None:
            return _error(status.HTTP_400_BAD_REQUEST, 'User with this email already exists.')

        avatar_path = uploads.save_avatar(avatar, settings.upload_dir)
        try:
            repositories.create_user(
                db,
                name=username,
                email=email,
                password_hash=hash_password(password),
                avatar=avatar_path,
            )
        except repositories.DuplicateUserError:
            uploads.remove_avatar(avatar_path, settings.upload_dir)
            return _error(status.HTTP_400_BAD_REQUEST, 'User with this email already exists.')
    except uploads.InvalidAvatarError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except (SQLAlchemyError, OSError):
        logger.exception('Error registering user %s', email)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Internal Server Error')

    logger.info('Registered user %s', email)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content={'message': 'User registered successfully!'})


@router.post('/login')
def login(
    email: str | None = Form(None),
    password: str | None = Form(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if not email or not password:
        return PlainTextResponse('Email and password are required.', status_code=status.HTTP_400_BAD_REQUEST)

    try:
        user = repositories.get_user_by_email(db, email)
    except SQLAlchemyError:
        logger.exception('Error looking up user %s', email)
        return PlainTextResponse('Internal Server Error.', status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if user is None:
        return PlainTextResponse('User not found.', status_code=status.HTTP_404_NOT_FOUND)
    if not verify_password(password, user.password):
        logger.info('Rejected login for %s', email)
        return PlainTextResponse('Invalid credentials.', status_code=status.HTTP_403_FORBIDDEN)

    claims = {'id': user.id, 'avatar': user.avatar, 'name': user.name, 'email': user.email}
    logger.info('User %s logged in', email)
    return issue_token_response(settings, 'Login successful.', 'user', claims)


@router.post('/admin')
def admin_login(
    password: str | None = Form(None),
    settings: Settings = Depends(get_settings),
):
    if not password:
        return PlainTextResponse('Password is required.', status_code=status.HTTP_400_BAD_REQUEST)
    if password != settings.admin_password:
        logger.info('Rejected admin login')
        return PlainTextResponse('Invalid password.', status_code=status.HTTP_403_FORBIDDEN)

    return issue_token_response(settings, 'Admin Login successful.', 'admin')


@router.post('/guest-login')
def guest_login(settings: Settings = Depends(get_settings)):
    return issue_token_response(settings, 'Guest login successful.', 'guest')


@router.get('/logout')
def logout():
    response = JSONResponse({'message': 'Logged out successfully'})
    response.delete_cookie(TOKEN_COOKIE, httponly=True)
    return response


@router.get('/login')
def login_page(request: Request, auth: AuthContext | None = Depends(get_auth_context)):
    if auth is not None:
        return RedirectResponse('/', status_code=status.HTTP_302_FOUND)
    return render(request, 'login.html', 'Login - EcoTrack')


@router.get('/register')
def register_page(request: Request, auth: AuthContext | None = Depends(get_auth_context)):
    return render(request, 'register.html', 'Register - EcoTrack', auth)


@router.get('/admin')
def admin_login_page(request: Request, auth: AuthContext | None = Depends(get_auth_context)):
    if auth is not None and auth.is_admin:
        return RedirectResponse('/dashboard', status_code=status.HTTP_302_FOUND)
    return render(request, 'admin_login.html', 'Admin Login - EcoTrack', auth)
