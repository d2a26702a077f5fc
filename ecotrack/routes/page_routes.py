import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from ecotrack.auth.dependencies import AuthContext, get_auth_context
from ecotrack.core.config import Settings, get_settings
from ecotrack.services import news
from ecotrack.templating import render

router = APIRouter(tags=['pages'])

logger = logging.getLogger(__name__)


@router.get('/news')
def news_page(
    request: Request,
    auth: AuthContext | None = Depends(get_auth_context),
    settings: Settings = Depends(get_settings),
):
    if auth is None:
        return RedirectResponse('/login', status_code=status.HTTP_302_FOUND)
    if auth.is_guest:
        return RedirectResponse('/access-denied', status_code=status.HTTP_302_FOUND)

    notice = None
    articles = []
    if not settings.news_api_key:
        notice = 'News is not configured on this server.'
    else:
        try:
            articles = news.fetch_carbon_news(settings)
        except news.NewsUnavailableError:
            logger.exception('Error fetching news articles')
            notice = 'News is unavailable right now. Please try again later.'

    return render(request, 'news.html', 'News - EcoTrack', auth, articles=articles, notice=notice)


@router.get('/about')
def about(request: Request, auth: AuthContext | None = Depends(get_auth_context)):
    return render(request, 'about.html', 'About - EcoTrack', auth)


@router.get('/access-denied')
def access_denied(request: Request, auth: AuthContext | None = Depends(get_auth_context)):
    return render(request, 'access_denied.html', '403 - Forbidden', auth, status_code=status.HTTP_403_FORBIDDEN)
