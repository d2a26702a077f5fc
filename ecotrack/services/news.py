import requests

from ecotrack.core.config import Settings

NEWS_QUERY = "carbon"


class NewsUnavailableError(RuntimeError):
    pass


def fetch_carbon_news(settings: Settings) -> list[dict]:
    """Fetch the latest carbon-related articles from NewsAPI."""
    if not settings.news_api_key:
        return []

    params = {"q": NEWS_QUERY, "sortBy": "publishedAt", "apiKey": settings.news_api_key}
    try:
        response = requests.get(settings.news_api_url, params=params, timeout=settings.news_timeout_seconds)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as exc:
        raise NewsUnavailableError("News service unavailable.") from exc

    return payload.get("articles") or []
