"""API Dependencies — FastAPI wiring of repository, services, notifier and caller identity.

Invariants:
    - One repository per request, bound to the request's AsyncSession
    - Caller identity comes from a verified bearer token only
    - Notifications are scheduled on the request's BackgroundTasks

Design Decisions:
    - get_mail_service is a separate dependency so tests (and deployments) can
      swap the delivery backend via app.dependency_overrides
"""

from fastapi import BackgroundTasks, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from cityinfo.config import Settings, get_settings
from cityinfo.core.errors import AuthenticationError
from cityinfo.core.identity import CallerIdentity
from cityinfo.core.repository_protocols import MailService
from cityinfo.infrastructure.city_info_repository import SqlCityInfoRepository
from cityinfo.infrastructure.database import get_db
from cityinfo.infrastructure.mail_service import BackgroundNotifier, LocalMailService
from cityinfo.infrastructure.tokens import decode_access_token
from cityinfo.services.city_service import CityService
from cityinfo.services.point_of_interest_service import PointOfInterestService

bearer_scheme = HTTPBearer(auto_error=False)


def get_repository(db: AsyncSession = Depends(get_db)) -> SqlCityInfoRepository:
    return SqlCityInfoRepository(db)


def get_mail_service(settings: Settings = Depends(get_settings)) -> MailService:
    return LocalMailService(settings)


def get_city_service(
    repository: SqlCityInfoRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
) -> CityService:
    return CityService(repository, max_page_size=settings.max_cities_page_size)


def get_point_of_interest_service(
    background_tasks: BackgroundTasks,
    repository: SqlCityInfoRepository = Depends(get_repository),
    mail_service: MailService = Depends(get_mail_service),
) -> PointOfInterestService:
    return PointOfInterestService(
        repository, BackgroundNotifier(background_tasks, mail_service),
    )


def get_current_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> CallerIdentity:
    """Resolve the authenticated caller or raise 401."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError()
    claims = decode_access_token(credentials.credentials, settings)
    return CallerIdentity.from_claims(claims)
