from dataclasses import dataclass

from blog_api.core.services import DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
