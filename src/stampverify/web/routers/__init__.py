from stampverify.web.routers.providers import router as providers_router
from stampverify.web.routers.session import router as session_router

__all__ = [
    "providers_router",
    "session_router",
]
