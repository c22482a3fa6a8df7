from typing import Annotated, cast

from fastapi import Depends, Query, Request

from stampverify.app import App


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_session_token(token: Annotated[str, Query(min_length=1, description="Session token from /session/init")]) -> str:
    """Session token passed as a query parameter on identity queries."""
    return token


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
SessionTokenDep = Annotated[str, Depends(get_session_token)]
