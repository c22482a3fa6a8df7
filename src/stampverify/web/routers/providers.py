from fastapi import APIRouter

from stampverify.core.modules.provider.models import VerifiedPayload, VerifyRequest
from stampverify.web.deps import AppDep
from stampverify.web.openapi import ErrorResponse

router = APIRouter(tags=["providers"])


@router.get(
    "/providers",
    summary="List provider types",
    operation_id="listProviders",
)
async def list_providers(app: AppDep) -> list[str]:
    return app.get_provider_types()


@router.post(
    "/verify",
    summary="Verify address",
    description="Check whether an address satisfies the condition of the given provider type.",
    operation_id="verify",
    responses={
        400: {"model": ErrorResponse, "description": "Unknown provider type"},
        502: {"model": ErrorResponse, "description": "Provider data source returned an unexpected status"},
    },
)
async def verify(verify_data: VerifyRequest, app: AppDep) -> VerifiedPayload:
    return await app.verify(verify_data.type, verify_data.address)
