"""Partner connection API routes."""

from fastapi import APIRouter, status

from couplesflix.api.deps import CurrentUser
from couplesflix.schemas.connection import ConnectionResponse, ConnectionWithPartner, ConnectRequest
from couplesflix.services.connection_service import ConnectionService

router = APIRouter(prefix="/connections", tags=["connections"])


@router.get(
    "/me",
    response_model=ConnectionWithPartner,
    summary="Get my connection",
    description="Returns the caller's connection and partner profile; both are null when unpaired.",
)
async def get_my_connection(user: CurrentUser) -> ConnectionWithPartner:
    """Get the caller's connection, if any."""
    service = ConnectionService()
    connection = await service.get_connection(user.user_id)
    if connection is None:
        return ConnectionWithPartner()

    partner = await service.get_partner(user.user_id, connection=connection)
    return ConnectionWithPartner(connection=connection, partner=partner)


@router.post(
    "",
    response_model=ConnectionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Connect with partner",
    responses={
        201: {"description": "Connected"},
        404: {"description": "No profile has this code"},
        409: {"description": "Either side is already connected"},
        422: {"description": "Malformed code or own code"},
    },
)
async def connect_with_partner(data: ConnectRequest, user: CurrentUser) -> ConnectionResponse:
    """Pair the caller with the owner of `partner_code`."""
    return await ConnectionService().connect(user.user_id, data.partner_code)
