"""Owner endpoints: create, list, get with documents, delete."""

from typing import List

from fastapi import APIRouter, status

from docvault.core.logging import get_api_logger
from docvault.models.schemas import (
    OwnerCreate,
    OwnerDeleteResponse,
    OwnerDetailResponse,
    OwnerResponse,
)
from docvault.services.owner_service import owner_service

logger = get_api_logger()

router = APIRouter(prefix="/owners", tags=["Owners"])


@router.post(
    "",
    response_model=OwnerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Owner",
    operation_id="createOwner",
)
async def create_owner(owner_data: OwnerCreate):
    """Create an owner with an empty document list."""
    owner = await owner_service.create_owner(owner_data)
    logger.info("Owner created via API", owner_id=owner.id)
    return owner


@router.get(
    "",
    response_model=List[OwnerResponse],
    summary="List Owners",
    operation_id="listOwners",
)
async def list_owners():
    """List all owners with their document ids."""
    return await owner_service.list_owners()


@router.get(
    "/{owner_id}",
    response_model=OwnerDetailResponse,
    summary="Get Owner",
    operation_id="getOwner",
    description="Get an owner with its linked documents in link order.",
)
async def get_owner(owner_id: str):
    return await owner_service.get_owner(owner_id)


@router.delete(
    "/{owner_id}",
    response_model=OwnerDeleteResponse,
    summary="Delete Owner",
    operation_id="deleteOwner",
    description="Delete an owner. Its documents are kept and remain readable by ID.",
)
async def delete_owner(owner_id: str):
    logger.info("Owner delete requested", owner_id=owner_id)
    return await owner_service.delete_owner(owner_id)
