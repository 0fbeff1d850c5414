"""
Class Group API Endpoints - not implemented yet
"""

from fastapi import APIRouter

router = APIRouter(prefix="/groups", tags=["Groups"])


@router.get("")
async def list_groups():
    return {"message": "Get my groups - to be implemented"}


@router.get("/{group_id}")
async def get_group(group_id: str):
    return {"message": "Get group details - to be implemented"}


@router.get("/{group_id}/messages")
async def get_group_messages(group_id: str):
    return {"message": "Get group messages - to be implemented"}


@router.post("/{group_id}/messages")
async def send_group_message(group_id: str):
    return {"message": "Send group message - to be implemented"}
