"""
Admin Auth Endpoints

Sessions are issued by the hosted auth provider; these routes are
placeholders until the admin portal stops talking to it directly.
"""

from fastapi import APIRouter

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login")
async def login():
    return {"message": "Login endpoint - to be implemented"}


@router.post("/logout")
async def logout():
    return {"message": "Logout endpoint - to be implemented"}


@router.post("/refresh")
async def refresh_token():
    return {"message": "Token refresh endpoint - to be implemented"}
