# app/api/v1/routes/auth.py
from fastapi import APIRouter, Response, status

router = APIRouter(prefix="/auth", tags=["Authentication"])

# Sign-in happens at the identity provider; this only drops the cookie copy of the token
@router.post("/jwt/logout", status_code=status.HTTP_200_OK)
async def logout(response: Response):
    """
    Logout endpoint that doesn't require authentication.
    This endpoint will clear the access token cookie if present.
    """
    response.delete_cookie(key="access_token")
    return {"detail": "Successfully logged out"}
