from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging

from tripbook.database import get_db
from tripbook.exceptions import TripBookError
from tripbook.schemas.user import (
    AuthResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)
from tripbook.services.auth import (
    authenticate_user,
    create_user_token,
    get_current_user_id,
    get_user,
    register_user,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
def register(user: UserCreate, db: Session = Depends(get_db)):
    try:
        db_user = register_user(db, user)
    except TripBookError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)

    return {"token": create_user_token(db_user), "user": db_user}


@router.post("/login", response_model=AuthResponse)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    if not credentials.email or not credentials.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required",
        )

    user = authenticate_user(db, credentials.email, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials"
        )

    logger.info("Login successful for user id=%s", user.id)
    return {"token": create_user_token(user), "user": user}


@router.get("/profile", response_model=UserResponse)
def read_profile(
    user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)
):
    user = get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
