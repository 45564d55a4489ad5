from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from tripbook.database import get_db
from tripbook.models.user import User
from tripbook.schemas.user import UserCreate
from tripbook.exceptions import ValidationError
import logging
import os
from dotenv import load_dotenv
import warnings

# Suppress the bcrypt warning
warnings.filterwarnings("ignore", ".*bcrypt version.*")
warnings.filterwarnings("ignore", ".*trapped.*error reading bcrypt version.*")

load_dotenv()

logger = logging.getLogger(__name__)

# Security configuration
SECRET_KEY = os.getenv("SECRET_KEY", "your-secret-key")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(
    os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440")
)  # 24 hours
API_PREFIX = os.getenv("API_PREFIX", "/api")

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=int(os.getenv("BCRYPT_ROUNDS", "12")),
)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{API_PREFIX}/auth/login")


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt


def create_user_token(user: User) -> str:
    return create_access_token(data={"sub": str(user.id)})


def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email).first()


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def register_user(db: Session, user: UserCreate) -> User:
    if get_user_by_email(db, user.email):
        raise ValidationError("User already exists")

    db_user = User(
        name=user.name,
        email=user.email,
        phone=user.phone,
        address=user.address.model_dump(),
        hashed_password=get_password_hash(user.password),
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        db.rollback()
        raise ValidationError("User already exists")
    db.refresh(db_user)
    logger.info("User registered: id=%s email=%s", db_user.id, db_user.email)
    return db_user


def authenticate_user(db: Session, email: str, password: str):
    user = get_user_by_email(db, email)
    if not user:
        logger.info("Login failed, unknown email: %s", email)
        return False

    if not verify_password(password, user.hashed_password):
        logger.info("Login failed, password mismatch for user id=%s", user.id)
        return False

    return user


def get_token_user_id(token: str) -> Optional[int]:
    """Return the user id carried by a valid token, or None."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        subject = payload.get("sub")
        if subject is None:
            return None
        return int(subject)
    except (JWTError, ValueError):
        return None


def get_current_user_id(token: str = Depends(oauth2_scheme)) -> int:
    user_id = get_token_user_id(token)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id


def get_current_user(
    user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)
):
    user = get_user(db, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
