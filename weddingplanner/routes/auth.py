import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr, field_validator, model_validator
from sqlalchemy.orm import Session

from ..auth import create_access_token, get_current_user, hash_password, verify_password
from ..database import get_db
from ..models import ROLE_CLIENT, ROLE_VENDOR, Client, User, Vendor
from ..rate_limiter import create_rate_limiter
from ..schemas import UserResponse, user_to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

login_rate_limit = create_rate_limiter(limit=10, window_seconds=300, key_prefix="login")
register_rate_limit = create_rate_limiter(limit=5, window_seconds=3600, key_prefix="register")


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    firstName: str
    lastName: Optional[str] = None
    phone: Optional[str] = None
    role: str = ROLE_CLIENT
    # Vendor-only fields
    businessName: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters long")
        return v

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        if v not in (ROLE_CLIENT, ROLE_VENDOR):
            raise ValueError("role must be 'client' or 'vendor'")
        return v

    @model_validator(mode="after")
    def validate_vendor_fields(self):
        if self.role == ROLE_VENDOR and not (self.businessName or "").strip():
            raise ValueError("businessName is required for vendor accounts")
        return self


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AuthResponse(BaseModel):
    token: str
    role: str
    user: UserResponse


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    data: RegisterRequest,
    db: Session = Depends(get_db),
    _: None = Depends(register_rate_limit),
):
    """Create a client or vendor account. Vendors start unapproved."""
    email = data.email.lower()
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=409, detail="This email is already registered")

    user = User(
        email=email,
        password_hash=hash_password(data.password),
        first_name=data.firstName.strip(),
        last_name=(data.lastName or "").strip() or None,
        phone=data.phone,
        role=data.role,
    )
    db.add(user)
    db.flush()

    if data.role == ROLE_VENDOR:
        db.add(
            Vendor(
                user_id=user.id,
                business_name=data.businessName.strip(),
                category=data.category,
                description=data.description,
                location=data.location,
                phone=data.phone,
                is_approved=False,
            )
        )
    else:
        db.add(Client(user_id=user.id))

    db.commit()
    db.refresh(user)
    logger.info(f"🆕 Registered {user.role} account: {user.email}")

    return AuthResponse(
        token=create_access_token(user), role=user.role, user=user_to_response(user)
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    db: Session = Depends(get_db),
    _: None = Depends(login_rate_limit),
):
    user = db.query(User).filter(User.email == data.email.lower()).first()
    if not user or not verify_password(data.password, user.password_hash):
        logger.warning(f"⚠️ Failed login for {data.email}")
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="Account is disabled")

    logger.info(f"✅ User logged in: {user.email}")
    return AuthResponse(
        token=create_access_token(user), role=user.role, user=user_to_response(user)
    )


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)):
    return user_to_response(user)
