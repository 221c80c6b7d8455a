from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.api.deps import get_db, get_identity
from jobboard.api.schemas import AuthResponse, LoginRequest, MessageResponse, RegisterRequest
from jobboard.core.accounts import AccountService
from jobboard.types import Identity

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> dict:
    result = AccountService(db).register(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
    )
    return {"message": "User registered successfully", **result}


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> dict:
    result = AccountService(db).login(email=payload.email, password=payload.password)
    return {"message": "Login successful", **result}


@router.get("/profile")
def profile(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)) -> dict:
    return {"success": True, "user": AccountService(db).profile(identity)}


@router.post("/logout", response_model=MessageResponse)
def logout(identity: Identity = Depends(get_identity)) -> dict:
    return {"message": "Logged out successfully"}


@router.get("/verify")
def verify(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)) -> dict:
    return {"valid": True, "user": AccountService(db).verify(identity)}
