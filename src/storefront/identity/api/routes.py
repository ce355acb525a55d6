"""FastAPI endpoints for accounts: registration, login and the caller's profile."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.identity.api.dependencies import CurrentUser, get_current_user
from storefront.identity.api.schemas import (
    AddressIdResponse,
    AddressRequest,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    StatusResponse,
    TokenResponse,
    UpdateProfileRequest,
    UserIdResponse,
    UserResponse,
)
from storefront.identity.authentication import authenticate
from storefront.identity.profile import AddAddress, ChangePassword, RemoveAddress, UpdateProfile
from storefront.identity.registration import RegisterUser
from storefront.identity.user import User

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=201, response_model=UserIdResponse)
async def register(body: RegisterRequest) -> UserIdResponse:
    command = RegisterUser(
        email=body.email,
        password=body.password,
        full_name=body.full_name,
    )
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest) -> TokenResponse:
    auth = authenticate(body.email, body.password)
    return TokenResponse(
        access_token=auth.token,
        expires_at=auth.expires_at,
        user=UserResponse.from_user(auth.user),
    )


@router.get("/profile", response_model=UserResponse)
async def get_profile(current_user: CurrentUser = Depends(get_current_user)) -> UserResponse:
    user = current_domain.repository_for(User).get(current_user.user_id)
    return UserResponse.from_user(user)


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    body: UpdateProfileRequest,
    current_user: CurrentUser = Depends(get_current_user),
) -> UserResponse:
    command = UpdateProfile(user_id=current_user.user_id, full_name=body.full_name)
    current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(current_user.user_id)
    return UserResponse.from_user(user)


@router.put("/password", response_model=StatusResponse)
async def change_password(
    body: ChangePasswordRequest,
    current_user: CurrentUser = Depends(get_current_user),
) -> StatusResponse:
    command = ChangePassword(
        user_id=current_user.user_id,
        current_password=body.current_password,
        new_password=body.new_password,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@router.post("/addresses", status_code=201, response_model=AddressIdResponse)
async def add_address(
    body: AddressRequest,
    current_user: CurrentUser = Depends(get_current_user),
) -> AddressIdResponse:
    command = AddAddress(
        user_id=current_user.user_id,
        street=body.street,
        city=body.city,
        postal_code=body.postal_code,
        country=body.country,
    )
    result = current_domain.process(command, asynchronous=False)
    return AddressIdResponse(address_id=result)


@router.delete("/addresses/{address_id}", response_model=StatusResponse)
async def remove_address(
    address_id: str,
    current_user: CurrentUser = Depends(get_current_user),
) -> StatusResponse:
    command = RemoveAddress(user_id=current_user.user_id, address_id=address_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
