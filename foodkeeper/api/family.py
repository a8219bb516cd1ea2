"""Family profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from foodkeeper.config import get_settings
from foodkeeper.database import get_db
from foodkeeper.models.family import FamilyMember, FamilyProfile
from foodkeeper.schemas.family import (
    FamilyMemberCreate,
    FamilyMemberResponse,
    FamilyMemberUpdate,
    FamilyProfileResponse,
    FamilyProfileUpdate,
    FamilySummary,
)
from foodkeeper.services.recipe_prompt import (
    HouseholdMember,
    family_info,
    recommended_dish_count,
    total_calorie_target,
)

router = APIRouter(prefix="/api/v1/family", tags=["family"])

DEFAULT_PROFILE_NAME = "My Family"


def get_profile(db: Session) -> FamilyProfile:
    """The household profile, created on first use."""
    profile = db.query(FamilyProfile).order_by(FamilyProfile.id).first()
    if profile is None:
        profile = FamilyProfile(name=DEFAULT_PROFILE_NAME, dietary_restrictions_raw=[], preferences=[])
        db.add(profile)
        db.commit()
        db.refresh(profile)
    return profile


def _raw_fields(data: dict) -> dict:
    if "dietary_restrictions" in data:
        restrictions = data.pop("dietary_restrictions") or []
        data["dietary_restrictions_raw"] = [r.value for r in restrictions]
    if "custom_allergies" in data:
        data["custom_allergies"] = [a.strip() for a in data["custom_allergies"] or [] if a.strip()]
    return data


def get_member_or_404(db: Session, member_id: int) -> FamilyMember:
    member = db.query(FamilyMember).filter(FamilyMember.id == member_id).first()
    if not member:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Family member not found")
    return member


@router.get("", response_model=FamilyProfileResponse)
def read_profile(db: Annotated[Session, Depends(get_db)]):
    return get_profile(db)


@router.patch("", response_model=FamilyProfileResponse)
def update_profile(data: FamilyProfileUpdate, db: Annotated[Session, Depends(get_db)]):
    profile = get_profile(db)
    for field, value in _raw_fields(data.model_dump(exclude_unset=True)).items():
        setattr(profile, field, value)
    db.commit()
    db.refresh(profile)
    return profile


@router.get("/summary", response_model=FamilySummary)
def read_summary(db: Annotated[Session, Depends(get_db)]):
    """Household overview in the configured language."""
    members = [HouseholdMember.from_model(m) for m in get_profile(db).members]
    adults = sum(1 for m in members if m.age >= 18)
    return FamilySummary(
        member_count=len(members),
        adult_count=adults,
        child_count=len(members) - adults,
        total_daily_calories=total_calorie_target(members),
        recommended_dish_count=recommended_dish_count(members),
        description=family_info(members, get_settings().language),
    )


@router.get("/members", response_model=list[FamilyMemberResponse])
def list_members(db: Annotated[Session, Depends(get_db)]):
    return get_profile(db).members


@router.post("/members", response_model=FamilyMemberResponse, status_code=status.HTTP_201_CREATED)
def add_member(data: FamilyMemberCreate, db: Annotated[Session, Depends(get_db)]):
    profile = get_profile(db)
    member = FamilyMember(profile_id=profile.id, **_raw_fields(data.model_dump()))
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


@router.get("/members/{member_id}", response_model=FamilyMemberResponse)
def get_member(member_id: int, db: Annotated[Session, Depends(get_db)]):
    return get_member_or_404(db, member_id)


@router.patch("/members/{member_id}", response_model=FamilyMemberResponse)
def update_member(member_id: int, data: FamilyMemberUpdate, db: Annotated[Session, Depends(get_db)]):
    member = get_member_or_404(db, member_id)
    for field, value in _raw_fields(data.model_dump(exclude_unset=True)).items():
        setattr(member, field, value)
    db.commit()
    db.refresh(member)
    return member


@router.delete("/members/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_member(member_id: int, db: Annotated[Session, Depends(get_db)]):
    db.delete(get_member_or_404(db, member_id))
    db.commit()
