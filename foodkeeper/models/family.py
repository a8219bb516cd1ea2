"""Family profile and member models."""

from sqlalchemy import JSON, Column, Enum, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from foodkeeper.database import Base
from foodkeeper.i18n import ENGLISH
from foodkeeper.models.enums import (
    ActivityLevel,
    AgeCategory,
    BabyFoodStage,
    DietaryRestriction,
    DietaryRestrictionCategory,
    Gender,
)
from foodkeeper.models.mixins import TimestampMixin, enum_values


def _restrictions(raw: list[str] | None) -> list[DietaryRestriction]:
    result = []
    for value in raw or []:
        try:
            result.append(DietaryRestriction(value))
        except ValueError:
            continue
    return result


class FamilyProfile(Base, TimestampMixin):
    """The household the recipes are planned for."""

    __tablename__ = "family_profiles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    # Restriction values, e.g. ["Vegetarian", "Nut-Free"]
    dietary_restrictions_raw = Column("dietary_restrictions", JSON, nullable=False, default=list)
    preferences = Column(JSON, nullable=False, default=list)

    # Relationships
    members = relationship(
        "FamilyMember",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="FamilyMember.id",
    )

    @property
    def dietary_restrictions(self) -> list[DietaryRestriction]:
        return _restrictions(self.dietary_restrictions_raw)

    @property
    def total_daily_calories(self) -> float:
        return sum(member.daily_calorie_target for member in self.members)


class FamilyMember(Base, TimestampMixin):
    """A household member; body data drives the Harris-Benedict calorie target."""

    __tablename__ = "family_members"

    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(Integer, ForeignKey("family_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    age = Column(Integer, nullable=False, default=30)
    months_for_baby = Column(Integer, nullable=False, default=0)  # only meaningful when age == 0
    gender = Column(
        Enum(Gender, name="gender", values_callable=enum_values),
        nullable=False,
        default=Gender.MALE,
    )
    height_cm = Column(Float, nullable=False, default=170.0)
    weight_kg = Column(Float, nullable=False, default=70.0)
    activity_level = Column(
        Enum(ActivityLevel, name="activitylevel", values_callable=enum_values),
        nullable=False,
        default=ActivityLevel.MODERATE,
    )
    dietary_restrictions_raw = Column("dietary_restrictions", JSON, nullable=False, default=list)
    custom_allergies = Column(JSON, nullable=False, default=list)

    # Relationships
    profile = relationship("FamilyProfile", back_populates="members")

    @property
    def dietary_restrictions(self) -> list[DietaryRestriction]:
        return _restrictions(self.dietary_restrictions_raw)

    @property
    def daily_calorie_target(self) -> float:
        weight = self.weight_kg if self.weight_kg is not None else 70.0
        height = self.height_cm if self.height_cm is not None else 170.0
        age = self.age or 0
        if Gender(self.gender or Gender.MALE) == Gender.MALE:
            bmr = 13.7516 * weight + 5.0033 * height - 6.755 * age + 66.473
        else:
            bmr = 9.5634 * weight + 1.8496 * height - 4.6756 * age + 655.0955
        return bmr * ActivityLevel(self.activity_level or ActivityLevel.MODERATE).multiplier

    @property
    def age_category(self) -> AgeCategory:
        return AgeCategory.for_age(self.age or 0)

    @property
    def baby_food_stage(self) -> BabyFoodStage | None:
        if self.age != 0 or not self.months_for_baby:
            return None
        if 6 <= self.months_for_baby <= 8:
            return BabyFoodStage.STAGE1
        if 9 <= self.months_for_baby <= 12:
            return BabyFoodStage.STAGE2
        return None

    def all_allergy_info(self, language: str = ENGLISH) -> list[str]:
        """Declared allergy restrictions by name, followed by free-text allergies."""
        predefined = [
            restriction.localized_name(language)
            for restriction in self.dietary_restrictions
            if restriction.category == DietaryRestrictionCategory.ALLERGY
        ]
        return predefined + list(self.custom_allergies or [])
