from enum import Enum

from pydantic import BaseModel


class Category(str, Enum):
    """Closed set of solution categories. Each routes to its own follow-up form."""

    SUPPLEMENTS_VITAMINS = "supplements_vitamins"
    MEDICATIONS = "medications"
    NATURAL_REMEDIES = "natural_remedies"
    BEAUTY_SKINCARE = "beauty_skincare"
    THERAPISTS_COUNSELORS = "therapists_counselors"
    DOCTORS_SPECIALISTS = "doctors_specialists"
    COACHES_MENTORS = "coaches_mentors"
    ALTERNATIVE_PRACTITIONERS = "alternative_practitioners"
    PROFESSIONAL_SERVICES = "professional_services"
    MEDICAL_PROCEDURES = "medical_procedures"
    CRISIS_RESOURCES = "crisis_resources"
    EXERCISE_MOVEMENT = "exercise_movement"
    MEDITATION_MINDFULNESS = "meditation_mindfulness"
    HABITS_ROUTINES = "habits_routines"
    HOBBIES_ACTIVITIES = "hobbies_activities"
    GROUPS_COMMUNITIES = "groups_communities"
    SUPPORT_GROUPS = "support_groups"
    APPS_SOFTWARE = "apps_software"
    PRODUCTS_DEVICES = "products_devices"
    BOOKS_COURSES = "books_courses"
    DIET_NUTRITION = "diet_nutrition"
    SLEEP = "sleep"
    FINANCIAL_PRODUCTS = "financial_products"


class CategoryInfo(BaseModel):
    display_name: str
    description: str

    class Config:
        frozen = True


class CategoryOption(CategoryInfo):
    value: str
