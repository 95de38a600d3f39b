"""
Category Configuration

Static table of the solution categories: display names, descriptions and the
groups used by category pickers. Loaded once into an immutable registry that
is handed to the detection components. No I/O.
"""
from types import MappingProxyType
from typing import Mapping, Optional

from wwfm.schemas.category import Category, CategoryInfo, CategoryOption

CATEGORY_INFO: Mapping[Category, CategoryInfo] = MappingProxyType({
    Category.SUPPLEMENTS_VITAMINS: CategoryInfo(
        display_name="Supplements & Vitamins",
        description="Nutritional supplements, vitamins, and minerals",
    ),
    Category.MEDICATIONS: CategoryInfo(
        display_name="Medications",
        description="Prescription and over-the-counter medications",
    ),
    Category.NATURAL_REMEDIES: CategoryInfo(
        display_name="Natural Remedies",
        description="Herbal supplements, traditional remedies, and natural treatments",
    ),
    Category.BEAUTY_SKINCARE: CategoryInfo(
        display_name="Beauty & Skincare",
        description="Skincare products, cosmetics, and beauty treatments",
    ),
    Category.THERAPISTS_COUNSELORS: CategoryInfo(
        display_name="Therapists & Counselors",
        description="Mental health professionals, therapists, and counseling services",
    ),
    Category.DOCTORS_SPECIALISTS: CategoryInfo(
        display_name="Doctors & Specialists",
        description="Medical doctors, specialists, and healthcare providers",
    ),
    Category.COACHES_MENTORS: CategoryInfo(
        display_name="Coaches & Mentors",
        description="Life coaches, career mentors, and personal development guides",
    ),
    Category.ALTERNATIVE_PRACTITIONERS: CategoryInfo(
        display_name="Alternative Practitioners",
        description="Acupuncturists, chiropractors, and holistic practitioners",
    ),
    Category.PROFESSIONAL_SERVICES: CategoryInfo(
        display_name="Professional Services",
        description="Personal trainers, nutritionists, and other professional services",
    ),
    Category.MEDICAL_PROCEDURES: CategoryInfo(
        display_name="Medical Procedures",
        description="Medical treatments, surgeries, and therapeutic procedures",
    ),
    Category.CRISIS_RESOURCES: CategoryInfo(
        display_name="Crisis Resources",
        description="Crisis hotlines, emergency support, and immediate help resources",
    ),
    Category.EXERCISE_MOVEMENT: CategoryInfo(
        display_name="Exercise & Movement",
        description="Physical activities, sports, and fitness routines",
    ),
    Category.MEDITATION_MINDFULNESS: CategoryInfo(
        display_name="Meditation & Mindfulness",
        description="Meditation practices, mindfulness techniques, and relaxation methods",
    ),
    Category.HABITS_ROUTINES: CategoryInfo(
        display_name="Habits & Routines",
        description="Daily habits, productivity routines, and lifestyle practices",
    ),
    Category.HOBBIES_ACTIVITIES: CategoryInfo(
        display_name="Hobbies & Activities",
        description="Creative pursuits, recreational activities, and personal interests",
    ),
    Category.GROUPS_COMMUNITIES: CategoryInfo(
        display_name="Groups & Communities",
        description="Social groups, clubs, and community organizations",
    ),
    Category.SUPPORT_GROUPS: CategoryInfo(
        display_name="Support Groups",
        description="Peer support groups, recovery groups, and mutual aid communities",
    ),
    Category.APPS_SOFTWARE: CategoryInfo(
        display_name="Apps & Software",
        description="Mobile apps, software tools, and digital solutions",
    ),
    Category.PRODUCTS_DEVICES: CategoryInfo(
        display_name="Products & Devices",
        description="Physical products, devices, and equipment",
    ),
    Category.BOOKS_COURSES: CategoryInfo(
        display_name="Books & Courses",
        description="Educational materials, online courses, and self-help resources",
    ),
    Category.DIET_NUTRITION: CategoryInfo(
        display_name="Diet & Nutrition",
        description="Dietary approaches, meal plans, and nutritional strategies",
    ),
    Category.SLEEP: CategoryInfo(
        display_name="Sleep",
        description="Sleep improvement techniques, routines, and solutions",
    ),
    Category.FINANCIAL_PRODUCTS: CategoryInfo(
        display_name="Financial Products",
        description="Financial tools, accounts, and money management solutions",
    ),
})

# Picker groups, in display order
CATEGORY_GROUPS: Mapping[str, tuple[Category, ...]] = MappingProxyType({
    "Things you take": (
        Category.SUPPLEMENTS_VITAMINS,
        Category.MEDICATIONS,
        Category.NATURAL_REMEDIES,
        Category.BEAUTY_SKINCARE,
    ),
    "People you see": (
        Category.THERAPISTS_COUNSELORS,
        Category.DOCTORS_SPECIALISTS,
        Category.COACHES_MENTORS,
        Category.ALTERNATIVE_PRACTITIONERS,
        Category.PROFESSIONAL_SERVICES,
        Category.MEDICAL_PROCEDURES,
        Category.CRISIS_RESOURCES,
    ),
    "Things you do": (
        Category.EXERCISE_MOVEMENT,
        Category.MEDITATION_MINDFULNESS,
        Category.HABITS_ROUTINES,
        Category.HOBBIES_ACTIVITIES,
        Category.GROUPS_COMMUNITIES,
        Category.SUPPORT_GROUPS,
    ),
    "Things you use": (
        Category.APPS_SOFTWARE,
        Category.PRODUCTS_DEVICES,
        Category.BOOKS_COURSES,
    ),
    "Changes you make": (
        Category.DIET_NUTRITION,
        Category.SLEEP,
    ),
    "Financial solutions": (
        Category.FINANCIAL_PRODUCTS,
    ),
})


class CategoryRegistry:
    """Read-only lookup over the category table."""

    def __init__(
        self,
        info: Mapping[Category, CategoryInfo] = CATEGORY_INFO,
        groups: Mapping[str, tuple[Category, ...]] = CATEGORY_GROUPS,
    ):
        self._info = MappingProxyType(dict(info))
        self._groups = MappingProxyType({name: tuple(members) for name, members in groups.items()})

    def parse(self, category: str | Category | None) -> Optional[Category]:
        """Return the Category for a raw key, or None if it is not a member."""
        if category is None:
            return None
        try:
            return Category(category)
        except ValueError:
            return None

    def get_info(self, category: str | Category) -> CategoryInfo:
        """
        Get display name and description for a category.

        Unknown keys fall back to a title-cased display name, e.g.
        "sleep_aids" -> "Sleep Aids", with an empty description.
        """
        member = self.parse(category)
        if member is not None and member in self._info:
            return self._info[member]

        key = category.value if isinstance(category, Category) else str(category)
        return CategoryInfo(
            display_name=key.replace("_", " ").title(),
            description="",
        )

    def get_display_name(self, category: str | Category) -> str:
        return self.get_info(category).display_name

    def get_by_group(self) -> dict[str, list[CategoryOption]]:
        return {
            group: [
                CategoryOption(value=member.value, **self.get_info(member).model_dump())
                for member in members
            ]
            for group, members in self._groups.items()
        }


# Singleton instance
category_registry = CategoryRegistry()


def get_category_info(category: str | Category) -> CategoryInfo:
    return category_registry.get_info(category)


def get_category_display_name(category: str | Category) -> str:
    """Get category display name (convenience function)."""
    return category_registry.get_display_name(category)


def get_categories_by_group() -> dict[str, list[CategoryOption]]:
    """Get all categories grouped by type."""
    return category_registry.get_by_group()
