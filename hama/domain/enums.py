"""Domain enumerations and category lookup tables."""

import enum


class StoreCategory(str, enum.Enum):
    RESTAURANT = "restaurant"
    CAFE = "cafe"
    SALON = "salon"
    ACTIVITY = "activity"


class AdminRole(str, enum.Enum):
    ADMIN = "ADMIN"
    STAFF = "STAFF"


CATEGORY_LABELS: dict[StoreCategory, str] = {
    StoreCategory.RESTAURANT: "식당",
    StoreCategory.CAFE: "카페",
    StoreCategory.SALON: "미용실",
    StoreCategory.ACTIVITY: "액티비티",
}

# Kakao category_group_code -> our category
KAKAO_CATEGORY_CODES: dict[str, StoreCategory] = {
    "fd6": StoreCategory.RESTAURANT,
    "ce7": StoreCategory.CAFE,
    "bk9": StoreCategory.SALON,
    "at4": StoreCategory.ACTIVITY,
}

# Substring hints found in free-form Korean category names
CATEGORY_HINTS: list[tuple[StoreCategory, tuple[str, ...]]] = [
    (StoreCategory.SALON, ("미용", "헤어", "이발")),
    (StoreCategory.CAFE, ("카페", "커피")),
    (StoreCategory.RESTAURANT, ("식당", "음식", "레스토랑", "맛집")),
    (StoreCategory.ACTIVITY, ("액티비", "활동", "체험", "공원")),
]
