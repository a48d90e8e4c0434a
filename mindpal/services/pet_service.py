"""
Pet companion catalogs and care actions.

The care functions are pure: they take the current profile (and wardrobe)
and return the fields to write back, raising ValueError when the action
isn't allowed.
"""

from datetime import datetime, timezone
from typing import Any

from mindpal.models.schemas import Pet, Profile

STAT_MAX = 100

PETS: dict[str, Pet] = {
    "dog": Pet(
        name="Buddy",
        emoji="🐶",
        color="bg-amber-100",
        type="dog",
        description="Your loyal companion for every journey",
    ),
    "cat": Pet(
        name="Whiskers",
        emoji="🐱",
        color="bg-purple-100",
        type="cat",
        description="Independent and caring friend",
    ),
    "penguin": Pet(
        name="Waddles",
        emoji="🐧",
        color="bg-blue-100",
        type="penguin",
        description="Cool and calm in any situation",
    ),
    "rabbit": Pet(
        name="Hoppy",
        emoji="🐰",
        color="bg-pink-100",
        type="rabbit",
        description="Energetic and full of life",
    ),
}

FOODS: dict[str, dict[str, Any]] = {
    "apple": {"name": "Fresh Apple", "emoji": "🍎", "cost": 5, "happiness": 10, "health": 15},
    "fish": {"name": "Premium Fish", "emoji": "🐟", "cost": 15, "happiness": 20, "health": 25},
    "cake": {"name": "Birthday Cake", "emoji": "🎂", "cost": 25, "happiness": 35, "health": 10},
    "smoothie": {"name": "Vitamin Smoothie", "emoji": "🥤", "cost": 12, "happiness": 15, "health": 30},
    "cookie": {"name": "Heart Cookie", "emoji": "🍪", "cost": 8, "happiness": 18, "health": 8},
    "salad": {"name": "Garden Salad", "emoji": "🥗", "cost": 10, "happiness": 12, "health": 35},
}

PLAY_ACTIVITIES: dict[str, dict[str, Any]] = {
    "duel": {"name": "Trainer Duel", "emoji": "⚔️", "happiness": 30, "coin_reward": 25},
    "stargazing": {"name": "Star Gazing", "emoji": "🔭", "happiness": 22, "coin_reward": 18},
    "candycrush": {"name": "Candy Crush", "emoji": "🍭", "happiness": 28, "coin_reward": 20},
    "wordscape": {"name": "Wordscape", "emoji": "🔤", "happiness": 25, "coin_reward": 15},
    "breathing": {"name": "Breathing Buddy", "emoji": "🌬️", "happiness": 35, "coin_reward": 20},
}

ACCESSORIES: dict[str, dict[str, Any]] = {
    # Hats
    "hat1": {"name": "Party Hat", "emoji": "🎉", "price": 50, "category": "hat"},
    "hat2": {"name": "Crown", "emoji": "👑", "price": 100, "category": "hat"},
    "hat3": {"name": "Wizard Hat", "emoji": "🧙", "price": 75, "category": "hat"},
    "hat4": {"name": "Sun Hat", "emoji": "👒", "price": 40, "category": "hat"},
    # Outfits
    "outfit1": {"name": "Superhero Cape", "emoji": "🦸", "price": 80, "category": "outfit"},
    "outfit2": {"name": "Cozy Sweater", "emoji": "🧥", "price": 60, "category": "outfit"},
    "outfit3": {"name": "Formal Tux", "emoji": "🤵", "price": 120, "category": "outfit"},
    "outfit4": {"name": "Rainbow Scarf", "emoji": "🌈", "price": 45, "category": "outfit"},
    # Accessories
    "acc1": {"name": "Sunglasses", "emoji": "😎", "price": 35, "category": "accessory"},
    "acc2": {"name": "Bow Tie", "emoji": "🎀", "price": 30, "category": "accessory"},
    "acc3": {"name": "Flower Crown", "emoji": "🌸", "price": 55, "category": "accessory"},
    "acc4": {"name": "Magic Wand", "emoji": "🪄", "price": 65, "category": "accessory"},
    # Backgrounds
    "bg1": {"name": "Beach Paradise", "emoji": "🏖️", "price": 90, "category": "background"},
    "bg2": {"name": "Space Station", "emoji": "🚀", "price": 110, "category": "background"},
    "bg3": {"name": "Enchanted Forest", "emoji": "🌲", "price": 85, "category": "background"},
    "bg4": {"name": "Cozy Cabin", "emoji": "🏠", "price": 70, "category": "background"},
}


def empty_wardrobe() -> dict[str, Any]:
    return {"owned": [], "equipped": {}}


def _clamp(value: int) -> int:
    return max(0, min(STAT_MAX, value))


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _require_pet(profile: Profile) -> None:
    if not profile.pet_type:
        raise ValueError("Choose a pet first")


def select_pet(pet_type: str, name: str | None = None) -> dict[str, Any]:
    """Adopt a pet from the catalog with fresh stats."""
    pet = PETS.get(pet_type)
    if pet is None:
        raise ValueError(f"Unknown pet type: {pet_type}")

    return {
        "selected_pet": pet.model_dump(),
        "pet_type": pet.type,
        "pet_name": name or pet.name,
        "pet_hunger": 0,
        "pet_happiness": STAT_MAX,
        "pet_health": STAT_MAX,
    }


def feed(profile: Profile, food_id: str) -> dict[str, Any]:
    """Spend coins on food; raises happiness and health, lowers hunger."""
    _require_pet(profile)

    food = FOODS.get(food_id)
    if food is None:
        raise ValueError(f"Unknown food: {food_id}")

    if profile.coins < food["cost"]:
        raise ValueError("Not enough coins! 🪙")

    return {
        "coins": profile.coins - food["cost"],
        "pet_happiness": _clamp((profile.pet_happiness or 0) + food["happiness"]),
        "pet_health": _clamp((profile.pet_health or 0) + food["health"]),
        "pet_hunger": _clamp((profile.pet_hunger or 0) - food["health"]),
        "last_fed": _now(),
    }


def play(profile: Profile, activity_id: str) -> dict[str, Any]:
    """Play with the pet; earns coins and happiness."""
    _require_pet(profile)

    activity = PLAY_ACTIVITIES.get(activity_id)
    if activity is None:
        raise ValueError(f"Unknown activity: {activity_id}")

    return {
        "coins": profile.coins + activity["coin_reward"],
        "pet_happiness": _clamp((profile.pet_happiness or 0) + activity["happiness"]),
        "last_played": _now(),
    }


def purchase_accessory(
    profile: Profile, wardrobe: dict[str, Any], item_id: str
) -> tuple[int, dict[str, Any]]:
    """Buy an accessory. Returns the new coin balance and wardrobe."""
    item = ACCESSORIES[item_id]

    if item_id in wardrobe["owned"]:
        raise ValueError("You already own this item")

    if profile.coins < item["price"]:
        raise ValueError("Not enough coins! 🪙")

    return profile.coins - item["price"], {
        **wardrobe,
        "owned": [*wardrobe["owned"], item_id],
    }


def equip_accessory(wardrobe: dict[str, Any], item_id: str) -> dict[str, Any]:
    """Put an owned item on the pet, replacing whatever was in that slot."""
    if item_id not in wardrobe["owned"]:
        raise ValueError("You don't own this item")

    category = ACCESSORIES[item_id]["category"]
    return {**wardrobe, "equipped": {**wardrobe["equipped"], category: item_id}}
