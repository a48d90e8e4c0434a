"""
Pet companion endpoints: adoption, care actions and the accessory shop.
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from mindpal.core.deps import CurrentProfile, KVStoreDep, SupabaseDep
from mindpal.models.schemas import Pet, PetType, Profile
from mindpal.services import pet_service
from mindpal.services.kv_store import KVStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pets", tags=["pets"])


# Request/Response Models
class SelectPetRequest(BaseModel):
    pet_type: PetType
    name: str | None = Field(None, min_length=1, max_length=30)


class FeedRequest(BaseModel):
    food_id: str


class PlayRequest(BaseModel):
    activity_id: str


class CatalogResponse(BaseModel):
    pets: list[Pet]
    foods: dict[str, dict[str, Any]]
    activities: dict[str, dict[str, Any]]


class Wardrobe(BaseModel):
    owned: list[str]
    equipped: dict[str, str]


class ShopResponse(BaseModel):
    items: dict[str, dict[str, Any]]
    wardrobe: Wardrobe
    coins: int


class PurchaseResponse(BaseModel):
    coins: int
    wardrobe: Wardrobe
    message: str


def _wardrobe_key(user_id: str) -> str:
    return f"wardrobe:{user_id}"


async def _load_wardrobe(kv: KVStore, user_id: str) -> dict[str, Any]:
    return await kv.get(_wardrobe_key(user_id)) or pet_service.empty_wardrobe()


@router.get("/catalog", response_model=CatalogResponse)
async def get_catalog() -> CatalogResponse:
    """Pets, foods and play activities on offer."""
    return CatalogResponse(
        pets=list(pet_service.PETS.values()),
        foods=pet_service.FOODS,
        activities=pet_service.PLAY_ACTIVITIES,
    )


@router.post("/select", response_model=Profile)
async def select_pet(
    request: SelectPetRequest,
    profile: CurrentProfile,
    supabase_service: SupabaseDep,
) -> Profile:
    """Adopt a pet. Its stats start full."""
    try:
        updates = pet_service.select_pet(request.pet_type, request.name)
        updated = await supabase_service.update_profile(profile.id, updates)
        logger.info(f"🐾 {profile.id} adopted a {request.pet_type}")
        return updated

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to select pet: {str(e)}")


@router.delete("/select", response_model=Profile)
async def release_pet(
    profile: CurrentProfile,
    supabase_service: SupabaseDep,
    kv: KVStoreDep,
) -> Profile:
    """Give up the current pet. Its wardrobe goes with it."""
    if not profile.pet_type:
        raise HTTPException(status_code=400, detail="You don't have a pet")

    try:
        updated = await supabase_service.update_profile(
            profile.id,
            {
                "selected_pet": None,
                "pet_type": None,
                "pet_name": None,
                "pet_hunger": None,
                "pet_happiness": None,
                "pet_health": None,
            },
        )
        await kv.delete(_wardrobe_key(profile.id))
        return updated

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to release pet: {str(e)}")


@router.post("/feed", response_model=Profile)
async def feed_pet(
    request: FeedRequest,
    profile: CurrentProfile,
    supabase_service: SupabaseDep,
) -> Profile:
    """Buy food for the pet."""
    if request.food_id not in pet_service.FOODS:
        raise HTTPException(status_code=404, detail="Food not found")

    try:
        updates = pet_service.feed(profile, request.food_id)
        return await supabase_service.update_profile(profile.id, updates)

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to feed pet: {str(e)}")


@router.post("/play", response_model=Profile)
async def play_with_pet(
    request: PlayRequest,
    profile: CurrentProfile,
    supabase_service: SupabaseDep,
) -> Profile:
    """Play a mini-game with the pet and earn coins."""
    if request.activity_id not in pet_service.PLAY_ACTIVITIES:
        raise HTTPException(status_code=404, detail="Activity not found")

    try:
        updates = pet_service.play(profile, request.activity_id)
        return await supabase_service.update_profile(profile.id, updates)

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to play: {str(e)}")


@router.get("/shop", response_model=ShopResponse)
async def get_shop(profile: CurrentProfile, kv: KVStoreDep) -> ShopResponse:
    """Accessory catalog alongside what the user already owns."""
    try:
        wardrobe = await _load_wardrobe(kv, profile.id)
        return ShopResponse(
            items=pet_service.ACCESSORIES, wardrobe=Wardrobe(**wardrobe), coins=profile.coins
        )

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load shop: {str(e)}")


@router.post("/shop/{item_id}/purchase", response_model=PurchaseResponse)
async def purchase_item(
    item_id: str,
    profile: CurrentProfile,
    supabase_service: SupabaseDep,
    kv: KVStoreDep,
) -> PurchaseResponse:
    """
    Buy an accessory.

    The item goes into the wardrobe before the coins are taken; if the
    coins can't be taken the wardrobe is put back as it was.
    """
    if item_id not in pet_service.ACCESSORIES:
        raise HTTPException(status_code=404, detail="Item not found")

    try:
        key = _wardrobe_key(profile.id)
        stored = await kv.get(key)
        current = stored or pet_service.empty_wardrobe()
        if item_id in current["owned"]:
            raise HTTPException(status_code=409, detail="You already own this item")

        coins, wardrobe = pet_service.purchase_accessory(profile, current, item_id)

        await kv.set(key, wardrobe)
        try:
            await supabase_service.update_profile(profile.id, {"coins": coins})
        except Exception:
            logger.error(f"❌ Charging {profile.id} for {item_id} failed, restoring wardrobe")
            if stored is None:
                await kv.delete(key)
            else:
                await kv.set(key, stored)
            raise

        item = pet_service.ACCESSORIES[item_id]
        return PurchaseResponse(
            coins=coins,
            wardrobe=Wardrobe(**wardrobe),
            message=f"Purchased {item['name']} {item['emoji']}",
        )

    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Purchase failed: {str(e)}")


@router.post("/shop/{item_id}/equip", response_model=Wardrobe)
async def equip_item(item_id: str, profile: CurrentProfile, kv: KVStoreDep) -> Wardrobe:
    """Put an owned accessory on the pet."""
    if item_id not in pet_service.ACCESSORIES:
        raise HTTPException(status_code=404, detail="Item not found")

    try:
        wardrobe = pet_service.equip_accessory(await _load_wardrobe(kv, profile.id), item_id)
        await kv.set(_wardrobe_key(profile.id), wardrobe)
        return Wardrobe(**wardrobe)

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to equip item: {str(e)}")


@router.get("/wardrobe", response_model=Wardrobe)
async def get_wardrobe(profile: CurrentProfile, kv: KVStoreDep) -> Wardrobe:
    """Owned and equipped accessories."""
    try:
        return Wardrobe(**await _load_wardrobe(kv, profile.id))

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load wardrobe: {str(e)}")
