"""
Tests for pet care actions and the accessory shop.
"""

import pytest

from mindpal.models.schemas import Profile
from mindpal.services import pet_service


def make_profile(**fields) -> Profile:
    defaults = {
        "id": "user-1",
        "coins": 100,
        "pet_type": "dog",
        "pet_hunger": 50,
        "pet_happiness": 50,
        "pet_health": 50,
    }
    return Profile(**{**defaults, **fields})


class TestSelectPet:
    def test_fresh_stats(self):
        updates = pet_service.select_pet("cat")

        assert updates["pet_type"] == "cat"
        assert updates["pet_name"] == "Whiskers"
        assert updates["selected_pet"]["emoji"] == "🐱"
        assert (updates["pet_hunger"], updates["pet_happiness"], updates["pet_health"]) == (0, 100, 100)

    def test_custom_name(self):
        assert pet_service.select_pet("rabbit", "Clover")["pet_name"] == "Clover"

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            pet_service.select_pet("dragon")


class TestFeed:
    def test_feeding_spends_coins_and_raises_stats(self):
        updates = pet_service.feed(make_profile(), "fish")

        assert updates["coins"] == 85
        assert updates["pet_happiness"] == 70
        assert updates["pet_health"] == 75
        assert updates["pet_hunger"] == 25
        assert "last_fed" in updates

    def test_stats_are_clamped(self):
        updates = pet_service.feed(
            make_profile(pet_happiness=95, pet_health=90, pet_hunger=10), "salad"
        )

        assert updates["pet_happiness"] == 100
        assert updates["pet_health"] == 100
        assert updates["pet_hunger"] == 0

    def test_not_enough_coins(self):
        with pytest.raises(ValueError, match="Not enough coins"):
            pet_service.feed(make_profile(coins=20), "cake")

    def test_needs_a_pet(self):
        with pytest.raises(ValueError, match="Choose a pet first"):
            pet_service.feed(make_profile(pet_type=None), "apple")


class TestPlay:
    def test_play_earns_coins(self):
        updates = pet_service.play(make_profile(), "duel")

        assert updates["coins"] == 125
        assert updates["pet_happiness"] == 80
        assert "last_played" in updates

    def test_unknown_activity(self):
        with pytest.raises(ValueError):
            pet_service.play(make_profile(), "chess")


class TestShop:
    def test_purchase(self):
        coins, wardrobe = pet_service.purchase_accessory(
            make_profile(), pet_service.empty_wardrobe(), "hat1"
        )

        assert coins == 50
        assert wardrobe == {"owned": ["hat1"], "equipped": {}}

    def test_purchase_does_not_mutate_input(self):
        original = pet_service.empty_wardrobe()

        pet_service.purchase_accessory(make_profile(), original, "acc1")

        assert original == {"owned": [], "equipped": {}}

    def test_already_owned(self):
        wardrobe = {"owned": ["hat1"], "equipped": {}}

        with pytest.raises(ValueError, match="already own"):
            pet_service.purchase_accessory(make_profile(), wardrobe, "hat1")

    def test_too_expensive(self):
        with pytest.raises(ValueError, match="Not enough coins"):
            pet_service.purchase_accessory(
                make_profile(coins=99), pet_service.empty_wardrobe(), "hat2"
            )

    def test_equip_replaces_item_in_same_slot(self):
        wardrobe = {"owned": ["hat1", "hat2", "acc1"], "equipped": {"hat": "hat1", "accessory": "acc1"}}

        updated = pet_service.equip_accessory(wardrobe, "hat2")

        assert updated["equipped"] == {"hat": "hat2", "accessory": "acc1"}

    def test_equip_requires_ownership(self):
        with pytest.raises(ValueError, match="don't own"):
            pet_service.equip_accessory(pet_service.empty_wardrobe(), "bg1")
