import uuid

import pytest
from django.urls import reverse
from rest_framework import status

from api.models import EquipmentSlot, Inventory, Item

pytestmark = pytest.mark.django_db


def inventory_url(character):
    return reverse("character-inventory", kwargs={"character_id": character.id})


def equipment_url(character):
    return reverse("character-equipment", kwargs={"character_id": character.id})


@pytest.fixture
def scimitar(character):
    return Item.objects.create(name="Scimitar", desc="A curved blade.", inventory=character.inventory)


@pytest.fixture
def shield(character):
    return Item.objects.create(name="Shield", inventory=character.inventory)


class TestInventory:

    def test_get(self, client, character, scimitar):
        response = client.get(inventory_url(character))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["characterId"] == str(character.id)
        assert [item["name"] for item in response.data["items"]] == ["Scimitar"]

    def test_unknown_character(self, client):
        url = reverse("character-inventory", kwargs={"character_id": uuid.uuid4()})

        response = client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["message"] == "Character not found"

    def test_post_when_inventory_exists(self, client, character):
        response = client.post(inventory_url(character), {"gold": 10})

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["message"] == "Inventory already exists for this character"

    def test_delete_then_recreate(self, client, character):
        deleted = client.delete(inventory_url(character))
        missing = client.get(inventory_url(character))
        created = client.post(inventory_url(character), {"gold": 150, "capacity": 30})

        assert deleted.status_code == status.HTTP_200_OK
        assert missing.status_code == status.HTTP_404_NOT_FOUND
        assert missing.data["message"] == "Inventory not found for this character"
        assert created.status_code == status.HTTP_201_CREATED
        assert created.data["gold"] == 150
        assert created.data["capacity"] == 30

    def test_put_is_partial(self, client, character):
        response = client.put(inventory_url(character), {"gold": 75})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["gold"] == 75
        assert response.data["capacity"] == 20

    def test_negative_gold(self, client, character):
        response = client.put(inventory_url(character), {"gold": -1})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "gold" in response.data["errors"]
        assert Inventory.objects.get(character=character).gold == 0


class TestInventoryItems:

    def test_add_new_item(self, client, character):
        url = reverse("character-inventory-items", kwargs={"character_id": character.id})

        response = client.post(url, {"name": "Potion of Healing", "quantity": 3})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["items"][0]["name"] == "Potion of Healing"
        assert response.data["items"][0]["quantity"] == 3

    def test_add_requires_item_or_name(self, client, character):
        url = reverse("character-inventory-items", kwargs={"character_id": character.id})

        response = client.post(url, {"quantity": 2})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "itemId" in response.data["errors"]

    def test_move_item_unequips_it(self, client, character, scimitar, make_character):
        character.equipment.slots.create(slot_type="MAIN_HAND", item=scimitar)
        other = make_character("Wyll")
        url = reverse("character-inventory-items", kwargs={"character_id": other.id})

        response = client.post(url, {"itemId": str(scimitar.id)})

        assert response.status_code == status.HTTP_201_CREATED
        assert [item["name"] for item in response.data["items"]] == ["Scimitar"]
        assert response.data["items"][0]["equippedIn"] is None
        scimitar.refresh_from_db()
        assert scimitar.inventory_id == other.inventory.id
        assert not EquipmentSlot.objects.exists()

    def test_move_unknown_item(self, client, character):
        url = reverse("character-inventory-items", kwargs={"character_id": character.id})

        response = client.post(url, {"itemId": str(uuid.uuid4())})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["message"] == "Item not found"

    def test_remove_item(self, client, character, scimitar):
        url = reverse("character-inventory-item", kwargs={"character_id": character.id, "item_id": scimitar.id})

        response = client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["items"] == []
        assert not Item.objects.exists()

    def test_remove_item_of_another_inventory(self, client, character, scimitar, make_character):
        other = make_character("Wyll")
        url = reverse("character-inventory-item", kwargs={"character_id": other.id, "item_id": scimitar.id})

        response = client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["message"] == "Item not found in this inventory"
        assert Item.objects.filter(pk=scimitar.pk).exists()


class TestEquipment:

    def test_replace_slots(self, client, character, scimitar, shield):
        response = client.put(equipment_url(character), {
            "slots": [
                {"slotType": "MAIN_HAND", "itemId": str(scimitar.id)},
                {"slotType": "OFF_HAND", "itemId": str(shield.id)},
            ],
        })

        assert response.status_code == status.HTTP_200_OK
        slots = {slot["slotType"]: slot["item"]["name"] for slot in response.data["slots"]}
        assert slots == {"MAIN_HAND": "Scimitar", "OFF_HAND": "Shield"}

        cleared = client.put(equipment_url(character), {"slots": []})

        assert cleared.data["slots"] == []
        assert not EquipmentSlot.objects.exists()

    def test_item_equipped_twice(self, client, character, scimitar):
        response = client.put(equipment_url(character), {
            "slots": [
                {"slotType": "MAIN_HAND", "itemId": str(scimitar.id)},
                {"slotType": "OFF_HAND", "itemId": str(scimitar.id)},
            ],
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "slots" in response.data["errors"]

    def test_item_outside_inventory(self, client, character, make_character):
        other = make_character("Wyll")
        foreign = Item.objects.create(name="Rapier", inventory=other.inventory)

        response = client.put(equipment_url(character), {
            "slots": [{"slotType": "MAIN_HAND", "itemId": str(foreign.id)}],
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "itemId" in response.data["errors"]

    def test_unknown_slot_type(self, client, character, scimitar):
        response = client.put(equipment_url(character), {
            "slots": [{"slotType": "BACKPACK", "itemId": str(scimitar.id)}],
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_equip_replaces_slot_content(self, client, character, scimitar, shield):
        url = reverse("character-equipment-slots", kwargs={"character_id": character.id})

        client.post(url, {"slotType": "MAIN_HAND", "itemId": str(scimitar.id)})
        response = client.post(url, {"slotType": "MAIN_HAND", "itemId": str(shield.id)})

        assert response.status_code == status.HTTP_201_CREATED
        assert [slot["item"]["name"] for slot in response.data["slots"]] == ["Shield"]

    def test_equip_moves_item_between_slots(self, client, character, scimitar):
        url = reverse("character-equipment-slots", kwargs={"character_id": character.id})

        client.post(url, {"slotType": "MAIN_HAND", "itemId": str(scimitar.id)})
        response = client.post(url, {"slotType": "OFF_HAND", "itemId": str(scimitar.id)})

        assert [slot["slotType"] for slot in response.data["slots"]] == ["OFF_HAND"]

    def test_equip_foreign_item(self, client, character, make_character):
        other = make_character("Wyll")
        foreign = Item.objects.create(name="Rapier", inventory=other.inventory)
        url = reverse("character-equipment-slots", kwargs={"character_id": character.id})

        response = client.post(url, {"slotType": "MAIN_HAND", "itemId": str(foreign.id)})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not EquipmentSlot.objects.exists()

    def test_unequip(self, client, character, scimitar):
        character.equipment.slots.create(slot_type="MAIN_HAND", item=scimitar)
        url = reverse("character-equipment-slot", kwargs={"character_id": character.id, "slot_type": "main_hand"})

        response = client.delete(url)
        again = client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["slots"] == []
        assert again.status_code == status.HTTP_404_NOT_FOUND
        assert Item.objects.filter(pk=scimitar.pk).exists()

    def test_post_after_delete(self, client, character, scimitar):
        conflict = client.post(equipment_url(character), {})
        client.delete(equipment_url(character))
        missing = client.get(equipment_url(character))
        created = client.post(equipment_url(character), {
            "slots": [{"slotType": "MAIN_HAND", "itemId": str(scimitar.id)}],
        })

        assert conflict.status_code == status.HTTP_409_CONFLICT
        assert conflict.data["message"] == "Equipment already exists for this character"
        assert missing.status_code == status.HTTP_404_NOT_FOUND
        assert missing.data["message"] == "Equipment not found for this character"
        assert created.status_code == status.HTTP_201_CREATED
        assert created.data["slots"][0]["slotType"] == "MAIN_HAND"
