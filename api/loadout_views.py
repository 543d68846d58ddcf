"""
Inventory and equipment of a character.

Both records are addressed through the owning character's identifier
(``/characters/{characterId}/inventory`` and ``.../equipment``) rather than
their own. They are created together with the character, so POST only
succeeds after an explicit DELETE.
"""

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import serializers, status
from rest_framework.exceptions import NotFound
from rest_framework.generics import GenericAPIView
from rest_framework.response import Response

from .choices import SlotType
from .exceptions import ConflictError
from .mixins import StorageMixin
from .models import Character, Equipment, EquipmentSlot, Inventory, Item
from .serializers import (EquipmentSerializer, EquipmentSlotSerializer,
                          InventorySerializer, ItemSerializer)
from .storage import StorageError

logger = logging.getLogger(__name__)


class CharacterScopedView(StorageMixin, GenericAPIView):
    """
    Base view for records hanging off one character. Subclasses name the
    owned model through ``owned_queryset`` and the message used when the
    character has no such record.
    """
    owned_queryset = None
    missing_message = None

    def get_character(self):
        return self.fetch(Character.objects.all(), label='Character', pk=self.kwargs['character_id'])

    def get_owned(self, character):
        """Returns the record owned by ``character``, or a 404 with ``missing_message``."""
        try:
            return self.get_storage().fetch(self.owned_queryset.all(), character=character)
        except StorageError as error:
            raise NotFound(self.missing_message) from error

    def owned_response(self, character, status_code=status.HTTP_200_OK):
        owned = self.get_owned(character)
        return Response(self.get_serializer(owned).data, status=status_code)


class InventoryView(CharacterScopedView):
    """
    Endpoint: /characters/{characterId}/inventory
    """
    serializer_class = InventorySerializer
    owned_queryset = Inventory.objects.prefetch_related('items__equipment_slot')
    missing_message = 'Inventory not found for this character'
    entity_label = 'Inventory'

    def get(self, request, character_id):
        return self.owned_response(self.get_character())

    def post(self, request, character_id):
        """
        Creates an inventory for a character that has none. Characters get one
        on creation, so this only succeeds after a DELETE; otherwise 409.
        """
        character = self.get_character()
        if self.get_storage().exists(Inventory.objects.all(), character=character):
            raise ConflictError('Inventory already exists for this character')
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.guarded(serializer.save, character=character)
        logger.info("Created inventory for character '%s'.", character)
        return self.owned_response(character, status.HTTP_201_CREATED)

    def put(self, request, character_id):
        """Updates gold and capacity; absent fields keep their value."""
        character = self.get_character()
        inventory = self.get_owned(character)
        serializer = self.get_serializer(inventory, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        self.guarded(serializer.save)
        return self.owned_response(character)

    def delete(self, request, character_id):
        """Deletes the inventory together with its items."""
        character = self.get_character()
        inventory = self.get_owned(character)
        self.guarded(self.get_storage().delete, inventory)
        logger.info("Deleted inventory of character '%s'.", character)
        return Response({'message': 'Inventory deleted successfully'}, status=status.HTTP_200_OK)


class AddInventoryItemSerializer(serializers.Serializer):
    """Either ``itemId`` of an existing item, or the fields of a new one."""
    itemId = serializers.UUIDField(required=False)
    name = serializers.CharField(required=False, max_length=100)
    desc = serializers.CharField(required=False, allow_blank=True)
    quantity = serializers.IntegerField(required=False, min_value=1,
                                        error_messages={'min_value': 'Quantity must be at least 1'})

    def validate(self, attrs):
        if 'itemId' not in attrs and 'name' not in attrs:
            raise serializers.ValidationError({'itemId': ["Provide itemId or the name of a new item."]})
        return attrs


class InventoryItemsView(CharacterScopedView):
    """
    Endpoint: /characters/{characterId}/inventory/items

    POST with ``itemId`` moves an existing item into this inventory (leaving
    any slot it occupied); POST with ``name`` creates a new item here.
    """
    serializer_class = AddInventoryItemSerializer
    owned_queryset = Inventory.objects.prefetch_related('items__equipment_slot')
    missing_message = 'Inventory not found for this character'
    entity_label = 'Item'

    @extend_schema(request=AddInventoryItemSerializer, responses=InventorySerializer)
    def post(self, request, character_id):
        """Adds or moves the item and returns the updated inventory."""
        character = self.get_character()
        inventory = self.get_owned(character)
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item_id = serializer.validated_data.get('itemId')
        if item_id is not None:
            item = self.fetch(Item.objects.all(), label='Item', pk=item_id)
            self.guarded(self._move_item, item, inventory)
            logger.info("Moved item '%s' into the inventory of '%s'.", item, character)
        else:
            data = {key: value for key, value in request.data.items() if key != 'itemId'}
            data['inventoryId'] = str(inventory.pk)
            item_serializer = ItemSerializer(data=data)
            item_serializer.is_valid(raise_exception=True)
            item = self.guarded(item_serializer.save)
            logger.info("Added item '%s' to the inventory of '%s'.", item, character)

        inventory = self.get_owned(character)
        return Response(InventorySerializer(inventory).data, status=status.HTTP_201_CREATED)

    @staticmethod
    def _move_item(item, inventory):
        if item.inventory_id != inventory.pk:
            EquipmentSlot.objects.filter(item=item).delete()
            item.inventory = inventory
            item.save(update_fields=['inventory', 'updated_at'])


class InventoryItemDetailView(CharacterScopedView):
    """
    Endpoint: /characters/{characterId}/inventory/items/{itemId}
    Removes an item from the inventory. Items cannot exist outside an
    inventory, so the item is deleted.
    """
    serializer_class = InventorySerializer
    owned_queryset = Inventory.objects.prefetch_related('items__equipment_slot')
    missing_message = 'Inventory not found for this character'
    entity_label = 'Item'

    def delete(self, request, character_id, item_id):
        """Deletes one item of this inventory; an item stored elsewhere is a 404."""
        character = self.get_character()
        inventory = self.get_owned(character)
        try:
            item = self.get_storage().fetch(inventory.items.all(), pk=item_id)
        except StorageError as error:
            raise NotFound('Item not found in this inventory') from error
        self.guarded(self.get_storage().delete, item)
        logger.info("Removed item '%s' from the inventory of '%s'.", item, character)
        return self.owned_response(character)


class EquipmentView(CharacterScopedView):
    """
    Endpoint: /characters/{characterId}/equipment

    PUT with ``slots`` replaces every slot assignment at once.
    """
    serializer_class = EquipmentSerializer
    owned_queryset = Equipment.objects.prefetch_related('slots__item__equipment_slot')
    missing_message = 'Equipment not found for this character'
    entity_label = 'Equipment'

    def get_serializer_context(self):
        """Passes the owning character to EquipmentSerializer for the ownership checks."""
        context = super().get_serializer_context()
        context['character'] = self.get_character()
        return context

    def get(self, request, character_id):
        return self.owned_response(self.get_character())

    def post(self, request, character_id):
        """
        Creates equipment for a character that has none, which is only the case
        after an explicit DELETE. An existing record is a conflict (409).
        """
        character = self.get_character()
        if self.get_storage().exists(Equipment.objects.all(), character=character):
            raise ConflictError('Equipment already exists for this character')
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.guarded(serializer.save, character=character)
        logger.info("Created equipment for character '%s'.", character)
        return self.owned_response(character, status.HTTP_201_CREATED)

    def put(self, request, character_id):
        """Replaces the slot set when ``slots`` is given and leaves it alone otherwise."""
        character = self.get_character()
        equipment = self.get_owned(character)
        serializer = self.get_serializer(equipment, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        self.guarded(serializer.save)
        return self.owned_response(character)

    def delete(self, request, character_id):
        """Deletes the equipment record and every slot assignment with it."""
        character = self.get_character()
        equipment = self.get_owned(character)
        self.guarded(self.get_storage().delete, equipment)
        logger.info("Deleted equipment of character '%s'.", character)
        return Response({'message': 'Equipment deleted successfully'}, status=status.HTTP_200_OK)


class EquipmentSlotsView(CharacterScopedView):
    """
    Endpoint: /characters/{characterId}/equipment/slots
    Equips one item into one slot, replacing whatever the slot held.
    """
    serializer_class = EquipmentSlotSerializer
    owned_queryset = Equipment.objects.prefetch_related('slots__item__equipment_slot')
    missing_message = 'Equipment not found for this character'
    entity_label = 'Equipment slot'

    @extend_schema(request=EquipmentSlotSerializer, responses=EquipmentSerializer)
    def post(self, request, character_id):
        """Equips ``itemId`` in ``slotType`` and returns the whole equipment."""
        character = self.get_character()
        equipment = self.get_owned(character)
        serializer = EquipmentSlotSerializer(data=request.data, context={'equipment': equipment})
        serializer.is_valid(raise_exception=True)
        slot = self.guarded(serializer.save)
        logger.info("Equipped '%s' in %s for '%s'.", slot.item, slot.slot_type, character)
        equipment = self.get_owned(character)
        return Response(EquipmentSerializer(equipment).data, status=status.HTTP_201_CREATED)


class EquipmentSlotDetailView(CharacterScopedView):
    """
    Endpoint: /characters/{characterId}/equipment/slots/{slotType}
    Clears one slot.
    """
    serializer_class = EquipmentSerializer
    owned_queryset = Equipment.objects.prefetch_related('slots__item__equipment_slot')
    missing_message = 'Equipment not found for this character'
    entity_label = 'Equipment slot'

    def delete(self, request, character_id, slot_type):
        """Clears the slot named in the path; the item stays in the inventory."""
        character = self.get_character()
        equipment = self.get_owned(character)
        slot_type = slot_type.upper()
        if slot_type not in SlotType.values:
            raise NotFound(f"Unknown slot type '{slot_type}'")
        try:
            slot = self.get_storage().fetch(equipment.slots.all(), slot_type=slot_type)
        except StorageError as error:
            raise NotFound(f"Nothing is equipped in slot {slot_type}") from error
        self.guarded(self.get_storage().delete, slot)
        logger.info("Cleared slot %s for '%s'.", slot_type, character)
        return self.owned_response(character)
