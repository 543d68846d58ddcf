"""
API ViewSets for the character sheet API.

One ViewSet per top-level entity (races, classes, spells, weapons, items,
characters). They share list/get/create/update/delete behaviour through
EntityViewSet:

* list goes through the query filter builder and returns ``{data, meta}``,
* PUT and PATCH both apply a partial update,
* writes run through the storage client so constraint failures surface as
  conflicts, bad references or blocked deletes,
* delete answers 200 with a confirmation message.
"""

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import ModelViewSet

from .exceptions import BlockedDeleteError
from .mixins import FilteredListMixin, StorageMixin
from .models import (Character, CharacterClass, Item, Race, Spell, Subclass,
                     Weapon)
from .serializers import (CharacterClassSerializer, CharacterDetailSerializer,
                          CharacterSerializer, ItemSerializer, RaceSerializer,
                          SpellSerializer, SubclassSerializer, WeaponSerializer)

logger = logging.getLogger(__name__)


class EntityViewSet(StorageMixin, FilteredListMixin, ModelViewSet):
    """
    Base ViewSet. Subclasses set ``queryset`` (with the relations to include),
    ``serializer_class``, ``entity_label`` and ``filter_fields``.
    """
    deleted_message = None

    def get_object(self):
        """
        Looks the record up through the storage client, so an unknown or
        malformed id is a 404 rather than a server error.
        """
        lookup_url_kwarg = self.lookup_url_kwarg or self.lookup_field
        obj = self.fetch(
            self.filter_queryset(self.get_queryset()),
            label=self.entity_label,
            **{self.lookup_field: self.kwargs[lookup_url_kwarg]}
        )
        self.check_object_permissions(self.request, obj)
        return obj

    def represent(self, instance):
        """Serializes ``instance`` reloaded with its related records."""
        fresh = self.get_queryset().get(pk=instance.pk)
        return self.get_serializer(fresh).data

    def perform_create(self, serializer):
        return self.guarded(serializer.save)

    def perform_update(self, serializer):
        return self.guarded(serializer.save)

    def perform_destroy(self, instance):
        self.guarded(self.get_storage().delete, instance)

    def create(self, request, *args, **kwargs):
        """Validates and stores the record, then returns it with its relations (201)."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        instance = self.perform_create(serializer)
        logger.info("Created %s '%s' (%s).", self.entity_label, instance, instance.pk)
        return Response(self.represent(instance), status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Applies only the fields present in the body, for PUT and PATCH alike."""
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        instance = self.perform_update(serializer)
        return Response(self.represent(instance), status=status.HTTP_200_OK)

    def destroy(self, request, *args, **kwargs):
        """Deletes the record and answers 200 with a confirmation message."""
        instance = self.get_object()
        self.perform_destroy(instance)
        logger.info("Deleted %s %s.", self.entity_label, kwargs.get(self.lookup_url_kwarg or self.lookup_field))
        return Response(
            {'message': self.deleted_message or f"{self.entity_label} deleted successfully"},
            status=status.HTTP_200_OK
        )


class RaceViewSet(EntityViewSet):
    """
    Endpoint: /races
    Deleting a race that characters still use is refused with their count.
    """
    queryset = Race.objects.prefetch_related('characters')
    serializer_class = RaceSerializer
    entity_label = 'Race'
    filter_fields = {
        'name': 'name',
        'desc': 'desc',
        'playable': 'playable',
        'speed': 'speed',
        'darkvision': 'darkvision',
        'size': 'size',
    }


class CharacterClassViewSet(EntityViewSet):
    """
    Endpoint: /classes
    """
    queryset = CharacterClass.objects.prefetch_related('subclasses', 'characters')
    serializer_class = CharacterClassSerializer
    entity_label = 'Class'
    filter_fields = {
        'name': 'name',
        'desc': 'desc',
        'hitDie': 'hit_die',
        'primaryAbility': 'primary_ability',
        'spellcasting': 'spellcasting',
    }

    def perform_destroy(self, instance):
        """
        Counts the characters using the class first and refuses the delete
        when there are any, instead of cascading or clearing references.
        """
        characters_count = instance.characters.count()
        if characters_count > 0:
            logger.warning("Refused to delete class '%s': %d characters use it.", instance, characters_count)
            raise BlockedDeleteError(
                'Cannot delete class while characters are using it',
                characters_count=characters_count,
            )
        super().perform_destroy(instance)

    @extend_schema(request=SubclassSerializer, responses=SubclassSerializer(many=True))
    @action(detail=True, methods=['get', 'post'], serializer_class=SubclassSerializer)
    def subclasses(self, request, pk=None):
        """Lists the subclasses of a class, or adds one."""
        character_class = self.get_object()
        if request.method == 'GET':
            serializer = SubclassSerializer(character_class.subclasses.all(), many=True)
            return Response(serializer.data, status=status.HTTP_200_OK)

        serializer = SubclassSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        subclass = self.guarded(serializer.save, character_class=character_class, label='Subclass')
        logger.info("Added subclass '%s' to class '%s'.", subclass.name, character_class)
        return Response(SubclassSerializer(subclass).data, status=status.HTTP_201_CREATED)


class SpellViewSet(EntityViewSet):
    """
    Endpoint: /spells
    """
    queryset = Spell.objects.prefetch_related('character_spells__character')
    serializer_class = SpellSerializer
    entity_label = 'Spell'
    filter_fields = {
        'name': 'name',
        'desc': 'desc',
        'level': 'level',
        'school': 'school',
        'castingTime': 'casting_time',
        'range': 'range',
        'duration': 'duration',
        'concentration': 'concentration',
    }


class WeaponViewSet(EntityViewSet):
    """
    Endpoint: /weapons
    """
    queryset = Weapon.objects.all()
    serializer_class = WeaponSerializer
    entity_label = 'Weapon'
    filter_fields = {
        'name': 'name',
        'desc': 'desc',
        'type': 'type',
        'damage': 'damage',
        'twoHanded': 'two_handed',
        'versatile': 'versatile',
        'range': 'range',
        'architype': 'architype',
    }


class ItemViewSet(EntityViewSet):
    """
    Endpoint: /items
    Items always belong to an inventory; ``inventoryId`` must resolve.
    """
    queryset = Item.objects.select_related('inventory', 'equipment_slot')
    serializer_class = ItemSerializer
    entity_label = 'Item'
    filter_fields = {
        'name': 'name',
        'desc': 'desc',
        'quantity': 'quantity',
        'inventoryId': 'inventory_id',
        'characterId': 'inventory__character_id',
    }


class CharacterViewSet(EntityViewSet):
    """
    Endpoint: /characters
    Listing attaches race, class, subclass and inventory/equipment summaries;
    a single character additionally carries its items, equipped slots and
    learned spells.
    """
    queryset = Character.objects.select_related(
        'race', 'character_class', 'subclass', 'inventory', 'equipment'
    ).prefetch_related(
        'inventory__items__equipment_slot',
        'equipment__slots__item__equipment_slot',
        'learned_spells__spell',
    )
    entity_label = 'Character'
    deleted_message = 'Character and all associated data deleted successfully'
    filter_fields = {
        'name': 'name',
        'level': 'level',
        'experience': 'experience',
        'strength': 'strength',
        'dexterity': 'dexterity',
        'constitution': 'constitution',
        'intelligence': 'intelligence',
        'wisdom': 'wisdom',
        'charisma': 'charisma',
        'raceId': 'race_id',
        'classId': 'character_class_id',
        'subclassId': 'subclass_id',
    }

    def get_serializer_class(self):
        """Listing renders summaries; every other action the full character."""
        if self.action == 'list':
            return CharacterSerializer
        if self.action == 'spells':
            return SpellSerializer
        return CharacterDetailSerializer

    @action(detail=True, methods=['get'])
    def spells(self, request, pk=None):
        """Spells the character has learned."""
        character = self.get_object()
        spells = Spell.objects.filter(character_spells__character=character).prefetch_related(
            'character_spells__character'
        )
        serializer = SpellSerializer(spells, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)
