"""
API Serializers for the character sheet API.

Public field names are camelCase and map onto the snake_case model fields
through ``source``. Summary serializers render related records inline; the
full serializers validate writes (see ``validators``) and create compound
records (character + inventory + equipment, class + subclasses) atomically.
"""

from django.core.exceptions import ObjectDoesNotExist
from django.db import transaction
from rest_framework import serializers

from .choices import Ability, HitDie, SlotType, SpellComponent
from .models import (Character, CharacterClass, CharacterSpell, Equipment,
                     EquipmentSlot, Inventory, Item, Race, Spell, Subclass,
                     Weapon)
from .validators import (ABILITY_SCORE_FIELDS, ability_score_field,
                         bounded_integer_field, check_slot_assignments,
                         check_subclass, check_weapon_range, unique_in_order)


def reference_field(queryset, source, **kwargs):
    """A writable ``<entity>Id`` field rendering the related primary key as a string."""
    return serializers.PrimaryKeyRelatedField(
        queryset=queryset,
        source=source,
        pk_field=serializers.UUIDField(format='hex_verbose'),
        **kwargs
    )


class TimestampedSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)


# Summaries rendered inside other resources.

class CharacterSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Character
        fields = ['id', 'name', 'level']
        read_only_fields = fields


class RaceSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Race
        fields = ['id', 'name', 'size', 'speed', 'darkvision']
        read_only_fields = fields


class ClassSummarySerializer(serializers.ModelSerializer):
    hitDie = serializers.IntegerField(source='hit_die', read_only=True)

    class Meta:
        model = CharacterClass
        fields = ['id', 'name', 'hitDie']
        read_only_fields = fields


class SpellSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Spell
        fields = ['id', 'name', 'level', 'school']
        read_only_fields = fields


class ItemSummarySerializer(serializers.ModelSerializer):
    equippedIn = serializers.SerializerMethodField()

    class Meta:
        model = Item
        fields = ['id', 'name', 'desc', 'quantity', 'equippedIn']
        read_only_fields = fields

    def get_equippedIn(self, obj):
        try:
            return obj.equipment_slot.slot_type
        except ObjectDoesNotExist:
            return None


class SubclassSerializer(TimestampedSerializer):
    classId = serializers.UUIDField(source='character_class_id', read_only=True)

    class Meta:
        model = Subclass
        fields = ['id', 'name', 'desc', 'classId', 'createdAt', 'updatedAt']
        read_only_fields = ['id']


# Catalogue resources.

class RaceSerializer(TimestampedSerializer):
    """
    Race resource. ``name`` and ``desc`` are required; the other fields fall
    back to their model defaults.
    """
    speed = bounded_integer_field('speed', 0, 100, required=False)
    characters = CharacterSummarySerializer(many=True, read_only=True)

    class Meta:
        model = Race
        fields = [
            'id',
            'name',
            'desc',
            'playable',
            'speed',
            'darkvision',
            'size',
            'characters',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = ['id']


class CharacterClassSerializer(TimestampedSerializer):
    """
    Class resource. Subclasses may be supplied on create and are stored in
    the same transaction; afterwards they are managed through the class's
    subclasses endpoint.
    """
    hitDie = serializers.ChoiceField(
        source='hit_die',
        choices=HitDie.choices,
        error_messages={'invalid_choice': 'Invalid hit die value'},
    )
    primaryAbility = serializers.ChoiceField(source='primary_ability', choices=Ability.choices)
    savingThrows = serializers.ListField(
        source='saving_throws',
        child=serializers.ChoiceField(choices=Ability.choices),
        allow_empty=False,
    )
    subclasses = SubclassSerializer(many=True, required=False)
    characters = CharacterSummarySerializer(many=True, read_only=True)

    class Meta:
        model = CharacterClass
        fields = [
            'id',
            'name',
            'desc',
            'hitDie',
            'primaryAbility',
            'savingThrows',
            'spellcasting',
            'subclasses',
            'characters',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = ['id']

    def validate(self, attrs):
        if self.instance is not None and 'subclasses' in attrs:
            raise serializers.ValidationError(
                {'subclasses': ["Subclasses are managed through the class subclasses endpoint."]}
            )
        if 'saving_throws' in attrs:
            attrs['saving_throws'] = unique_in_order(attrs['saving_throws'])
        return attrs

    def create(self, validated_data):
        subclasses = validated_data.pop('subclasses', [])
        with transaction.atomic():
            character_class = CharacterClass.objects.create(**validated_data)
            for subclass_data in subclasses:
                Subclass.objects.create(character_class=character_class, **subclass_data)
        return character_class


class SpellSerializer(TimestampedSerializer):
    level = bounded_integer_field('level', 0, 9, message='Spell level must be between 0 and 9', required=False)
    castingTime = serializers.CharField(source='casting_time', max_length=100)
    components = serializers.ListField(
        child=serializers.ChoiceField(choices=SpellComponent.choices),
        required=False,
    )
    characters = serializers.SerializerMethodField()

    class Meta:
        model = Spell
        fields = [
            'id',
            'name',
            'desc',
            'level',
            'school',
            'castingTime',
            'range',
            'components',
            'duration',
            'concentration',
            'characters',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = ['id']

    def get_characters(self, obj):
        """Characters that have learned this spell."""
        return CharacterSummarySerializer(
            [learned.character for learned in obj.character_spells.all()],
            many=True,
        ).data

    def validate_components(self, value):
        return unique_in_order(value)


class WeaponSerializer(TimestampedSerializer):
    """
    Weapon resource. Range rules are checked against the values the weapon
    will have after the write, so a partial update cannot strip the range of
    a ranged weapon.
    """
    twoHanded = serializers.BooleanField(source='two_handed', required=False)
    range = serializers.IntegerField(
        required=False,
        allow_null=True,
        min_value=1,
        error_messages={'min_value': 'Range must be a positive number'},
    )

    class Meta:
        model = Weapon
        fields = [
            'id',
            'name',
            'desc',
            'type',
            'damage',
            'twoHanded',
            'versatile',
            'range',
            'architype',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = ['id']

    def validate(self, attrs):
        weapon_type = attrs.get('type', getattr(self.instance, 'type', None))
        if 'range' in attrs:
            weapon_range = attrs['range']
        else:
            weapon_range = getattr(self.instance, 'range', None)

        violations = check_weapon_range(weapon_type, weapon_range)
        if violations:
            raise serializers.ValidationError(violations)
        return attrs


# Character-owned resources.

class ItemSerializer(TimestampedSerializer):
    quantity = bounded_integer_field('quantity', 1, message='Quantity must be at least 1', required=False)
    inventoryId = reference_field(Inventory.objects.all(), 'inventory')
    characterId = serializers.UUIDField(source='inventory.character_id', read_only=True)
    equippedIn = serializers.SerializerMethodField()

    class Meta:
        model = Item
        fields = [
            'id',
            'name',
            'desc',
            'quantity',
            'inventoryId',
            'characterId',
            'equippedIn',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = ['id']

    def get_equippedIn(self, obj):
        try:
            return obj.equipment_slot.slot_type
        except ObjectDoesNotExist:
            return None

    def update(self, instance, validated_data):
        """An item moved to another inventory leaves the slot it held."""
        inventory = validated_data.get('inventory')
        with transaction.atomic():
            if inventory is not None and inventory.pk != instance.inventory_id:
                EquipmentSlot.objects.filter(item=instance).delete()
            return super().update(instance, validated_data)


class InventorySerializer(TimestampedSerializer):
    characterId = serializers.UUIDField(source='character_id', read_only=True)
    gold = bounded_integer_field('gold', 0, required=False)
    capacity = bounded_integer_field('capacity', 1, required=False)
    items = ItemSummarySerializer(many=True, read_only=True)

    class Meta:
        model = Inventory
        fields = ['id', 'characterId', 'gold', 'capacity', 'items', 'createdAt', 'updatedAt']
        read_only_fields = ['id']


class InventorySummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Inventory
        fields = ['id', 'gold', 'capacity']
        read_only_fields = fields


class EquipmentSlotSerializer(serializers.ModelSerializer):
    """
    One slot assignment. The item must sit in the inventory of the character
    owning the equipment given as ``equipment`` in the serializer context.
    """
    slotType = serializers.ChoiceField(source='slot_type', choices=SlotType.choices)
    itemId = reference_field(Item.objects.all(), 'item')
    item = ItemSummarySerializer(read_only=True)

    class Meta:
        model = EquipmentSlot
        fields = ['id', 'slotType', 'itemId', 'item']
        read_only_fields = ['id']
        # uniqueness of slots is checked against the whole assignment set
        validators = []

    def validate(self, attrs):
        equipment = self.context.get('equipment')
        if equipment is not None and not self.parent:
            owned = set(Item.objects.filter(inventory__character_id=equipment.character_id)
                        .values_list('pk', flat=True))
            violations = check_slot_assignments([(attrs['slot_type'], attrs['item'].pk)], owned)
            if violations:
                raise serializers.ValidationError(violations)
        return attrs

    def create(self, validated_data):
        equipment = self.context['equipment']
        with transaction.atomic():
            # the item leaves any slot it held and the slot drops its previous item
            EquipmentSlot.objects.filter(item=validated_data['item']).delete()
            EquipmentSlot.objects.filter(equipment=equipment, slot_type=validated_data['slot_type']).delete()
            slot = EquipmentSlot.objects.create(equipment=equipment, **validated_data)
            equipment.save(update_fields=['updated_at'])
        return slot


class EquipmentSerializer(TimestampedSerializer):
    """
    Equipment resource. Writing ``slots`` replaces the full set of slot
    assignments; omitting it leaves the slots untouched.
    """
    characterId = serializers.UUIDField(source='character_id', read_only=True)
    slots = EquipmentSlotSerializer(many=True, required=False)

    class Meta:
        model = Equipment
        fields = ['id', 'characterId', 'slots', 'createdAt', 'updatedAt']
        read_only_fields = ['id']

    def _character_id(self):
        if self.instance is not None:
            return self.instance.character_id
        return self.context['character'].pk

    def validate(self, attrs):
        slots = attrs.get('slots')
        if slots:
            owned = set(Item.objects.filter(inventory__character_id=self._character_id())
                        .values_list('pk', flat=True))
            violations = check_slot_assignments(
                [(slot['slot_type'], slot['item'].pk) for slot in slots],
                owned,
            )
            if violations:
                raise serializers.ValidationError(violations)
        return attrs

    def _replace_slots(self, equipment, slots):
        equipment.slots.all().delete()
        for slot in slots:
            EquipmentSlot.objects.create(equipment=equipment, slot_type=slot['slot_type'], item=slot['item'])

    def create(self, validated_data):
        slots = validated_data.pop('slots', [])
        with transaction.atomic():
            equipment = Equipment.objects.create(**validated_data)
            self._replace_slots(equipment, slots)
        return equipment

    def update(self, instance, validated_data):
        slots = validated_data.pop('slots', None)
        with transaction.atomic():
            if slots is not None:
                self._replace_slots(instance, slots)
            instance.save()
        return instance


class EquipmentSummarySerializer(serializers.ModelSerializer):
    slots = serializers.SerializerMethodField()

    class Meta:
        model = Equipment
        fields = ['id', 'slots']
        read_only_fields = fields

    def get_slots(self, obj):
        return {slot.slot_type: str(slot.item_id) for slot in obj.slots.all()}


class CharacterSerializer(TimestampedSerializer):
    """
    Character resource used for listing and for writes.

    Creation stores the character together with an empty inventory and an
    empty equipment record in one transaction. On update only supplied
    fields change; ``subclassId: null`` clears the subclass.
    """
    level = bounded_integer_field('level', 1, 20, required=False)
    experience = bounded_integer_field('experience', 0, required=False)
    strength = ability_score_field('strength')
    dexterity = ability_score_field('dexterity')
    constitution = ability_score_field('constitution')
    intelligence = ability_score_field('intelligence')
    wisdom = ability_score_field('wisdom')
    charisma = ability_score_field('charisma')

    raceId = reference_field(Race.objects.all(), 'race')
    classId = reference_field(CharacterClass.objects.all(), 'character_class')
    subclassId = reference_field(Subclass.objects.all(), 'subclass', required=False, allow_null=True)

    race = RaceSummarySerializer(read_only=True)
    characterClass = ClassSummarySerializer(source='character_class', read_only=True)
    subclass = SubclassSerializer(read_only=True)
    inventory = serializers.SerializerMethodField()
    equipment = serializers.SerializerMethodField()

    inventory_serializer_class = InventorySummarySerializer
    equipment_serializer_class = EquipmentSummarySerializer

    class Meta:
        model = Character
        fields = [
            'id',
            'name',
            'level',
            'experience',
            *ABILITY_SCORE_FIELDS,
            'raceId',
            'classId',
            'subclassId',
            'race',
            'characterClass',
            'subclass',
            'inventory',
            'equipment',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = ['id']

    def get_inventory(self, obj):
        try:
            return self.inventory_serializer_class(obj.inventory).data
        except ObjectDoesNotExist:
            return None

    def get_equipment(self, obj):
        try:
            return self.equipment_serializer_class(obj.equipment).data
        except ObjectDoesNotExist:
            return None

    def validate(self, attrs):
        character_class = attrs.get('character_class', getattr(self.instance, 'character_class', None))
        if 'subclass' in attrs:
            subclass = attrs['subclass']
        else:
            subclass = getattr(self.instance, 'subclass', None)

        violations = check_subclass(subclass, character_class)
        if violations:
            raise serializers.ValidationError(violations)
        return attrs

    def create(self, validated_data):
        with transaction.atomic():
            character = Character.objects.create(**validated_data)
            Inventory.objects.create(character=character)
            Equipment.objects.create(character=character)
        return character


class CharacterDetailSerializer(CharacterSerializer):
    """Single-character view: full inventory, equipment slots and learned spells."""
    learnedSpells = serializers.SerializerMethodField()

    inventory_serializer_class = InventorySerializer
    equipment_serializer_class = EquipmentSerializer

    class Meta(CharacterSerializer.Meta):
        fields = CharacterSerializer.Meta.fields + ['learnedSpells']

    def get_learnedSpells(self, obj):
        return SpellSummarySerializer(
            [learned.spell for learned in obj.learned_spells.all()],
            many=True,
        ).data


class CharacterSpellSerializer(TimestampedSerializer):
    characterId = serializers.UUIDField(source='character_id', read_only=True)
    spellId = serializers.UUIDField(source='spell_id', read_only=True)
    character = CharacterSummarySerializer(read_only=True)
    spell = SpellSummarySerializer(read_only=True)

    class Meta:
        model = CharacterSpell
        fields = ['id', 'characterId', 'spellId', 'character', 'spell', 'createdAt', 'updatedAt']
        read_only_fields = fields


class LearnSpellSerializer(serializers.Serializer):
    """Request body of the learn-spell operation."""
    characterId = serializers.UUIDField()
    spellId = serializers.UUIDField()
