import uuid

from django.core.validators import MinValueValidator
from django.db import models

from .choices import (Ability, Architype, HitDie, Size, SlotType, SpellSchool,
                      WeaponType)
from .validators import bounded_validators, validate_dice_notation


class TimestampedModel(models.Model):
    """
    Base for every stored entity: a server-assigned UUID and
    creation/modification timestamps.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Race(TimestampedModel):
    """
    A playable or non-playable race. Characters reference a race; a race
    cannot be deleted while any character still uses it.
    """
    name = models.CharField(
        max_length=100,
        unique=True,
        error_messages={'unique': 'A race with this name already exists.'},
    )
    desc = models.TextField()
    playable = models.BooleanField(default=True)
    speed = models.PositiveSmallIntegerField(default=30, validators=bounded_validators('speed', 0, 100))
    darkvision = models.BooleanField(default=False)
    size = models.CharField(max_length=12, choices=Size.choices, default=Size.MEDIUM)

    class Meta:
        db_table = 'races'
        ordering = ['name']
        verbose_name = 'race'

    def __str__(self):
        return self.name


class CharacterClass(TimestampedModel):
    """
    A character class. Owns its subclasses; deletion is refused while
    characters reference it.
    """
    name = models.CharField(
        max_length=100,
        unique=True,
        error_messages={'unique': 'A class with this name already exists.'},
    )
    desc = models.TextField()
    hit_die = models.PositiveSmallIntegerField(choices=HitDie.choices)
    primary_ability = models.CharField(max_length=12, choices=Ability.choices)
    # list of Ability values
    saving_throws = models.JSONField(default=list)
    spellcasting = models.BooleanField(default=False)

    class Meta:
        db_table = 'classes'
        ordering = ['name']
        verbose_name = 'class'
        verbose_name_plural = 'classes'

    def __str__(self):
        return self.name


class Subclass(TimestampedModel):
    name = models.CharField(max_length=100)
    desc = models.TextField()
    character_class = models.ForeignKey(CharacterClass, on_delete=models.CASCADE, related_name='subclasses')

    class Meta:
        db_table = 'subclasses'
        ordering = ['name']
        verbose_name = 'subclass'
        constraints = [
            models.UniqueConstraint(fields=['character_class', 'name'], name='unique_subclass_per_class'),
        ]

    def __str__(self):
        return f"{self.name} ({self.character_class.name})"


class Spell(TimestampedModel):
    name = models.CharField(
        max_length=100,
        unique=True,
        error_messages={'unique': 'A spell with this name already exists.'},
    )
    desc = models.TextField()
    level = models.PositiveSmallIntegerField(
        default=0,
        validators=bounded_validators('level', 0, 9, message='Spell level must be between 0 and 9'),
    )
    school = models.CharField(max_length=16, choices=SpellSchool.choices)
    casting_time = models.CharField(max_length=100)
    range = models.CharField(max_length=100)
    # list of SpellComponent values
    components = models.JSONField(default=list)
    duration = models.CharField(max_length=100)
    concentration = models.BooleanField(default=False)

    class Meta:
        db_table = 'spells'
        ordering = ['level', 'name']
        verbose_name = 'spell'

    def __str__(self):
        return self.name


class Weapon(TimestampedModel):
    """
    A catalogue weapon. Ranged types must carry a range; the damage string is
    dice notation such as ``1d8``.
    """
    name = models.CharField(
        max_length=100,
        unique=True,
        error_messages={'unique': 'A weapon with this name already exists.'},
    )
    desc = models.TextField()
    type = models.CharField(max_length=20, choices=WeaponType.choices)
    damage = models.CharField(max_length=20, validators=[validate_dice_notation])
    two_handed = models.BooleanField(default=False)
    versatile = models.BooleanField(default=False)
    range = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1, message='Range must be a positive number')],
    )
    architype = models.CharField(max_length=8, choices=Architype.choices, default=Architype.SIMPLE)

    class Meta:
        db_table = 'weapons'
        ordering = ['name']
        verbose_name = 'weapon'

    def __str__(self):
        return f"{self.name} ({self.damage})"


class Character(TimestampedModel):
    """
    A character sheet. Each character owns exactly one Inventory and one
    Equipment, created together with it and removed with it.
    """
    name = models.CharField(
        max_length=100,
        unique=True,
        error_messages={'unique': 'Character with this name already exists.'},
    )
    level = models.PositiveSmallIntegerField(default=1, validators=bounded_validators('level', 1, 20))
    experience = models.PositiveIntegerField(default=0)
    strength = models.PositiveSmallIntegerField(default=10, validators=bounded_validators('strength', 1, 20))
    dexterity = models.PositiveSmallIntegerField(default=10, validators=bounded_validators('dexterity', 1, 20))
    constitution = models.PositiveSmallIntegerField(default=10,
                                                    validators=bounded_validators('constitution', 1, 20))
    intelligence = models.PositiveSmallIntegerField(default=10,
                                                    validators=bounded_validators('intelligence', 1, 20))
    wisdom = models.PositiveSmallIntegerField(default=10, validators=bounded_validators('wisdom', 1, 20))
    charisma = models.PositiveSmallIntegerField(default=10, validators=bounded_validators('charisma', 1, 20))

    race = models.ForeignKey(Race, on_delete=models.PROTECT, related_name='characters')
    character_class = models.ForeignKey(CharacterClass, on_delete=models.PROTECT, related_name='characters')
    subclass = models.ForeignKey(
        Subclass,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='characters',
    )

    class Meta:
        db_table = 'characters'
        ordering = ['name']
        verbose_name = 'character'

    def __str__(self):
        return self.name


class Inventory(TimestampedModel):
    """
    Gold and carried items of one character. ``capacity`` is the intended
    number of distinct item stacks; it is stored but not enforced.
    """
    character = models.OneToOneField(Character, on_delete=models.CASCADE, related_name='inventory')
    gold = models.PositiveIntegerField(default=0)
    capacity = models.PositiveSmallIntegerField(default=20, validators=bounded_validators('capacity', 1))

    class Meta:
        db_table = 'inventories'
        verbose_name = 'inventory'
        verbose_name_plural = 'inventories'

    def __str__(self):
        return f"Inventory of {self.character.name}"


class Item(TimestampedModel):
    name = models.CharField(max_length=100)
    desc = models.TextField(blank=True, default='')
    quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1, message='Quantity must be at least 1')],
    )
    inventory = models.ForeignKey(Inventory, on_delete=models.CASCADE, related_name='items')

    class Meta:
        db_table = 'items'
        ordering = ['name']
        verbose_name = 'item'

    def __str__(self):
        return f"{self.name} x{self.quantity}"


class Equipment(TimestampedModel):
    """
    What one character is wearing or wielding, as a set of slot assignments.
    """
    character = models.OneToOneField(Character, on_delete=models.CASCADE, related_name='equipment')

    class Meta:
        db_table = 'equipment'
        verbose_name = 'equipment'
        verbose_name_plural = 'equipment'

    def __str__(self):
        return f"Equipment of {self.character.name}"


class EquipmentSlot(TimestampedModel):
    """
    One slot of an Equipment holding one item. A slot type appears at most
    once per Equipment and an item can occupy at most one slot.
    """
    equipment = models.ForeignKey(Equipment, on_delete=models.CASCADE, related_name='slots')
    slot_type = models.CharField(max_length=10, choices=SlotType.choices)
    item = models.OneToOneField(Item, on_delete=models.CASCADE, related_name='equipment_slot')

    class Meta:
        db_table = 'equipment_slots'
        ordering = ['slot_type']
        verbose_name = 'equipment slot'
        constraints = [
            models.UniqueConstraint(fields=['equipment', 'slot_type'], name='unique_slot_per_equipment'),
        ]

    def __str__(self):
        return f"{self.slot_type}: {self.item.name}"


class CharacterSpell(TimestampedModel):
    """
    A spell learned by a character. A character learns a given spell once.
    """
    character = models.ForeignKey(Character, on_delete=models.CASCADE, related_name='learned_spells')
    spell = models.ForeignKey(Spell, on_delete=models.CASCADE, related_name='character_spells')

    class Meta:
        db_table = 'character_spells'
        ordering = ['created_at']
        verbose_name = 'learned spell'
        constraints = [
            models.UniqueConstraint(fields=['character', 'spell'], name='unique_learned_spell'),
        ]

    def __str__(self):
        return f"{self.character.name} knows {self.spell.name}"
