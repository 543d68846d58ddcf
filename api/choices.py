"""
Enumerated values shared by the models, serializers and validators.
"""

from django.db import models


class Size(models.TextChoices):
    TINY = 'TINY', 'Tiny'
    SMALL = 'SMALL', 'Small'
    MEDIUM = 'MEDIUM', 'Medium'
    LARGE = 'LARGE', 'Large'
    HUGE = 'HUGE', 'Huge'
    GARGANTUAN = 'GARGANTUAN', 'Gargantuan'


class Ability(models.TextChoices):
    STRENGTH = 'STRENGTH', 'Strength'
    DEXTERITY = 'DEXTERITY', 'Dexterity'
    CONSTITUTION = 'CONSTITUTION', 'Constitution'
    INTELLIGENCE = 'INTELLIGENCE', 'Intelligence'
    WISDOM = 'WISDOM', 'Wisdom'
    CHARISMA = 'CHARISMA', 'Charisma'


class HitDie(models.IntegerChoices):
    D6 = 6, 'd6'
    D8 = 8, 'd8'
    D10 = 10, 'd10'
    D12 = 12, 'd12'


class SpellSchool(models.TextChoices):
    ABJURATION = 'ABJURATION', 'Abjuration'
    CONJURATION = 'CONJURATION', 'Conjuration'
    DIVINATION = 'DIVINATION', 'Divination'
    ENCHANTMENT = 'ENCHANTMENT', 'Enchantment'
    EVOCATION = 'EVOCATION', 'Evocation'
    ILLUSION = 'ILLUSION', 'Illusion'
    NECROMANCY = 'NECROMANCY', 'Necromancy'
    TRANSMUTATION = 'TRANSMUTATION', 'Transmutation'


class SpellComponent(models.TextChoices):
    VERBAL = 'V', 'Verbal'
    SOMATIC = 'S', 'Somatic'
    MATERIAL = 'M', 'Material'


class WeaponType(models.TextChoices):
    FLAIL = 'FLAIL', 'Flail'
    MORNINGSTAR = 'MORNINGSTAR', 'Morningstar'
    RAPIER = 'RAPIER', 'Rapier'
    SCHIMITAR = 'SCHIMITAR', 'Scimitar'
    SHORTSWORD = 'SHORTSWORD', 'Shortsword'
    WARPICK = 'WARPICK', 'War Pick'
    BATTLEAXE = 'BATTLEAXE', 'Battleaxe'
    LONGSWORD = 'LONGSWORD', 'Longsword'
    TRIDENT = 'TRIDENT', 'Trident'
    WARHAMMER = 'WARHAMMER', 'Warhammer'
    GLAIVE = 'GLAIVE', 'Glaive'
    GREATAXE = 'GREATAXE', 'Greataxe'
    GREATSWORD = 'GREATSWORD', 'Greatsword'
    HALBERD = 'HALBERD', 'Halberd'
    MAUL = 'MAUL', 'Maul'
    PIKE = 'PIKE', 'Pike'
    HANDCROSSBOW = 'HANDCROSSBOW', 'Hand Crossbow'
    HEAVYCROSSBOW = 'HEAVYCROSSBOW', 'Heavy Crossbow'
    LONGBOW = 'LONGBOW', 'Longbow'
    CLUB = 'CLUB', 'Club'
    DAGGER = 'DAGGER', 'Dagger'
    HANDAXE = 'HANDAXE', 'Handaxe'
    JAVELIN = 'JAVELIN', 'Javelin'
    LIGHTHAMMER = 'LIGHTHAMMER', 'Light Hammer'
    MACE = 'MACE', 'Mace'
    NET = 'NET', 'Net'
    SICKLE = 'SICKLE', 'Sickle'
    SPEAR = 'SPEAR', 'Spear'
    TRIPLE_SPEAR = 'TRIPLE_SPEAR', 'Triple Spear'
    UNARMED_STRIKE = 'UNARMED_STRIKE', 'Unarmed Strike'


# Weapon types that cannot be stored without a range.
RANGED_WEAPON_TYPES = frozenset({
    WeaponType.HANDCROSSBOW.value,
    WeaponType.HEAVYCROSSBOW.value,
    WeaponType.LONGBOW.value,
})


class Architype(models.TextChoices):
    SIMPLE = 'SIMPLE', 'Simple'
    MARTIAL = 'MARTIAL', 'Martial'


class SlotType(models.TextChoices):
    HEAD = 'HEAD', 'Head'
    NECK = 'NECK', 'Neck'
    SHOULDERS = 'SHOULDERS', 'Shoulders'
    CHEST = 'CHEST', 'Chest'
    BACK = 'BACK', 'Back'
    ARMS = 'ARMS', 'Arms'
    HANDS = 'HANDS', 'Hands'
    WAIST = 'WAIST', 'Waist'
    LEGS = 'LEGS', 'Legs'
    FEET = 'FEET', 'Feet'
    MAIN_HAND = 'MAIN_HAND', 'Main Hand'
    OFF_HAND = 'OFF_HAND', 'Off Hand'
    TWO_HAND = 'TWO_HAND', 'Two Hand'
    RING_1 = 'RING_1', 'Ring 1'
    RING_2 = 'RING_2', 'Ring 2'
