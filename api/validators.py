"""
Validation rules for the character sheet entities.

Single-field rules are exposed as Django validators (used by the models) and
as DRF field factories (used by the serializers) so both layers report the
same messages. Cross-field rules are plain functions that take the effective
values of a payload and return a dict of field-level violations; an empty
dict means the payload is valid. They never raise.
"""

import re
from typing import Dict, Iterable, List, Optional, Set, Tuple

from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator
from rest_framework import serializers

from .choices import RANGED_WEAPON_TYPES

Violations = Dict[str, List[str]]

DICE_NOTATION_RE = re.compile(r'^\d+d\d+$')

ABILITY_SCORE_FIELDS = (
    'strength',
    'dexterity',
    'constitution',
    'intelligence',
    'wisdom',
    'charisma',
)
ABILITY_SCORE_MIN = 1
ABILITY_SCORE_MAX = 20

validate_dice_notation = RegexValidator(
    DICE_NOTATION_RE,
    message='Invalid damage format. Use format like "1d6" or "2d8"',
    code='invalid_damage',
)


def range_message(label: str, low: int, high: Optional[int] = None) -> str:
    if high is None:
        return f"{label} must be at least {low}"
    return f"{label} must be between {low} and {high}"


def bounded_validators(label: str, low: int, high: Optional[int] = None, message: str = None):
    """Django validators enforcing ``low <= value (<= high)`` with a shared message."""
    message = message or range_message(label, low, high)
    validators = [MinValueValidator(low, message=message)]
    if high is not None:
        validators.append(MaxValueValidator(high, message=message))
    return validators


def bounded_integer_field(label: str, low: int, high: Optional[int] = None,
                          message: str = None, **kwargs) -> serializers.IntegerField:
    """
    Builds a serializer IntegerField whose bound violations name the field.

    DRF replaces model Min/Max validators with its own generic messages, so
    serializers declare bounded fields explicitly through this factory.
    """
    message = message or range_message(label, low, high)
    error_messages = {'min_value': message, 'max_value': message}
    error_messages.update(kwargs.pop('error_messages', {}))
    return serializers.IntegerField(
        min_value=low,
        max_value=high,
        error_messages=error_messages,
        **kwargs
    )


def ability_score_field(name: str) -> serializers.IntegerField:
    return bounded_integer_field(name, ABILITY_SCORE_MIN, ABILITY_SCORE_MAX, required=False)


def check_weapon_range(weapon_type: Optional[str], weapon_range: Optional[int]) -> Violations:
    """
    A range, when given, must be positive. Ranged weapon types must carry one;
    a missing range is a violation rather than something to default.
    """
    if weapon_range is not None and weapon_range <= 0:
        return {'range': ["Range must be a positive number"]}
    if weapon_type in RANGED_WEAPON_TYPES and weapon_range is None:
        return {'range': ["Ranged weapons must have a range value"]}
    return {}


def check_subclass(subclass, character_class) -> Violations:
    """The subclass of a character must belong to the character's class."""
    if subclass is None or character_class is None:
        return {}
    if subclass.character_class_id != character_class.pk:
        return {'subclassId': [
            f"Subclass '{subclass.name}' does not belong to class '{character_class.name}'"
        ]}
    return {}


def check_slot_assignments(assignments: Iterable[Tuple[str, object]],
                           owned_item_ids: Set) -> Violations:
    """
    Validates a set of (slot type, item id) pairs for one character.

    Every slot type and every item may appear once, and only items stored in
    the character's own inventory can be equipped.
    """
    violations: Violations = {}
    seen_slots = set()
    seen_items = set()
    for slot_type, item_id in assignments:
        if slot_type in seen_slots:
            violations.setdefault('slots', []).append(f"Slot {slot_type} is assigned more than once")
        seen_slots.add(slot_type)
        if item_id in seen_items:
            violations.setdefault('slots', []).append(f"Item {item_id} is equipped in more than one slot")
        seen_items.add(item_id)
        if item_id not in owned_item_ids:
            violations.setdefault('itemId', []).append(
                f"Item {item_id} is not in this character's inventory"
            )
    return violations


def unique_in_order(values: Iterable) -> list:
    """Drops repeated entries from a set-like list while keeping the first occurrence."""
    return list(dict.fromkeys(values))
