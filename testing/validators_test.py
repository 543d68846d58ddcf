import uuid

import pytest
from django.core.exceptions import ValidationError as DjangoValidationError

from api.validators import (check_slot_assignments, check_subclass,
                            check_weapon_range, unique_in_order,
                            validate_dice_notation)


class TestDiceNotation:

    @pytest.mark.parametrize('value', ['1d6', '2d8', '10d10'])
    def test_accepts_dice(self, value):
        validate_dice_notation(value)

    @pytest.mark.parametrize('value', ['invalid', 'd6', '1d', '2d6+1', '1D6', ''])
    def test_rejects_everything_else(self, value):
        with pytest.raises(DjangoValidationError):
            validate_dice_notation(value)


class TestWeaponRange:

    def test_ranged_weapon_requires_range(self):
        assert check_weapon_range('LONGBOW', None) == {'range': ["Ranged weapons must have a range value"]}

    def test_ranged_weapon_with_range_is_valid(self):
        assert check_weapon_range('HEAVYCROSSBOW', 100) == {}

    def test_melee_weapon_may_omit_range(self):
        assert check_weapon_range('LONGSWORD', None) == {}

    def test_range_must_be_positive(self):
        assert check_weapon_range('DAGGER', 0) == {'range': ["Range must be a positive number"]}


class FakeClass:
    def __init__(self, name):
        self.pk = uuid.uuid4()
        self.name = name


class FakeSubclass:
    def __init__(self, name, character_class):
        self.name = name
        self.character_class_id = character_class.pk


class TestSubclassMembership:

    def test_matching_subclass(self):
        fighter = FakeClass('Fighter')
        assert check_subclass(FakeSubclass('Champion', fighter), fighter) == {}

    def test_foreign_subclass(self):
        fighter, wizard = FakeClass('Fighter'), FakeClass('Wizard')
        violations = check_subclass(FakeSubclass('School of Evocation', wizard), fighter)
        assert list(violations) == ['subclassId']

    def test_no_subclass(self):
        assert check_subclass(None, FakeClass('Fighter')) == {}


class TestSlotAssignments:

    def test_valid_assignments(self):
        sword, shield = uuid.uuid4(), uuid.uuid4()
        assert check_slot_assignments([('MAIN_HAND', sword), ('OFF_HAND', shield)], {sword, shield}) == {}

    def test_slot_used_twice(self):
        sword, dagger = uuid.uuid4(), uuid.uuid4()
        violations = check_slot_assignments([('MAIN_HAND', sword), ('MAIN_HAND', dagger)], {sword, dagger})
        assert 'slots' in violations

    def test_item_equipped_twice(self):
        ring = uuid.uuid4()
        violations = check_slot_assignments([('RING_1', ring), ('RING_2', ring)], {ring})
        assert 'slots' in violations

    def test_item_outside_inventory(self):
        violations = check_slot_assignments([('HEAD', uuid.uuid4())], set())
        assert 'itemId' in violations


def test_unique_in_order():
    assert unique_in_order(['V', 'S', 'V', 'M']) == ['V', 'S', 'M']
